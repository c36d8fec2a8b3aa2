# followyourflush/camera/data_models.py
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from ..path_planner.data_models import Coordinate, OutfallSegment
from .constants import CameraConstants


class ChoreographerState(Enum):
    IDLE = "IDLE"
    FLYING = "FLYING"
    PAUSED_AT_FACILITY = "PAUSED_AT_FACILITY"
    DONE = "DONE"


class FlightPhase(Enum):
    WALKING = "WALKING"
    OUTFALL = "OUTFALL"


@dataclass
class SessionFlags:
    """
    Cross-cutting interaction flags, shared by reference between the
    orchestrator's input handlers and the choreographer.
    """
    awaiting_confirmation: bool = False
    cancel_requested: bool = False
    outfall_active: bool = False


@dataclass
class CameraSettings:
    """Runtime-adjustable camera values. Changes only affect future ticks."""
    altitude_m: float = CameraConstants.DEFAULT_ALTITUDE_M
    tick_interval_ms: float = CameraConstants.DEFAULT_TICK_INTERVAL_MS

    def update(self, altitude_m: Optional[float] = None, tick_interval_ms: Optional[float] = None):
        """Raises ValueError for non-numeric or non-positive values; nothing is changed in that case."""
        altitude = self._positive("Camera altitude", altitude_m, self.altitude_m)
        interval = self._positive("Tick interval", tick_interval_ms, self.tick_interval_ms)
        self.altitude_m, self.tick_interval_ms = altitude, interval

    @staticmethod
    def _positive(label: str, value, current: float) -> float:
        if value is None:
            return current
        try:
            number = float(value)
        except (TypeError, ValueError):
            raise ValueError(f"{label} must be a number, got {value!r}")
        if not number > 0:
            raise ValueError(f"{label} must be positive, got {value}")
        return number


@dataclass(frozen=True)
class CameraPose:
    """A free-camera placement: where the camera sits and what it looks at."""
    position: Tuple[float, float]   # lon, lat
    altitude_m: float
    look_at: Tuple[float, float]    # lon, lat
    index: int


@dataclass(frozen=True)
class EaseTransition:
    """An animated camera move to a map view."""
    center: Tuple[float, float]
    zoom: float
    pitch: float
    bearing: float
    duration_ms: int


@dataclass
class AnimationSession:
    """State of a single camera flight."""
    phase: FlightPhase
    path: Sequence[Coordinate]
    raw_path: Sequence[Coordinate]
    flags: SessionFlags
    outfall: Optional[OutfallSegment] = None
    index: int = 0
    settling: bool = False
    poses: List[CameraPose] = field(default_factory=list, repr=False)
