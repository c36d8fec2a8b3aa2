# followyourflush/camera/core.py
"""
Flies a free camera along a coordinate sequence, one scheduled tick per
point, pausing at the treatment plant between the walking and outfall legs.
"""
import logging
from typing import Callable, Optional, Sequence

from ..path_planner.data_models import Coordinate, FlushDistance
from ..path_planner.utils.calculations import accumulate_flush_distance
from .constants import CameraConstants
from .data_models import (AnimationSession, CameraPose, CameraSettings, ChoreographerState,
                          EaseTransition, FlightPhase)
from .surface import RenderingSurface


def compute_camera_pose(path: Sequence[Coordinate], index: int, altitude_m: float,
                        lookahead: int = CameraConstants.LOOKAHEAD_POINTS) -> CameraPose:
    """Places the camera over `path[index]`, aimed `lookahead` points further on."""
    here = path[index]
    ahead = path[min(index + lookahead, len(path) - 1)]
    return CameraPose(position=(here[0], here[1]), altitude_m=altitude_m, look_at=(ahead[0], ahead[1]), index=index)


def _ease(center: Coordinate, move: dict) -> EaseTransition:
    return EaseTransition(center=(center[0], center[1]), zoom=move['zoom'], pitch=move['pitch'],
                          bearing=move['bearing'], duration_ms=move['duration_ms'])


class CameraChoreographer:
    """
    State machine: IDLE -> FLYING(walking) -> PAUSED_AT_FACILITY ->
    FLYING(outfall) -> DONE.

    A skip always lands in PAUSED_AT_FACILITY and reports the facility as
    reached, including during the outfall flight.
    """

    def __init__(self, surface: RenderingSurface, scheduler, settings: Optional[CameraSettings] = None,
                 on_facility_reached: Optional[Callable[[AnimationSession], None]] = None,
                 on_journey_complete: Optional[Callable[[AnimationSession, FlushDistance], None]] = None):
        self.surface = surface
        self.scheduler = scheduler
        self.settings = settings or CameraSettings()
        self.on_facility_reached = on_facility_reached
        self.on_journey_complete = on_journey_complete
        self.state = ChoreographerState.IDLE
        self.session: Optional[AnimationSession] = None
        self._pending = None

    @property
    def is_flying(self) -> bool:
        return self.state == ChoreographerState.FLYING

    def begin_flight(self, session: AnimationSession) -> bool:
        """Starts a flight, abandoning any flight still in progress. Returns False for unusable paths."""
        if not session.path or len(session.path) < 2:
            logging.warning(f"Refusing to fly a {session.phase.value} path with fewer than two points.")
            return False

        self._cancel_pending()
        session.index = 0
        session.settling = False
        session.flags.cancel_requested = False
        self.session = session
        self.state = ChoreographerState.FLYING

        self.surface.ease_to(_ease(session.path[0], CameraConstants.INITIAL_EASE))
        self._schedule(CameraConstants.START_DELAY_MS, session, self._tick)
        logging.info(f"Starting {session.phase.value} flight over {len(session.path)} points.")
        return True

    def abandon(self):
        """Drops the current flight and any callback it still has queued."""
        self._cancel_pending()
        if self.session:
            logging.info(f"Abandoned {self.session.phase.value} flight at point {self.session.index}.")
        self.session = None
        self.state = ChoreographerState.IDLE

    def finish(self):
        """Ends the journey at the plant when there is no outfall leg to fly."""
        self._cancel_pending()
        self.session = None
        self.state = ChoreographerState.DONE

    def _schedule(self, delay_ms: float, session: AnimationSession, step: Callable[[AnimationSession], None]):
        def run():
            # A newer flight owns the camera now.
            if session is not self.session:
                return
            self._pending = None
            step(session)
        self._pending = self.scheduler.call_later(delay_ms, run)

    def _cancel_pending(self):
        if self._pending:
            self._pending.cancel()
            self._pending = None

    def _tick(self, session: AnimationSession):
        if session.flags.cancel_requested:
            self._fast_forward(session)
            return

        pose = compute_camera_pose(session.path, session.index, self.settings.altitude_m)
        self.surface.set_camera(pose)
        session.poses.append(pose)
        session.index += 1

        if session.index < len(session.path) - 1:
            # Interval is read now so slider changes apply from the next tick on.
            self._schedule(self.settings.tick_interval_ms, session, self._tick)
        else:
            self._complete_phase(session)

    def _fast_forward(self, session: AnimationSession):
        logging.info(f"Skipping {session.phase.value} flight at point {session.index}.")
        session.settling = True
        self.surface.ease_to(_ease(session.path[-1], CameraConstants.SKIP_EASE))
        self._schedule(CameraConstants.SETTLE_DELAY_MS, session, self._arrive_at_facility)

    def _arrive_at_facility(self, session: AnimationSession):
        session.settling = False
        self.state = ChoreographerState.PAUSED_AT_FACILITY
        logging.info("Flow has reached the treatment plant.")
        if self.on_facility_reached:
            self.on_facility_reached(session)

    def _complete_phase(self, session: AnimationSession):
        if session.phase == FlightPhase.WALKING:
            self._arrive_at_facility(session)
            return

        session.flags.outfall_active = False
        self.state = ChoreographerState.DONE
        self.surface.ease_to(_ease(session.path[-1], CameraConstants.FINAL_EASE))
        self._schedule(CameraConstants.FINAL_REVEAL_DELAY_MS, session, self._reveal_distance)

    def _reveal_distance(self, session: AnimationSession):
        distance = accumulate_flush_distance(session.raw_path, session.outfall)
        logging.info(f"Journey complete: {distance.walking_km:.2f} km walking + "
                     f"{distance.outfall_km:.2f} km outfall = {distance.display}.")
        self.session = None
        if self.on_journey_complete:
            self.on_journey_complete(session, distance)
