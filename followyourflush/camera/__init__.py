"""
Camera choreography: flies a free camera along the journey's paths and
reports when the flow reaches the plant and when the journey is complete.
"""

from .core import CameraChoreographer, compute_camera_pose
from .data_models import (AnimationSession, CameraPose, CameraSettings, ChoreographerState,
                          EaseTransition, FlightPhase, SessionFlags)
from .scheduler import ManualScheduler, ScheduledCall, TimerScheduler
from .surface import RecordingSurface, RenderingSurface
from .visualization import JourneyMapVisualizer

__all__ = [
    "CameraChoreographer",
    "compute_camera_pose",
    "AnimationSession",
    "CameraPose",
    "CameraSettings",
    "ChoreographerState",
    "EaseTransition",
    "FlightPhase",
    "SessionFlags",
    "ManualScheduler",
    "ScheduledCall",
    "TimerScheduler",
    "RecordingSurface",
    "RenderingSurface",
    "JourneyMapVisualizer"
]
