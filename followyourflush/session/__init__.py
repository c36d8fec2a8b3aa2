"""
session - the interaction orchestrator tying resolution, routing and camera
flights together for one user.
"""

from .core import FlushSession, journey_summary
from .data_models import InputEvent, Notification, SessionConstants

__all__ = ['FlushSession', 'journey_summary', 'InputEvent', 'Notification', 'SessionConstants']
