# followyourflush/path_planner/core.py
import logging
from typing import Sequence

from ..exceptions import UpstreamUnavailableError
from .constants import PlannerConstants
from .data_models import WalkingRoute
from .directions_client import DirectionsClient
from .utils.smoothing import smooth_line


class RoutePlanner:
    """Fetches a walking route and prepares its display copy."""

    def __init__(self, directions: DirectionsClient, half_window: int = PlannerConstants.SMOOTHING_HALF_WINDOW):
        if half_window < 1:
            raise ValueError(f"half_window must be at least 1, got {half_window}")
        self.directions = directions
        self.half_window = half_window

    def plan_walking_route(self, start: Sequence[float], end: Sequence[float]) -> WalkingRoute:
        """
        Raises:
            UpstreamUnavailableError: if the directions service gave no usable route.
        """
        coords = self.directions.get_walking_route(start, end)
        if not coords or len(coords) < 2:
            raise UpstreamUnavailableError()

        try:
            raw_path = tuple((float(c[0]), float(c[1])) for c in coords)
        except (TypeError, ValueError, IndexError) as e:
            logging.error(f"Walking route has malformed coordinates: {e}")
            raise UpstreamUnavailableError() from e
        display_path = [list(c) for c in smooth_line(raw_path, self.half_window)]
        logging.info(f"Smoothed walking route: {len(raw_path)} raw points, half window {self.half_window}.")
        return WalkingRoute(raw_path=raw_path, display_path=display_path)
