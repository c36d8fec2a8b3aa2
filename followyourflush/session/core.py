# followyourflush/session/core.py
"""
The interaction orchestrator. Holds the session flags, routes clicks and key
presses to the resolver, the route planner and the camera choreographer, and
turns every outcome into a standardized response for the UI layer.
"""
import logging
import threading
import time
from collections import deque
from dataclasses import asdict
from typing import Any, Dict, Optional, Union

from ..camera.core import CameraChoreographer
from ..camera.data_models import (AnimationSession, CameraSettings, ChoreographerState, FlightPhase,
                                  SessionFlags)
from ..camera.scheduler import TimerScheduler
from ..camera.surface import RecordingSurface, RenderingSurface
from ..catchment.core import CatchmentResolver
from ..catchment.data_models import QueryPoint, Resolution
from ..catchment.feature_feed import FeatureFeedHandler
from ..exceptions import FlushError
from ..path_planner.core import RoutePlanner
from ..path_planner.data_models import FlushDistance, OutfallSegment, WalkingRoute
from ..path_planner.directions_client import DirectionsClient
from ..path_planner.geocoder import ReverseGeocoder
from ..path_planner.outfall import build_outfall_network
from ..path_planner.utils.calculations import accumulate_flush_distance, path_bounds
from .data_models import InputEvent, Notification, SessionConstants


def journey_summary(distance: FlushDistance) -> str:
    return (
        "Your flush's journey ends either directly in Lake Ontario or will eventually flow there. "
        f"The estimated distance your wastewater traveled was {distance.walking_km:.2f} km to reach "
        f"the treatment plant, followed by an additional {distance.outfall_km:.2f} km through the "
        "outfall pipe into the receiving water body."
    )


class FlushSession:
    """Owns one user's journey from click to outfall."""

    def __init__(self,
                 resolver: Optional[CatchmentResolver] = None,
                 route_planner: Optional[RoutePlanner] = None,
                 geocoder: Optional[ReverseGeocoder] = None,
                 surface: Optional[RenderingSurface] = None,
                 scheduler=None,
                 settings: Optional[CameraSettings] = None,
                 feed: Optional[FeatureFeedHandler] = None,
                 lock: Optional[threading.RLock] = None):
        self.lock = lock or threading.RLock()
        self.resolver = resolver or CatchmentResolver()
        self.route_planner = route_planner or RoutePlanner(DirectionsClient())
        self.geocoder = geocoder or ReverseGeocoder()
        self.surface = surface or RecordingSurface()
        self.scheduler = scheduler or TimerScheduler(self.lock)
        self.settings = settings or CameraSettings()
        self.feed = feed

        self.flags = SessionFlags()
        self.choreographer = CameraChoreographer(
            self.surface, self.scheduler, self.settings,
            on_facility_reached=self._on_facility_reached,
            on_journey_complete=self._on_journey_complete
        )

        self.resolution: Optional[Resolution] = None
        self.address: Optional[str] = None
        self.route: Optional[WalkingRoute] = None
        self.outfall: Optional[OutfallSegment] = None
        self.distance: Optional[FlushDistance] = None
        self.showing_result = False
        self.notifications = deque(maxlen=SessionConstants.MAX_NOTIFICATIONS)
        self._pending_start = None
        self._generation = 0
        logging.info("FlushSession initialized.")

    # --- Data loading ---

    def load_features(self) -> Dict[str, Any]:
        """Fetches both feature collections from the feature service."""
        if self.feed is None:
            self.feed = FeatureFeedHandler()
        return self.load_feature_collections(self.feed.fetch_facilities(), self.feed.fetch_catchments())

    def load_feature_files(self, facilities_path, catchments_path) -> Dict[str, Any]:
        return self.load_feature_collections(
            FeatureFeedHandler.load_collection_file(facilities_path),
            FeatureFeedHandler.load_collection_file(catchments_path)
        )

    def load_feature_collections(self, facilities: Optional[Dict], catchments: Optional[Dict]) -> Dict[str, Any]:
        with self.lock:
            if facilities:
                self.resolver.load_facilities(facilities)
            if catchments:
                self.resolver.load_catchments(catchments)
            data = {
                'facility_count': len(self.resolver.facilities),
                'catchment_count': len(self.resolver.catchments),
                'ready': self.resolver.is_ready
            }
        if not data['ready']:
            logging.warning("Feature data is incomplete; clicks will be rejected until both layers load.")
            return self._format_response(False, "Data still loading…", data)
        return self._format_response(True, "All data loaded.", data)

    # --- User input ---

    def click(self, lon: float, lat: float) -> Dict[str, Any]:
        """Resolves a clicked point and asks the user to confirm the journey."""
        point = QueryPoint(lon=float(lon), lat=float(lat))
        with self.lock:
            try:
                resolution = self.resolver.resolve(point)
            except FlushError as e:
                return self._error_response(e, point=point.coords)
            self._reset_journey()
            self.resolution = resolution
            generation = self._generation

        # Network call outside the lock so running ticks aren't held up.
        address = self.geocoder.describe(point.lon, point.lat)

        with self.lock:
            if generation != self._generation:
                return self._format_response(False, "Superseded by a newer click.")
            self.address = address
            self.flags.awaiting_confirmation = True
        return self._format_response(True, f"This area is serviced by: {resolution.facility.label}", {
            'address': address,
            'facility': resolution.facility.name,
            'facility_label': resolution.facility.label,
            'facility_coords': resolution.facility.coords,
            'catchment': resolution.catchment_name
        })

    def handle_event(self, event: Union[InputEvent, str]) -> Dict[str, Any]:
        try:
            event = InputEvent(event) if isinstance(event, str) else event
        except ValueError:
            return self._format_response(False, f"Unknown input event '{event}'.")
        if event == InputEvent.CONFIRM:
            return self.confirm()
        return self.skip()

    def confirm(self) -> Dict[str, Any]:
        """Fetches and smooths the walking route, then starts the walking flight."""
        with self.lock:
            if not self.flags.awaiting_confirmation or self.resolution is None:
                return self._format_response(False, "Nothing to confirm. Click the map first.")
            self.flags.awaiting_confirmation = False
            resolution, generation = self.resolution, self._generation

        try:
            route = self.route_planner.plan_walking_route(resolution.point.coords, resolution.facility.coords)
        except FlushError as e:
            return self._error_response(e)

        with self.lock:
            if generation != self._generation:
                return self._format_response(False, "Superseded by a newer click.")
            self.route = route
            self.surface.set_path(SessionConstants.ROUTE_LAYER, route.display_path)
            self.surface.fit_bounds(path_bounds(route.display_path), SessionConstants.ROUTE_FIT_PADDING,
                                    SessionConstants.ROUTE_FIT_DURATION_MS)
            session = AnimationSession(phase=FlightPhase.WALKING, path=route.display_path,
                                       raw_path=route.raw_path, flags=self.flags)
            self._start_flight_later(SessionConstants.WALKING_START_DELAY_MS, session)
        return self._format_response(True, "Following your flush to the treatment plant.", {
            'raw_points': len(route.raw_path),
            'display_points': len(route.display_path)
        })

    def skip(self) -> Dict[str, Any]:
        """
        Space-bar semantics: dismiss the final result, continue from the plant
        to the outfall, or skip the flight in progress.
        """
        with self.lock:
            if self.showing_result:
                self.showing_result = False
                return self._format_response(True, "Result dismissed.")
            if self._pending_start or self.choreographer.is_flying:
                self.flags.cancel_requested = True
                return self._format_response(True, "Skipping ahead.")
            if self.choreographer.state == ChoreographerState.PAUSED_AT_FACILITY:
                return self._continue_to_outfall()
            return self._format_response(False, "Nothing to skip.")

    def update_settings(self, altitude_m: Optional[float] = None, tick_interval_ms: Optional[float] = None) -> Dict[str, Any]:
        with self.lock:
            try:
                self.settings.update(altitude_m=altitude_m, tick_interval_ms=tick_interval_ms)
            except ValueError as e:
                return self._format_response(False, str(e))
            return self._format_response(True, "Camera settings updated.", asdict(self.settings))

    def status(self) -> Dict[str, Any]:
        with self.lock:
            session = self.choreographer.session
            return self._format_response(True, "Session status", {
                'ready': self.resolver.is_ready,
                'state': self.choreographer.state.value,
                'phase': session.phase.value if session else None,
                'index': session.index if session else None,
                'flags': asdict(self.flags),
                'facility': self.resolution.facility.label if self.resolution else None,
                'address': self.address,
                'distance': self.distance.to_dict() if self.distance else None,
                'showing_result': self.showing_result,
                'settings': asdict(self.settings),
                'notifications': list(self.notifications)
            })

    # --- Internals ---

    def _reset_journey(self):
        """Abandons whatever the previous click started."""
        self._generation += 1
        if self._pending_start:
            self._pending_start.cancel()
            self._pending_start = None
        self.choreographer.abandon()
        self.flags.awaiting_confirmation = False
        self.flags.cancel_requested = False
        self.flags.outfall_active = False
        self.resolution = None
        self.address = None
        self.route = None
        self.outfall = None
        self.distance = None
        self.showing_result = False

    def _start_flight_later(self, delay_ms: float, session: AnimationSession):
        if self._pending_start:
            self._pending_start.cancel()

        def start():
            self._pending_start = None
            self.choreographer.begin_flight(session)
        self._pending_start = self.scheduler.call_later(delay_ms, start)

    def _continue_to_outfall(self) -> Dict[str, Any]:
        self.flags.cancel_requested = False
        facility = self.resolution.facility
        network = build_outfall_network(self.resolver.facilities)
        self.surface.set_paths(SessionConstants.OUTFALL_LAYER, [s.coordinates for s in network])
        self.outfall = next((s for s in network if s.facility_name == facility.name), None)

        if self.outfall is None:
            self.choreographer.finish()
            self._complete(accumulate_flush_distance(self.route.raw_path, None))
            return self._format_response(True, f"{facility.label} has no modeled outfall.",
                                         {'distance': self.distance.to_dict()})

        self.flags.outfall_active = True
        session = AnimationSession(phase=FlightPhase.OUTFALL, path=list(self.outfall.coordinates),
                                   raw_path=self.route.raw_path, flags=self.flags, outfall=self.outfall)
        self._start_flight_later(SessionConstants.OUTFALL_START_DELAY_MS, session)
        return self._format_response(True, "Following the outfall to the lake.")

    def _on_facility_reached(self, session: AnimationSession):
        label = self.resolution.facility.label if self.resolution else None
        self._notify(Notification.FACILITY_REACHED, {'facility': label, 'phase': session.phase.value})

    def _on_journey_complete(self, session: AnimationSession, distance: FlushDistance):
        self._complete(distance)

    def _complete(self, distance: FlushDistance):
        self.distance = distance
        self.showing_result = True
        self._notify(Notification.JOURNEY_COMPLETE, {
            'distance': distance.to_dict(),
            'summary': journey_summary(distance)
        })

    def _notify(self, kind: Notification, data: Dict[str, Any]):
        logging.info(f"Notification: {kind.value}")
        self.notifications.append({'type': kind.value, 'data': data, 'timestamp': time.time()})

    def _error_response(self, error: FlushError, **data) -> Dict[str, Any]:
        logging.info(f"{type(error).__name__}: {error}")
        return self._format_response(False, str(error), {'error_type': type(error).__name__, **data})

    def _format_response(self, success: bool, message: str, data: Dict = None) -> Dict[str, Any]:
        """Standardized response format for all methods."""
        return {
            "module": "session", "success": success, "message": message,
            "data": data or {}, "timestamp": time.time()
        }
