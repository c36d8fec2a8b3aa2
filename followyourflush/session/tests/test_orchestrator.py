# followyourflush/session/tests/test_orchestrator.py
import unittest
from unittest.mock import MagicMock

from followyourflush.camera.constants import CameraConstants
from followyourflush.camera.data_models import ChoreographerState
from followyourflush.camera.scheduler import ManualScheduler
from followyourflush.camera.surface import RecordingSurface
from followyourflush.catchment.core import CatchmentResolver
from followyourflush.path_planner.core import RoutePlanner
from followyourflush.path_planner.directions_client import DirectionsClient
from followyourflush.path_planner.geocoder import ReverseGeocoder
from followyourflush.path_planner.utils.calculations import path_length_km
from followyourflush.session.core import FlushSession
from followyourflush.session.data_models import InputEvent, Notification, SessionConstants


def square(min_lon, min_lat, max_lon, max_lat):
    return {"type": "Polygon", "coordinates": [[[min_lon, min_lat], [max_lon, min_lat], [max_lon, max_lat],
                                                [min_lon, max_lat], [min_lon, min_lat]]]}


def point_feature(name, lon, lat):
    return {"type": "Feature", "geometry": {"type": "Point", "coordinates": [lon, lat]},
            "properties": {"Plant_Name": name}}


def catchment_feature(name, geometry):
    return {"type": "Feature", "geometry": geometry, "properties": {"Plant": name}}


PLANTS = {"type": "FeatureCollection", "features": [
    point_feature("Humber", -79.4780, 43.6300),
    point_feature("Ashbridges Bay", -79.3190, 43.6540),
    point_feature("Lakeview", -79.5600, 43.5800),
]}

CATCHMENTS = {"type": "FeatureCollection", "features": [
    catchment_feature("Humber", square(-79.55, 43.60, -79.45, 43.70)),
    catchment_feature("Ashbridges Bay", square(-79.45, 43.60, -79.30, 43.70)),
    catchment_feature("Lakeview", square(-79.60, 43.55, -79.55, 43.60)),
    catchment_feature("Clarkson", square(-79.70, 43.60, -79.55, 43.70)),
]}

WALK = [[-79.5000, 43.6500], [-79.4950, 43.6460], [-79.4900, 43.6470],
        [-79.4850, 43.6400], [-79.4800, 43.6350], [-79.4780, 43.6300]]


def build_session(route_coords=WALK, load=True):
    directions = MagicMock()
    directions.get_walking_route.return_value = route_coords
    geocoder = MagicMock()
    geocoder.describe.return_value = "1 Old Mill Dr, Toronto"
    session = FlushSession(resolver=CatchmentResolver(), route_planner=RoutePlanner(directions),
                           geocoder=geocoder, surface=RecordingSurface(), scheduler=ManualScheduler())
    if load:
        session.load_feature_collections(PLANTS, CATCHMENTS)
    return session


class TestClick(unittest.TestCase):

    def test_click_in_humber_catchment(self):
        session = build_session()
        result = session.click(-79.50, 43.65)

        self.assertTrue(result['success'])
        self.assertEqual(result['module'], "session")
        self.assertEqual(result['message'], "This area is serviced by: Humber Treatment Plant")
        self.assertEqual(result['data']['address'], "1 Old Mill Dr, Toronto")
        self.assertEqual(result['data']['facility_coords'], [-79.4780, 43.6300])
        self.assertTrue(session.flags.awaiting_confirmation)

    def test_click_outside_coverage(self):
        session = build_session()
        result = session.click(-78.0, 45.0)

        self.assertFalse(result['success'])
        self.assertEqual(result['data']['error_type'], "OutOfCoverageError")
        self.assertEqual(result['message'], "That's outside of Toronto's boundary!")
        self.assertFalse(session.flags.awaiting_confirmation)
        session.geocoder.describe.assert_not_called()

    def test_click_in_unmodeled_catchment(self):
        result = build_session().click(-79.60, 43.65)
        self.assertEqual(result['data']['error_type'], "UnmodeledAuthorityError")
        self.assertEqual(result['message'], "This area is serviced by Peel region's treatment plants!")

    def test_click_before_data_loads(self):
        session = build_session(load=False)
        result = session.click(-79.50, 43.65)
        self.assertEqual(result['data']['error_type'], "DataNotReadyError")
        self.assertEqual(result['message'], "Data still loading…")

    def test_partial_load_is_not_ready(self):
        session = build_session(load=False)
        result = session.load_feature_collections(PLANTS, None)
        self.assertFalse(result['success'])
        self.assertFalse(result['data']['ready'])


class TestJourney(unittest.TestCase):

    def setUp(self):
        self.session = build_session()
        self.scheduler = self.session.scheduler
        self.surface = self.session.surface

    def start_walking(self):
        self.session.click(-79.50, 43.65)
        result = self.session.handle_event(InputEvent.CONFIRM)
        self.assertTrue(result['success'])
        return result

    def notification_types(self):
        return [n['type'] for n in self.session.notifications]

    def test_confirm_publishes_route_and_waits_for_fit(self):
        result = self.start_walking()

        self.assertEqual(result['data'], {'raw_points': len(WALK), 'display_points': len(WALK)})
        self.assertFalse(self.session.flags.awaiting_confirmation)
        self.assertEqual(len(self.surface.layers[SessionConstants.ROUTE_LAYER]), 1)
        self.assertEqual(self.surface.bounds, ((-79.5, 43.63), (-79.478, 43.65)))

        self.scheduler.advance(SessionConstants.WALKING_START_DELAY_MS - 1)
        self.assertEqual(self.session.choreographer.state, ChoreographerState.IDLE)
        self.scheduler.advance(1)
        self.assertEqual(self.session.choreographer.state, ChoreographerState.FLYING)

    def test_confirm_without_click(self):
        result = self.session.handle_event(InputEvent.CONFIRM)
        self.assertFalse(result['success'])

    def test_full_journey(self):
        self.start_walking()
        self.scheduler.run_until_idle()
        self.assertEqual(self.session.choreographer.state, ChoreographerState.PAUSED_AT_FACILITY)
        self.assertEqual(self.notification_types(), [Notification.FACILITY_REACHED.value])

        result = self.session.handle_event(InputEvent.SKIP)
        self.assertTrue(result['success'])
        self.assertTrue(self.session.flags.outfall_active)
        # Every plant with a modeled outfall is drawn, not only the selected one.
        self.assertEqual(len(self.surface.layers[SessionConstants.OUTFALL_LAYER]), 2)

        self.scheduler.run_until_idle()
        self.assertEqual(self.session.choreographer.state, ChoreographerState.DONE)
        self.assertFalse(self.session.flags.outfall_active)
        self.assertTrue(self.session.showing_result)

        distance = self.session.distance
        self.assertAlmostEqual(distance.walking_km, path_length_km(WALK))
        self.assertAlmostEqual(distance.outfall_km, path_length_km(self.session.outfall.coordinates))
        complete = self.session.notifications[-1]
        self.assertEqual(complete['type'], Notification.JOURNEY_COMPLETE.value)
        self.assertIn(f"{distance.walking_km:.2f} km to reach the treatment plant", complete['data']['summary'])

        dismissed = self.session.handle_event(InputEvent.SKIP)
        self.assertEqual(dismissed['message'], "Result dismissed.")
        self.assertFalse(self.session.showing_result)

    def test_skip_during_walking_flight(self):
        self.start_walking()
        self.scheduler.advance(SessionConstants.WALKING_START_DELAY_MS + CameraConstants.START_DELAY_MS)
        self.session.handle_event(InputEvent.SKIP)
        self.assertTrue(self.session.flags.cancel_requested)

        self.scheduler.run_until_idle()
        self.assertEqual(self.session.choreographer.state, ChoreographerState.PAUSED_AT_FACILITY)
        self.assertEqual(self.surface.frame_count, 1)

    def test_skip_during_outfall_stops_at_the_plant(self):
        self.start_walking()
        self.scheduler.run_until_idle()
        self.session.handle_event(InputEvent.SKIP)
        self.scheduler.advance(SessionConstants.OUTFALL_START_DELAY_MS)
        self.session.handle_event(InputEvent.SKIP)

        self.scheduler.run_until_idle()
        self.assertEqual(self.session.choreographer.state, ChoreographerState.PAUSED_AT_FACILITY)
        self.assertIsNone(self.session.distance)
        self.assertEqual(self.notification_types(), [Notification.FACILITY_REACHED.value] * 2)

    def test_plant_without_outfall_completes_immediately(self):
        self.session.click(-79.57, 43.58)
        self.session.handle_event(InputEvent.CONFIRM)
        self.scheduler.run_until_idle()

        result = self.session.handle_event(InputEvent.SKIP)
        self.assertTrue(result['success'])
        self.assertEqual(self.session.choreographer.state, ChoreographerState.DONE)
        self.assertEqual(self.session.distance.outfall_km, 0.0)
        self.assertTrue(self.session.showing_result)
        self.assertEqual(self.scheduler.pending, 0)

    def test_route_failure_leaves_session_clickable(self):
        self.session.route_planner.directions.get_walking_route.return_value = None
        self.session.click(-79.50, 43.65)
        result = self.session.handle_event(InputEvent.CONFIRM)

        self.assertFalse(result['success'])
        self.assertEqual(result['data']['error_type'], "UpstreamUnavailableError")
        self.assertEqual(result['message'], "Could not generate walking route.")
        self.assertEqual(self.session.choreographer.state, ChoreographerState.IDLE)
        self.assertTrue(self.session.click(-79.40, 43.65)['success'])

    def test_malformed_upstream_bodies_stay_recoverable(self):
        directions_http = MagicMock()
        directions_http.get.return_value.json.return_value = {"routes": [{"geometry": None}]}
        geocoder_http = MagicMock()
        geocoder_http.get.return_value.json.return_value = ["not", "a", "dict"]
        session = build_session()
        session.route_planner = RoutePlanner(DirectionsClient(access_token="token", session=directions_http))
        session.geocoder = ReverseGeocoder(access_token="token", session=geocoder_http)

        clicked = session.click(-79.50, 43.65)
        self.assertTrue(clicked['success'])
        self.assertEqual(clicked['data']['address'], "Unknown location in Toronto")
        self.assertTrue(session.flags.awaiting_confirmation)

        confirmed = session.handle_event(InputEvent.CONFIRM)
        self.assertFalse(confirmed['success'])
        self.assertEqual(confirmed['data']['error_type'], "UpstreamUnavailableError")
        self.assertEqual(session.choreographer.state, ChoreographerState.IDLE)

    def test_click_abandons_running_flight(self):
        self.start_walking()
        self.scheduler.advance(SessionConstants.WALKING_START_DELAY_MS + CameraConstants.START_DELAY_MS)
        self.assertEqual(self.surface.frame_count, 1)

        result = self.session.click(-79.40, 43.65)
        self.assertEqual(result['data']['facility'], "Ashbridges Bay")
        self.assertEqual(self.session.choreographer.state, ChoreographerState.IDLE)
        self.assertIsNone(self.session.route)
        self.scheduler.run_until_idle()
        self.assertEqual(self.surface.frame_count, 1)

    def test_nothing_to_skip(self):
        self.assertFalse(self.session.handle_event(InputEvent.SKIP)['success'])


class TestSettingsAndEvents(unittest.TestCase):

    def test_update_settings(self):
        session = build_session()
        result = session.update_settings(altitude_m=450, tick_interval_ms=20)
        self.assertTrue(result['success'])
        self.assertEqual(session.settings.altitude_m, 450.0)
        self.assertEqual(session.choreographer.settings.tick_interval_ms, 20.0)

    def test_invalid_settings_are_rejected(self):
        session = build_session()
        self.assertFalse(session.update_settings(tick_interval_ms=0)['success'])
        self.assertFalse(session.update_settings(tick_interval_ms="fast")["success"])
        self.assertFalse(session.update_settings(altitude_m=900, tick_interval_ms=-1)["success"])
        self.assertEqual(session.settings.altitude_m, CameraConstants.DEFAULT_ALTITUDE_M)
        self.assertEqual(session.settings.tick_interval_ms, CameraConstants.DEFAULT_TICK_INTERVAL_MS)

    def test_events_by_name(self):
        session = build_session()
        self.assertEqual(session.handle_event("SKIP")['message'], "Nothing to skip.")
        self.assertFalse(session.handle_event("JUMP")['success'])

    def test_status_snapshot(self):
        session = build_session()
        session.click(-79.50, 43.65)
        data = session.status()['data']
        self.assertTrue(data['ready'])
        self.assertEqual(data['state'], "IDLE")
        self.assertTrue(data['flags']['awaiting_confirmation'])
        self.assertEqual(data['facility'], "Humber Treatment Plant")
        self.assertIsNone(data['distance'])


if __name__ == '__main__':
    unittest.main()
