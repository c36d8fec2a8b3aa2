# followyourflush/path_planner/tests/test_flush_distance.py
import math
import unittest

from followyourflush.path_planner.data_models import FlushDistance, OutfallSegment
from followyourflush.path_planner.utils.calculations import (accumulate_flush_distance, path_bounds,
                                                            path_length_km)
from followyourflush.path_planner.utils.smoothing import smooth_line

RAW_ROUTE = [[-79.5000, 43.6500], [-79.4950, 43.6460], [-79.4900, 43.6470],
             [-79.4850, 43.6400], [-79.4800, 43.6350], [-79.4780, 43.6300]]


def haversine_distance_km(lat1, lon1, lat2, lon2):
    """Scalar great-circle distance, computed independently of the numpy path code."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = math.sin(d_lat / 2)**2 + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2)**2
    return 6371.0088 * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def segment_sum(coords):
    return sum(haversine_distance_km(a[1], a[0], b[1], b[0]) for a, b in zip(coords, coords[1:]))


class TestFlushDistance(unittest.TestCase):

    def test_path_length_matches_segment_sum(self):
        self.assertAlmostEqual(path_length_km(RAW_ROUTE), segment_sum(RAW_ROUTE), places=9)

    def test_degenerate_paths_have_no_length(self):
        self.assertEqual(path_length_km([]), 0.0)
        self.assertEqual(path_length_km([[-79.5, 43.65]]), 0.0)

    def test_one_degree_of_latitude(self):
        self.assertAlmostEqual(path_length_km([[0, 0], [0, 1]]), 111.195, places=3)

    def test_walking_leg_uses_raw_coordinates(self):
        distance = accumulate_flush_distance(RAW_ROUTE, None)
        self.assertAlmostEqual(distance.walking_km, segment_sum(RAW_ROUTE), places=9)
        # The smoothed display copy is shorter, so using it would under-report.
        self.assertNotAlmostEqual(distance.walking_km, path_length_km(smooth_line(RAW_ROUTE, 2)), places=6)

    def test_outfall_leg_is_added(self):
        outfall = OutfallSegment("Humber", ((-79.4780, 43.6300), (-79.471552, 43.628355)))
        distance = accumulate_flush_distance(RAW_ROUTE, outfall)
        expected_outfall = haversine_distance_km(43.6300, -79.4780, 43.628355, -79.471552)
        self.assertAlmostEqual(distance.outfall_km, expected_outfall, places=9)
        self.assertAlmostEqual(distance.total_km, segment_sum(RAW_ROUTE) + expected_outfall, places=9)

    def test_display_rounds_to_two_decimals(self):
        distance = FlushDistance(walking_km=1.234, outfall_km=0.5)
        self.assertEqual(distance.display, "1.73 km")
        self.assertEqual(distance.to_dict(), {"walking_km": 1.23, "outfall_km": 0.5, "total_km": 1.73})

    def test_path_bounds(self):
        self.assertEqual(path_bounds(RAW_ROUTE), ((-79.5, 43.63), (-79.478, 43.65)))
        with self.assertRaises(ValueError):
            path_bounds([])


if __name__ == '__main__':
    unittest.main()
