import math
import unittest

from pydantic import ValidationError

from edgelabeler.models import (
    Point, geodesic_length, bearing_to_north, angle_between,
    is_nearly_horizontal, is_nearly_vertical, points_match, round_half_up,
)
from roof_fixtures import pt, polar


# -------------------------------------------------------------------
# Lengths
# -------------------------------------------------------------------

class TestGeodesicLength(unittest.TestCase):
    def test_one_degree_of_latitude(self):
        # One degree along a meridian is R * pi / 180 metres
        a = Point(lat=0.0, lng=0.0)
        b = Point(lat=1.0, lng=0.0)
        expected_ft = 6371e3 * math.pi / 180 * 3.28084
        self.assertAlmostEqual(geodesic_length([a, b]), expected_ft, places=3)

    def test_polyline_sums_segments(self):
        a, b, c = pt(0, 0), pt(1, 0), pt(1, 1)
        total = geodesic_length([a, b, c])
        self.assertAlmostEqual(total, geodesic_length([a, b]) + geodesic_length([b, c]))

    def test_degenerate_inputs(self):
        self.assertEqual(geodesic_length([]), 0.0)
        self.assertEqual(geodesic_length([pt(0, 0)]), 0.0)
        self.assertEqual(geodesic_length([pt(0, 0), pt(0, 0)]), 0.0)


# -------------------------------------------------------------------
# Bearings
# -------------------------------------------------------------------

class TestBearing(unittest.TestCase):
    def test_cardinal_directions(self):
        o = pt(0, 0)
        self.assertAlmostEqual(bearing_to_north([o, pt(1, 0)]), 0.0)
        self.assertAlmostEqual(bearing_to_north([o, pt(0, 1)]), 90.0)
        self.assertAlmostEqual(bearing_to_north([o, pt(-1, 0)]), 180.0)
        self.assertAlmostEqual(bearing_to_north([o, pt(0, -1)]), 270.0)

    def test_always_in_range(self):
        o = pt(0, 0)
        for deg in range(0, 360, 7):
            b = bearing_to_north([o, polar(o, deg)])
            self.assertGreaterEqual(b, 0.0)
            self.assertLess(b, 360.0)

    def test_tiny_negative_offset_stays_below_360(self):
        b = bearing_to_north([Point(lat=0, lng=0), Point(lat=1, lng=-1e-20)])
        self.assertGreaterEqual(b, 0.0)
        self.assertLess(b, 360.0)

    def test_degenerate_edges_return_zero(self):
        self.assertEqual(bearing_to_north([]), 0.0)
        self.assertEqual(bearing_to_north([pt(0, 0)]), 0.0)
        self.assertEqual(bearing_to_north([pt(2, 2), pt(2, 2)]), 0.0)

    def test_deterministic(self):
        pts = [pt(0.3, 0.1), pt(2.7, 1.9)]
        self.assertEqual(bearing_to_north(pts), bearing_to_north(list(pts)))


# -------------------------------------------------------------------
# Angles between edges
# -------------------------------------------------------------------

class TestAngleBetween(unittest.TestCase):
    def test_known_angles(self):
        o = pt(0, 0)
        east = [o, pt(0, 1)]
        self.assertAlmostEqual(angle_between(east, [o, pt(1, 0)]), 90.0)
        self.assertAlmostEqual(angle_between(east, [o, pt(0, 2)]), 0.0)
        self.assertAlmostEqual(angle_between(east, [o, pt(0, -1)]), 180.0)
        self.assertAlmostEqual(angle_between(east, [o, polar(o, 45)]), 45.0, places=6)

    def test_bounds(self):
        o = pt(0, 0)
        for a in range(0, 360, 11):
            for b in range(0, 360, 13):
                angle = angle_between([o, polar(o, a)], [o, polar(o, b)])
                self.assertGreaterEqual(angle, 0.0)
                self.assertLessEqual(angle, 180.0)
                self.assertFalse(math.isnan(angle))

    def test_parallel_vectors_do_not_overshoot(self):
        # Cosine can round slightly above 1 for parallel vectors
        a = [Point(lat=0.1, lng=0.1), Point(lat=0.3, lng=0.3)]
        b = [Point(lat=0.7, lng=0.7), Point(lat=1.3, lng=1.3)]
        self.assertAlmostEqual(angle_between(a, b), 0.0, places=5)

    def test_zero_length_edge_returns_zero(self):
        o = pt(0, 0)
        self.assertEqual(angle_between([o, o], [o, pt(1, 0)]), 0.0)
        self.assertEqual(angle_between([o, pt(1, 0)], [o]), 0.0)


# -------------------------------------------------------------------
# Orientation helpers
# -------------------------------------------------------------------

class TestOrientation(unittest.TestCase):
    def test_nearly_horizontal(self):
        for angle in (0, 10, 14.9, 170, 180, 190, 359):
            self.assertTrue(is_nearly_horizontal(angle), angle)
        for angle in (15, 45, 90, 165, 270):
            self.assertFalse(is_nearly_horizontal(angle), angle)

    def test_nearly_vertical(self):
        for angle in (70.5, 85, 90, 105, 270, 289):
            self.assertTrue(is_nearly_vertical(angle), angle)
        for angle in (0, 45, 70, 110, 180):
            self.assertFalse(is_nearly_vertical(angle), angle)

    def test_custom_tolerance(self):
        self.assertTrue(is_nearly_horizontal(25, tolerance=30))
        self.assertFalse(is_nearly_vertical(60, tolerance=10))


class TestPoint(unittest.TestCase):
    def test_points_match_within_tolerance(self):
        a = Point(lat=40.0, lng=-75.0)
        self.assertTrue(points_match(a, Point(lat=40.000005, lng=-75.000005), 1e-5))
        self.assertFalse(points_match(a, Point(lat=40.00002, lng=-75.0), 1e-5))
        self.assertTrue(points_match(a, a, 1e-9))

    def test_point_is_immutable(self):
        p = Point(lat=1.0, lng=2.0)
        with self.assertRaises(ValidationError):
            p.lat = 3.0

    def test_coordinates_validated(self):
        with self.assertRaises(ValidationError):
            Point(lat=91.0, lng=0.0)
        with self.assertRaises(ValidationError):
            Point(lat=0.0, lng=-181.0)

    def test_round_half_up(self):
        self.assertEqual(round_half_up(2.5), 3)
        self.assertEqual(round_half_up(84.49), 84)
        self.assertEqual(round_half_up(0.0), 0)


if __name__ == "__main__":
    unittest.main(verbosity=2)
