"""Geometric primitives and angle/length helpers over lat/lng coordinates."""

from __future__ import annotations
import math
from typing import Sequence

from pydantic import BaseModel, ConfigDict, Field


EARTH_RADIUS_M = 6371e3
FEET_PER_METER = 3.28084


class Point(BaseModel):
    """Geographic coordinate in degrees. Immutable."""
    model_config = ConfigDict(frozen=True)

    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)


def points_match(a: Point, b: Point, tolerance: float) -> bool:
    """Both latitude and longitude differ by less than `tolerance`."""
    return abs(a.lat - b.lat) < tolerance and abs(a.lng - b.lng) < tolerance


def _haversine_m(p1: Point, p2: Point) -> float:
    phi1 = math.radians(p1.lat)
    phi2 = math.radians(p2.lat)
    d_phi = math.radians(p2.lat - p1.lat)
    d_lambda = math.radians(p2.lng - p1.lng)

    a = (
        math.sin(d_phi / 2) * math.sin(d_phi / 2)
        + math.cos(phi1) * math.cos(phi2)
        * math.sin(d_lambda / 2) * math.sin(d_lambda / 2)
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_M * c


def geodesic_length(points: Sequence[Point]) -> float:
    """Great-circle length of a polyline in feet."""
    total = 0.0
    for i in range(len(points) - 1):
        total += _haversine_m(points[i], points[i + 1])
    return total * FEET_PER_METER


def bearing_to_north(points: Sequence[Point]) -> float:
    """
    Bearing from the first to the last point, degrees in [0, 360).

    Uses a locally flattened lng/lat plane. Degenerate input
    (fewer than two points, or identical endpoints) yields 0.
    """
    if len(points) < 2:
        return 0.0

    start, end = points[0], points[-1]
    dx = end.lng - start.lng
    dy = end.lat - start.lat
    if dx == 0 and dy == 0:
        return 0.0

    angle = math.degrees(math.atan2(dx, dy))
    if angle < 0:
        angle += 360
    # -1e-15 + 360 rounds to 360.0
    if angle >= 360:
        angle = 0.0
    return angle


def _vector(points: Sequence[Point]) -> tuple[float, float]:
    return (points[-1].lng - points[0].lng, points[-1].lat - points[0].lat)


def angle_between(points_a: Sequence[Point], points_b: Sequence[Point]) -> float:
    """
    Angle between two edges' first-to-last vectors, degrees in [0, 180].

    Returns 0 when either vector has zero length.
    """
    if len(points_a) < 2 or len(points_b) < 2:
        return 0.0

    ax, ay = _vector(points_a)
    bx, by = _vector(points_b)
    mag_a = math.sqrt(ax * ax + ay * ay)
    mag_b = math.sqrt(bx * bx + by * by)
    if mag_a == 0 or mag_b == 0:
        return 0.0

    cos_angle = (ax * bx + ay * by) / (mag_a * mag_b)
    cos_angle = max(-1.0, min(1.0, cos_angle))
    return math.degrees(math.acos(cos_angle))


def is_nearly_horizontal(angle: float, tolerance: float = 15) -> bool:
    normalized = angle % 180
    return normalized < tolerance or normalized > 180 - tolerance


def is_nearly_vertical(angle: float, tolerance: float = 20) -> bool:
    normalized = (angle + 90) % 180
    return normalized < tolerance or normalized > 180 - tolerance


def round_half_up(value: float) -> int:
    """Round halves upward, the way reasons display numbers."""
    return int(math.floor(value + 0.5))
