"""Roof outline models: facets, edges, and detection results."""

from __future__ import annotations
from enum import Enum

from pydantic import BaseModel, Field, field_validator

from .geometry import Point


class EdgeType(str, Enum):
    RIDGE = "Ridge"
    HIP = "Hip"
    VALLEY = "Valley"
    EAVE = "Eave"
    RAKE = "Rake"
    PENETRATION = "Penetration"
    UNLABELED = "Unlabeled"


class Facet(BaseModel):
    """One planar roof surface, a closed polygon of boundary points."""
    id: str
    name: str = ""
    points: list[Point]

    @field_validator("points")
    @classmethod
    def _closed_polygon(cls, points: list[Point]) -> list[Point]:
        # Drawing tools sometimes repeat the first vertex to close the ring
        if len(points) > 3 and points[0] == points[-1]:
            points = points[:-1]
        if len(points) < 3:
            raise ValueError("a facet needs at least 3 points")
        return points

    def boundary_segments(self) -> list[tuple[Point, Point]]:
        """Consecutive vertex pairs, wrapping from last to first."""
        n = len(self.points)
        return [(self.points[i], self.points[(i + 1) % n]) for i in range(n)]


class RoofEdge(BaseModel):
    """One boundary segment of the roof outline."""
    id: str
    measurement_id: str = ""
    geometry: list[Point] = Field(min_length=2)
    edge_type: EdgeType = EdgeType.UNLABELED
    length_ft: float = 0.0
    angle_to_north: float = 0.0
    elevation_rank: int | None = None   # 1 = highest, externally supplied
    auto_detected: bool = False
    confidence_score: int = Field(default=0, ge=0, le=100)
    detection_reason: str | None = None
    user_modified: bool = False         # Locked against re-detection
    connects_to: list[str] = []
    display_order: int = 0
    shared: bool = False                # Boundary contributed by 2+ facets
    facet_ids: list[str] = []

    @property
    def start(self) -> Point:
        return self.geometry[0]

    @property
    def end(self) -> Point:
        return self.geometry[-1]

    @property
    def locked(self) -> bool:
        return self.user_modified


class Junction(BaseModel):
    """A location where two or more edge endpoints meet."""
    point: Point
    edge_ids: list[str]


class EdgeDetection(BaseModel):
    """Outcome of classifying a single edge."""
    edge_type: EdgeType
    confidence_score: int = Field(ge=0, le=100)
    detection_reason: str
    rule_id: str = ""
