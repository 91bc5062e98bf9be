"""Sloped edges between facets — told apart by the angles at their junctions.

A small average angle to the neighbouring edges means a concave corner
(Valley); a wide one means a convex corner (Hip). Anything in between
falls back to Ridge at low confidence.
"""

from __future__ import annotations

from edgelabeler.rules.base import EdgeRule
from edgelabeler.models import (
    DetectionContext, EdgeDetection, EdgeType, round_half_up,
)


class MultiJunctionRule(EdgeRule):
    """Non-horizontal edges with three or more connections."""

    priority = 20

    def get_id(self) -> str:
        return "edge.multi_junction"

    def get_name(self) -> str:
        return "Multi-Edge Junction"

    def applies(self, context: DetectionContext) -> bool:
        return context.connection_count >= 3

    def classify(self, context: DetectionContext) -> EdgeDetection:
        params = context.params
        count = context.connection_count
        avg = context.average_connection_angle()
        shown = round_half_up(avg)

        if avg < params.valley_max_angle:
            return self.result(
                EdgeType.VALLEY, 92,
                f"Internal angle {shown}°, connects {count} edges",
            )
        if params.hip_min_angle < avg < params.hip_max_angle:
            return self.result(
                EdgeType.HIP, 90,
                f"External angle {shown}°, connects {count} edges",
            )
        return self.result(
            EdgeType.RIDGE, 70,
            f"Connects {count} edges at {shown}°",
        )


class PairJunctionRule(EdgeRule):
    """Non-horizontal edges with exactly two connections."""

    priority = 30

    def get_id(self) -> str:
        return "edge.pair_junction"

    def get_name(self) -> str:
        return "Two-Edge Junction"

    def applies(self, context: DetectionContext) -> bool:
        return context.connection_count == 2

    def classify(self, context: DetectionContext) -> EdgeDetection:
        params = context.params
        avg = context.average_connection_angle()
        shown = round_half_up(avg)

        if avg < params.valley_max_angle:
            return self.result(
                EdgeType.VALLEY, 88,
                f"Internal angle {shown}°, forms V-shape",
            )
        if avg > params.hip_min_angle:
            return self.result(
                EdgeType.HIP, 85,
                f"External angle {shown}°, connects peak to eave",
            )
        return self.result(
            EdgeType.RIDGE, 65,
            f"Diagonal connection at {shown}°",
        )
