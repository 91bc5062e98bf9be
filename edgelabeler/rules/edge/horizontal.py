"""Horizontal edges — ridges along the peak, eaves along the perimeter."""

from __future__ import annotations

from edgelabeler.rules.base import EdgeRule
from edgelabeler.models import (
    DetectionContext, EdgeDetection, EdgeType,
    is_nearly_horizontal, round_half_up,
)


class HorizontalEdgeRule(EdgeRule):
    """Nearly horizontal edges: Ridge when well connected, else Eave."""

    priority = 10  # Orientation is checked before connectivity

    def get_id(self) -> str:
        return "edge.horizontal"

    def get_name(self) -> str:
        return "Horizontal Edge"

    def applies(self, context: DetectionContext) -> bool:
        return is_nearly_horizontal(context.angle, context.params.horizontal_tolerance)

    def classify(self, context: DetectionContext) -> EdgeDetection:
        count = context.connection_count
        angle = round_half_up(context.angle)

        if count >= 2 and context.edge.elevation_rank == 1:
            return self.result(
                EdgeType.RIDGE, 95,
                f"Horizontal ({angle}°), highest elevation, connects {count} edges",
            )
        if count == 2:
            return self.result(
                EdgeType.RIDGE, 75,
                f"Horizontal ({angle}°), connects 2 edges",
            )
        if count == 1:
            return self.result(
                EdgeType.EAVE, 70,
                f"Horizontal ({angle}°), perimeter edge",
            )
        return self.result(
            EdgeType.EAVE, 65,
            f"Horizontal ({angle}°), likely perimeter",
        )
