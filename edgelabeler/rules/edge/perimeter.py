"""Weakly connected edges — gable rakes, stray eaves, and isolated features."""

from __future__ import annotations

from edgelabeler.rules.base import EdgeRule
from edgelabeler.models import (
    DetectionContext, EdgeDetection, EdgeType,
    is_nearly_vertical, round_half_up,
)


class SingleConnectionRule(EdgeRule):
    """One connection: Rake if it runs east-west, otherwise Eave."""

    priority = 40

    def get_id(self) -> str:
        return "edge.single_connection"

    def get_name(self) -> str:
        return "Single Connection"

    def applies(self, context: DetectionContext) -> bool:
        return context.connection_count == 1

    def classify(self, context: DetectionContext) -> EdgeDetection:
        if is_nearly_vertical(context.angle, context.params.vertical_tolerance):
            return self.result(
                EdgeType.RAKE, 80,
                f"Sloped edge ({round_half_up(context.angle)}°), gable end",
            )
        return self.result(
            EdgeType.EAVE, 60,
            "Perimeter edge with one connection",
        )


class IsolatedEdgeRule(EdgeRule):
    """No connections: short edges are penetrations, long ones are unknown."""

    priority = 50

    def get_id(self) -> str:
        return "edge.isolated"

    def get_name(self) -> str:
        return "Isolated Edge"

    def applies(self, context: DetectionContext) -> bool:
        return context.connection_count == 0

    def classify(self, context: DetectionContext) -> EdgeDetection:
        length = context.edge.length_ft
        if length < context.params.penetration_max_length_ft:
            return self.result(
                EdgeType.PENETRATION, 70,
                f"Small isolated feature ({round_half_up(length)}ft)",
            )
        return self.result(
            EdgeType.UNLABELED, 30,
            "Insufficient geometric information",
        )
