"""Detection context — everything a rule needs to classify one edge."""

from __future__ import annotations
from pydantic import BaseModel, Field

from .edge import RoofEdge
from .geometry import angle_between
from .parameters import DetectionParams, ClassifierConfig


class DetectionContext(BaseModel):
    """
    Holds the state for classifying a single edge.

    The classifier computes bearing and connections once.
    Rules read from the context and never mutate it.
    """
    # Input
    edge: RoofEdge
    all_edges: list[RoofEdge]
    params: DetectionParams = Field(default_factory=DetectionParams)
    config: ClassifierConfig = Field(default_factory=ClassifierConfig)

    # Analysis results (populated by the classifier)
    angle: float = 0.0
    connections: list[RoofEdge] = []

    @property
    def connection_count(self) -> int:
        return len(self.connections)

    def connection_angles(self) -> list[float]:
        return [
            angle_between(self.edge.geometry, other.geometry)
            for other in self.connections
        ]

    def average_connection_angle(self) -> float:
        angles = self.connection_angles()
        if not angles:
            return 0.0
        return sum(angles) / len(angles)
