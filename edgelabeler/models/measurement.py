"""Labeled measurement output — what gets handed to the edge store."""

from __future__ import annotations
from pydantic import BaseModel

from .edge import EdgeType, RoofEdge


class SavedEdge(BaseModel):
    """Persisted form of an edge; geometry as [lat, lng] pairs."""
    id: str
    edge_type: EdgeType
    geometry: list[tuple[float, float]]
    length_ft: float
    auto_detected: bool
    confidence_score: int
    detection_reason: str | None = None
    user_modified: bool
    display_order: int

    @classmethod
    def from_edge(cls, edge: RoofEdge) -> SavedEdge:
        return cls(
            id=edge.id,
            edge_type=edge.edge_type,
            geometry=[(p.lat, p.lng) for p in edge.geometry],
            length_ft=edge.length_ft,
            auto_detected=edge.auto_detected,
            confidence_score=edge.confidence_score,
            detection_reason=edge.detection_reason,
            user_modified=edge.user_modified,
            display_order=edge.display_order,
        )


class EdgeTotals(BaseModel):
    """Summed edge lengths (feet) and counts per type."""
    ridge_length: float = 0.0
    hip_length: float = 0.0
    valley_length: float = 0.0
    rake_length: float = 0.0
    eave_length: float = 0.0
    penetration_length: float = 0.0
    counts: dict[EdgeType, int] = {}

    @classmethod
    def from_edges(cls, edges: list[RoofEdge]) -> EdgeTotals:
        lengths = {t: 0.0 for t in EdgeType}
        counts = {t: 0 for t in EdgeType}
        for edge in edges:
            lengths[edge.edge_type] += edge.length_ft
            counts[edge.edge_type] += 1
        return cls(
            ridge_length=lengths[EdgeType.RIDGE],
            hip_length=lengths[EdgeType.HIP],
            valley_length=lengths[EdgeType.VALLEY],
            rake_length=lengths[EdgeType.RAKE],
            eave_length=lengths[EdgeType.EAVE],
            penetration_length=lengths[EdgeType.PENETRATION],
            counts=counts,
        )


class MeasurementEdgesPayload(BaseModel):
    """The final edge collection for one measurement."""
    measurement_id: str
    edges: list[SavedEdge]
    totals: EdgeTotals

    @classmethod
    def from_edges(cls, measurement_id: str, edges: list[RoofEdge]) -> MeasurementEdgesPayload:
        ordered = sorted(edges, key=lambda e: e.display_order)
        return cls(
            measurement_id=measurement_id,
            edges=[SavedEdge.from_edge(e) for e in ordered],
            totals=EdgeTotals.from_edges(ordered),
        )
