"""Display metadata for edge types and confidence levels."""

from __future__ import annotations
from enum import Enum
from pydantic import BaseModel

from .edge import EdgeType


class EdgeTypeInfo(BaseModel):
    type: EdgeType
    label: str
    abbreviation: str
    color: str
    stroke_color: str
    description: str


EDGE_TYPE_CATALOG: dict[EdgeType, EdgeTypeInfo] = {
    info.type: info
    for info in [
        EdgeTypeInfo(
            type=EdgeType.RIDGE, label="Ridge", abbreviation="R",
            color="#ef4444", stroke_color="#dc2626",
            description="Horizontal peak line where two roof planes meet at the top",
        ),
        EdgeTypeInfo(
            type=EdgeType.HIP, label="Hip", abbreviation="H",
            color="#f97316", stroke_color="#ea580c",
            description="Angled line where two sloping roof planes meet externally",
        ),
        EdgeTypeInfo(
            type=EdgeType.VALLEY, label="Valley", abbreviation="V",
            color="#3b82f6", stroke_color="#2563eb",
            description="Angled line where two sloping roof planes meet internally",
        ),
        EdgeTypeInfo(
            type=EdgeType.EAVE, label="Eave", abbreviation="E",
            color="#10b981", stroke_color="#059669",
            description="Bottom edge where roof overhangs the wall",
        ),
        EdgeTypeInfo(
            type=EdgeType.RAKE, label="Rake", abbreviation="Rk",
            color="#8b5cf6", stroke_color="#7c3aed",
            description="Sloped edge at the gable end",
        ),
        EdgeTypeInfo(
            type=EdgeType.PENETRATION, label="Penetration", abbreviation="P",
            color="#ec4899", stroke_color="#db2777",
            description="Openings for chimneys, vents, skylights",
        ),
        EdgeTypeInfo(
            type=EdgeType.UNLABELED, label="Unlabeled", abbreviation="U",
            color="#94a3b8", stroke_color="#64748b",
            description="Edge not yet classified",
        ),
    ]
}


def get_edge_type_info(edge_type: EdgeType | str) -> EdgeTypeInfo:
    """Catalog entry for a type; unknown values fall back to Unlabeled."""
    try:
        return EDGE_TYPE_CATALOG[EdgeType(edge_type)]
    except ValueError:
        return EDGE_TYPE_CATALOG[EdgeType.UNLABELED]


class ConfidenceLevel(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


HIGH_CONFIDENCE = 90
MEDIUM_CONFIDENCE = 60


def get_confidence_level(score: int) -> ConfidenceLevel:
    if score >= HIGH_CONFIDENCE:
        return ConfidenceLevel.HIGH
    if score >= MEDIUM_CONFIDENCE:
        return ConfidenceLevel.MEDIUM
    return ConfidenceLevel.LOW
