"""API request/response schemas."""

from __future__ import annotations
from pydantic import BaseModel

from edgelabeler.models import (
    Facet, RoofEdge, EdgeType, DetectionParams, ClassifierConfig, EdgeTotals,
)
from edgelabeler.services.labeling_session import (
    LabelingSession, SessionState, SessionSummary,
)


class ClassifyRequest(BaseModel):
    """Request body for the /classify endpoint."""
    measurement_id: str = ""
    facets: list[Facet]
    elevation_ranks: dict[str, int] = {}
    params: DetectionParams = DetectionParams()
    config: ClassifierConfig = ClassifierConfig()


class ClassifyResponse(BaseModel):
    edges: list[RoofEdge]
    totals: EdgeTotals


class StartSessionRequest(ClassifyRequest):
    """Request body for starting a labeling session."""
    measurement_id: str


class RelabelRequest(BaseModel):
    edge_type: EdgeType


class AcceptRequest(BaseModel):
    high_confidence_only: bool = True


class SessionResponse(BaseModel):
    """Current state of a labeling session."""
    session_id: str
    measurement_id: str
    state: SessionState
    edges: list[RoofEdge]
    summary: SessionSummary
    can_undo: bool
    can_redo: bool

    @classmethod
    def from_session(cls, session_id: str, session: LabelingSession) -> SessionResponse:
        return cls(
            session_id=session_id,
            measurement_id=session.measurement_id,
            state=session.state,
            edges=session.edges,
            summary=session.summary(),
            can_undo=session.can_undo,
            can_redo=session.can_redo,
        )


class AcceptResponse(BaseModel):
    accepted: int
    session: SessionResponse


class SaveResponse(BaseModel):
    measurement_id: str
    edge_count: int
    totals: EdgeTotals


class RuleInfo(BaseModel):
    id: str
    name: str

