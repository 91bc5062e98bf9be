"""FastAPI route definitions."""

from __future__ import annotations
import logging

from fastapi import APIRouter, HTTPException

from edgelabeler.config import settings
from edgelabeler.models import EDGE_TYPE_CATALOG, EdgeTypeInfo, EdgeTotals, Junction
from edgelabeler.services.labeling_service import LabelingService
from edgelabeler.services.labeling_session import LabelingSession
from edgelabeler.services.errors import (
    EdgeNotFoundError, SessionNotFoundError, SessionClosedError, SessionBusyError,
    SaveError,
)
from edgelabeler.api.schemas import (
    ClassifyRequest, ClassifyResponse, StartSessionRequest, SessionResponse,
    RelabelRequest, AcceptRequest, AcceptResponse, SaveResponse, RuleInfo,
)

logger = logging.getLogger(__name__)
router = APIRouter()

# Shared service instance
_service = LabelingService(max_sessions=settings.MAX_SESSIONS)

# Closed or mid-save sessions refuse changes
CONFLICT_ERRORS = (SessionClosedError, SessionBusyError)


def _get_session(session_id: str) -> LabelingSession:
    try:
        return _service.sessions.get(session_id)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


def _respond(session_id: str) -> SessionResponse:
    return SessionResponse.from_session(session_id, _get_session(session_id))


@router.post("/classify", response_model=ClassifyResponse)
async def classify(request: ClassifyRequest) -> ClassifyResponse:
    """Classify the edges of a roof outline without keeping a session."""
    edges = _service.classify_facets(
        request.facets,
        request.measurement_id,
        request.elevation_ranks,
        request.params,
        request.config,
    )
    return ClassifyResponse(edges=edges, totals=EdgeTotals.from_edges(edges))


@router.post("/sessions", response_model=SessionResponse, status_code=201)
async def start_session(request: StartSessionRequest) -> SessionResponse:
    """Start labeling a measurement from its facet outlines."""
    session_id, _ = _service.start_session(
        request.measurement_id,
        request.facets,
        request.elevation_ranks,
        request.params,
        request.config,
    )
    return _respond(session_id)


@router.get("/sessions/{session_id}", response_model=SessionResponse)
async def get_session(session_id: str) -> SessionResponse:
    return _respond(session_id)


@router.post("/sessions/{session_id}/detect", response_model=SessionResponse)
async def auto_detect(session_id: str) -> SessionResponse:
    """Run auto-detection over every unlocked edge."""
    try:
        _get_session(session_id).auto_detect()
    except CONFLICT_ERRORS as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _respond(session_id)


@router.get("/sessions/{session_id}/junctions", response_model=list[Junction])
async def list_junctions(session_id: str) -> list[Junction]:
    """Points where two or more edges of the session meet."""
    return _get_session(session_id).junctions()


@router.put("/sessions/{session_id}/edges/{edge_id}", response_model=SessionResponse)
async def relabel_edge(session_id: str, edge_id: str, request: RelabelRequest) -> SessionResponse:
    """Manually set an edge's type. The edge is locked from then on."""
    try:
        _get_session(session_id).relabel(edge_id, request.edge_type)
    except EdgeNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except CONFLICT_ERRORS as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _respond(session_id)


@router.post("/sessions/{session_id}/accept", response_model=AcceptResponse)
async def accept_suggestions(session_id: str, request: AcceptRequest) -> AcceptResponse:
    session = _get_session(session_id)
    try:
        if request.high_confidence_only:
            accepted = session.accept_high_confidence()
        else:
            accepted = session.accept_all_suggestions()
    except CONFLICT_ERRORS as e:
        raise HTTPException(status_code=409, detail=str(e))
    return AcceptResponse(accepted=accepted, session=_respond(session_id))


@router.post("/sessions/{session_id}/undo", response_model=SessionResponse)
async def undo(session_id: str) -> SessionResponse:
    try:
        _get_session(session_id).undo()
    except CONFLICT_ERRORS as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _respond(session_id)


@router.post("/sessions/{session_id}/redo", response_model=SessionResponse)
async def redo(session_id: str) -> SessionResponse:
    try:
        _get_session(session_id).redo()
    except CONFLICT_ERRORS as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _respond(session_id)


@router.post("/sessions/{session_id}/reset", response_model=SessionResponse)
async def reset(session_id: str) -> SessionResponse:
    try:
        _get_session(session_id).reset()
    except CONFLICT_ERRORS as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _respond(session_id)


@router.post("/sessions/{session_id}/save", response_model=SaveResponse)
async def save_session(session_id: str) -> SaveResponse:
    """Persist the labeled edges and close the session."""
    _get_session(session_id)
    try:
        session = await _service.save_session(session_id)
    except SaveError as e:
        logger.warning(f"Save failed for session {session_id}, kept for retry")
        raise HTTPException(status_code=502, detail=str(e))
    except CONFLICT_ERRORS as e:
        raise HTTPException(status_code=409, detail=str(e))

    totals = session.totals()
    return SaveResponse(
        measurement_id=session.measurement_id,
        edge_count=len(session.edges),
        totals=totals,
    )


@router.delete("/sessions/{session_id}", status_code=204)
async def cancel_session(session_id: str) -> None:
    """Discard a session without saving."""
    _get_session(session_id)
    try:
        _service.cancel_session(session_id)
    except CONFLICT_ERRORS as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.get("/rules", response_model=list[RuleInfo])
async def list_rules() -> list[RuleInfo]:
    """List the classification rules in evaluation order."""
    return [RuleInfo(**r) for r in _service.list_rules()]


@router.get("/edge-types", response_model=list[EdgeTypeInfo])
async def list_edge_types() -> list[EdgeTypeInfo]:
    return list(EDGE_TYPE_CATALOG.values())


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
