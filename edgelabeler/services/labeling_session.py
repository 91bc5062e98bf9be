"""Labeling session — the mutable working set of edges plus undo/redo history.

A session starts from facet outlines, then moves through repeated
auto-detect passes, manual relabels and bulk accepts until it is saved
or cancelled:

    idle -> detecting -> reviewing <-> editing -> saving -> saved
                                                        \\-> cancelled

Every mutating action pushes one deep-copied snapshot of the edge list.
Pushing after an undo discards the undone future.
"""

from __future__ import annotations
import logging
from enum import Enum

from pydantic import BaseModel

from edgelabeler.models import (
    Facet, RoofEdge, EdgeType, Point, Junction, DetectionParams,
    MeasurementEdgesPayload, EdgeTotals, points_match,
    geodesic_length, bearing_to_north,
)
from edgelabeler.core.classifier import EdgeClassifier
from edgelabeler.core.extractor import EdgeExtractor
from edgelabeler.core.analyzer import ConnectivityAnalyzer
from edgelabeler.services.edge_store import EdgeStore
from edgelabeler.services.errors import (
    EdgeNotFoundError, SessionClosedError, SessionBusyError, SaveError,
)

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    IDLE = "idle"
    DETECTING = "detecting"
    REVIEWING = "reviewing"
    EDITING = "editing"
    SAVING = "saving"
    SAVED = "saved"
    CANCELLED = "cancelled"


CLOSED_STATES = (SessionState.SAVED, SessionState.CANCELLED)


class SessionSummary(BaseModel):
    """Progress figures for the review panel."""
    total: int
    labeled: int
    unlabeled: int
    auto_detected: int          # Suggestions not yet accepted
    high_confidence: int        # ... of which at or above the threshold
    user_labeled: int
    counts: dict[EdgeType, int]
    progress: float             # labeled / total, 0 when empty


class ReviewGroups(BaseModel):
    """Edge ids grouped the way a reviewer walks through them."""
    auto_detected: dict[EdgeType, list[str]] = {}
    user_labeled: dict[EdgeType, list[str]] = {}
    unlabeled: list[str] = []


def _snapshot(edges: list[RoofEdge]) -> list[RoofEdge]:
    return [e.model_copy(deep=True) for e in edges]


class LabelingSession:
    """Owns one measurement's edge collection while a user labels it."""

    def __init__(
        self,
        measurement_id: str,
        edges: list[RoofEdge],
        params: DetectionParams | None = None,
        classifier: EdgeClassifier | None = None,
    ) -> None:
        self.measurement_id = measurement_id
        self.params = params or DetectionParams()
        self.classifier = classifier or EdgeClassifier(params=self.params)
        self.analyzer = ConnectivityAnalyzer(self.params.connection_tolerance)
        self.state = SessionState.IDLE

        self._edges: list[RoofEdge] = _snapshot(edges)
        self._history: list[list[RoofEdge]] = [_snapshot(self._edges)]
        self._index = 0

    @classmethod
    def from_facets(
        cls,
        measurement_id: str,
        facets: list[Facet],
        elevation_ranks: dict[str, int] | None = None,
        params: DetectionParams | None = None,
        classifier: EdgeClassifier | None = None,
    ) -> LabelingSession:
        params = params or DetectionParams()
        extractor = EdgeExtractor(params.connection_tolerance)
        edges = extractor.extract(facets, measurement_id, elevation_ranks)
        logger.info(f"Started labeling session for measurement {measurement_id}")
        return cls(measurement_id, edges, params=params, classifier=classifier)

    # -- Read access -------------------------------------------------------

    @property
    def edges(self) -> list[RoofEdge]:
        """Deep copy of the current edges, in display order."""
        return _snapshot(self._edges)

    @property
    def history_index(self) -> int:
        return self._index

    @property
    def history_length(self) -> int:
        return len(self._history)

    @property
    def can_undo(self) -> bool:
        return self._index > 0

    @property
    def can_redo(self) -> bool:
        return self._index < len(self._history) - 1

    @property
    def is_closed(self) -> bool:
        return self.state in CLOSED_STATES

    def get_edge(self, edge_id: str) -> RoofEdge:
        return self._edges[self._position(edge_id)].model_copy(deep=True)

    def summary(self) -> SessionSummary:
        threshold = self.params.high_confidence_threshold
        counts = {t: 0 for t in EdgeType}
        for edge in self._edges:
            counts[edge.edge_type] += 1

        suggestions = [e for e in self._edges if e.auto_detected and not e.locked]
        total = len(self._edges)
        unlabeled = counts[EdgeType.UNLABELED]
        return SessionSummary(
            total=total,
            labeled=total - unlabeled,
            unlabeled=unlabeled,
            auto_detected=len(suggestions),
            high_confidence=sum(1 for e in suggestions if e.confidence_score >= threshold),
            user_labeled=sum(1 for e in self._edges if e.locked),
            counts=counts,
            progress=(total - unlabeled) / total if total else 0.0,
        )

    def review_groups(self) -> ReviewGroups:
        groups = ReviewGroups()
        for edge in self._edges:
            if edge.edge_type == EdgeType.UNLABELED:
                groups.unlabeled.append(edge.id)
            elif edge.locked or not edge.auto_detected:
                groups.user_labeled.setdefault(edge.edge_type, []).append(edge.id)
            else:
                groups.auto_detected.setdefault(edge.edge_type, []).append(edge.id)
        return groups

    def totals(self) -> EdgeTotals:
        return EdgeTotals.from_edges(self._edges)

    def junctions(self) -> list[Junction]:
        """Points where two or more of the current edges meet."""
        return self.analyzer.find_junctions(self._edges)

    # -- Transitions -------------------------------------------------------

    def auto_detect(self) -> list[RoofEdge]:
        """Classify every unlocked edge and record one history entry."""
        self._ensure_open()
        self.state = SessionState.DETECTING
        detected = self.classifier.auto_detect_all_edges(self._edges)
        self._commit(sorted(detected, key=lambda e: e.display_order))
        self.state = SessionState.REVIEWING
        return self.edges

    def relabel(self, edge_id: str, edge_type: EdgeType) -> RoofEdge:
        """Set an edge's type by hand. The edge is locked from then on."""
        self._ensure_open()
        pos = self._position(edge_id)
        self.state = SessionState.EDITING

        updated = list(self._edges)
        updated[pos] = updated[pos].model_copy(update={
            "edge_type": EdgeType(edge_type),
            "user_modified": True,
            "auto_detected": False,
        })
        self._commit(updated)
        self.state = SessionState.REVIEWING
        logger.debug(f"{edge_id} relabeled as {EdgeType(edge_type).value}")
        return self.get_edge(edge_id)

    def accept_high_confidence(self) -> int:
        """Lock suggestions at or above the high-confidence threshold."""
        return self._accept(self.params.high_confidence_threshold)

    def accept_all_suggestions(self) -> int:
        """Lock every pending suggestion."""
        return self._accept(None)

    def _accept(self, min_confidence: int | None) -> int:
        self._ensure_open()
        accepted = 0
        updated: list[RoofEdge] = []
        for edge in self._edges:
            pending = edge.auto_detected and not edge.locked
            if pending and (min_confidence is None or edge.confidence_score >= min_confidence):
                updated.append(edge.model_copy(update={"user_modified": True}))
                accepted += 1
            else:
                updated.append(edge)

        self._commit(updated)
        logger.info(f"Accepted {accepted} suggestions")
        return accepted

    def reset(self) -> None:
        """Clear every label, lock and detection result."""
        self._ensure_open()
        self._commit([
            e.model_copy(update={
                "edge_type": EdgeType.UNLABELED,
                "auto_detected": False,
                "confidence_score": 0,
                "user_modified": False,
                "detection_reason": None,
            })
            for e in self._edges
        ])
        self.state = SessionState.IDLE

    def set_elevation_ranks(self, ranks: dict[str, int]) -> None:
        """Attach externally supplied elevation ranks (1 = highest)."""
        self._ensure_open()
        for edge_id in ranks:
            self._position(edge_id)
        self._commit([
            e.model_copy(update={"elevation_rank": ranks[e.id]}) if e.id in ranks else e
            for e in self._edges
        ])

    def move_vertex(self, old: Point, new: Point) -> int:
        """
        Move every edge endpoint at `old` to `new`.

        Lengths, bearings and connectivity are recomputed. Returns the
        number of edges touched; nothing is recorded when none match.
        """
        self._ensure_open()
        tol = self.params.connection_tolerance
        touched = 0
        updated: list[RoofEdge] = []
        for edge in self._edges:
            if not any(points_match(p, old, tol) for p in edge.geometry):
                updated.append(edge)
                continue
            geometry = [new if points_match(p, old, tol) else p for p in edge.geometry]
            updated.append(edge.model_copy(update={
                "geometry": geometry,
                "length_ft": geodesic_length(geometry),
                "angle_to_north": bearing_to_north(geometry),
            }))
            touched += 1

        if touched:
            self._commit(self.analyzer.apply(updated))
        return touched

    def undo(self) -> bool:
        self._ensure_open()
        if self._index == 0:
            return False
        self._index -= 1
        self._edges = _snapshot(self._history[self._index])
        return True

    def redo(self) -> bool:
        self._ensure_open()
        if self._index >= len(self._history) - 1:
            return False
        self._index += 1
        self._edges = _snapshot(self._history[self._index])
        return True

    async def save(self, store: EdgeStore) -> MeasurementEdgesPayload:
        """
        Hand the edges to `store`.

        On failure the session goes back to its previous state with its
        edges untouched, so the caller may retry.
        """
        self._ensure_open()
        previous = self.state
        payload = MeasurementEdgesPayload.from_edges(self.measurement_id, self._edges)

        self.state = SessionState.SAVING
        try:
            await store.save_edges(payload)
        except Exception as e:
            self.state = previous
            logger.error(f"Saving measurement {self.measurement_id} failed: {e}")
            raise SaveError(f"Could not save measurement {self.measurement_id}: {e}") from e

        self.state = SessionState.SAVED
        logger.info(
            f"Saved {len(payload.edges)} edges for measurement {self.measurement_id}"
        )
        return payload

    def cancel(self) -> None:
        self._ensure_open()
        self.state = SessionState.CANCELLED
        logger.info(f"Cancelled labeling session for measurement {self.measurement_id}")

    # -- Internals ---------------------------------------------------------

    def _commit(self, edges: list[RoofEdge]) -> None:
        self._edges = edges
        del self._history[self._index + 1:]
        self._history.append(_snapshot(edges))
        self._index = len(self._history) - 1

    def _position(self, edge_id: str) -> int:
        for i, edge in enumerate(self._edges):
            if edge.id == edge_id:
                return i
        raise EdgeNotFoundError(edge_id)

    def _ensure_open(self) -> None:
        if self.is_closed:
            raise SessionClosedError(
                f"Session for measurement {self.measurement_id} is {self.state.value}"
            )
        if self.state == SessionState.SAVING:
            raise SessionBusyError(
                f"Session for measurement {self.measurement_id} is being saved"
            )
