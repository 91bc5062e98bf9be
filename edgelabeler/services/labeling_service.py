"""High-level labeling service — facade for the API layer."""

from __future__ import annotations

from edgelabeler.models import (
    Facet, RoofEdge, DetectionParams, ClassifierConfig,
)
from edgelabeler.core.classifier import EdgeClassifier
from edgelabeler.core.extractor import EdgeExtractor
from edgelabeler.core.registry import RuleRegistry, create_default_registry
from edgelabeler.services.edge_store import EdgeStore, InMemoryEdgeStore
from edgelabeler.services.labeling_session import LabelingSession
from edgelabeler.services.session_manager import SessionManager


class LabelingService:
    """Builds sessions and classifiers from a shared rule registry."""

    def __init__(
        self,
        registry: RuleRegistry | None = None,
        store: EdgeStore | None = None,
        max_sessions: int = 100,
    ) -> None:
        self.registry = registry or create_default_registry()
        self.store = store or InMemoryEdgeStore()
        self.sessions = SessionManager(max_sessions)

    def classifier(
        self,
        params: DetectionParams | None = None,
        config: ClassifierConfig | None = None,
    ) -> EdgeClassifier:
        return EdgeClassifier(self.registry, params, config)

    def classify_facets(
        self,
        facets: list[Facet],
        measurement_id: str = "",
        elevation_ranks: dict[str, int] | None = None,
        params: DetectionParams | None = None,
        config: ClassifierConfig | None = None,
    ) -> list[RoofEdge]:
        """One-shot extraction and classification, no session kept."""
        if params is None:
            params = DetectionParams()
        edges = EdgeExtractor(params.connection_tolerance).extract(
            facets, measurement_id, elevation_ranks,
        )
        detected = self.classifier(params, config).auto_detect_all_edges(edges)
        return sorted(detected, key=lambda e: e.display_order)

    def start_session(
        self,
        measurement_id: str,
        facets: list[Facet],
        elevation_ranks: dict[str, int] | None = None,
        params: DetectionParams | None = None,
        config: ClassifierConfig | None = None,
    ) -> tuple[str, LabelingSession]:
        if params is None:
            params = DetectionParams()
        session = LabelingSession.from_facets(
            measurement_id, facets, elevation_ranks,
            params=params, classifier=self.classifier(params, config),
        )
        return self.sessions.add(session), session

    async def save_session(self, session_id: str) -> LabelingSession:
        session = self.sessions.get(session_id)
        await session.save(self.store)
        self.sessions.discard(session_id)
        return session

    def cancel_session(self, session_id: str) -> None:
        self.sessions.get(session_id).cancel()
        self.sessions.discard(session_id)

    def list_rules(self) -> list[dict[str, str]]:
        return [
            {"id": r.get_id(), "name": r.get_name()}
            for r in self.registry.list_rules()
        ]
