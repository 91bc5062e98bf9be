"""Edge classifier — resolves connectivity and runs the ordered rule table."""

from __future__ import annotations
import logging

from edgelabeler.models import (
    RoofEdge, EdgeDetection, EdgeType, DetectionContext,
    DetectionParams, ClassifierConfig, bearing_to_north,
)
from edgelabeler.core.registry import RuleRegistry, create_default_registry
from edgelabeler.core.analyzer import ConnectivityAnalyzer, find_connecting_edges

logger = logging.getLogger(__name__)

FALLBACK_CONFIDENCE = 30
FALLBACK_REASON = "Insufficient geometric information"


class EdgeClassifier:
    """
    Stateless edge classifier.

    Takes an edge and its collection, computes bearing and connections,
    and returns the detection of the first rule that applies.
    """

    def __init__(
        self,
        registry: RuleRegistry | None = None,
        params: DetectionParams | None = None,
        config: ClassifierConfig | None = None,
    ) -> None:
        self.registry = registry or create_default_registry()
        self.params = params or DetectionParams()
        self.config = config or ClassifierConfig()
        self.analyzer = ConnectivityAnalyzer(self.params.connection_tolerance)

    def detect_edge_type(self, edge: RoofEdge, all_edges: list[RoofEdge]) -> EdgeDetection:
        connection_ids = find_connecting_edges(
            edge, all_edges, self.params.connection_tolerance,
        )
        return self._classify(edge, all_edges, connection_ids)

    def auto_detect_all_edges(self, edges: list[RoofEdge]) -> list[RoofEdge]:
        """
        Classify every unlocked edge.

        Edges are processed highest elevation rank first (unknown rank
        last) and returned in that order. Locked edges pass through
        untouched; input models are never mutated.
        """
        ordered = sorted(edges, key=lambda e: -(e.elevation_rank or 0))
        graph = self.analyzer.analyze(ordered)
        by_id = {e.id: e for e in ordered}

        result: list[RoofEdge] = []
        locked = 0
        for edge in ordered:
            if edge.locked:
                result.append(edge)
                locked += 1
                continue

            detection = self._classify(edge, ordered, graph[edge.id], by_id)
            result.append(edge.model_copy(update={
                "edge_type": detection.edge_type,
                "confidence_score": detection.confidence_score,
                "detection_reason": detection.detection_reason,
                "auto_detected": True,
                "connects_to": graph[edge.id],
            }))

        logger.info(
            f"Auto-detected {len(result) - locked} edges ({locked} locked edges skipped)"
        )
        return result

    def _classify(
        self,
        edge: RoofEdge,
        all_edges: list[RoofEdge],
        connection_ids: list[str],
        by_id: dict[str, RoofEdge] | None = None,
    ) -> EdgeDetection:
        if by_id is None:
            by_id = {e.id: e for e in all_edges}
        context = DetectionContext(
            edge=edge,
            all_edges=all_edges,
            params=self.params,
            config=self.config,
            angle=bearing_to_north(edge.geometry),
            connections=[by_id[cid] for cid in connection_ids if cid in by_id],
        )

        for rule in self.registry.get_active_rules(self.config):
            if rule.applies(context):
                detection = rule.classify(context)
                logger.debug(
                    f"{edge.id}: {detection.edge_type.value} "
                    f"({detection.confidence_score}) via {rule.get_id()}"
                )
                return detection

        return EdgeDetection(
            edge_type=EdgeType.UNLABELED,
            confidence_score=FALLBACK_CONFIDENCE,
            detection_reason=FALLBACK_REASON,
        )


_default_classifier: EdgeClassifier | None = None


def _get_default_classifier() -> EdgeClassifier:
    global _default_classifier
    if _default_classifier is None:
        _default_classifier = EdgeClassifier()
    return _default_classifier


def detect_edge_type(edge: RoofEdge, all_edges: list[RoofEdge]) -> EdgeDetection:
    """Classify one edge with the default rules and thresholds."""
    return _get_default_classifier().detect_edge_type(edge, all_edges)


def auto_detect_all_edges(edges: list[RoofEdge]) -> list[RoofEdge]:
    """Classify every unlocked edge with the default rules and thresholds."""
    return _get_default_classifier().auto_detect_all_edges(edges)
