"""Edge extraction — turns facet outlines into a flat edge collection."""

from __future__ import annotations
import logging

from edgelabeler.models import (
    Facet, RoofEdge, Point, points_match, geodesic_length, bearing_to_north,
)
from edgelabeler.core.analyzer import ConnectivityAnalyzer, TOLERANCE

logger = logging.getLogger(__name__)


class EdgeExtractor:
    """
    Derives edges from facet boundaries.

    Consecutive vertex pairs become edges. A boundary drawn by two
    adjacent facets (same endpoints, either direction) collapses into a
    single edge marked `shared`.
    """

    def __init__(self, tolerance: float = TOLERANCE) -> None:
        self.tolerance = tolerance
        self.analyzer = ConnectivityAnalyzer(tolerance)

    def extract(
        self,
        facets: list[Facet],
        measurement_id: str = "",
        elevation_ranks: dict[str, int] | None = None,
    ) -> list[RoofEdge]:
        edges: list[RoofEdge] = []

        for facet in facets:
            for start, end in facet.boundary_segments():
                existing = self._find_duplicate(edges, start, end)
                if existing is not None:
                    edges[existing] = edges[existing].model_copy(update={
                        "shared": True,
                        "facet_ids": edges[existing].facet_ids + [facet.id],
                    })
                    continue

                display_order = len(edges)
                geometry = [start, end]
                edges.append(RoofEdge(
                    id=f"edge-{display_order}",
                    measurement_id=measurement_id,
                    geometry=geometry,
                    length_ft=geodesic_length(geometry),
                    angle_to_north=bearing_to_north(geometry),
                    display_order=display_order,
                    facet_ids=[facet.id],
                ))

        if elevation_ranks:
            edges = [
                e.model_copy(update={"elevation_rank": elevation_ranks[e.id]})
                if e.id in elevation_ranks else e
                for e in edges
            ]

        edges = self.analyzer.apply(edges)
        shared = sum(1 for e in edges if e.shared)
        logger.info(
            f"Extracted {len(edges)} edges from {len(facets)} facets "
            f"({shared} shared)"
        )
        return edges

    def _find_duplicate(self, edges: list[RoofEdge], start: Point, end: Point) -> int | None:
        tol = self.tolerance
        for i, edge in enumerate(edges):
            a, b = edge.start, edge.end
            if (points_match(a, start, tol) and points_match(b, end, tol)) or (
                points_match(a, end, tol) and points_match(b, start, tol)
            ):
                return i
        return None
