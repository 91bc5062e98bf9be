"""Connectivity analysis — which edges share an endpoint, and where."""

from __future__ import annotations
import math

from edgelabeler.models import RoofEdge, Junction, Point, points_match


TOLERANCE = 1e-5  # Degrees, roughly 1m at building scale


def _endpoints(edge: RoofEdge) -> tuple[Point, Point]:
    return edge.geometry[0], edge.geometry[-1]


def edges_connected(a: RoofEdge, b: RoofEdge, tolerance: float = TOLERANCE) -> bool:
    """True if any endpoint of `a` matches any endpoint of `b`."""
    return any(
        points_match(pa, pb, tolerance)
        for pa in _endpoints(a)
        for pb in _endpoints(b)
    )


def find_connecting_edges(
    edge: RoofEdge,
    all_edges: list[RoofEdge],
    tolerance: float = TOLERANCE,
) -> list[str]:
    """Ids of every other edge sharing an endpoint with `edge`, in collection order."""
    return [
        other.id
        for other in all_edges
        if other.id != edge.id and edges_connected(edge, other, tolerance)
    ]


class ConnectivityAnalyzer:
    """
    Resolves the endpoint adjacency graph for a whole edge collection.

    Endpoints are bucketed on a grid whose cell size equals the tolerance,
    so two matching points always land in the same or a neighbouring cell.
    The exact tolerance test is then applied, which keeps results identical
    to `find_connecting_edges`.
    """

    def __init__(self, tolerance: float = TOLERANCE) -> None:
        self.tolerance = tolerance

    def analyze(self, edges: list[RoofEdge]) -> dict[str, list[str]]:
        """Map of edge id to connecting edge ids."""
        index = self._build_index(edges)
        order = {e.id: i for i, e in enumerate(edges)}
        by_id = {e.id: e for e in edges}

        graph: dict[str, list[str]] = {}
        for edge in edges:
            candidates: set[str] = set()
            for pt in _endpoints(edge):
                candidates.update(self._nearby(index, pt))
            candidates.discard(edge.id)

            matches = [
                cid for cid in candidates
                if edges_connected(edge, by_id[cid], self.tolerance)
            ]
            graph[edge.id] = sorted(matches, key=order.__getitem__)
        return graph

    def apply(self, edges: list[RoofEdge]) -> list[RoofEdge]:
        """Copies of `edges` with `connects_to` recomputed."""
        graph = self.analyze(edges)
        return [e.model_copy(update={"connects_to": graph[e.id]}) for e in edges]

    def find_junctions(self, edges: list[RoofEdge]) -> list[Junction]:
        """Group endpoints where two or more edges meet."""
        anchors: list[tuple[Point, list[str]]] = []
        cells: dict[tuple[int, int], list[int]] = {}

        for edge in edges:
            for pt in _endpoints(edge):
                slot = self._find_anchor(anchors, cells, pt)
                if slot is None:
                    anchors.append((pt, [edge.id]))
                    cells.setdefault(self._cell(pt), []).append(len(anchors) - 1)
                elif edge.id not in anchors[slot][1]:
                    anchors[slot][1].append(edge.id)

        return [
            Junction(point=pt, edge_ids=ids)
            for pt, ids in anchors
            if len(ids) >= 2
        ]

    def _cell(self, pt: Point) -> tuple[int, int]:
        # Nothing can match at a non-positive tolerance; one bucket is enough
        if self.tolerance <= 0:
            return (0, 0)
        return (
            math.floor(pt.lat / self.tolerance),
            math.floor(pt.lng / self.tolerance),
        )

    def _neighbour_cells(self, pt: Point) -> list[tuple[int, int]]:
        ci, cj = self._cell(pt)
        return [(ci + di, cj + dj) for di in (-1, 0, 1) for dj in (-1, 0, 1)]

    def _build_index(self, edges: list[RoofEdge]) -> dict[tuple[int, int], set[str]]:
        index: dict[tuple[int, int], set[str]] = {}
        for edge in edges:
            for pt in _endpoints(edge):
                index.setdefault(self._cell(pt), set()).add(edge.id)
        return index

    def _nearby(self, index: dict[tuple[int, int], set[str]], pt: Point) -> set[str]:
        found: set[str] = set()
        for cell in self._neighbour_cells(pt):
            found.update(index.get(cell, ()))
        return found

    def _find_anchor(
        self,
        anchors: list[tuple[Point, list[str]]],
        cells: dict[tuple[int, int], list[int]],
        pt: Point,
    ) -> int | None:
        for cell in self._neighbour_cells(pt):
            for slot in cells.get(cell, []):
                if points_match(anchors[slot][0], pt, self.tolerance):
                    return slot
        return None
