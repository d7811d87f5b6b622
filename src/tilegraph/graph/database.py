"""In-memory road graph with spatial lookups."""

from __future__ import annotations

import re
from typing import Dict, List, Optional

from tilegraph.core.models import Vertex, Way
from tilegraph.geo import great_circle_distance, initial_bearing
from tilegraph.logging import get_logger

from .base import GraphBuilder

LOGGER = get_logger(__name__)

_NON_LETTERS = re.compile(r"[^a-zA-Z ]")


class GraphError(Exception):
    """Base class for graph lookup failures."""


class NotFoundError(GraphError, LookupError):
    """Raised when a vertex id is not present in the graph."""

    def __init__(self, vertex_id: int) -> None:
        super().__init__(f"Vertex not found: {vertex_id}")
        self.vertex_id = vertex_id


class EmptyGraphError(GraphError):
    """Raised when a nearest-vertex search runs against a graph with no vertices."""


def clean_string(value: str) -> str:
    """Strip everything but letters and spaces, then lowercase."""

    return _NON_LETTERS.sub("", value).lower()


class SpatialGraph(GraphBuilder):
    """Intersections and the road segments joining them.

    A loader populates the graph through the :class:`GraphBuilder` calls and
    then calls :meth:`prune` once. After that the graph is only read.
    """

    def __init__(self) -> None:
        self._vertices: Dict[int, Vertex] = {}
        self._last_vertex: Optional[Vertex] = None
        self._way: Optional[Way] = None
        self._pruned = False

    def __len__(self) -> int:
        return len(self._vertices)

    def __contains__(self, vertex_id: object) -> bool:
        return vertex_id in self._vertices

    # ------------------------------------------------------------------
    # Loader interface
    # ------------------------------------------------------------------
    def add_vertex(self, vertex_id: int, lat: float, lon: float) -> Vertex:
        vertex = Vertex(id=vertex_id, lon=lon, lat=lat)
        self._vertices[vertex_id] = vertex
        self._last_vertex = vertex
        return vertex

    def add_edge(self, a: int, b: int) -> None:
        first = self._vertex(a)
        second = self._vertex(b)
        first.neighbor_ids.append(b)
        second.neighbor_ids.append(a)

    def set_name(self, vertex_id: int, name: str) -> None:
        self._vertex(vertex_id).name = name

    def node_name(self, name: str) -> None:
        if self._last_vertex is None:
            raise RuntimeError("node_name called before any vertex was added")
        self._last_vertex.name = name

    def add_way(self, way_id: int) -> Way:
        self._way = Way(id=way_id)
        return self._way

    def add_way_node(self, node_id: int) -> None:
        self._current_way().node_ids.append(node_id)

    def highway_type(self, flag: str) -> None:
        self._current_way().highway_type = flag

    def way_name(self, name: str) -> None:
        self._current_way().name = name

    def add_links(self) -> None:
        nodes = self._current_way().node_ids
        for a, b in zip(nodes, nodes[1:]):
            self.add_edge(a, b)

    def prune(self) -> int:
        if self._pruned:
            raise RuntimeError("graph has already been pruned")
        isolated = [vid for vid, vertex in self._vertices.items() if not vertex.neighbor_ids]
        for vid in isolated:
            del self._vertices[vid]
        self._pruned = True
        self._last_vertex = None
        self._way = None
        LOGGER.info(
            "pruned isolated vertices",
            extra={"removed": len(isolated), "remaining": len(self._vertices)},
        )
        return len(isolated)

    # ------------------------------------------------------------------
    # Read interface
    # ------------------------------------------------------------------
    def vertices(self) -> List[int]:
        return list(self._vertices)

    def adjacent(self, vertex_id: int) -> List[int]:
        """Return a copy of the neighbor ids of ``vertex_id``."""

        return list(self._vertex(vertex_id).neighbor_ids)

    def distance(self, v: int, w: int) -> float:
        """Great-circle distance in miles between two vertices."""

        first = self._vertex(v)
        second = self._vertex(w)
        return great_circle_distance(first.lon, first.lat, second.lon, second.lat)

    def bearing(self, v: int, w: int) -> float:
        """Initial bearing in degrees from vertex ``v`` towards ``w``."""

        first = self._vertex(v)
        second = self._vertex(w)
        return initial_bearing(first.lon, first.lat, second.lon, second.lat)

    def closest(self, lon: float, lat: float) -> int:
        """Return the id of the vertex nearest to the given point.

        Ties resolve to the vertex encountered first.
        """

        if not self._vertices:
            raise EmptyGraphError("cannot search for the closest vertex in an empty graph")
        best_id: Optional[int] = None
        best_distance = float("inf")
        for vertex in self._vertices.values():
            current = great_circle_distance(lon, lat, vertex.lon, vertex.lat)
            if best_id is None or current < best_distance:
                best_id = vertex.id
                best_distance = current
        assert best_id is not None
        return best_id

    def lon(self, vertex_id: int) -> float:
        return self._vertex(vertex_id).lon

    def lat(self, vertex_id: int) -> float:
        return self._vertex(vertex_id).lat

    def name(self, vertex_id: int) -> Optional[str]:
        return self._vertex(vertex_id).name

    def find_by_name(self, name: str) -> List[int]:
        """Ids of vertices whose cleaned name matches the cleaned query."""

        target = clean_string(name)
        return [
            vertex.id
            for vertex in self._vertices.values()
            if vertex.name is not None and clean_string(vertex.name) == target
        ]

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _vertex(self, vertex_id: int) -> Vertex:
        try:
            return self._vertices[vertex_id]
        except KeyError:
            raise NotFoundError(vertex_id) from None

    def _current_way(self) -> Way:
        if self._way is None:
            raise RuntimeError("no way in progress; call add_way first")
        return self._way
