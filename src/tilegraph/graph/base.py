"""Protocol definitions for graph loading components."""

from __future__ import annotations

from typing import Protocol


class GraphBuilder(Protocol):
    """Interface a streaming map-data parser drives while reading an extract."""

    def add_vertex(self, vertex_id: int, lat: float, lon: float) -> object:
        """Register an intersection; later calls with the same id replace it."""

    def add_edge(self, a: int, b: int) -> None:
        """Connect two existing vertices in both directions."""

    def set_name(self, vertex_id: int, name: str) -> None:
        """Attach a display name to a vertex."""

    def node_name(self, name: str) -> None:
        """Name the most recently added vertex."""

    def add_way(self, way_id: int) -> object:
        """Start collecting nodes for a new way."""

    def add_way_node(self, node_id: int) -> None:
        """Append a node reference to the current way."""

    def highway_type(self, flag: str) -> None:
        """Record the highway classification of the current way."""

    def way_name(self, name: str) -> None:
        """Record the street name of the current way."""

    def add_links(self) -> None:
        """Connect consecutive nodes of the current way."""

    def prune(self) -> int:
        """Drop vertices left without neighbors once loading is finished."""
