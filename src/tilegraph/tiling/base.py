"""Protocol definitions for tile selection components."""

from __future__ import annotations

from typing import List, Protocol

from tilegraph.core.models import BoundingBox, QueryBox, RasterResult, TileCoordinate


class TileSelector(Protocol):
    """Interface for choosing pre-rendered tiles that cover a query box."""

    def find_depth(self, ullon: float, lrlon: float, width: float) -> int:
        """Return the coarsest depth whose resolution satisfies the viewport."""

    def tile_bounds(self, x: int, y: int, depth: int) -> BoundingBox:
        """Return the geographic extent of one tile."""

    def select_grid(self, query: QueryBox, depth: int) -> List[List[TileCoordinate]]:
        """Return the row-major grid of tiles intersecting the query."""

    def get_map_raster(self, query: QueryBox) -> RasterResult:
        """Answer a raster query end to end."""
