"""Tile grid selection over a fixed quadtree pyramid."""

from __future__ import annotations

from itertools import groupby
from typing import List, Optional

from tilegraph.core.models import (
    BoundingBox,
    QueryBox,
    RasterConfig,
    RasterResult,
    TileCoordinate,
)
from tilegraph.logging import get_logger

from .base import TileSelector

LOGGER = get_logger(__name__)

ROOT_TILE = TileCoordinate(depth=0, x=0, y=0)


class Rasterer(TileSelector):
    """Pick the tiles a front end stitches together to display a query box.

    The chosen tiles come from the coarsest depth whose longitudinal distance
    per pixel (LonDPP) does not exceed the query's, and together they cover
    every part of the query box that lies inside the pyramid.
    """

    def __init__(self, config: Optional[RasterConfig] = None) -> None:
        self._config = config or RasterConfig()
        cfg = self._config
        self._mid_lon = (cfg.root_lrlon - cfg.root_ullon) / 2 + cfg.root_ullon
        self._mid_lat = cfg.root_ullat - (cfg.root_ullat - cfg.root_lrlat) / 2

    @property
    def config(self) -> RasterConfig:
        return self._config

    def lon_dpp(self, ullon: float, lrlon: float, width: float) -> float:
        return abs(lrlon - ullon) * self._config.lon_scale / width

    def find_depth(self, ullon: float, lrlon: float, width: float) -> int:
        if width <= 0:
            LOGGER.warning("non-positive viewport width; using root depth", extra={"width": width})
            return 0
        cfg = self._config
        root_dpp = self.lon_dpp(cfg.root_ullon, cfg.root_lrlon, cfg.tile_size)
        query_dpp = self.lon_dpp(ullon, lrlon, width)
        depth = 0
        while root_dpp > query_dpp and depth < cfg.max_depth:
            root_dpp /= 2
            depth += 1
        return depth

    def tile_bounds(self, x: int, y: int, depth: int) -> BoundingBox:
        cfg = self._config
        if depth == 0:
            return cfg.root_bounds
        # Half-span over 2**(depth - 1) gives a full tile width at this depth.
        lon_step = (cfg.root_ullon - self._mid_lon) / 2 ** (depth - 1)
        lat_step = (cfg.root_ullat - self._mid_lat) / 2 ** (depth - 1)
        ullat = cfg.root_ullat - lat_step * y
        return BoundingBox(
            ullon=cfg.root_ullon - lon_step * x,
            ullat=ullat,
            lrlon=cfg.root_ullon - lon_step * (x + 1),
            lrlat=ullat - lat_step,
        )

    @staticmethod
    def max_index(depth: int) -> int:
        """Largest x/y index available at ``depth``.

        Depths of 4 and deeper ship one row and one column short of a full quadtree.
        """

        if depth < 4:
            return 2**depth - 1
        return 2**depth - 2

    def select_grid(self, query: QueryBox, depth: int) -> List[List[TileCoordinate]]:
        bounds = query.bounds
        last = self.max_index(depth)
        included = [
            TileCoordinate(depth=depth, x=x, y=y)
            for y in range(last + 1)
            for x in range(last + 1)
            if self.tile_bounds(x, y, depth).intersects(bounds)
        ]
        if not included:
            LOGGER.warning(
                "query intersects no tiles; falling back to root tile",
                extra={"depth": depth, "query": bounds},
            )
            return [[ROOT_TILE]]
        return [list(row) for _, row in groupby(included, key=lambda tile: tile.y)]

    def render_grid(self, query: QueryBox, depth: int) -> List[List[str]]:
        return [[tile.filename for tile in row] for row in self.select_grid(query, depth)]

    def query_success(self, query: QueryBox) -> bool:
        cfg = self._config
        return not (
            query.ullon < cfg.root_ullon
            or query.ullat > cfg.root_ullat
            or query.lrlon < query.ullon
            or query.lrlat > query.ullat
            or query.lrlon > cfg.root_lrlon
            or query.lrlat < cfg.root_lrlat
        )

    def get_map_raster(self, query: QueryBox) -> RasterResult:
        """Select the tile grid for ``query`` and report its extent.

        Malformed or out-of-pyramid queries still yield a grid; ``query_success``
        tells the caller whether to trust it.
        """

        success = self.query_success(query)
        if not success:
            LOGGER.info("query box outside pyramid or inverted", extra={"query": query.bounds})

        depth = self.find_depth(query.ullon, query.lrlon, query.width)
        grid = self.select_grid(query, depth)
        first = grid[0][0]
        last = grid[-1][-1]
        upper_left = self.tile_bounds(first.x, first.y, first.depth)
        lower_right = self.tile_bounds(last.x, last.y, last.depth)

        LOGGER.debug(
            "raster selected",
            extra={"depth": first.depth, "rows": len(grid), "columns": len(grid[0])},
        )
        return RasterResult(
            render_grid=[[tile.filename for tile in row] for row in grid],
            raster_ul_lon=upper_left.ullon,
            raster_ul_lat=upper_left.ullat,
            raster_lr_lon=lower_right.lrlon,
            raster_lr_lat=lower_right.lrlat,
            depth=first.depth,
            query_success=success,
        )
