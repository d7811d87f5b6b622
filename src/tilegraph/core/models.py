"""Dataclasses describing core tilegraph entities."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

_TILE_NAME = re.compile(r"^d(\d+)_x(\d+)_y(\d+)\.png$")


@dataclass(eq=False)
class Vertex:
    """A road intersection; identity is the id alone."""

    id: int
    lon: float
    lat: float
    name: Optional[str] = None
    neighbor_ids: List[int] = field(default_factory=list)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vertex):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)


@dataclass
class Way:
    """A way under construction by a streaming loader."""

    id: int
    node_ids: List[int] = field(default_factory=list)
    highway_type: Optional[str] = None
    name: Optional[str] = None


@dataclass(frozen=True)
class BoundingBox:
    """Longitude/latitude rectangle addressed by its upper-left and lower-right corners."""

    ullon: float
    ullat: float
    lrlon: float
    lrlat: float

    def intersects(self, other: "BoundingBox") -> bool:
        """Return False only when one box lies wholly left, right, above or below the other."""

        return not (
            self.lrlon <= other.ullon
            or self.lrlat >= other.ullat
            or other.lrlon <= self.ullon
            or other.lrlat >= self.ullat
        )


@dataclass(frozen=True)
class QueryBox:
    """A caller-supplied raster request; corner ordering is not enforced."""

    ullon: float
    ullat: float
    lrlon: float
    lrlat: float
    width: float

    @property
    def bounds(self) -> BoundingBox:
        return BoundingBox(self.ullon, self.ullat, self.lrlon, self.lrlat)

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> "QueryBox":
        """Build a query from request parameters keyed ``ullon, ullat, lrlon, lrlat, w``."""

        missing = [key for key in ("ullon", "ullat", "lrlon", "lrlat", "w") if key not in params]
        if missing:
            raise ValueError(f"missing query parameters: {', '.join(missing)}")
        return cls(
            ullon=float(params["ullon"]),
            ullat=float(params["ullat"]),
            lrlon=float(params["lrlon"]),
            lrlat=float(params["lrlat"]),
            width=float(params["w"]),
        )


@dataclass(frozen=True)
class TileCoordinate:
    """Address of one tile in the pre-rendered pyramid."""

    depth: int
    x: int
    y: int

    @property
    def filename(self) -> str:
        return f"d{self.depth}_x{self.x}_y{self.y}.png"

    @classmethod
    def from_filename(cls, name: str) -> "TileCoordinate":
        match = _TILE_NAME.match(name)
        if match is None:
            raise ValueError(f"Not a tile filename: {name!r}")
        depth, x, y = (int(group) for group in match.groups())
        return cls(depth=depth, x=x, y=y)


@dataclass(frozen=True)
class RasterConfig:
    """Fixed geometry of the tile pyramid served by a :class:`~tilegraph.tiling.Rasterer`."""

    root_ullon: float = -122.2998046875
    root_ullat: float = 37.892195547244356
    root_lrlon: float = -122.2119140625
    root_lrlat: float = 37.82280243352756
    tile_size: int = 256
    lon_scale: float = 288200.0
    max_depth: int = 7

    def __post_init__(self) -> None:
        if self.tile_size <= 0:
            raise ValueError("tile_size must be positive")
        if self.max_depth < 0:
            raise ValueError("max_depth must be non-negative")
        if self.root_lrlon <= self.root_ullon or self.root_ullat <= self.root_lrlat:
            raise ValueError("root bounding box corners are inverted")

    @property
    def root_bounds(self) -> BoundingBox:
        return BoundingBox(self.root_ullon, self.root_ullat, self.root_lrlon, self.root_lrlat)


@dataclass
class RasterResult:
    """Tiles and geographic extent answering a raster query."""

    render_grid: List[List[str]]
    raster_ul_lon: float
    raster_ul_lat: float
    raster_lr_lon: float
    raster_lr_lat: float
    depth: int
    query_success: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "render_grid": [list(row) for row in self.render_grid],
            "raster_ul_lon": self.raster_ul_lon,
            "raster_ul_lat": self.raster_ul_lat,
            "raster_lr_lon": self.raster_lr_lon,
            "raster_lr_lat": self.raster_lr_lat,
            "depth": self.depth,
            "query_success": self.query_success,
        }
