"""Tile selection and road-graph spatial queries."""

from __future__ import annotations

import importlib
from typing import Any

__all__ = [
    "BoundingBox",
    "ConfigLoader",
    "EmptyGraphError",
    "GraphBuilder",
    "NotFoundError",
    "QueryBox",
    "RasterConfig",
    "RasterResult",
    "Rasterer",
    "ServiceConfig",
    "SpatialGraph",
    "TileCoordinate",
    "TileSelector",
    "Vertex",
    "great_circle_distance",
    "initial_bearing",
]

_MODULE_MAP = {
    "BoundingBox": ("tilegraph.core", "BoundingBox"),
    "ConfigLoader": ("tilegraph.config", "ConfigLoader"),
    "EmptyGraphError": ("tilegraph.graph", "EmptyGraphError"),
    "GraphBuilder": ("tilegraph.graph", "GraphBuilder"),
    "NotFoundError": ("tilegraph.graph", "NotFoundError"),
    "QueryBox": ("tilegraph.core", "QueryBox"),
    "RasterConfig": ("tilegraph.core", "RasterConfig"),
    "RasterResult": ("tilegraph.core", "RasterResult"),
    "Rasterer": ("tilegraph.tiling", "Rasterer"),
    "ServiceConfig": ("tilegraph.config", "ServiceConfig"),
    "SpatialGraph": ("tilegraph.graph", "SpatialGraph"),
    "TileCoordinate": ("tilegraph.core", "TileCoordinate"),
    "TileSelector": ("tilegraph.tiling", "TileSelector"),
    "Vertex": ("tilegraph.core", "Vertex"),
    "great_circle_distance": ("tilegraph.geo", "great_circle_distance"),
    "initial_bearing": ("tilegraph.geo", "initial_bearing"),
}


def __getattr__(name: str) -> Any:
    if name not in _MODULE_MAP:
        raise AttributeError(f"module 'tilegraph' has no attribute '{name}'")
    module_name, attr = _MODULE_MAP[name]
    module = importlib.import_module(module_name)
    return getattr(module, attr)
