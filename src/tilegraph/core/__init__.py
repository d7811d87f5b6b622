"""Core data models for tilegraph."""

from .models import (
    BoundingBox,
    QueryBox,
    RasterConfig,
    RasterResult,
    TileCoordinate,
    Vertex,
    Way,
)

__all__ = [
    "BoundingBox",
    "QueryBox",
    "RasterConfig",
    "RasterResult",
    "TileCoordinate",
    "Vertex",
    "Way",
]
