"""Road graph construction and spatial queries."""

from .base import GraphBuilder
from .database import EmptyGraphError, GraphError, NotFoundError, SpatialGraph, clean_string

__all__ = [
    "EmptyGraphError",
    "GraphBuilder",
    "GraphError",
    "NotFoundError",
    "SpatialGraph",
    "clean_string",
]
