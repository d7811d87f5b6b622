"""Tile selection interfaces for tilegraph."""

from .base import TileSelector
from .rasterer import ROOT_TILE, Rasterer

__all__ = ["ROOT_TILE", "Rasterer", "TileSelector"]
