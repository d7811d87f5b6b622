"""Spherical geometry helpers."""

from .sphere import EARTH_RADIUS_MILES, great_circle_distance, initial_bearing

__all__ = ["EARTH_RADIUS_MILES", "great_circle_distance", "initial_bearing"]
