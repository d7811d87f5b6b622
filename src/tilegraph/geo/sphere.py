"""Great-circle helpers shared by the graph and tiling components.

Arguments are ordered longitude first, matching the vertex accessors.
"""

from __future__ import annotations

import math

EARTH_RADIUS_MILES = 3963.0


def great_circle_distance(lon_v: float, lat_v: float, lon_w: float, lat_w: float) -> float:
    """Haversine distance in miles between two lon/lat points given in degrees."""
    phi1 = math.radians(lat_v)
    phi2 = math.radians(lat_w)
    dphi = math.radians(lat_w - lat_v)
    dlambda = math.radians(lon_w - lon_v)

    a = math.sin(dphi / 2.0) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2.0) ** 2
    c = 2.0 * math.atan2(math.sqrt(a), math.sqrt(1.0 - a))
    return EARTH_RADIUS_MILES * c


def initial_bearing(lon_v: float, lat_v: float, lon_w: float, lat_w: float) -> float:
    """Initial great-circle bearing from point v to point w (degrees, -180..180)."""
    phi1 = math.radians(lat_v)
    phi2 = math.radians(lat_w)
    dlambda = math.radians(lon_w - lon_v)

    y = math.sin(dlambda) * math.cos(phi2)
    x = math.cos(phi1) * math.sin(phi2) - math.sin(phi1) * math.cos(phi2) * math.cos(dlambda)
    return math.degrees(math.atan2(y, x))
