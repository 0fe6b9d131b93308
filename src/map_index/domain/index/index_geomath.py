"""
Great-circle helpers on a spherical Earth.

Distances are in miles (mean radius 3963 mi), bearings in degrees in (-180, 180].
See https://www.movable-type.co.uk/scripts/latlong.html.
"""

import math

import numpy as np

from map_index.domain.entities.geography import Point

EARTH_RADIUS_MI = 3963.0


def distance_mi(a: Point, b: Point) -> float:
    """Haversine distance between two points."""
    phi1, phi2 = math.radians(a.lat), math.radians(b.lat)
    dphi = math.radians(b.lat - a.lat)
    dlambda = math.radians(b.lon - a.lon)

    h = math.sin(dphi / 2.0) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2.0) ** 2
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_MI * c


def bearing_deg(a: Point, b: Point) -> float:
    """Initial bearing from a to b along the great circle."""
    phi1, phi2 = math.radians(a.lat), math.radians(b.lat)
    dlambda = math.radians(b.lon - a.lon)

    y = math.sin(dlambda) * math.cos(phi2)
    x = math.cos(phi1) * math.sin(phi2) - math.sin(phi1) * math.cos(phi2) * math.cos(dlambda)
    return math.degrees(math.atan2(y, x))


def distance_mi_many(p: Point, lons: np.ndarray, lats: np.ndarray) -> np.ndarray:
    """Vectorised distance_mi from one point to arrays of coordinates."""
    phi1 = math.radians(p.lat)
    phi2 = np.radians(lats)
    dphi = np.radians(lats - p.lat)
    dlambda = np.radians(lons - p.lon)

    h = np.sin(dphi / 2.0) ** 2 + math.cos(phi1) * np.cos(phi2) * np.sin(dlambda / 2.0) ** 2
    c = 2 * np.arctan2(np.sqrt(h), np.sqrt(1 - h))
    return EARTH_RADIUS_MI * c
