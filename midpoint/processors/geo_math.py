"""
Geodesy helpers: great-circle distance and planar centroid.

The centroid is a plain mean of latitudes and longitudes. That is fine
for points spread over a city or a region but drifts near the poles and
breaks across the antimeridian (a mean of 179 and -179 lands on 0).
"""
import math
from typing import Optional, Sequence

from ..contracts.schemas import Point

EARTH_RADIUS_KM = 6371.0
CENTROID_LABEL = "Geographic Center"


def distance(a: Point, b: Point) -> float:
    """Haversine distance in kilometres."""
    phi1, phi2 = math.radians(a.lat), math.radians(b.lat)
    dphi = math.radians(b.lat - a.lat)
    dlng = math.radians(b.lng - a.lng)
    h = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlng / 2) ** 2
    h = min(1.0, h)  # rounding on antipodal pairs
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_KM * c


def centroid(points: Sequence[Point]) -> Optional[Point]:
    """Mean position of the points, or None for fewer than two."""
    if len(points) < 2:
        return None
    lat = sum(p.lat for p in points) / len(points)
    lng = sum(p.lng for p in points) / len(points)
    return Point(lat=lat, lng=lng, label=CENTROID_LABEL)
