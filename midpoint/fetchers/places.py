"""
Conversion of place-lookup results into Points.

Accepts the Google Places shape
    {"place_id", "name", "formatted_address", "geometry": {"location": {"lat", "lng"}}}
as well as a flat {"lat", "lng", "label", "id"} dict. Anything without
usable coordinates is dropped.
"""

from typing import Any, Dict, Optional

from pydantic import ValidationError

from ..contracts.schemas import Point
from ..utils.logger import logger


def _location(result: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    geometry = result.get("geometry")
    if isinstance(geometry, dict):
        location = geometry.get("location")
        return location if isinstance(location, dict) else None
    if "lat" in result and "lng" in result:
        return result
    return None


def point_from_place(result: Any) -> Optional[Point]:
    """Build a Point from a lookup result, or None when it has no geometry."""
    if not isinstance(result, dict):
        return None

    location = _location(result)
    if location is None or location.get("lat") is None or location.get("lng") is None:
        logger.debug("Place result without geometry dropped")
        return None

    title = result.get("name") or result.get("title")
    label = result.get("formatted_address") or result.get("label") or title or ""
    place_id = result.get("place_id") or result.get("id")

    try:
        return Point(
            lat=location["lat"],
            lng=location["lng"],
            label=label,
            title=title or None,
            id=str(place_id) if place_id is not None else None,
        )
    except ValidationError as e:
        logger.debug(f"Place result with invalid coordinates dropped: {e.error_count()} errors")
        return None
