"""Display labels for the two point lists."""
import re
from typing import List, Optional, Sequence

from ..contracts.schemas import Point

TITLE_SEPARATOR = " – "


def _country(label: str) -> Optional[str]:
    parts = [p.strip() for p in label.split(",")]
    return parts[-1] if len(parts) > 1 else None


def common_country(points: Sequence[Point]) -> Optional[str]:
    """Trailing comma-separated segment shared by every label, if any."""
    if not points:
        return None
    first = _country(points[0].label)
    if not first:
        return None
    for point in points[1:]:
        if _country(point.label) != first:
            return None
    return first


def display_label(point: Point, country: Optional[str] = None) -> str:
    """'<title> – <label>' with the shared country suffix dropped."""
    text = f"{point.title}{TITLE_SEPARATOR}{point.label}" if point.title else point.label
    if country:
        text = re.sub(rf",\s*{re.escape(country)}$", "", text)
    return text


def display_labels(points: Sequence[Point], context: Optional[Sequence[Point]] = None) -> List[str]:
    """
    Labels for `points`, shortened when every point in `context`
    (default: `points` itself) ends in the same country.
    """
    country = common_country(list(context) if context is not None else list(points))
    return [display_label(p, country) for p in points]
