"""
Marker reconciliation

Turns the current lists and derived points into marker instructions,
and keeps the renderer's live markers in step with them.
"""

from typing import Any, Dict, List, Optional, Sequence

from ..contracts.interfaces import MarkerRenderer
from ..contracts.schemas import Marker, MarkerRole, Point
from ..utils.logger import logger
from .geo_math import CENTROID_LABEL

MOST_CENTRAL_TITLE = "Most Central"
CENTROID_TITLE = CENTROID_LABEL


def build_markers(addresses: Sequence[Point], candidates: Sequence[Point],
                  centroid: Optional[Point], most_central: Optional[Point]) -> List[Marker]:
    """
    One marker per address, one per candidate other than the most
    central one, then the most-central and centroid markers when defined.
    """
    markers = [Marker(lat=p.lat, lng=p.lng, role=MarkerRole.ADDRESS, title=p.label) for p in addresses]

    for candidate in candidates:
        if most_central is not None and candidate.same_location(most_central):
            continue
        markers.append(Marker(lat=candidate.lat, lng=candidate.lng, role=MarkerRole.CANDIDATE, title=candidate.label))

    if most_central is not None:
        markers.append(Marker(lat=most_central.lat, lng=most_central.lng,
                              role=MarkerRole.MOST_CENTRAL, title=MOST_CENTRAL_TITLE))
    if centroid is not None:
        markers.append(Marker(lat=centroid.lat, lng=centroid.lng,
                              role=MarkerRole.CENTROID, title=CENTROID_TITLE))
    return markers


class MarkerStore:
    """
    Owns the renderer handles for every marker currently drawn, grouped by role.

    Reconciliation is a full rebuild: old handles are removed, the new
    set is drawn. Point lists are small enough that diffing buys nothing.
    """

    def __init__(self, renderer: Optional[MarkerRenderer] = None):
        self.renderer = renderer
        self._handles: Dict[MarkerRole, List[Any]] = {role: [] for role in MarkerRole}

    def handles(self, role: MarkerRole) -> List[Any]:
        return list(self._handles[role])

    def count(self, role: Optional[MarkerRole] = None) -> int:
        if role is None:
            return sum(len(h) for h in self._handles.values())
        return len(self._handles[role])

    def clear(self) -> None:
        """
        Remove every drawn marker.

        A handle is forgotten even when the renderer fails to remove it,
        so one failure is never retried on every later rebuild.
        """
        handles, self._handles = self._handles, {role: [] for role in MarkerRole}
        if self.renderer is None:
            return
        for role_handles in handles.values():
            for handle in role_handles:
                try:
                    self.renderer.remove_marker(handle)
                except Exception as e:
                    logger.warning(f"Failed to remove marker {handle!r}: {e}")

    def reconcile(self, markers: Sequence[Marker]) -> None:
        """Replace whatever is drawn with `markers`. Renderer failures are logged, not raised."""
        self.clear()
        if self.renderer is None:
            return
        drawn = 0
        for marker in markers:
            try:
                handle = self.renderer.add_marker(marker)
            except Exception as e:
                logger.warning(f"Failed to draw {marker.role.value} marker at {marker.coordinates}: {e}")
                continue
            self._handles[marker.role].append(handle)
            drawn += 1
        logger.debug(f"Drew {drawn} of {len(markers)} markers")
