"""
Centrality state controller

Owns the address and candidate lists and rebuilds the derived state
(centroid, most central candidate, markers) after every change.
"""

import threading
from typing import Any, Iterable, List, Optional

from midpoint.alerts.alert_manager import AlertManager
from midpoint.config.settings import EngineConfig, get_config
from midpoint.contracts.interfaces import DistanceSource, MarkerRenderer
from midpoint.contracts.schemas import (
    CentralitySnapshot, DistanceMode, MoveOutcome, Point, RoadComputation
)
from midpoint.fetchers.places import point_from_place
from midpoint.processors import geo_math
from midpoint.processors.centrality import RoadDistanceMatrix, select_most_central
from midpoint.processors.marker_sync import MarkerStore, build_markers
from midpoint.processors.point_collection import PointCollection
from midpoint.utils.labels import display_labels
from midpoint.utils.logger import logger

SELECTION_HINT = "Use the checkboxes to make your selection."


class CentralityStateController:
    """
    Keeps the two point lists and everything derived from them consistent.

    Every transition (add, move, remove, mode change) mutates the lists
    and then recomputes. Each recompute bumps `generation`.

    In road mode ranking needs the distance source. The recompute
    publishes a snapshot with `road_pending=True` and a RoadComputation
    tied to the current generation; the result is applied only if no
    other transition happened in the meantime. With `auto_resolve` the
    lookup runs before the transition returns. Otherwise the host picks
    up `pending_computation` and calls `complete_road_computation` itself.

    All state access goes through one re-entrant lock. The distance
    lookup runs outside it.
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        distance_source: Optional[DistanceSource] = None,
        renderer: Optional[MarkerRenderer] = None,
        alert_manager: Optional[AlertManager] = None,
    ):
        self.config = config or get_config()
        self.distance_source = distance_source
        self.alert_manager = alert_manager or AlertManager(self.config.as_dict())
        self.auto_resolve = bool(self.config.get('engine.auto_resolve', True))

        self.addresses = PointCollection("addresses")
        self.candidates = PointCollection("candidates")
        self.markers = MarkerStore(renderer)

        self._lock = threading.RLock()
        self._generation = 0
        self._pending: Optional[RoadComputation] = None
        self._mode = self._check_mode(self.config.get('engine.mode', DistanceMode.STRAIGHT.value))
        self._snapshot = CentralitySnapshot(mode=self._mode)

    # ── Read access ───────────────────────────────────────────────

    @property
    def snapshot(self) -> CentralitySnapshot:
        with self._lock:
            return self._snapshot

    @property
    def generation(self) -> int:
        with self._lock:
            return self._generation

    @property
    def mode(self) -> DistanceMode:
        with self._lock:
            return self._mode

    @property
    def centroid(self) -> Optional[Point]:
        return self.snapshot.centroid

    @property
    def most_central(self) -> Optional[Point]:
        return self.snapshot.most_central

    @property
    def pending_computation(self) -> Optional[RoadComputation]:
        with self._lock:
            return self._pending

    def labels(self, from_candidates: bool = False) -> List[str]:
        """Display labels for one list, shortened across both lists."""
        with self._lock:
            everything = self.addresses.points + self.candidates.points
            return display_labels(self._collection(from_candidates).points, context=everything)

    # ── Transitions ───────────────────────────────────────────────

    def add_point(self, point: Point, to_candidates: bool = False) -> bool:
        """Append a point to one list. Duplicates are refused, not raised."""
        with self._lock:
            collection = self._collection(to_candidates)
            added = collection.add(point)
            if added:
                logger.debug(f"Added {point.coordinates} to {collection.name}")
            else:
                self.alert_manager.info(
                    f"Already in {collection.name}: {point.label or point.coordinates}",
                    {"action": "add", "list": collection.name, "coordinates": point.coordinates},
                )
            computation = self._recompute()
        self._after_transition(computation)
        return added

    def add_place(self, place_result: Any, to_candidates: bool = False) -> bool:
        """Add a place-lookup result. Results without geometry are dropped untouched."""
        point = point_from_place(place_result)
        if point is None:
            return False
        return self.add_point(point, to_candidates=to_candidates)

    def move_points(self, indexes: Iterable[int], from_candidates: bool = False) -> MoveOutcome:
        """
        Move the selected points to the other list.

        Points whose coordinates already exist there stay put and each
        raises a "duplicate in target list" notice.
        """
        indexes = list(indexes)
        if not indexes:
            self._selection_required("move")
            return MoveOutcome()

        with self._lock:
            source = self._collection(from_candidates)
            destination = self._collection(not from_candidates)
            outcome = source.move_to(indexes, destination)
            for point in outcome.rejected:
                self.alert_manager.warning(
                    f"Duplicate in target list: {point.label or point.coordinates}",
                    {"action": "move", "list": destination.name, "coordinates": point.coordinates},
                )
            logger.debug(f"Moved {len(outcome.moved)} from {source.name} to {destination.name}, "
                         f"{len(outcome.rejected)} rejected")
            computation = self._recompute()
        self._after_transition(computation)
        return outcome

    def remove_points(self, indexes: Iterable[int], from_candidates: bool = False) -> List[Point]:
        """Remove the selected points from one list."""
        indexes = list(indexes)
        if not indexes:
            self._selection_required("remove")
            return []

        with self._lock:
            collection = self._collection(from_candidates)
            removed = collection.remove_at(indexes)
            logger.debug(f"Removed {len(removed)} from {collection.name}")
            computation = self._recompute()
        self._after_transition(computation)
        return removed

    def set_mode(self, mode) -> None:
        """Switch between straight-line and road ranking."""
        mode = self._check_mode(mode)
        with self._lock:
            self._mode = mode
            logger.debug(f"Distance mode set to {mode.value}")
            computation = self._recompute()
        self._after_transition(computation)

    def reset(self) -> None:
        """Empty both lists."""
        with self._lock:
            self.addresses.remove_at(range(len(self.addresses)))
            self.candidates.remove_at(range(len(self.candidates)))
            computation = self._recompute()
        self._after_transition(computation)

    # ── Road distance boundary ────────────────────────────────────

    def resolve_road_computation(self, computation: RoadComputation) -> bool:
        """
        Query the distance source for a computation and apply the result.

        A failing source degrades every pair to unreachable rather than
        failing the transition. Returns whether the result was applied.
        """
        if self.distance_source is None:
            raise ValueError("Road mode requires a distance source")
        try:
            matrix = self.distance_source.fetch_matrix(computation.addresses, computation.candidates)
        except Exception as e:
            logger.warning(f"{self.distance_source.source_name} failed, treating all pairs as unreachable: {e}")
            matrix = RoadDistanceMatrix()
        return self.complete_road_computation(computation, matrix)

    def complete_road_computation(self, computation: RoadComputation, matrix: RoadDistanceMatrix) -> bool:
        """Apply a road ranking unless the state it was computed for has expired."""
        with self._lock:
            if self._pending is None or computation.generation != self._pending.generation:
                logger.debug(f"Discarding road result for generation {computation.generation}, "
                             f"current is {self._generation}")
                return False
            most_central = select_most_central(computation.addresses, computation.candidates, matrix.distance)
            self._pending = None
            self._publish(self._snapshot.centroid, most_central, road_pending=False)
            return True

    # ── Private helpers ───────────────────────────────────────────

    def _check_mode(self, mode) -> DistanceMode:
        mode = DistanceMode(mode)
        if mode == DistanceMode.ROAD and self.distance_source is None:
            raise ValueError("Road mode requires a distance source")
        return mode

    def _collection(self, candidates: bool) -> PointCollection:
        return self.candidates if candidates else self.addresses

    def _selection_required(self, action: str) -> None:
        self.alert_manager.warning(
            f"Please select at least one address to {action}.",
            {"action": action, "hint": SELECTION_HINT},
        )

    def _recompute(self) -> Optional[RoadComputation]:
        """Rebuild the derived state. Caller holds the lock."""
        self._generation += 1
        addresses = self.addresses.points
        candidates = self.candidates.points
        centroid = geo_math.centroid(addresses)

        if self._mode == DistanceMode.ROAD and addresses and len(candidates) >= 2:
            self._pending = RoadComputation(
                generation=self._generation, addresses=addresses, candidates=candidates
            )
            self._publish(centroid, None, road_pending=True)
            return self._pending

        self._pending = None
        most_central = None
        if self._mode == DistanceMode.STRAIGHT:
            most_central = select_most_central(addresses, candidates, geo_math.distance)
        self._publish(centroid, most_central, road_pending=False)
        return None

    def _publish(self, centroid: Optional[Point], most_central: Optional[Point], road_pending: bool) -> None:
        addresses = self.addresses.points
        candidates = self.candidates.points
        markers = build_markers(addresses, candidates, centroid, most_central)
        self._snapshot = CentralitySnapshot(
            generation=self._generation,
            mode=self._mode,
            addresses=addresses,
            candidates=candidates,
            centroid=centroid,
            most_central=most_central,
            markers=tuple(markers),
            road_pending=road_pending,
        )
        self.markers.reconcile(markers)

    def _after_transition(self, computation: Optional[RoadComputation]) -> None:
        if computation is not None and self.auto_resolve:
            self.resolve_road_computation(computation)
