import math
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from ..contracts.schemas import Point
from .geo_math import distance as straight_line_distance

Coordinates = Tuple[float, float]
DistanceFn = Callable[[Point, Point], float]


class RoadDistanceMatrix:
    """
    Road distance (metres) or duration (seconds) per (origin, destination) pair.

    Keys are coordinate pairs, so a matrix built for one set of Point
    objects answers for equal-coordinate points with other labels.
    Pairs that were never answered count as unreachable.
    """

    def __init__(self, values: Optional[Dict[Tuple[Coordinates, Coordinates], float]] = None, metric: str = "distance"):
        self.metric = metric
        self._values: Dict[Tuple[Coordinates, Coordinates], float] = dict(values or {})

    @classmethod
    def from_rows(cls, origins: Sequence[Point], destinations: Sequence[Point],
                  rows: Sequence[Sequence[float]], metric: str = "distance") -> "RoadDistanceMatrix":
        """Build from a rectangular table, one row per origin."""
        if len(rows) != len(origins):
            raise ValueError(f"Expected {len(origins)} rows, got {len(rows)}")
        matrix = cls(metric=metric)
        for origin, row in zip(origins, rows):
            if len(row) != len(destinations):
                raise ValueError(f"Expected {len(destinations)} values per row, got {len(row)}")
            for destination, value in zip(destinations, row):
                matrix.set(origin, destination, value)
        return matrix

    def set(self, origin: Point, destination: Point, value: float) -> None:
        if value is None or math.isnan(value) or value < 0:
            value = math.inf
        self._values[(origin.coordinates, destination.coordinates)] = float(value)

    def mark_unreachable(self, origin: Point, destination: Point) -> None:
        self._values[(origin.coordinates, destination.coordinates)] = math.inf

    def get(self, origin: Point, destination: Point) -> Optional[float]:
        """Stored value, or None when the pair was never answered."""
        return self._values.get((origin.coordinates, destination.coordinates))

    def distance(self, address: Point, candidate: Point) -> float:
        """Distance function for select_most_central; unanswered pairs are infinite."""
        value = self.get(address, candidate)
        return math.inf if value is None else value

    def update(self, other: "RoadDistanceMatrix") -> None:
        self._values.update(other._values)

    def items(self) -> Iterable[Tuple[Tuple[Coordinates, Coordinates], float]]:
        return self._values.items()

    def __contains__(self, pair: Tuple[Point, Point]) -> bool:
        origin, destination = pair
        return (origin.coordinates, destination.coordinates) in self._values

    def __len__(self) -> int:
        return len(self._values)


def candidate_totals(addresses: Sequence[Point], candidates: Sequence[Point],
                     distance_fn: DistanceFn = straight_line_distance) -> List[Tuple[Point, float]]:
    """Total distance from every address to each candidate, in candidate order."""
    totals = []
    for candidate in candidates:
        total = sum(distance_fn(address, candidate) for address in addresses)
        if math.isnan(total):
            total = math.inf
        totals.append((candidate, total))
    return totals


def select_most_central(addresses: Sequence[Point], candidates: Sequence[Point],
                        distance_fn: DistanceFn = straight_line_distance) -> Optional[Point]:
    """
    Candidate with the smallest total distance to all addresses.

    Returns None when either list is empty, and also for a single
    candidate: with nothing to compare against, it is not highlighted.
    On equal totals the earlier candidate wins, which also covers the
    case where every candidate is unreachable.
    """
    if not addresses or not candidates:
        return None
    if len(candidates) == 1:
        return None

    best: Optional[Point] = None
    best_total: Optional[float] = None
    for candidate, total in candidate_totals(addresses, candidates, distance_fn):
        if best_total is None or total < best_total:
            best, best_total = candidate, total
    return best
