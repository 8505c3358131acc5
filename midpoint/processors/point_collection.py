from typing import Iterable, Iterator, List, Optional, Tuple

from ..contracts.schemas import MoveOutcome, Point


class PointCollection:
    """
    Ordered list of points with no two sharing the same coordinates.

    The controller holds one instance per list and mutates it in place;
    readers that need a stable view take `points`, an immutable tuple.
    """

    def __init__(self, name: str, points: Optional[Iterable[Point]] = None):
        self.name = name
        self._points: List[Point] = []
        for point in points or ():
            self.add(point)

    @property
    def points(self) -> Tuple[Point, ...]:
        return tuple(self._points)

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[Point]:
        return iter(tuple(self._points))

    def __getitem__(self, index: int) -> Point:
        return self._points[index]

    def __contains__(self, point: Point) -> bool:
        return self.index_of(point) is not None

    def __repr__(self) -> str:
        return f"PointCollection({self.name!r}, {len(self._points)} points)"

    def index_of(self, point: Point) -> Optional[int]:
        """Position of the member on the same coordinates, if any."""
        for i, member in enumerate(self._points):
            if member.same_location(point):
                return i
        return None

    def add(self, point: Point) -> bool:
        """Append the point unless a member already sits on its coordinates."""
        if point in self:
            return False
        self._points.append(point)
        return True

    def _valid_indexes(self, indexes: Iterable[int]) -> List[int]:
        """Distinct in-range indexes, ascending. Negative indexes are not wrapped."""
        return sorted({i for i in indexes if 0 <= i < len(self._points)})

    def remove_at(self, indexes: Iterable[int]) -> List[Point]:
        """
        Remove every member at the given positions in one step.

        Positions refer to the list as it was before the call; removal
        runs from the highest index down so earlier positions stay valid.
        Out-of-range positions are ignored. Removed points come back in
        their original order.
        """
        removed = []
        for i in reversed(self._valid_indexes(indexes)):
            removed.append(self._points.pop(i))
        removed.reverse()
        return removed

    def move_to(self, indexes: Iterable[int], destination: "PointCollection") -> MoveOutcome:
        """
        Offer the selected members to `destination`.

        Members the destination refuses as duplicates stay here, in
        their original order, and are reported as rejected.
        """
        outcome = MoveOutcome()
        accepted = []
        for i in self._valid_indexes(indexes):
            point = self._points[i]
            if destination.add(point):
                accepted.append(i)
                outcome.moved.append(point)
            else:
                outcome.rejected.append(point)
        self.remove_at(accepted)
        return outcome
