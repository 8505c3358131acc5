"""
Test suite for most-central candidate selection

Covers the size guards, tie-breaking and the road-distance matrix as a
pluggable distance function.
"""

import math
import pytest
import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from midpoint.contracts.schemas import Point
from midpoint.processors.centrality import RoadDistanceMatrix, candidate_totals, select_most_central


def P(lat, lng, label=""):
    return Point(lat=lat, lng=lng, label=label)


class TestSelectMostCentral:
    """Test straight-line selection"""

    def test_end_to_end_example(self, equator_addresses, equator_candidates):
        """Test that (0,0.5) beats (0,3) for addresses (0,0) and (0,2)"""
        best = select_most_central(equator_addresses, equator_candidates)
        assert best.coordinates == (0.0, 0.5)

    def test_empty_inputs(self, equator_addresses, equator_candidates):
        """Test that either list being empty gives None"""
        assert select_most_central([], equator_candidates) is None
        assert select_most_central(equator_addresses, []) is None
        assert select_most_central([], []) is None

    def test_single_candidate_is_never_central(self, equator_addresses):
        """Test that a lone candidate is not highlighted"""
        assert select_most_central(equator_addresses, [P(0, 1)]) is None
        assert select_most_central([P(0, 1)], [P(0, 1)]) is None

    def test_single_address_is_enough(self):
        """Test that one address with two candidates ranks them"""
        best = select_most_central([P(0, 0)], [P(0, 5), P(0, 1)])
        assert best.coordinates == (0.0, 1.0)

    def test_tie_goes_to_first_candidate(self):
        """Test symmetric candidates: the first listed wins"""
        addresses = [P(0, 0), P(0, 10)]
        assert select_most_central(addresses, [P(0, 4, "first"), P(0, 6, "second")]).label == "first"
        assert select_most_central(addresses, [P(0, 6, "first"), P(0, 4, "second")]).label == "first"

    def test_tie_with_custom_distance(self):
        """Test that an exact tie never re-picks a later candidate"""
        candidates = [P(0, 1, "a"), P(0, 2, "b"), P(0, 3, "c")]
        best = select_most_central([P(0, 0)], candidates, distance_fn=lambda a, c: 7.0)
        assert best.label == "a"

    def test_strictly_smaller_later_candidate_wins(self):
        candidates = [P(0, 1, "a"), P(0, 2, "b"), P(0, 3, "c")]
        costs = {"a": 5.0, "b": 5.0, "c": 4.999}
        best = select_most_central([P(0, 0)], candidates, distance_fn=lambda a, c: costs[c.label])
        assert best.label == "c"

    def test_nan_distance_never_wins(self):
        """Test that a NaN total is treated as unreachable"""
        candidates = [P(0, 1, "nan"), P(0, 2, "ok")]
        best = select_most_central([P(0, 0)], candidates,
                                   distance_fn=lambda a, c: math.nan if c.label == "nan" else 3.0)
        assert best.label == "ok"


class TestCandidateTotals:
    """Test per-candidate totals"""

    def test_totals_in_candidate_order(self):
        totals = candidate_totals([P(0, 0), P(0, 2)], [P(0, 3), P(0, 1)], distance_fn=lambda a, c: abs(a.lng - c.lng))
        assert [t for _, t in totals] == [4.0, 2.0]

    def test_no_addresses_totals_zero(self):
        totals = candidate_totals([], [P(0, 3)])
        assert totals[0][1] == 0


class TestRoadDistanceMatrix:
    """Test the road-distance variant"""

    def test_lookup_by_coordinates(self):
        """Test that keys are coordinates, not labels"""
        matrix = RoadDistanceMatrix()
        matrix.set(P(0, 0, "home"), P(0, 1, "cafe"), 1200)
        assert matrix.distance(P(0, 0, "other"), P(0, 1, "name")) == 1200
        assert (P(0, 0), P(0, 1)) in matrix
        assert len(matrix) == 1

    def test_directional(self):
        """Test that origin and destination are not swapped"""
        matrix = RoadDistanceMatrix()
        matrix.set(P(0, 0), P(0, 1), 10)
        assert matrix.get(P(0, 1), P(0, 0)) is None
        assert matrix.distance(P(0, 1), P(0, 0)) == math.inf

    def test_unanswered_and_invalid_values_are_unreachable(self):
        matrix = RoadDistanceMatrix()
        matrix.set(P(0, 0), P(0, 1), None)
        matrix.set(P(0, 0), P(0, 2), -5)
        matrix.mark_unreachable(P(0, 0), P(0, 3))
        for lng in (1, 2, 3, 4):
            assert matrix.distance(P(0, 0), P(0, lng)) == math.inf

    def test_from_rows(self):
        origins = [P(0, 0), P(1, 0)]
        destinations = [P(0, 5), P(0, 6)]
        matrix = RoadDistanceMatrix.from_rows(origins, destinations, [[1, 2], [3, math.inf]], metric="duration")
        assert matrix.metric == "duration"
        assert matrix.distance(origins[1], destinations[0]) == 3
        assert matrix.distance(origins[1], destinations[1]) == math.inf

    def test_from_rows_shape_mismatch(self):
        with pytest.raises(ValueError):
            RoadDistanceMatrix.from_rows([P(0, 0)], [P(0, 1)], [[1], [2]])
        with pytest.raises(ValueError):
            RoadDistanceMatrix.from_rows([P(0, 0)], [P(0, 1)], [[1, 2]])

    def test_update_merges(self):
        a = RoadDistanceMatrix()
        a.set(P(0, 0), P(0, 1), 1)
        b = RoadDistanceMatrix()
        b.set(P(0, 0), P(0, 2), 2)
        a.update(b)
        assert len(a) == 2

    def test_road_selection_prefers_reachable(self):
        """Test that an unreachable candidate loses even if closer in a straight line"""
        addresses = [P(0, 0), P(0, 2)]
        near, far = P(0, 1, "near"), P(0, 30, "far")
        matrix = RoadDistanceMatrix()
        matrix.set(addresses[0], near, 100)
        # second address has no route to the near candidate
        matrix.set(addresses[0], far, 5000)
        matrix.set(addresses[1], far, 5000)
        assert select_most_central(addresses, [near, far], matrix.distance).label == "far"

    def test_road_selection_all_unreachable(self):
        """Test that with no answers at all the first candidate wins"""
        matrix = RoadDistanceMatrix()
        best = select_most_central([P(0, 0)], [P(0, 1, "first"), P(0, 2, "second")], matrix.distance)
        assert best.label == "first"
