"""midpoint: find the most central of a set of candidate locations."""

from midpoint.controller import CentralityStateController
from midpoint.contracts.schemas import (
    CentralitySnapshot,
    DistanceMode,
    Marker,
    MarkerRole,
    MoveOutcome,
    Point,
    RoadComputation,
)
from midpoint.processors.centrality import RoadDistanceMatrix, select_most_central
from midpoint.processors.point_collection import PointCollection

__all__ = [
    "CentralityStateController",
    "CentralitySnapshot",
    "DistanceMode",
    "Marker",
    "MarkerRole",
    "MoveOutcome",
    "Point",
    "PointCollection",
    "RoadComputation",
    "RoadDistanceMatrix",
    "select_most_central",
]
