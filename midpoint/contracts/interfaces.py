"""
Abstract interfaces for the engine's external collaborators

The engine never talks to a map or a distance service directly; it
goes through these contracts so hosts can plug in their own.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Sequence
from .schemas import Marker, Point

if TYPE_CHECKING:
    from ..processors.centrality import RoadDistanceMatrix


class DistanceSource(ABC):
    """Abstract base class for road-distance providers"""

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Return the provider name"""
        pass

    @abstractmethod
    def fetch_matrix(self, origins: Sequence[Point], destinations: Sequence[Point]) -> "RoadDistanceMatrix":
        """
        Return road values for every (origin, destination) pair.

        Pairs the provider cannot answer are left out of the matrix,
        which reports them as unreachable.
        """
        pass

    @abstractmethod
    def validate_response(self, response: Any) -> bool:
        """Validate a raw response from the provider"""
        pass


class MarkerRenderer(ABC):
    """Abstract base class for whatever draws markers"""

    @abstractmethod
    def add_marker(self, marker: Marker) -> Any:
        """Draw a marker and return a handle for later removal"""
        pass

    @abstractmethod
    def remove_marker(self, handle: Any) -> None:
        """Remove a previously drawn marker"""
        pass
