"""
Data contracts and Pydantic schemas for the centrality engine

This module defines the value objects passed between the point
collections, the centrality calculator, the controller and the
marker renderer.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Tuple
from enum import Enum


class DistanceMode(str, Enum):
    """Distance metric used to rank candidates"""
    STRAIGHT = "straight"
    ROAD = "road"


class MarkerRole(str, Enum):
    """Role of a marker on the map"""
    ADDRESS = "address"
    CANDIDATE = "candidate"
    MOST_CENTRAL = "most-central"
    CENTROID = "centroid"


class Point(BaseModel):
    """A geocoded location. Identity is its coordinates, not its label."""
    model_config = ConfigDict(frozen=True)

    lat: float = Field(..., ge=-90.0, le=90.0, allow_inf_nan=False, description="Latitude in decimal degrees")
    lng: float = Field(..., ge=-180.0, le=180.0, allow_inf_nan=False, description="Longitude in decimal degrees")
    label: str = Field("", description="Formatted address or display name")
    title: Optional[str] = Field(None, description="Short place name from the lookup service")
    id: Optional[str] = Field(None, description="Place identifier from the lookup service")

    @property
    def coordinates(self) -> Tuple[float, float]:
        return (self.lat, self.lng)

    def same_location(self, other: "Point") -> bool:
        """True when both points sit on exactly the same coordinates"""
        return self.coordinates == other.coordinates


class Marker(BaseModel):
    """One visual marker instruction for the renderer"""
    model_config = ConfigDict(frozen=True)

    lat: float
    lng: float
    role: MarkerRole
    title: str = ""

    @property
    def coordinates(self) -> Tuple[float, float]:
        return (self.lat, self.lng)


class MoveOutcome(BaseModel):
    """Result of moving points between collections"""
    moved: List[Point] = Field(default_factory=list)
    rejected: List[Point] = Field(default_factory=list, description="Points already present in the target list")


class RoadComputation(BaseModel):
    """A pending road-distance ranking tied to the state it was issued for"""
    model_config = ConfigDict(frozen=True)

    generation: int = Field(..., ge=0)
    addresses: Tuple[Point, ...]
    candidates: Tuple[Point, ...]


class CentralitySnapshot(BaseModel):
    """Immutable view of the engine state after a transition"""
    model_config = ConfigDict(frozen=True)

    generation: int = 0
    mode: DistanceMode = DistanceMode.STRAIGHT
    addresses: Tuple[Point, ...] = ()
    candidates: Tuple[Point, ...] = ()
    centroid: Optional[Point] = None
    most_central: Optional[Point] = None
    markers: Tuple[Marker, ...] = ()
    road_pending: bool = False

    def markers_for(self, role: MarkerRole) -> List[Marker]:
        return [m for m in self.markers if m.role == role]
