"""
Pytest configuration and fixtures
"""

import math
import pytest
import sys
from pathlib import Path
from typing import Any, Callable, List, Optional, Sequence

# Ensure the package is importable without installation
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from midpoint.config.settings import EngineConfig, reset_config
from midpoint.contracts.interfaces import DistanceSource, MarkerRenderer
from midpoint.contracts.schemas import Marker, Point
from midpoint.processors.centrality import RoadDistanceMatrix
from midpoint.utils.logger import configure_logger


class FakeDistanceSource(DistanceSource):
    """Distance source answering from a function of (origin, destination)"""

    def __init__(self, value_fn: Optional[Callable[[Point, Point], float]] = None,
                 error: Optional[Exception] = None):
        self.value_fn = value_fn or (lambda o, d: abs(o.lng - d.lng))
        self.error = error
        self.calls: List[tuple] = []

    @property
    def source_name(self) -> str:
        return "fake"

    def fetch_matrix(self, origins: Sequence[Point], destinations: Sequence[Point]) -> RoadDistanceMatrix:
        self.calls.append((tuple(origins), tuple(destinations)))
        if self.error is not None:
            raise self.error
        matrix = RoadDistanceMatrix()
        for origin in origins:
            for destination in destinations:
                value = self.value_fn(origin, destination)
                if value is not None:
                    matrix.set(origin, destination, value)
        return matrix

    def validate_response(self, response: Any) -> bool:
        return True


class RecordingRenderer(MarkerRenderer):
    """Renderer that keeps drawn markers in a dict keyed by handle"""

    def __init__(self):
        self.live = {}
        self.removed = []
        self._next = 0

    def add_marker(self, marker: Marker) -> int:
        self._next += 1
        self.live[self._next] = marker
        return self._next

    def remove_marker(self, handle: int) -> None:
        self.removed.append(handle)
        del self.live[handle]


@pytest.fixture(autouse=True)
def quiet_engine():
    """Fresh config singleton and a quiet logger for every test"""
    reset_config()
    configure_logger(verbose=False, use_colors=False)
    yield
    reset_config()
    configure_logger(verbose=False, use_colors=False)


@pytest.fixture
def straight_config() -> EngineConfig:
    return EngineConfig(overrides={"engine": {"mode": "straight"}})


@pytest.fixture
def road_config() -> EngineConfig:
    return EngineConfig(overrides={"engine": {"mode": "road", "auto_resolve": True}})


@pytest.fixture
def deferred_road_config() -> EngineConfig:
    return EngineConfig(overrides={"engine": {"mode": "road", "auto_resolve": False}})


@pytest.fixture
def fake_source() -> FakeDistanceSource:
    return FakeDistanceSource()


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def equator_addresses() -> List[Point]:
    return [
        Point(lat=0.0, lng=0.0, label="Origin"),
        Point(lat=0.0, lng=2.0, label="Two East"),
    ]


@pytest.fixture
def equator_candidates() -> List[Point]:
    return [
        Point(lat=0.0, lng=0.5, label="Half East"),
        Point(lat=0.0, lng=3.0, label="Three East"),
    ]


@pytest.fixture
def london_points() -> List[Point]:
    """Real London locations sharing a country suffix"""
    return [
        Point(lat=51.5033, lng=-0.1196, label="London Eye, London SE1 7PB, UK"),
        Point(lat=51.5194, lng=-0.1270, label="British Museum, London WC1B 3DG, UK"),
        Point(lat=51.4769, lng=-0.0005, label="Royal Observatory, London SE10 8XJ, UK"),
    ]


INF = math.inf
