"""
Google Distance Matrix client

Fetches driving distance or duration from every address to every
candidate. A failed batch never aborts the ranking: its pairs are left
unanswered and count as unreachable.
"""

import math
from typing import Any, Dict, List, Optional, Sequence

import requests

from .base_fetcher import BaseFetcher
from ..contracts.interfaces import DistanceSource
from ..contracts.schemas import Point
from ..processors.centrality import RoadDistanceMatrix
from ..utils.distance_cache import DistanceCache
from ..utils.logger import logger

DEFAULT_URL = "https://maps.googleapis.com/maps/api/distancematrix/json"
METRICS = ("distance", "duration")


def _chunks(items: Sequence[Point], size: int) -> List[Sequence[Point]]:
    return [items[i:i + size] for i in range(0, len(items), size)]


def _format_location(point: Point) -> str:
    return f"{point.lat},{point.lng}"


class DistanceMatrixFetcher(BaseFetcher, DistanceSource):
    """Road values from the Google Distance Matrix API"""

    def __init__(self, api_key: Optional[str], config: Optional[dict] = None,
                 cache: Optional[DistanceCache] = None):
        road_config = (config or {}).get('road', {})
        super().__init__(timeout=road_config.get('timeout', 10))

        if not api_key:
            raise ValueError("A Google Maps API key is required for road distances")
        self.api_key = api_key

        self.url = road_config.get('base_url', DEFAULT_URL)
        self.metric = road_config.get('metric', 'distance')
        if self.metric not in METRICS:
            raise ValueError(f"Unknown road metric '{self.metric}', expected one of {METRICS}")
        self.max_elements = max(1, int(road_config.get('max_elements', 100)))
        self.max_locations = max(1, int(road_config.get('max_locations', 25)))

        self.cache = cache if cache is not None else DistanceCache(
            max_age_seconds=road_config.get('cache_max_age_seconds', 3600)
        )

    @property
    def source_name(self) -> str:
        return "google_distance_matrix"

    def validate_response(self, response: Any) -> bool:
        if not isinstance(response, dict):
            return False
        if response.get('status') != 'OK':
            return False
        return isinstance(response.get('rows'), list)

    def fetch_matrix(self, origins: Sequence[Point], destinations: Sequence[Point]) -> RoadDistanceMatrix:
        matrix = RoadDistanceMatrix(metric=self.metric)
        if not origins or not destinations:
            return matrix

        pending_origins = []
        pending_destinations = []
        for origin in origins:
            for destination in destinations:
                cached = self.cache.get(origin, destination, self.metric)
                if cached is None:
                    if origin not in pending_origins:
                        pending_origins.append(origin)
                    if destination not in pending_destinations:
                        pending_destinations.append(destination)
                else:
                    matrix.set(origin, destination, cached)

        if not pending_origins:
            logger.debug(f"All {len(origins) * len(destinations)} road pairs served from cache")
            return matrix

        for dest_batch in _chunks(pending_destinations, self.max_locations):
            origin_batch_size = max(1, min(self.max_locations, self.max_elements // len(dest_batch)))
            for origin_batch in _chunks(pending_origins, origin_batch_size):
                self._fetch_batch(origin_batch, dest_batch, matrix)

        return matrix

    def _fetch_batch(self, origins: Sequence[Point], destinations: Sequence[Point],
                     matrix: RoadDistanceMatrix) -> None:
        params = {
            "origins": "|".join(_format_location(p) for p in origins),
            "destinations": "|".join(_format_location(p) for p in destinations),
            "units": "metric",
            "key": self.api_key,
        }
        try:
            data = self.get(self.url, params=params)
            if not self.validate_response(data):
                status = data.get('status') if isinstance(data, dict) else type(data).__name__
                logger.warning(f"Distance Matrix request rejected: {status}")
                return
            rows = self._parse_rows(data, len(origins), len(destinations))
        except (requests.RequestException, ValueError, KeyError, TypeError) as e:
            logger.warning(f"Distance Matrix request failed for {len(origins)}x{len(destinations)} pairs: {e}")
            return

        for origin, row in zip(origins, rows):
            for destination, value in zip(destinations, row):
                matrix.set(origin, destination, value)
                self.cache.set(origin, destination, self.metric, value)

    def _parse_rows(self, data: Dict[str, Any], n_origins: int, n_destinations: int) -> List[List[float]]:
        rows = data['rows']
        if len(rows) != n_origins:
            raise ValueError(f"Unexpected response structure: {len(rows)} rows for {n_origins} origins")

        parsed = []
        for row in rows:
            elements = row['elements']
            if len(elements) != n_destinations:
                raise ValueError("Mismatched elements in Distance Matrix response")
            values = []
            for element in elements:
                if element.get('status') != 'OK' or self.metric not in element:
                    # No route between the pair
                    values.append(math.inf)
                else:
                    values.append(float(element[self.metric]['value']))
            parsed.append(values)
        return parsed
