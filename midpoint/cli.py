"""
Run the centrality engine over a YAML file of points.

Usage:
    midpoint points.yaml                 # straight-line ranking
    midpoint points.yaml --mode road     # driving distance, needs GOOGLE_MAPS_API_KEY
    midpoint points.yaml --json          # print the snapshot as JSON

The points file holds two lists, `addresses` and `candidates`. Each
entry is either {lat, lng, label} or a Google Places result.
"""

import argparse
import sys
from typing import List, Optional, Tuple

import yaml
from dotenv import load_dotenv

from midpoint.config.settings import EngineConfig
from midpoint.contracts.schemas import DistanceMode, Point
from midpoint.controller import CentralityStateController
from midpoint.fetchers.distance_matrix_fetcher import DistanceMatrixFetcher
from midpoint.fetchers.places import point_from_place
from midpoint.processors import geo_math
from midpoint.processors.centrality import candidate_totals
from midpoint.utils.logger import configure_logger, logger


def load_points_file(path: str) -> Tuple[List[Point], List[Point]]:
    """Read addresses and candidates, skipping entries without coordinates."""
    with open(path, 'r') as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain 'addresses' and 'candidates' lists")

    lists = []
    for key in ("addresses", "candidates"):
        entries = data.get(key) or []
        if not isinstance(entries, list):
            raise ValueError(f"'{key}' in {path} must be a list")
        points = []
        for i, entry in enumerate(entries):
            point = point_from_place(entry)
            if point is None:
                logger.warning(f"Skipping {key}[{i}]: no usable coordinates")
                continue
            points.append(point)
        lists.append(points)
    return lists[0], lists[1]


def build_controller(config: EngineConfig, mode: DistanceMode) -> CentralityStateController:
    distance_source = None
    if mode == DistanceMode.ROAD:
        distance_source = DistanceMatrixFetcher(config.api_key, config.as_dict())
    return CentralityStateController(config=config, distance_source=distance_source)


def _describe(point: Point) -> str:
    return f"{point.label or 'unnamed'} ({point.lat:.6f}, {point.lng:.6f})"


def print_report(controller: CentralityStateController) -> None:
    snapshot = controller.snapshot

    logger.section(f"Addresses ({len(snapshot.addresses)})")
    for label in controller.labels():
        logger.item(label)

    logger.section(f"Potential central locations ({len(snapshot.candidates)})")
    totals = {}
    if snapshot.mode == DistanceMode.STRAIGHT:
        totals = {c.coordinates: t for c, t in
                  candidate_totals(snapshot.addresses, snapshot.candidates, geo_math.distance)}
    for candidate, label in zip(snapshot.candidates, controller.labels(from_candidates=True)):
        total = totals.get(candidate.coordinates)
        suffix = f" - {total:.2f} km total" if total is not None and snapshot.addresses else ""
        if snapshot.most_central is not None and candidate.same_location(snapshot.most_central):
            logger.item(f"{label}{suffix}", status="MOST CENTRAL")
        else:
            logger.item(f"{label}{suffix}")

    logger.section("Result")
    logger.stats("Mode", snapshot.mode.value)
    if snapshot.centroid is not None:
        logger.stats("Geographic center", f"{snapshot.centroid.lat:.6f}, {snapshot.centroid.lng:.6f}")
    else:
        logger.stats("Geographic center", "needs at least 2 addresses")
    if snapshot.most_central is not None:
        logger.stats("Most central", _describe(snapshot.most_central))
    else:
        logger.stats("Most central", "needs at least 1 address and 2 candidates")


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()

    parser = argparse.ArgumentParser(description="Find the most central candidate location")
    parser.add_argument("points_file", help="YAML file with 'addresses' and 'candidates'")
    parser.add_argument("--mode", choices=[m.value for m in DistanceMode], help="Distance metric (default from config)")
    parser.add_argument("--config", help="Path to engine YAML config")
    parser.add_argument("--json", action="store_true", help="Print the final snapshot as JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show debug output")
    args = parser.parse_args(argv)

    try:
        file_config = EngineConfig(args.config)
    except (OSError, yaml.YAMLError, ValueError) as e:
        logger.error(f"Could not load config: {e}")
        return 1
    # Points are loaded in straight mode; the requested mode is applied once at the end
    config = EngineConfig(overrides={**file_config.as_dict(),
                                     "engine": {**file_config.engine, "mode": DistanceMode.STRAIGHT.value}})

    configure_logger(
        verbose=args.verbose or bool(config.get('logging.verbose', False)),
        use_colors=bool(config.get('logging.use_colors', True)) and sys.stdout.isatty(),
    )

    try:
        addresses, candidates = load_points_file(args.points_file)
    except (OSError, yaml.YAMLError, ValueError) as e:
        logger.error(f"Could not load points: {e}")
        return 1

    try:
        mode = DistanceMode(args.mode or file_config.get('engine.mode', DistanceMode.STRAIGHT.value))
        controller = build_controller(config, mode)
    except ValueError as e:
        logger.error(str(e))
        return 1

    for point in addresses:
        controller.add_point(point)
    for point in candidates:
        controller.add_point(point, to_candidates=True)
    controller.set_mode(mode)

    if args.json:
        print(controller.snapshot.model_dump_json(indent=2))
    else:
        print_report(controller)
    return 0


if __name__ == "__main__":
    sys.exit(main())
