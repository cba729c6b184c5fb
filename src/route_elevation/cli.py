"""Resolve elevations for an itinerary file and write the report.

Run directly:
    python -m route_elevation.cli itinerary.json [-o elevation_results.json]
"""

import argparse
import asyncio
import logging
import sys

from route_elevation.config import Settings
from route_elevation.elevation.service import ElevationService
from route_elevation.exceptions import ExhaustedProvidersError, InvalidItineraryError
from route_elevation.itinerary import load_itinerary, write_report

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT = "elevation_results.json"
SAMPLE_SIZE = 5


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="route-elevation",
        description="Resolve ground elevation for every point of an itinerary.",
    )
    parser.add_argument("itinerary", help="JSON file with an 'itinerary' array")
    parser.add_argument(
        "-o",
        "--output",
        default=DEFAULT_OUTPUT,
        help=f"report destination (default: {DEFAULT_OUTPUT})",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Load, resolve and write. Returns the process exit status."""
    args = _parse_args(argv)
    settings = Settings.from_env()
    service = ElevationService(settings)

    try:
        waypoints = load_itinerary(args.itinerary)
        report = asyncio.run(service.resolve(waypoints))
    except (InvalidItineraryError, ExhaustedProvidersError) as exc:
        logger.error("Elevation retrieval failed: %s", exc)
        return 1
    finally:
        service.shutdown()

    try:
        write_report(report, args.output)
    except OSError as exc:
        logger.error("Cannot write elevation report to '%s': %s", args.output, exc)
        return 1

    logger.info(
        "Elevation data retrieval completed: %d points, %d successful, %d failed (provider: %s)",
        report.total_points,
        report.success_count,
        report.fail_count,
        report.provider.value if report.provider else "none",
    )
    for position, record in enumerate(report.records[:SAMPLE_SIZE], start=1):
        logger.info(
            "%d. (%s, %s): %s",
            position,
            record.latitude,
            record.longitude,
            f"{record.elevation}m" if record.success else record.error,
        )
    return 0


def run() -> None:
    """Console script entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s — %(message)s",
    )
    sys.exit(main())


if __name__ == "__main__":
    run()
