"""Reading itineraries from and writing reports to JSON files."""

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from route_elevation.elevation.schemas import ElevationReport, Waypoint
from route_elevation.exceptions import InvalidItineraryError

logger = logging.getLogger(__name__)


def load_itinerary(path: str | Path) -> list[Waypoint]:
    """Load waypoints from a ``{"itinerary": [...]}`` JSON document.

    Keys other than ``latitude`` and ``longitude`` on each point are ignored.

    Args:
        path: Path to the itinerary file.

    Returns:
        Waypoints indexed by their position in the file.

    Raises:
        InvalidItineraryError: If the file cannot be read or is malformed.
    """
    try:
        document = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as exc:
        raise InvalidItineraryError(f"Cannot read itinerary file '{path}': {exc}") from exc
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise InvalidItineraryError(f"Itinerary file '{path}' is not valid JSON") from exc

    points = document.get("itinerary") if isinstance(document, dict) else None
    if not isinstance(points, list):
        raise InvalidItineraryError(f"Itinerary file '{path}' has no 'itinerary' array")

    waypoints: list[Waypoint] = []
    for position, point in enumerate(points):
        if not isinstance(point, dict):
            raise InvalidItineraryError(f"Itinerary point {position} is not an object")
        try:
            waypoints.append(
                Waypoint(
                    latitude=point.get("latitude"),
                    longitude=point.get("longitude"),
                    index=position,
                )
            )
        except ValidationError as exc:
            raise InvalidItineraryError(
                f"Invalid coordinates for itinerary point {position}"
            ) from exc

    logger.info("Loaded itinerary", extra={"path": str(path), "points": len(waypoints)})
    return waypoints


def write_report(report: ElevationReport, path: str | Path) -> None:
    """Write a report as indented JSON with camelCase field names."""
    Path(path).write_text(report.model_dump_json(by_alias=True, indent=2), encoding="utf-8")
    logger.info("Wrote elevation report", extra={"path": str(path)})
