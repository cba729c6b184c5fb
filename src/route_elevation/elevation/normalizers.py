"""Pure mappings from raw provider payloads to positionally aligned records.

Providers return arrays by position, so every normalizer joins on the
waypoint sequence order and copies coordinates from the waypoints, never
from the payload.
"""

import math
from collections.abc import Callable, Sequence
from typing import Any

from route_elevation.elevation.schemas import (
    ElevationRecord,
    ProviderKind,
    ProviderResponse,
    Waypoint,
)
from route_elevation.exceptions import DataError, ParseError

Normalizer = Callable[[Any, Sequence[Waypoint]], list[ElevationRecord]]

USGS_NO_DATA = "NoData"


def _coerce_elevation(provider: ProviderKind, value: Any) -> float | None:
    """Convert a payload elevation field to a float, or None when absent.

    Non-finite numbers (NaN, infinity) count as absent.

    Raises:
        ParseError: If the value is present but not numeric.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise ParseError(provider.value, f"Unexpected elevation value: {value!r}")
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        if value.strip() in ("", USGS_NO_DATA):
            return None
        try:
            number = float(value)
        except ValueError as exc:
            raise ParseError(
                provider.value, f"Unexpected elevation value: {value!r}"
            ) from exc
    else:
        raise ParseError(provider.value, f"Unexpected elevation value: {value!r}")
    return number if math.isfinite(number) else None


def _to_record(waypoint: Waypoint, elevation: float | None) -> ElevationRecord:
    if elevation is None:
        return ElevationRecord.failed(
            waypoint, str(DataError(waypoint.latitude, waypoint.longitude))
        )
    return ElevationRecord.ok(waypoint, elevation)


def _require_entries(
    provider: ProviderKind,
    payload: Any,
    key: str,
    waypoints: Sequence[Waypoint],
) -> list[dict[str, Any]]:
    """Extract the per-point list under `key` and check it lines up."""
    if not isinstance(payload, dict):
        raise ParseError(provider.value, "Response is not a JSON object")
    entries = payload.get(key)
    if not isinstance(entries, list):
        raise ParseError(provider.value, f"Response has no '{key}' array")
    if len(entries) != len(waypoints):
        raise ParseError(
            provider.value,
            f"Expected {len(waypoints)} entries in '{key}', got {len(entries)}",
        )
    for entry in entries:
        if not isinstance(entry, dict):
            raise ParseError(provider.value, f"Malformed entry in '{key}': {entry!r}")
    return entries


def normalize_usgs(payload: Any, waypoints: Sequence[Waypoint]) -> list[ElevationRecord]:
    """Normalize a 3DEP ImageServer ``getSamples`` response.

    The payload looks like ``{"samples": [{"value": "123.4", ...}, ...]}``,
    one sample per requested point. A value of ``"NoData"`` marks a point
    outside coverage.
    """
    samples = _require_entries(ProviderKind.USGS, payload, "samples", waypoints)
    return [
        _to_record(waypoint, _coerce_elevation(ProviderKind.USGS, sample.get("value")))
        for waypoint, sample in zip(waypoints, samples)
    ]


def normalize_open_elevation(
    payload: Any, waypoints: Sequence[Waypoint]
) -> list[ElevationRecord]:
    """Normalize an Open-Elevation ``/api/v1/lookup`` response."""
    results = _require_entries(ProviderKind.OPEN_ELEVATION, payload, "results", waypoints)
    return [
        _to_record(
            waypoint,
            _coerce_elevation(ProviderKind.OPEN_ELEVATION, result.get("elevation")),
        )
        for waypoint, result in zip(waypoints, results)
    ]


def normalize_open_topography(
    payload: Any, waypoints: Sequence[Waypoint]
) -> list[ElevationRecord]:
    """Normalize a single-point OpenTopography response.

    The elevation is read from ``height``, falling back to ``elevation``.
    """
    provider = ProviderKind.OPEN_TOPOGRAPHY
    if len(waypoints) != 1:
        raise ParseError(provider.value, "Single-point response needs exactly one waypoint")
    if not isinstance(payload, dict):
        raise ParseError(provider.value, "Response is not a JSON object")
    value = payload.get("height")
    if value is None:
        value = payload.get("elevation")
    return [_to_record(waypoints[0], _coerce_elevation(provider, value))]


_NORMALIZERS: dict[ProviderKind, Normalizer] = {
    ProviderKind.USGS: normalize_usgs,
    ProviderKind.OPEN_ELEVATION: normalize_open_elevation,
    ProviderKind.OPEN_TOPOGRAPHY: normalize_open_topography,
}


def normalize(
    response: ProviderResponse, waypoints: Sequence[Waypoint]
) -> list[ElevationRecord]:
    """Dispatch a tagged provider response to its normalizer.

    Args:
        response: The raw response and the provider that produced it.
        waypoints: The waypoints the request was issued for, in order.

    Returns:
        One record per waypoint, in input order.

    Raises:
        ParseError: If the payload does not match the provider's schema.
    """
    return _NORMALIZERS[response.provider](response.payload, waypoints)
