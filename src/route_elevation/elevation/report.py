"""Aggregation of accepted elevation records into the final report."""

from collections.abc import Sequence
from datetime import datetime, timezone

from route_elevation.elevation.schemas import ElevationRecord, ElevationReport, ProviderKind


def build_report(
    records: Sequence[ElevationRecord],
    provider: ProviderKind | None = None,
    *,
    now: datetime | None = None,
) -> ElevationReport:
    """Wrap an accepted record sequence into an ElevationReport.

    Every record is kept, failed ones included, in the given order.

    Args:
        records: One record per waypoint, in itinerary order.
        provider: The provider whose output was accepted, if any.
        now: Report timestamp; defaults to the current UTC time.
    """
    success_count = sum(1 for record in records if record.success)
    return ElevationReport(
        timestamp=now or datetime.now(timezone.utc),
        total_points=len(records),
        success_count=success_count,
        fail_count=len(records) - success_count,
        provider=provider,
        records=list(records),
    )
