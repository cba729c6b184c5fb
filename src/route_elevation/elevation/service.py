"""Elevation resolution with ordered provider fallback."""

import logging
from collections.abc import Sequence
from enum import Enum

from route_elevation.config import Settings
from route_elevation.elevation.providers import (
    ElevationProvider,
    OpenTopographyProvider,
    build_providers,
)
from route_elevation.elevation.report import build_report
from route_elevation.elevation.schemas import (
    ElevationRecord,
    ElevationReport,
    Waypoint,
)
from route_elevation.exceptions import (
    ExhaustedProvidersError,
    NetworkError,
    ParseError,
    ProviderConfigurationError,
)

logger = logging.getLogger(__name__)


class PipelineState(str, Enum):
    """Cursor of the fallback state machine."""

    BATCH = "batch"
    SEQUENTIAL_FALLBACK = "sequential-fallback"
    DONE = "done"


class ElevationService:
    """Resolve waypoint elevations across providers in priority order.

    Batch providers are tried in turn; the first whose normalized output
    reaches the acceptance threshold wins. Otherwise the sequential provider
    is driven point by point through its rate limiter, and its output is
    accepted unconditionally.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        batch_providers: Sequence[ElevationProvider] | None = None,
        sequential_provider: OpenTopographyProvider | None = None,
    ) -> None:
        if settings.acceptance_threshold < 0:
            raise ValueError(
                f"acceptance_threshold must be non-negative, got {settings.acceptance_threshold}"
            )
        if batch_providers is None or sequential_provider is None:
            default_batch, default_sequential = build_providers(settings)
            if batch_providers is None:
                batch_providers = default_batch
            if sequential_provider is None:
                sequential_provider = default_sequential
        self._settings = settings
        self._batch_providers = list(batch_providers)
        self._sequential_provider = sequential_provider
        self.state = PipelineState.BATCH

        for provider in self._batch_providers:
            if not provider.supports_batch:
                raise ValueError(f"{provider.name} does not support batch lookups")
        if not self._sequential_provider.supports_single:
            raise ValueError(
                f"{self._sequential_provider.name} does not support single-point lookups"
            )

    @property
    def providers(self) -> list[ElevationProvider]:
        """All providers, in the order they are tried."""
        return [*self._batch_providers, self._sequential_provider]

    async def resolve(self, waypoints: Sequence[Waypoint]) -> ElevationReport:
        """Resolve an elevation record for every waypoint.

        Args:
            waypoints: Waypoints in itinerary order; ``index`` must match position.

        Returns:
            A report with one record per waypoint, in input order.

        Raises:
            ExhaustedProvidersError: If the sequential provider cannot run at all.
        """
        waypoints = list(waypoints)
        for position, waypoint in enumerate(waypoints):
            if waypoint.index != position:
                raise ValueError(
                    f"Waypoint at position {position} has index {waypoint.index}"
                )

        self.state = PipelineState.BATCH
        if not waypoints:
            self.state = PipelineState.DONE
            return build_report([])

        for provider in self._batch_providers:
            records = await self._try_batch(provider, waypoints)
            if records is not None:
                self.state = PipelineState.DONE
                return build_report(records, provider.kind)

        self.state = PipelineState.SEQUENTIAL_FALLBACK
        records = await self._sequential_fallback(waypoints)
        self.state = PipelineState.DONE
        return build_report(records, self._sequential_provider.kind)

    async def resolve_coordinates(
        self, coordinates: Sequence[tuple[float, float]]
    ) -> ElevationReport:
        """Resolve plain ``(latitude, longitude)`` pairs."""
        waypoints = [
            Waypoint(latitude=latitude, longitude=longitude, index=position)
            for position, (latitude, longitude) in enumerate(coordinates)
        ]
        return await self.resolve(waypoints)

    async def _try_batch(
        self, provider: ElevationProvider, waypoints: list[Waypoint]
    ) -> list[ElevationRecord] | None:
        """Run one batch stage; return its records if they are accepted."""
        try:
            response = await provider.batch_lookup(waypoints)
            records = provider.normalize(response, waypoints)
        except (NetworkError, ParseError) as exc:
            logger.warning(
                "Batch provider failed, falling back",
                extra={"provider": provider.name, "error": str(exc)},
            )
            return None

        successes = sum(1 for record in records if record.success)
        if successes < self._settings.acceptance_threshold:
            logger.warning(
                "Batch provider result below acceptance threshold, falling back",
                extra={
                    "provider": provider.name,
                    "successes": successes,
                    "threshold": self._settings.acceptance_threshold,
                },
            )
            return None

        logger.info(
            "Batch provider result accepted",
            extra={"provider": provider.name, "successes": successes, "total": len(records)},
        )
        return records

    async def _sequential_fallback(self, waypoints: list[Waypoint]) -> list[ElevationRecord]:
        """Query the sequential provider one waypoint at a time."""
        provider = self._sequential_provider
        records: list[ElevationRecord] = []
        logger.info(
            "Falling back to sequential lookups",
            extra={"provider": provider.name, "points": len(waypoints)},
        )

        for waypoint in waypoints:
            await provider.limiter.wait()
            try:
                response = await provider.single_lookup(waypoint)
                records.extend(provider.normalize(response, [waypoint]))
            except ProviderConfigurationError as exc:
                logger.error(
                    "Sequential provider cannot execute",
                    extra={"provider": provider.name, "error": str(exc)},
                )
                raise ExhaustedProvidersError(
                    f"All elevation providers exhausted: {exc}"
                ) from exc
            except (NetworkError, ParseError) as exc:
                logger.warning(
                    "Single-point lookup failed",
                    extra={"provider": provider.name, "index": waypoint.index, "error": str(exc)},
                )
                records.append(ElevationRecord.failed(waypoint, str(exc)))

        return records

    def shutdown(self) -> None:
        """Close every provider's HTTP session."""
        for provider in self.providers:
            provider.close()
