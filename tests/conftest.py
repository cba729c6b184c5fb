"""Shared test fixtures."""

from collections.abc import Callable

import pytest

from route_elevation.config import Settings
from route_elevation.elevation.providers import (
    OpenElevationProvider,
    OpenTopographyProvider,
    UsgsProvider,
)
from route_elevation.elevation.rate_limiter import RateLimiter
from route_elevation.elevation.schemas import Waypoint


class FakeClock:
    """Deterministic clock whose sleep advances time instantly."""

    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def settings() -> Settings:
    """Create test settings pointing at unreachable test hosts."""
    return Settings(
        opentopography_api_key="test-key",
        min_request_delay=0.1,
        acceptance_threshold=1,
        request_timeout=5.0,
        usgs_url="https://usgs.test/getSamples",
        open_elevation_url="https://open-elevation.test/api/v1/lookup",
        opentopography_url="https://opentopography.test/API/getElevation",
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def usgs(settings: Settings) -> UsgsProvider:
    return UsgsProvider(settings.usgs_url)


@pytest.fixture
def open_elevation(settings: Settings) -> OpenElevationProvider:
    return OpenElevationProvider(settings.open_elevation_url)


@pytest.fixture
def open_topography(settings: Settings, clock: FakeClock) -> OpenTopographyProvider:
    return OpenTopographyProvider(
        settings.opentopography_url,
        api_key=settings.opentopography_api_key,
        limiter=RateLimiter(settings.min_request_delay, clock=clock, sleep=clock.sleep),
    )


def _make_waypoints(count: int) -> list[Waypoint]:
    """Points stepping north-east from Chamonix."""
    return [
        Waypoint(latitude=45.92 + 0.01 * position, longitude=6.87 + 0.01 * position, index=position)
        for position in range(count)
    ]


@pytest.fixture
def make_waypoints() -> Callable[[int], list[Waypoint]]:
    return _make_waypoints


@pytest.fixture
def waypoints() -> list[Waypoint]:
    return _make_waypoints(3)
