"""HTTP clients for the external elevation services.

Each provider wraps one service's request mechanics behind the same
``async`` capability interface. Blocking ``requests`` calls run on the
event loop's default executor.
"""

import asyncio
import functools
import json
import logging
from abc import ABC
from collections.abc import Sequence
from typing import Any

import requests

from route_elevation.config import Settings
from route_elevation.elevation.normalizers import normalize
from route_elevation.elevation.rate_limiter import RateLimiter
from route_elevation.elevation.schemas import (
    ElevationRecord,
    ProviderKind,
    ProviderResponse,
    Waypoint,
)
from route_elevation.exceptions import MissingCredentialError, NetworkError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0
WGS84_WKID = 4326


class ElevationProvider(ABC):
    """Base class for elevation services.

    Subclasses set ``kind`` and override the lookups they support.
    """

    kind: ProviderKind
    supports_batch: bool = False
    supports_single: bool = False

    def __init__(
        self,
        url: str,
        *,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ) -> None:
        self._url = url
        self._timeout = timeout
        self._session = session or requests.Session()

    @property
    def name(self) -> str:
        return self.kind.value

    async def batch_lookup(self, waypoints: Sequence[Waypoint]) -> ProviderResponse:
        raise NotImplementedError(f"{self.name} does not support batch lookups")

    async def single_lookup(self, waypoint: Waypoint) -> ProviderResponse:
        raise NotImplementedError(f"{self.name} does not support single-point lookups")

    def normalize(
        self, response: ProviderResponse, waypoints: Sequence[Waypoint]
    ) -> list[ElevationRecord]:
        return normalize(response, waypoints)

    def close(self) -> None:
        self._session.close()

    def _send(self, method: str, **kwargs: Any) -> ProviderResponse:
        """Issue a blocking HTTP request and wrap the decoded body.

        A body that is not JSON is kept as text; the normalizer rejects it.

        Raises:
            NetworkError: On connection failure, timeout or non-2xx status.
        """
        try:
            response = self._session.request(
                method, self._url, timeout=self._timeout, **kwargs
            )
            response.raise_for_status()
        except requests.exceptions.RequestException as exc:
            raise NetworkError(self.name, str(exc)) from exc

        try:
            payload: Any = response.json()
        except ValueError:
            logger.warning(
                "Provider returned a non-JSON body",
                extra={"provider": self.name, "status": response.status_code},
            )
            payload = response.text
        return ProviderResponse(provider=self.kind, payload=payload)

    async def _request(self, method: str, **kwargs: Any) -> ProviderResponse:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            None, functools.partial(self._send, method, **kwargs)
        )


class UsgsProvider(ElevationProvider):
    """USGS 3DEP ImageServer ``getSamples``: free, batch only.

    All coordinates travel in the single ``geometry`` query parameter as an
    esri multipoint.
    """

    kind = ProviderKind.USGS
    supports_batch = True

    async def batch_lookup(self, waypoints: Sequence[Waypoint]) -> ProviderResponse:
        geometry = {
            "points": [[waypoint.longitude, waypoint.latitude] for waypoint in waypoints],
            "spatialReference": {"wkid": WGS84_WKID},
        }
        params = {
            "geometry": json.dumps(geometry, separators=(",", ":")),
            "geometryType": "esriGeometryMultipoint",
            "returnFirstValueOnly": "true",
            "f": "json",
        }
        logger.info(
            "Requesting USGS batch elevations", extra={"points": len(waypoints)}
        )
        return await self._request("GET", params=params)


class OpenElevationProvider(ElevationProvider):
    """Open-Elevation ``/api/v1/lookup``: free, batch only."""

    kind = ProviderKind.OPEN_ELEVATION
    supports_batch = True

    async def batch_lookup(self, waypoints: Sequence[Waypoint]) -> ProviderResponse:
        body = {
            "locations": [
                {"latitude": waypoint.latitude, "longitude": waypoint.longitude}
                for waypoint in waypoints
            ]
        }
        logger.info(
            "Requesting Open-Elevation batch elevations",
            extra={"points": len(waypoints)},
        )
        return await self._request("POST", json=body)


class OpenTopographyProvider(ElevationProvider):
    """OpenTopography point query: API-key gated, single point only.

    Owns its rate limiter; callers pace each call through ``limiter.wait()``.
    """

    kind = ProviderKind.OPEN_TOPOGRAPHY
    supports_single = True

    def __init__(
        self,
        url: str,
        *,
        api_key: str,
        limiter: RateLimiter,
        dem_type: str = "SRTMGL1",
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ) -> None:
        super().__init__(url, timeout=timeout, session=session)
        self._api_key = api_key
        self._dem_type = dem_type
        self.limiter = limiter

    async def single_lookup(self, waypoint: Waypoint) -> ProviderResponse:
        """Look up one waypoint.

        Raises:
            MissingCredentialError: If no API key was configured.
            NetworkError: If the request fails.
        """
        if not self._api_key:
            raise MissingCredentialError(self.name)
        params = {
            "demtype": self._dem_type,
            "lat": waypoint.latitude,
            "lon": waypoint.longitude,
            "outputFormat": "json",
            "API_Key": self._api_key,
        }
        return await self._request("GET", params=params)


def build_providers(
    settings: Settings,
) -> tuple[list[ElevationProvider], OpenTopographyProvider]:
    """Build the default batch chain and the terminal sequential provider."""
    batch_providers: list[ElevationProvider] = [
        UsgsProvider(settings.usgs_url, timeout=settings.request_timeout),
        OpenElevationProvider(settings.open_elevation_url, timeout=settings.request_timeout),
    ]
    sequential = OpenTopographyProvider(
        settings.opentopography_url,
        api_key=settings.opentopography_api_key,
        limiter=RateLimiter(settings.min_request_delay),
        dem_type=settings.opentopography_dem_type,
        timeout=settings.request_timeout,
    )
    return batch_providers, sequential
