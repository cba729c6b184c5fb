"""Application configuration loaded from environment variables."""

import os
from dataclasses import dataclass

USGS_URL = (
    "https://elevation.nationalmap.gov/arcgis/rest/services/"
    "3DEPElevation/ImageServer/getSamples"
)
OPEN_ELEVATION_URL = "https://api.open-elevation.com/api/v1/lookup"
OPENTOPOGRAPHY_URL = "https://portal.opentopography.org/API/getElevation"


@dataclass(frozen=True, slots=True)
class Settings:
    """Application settings populated from environment variables."""

    opentopography_api_key: str = ""
    opentopography_dem_type: str = "SRTMGL1"
    min_request_delay: float = 1.0
    acceptance_threshold: int = 1
    request_timeout: float = 30.0
    usgs_url: str = USGS_URL
    open_elevation_url: str = OPEN_ELEVATION_URL
    opentopography_url: str = OPENTOPOGRAPHY_URL

    @classmethod
    def from_env(cls) -> "Settings":
        """Create settings from environment variables.

        Returns:
            A frozen Settings instance with values from the environment.
        """
        return cls(
            opentopography_api_key=os.getenv("OPENTOPOGRAPHY_API_KEY", ""),
            opentopography_dem_type=os.getenv("OPENTOPOGRAPHY_DEM_TYPE", "SRTMGL1"),
            min_request_delay=float(os.getenv("MIN_REQUEST_DELAY", "1.0")),
            acceptance_threshold=int(os.getenv("ACCEPTANCE_THRESHOLD", "1")),
            request_timeout=float(os.getenv("REQUEST_TIMEOUT_SECONDS", "30")),
            usgs_url=os.getenv("USGS_URL", USGS_URL),
            open_elevation_url=os.getenv("OPEN_ELEVATION_URL", OPEN_ELEVATION_URL),
            opentopography_url=os.getenv("OPENTOPOGRAPHY_URL", OPENTOPOGRAPHY_URL),
        )
