"""Pydantic schemas for waypoints, elevation records and reports."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ProviderKind(str, Enum):
    """Closed set of elevation providers, in default priority order."""

    USGS = "usgs"
    OPEN_ELEVATION = "open-elevation"
    OPEN_TOPOGRAPHY = "opentopography"


class Waypoint(BaseModel):
    """One itinerary coordinate and its position in the input sequence."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    index: int = Field(ge=0)


class ProviderResponse(BaseModel):
    """Raw provider payload tagged with the provider that produced it."""

    model_config = ConfigDict(frozen=True)

    provider: ProviderKind
    payload: Any


class ElevationRecord(BaseModel):
    """Elevation outcome for a single waypoint."""

    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float
    elevation: float | None = None
    success: bool
    error: str | None = None

    @model_validator(mode="after")
    def _check_outcome(self) -> "ElevationRecord":
        if self.success != (self.elevation is not None):
            raise ValueError("success must be true exactly when elevation is present")
        if self.success == (self.error is not None):
            raise ValueError("error must be present exactly when success is false")
        return self

    @classmethod
    def ok(cls, waypoint: Waypoint, elevation: float) -> "ElevationRecord":
        return cls(
            latitude=waypoint.latitude,
            longitude=waypoint.longitude,
            elevation=elevation,
            success=True,
        )

    @classmethod
    def failed(cls, waypoint: Waypoint, error: str) -> "ElevationRecord":
        return cls(
            latitude=waypoint.latitude,
            longitude=waypoint.longitude,
            success=False,
            error=error,
        )


class ElevationReport(BaseModel):
    """Final pipeline output, serialized with camelCase field names."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    timestamp: datetime
    total_points: int = Field(alias="totalPoints")
    success_count: int = Field(alias="successfulRequests")
    fail_count: int = Field(alias="failedRequests")
    provider: ProviderKind | None = None
    records: list[ElevationRecord] = Field(alias="elevationData")

    @model_validator(mode="after")
    def _check_counts(self) -> "ElevationReport":
        if len(self.records) != self.total_points:
            raise ValueError("records length must equal total_points")
        if self.success_count + self.fail_count != self.total_points:
            raise ValueError("success_count + fail_count must equal total_points")
        return self


class Coordinate(BaseModel):
    """A bare latitude/longitude pair as supplied by callers."""

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class ProfileRequest(BaseModel):
    """Request body for the elevation profile endpoint."""

    itinerary: list[Coordinate]
