"""Functional tests for the elevation API routes."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from route_elevation.elevation.report import build_report
from route_elevation.elevation.schemas import ElevationRecord, ProviderKind, Waypoint
from route_elevation.elevation.service import ElevationService
from route_elevation.exceptions import ExhaustedProvidersError
from route_elevation.main import app


@pytest.fixture
def mock_service() -> MagicMock:
    """Create a mock ElevationService."""
    service = MagicMock(spec=ElevationService)
    service.resolve_coordinates = AsyncMock()
    return service


@pytest.fixture
def client(mock_service: MagicMock) -> TestClient:
    """Create a TestClient with the mocked service injected."""
    app.state.elevation_service = mock_service
    return TestClient(app, raise_server_exceptions=False)


class TestProfileEndpoint:
    def test_returns_report_for_itinerary(
        self, client: TestClient, mock_service: MagicMock
    ) -> None:
        first = Waypoint(latitude=51.5, longitude=-0.1, index=0)
        second = Waypoint(latitude=48.8, longitude=2.3, index=1)
        mock_service.resolve_coordinates.return_value = build_report(
            [ElevationRecord.ok(first, 11.0), ElevationRecord.failed(second, "No elevation data")],
            ProviderKind.USGS,
            now=datetime(2024, 5, 1, tzinfo=timezone.utc),
        )

        response = client.post(
            "/api/v1/profile",
            json={
                "itinerary": [
                    {"latitude": 51.5, "longitude": -0.1},
                    {"latitude": 48.8, "longitude": 2.3},
                ]
            },
        )

        assert response.status_code == 200
        body = response.json()
        assert body["totalPoints"] == 2
        assert body["successfulRequests"] == 1
        assert body["failedRequests"] == 1
        assert body["provider"] == "usgs"
        assert body["elevationData"][1]["error"] == "No elevation data"
        mock_service.resolve_coordinates.assert_awaited_once_with([(51.5, -0.1), (48.8, 2.3)])

    def test_returns_400_for_empty_itinerary(
        self, client: TestClient, mock_service: MagicMock
    ) -> None:
        response = client.post("/api/v1/profile", json={"itinerary": []})

        assert response.status_code == 400
        mock_service.resolve_coordinates.assert_not_awaited()

    def test_returns_422_for_out_of_range_coordinates(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/profile", json={"itinerary": [{"latitude": 999, "longitude": 0}]}
        )

        assert response.status_code == 422

    def test_returns_422_when_body_missing(self, client: TestClient) -> None:
        response = client.post("/api/v1/profile")

        assert response.status_code == 422

    def test_returns_503_when_providers_exhausted(
        self, client: TestClient, mock_service: MagicMock
    ) -> None:
        mock_service.resolve_coordinates.side_effect = ExhaustedProvidersError(
            "All elevation providers exhausted: opentopography: no API key configured"
        )

        response = client.post(
            "/api/v1/profile", json={"itinerary": [{"latitude": 1.0, "longitude": 1.0}]}
        )

        assert response.status_code == 503
        assert "exhausted" in response.json()["detail"]
