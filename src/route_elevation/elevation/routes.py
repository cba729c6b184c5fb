"""API routes for elevation profiles."""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Request, status

from route_elevation.elevation.schemas import ProfileRequest
from route_elevation.elevation.service import ElevationService
from route_elevation.exceptions import ExhaustedProvidersError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["elevation"])


def get_elevation_service(request: Request) -> ElevationService:
    """FastAPI dependency that retrieves the ElevationService from app state."""
    service: ElevationService = request.app.state.elevation_service
    return service


@router.post("/profile", summary="Resolve elevations along an itinerary")
async def profile(
    body: ProfileRequest,
    service: Annotated[ElevationService, Depends(get_elevation_service)],
) -> dict[str, Any]:
    """Resolve an elevation for every itinerary point.

    Args:
        body: The itinerary as an ordered list of coordinates.
        service: Injected ElevationService instance.

    Returns:
        The elevation report with camelCase field names.
    """
    if not body.itinerary:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No itinerary points provided",
        )

    coordinates = [(point.latitude, point.longitude) for point in body.itinerary]
    try:
        report = await service.resolve_coordinates(coordinates)
    except ExhaustedProvidersError as exc:
        logger.error("Elevation providers exhausted", extra={"error": str(exc)})
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(exc),
        ) from exc

    return report.model_dump(mode="json", by_alias=True)
