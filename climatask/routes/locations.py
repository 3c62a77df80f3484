"""
ClimaTask Backend — Location Route Handlers
=============================================

What:  /locations CRUD and GET /users/{user_id}/locations.

A location whose userId does not reference an existing user is rejected by
the foreign key and surfaces as a 500 with a generic message.
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from climatask.database import get_db_session
from climatask.dependencies import get_location_service
from climatask.schemas.common import ErrorResponse
from climatask.schemas.location import (
    LocationCreate,
    LocationDeleted,
    LocationResponse,
    LocationUpdate,
    LocationWithUser,
)
from climatask.services.location_service import LocationService

router = APIRouter(tags=["Locations"])

_NOT_FOUND = {404: {"description": "Location not found", "model": ErrorResponse}}


@router.post(
    "/locations",
    response_model=LocationResponse,
    status_code=status.HTTP_201_CREATED,
    responses={500: {"description": "Unknown userId or database error", "model": ErrorResponse}},
    summary="Create a location",
)
async def create_location(
    payload: LocationCreate,
    db: AsyncSession = Depends(get_db_session),
    locations: LocationService = Depends(get_location_service),
) -> LocationResponse:
    return await locations.create_location(db, payload)


@router.get(
    "/locations",
    response_model=List[LocationWithUser],
    summary="List locations with their owners",
)
async def list_locations(
    db: AsyncSession = Depends(get_db_session),
    locations: LocationService = Depends(get_location_service),
) -> List[LocationWithUser]:
    return await locations.list_locations(db)


@router.get(
    "/locations/{location_id}",
    response_model=LocationWithUser,
    responses=_NOT_FOUND,
    summary="Get a location with its owner",
)
async def get_location(
    location_id: int,
    db: AsyncSession = Depends(get_db_session),
    locations: LocationService = Depends(get_location_service),
) -> LocationWithUser:
    return await locations.get_location(db, location_id)


@router.put(
    "/locations/{location_id}",
    response_model=LocationResponse,
    responses=_NOT_FOUND,
    summary="Partially update a location",
)
async def update_location(
    location_id: int,
    payload: LocationUpdate,
    db: AsyncSession = Depends(get_db_session),
    locations: LocationService = Depends(get_location_service),
) -> LocationResponse:
    return await locations.update_location(db, location_id, payload)


@router.delete(
    "/locations/{location_id}",
    response_model=LocationDeleted,
    responses=_NOT_FOUND,
    summary="Delete a location",
)
async def delete_location(
    location_id: int,
    db: AsyncSession = Depends(get_db_session),
    locations: LocationService = Depends(get_location_service),
) -> LocationDeleted:
    return await locations.delete_location(db, location_id)


@router.get(
    "/users/{user_id}/locations",
    response_model=List[LocationResponse],
    summary="List one user's locations",
)
async def list_user_locations(
    user_id: int,
    db: AsyncSession = Depends(get_db_session),
    locations: LocationService = Depends(get_location_service),
) -> List[LocationResponse]:
    """An unknown user simply has no locations: the result is []."""
    return await locations.list_user_locations(db, user_id)
