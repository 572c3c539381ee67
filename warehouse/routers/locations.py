from typing import Optional

from fastapi import APIRouter, Depends, Query

from warehouse.database.uow import UnitOfWork
from warehouse.dependencies import get_uow, require_auth
from warehouse.schemas.location import LocationList, LocationRead, LocationStock, LocationWrite
from warehouse.services.location_service import (
    create_location,
    delete_location,
    get_location,
    list_locations,
    update_location,
)
from warehouse.services.movement_service import location_stock
from warehouse.services.pagination import normalize_page

router = APIRouter(prefix="/locations", tags=["Locations"], dependencies=[Depends(require_auth)])


@router.post("", response_model=LocationRead, status_code=201)
def create(payload: LocationWrite, uow: UnitOfWork = Depends(get_uow)):
    return create_location(uow, payload.code, payload.name, payload.capacity)


@router.get("", response_model=LocationList)
def list_all(
    limit: Optional[int] = Query(None, description="Page size"),
    offset: Optional[int] = Query(None, description="Rows to skip"),
    uow: UnitOfWork = Depends(get_uow),
):
    limit, offset = normalize_page(limit, offset)
    locations, total = list_locations(uow, limit, offset)
    return LocationList(
        data=[LocationRead.model_validate(location) for location in locations],
        total=total,
        limit=limit,
        offset=offset,
    )


@router.get("/{location_id}", response_model=LocationRead)
def read(location_id: int, uow: UnitOfWork = Depends(get_uow)):
    return get_location(uow, location_id)


@router.get("/{location_id}/occupancy", response_model=LocationStock)
def occupancy(location_id: int, uow: UnitOfWork = Depends(get_uow)):
    return location_stock(uow, location_id)


@router.put("/{location_id}", response_model=LocationRead)
def update(location_id: int, payload: LocationWrite, uow: UnitOfWork = Depends(get_uow)):
    return update_location(uow, location_id, payload.code, payload.name, payload.capacity)


@router.delete("/{location_id}")
def delete(location_id: int, uow: UnitOfWork = Depends(get_uow)):
    delete_location(uow, location_id)
    return {"success": True, "message": "Location deleted."}


__all__ = ["router"]
