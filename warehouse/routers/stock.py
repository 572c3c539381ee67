from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from warehouse.database.uow import UnitOfWork
from warehouse.dependencies import get_uow, require_auth
from warehouse.schemas.stock import StockMovementCreate, StockMovementList, StockMovementRead
from warehouse.services.movement_service import (
    get_movement,
    list_movements,
    movements_for_location,
    movements_for_product,
    record_movement,
)
from warehouse.services.pagination import normalize_page

router = APIRouter(prefix="/stock-movements", tags=["Stock"], dependencies=[Depends(require_auth)])


@router.post("", response_model=StockMovementRead, status_code=201)
def record(payload: StockMovementCreate, uow: UnitOfWork = Depends(get_uow)):
    return record_movement(
        uow,
        payload.product_id,
        payload.location_id,
        payload.type,
        payload.quantity,
    )


@router.get("", response_model=StockMovementList)
def list_all(
    limit: Optional[int] = Query(None, description="Page size"),
    offset: Optional[int] = Query(None, description="Rows to skip"),
    uow: UnitOfWork = Depends(get_uow),
):
    limit, offset = normalize_page(limit, offset)
    movements, total = list_movements(uow, limit, offset)
    return StockMovementList(
        data=[StockMovementRead.model_validate(movement) for movement in movements],
        total=total,
        limit=limit,
        offset=offset,
    )


@router.get("/product/{product_id}", response_model=List[StockMovementRead])
def for_product(product_id: int, uow: UnitOfWork = Depends(get_uow)):
    return movements_for_product(uow, product_id)


@router.get("/location/{location_id}", response_model=List[StockMovementRead])
def for_location(location_id: int, uow: UnitOfWork = Depends(get_uow)):
    return movements_for_location(uow, location_id)


@router.get("/{movement_id}", response_model=StockMovementRead)
def read(movement_id: int, uow: UnitOfWork = Depends(get_uow)):
    return get_movement(uow, movement_id)


__all__ = ["router"]
