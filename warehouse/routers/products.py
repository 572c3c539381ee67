from typing import Optional

from fastapi import APIRouter, Depends, Query

from warehouse.database.uow import UnitOfWork
from warehouse.dependencies import get_uow, require_auth
from warehouse.schemas.product import ProductCreate, ProductList, ProductRead, ProductUpdate
from warehouse.services.pagination import normalize_page
from warehouse.services.product_service import (
    create_product,
    delete_product,
    get_product,
    list_products,
    update_product,
)

router = APIRouter(prefix="/products", tags=["Products"], dependencies=[Depends(require_auth)])


@router.post("", response_model=ProductRead, status_code=201)
def create(payload: ProductCreate, uow: UnitOfWork = Depends(get_uow)):
    return create_product(uow, payload.sku_name, payload.quantity)


@router.get("", response_model=ProductList)
def list_all(
    limit: Optional[int] = Query(None, description="Page size"),
    offset: Optional[int] = Query(None, description="Rows to skip"),
    uow: UnitOfWork = Depends(get_uow),
):
    limit, offset = normalize_page(limit, offset)
    products, total = list_products(uow, limit, offset)
    return ProductList(
        data=[ProductRead.model_validate(product) for product in products],
        total=total,
        limit=limit,
        offset=offset,
    )


@router.get("/{product_id}", response_model=ProductRead)
def read(product_id: int, uow: UnitOfWork = Depends(get_uow)):
    return get_product(uow, product_id)


@router.put("/{product_id}", response_model=ProductRead)
def update(product_id: int, payload: ProductUpdate, uow: UnitOfWork = Depends(get_uow)):
    return update_product(uow, product_id, sku_name=payload.sku_name, quantity=payload.quantity)


@router.delete("/{product_id}")
def delete(product_id: int, uow: UnitOfWork = Depends(get_uow)):
    delete_product(uow, product_id)
    return {"success": True, "message": "Product deleted."}


__all__ = ["router"]
