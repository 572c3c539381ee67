from typing import Optional

from warehouse.core.stock_rules import validate_quantity, validate_sku_name
from warehouse.database.uow import UnitOfWork
from warehouse.models.product import Product


def create_product(uow: UnitOfWork, sku_name: str, quantity: int) -> Product:
    product = Product.new(sku_name, quantity)
    return uow.run(lambda active: active.products.create(product))


def get_product(uow: UnitOfWork, product_id: int) -> Product:
    return uow.products.get_by_id(product_id)


def list_products(uow: UnitOfWork, limit: int, offset: int):
    return uow.products.list(limit, offset), uow.products.count()


def update_product(
    uow: UnitOfWork,
    product_id: int,
    *,
    sku_name: Optional[str] = None,
    quantity: Optional[int] = None,
) -> Product:
    def _update(active: UnitOfWork) -> Product:
        product = active.products.get_by_id(product_id, for_update=True)
        if sku_name is not None and sku_name.strip():
            product.sku_name = validate_sku_name(sku_name)
        if quantity is not None:
            product.quantity = validate_quantity(quantity)
        return active.products.update(product)

    return uow.run(_update)


def delete_product(uow: UnitOfWork, product_id: int) -> None:
    uow.run(lambda active: active.products.delete(product_id))


__all__ = [
    "create_product",
    "delete_product",
    "get_product",
    "list_products",
    "update_product",
]
