from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from warehouse.core.errors import ConcurrencyConflict, DuplicateSku, ProductNotFound, ResourceInUse
from warehouse.models.product import Product
from warehouse.models.stock_movement import StockMovement
from warehouse.repositories.ports import ProductStore


class ProductRepository(ProductStore):
    def __init__(self, session: Session) -> None:
        self.session = session

    def _sku_taken(self, sku_name: str, exclude_id=None) -> bool:
        stmt = select(Product.id).where(Product.sku_name == sku_name)
        if exclude_id is not None:
            stmt = stmt.where(Product.id != exclude_id)
        return self.session.execute(stmt.limit(1)).first() is not None

    def _flush(self, sku_name: str) -> None:
        try:
            self.session.flush()
        except IntegrityError as exc:
            raise DuplicateSku("SKU '{}' already exists.".format(sku_name)) from exc
        except StaleDataError as exc:
            raise ConcurrencyConflict("Product changed by a concurrent request.") from exc

    def create(self, product: Product) -> Product:
        if self._sku_taken(product.sku_name):
            raise DuplicateSku("SKU '{}' already exists.".format(product.sku_name))
        self.session.add(product)
        self._flush(product.sku_name)
        return product

    def get_by_id(self, product_id: int, *, for_update: bool = False) -> Product:
        stmt = select(Product).where(Product.id == product_id)
        if for_update:
            stmt = stmt.with_for_update()
        product = self.session.execute(stmt).scalars().first()
        if product is None:
            raise ProductNotFound("Product {} not found.".format(product_id))
        return product

    def get_by_sku(self, sku_name: str) -> Product:
        product = (
            self.session.execute(select(Product).where(Product.sku_name == sku_name))
            .scalars()
            .first()
        )
        if product is None:
            raise ProductNotFound("Product with SKU '{}' not found.".format(sku_name))
        return product

    def update(self, product: Product) -> Product:
        if self._sku_taken(product.sku_name, exclude_id=product.id):
            raise DuplicateSku("SKU '{}' already exists.".format(product.sku_name))
        self._flush(product.sku_name)
        return product

    def delete(self, product_id: int) -> None:
        product = self.get_by_id(product_id)
        referenced = self.session.execute(
            select(StockMovement.id).where(StockMovement.product_id == product_id).limit(1)
        ).first()
        if referenced is not None:
            raise ResourceInUse("Product {} has recorded stock movements.".format(product_id))
        self.session.delete(product)
        try:
            self.session.flush()
        except StaleDataError as exc:
            raise ConcurrencyConflict("Product changed by a concurrent request.") from exc

    def list(self, limit: int, offset: int) -> list[Product]:
        rows = self.session.execute(
            select(Product).order_by(Product.id.desc()).limit(limit).offset(offset)
        ).scalars()
        return list(rows)

    def count(self) -> int:
        return self.session.execute(select(func.count(Product.id))).scalar_one()
