from datetime import datetime, timezone

from sqlalchemy import BigInteger, CheckConstraint, Column, DateTime, Integer, String

from warehouse.core.errors import InsufficientStock
from warehouse.core.stock_rules import validate_positive_delta, validate_quantity, validate_sku_name
from warehouse.database.base import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    sku_name = Column(String(255), nullable=False, unique=True, index=True)
    quantity = Column(BigInteger, nullable=False, default=0)
    version = Column(Integer, nullable=False, default=1)

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_products_quantity_non_negative"),
    )
    __mapper_args__ = {"version_id_col": version}

    @classmethod
    def new(cls, sku_name, quantity=0) -> "Product":
        return cls(sku_name=validate_sku_name(sku_name), quantity=validate_quantity(quantity))

    def increase_stock(self, delta: int) -> None:
        delta = validate_positive_delta(delta)
        self.quantity += delta

    def decrease_stock(self, delta: int) -> None:
        delta = validate_positive_delta(delta)
        if delta > self.quantity:
            raise InsufficientStock(
                "Insufficient stock for {}: requested {}, available {}.".format(
                    self.sku_name, delta, self.quantity
                )
            )
        self.quantity -= delta


__all__ = ["Product"]
