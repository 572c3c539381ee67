from datetime import datetime, timezone

from sqlalchemy import BigInteger, CheckConstraint, Column, DateTime, ForeignKey, Index, Integer, String

from warehouse.core.constants import MOVEMENT_IN, MOVEMENT_OUT
from warehouse.core.stock_rules import validate_movement_fields
from warehouse.database.base import Base


class StockMovement(Base):
    """Append-only ledger entry. Rows are inserted once and never updated."""

    __tablename__ = "stock_movements"

    id = Column(Integer, primary_key=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)
    location_id = Column(Integer, ForeignKey("locations.id"), nullable=False)

    type = Column(String(10), nullable=False)
    quantity = Column(BigInteger, nullable=False)

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        CheckConstraint("type IN ('IN', 'OUT')", name="ck_stock_movements_type"),
        CheckConstraint("quantity > 0", name="ck_stock_movements_quantity_positive"),
        Index("idx_stock_movements_product_id", "product_id"),
        Index("idx_stock_movements_location_id", "location_id"),
        Index("idx_stock_movements_created_at", "created_at"),
    )

    @classmethod
    def new(cls, product_id, location_id, movement_type, quantity) -> "StockMovement":
        product_id, location_id, movement_type, quantity = validate_movement_fields(
            product_id, location_id, movement_type, quantity
        )
        return cls(
            product_id=product_id,
            location_id=location_id,
            type=movement_type,
            quantity=quantity,
        )

    @property
    def is_inbound(self) -> bool:
        return self.type == MOVEMENT_IN

    @property
    def is_outbound(self) -> bool:
        return self.type == MOVEMENT_OUT


__all__ = ["StockMovement"]
