from datetime import datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from warehouse.core.errors import MovementNotFound
from warehouse.models.stock_movement import StockMovement
from warehouse.repositories.ports import MovementStore

_NEWEST_FIRST = (StockMovement.created_at.desc(), StockMovement.id.desc())


class MovementRepository(MovementStore):
    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, movement: StockMovement) -> StockMovement:
        if movement.created_at is None:
            movement.created_at = datetime.now(timezone.utc)
        self.session.add(movement)
        self.session.flush()
        return movement

    def get_by_id(self, movement_id: int) -> StockMovement:
        movement = self.session.get(StockMovement, movement_id)
        if movement is None:
            raise MovementNotFound("Stock movement {} not found.".format(movement_id))
        return movement

    def get_by_product(self, product_id: int) -> list[StockMovement]:
        rows = self.session.execute(
            select(StockMovement)
            .where(StockMovement.product_id == product_id)
            .order_by(*_NEWEST_FIRST)
        ).scalars()
        return list(rows)

    def get_by_location(self, location_id: int) -> list[StockMovement]:
        rows = self.session.execute(
            select(StockMovement)
            .where(StockMovement.location_id == location_id)
            .order_by(*_NEWEST_FIRST)
        ).scalars()
        return list(rows)

    def list(self, limit: int, offset: int) -> list[StockMovement]:
        rows = self.session.execute(
            select(StockMovement).order_by(*_NEWEST_FIRST).limit(limit).offset(offset)
        ).scalars()
        return list(rows)

    def count(self) -> int:
        return self.session.execute(select(func.count(StockMovement.id))).scalar_one()
