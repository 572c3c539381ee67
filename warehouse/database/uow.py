"""Explicit transactional boundary.

    with UnitOfWork() as uow:
        product = uow.products.get_by_id(1, for_update=True)
        ...
        uow.commit()

Leaving the block with an exception rolls back; leaving it without
``commit()`` discards uncommitted work when the session closes. Objects
loaded inside the block stay readable afterwards.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, TypeVar

from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from warehouse.core.errors import ConcurrencyConflict
from warehouse.database.session import SessionLocal
from warehouse.repositories.location_repository import LocationRepository
from warehouse.repositories.movement_repository import MovementRepository
from warehouse.repositories.product_repository import ProductRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")


class UnitOfWork:
    def __init__(self, session_factory: Callable[[], Session] = SessionLocal) -> None:
        self._session_factory = session_factory
        self.session: Optional[Session] = None
        self.products: Optional[ProductRepository] = None
        self.locations: Optional[LocationRepository] = None
        self.movements: Optional[MovementRepository] = None

    def __enter__(self) -> "UnitOfWork":
        self.session = self._session_factory()
        self.products = ProductRepository(self.session)
        self.locations = LocationRepository(self.session)
        self.movements = MovementRepository(self.session)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            if exc_type is not None:
                self.rollback()
        finally:
            # close() drops uncommitted work but leaves loaded objects readable.
            self.session.close()
            self.session = None

    def commit(self) -> None:
        try:
            self.session.commit()
        except StaleDataError as exc:
            self.session.rollback()
            raise ConcurrencyConflict() from exc

    def rollback(self) -> None:
        if self.session is not None:
            self.session.rollback()

    def run(self, fn: Callable[["UnitOfWork"], T]) -> T:
        """Run ``fn`` inside this unit of work and commit, or roll back everything."""
        try:
            result = fn(self)
            self.commit()
        except Exception:
            self.rollback()
            raise
        return result


__all__ = ["UnitOfWork"]
