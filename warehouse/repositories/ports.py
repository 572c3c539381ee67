"""Persistence contracts consumed by the services.

Implementations are bound to one unit of work; every call participates in
that unit's transaction.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from warehouse.models.location import Location
from warehouse.models.product import Product
from warehouse.models.stock_movement import StockMovement


class ProductStore(ABC):

    @abstractmethod
    def create(self, product: Product) -> Product:
        """Persist a new product and assign its id."""

    @abstractmethod
    def get_by_id(self, product_id: int, *, for_update: bool = False) -> Product:
        """Return the product or raise ProductNotFound."""

    @abstractmethod
    def get_by_sku(self, sku_name: str) -> Product:
        """Return the product or raise ProductNotFound."""

    @abstractmethod
    def update(self, product: Product) -> Product:
        """Flush pending changes of an existing product."""

    @abstractmethod
    def delete(self, product_id: int) -> None:
        """Remove the product or raise ProductNotFound."""

    @abstractmethod
    def list(self, limit: int, offset: int) -> list[Product]:
        """Return one page of products, newest first."""

    @abstractmethod
    def count(self) -> int:
        """Return the total number of products."""


class LocationStore(ABC):

    @abstractmethod
    def create(self, location: Location) -> Location:
        """Persist a new location and assign its id."""

    @abstractmethod
    def get_by_id(self, location_id: int, *, for_update: bool = False) -> Location:
        """Return the location or raise LocationNotFound."""

    @abstractmethod
    def get_by_code(self, code: str) -> Location:
        """Return the location or raise LocationNotFound."""

    @abstractmethod
    def update(self, location: Location) -> Location:
        """Flush pending changes of an existing location."""

    @abstractmethod
    def claim(self, location: Location) -> None:
        """Bump the location version, raising ConcurrencyConflict if it moved."""

    @abstractmethod
    def delete(self, location_id: int) -> None:
        """Remove the location or raise LocationNotFound."""

    @abstractmethod
    def list(self, limit: int, offset: int) -> list[Location]:
        """Return one page of locations, newest first."""

    @abstractmethod
    def count(self) -> int:
        """Return the total number of locations."""


class MovementStore(ABC):

    @abstractmethod
    def create(self, movement: StockMovement) -> StockMovement:
        """Append a movement to the ledger, assigning id and timestamp."""

    @abstractmethod
    def get_by_id(self, movement_id: int) -> StockMovement:
        """Return the movement or raise MovementNotFound."""

    @abstractmethod
    def get_by_product(self, product_id: int) -> list[StockMovement]:
        """Return every movement referencing the product."""

    @abstractmethod
    def get_by_location(self, location_id: int) -> list[StockMovement]:
        """Return every movement recorded at the location, in any order."""

    @abstractmethod
    def list(self, limit: int, offset: int) -> list[StockMovement]:
        """Return one page of movements, newest first."""

    @abstractmethod
    def count(self) -> int:
        """Return the total number of movements."""
