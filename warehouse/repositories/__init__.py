from warehouse.repositories.location_repository import LocationRepository
from warehouse.repositories.movement_repository import MovementRepository
from warehouse.repositories.ports import LocationStore, MovementStore, ProductStore
from warehouse.repositories.product_repository import ProductRepository

__all__ = [
    "LocationRepository",
    "LocationStore",
    "MovementRepository",
    "MovementStore",
    "ProductRepository",
    "ProductStore",
]
