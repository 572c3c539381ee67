from warehouse.services.location_service import create_location, update_location
from warehouse.services.movement_service import apply_movement, record_movement
from warehouse.services.product_service import create_product, update_product

__all__ = [
    "apply_movement",
    "create_location",
    "create_product",
    "record_movement",
    "update_location",
    "update_product",
]
