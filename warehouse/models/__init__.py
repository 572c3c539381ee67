from warehouse.models.location import Location
from warehouse.models.product import Product
from warehouse.models.stock_movement import StockMovement

__all__ = ["Location", "Product", "StockMovement"]
