from warehouse.routers.auth import router as auth_router
from warehouse.routers.health import router as health_router
from warehouse.routers.locations import router as locations_router
from warehouse.routers.products import router as products_router
from warehouse.routers.stock import router as stock_router

__all__ = [
    "auth_router",
    "health_router",
    "locations_router",
    "products_router",
    "stock_router",
]
