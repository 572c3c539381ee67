import argparse
import logging

from sqlalchemy import delete

from warehouse.core.errors import DuplicateLocationCode, DuplicateSku
from warehouse.core.logging import setup_logging
from warehouse.database import create_schema
from warehouse.database.uow import UnitOfWork
from warehouse.models.location import Location
from warehouse.models.product import Product
from warehouse.models.stock_movement import StockMovement
from warehouse.services.location_service import create_location
from warehouse.services.product_service import create_product

logger = logging.getLogger(__name__)

SEED_PRODUCTS = (
    ("SKU-001", 100),
    ("SKU-002", 50),
    ("SKU-003", 200),
    ("SKU-004", 75),
    ("SKU-005", 150),
)

SEED_LOCATIONS = (
    ("LOC-A1", "Warehouse A - Shelf 1", 500),
    ("LOC-A2", "Warehouse A - Shelf 2", 500),
    ("LOC-B1", "Warehouse B - Shelf 1", 1000),
    ("LOC-B2", "Warehouse B - Shelf 2", 1000),
    ("LOC-C1", "Cold Storage - Zone 1", 300),
)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Seed sample products and locations.")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Clear existing data before seeding.",
    )
    return parser.parse_args(argv)


def reset_data(uow: UnitOfWork) -> None:
    uow.session.execute(delete(StockMovement))
    uow.session.execute(delete(Product))
    uow.session.execute(delete(Location))
    uow.commit()


def seed(uow: UnitOfWork) -> dict:
    stats = {"products": 0, "locations": 0, "skipped": 0}

    for sku_name, quantity in SEED_PRODUCTS:
        try:
            create_product(uow, sku_name, quantity)
        except DuplicateSku:
            stats["skipped"] += 1
            continue
        stats["products"] += 1
        logger.info("Created product %s (qty: %s)", sku_name, quantity)

    for code, name, capacity in SEED_LOCATIONS:
        try:
            create_location(uow, code, name, capacity)
        except DuplicateLocationCode:
            stats["skipped"] += 1
            continue
        stats["locations"] += 1
        logger.info("Created location %s - %s (capacity: %s)", code, name, capacity)

    return stats


def main(argv=None):
    setup_logging()
    args = parse_args(argv)
    create_schema()

    with UnitOfWork() as uow:
        if args.reset:
            reset_data(uow)
        stats = seed(uow)

    print(
        "Seeded {products} products and {locations} locations ({skipped} already present).".format(**stats)
    )


if __name__ == "__main__":
    main()
