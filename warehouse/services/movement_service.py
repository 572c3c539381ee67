import logging
from typing import Optional

from warehouse.config import get_settings
from warehouse.core.errors import CapacityExceeded, ConcurrencyConflict, InsufficientStock, MovementError
from warehouse.core.logging import movement_context
from warehouse.core.stock_rules import location_occupancy, validate_movement_fields
from warehouse.database.uow import UnitOfWork
from warehouse.models.stock_movement import StockMovement

logger = logging.getLogger(__name__)


def apply_movement(uow: UnitOfWork, candidate: StockMovement) -> StockMovement:
    """Validate ``candidate`` against current state and write it with the product update.

    Runs entirely inside ``uow``; the caller commits. Product and location rows
    are locked in that order before any check so concurrent movements on the
    same rows serialize. Nothing here retries.
    """
    validate_movement_fields(
        candidate.product_id,
        candidate.location_id,
        candidate.type,
        candidate.quantity,
    )

    product = uow.products.get_by_id(candidate.product_id, for_update=True)
    location = uow.locations.get_by_id(candidate.location_id, for_update=True)

    if candidate.is_outbound:
        if product.quantity < candidate.quantity:
            raise InsufficientStock(
                "Insufficient stock for product {}: requested {}, available {}.".format(
                    product.id, candidate.quantity, product.quantity
                )
            )
    else:
        occupancy = location_occupancy(uow.movements.get_by_location(location.id))
        if not location.can_accommodate(occupancy, candidate.quantity):
            raise CapacityExceeded(
                "Location {} capacity exceeded: occupancy {} + {} > capacity {}.".format(
                    location.code, occupancy, candidate.quantity, location.capacity
                )
            )
        uow.locations.claim(location)

    uow.movements.create(candidate)
    if candidate.is_inbound:
        product.increase_stock(candidate.quantity)
    else:
        product.decrease_stock(candidate.quantity)
    uow.products.update(product)
    return candidate


def record_movement(
    uow: UnitOfWork,
    product_id: int,
    location_id: int,
    movement_type: str,
    quantity: int,
    *,
    max_attempts: Optional[int] = None,
) -> StockMovement:
    """Record one stock movement atomically.

    The read-validate-write sequence is re-run from scratch only when it lost an
    optimistic version check to a concurrent request. Business-rule rejections,
    malformed input included, and persistence failures surface to the caller
    unchanged.
    """
    context = movement_context(product_id, location_id, movement_type, quantity)
    try:
        movement = _record_with_retries(uow, product_id, location_id, movement_type, quantity, max_attempts)
    except MovementError as exc:
        logger.info(
            "Rejected %s movement of %s for product %s at location %s: %s",
            movement_type,
            quantity,
            product_id,
            location_id,
            exc.message,
            extra=dict(context, error=type(exc).__name__),
        )
        raise

    logger.info(
        "Recorded movement %s: %s %s of product %s at location %s",
        movement.id,
        movement.type,
        movement.quantity,
        movement.product_id,
        movement.location_id,
        extra=dict(context, movement_id=movement.id),
    )
    return movement


def _record_with_retries(uow, product_id, location_id, movement_type, quantity, max_attempts):
    product_id, location_id, movement_type, quantity = validate_movement_fields(
        product_id, location_id, movement_type, quantity
    )
    if max_attempts is None:
        max_attempts = get_settings().MOVEMENT_CONFLICT_RETRIES
    max_attempts = max(1, int(max_attempts))

    attempt = 0
    while True:
        attempt += 1
        candidate = StockMovement.new(product_id, location_id, movement_type, quantity)
        try:
            return uow.run(lambda active: apply_movement(active, candidate))
        except ConcurrencyConflict:
            context = movement_context(product_id, location_id, movement_type, quantity, attempt=attempt)
            if attempt >= max_attempts:
                logger.warning(
                    "Giving up on %s movement for product %s at location %s after %s attempts",
                    movement_type,
                    product_id,
                    location_id,
                    attempt,
                    extra=context,
                )
                raise
            logger.warning(
                "Concurrent update on product %s / location %s, retrying (attempt %s of %s)",
                product_id,
                location_id,
                attempt + 1,
                max_attempts,
                extra=context,
            )


def get_movement(uow: UnitOfWork, movement_id: int) -> StockMovement:
    return uow.movements.get_by_id(movement_id)


def list_movements(uow: UnitOfWork, limit: int, offset: int):
    return uow.movements.list(limit, offset), uow.movements.count()


def movements_for_product(uow: UnitOfWork, product_id: int) -> list[StockMovement]:
    uow.products.get_by_id(product_id)
    return uow.movements.get_by_product(product_id)


def movements_for_location(uow: UnitOfWork, location_id: int) -> list[StockMovement]:
    uow.locations.get_by_id(location_id)
    return uow.movements.get_by_location(location_id)


def location_stock(uow: UnitOfWork, location_id: int) -> dict:
    location = uow.locations.get_by_id(location_id)
    occupancy = location_occupancy(uow.movements.get_by_location(location_id))
    return {
        "location_id": location.id,
        "capacity": location.capacity,
        "occupancy": occupancy,
        "available": max(0, location.capacity - occupancy),
    }


__all__ = [
    "apply_movement",
    "get_movement",
    "list_movements",
    "location_stock",
    "movements_for_location",
    "movements_for_product",
    "record_movement",
]
