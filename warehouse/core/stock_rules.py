from warehouse.core.constants import MOVEMENT_IN, MOVEMENT_OUT, MOVEMENT_TYPES
from warehouse.core.errors import InvalidInput, StructuralInvalid


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def normalize_text(value) -> str:
    if value is None:
        return ""
    return str(value).strip()


def validate_sku_name(sku_name) -> str:
    sku_name = normalize_text(sku_name)
    if not sku_name:
        raise InvalidInput("SKU name cannot be empty.")
    return sku_name


def validate_quantity(quantity) -> int:
    if not _is_int(quantity):
        raise InvalidInput("Quantity must be an integer.")
    if quantity < 0:
        raise InvalidInput("Quantity cannot be negative.")
    return quantity


def validate_positive_delta(delta) -> int:
    if not _is_int(delta) or delta <= 0:
        raise InvalidInput("Quantity change must be a positive integer.")
    return delta


def validate_location_fields(code, name, capacity):
    code = normalize_text(code)
    name = normalize_text(name)
    if not code:
        raise InvalidInput("Location code cannot be empty.")
    if not name:
        raise InvalidInput("Location name cannot be empty.")
    if not _is_int(capacity) or capacity <= 0:
        raise InvalidInput("Capacity must be a positive integer.")
    return code, name, capacity


def validate_movement_fields(product_id, location_id, movement_type, quantity):
    if not _is_int(product_id) or product_id <= 0:
        raise StructuralInvalid("Invalid product ID.")
    if not _is_int(location_id) or location_id <= 0:
        raise StructuralInvalid("Invalid location ID.")
    if movement_type not in MOVEMENT_TYPES:
        raise StructuralInvalid("Invalid movement type.")
    if not _is_int(quantity) or quantity <= 0:
        raise StructuralInvalid("Quantity must be positive.")
    return product_id, location_id, movement_type, quantity


def signed_quantity(movement_type: str, quantity: int) -> int:
    if movement_type == MOVEMENT_IN:
        return quantity
    if movement_type == MOVEMENT_OUT:
        return -quantity
    raise StructuralInvalid("Invalid movement type.")


def location_occupancy(movements) -> int:
    """Net stock held at a location: IN adds, OUT subtracts, order is irrelevant."""
    total = 0
    for movement in movements:
        total += signed_quantity(movement.type, movement.quantity)
    return total


def can_accommodate(capacity: int, current_occupancy: int, incoming_quantity: int) -> bool:
    return current_occupancy + incoming_quantity <= capacity
