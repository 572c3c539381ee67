"""Domain error taxonomy.

Every error carries the HTTP status the API answers with. Business-rule
rejections of a stock movement also derive from ``MovementError`` so callers
can tell them apart from infrastructure failures, which are never wrapped.
"""

from typing import Optional


class WarehouseError(Exception):
    status_code = 400
    default_message = "Request rejected."

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class MovementError(WarehouseError):
    default_message = "Stock movement rejected."


class NotFoundError(WarehouseError):
    status_code = 404
    default_message = "Resource not found."


class ConflictError(WarehouseError):
    status_code = 409
    default_message = "Request conflicts with current state."


class InvalidInput(WarehouseError, ValueError):
    status_code = 400
    default_message = "Invalid input."


class ProductNotFound(NotFoundError, MovementError):
    default_message = "Product not found."


class LocationNotFound(NotFoundError, MovementError):
    default_message = "Location not found."


class MovementNotFound(NotFoundError):
    default_message = "Stock movement not found."


class StructuralInvalid(InvalidInput, MovementError):
    default_message = "Malformed stock movement."


class InsufficientStock(ConflictError, MovementError):
    default_message = "Insufficient stock for outbound movement."


class CapacityExceeded(ConflictError, MovementError):
    default_message = "Location capacity exceeded for inbound movement."


class DuplicateSku(ConflictError):
    default_message = "SKU already exists."


class DuplicateLocationCode(ConflictError):
    default_message = "Location code already exists."


class ResourceInUse(ConflictError):
    default_message = "Resource is still referenced by stock movements."


class ConcurrencyConflict(ConflictError):
    default_message = "Concurrent update detected, retry the request."


__all__ = [
    "CapacityExceeded",
    "ConcurrencyConflict",
    "ConflictError",
    "DuplicateLocationCode",
    "DuplicateSku",
    "InsufficientStock",
    "InvalidInput",
    "LocationNotFound",
    "MovementError",
    "MovementNotFound",
    "NotFoundError",
    "ProductNotFound",
    "ResourceInUse",
    "StructuralInvalid",
    "WarehouseError",
]
