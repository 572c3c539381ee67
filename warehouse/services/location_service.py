from warehouse.core.stock_rules import validate_location_fields
from warehouse.database.uow import UnitOfWork
from warehouse.models.location import Location


def create_location(uow: UnitOfWork, code: str, name: str, capacity: int) -> Location:
    location = Location.new(code, name, capacity)
    return uow.run(lambda active: active.locations.create(location))


def get_location(uow: UnitOfWork, location_id: int) -> Location:
    return uow.locations.get_by_id(location_id)


def list_locations(uow: UnitOfWork, limit: int, offset: int):
    return uow.locations.list(limit, offset), uow.locations.count()


def update_location(uow: UnitOfWork, location_id: int, code: str, name: str, capacity: int) -> Location:
    # Lowering capacity below current occupancy is allowed; inbound movements
    # keep failing until stock drops or capacity is raised again.
    code, name, capacity = validate_location_fields(code, name, capacity)

    def _update(active: UnitOfWork) -> Location:
        location = active.locations.get_by_id(location_id, for_update=True)
        location.code = code
        location.name = name
        location.capacity = capacity
        return active.locations.update(location)

    return uow.run(_update)


def delete_location(uow: UnitOfWork, location_id: int) -> None:
    uow.run(lambda active: active.locations.delete(location_id))


__all__ = [
    "create_location",
    "delete_location",
    "get_location",
    "list_locations",
    "update_location",
]
