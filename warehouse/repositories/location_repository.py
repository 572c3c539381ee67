from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.attributes import set_committed_value
from sqlalchemy.orm.exc import StaleDataError

from warehouse.core.errors import ConcurrencyConflict, DuplicateLocationCode, LocationNotFound, ResourceInUse
from warehouse.models.location import Location
from warehouse.models.stock_movement import StockMovement
from warehouse.repositories.ports import LocationStore


class LocationRepository(LocationStore):
    def __init__(self, session: Session) -> None:
        self.session = session

    def _code_taken(self, code: str, exclude_id=None) -> bool:
        stmt = select(Location.id).where(Location.code == code)
        if exclude_id is not None:
            stmt = stmt.where(Location.id != exclude_id)
        return self.session.execute(stmt.limit(1)).first() is not None

    def _flush(self, code: str) -> None:
        try:
            self.session.flush()
        except IntegrityError as exc:
            raise DuplicateLocationCode("Location code '{}' already exists.".format(code)) from exc
        except StaleDataError as exc:
            raise ConcurrencyConflict("Location changed by a concurrent request.") from exc

    def create(self, location: Location) -> Location:
        if self._code_taken(location.code):
            raise DuplicateLocationCode("Location code '{}' already exists.".format(location.code))
        self.session.add(location)
        self._flush(location.code)
        return location

    def get_by_id(self, location_id: int, *, for_update: bool = False) -> Location:
        stmt = select(Location).where(Location.id == location_id)
        if for_update:
            stmt = stmt.with_for_update()
        location = self.session.execute(stmt).scalars().first()
        if location is None:
            raise LocationNotFound("Location {} not found.".format(location_id))
        return location

    def get_by_code(self, code: str) -> Location:
        location = (
            self.session.execute(select(Location).where(Location.code == code))
            .scalars()
            .first()
        )
        if location is None:
            raise LocationNotFound("Location with code '{}' not found.".format(code))
        return location

    def update(self, location: Location) -> Location:
        if self._code_taken(location.code, exclude_id=location.id):
            raise DuplicateLocationCode("Location code '{}' already exists.".format(location.code))
        self._flush(location.code)
        return location

    def claim(self, location: Location) -> None:
        seen = location.version
        result = self.session.execute(
            update(Location)
            .where(Location.id == location.id, Location.version == seen)
            .values(version=seen + 1)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            raise ConcurrencyConflict(
                "Location {} changed while the movement was being validated.".format(location.id)
            )
        set_committed_value(location, "version", seen + 1)

    def delete(self, location_id: int) -> None:
        location = self.get_by_id(location_id)
        referenced = self.session.execute(
            select(StockMovement.id).where(StockMovement.location_id == location_id).limit(1)
        ).first()
        if referenced is not None:
            raise ResourceInUse("Location {} has recorded stock movements.".format(location_id))
        self.session.delete(location)
        try:
            self.session.flush()
        except StaleDataError as exc:
            raise ConcurrencyConflict("Location changed by a concurrent request.") from exc

    def list(self, limit: int, offset: int) -> list[Location]:
        rows = self.session.execute(
            select(Location).order_by(Location.id.desc()).limit(limit).offset(offset)
        ).scalars()
        return list(rows)

    def count(self) -> int:
        return self.session.execute(select(func.count(Location.id))).scalar_one()
