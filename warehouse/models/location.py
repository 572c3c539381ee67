from datetime import datetime, timezone

from sqlalchemy import BigInteger, CheckConstraint, Column, DateTime, Integer, String

from warehouse.core.stock_rules import can_accommodate, validate_location_fields
from warehouse.database.base import Base


class Location(Base):
    __tablename__ = "locations"

    id = Column(Integer, primary_key=True)
    code = Column(String(100), nullable=False, unique=True, index=True)
    name = Column(String(255), nullable=False)
    capacity = Column(BigInteger, nullable=False)
    # Checked on every edit; inbound movements bump it in LocationRepository.claim.
    version = Column(Integer, nullable=False, default=1)

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        CheckConstraint("capacity > 0", name="ck_locations_capacity_positive"),
    )
    __mapper_args__ = {"version_id_col": version}

    @classmethod
    def new(cls, code, name, capacity) -> "Location":
        code, name, capacity = validate_location_fields(code, name, capacity)
        return cls(code=code, name=name, capacity=capacity)

    def can_accommodate(self, current_occupancy: int, incoming_quantity: int) -> bool:
        return can_accommodate(self.capacity, current_occupancy, incoming_quantity)


__all__ = ["Location"]
