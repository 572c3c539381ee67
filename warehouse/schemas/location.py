from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class LocationWrite(BaseModel):
    code: str = Field(min_length=1)
    name: str = Field(min_length=1)
    capacity: int = Field(ge=1)


class LocationRead(BaseModel):
    id: int
    code: str
    name: str
    capacity: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class LocationList(BaseModel):
    data: List[LocationRead] = Field(default_factory=list)
    total: int
    limit: int
    offset: int


class LocationStock(BaseModel):
    location_id: int
    capacity: int
    occupancy: int
    available: int
