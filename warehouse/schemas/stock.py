from datetime import datetime
from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field


class StockMovementCreate(BaseModel):
    product_id: int = Field(ge=1)
    location_id: int = Field(ge=1)
    type: Literal["IN", "OUT"]
    quantity: int = Field(ge=1)


class StockMovementRead(BaseModel):
    id: int
    product_id: int
    location_id: int
    type: str
    quantity: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class StockMovementList(BaseModel):
    data: List[StockMovementRead] = Field(default_factory=list)
    total: int
    limit: int
    offset: int
