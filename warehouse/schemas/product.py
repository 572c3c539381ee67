from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ProductCreate(BaseModel):
    sku_name: str = Field(min_length=1)
    quantity: int = Field(default=0, ge=0)


class ProductUpdate(BaseModel):
    sku_name: Optional[str] = None
    quantity: Optional[int] = Field(default=None, ge=0)


class ProductRead(BaseModel):
    id: int
    sku_name: str
    quantity: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ProductList(BaseModel):
    data: List[ProductRead] = Field(default_factory=list)
    total: int
    limit: int
    offset: int
