from datetime import datetime

from pydantic import BaseModel, Field

from warehouse.core.constants import TOKEN_TYPE


class LoginRequest(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class TokenRead(BaseModel):
    token: str
    token_type: str = TOKEN_TYPE
    expires_at: datetime
