from typing import Optional

from fastapi import Header

from warehouse.core.security import authenticate_request
from warehouse.database.uow import UnitOfWork


def get_uow():
    with UnitOfWork() as uow:
        yield uow


def require_auth(authorization: Optional[str] = Header(None)):
    return authenticate_request(authorization)


__all__ = ["get_uow", "require_auth"]
