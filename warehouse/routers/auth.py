import logging

from fastapi import APIRouter, HTTPException, status

from warehouse.core.security import create_access_token, verify_credentials
from warehouse.schemas.auth import LoginRequest, TokenRead

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/login", response_model=TokenRead)
def login(payload: LoginRequest):
    try:
        valid = verify_credentials(payload.username, payload.password)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc
    if not valid:
        logger.info("Failed login for %s", payload.username)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials.")

    token, expires_at = create_access_token(payload.username.strip())
    return TokenRead(token=token, expires_at=expires_at)


__all__ = ["router"]
