from __future__ import annotations

import hashlib
import hmac
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from fastapi import HTTPException, status

from warehouse.config import get_settings

logger = logging.getLogger(__name__)

_DEFAULT_USER_ID = 1


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def login_configured() -> bool:
    settings = get_settings()
    return bool(settings.AUTH_USERNAME and (settings.AUTH_PASSWORD or settings.AUTH_PASSWORD_HASH))


def hash_password(password: str, salt: str, rounds: int) -> str:
    digest = hashlib.pbkdf2_hmac(
        "sha256",
        password.encode("utf-8"),
        salt.encode("utf-8"),
        rounds,
    )
    return digest.hex()


def verify_credentials(username: str, password: str) -> bool:
    settings = get_settings()
    username = (username or "").strip()
    password = (password or "").strip()
    if not username or not password:
        return False

    if not login_configured():
        # Development mode: any non-empty login is accepted locally.
        return settings.ENVIRONMENT.lower() == "local"

    expected_username = settings.AUTH_USERNAME.strip()
    if not hmac.compare_digest(username.casefold(), expected_username.casefold()):
        return False

    if settings.AUTH_PASSWORD_HASH:
        if not settings.AUTH_PASSWORD_SALT:
            raise ValueError("Password salt is not configured.")
        computed = hash_password(password, settings.AUTH_PASSWORD_SALT, settings.AUTH_PBKDF2_ROUNDS)
        return hmac.compare_digest(computed, settings.AUTH_PASSWORD_HASH)

    return hmac.compare_digest(password, settings.AUTH_PASSWORD.strip())


def create_access_token(username: str, *, user_id: int = _DEFAULT_USER_ID) -> tuple[str, datetime]:
    settings = get_settings()
    if not settings.JWT_SECRET:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="JWT auth is not configured",
        )
    issued_at = datetime.now(timezone.utc)
    expires_at = issued_at + timedelta(hours=settings.JWT_EXPIRATION_HOURS)
    claims = {
        "sub": username,
        "user_id": user_id,
        "iat": issued_at,
        "exp": expires_at,
    }
    if settings.JWT_AUDIENCE:
        claims["aud"] = settings.JWT_AUDIENCE
    if settings.JWT_ISSUER:
        claims["iss"] = settings.JWT_ISSUER
    token = jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)
    return token, expires_at


def get_bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    parts = authorization.split()
    if len(parts) == 2 and parts[0].lower() == "bearer":
        return parts[1]
    return None


def decode_token(token: str) -> dict:
    settings = get_settings()
    if not settings.JWT_SECRET:
        raise _unauthorized("JWT auth is not configured")

    options = {"verify_aud": bool(settings.JWT_AUDIENCE), "require": ["exp", "sub"]}
    try:
        return jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            audience=settings.JWT_AUDIENCE,
            issuer=settings.JWT_ISSUER,
            options=options,
        )
    except jwt.PyJWTError as exc:
        logger.info("Rejected bearer token: %s", exc)
        raise _unauthorized("Invalid or expired token") from exc


def authenticate_request(authorization: Optional[str]) -> dict:
    if not authorization:
        raise _unauthorized("Missing authorization header")
    token = get_bearer_token(authorization)
    if not token:
        raise _unauthorized("Invalid authorization header format")
    payload = decode_token(token)
    return {"username": payload.get("sub"), "user_id": payload.get("user_id"), "payload": payload}
