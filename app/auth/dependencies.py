# app/auth/dependencies.py
from dataclasses import dataclass

from fastapi import Depends, Header
from jose import JWTError

from app.core.config import Settings, get_settings
from app.core.errors import ApiError
from app.core.security import decode_access_token


@dataclass(frozen=True)
class AuthContext:
    """Identidad del caller, se pasa explícitamente a cada handler."""
    user_id: str


def _extract_token(x_auth_token: str | None, authorization: str | None) -> str:
    token = x_auth_token
    if not token and authorization and authorization.lower().startswith("bearer "):
        token = authorization.split(" ", 1)[1].strip()
    if not token:
        raise ApiError(401, "No token, authorization denied")
    return token


async def get_auth_context(
    x_auth_token: str | None = Header(None),
    authorization: str | None = Header(None),
    settings: Settings = Depends(get_settings),
) -> AuthContext:
    token = _extract_token(x_auth_token, authorization)
    try:
        user_id = decode_access_token(token, settings)
    except JWTError:
        raise ApiError(401, "Token is not valid")
    return AuthContext(user_id=user_id)
