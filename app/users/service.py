# app/users/service.py
from __future__ import annotations
import hashlib
from urllib.parse import urlencode

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings
from app.core.errors import FieldError
from app.core.security import hash_password, create_access_token, verify_password
from app.users.models import User
from app.users.repository import get_by_email, create_user
from app.users.schemas import UserCreate

GRAVATAR_URL = "//www.gravatar.com/avatar/"


def gravatar_url(email: str) -> str:
    digest = hashlib.md5(email.strip().lower().encode("utf-8")).hexdigest()
    return GRAVATAR_URL + digest + "?" + urlencode({"s": "200", "r": "pg", "d": "mm"})


async def register_user(db: AsyncSession, data: UserCreate, settings: Settings) -> str:
    if await get_by_email(db, data.email):
        raise FieldError("User already exists")

    user = await create_user(
        db,
        name=data.name,
        email=data.email,
        hashed_password=hash_password(data.password),
        avatar=gravatar_url(data.email),
    )
    # El commit lo hace el router
    return create_access_token(user.id, settings)


async def authenticate_user(db: AsyncSession, email: str, password: str) -> User | None:
    user = await get_by_email(db, email)
    if not user:
        return None
    if not verify_password(password, user.hashed_password):
        return None
    return user


async def login_user(db: AsyncSession, email: str, password: str, settings: Settings) -> str:
    user = await authenticate_user(db, email, password)
    if not user:
        # mismo mensaje para email desconocido y contraseña incorrecta
        raise FieldError("Invalid Credentials")
    return create_access_token(user.id, settings)
