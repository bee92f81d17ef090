# app/auth/router.py
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.dependencies import AuthContext, get_auth_context
from app.auth.schemas import LoginIn
from app.core.config import Settings, get_settings
from app.core.errors import ApiError
from app.db.session import get_session
from app.users.repository import get_by_id
from app.users.schemas import UserOut, TokenOut
from app.users import service as svc

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.get("", response_model=UserOut)
async def current_user(
    auth: AuthContext = Depends(get_auth_context),
    db: AsyncSession = Depends(get_session),
):
    user = await get_by_id(db, auth.user_id)
    if not user:
        raise ApiError(404, "User not found")
    return user


@router.post("", response_model=TokenOut)
async def login(
    payload: LoginIn,
    db: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_settings),
):
    token = await svc.login_user(db, payload.email, payload.password, settings)
    return {"token": token}
