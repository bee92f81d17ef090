# app/users/router.py
from fastapi import APIRouter, Depends
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings, get_settings
from app.core.errors import FieldError
from app.db.session import get_session
from app.users.schemas import UserCreate, TokenOut
from app.users import service as svc

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post("", response_model=TokenOut)
async def register(
    payload: UserCreate,
    db: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_settings),
):
    """
    Registro: crea el usuario (avatar de Gravatar) y devuelve el token.
    """
    try:
        token = await svc.register_user(db, payload, settings)
        await db.commit()
    except IntegrityError:
        # dos registros simultáneos con el mismo email
        await db.rollback()
        raise FieldError("User already exists")
    return {"token": token}
