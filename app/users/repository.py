# app/users/repository.py
from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession
from app.users.models import User


async def get_by_email(db: AsyncSession, email: str) -> User | None:
    res = await db.execute(select(User).where(User.email == email))
    return res.scalar_one_or_none()


async def get_by_id(db: AsyncSession, user_id: str) -> User | None:
    res = await db.execute(select(User).where(User.id == user_id))
    return res.scalar_one_or_none()


async def get_many(db: AsyncSession, user_ids: list[str]) -> dict[str, User]:
    if not user_ids:
        return {}
    res = await db.execute(select(User).where(User.id.in_(list(set(user_ids)))))
    return {u.id: u for u in res.scalars()}


async def create_user(
    db: AsyncSession, name: str, email: str, hashed_password: str, avatar: str | None
) -> User:
    user = User(name=name, email=email, hashed_password=hashed_password, avatar=avatar)
    db.add(user)
    await db.flush()
    await db.refresh(user)
    return user


async def delete_user(db: AsyncSession, user_id: str) -> None:
    await db.execute(delete(User).where(User.id == user_id))
