# app/profile/repository.py
from typing import Any

from sqlalchemy import select, delete, desc
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.object_id import new_object_id
from app.db.base import utcnow
from app.profile.models import Profile, Experience, Education

# INSERT ... ON CONFLICT por dialecto
_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


async def get_by_user_id(db: AsyncSession, user_id: str) -> Profile | None:
    res = await db.execute(
        select(Profile)
        .where(Profile.user_id == user_id)
        .execution_options(populate_existing=True)
    )
    return res.scalar_one_or_none()


async def list_profiles(db: AsyncSession) -> list[Profile]:
    res = await db.execute(select(Profile).order_by(Profile.date))
    return list(res.scalars())


async def upsert_profile(db: AsyncSession, user_id: str, fields: dict[str, Any]) -> Profile:
    """
    Crea el perfil si no existe; si existe reemplaza los campos escalares.
    experience/education no se tocan.
    """
    insert = _UPSERT_INSERTS.get(db.get_bind().dialect.name)
    if insert is not None:
        stmt = insert(Profile).values(
            id=new_object_id(), user_id=user_id, date=utcnow(), **fields
        )
        stmt = stmt.on_conflict_do_update(index_elements=[Profile.user_id], set_=fields)
        await db.execute(stmt)
    else:
        prof = await get_by_user_id(db, user_id)
        if prof:
            for key, value in fields.items():
                setattr(prof, key, value)
        else:
            db.add(Profile(user_id=user_id, **fields))
        await db.flush()

    return await get_by_user_id(db, user_id)


async def delete_by_user_id(db: AsyncSession, user_id: str) -> None:
    profile_ids = select(Profile.id).where(Profile.user_id == user_id)
    await db.execute(delete(Experience).where(Experience.profile_id.in_(profile_ids)))
    await db.execute(delete(Education).where(Education.profile_id.in_(profile_ids)))
    await db.execute(delete(Profile).where(Profile.user_id == user_id))


# -------------------------
# EXPERIENCE / EDUCATION
# -------------------------
async def list_experience(db: AsyncSession, profile_id: str) -> list[Experience]:
    res = await db.execute(
        select(Experience)
        .where(Experience.profile_id == profile_id)
        .order_by(desc(Experience.created_at), desc(Experience.id))
    )
    return list(res.scalars())


async def list_education(db: AsyncSession, profile_id: str) -> list[Education]:
    res = await db.execute(
        select(Education)
        .where(Education.profile_id == profile_id)
        .order_by(desc(Education.created_at), desc(Education.id))
    )
    return list(res.scalars())


async def add_experience(db: AsyncSession, profile_id: str, **fields) -> Experience:
    exp = Experience(profile_id=profile_id, **fields)
    db.add(exp)
    await db.flush()
    return exp


async def add_education(db: AsyncSession, profile_id: str, **fields) -> Education:
    edu = Education(profile_id=profile_id, **fields)
    db.add(edu)
    await db.flush()
    return edu


async def remove_experience(db: AsyncSession, profile_id: str, exp_id: str) -> int:
    """Borra por id; si no existe no pasa nada (devuelve 0)."""
    res = await db.execute(
        delete(Experience).where(
            Experience.profile_id == profile_id,
            Experience.id == exp_id,
        )
    )
    return res.rowcount or 0


async def remove_education(db: AsyncSession, profile_id: str, edu_id: str) -> int:
    res = await db.execute(
        delete(Education).where(
            Education.profile_id == profile_id,
            Education.id == edu_id,
        )
    )
    return res.rowcount or 0
