# app/profile/router.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.dependencies import AuthContext, get_auth_context
from app.core.errors import ApiError
from app.core.object_id import object_id
from app.db.session import get_session
from app.posts.repository import delete_posts_by_user
from app.profile import repository as repo
from app.profile.github import GithubClient, GithubLookupError, get_github_client
from app.profile.schemas import (
    ProfileIn,
    ProfileOut,
    ExperienceIn,
    EducationIn,
    MessageOut,
)
from app.profile.service import (
    build_profile_fields,
    hydrate_profile_out,
    hydrate_profiles,
)
from app.users.repository import delete_user

router = APIRouter(prefix="/api/profile", tags=["profile"])

NO_PROFILE = "There is no profile for this user"


async def _my_profile(db: AsyncSession, auth: AuthContext):
    prof = await repo.get_by_user_id(db, auth.user_id)
    if not prof:
        raise ApiError(400, NO_PROFILE)
    return prof


# ---------------------------
# GET /api/profile/me
# ---------------------------
@router.get("/me", response_model=ProfileOut)
async def my_profile(
    auth: AuthContext = Depends(get_auth_context),
    db: AsyncSession = Depends(get_session),
):
    prof = await _my_profile(db, auth)
    return await hydrate_profile_out(db, prof)


# ---------------------------
# POST /api/profile (crear o actualizar)
# ---------------------------
@router.post("", response_model=ProfileOut)
async def upsert_my_profile(
    payload: ProfileIn,
    auth: AuthContext = Depends(get_auth_context),
    db: AsyncSession = Depends(get_session),
):
    prof = await repo.upsert_profile(db, auth.user_id, build_profile_fields(payload))
    await db.commit()
    return await hydrate_profile_out(db, prof)


@router.get("", response_model=List[ProfileOut])
async def all_profiles(db: AsyncSession = Depends(get_session)):
    profiles = await repo.list_profiles(db)
    return await hydrate_profiles(db, profiles)


@router.get("/user/{user_id}", response_model=ProfileOut)
async def profile_by_user(
    user_id: str = Depends(object_id("user_id")),
    db: AsyncSession = Depends(get_session),
):
    prof = await repo.get_by_user_id(db, user_id)
    if not prof:
        raise ApiError(400, "Profile not found")
    return await hydrate_profile_out(db, prof)


@router.delete("", response_model=MessageOut)
async def delete_account(
    auth: AuthContext = Depends(get_auth_context),
    db: AsyncSession = Depends(get_session),
):
    """
    Borra posts, perfil y usuario del caller (en ese orden, un solo commit).
    """
    await delete_posts_by_user(db, auth.user_id)
    await repo.delete_by_user_id(db, auth.user_id)
    await delete_user(db, auth.user_id)
    await db.commit()
    return {"msg": "User deleted"}


# ---------------------------
# EXPERIENCE
# ---------------------------
@router.put("/experience", response_model=ProfileOut)
async def add_experience(
    payload: ExperienceIn,
    auth: AuthContext = Depends(get_auth_context),
    db: AsyncSession = Depends(get_session),
):
    prof = await _my_profile(db, auth)
    await repo.add_experience(
        db,
        prof.id,
        title=payload.title,
        company=payload.company,
        location=payload.location,
        from_date=payload.from_,
        to_date=payload.to,
        current=payload.current,
        description=payload.description,
    )
    await db.commit()
    return await hydrate_profile_out(db, prof)


@router.delete("/experience/{exp_id}", response_model=ProfileOut)
async def delete_experience(
    exp_id: str,
    auth: AuthContext = Depends(get_auth_context),
    db: AsyncSession = Depends(get_session),
):
    prof = await _my_profile(db, auth)
    await repo.remove_experience(db, prof.id, exp_id)
    await db.commit()
    return await hydrate_profile_out(db, prof)


# ---------------------------
# EDUCATION
# ---------------------------
@router.put("/education", response_model=ProfileOut)
async def add_education(
    payload: EducationIn,
    auth: AuthContext = Depends(get_auth_context),
    db: AsyncSession = Depends(get_session),
):
    prof = await _my_profile(db, auth)
    await repo.add_education(
        db,
        prof.id,
        school=payload.school,
        degree=payload.degree,
        fieldofstudy=payload.fieldofstudy,
        from_date=payload.from_,
        to_date=payload.to,
        current=payload.current,
        description=payload.description,
    )
    await db.commit()
    return await hydrate_profile_out(db, prof)


@router.delete("/education/{edu_id}", response_model=ProfileOut)
async def delete_education(
    edu_id: str,
    auth: AuthContext = Depends(get_auth_context),
    db: AsyncSession = Depends(get_session),
):
    prof = await _my_profile(db, auth)
    await repo.remove_education(db, prof.id, edu_id)
    await db.commit()
    return await hydrate_profile_out(db, prof)


# ---------------------------
# GET /api/profile/github/{username}
# ---------------------------
@router.get("/github/{username}")
async def github_repos(
    username: str,
    github: GithubClient = Depends(get_github_client),
):
    try:
        return await github.list_repos(username)
    except GithubLookupError:
        raise ApiError(404, "No Github profile found")
