# app/posts/router.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.dependencies import AuthContext, get_auth_context
from app.core.errors import ApiError
from app.core.object_id import object_id
from app.db.session import get_session
from app.posts import repository as repo
from app.posts.schemas import TextIn, PostOut, LikeOut, CommentOut
from app.posts.service import hydrate_post_out, likes_out, comments_out
from app.profile.schemas import MessageOut
from app.users.repository import get_by_id

router = APIRouter(prefix="/api/posts", tags=["posts"])


async def _get_post_or_404(db: AsyncSession, post_id: str):
    post = await repo.get_post(db, post_id)
    if not post:
        raise ApiError(404, "Post not found")
    return post


async def _get_author(db: AsyncSession, auth: AuthContext):
    user = await get_by_id(db, auth.user_id)
    if not user:
        raise ApiError(404, "User not found")
    return user


@router.post("", response_model=PostOut)
async def publish(
    payload: TextIn,
    auth: AuthContext = Depends(get_auth_context),
    db: AsyncSession = Depends(get_session),
):
    user = await _get_author(db, auth)
    post = await repo.create_post(
        db,
        user_id=user.id,
        text=payload.text,
        name=user.name,
        avatar=user.avatar,
    )
    await db.commit()
    return await hydrate_post_out(db, post)


@router.get("", response_model=List[PostOut])
async def all_posts(
    auth: AuthContext = Depends(get_auth_context),
    db: AsyncSession = Depends(get_session),
):
    posts = await repo.list_posts(db)
    return [await hydrate_post_out(db, p) for p in posts]


@router.get("/{post_id}", response_model=PostOut)
async def post_detail(
    auth: AuthContext = Depends(get_auth_context),
    post_id: str = Depends(object_id("post_id")),
    db: AsyncSession = Depends(get_session),
):
    post = await _get_post_or_404(db, post_id)
    return await hydrate_post_out(db, post)


@router.delete("/{post_id}", response_model=MessageOut)
async def delete_post_endpoint(
    auth: AuthContext = Depends(get_auth_context),
    post_id: str = Depends(object_id("post_id")),
    db: AsyncSession = Depends(get_session),
):
    """
    Solo el autor puede borrar (401 si no lo es).
    """
    post = await _get_post_or_404(db, post_id)
    if post.user_id != auth.user_id:
        raise ApiError(401, "User not authorized")

    await repo.delete_post(db, post_id)
    await db.commit()
    return {"msg": "Post removed"}


# -------------------------
# LIKES
# -------------------------
@router.put("/like/{post_id}", response_model=List[LikeOut])
async def like_post(
    auth: AuthContext = Depends(get_auth_context),
    post_id: str = Depends(object_id("post_id")),
    db: AsyncSession = Depends(get_session),
):
    await _get_post_or_404(db, post_id)
    if await repo.user_liked_post(db, post_id, auth.user_id):
        raise ApiError(400, "Post already liked")

    try:
        await repo.add_like(db, post_id, auth.user_id)
        await db.commit()
    except IntegrityError:
        # otro request insertó el mismo like entre el check y el insert
        await db.rollback()
        raise ApiError(400, "Post already liked")
    return await likes_out(db, post_id)


@router.put("/unlike/{post_id}", response_model=List[LikeOut])
async def unlike_post(
    auth: AuthContext = Depends(get_auth_context),
    post_id: str = Depends(object_id("post_id")),
    db: AsyncSession = Depends(get_session),
):
    await _get_post_or_404(db, post_id)
    removed = await repo.remove_like(db, post_id, auth.user_id)
    if not removed:
        raise ApiError(400, "Post has not yet been liked")
    await db.commit()
    return await likes_out(db, post_id)


# -------------------------
# COMMENTS
# -------------------------
@router.post("/comment/{post_id}", response_model=List[CommentOut])
async def comment_post(
    payload: TextIn,
    auth: AuthContext = Depends(get_auth_context),
    post_id: str = Depends(object_id("post_id")),
    db: AsyncSession = Depends(get_session),
):
    user = await _get_author(db, auth)
    await _get_post_or_404(db, post_id)

    await repo.add_comment(
        db,
        post_id=post_id,
        user_id=user.id,
        text=payload.text,
        name=user.name,
        avatar=user.avatar,
    )
    await db.commit()
    return await comments_out(db, post_id)


@router.delete("/comment/{post_id}/{comment_id}", response_model=List[CommentOut])
async def delete_comment(
    comment_id: str,
    auth: AuthContext = Depends(get_auth_context),
    post_id: str = Depends(object_id("post_id")),
    db: AsyncSession = Depends(get_session),
):
    # cualquier usuario autenticado puede borrar comentarios (sin chequeo de autor)
    await _get_post_or_404(db, post_id)
    comment = await repo.get_comment(db, post_id, comment_id)
    if not comment:
        raise ApiError(404, "Comment does not exist")

    await repo.remove_comment(db, comment.id)
    await db.commit()
    return await comments_out(db, post_id)
