# app/posts/repository.py
from sqlalchemy import select, desc, delete
from sqlalchemy.ext.asyncio import AsyncSession
from app.posts.models import Post, PostLike, PostComment


# -------------------------
# POSTS
# -------------------------
async def create_post(
    db: AsyncSession,
    user_id: str,
    text: str,
    name: str | None,
    avatar: str | None,
) -> Post:
    post = Post(user_id=user_id, text=text, name=name, avatar=avatar)
    db.add(post)
    await db.flush()
    await db.refresh(post)
    return post


async def list_posts(db: AsyncSession) -> list[Post]:
    res = await db.execute(select(Post).order_by(desc(Post.date), desc(Post.id)))
    return list(res.scalars())


async def get_post(db: AsyncSession, post_id: str) -> Post | None:
    res = await db.execute(select(Post).where(Post.id == post_id))
    return res.scalar_one_or_none()


async def delete_post(db: AsyncSession, post_id: str) -> None:
    await db.execute(delete(PostLike).where(PostLike.post_id == post_id))
    await db.execute(delete(PostComment).where(PostComment.post_id == post_id))
    await db.execute(delete(Post).where(Post.id == post_id))


async def delete_posts_by_user(db: AsyncSession, user_id: str) -> None:
    post_ids = select(Post.id).where(Post.user_id == user_id)
    await db.execute(delete(PostLike).where(PostLike.post_id.in_(post_ids)))
    await db.execute(delete(PostComment).where(PostComment.post_id.in_(post_ids)))
    await db.execute(delete(Post).where(Post.user_id == user_id))


# -------------------------
# LIKES
# -------------------------
async def list_likes(db: AsyncSession, post_id: str) -> list[PostLike]:
    res = await db.execute(
        select(PostLike)
        .where(PostLike.post_id == post_id)
        .order_by(desc(PostLike.created_at), desc(PostLike.id))
    )
    return list(res.scalars())


async def user_liked_post(db: AsyncSession, post_id: str, user_id: str) -> bool:
    res = await db.execute(
        select(PostLike.id).where(
            PostLike.post_id == post_id,
            PostLike.user_id == user_id,
        )
    )
    return res.scalar_one_or_none() is not None


async def add_like(db: AsyncSession, post_id: str, user_id: str) -> PostLike:
    """
    Inserta el like. Si ya existía salta IntegrityError (uq_post_like),
    también cuando dos requests llegan a la vez; lo maneja el router.
    """
    like = PostLike(post_id=post_id, user_id=user_id)
    db.add(like)
    await db.flush()
    return like


async def remove_like(db: AsyncSession, post_id: str, user_id: str) -> bool:
    res = await db.execute(
        delete(PostLike).where(
            PostLike.post_id == post_id,
            PostLike.user_id == user_id,
        )
    )
    return (res.rowcount or 0) > 0


# -------------------------
# COMMENTS
# -------------------------
async def list_comments(db: AsyncSession, post_id: str) -> list[PostComment]:
    res = await db.execute(
        select(PostComment)
        .where(PostComment.post_id == post_id)
        .order_by(desc(PostComment.date), desc(PostComment.id))
    )
    return list(res.scalars())


async def add_comment(
    db: AsyncSession,
    post_id: str,
    user_id: str,
    text: str,
    name: str | None,
    avatar: str | None,
) -> PostComment:
    c = PostComment(post_id=post_id, user_id=user_id, text=text, name=name, avatar=avatar)
    db.add(c)
    await db.flush()
    return c


async def get_comment(db: AsyncSession, post_id: str, comment_id: str) -> PostComment | None:
    res = await db.execute(
        select(PostComment).where(
            PostComment.post_id == post_id,
            PostComment.id == comment_id,
        )
    )
    return res.scalar_one_or_none()


async def remove_comment(db: AsyncSession, comment_id: str) -> None:
    await db.execute(delete(PostComment).where(PostComment.id == comment_id))
