# app/posts/service.py
from sqlalchemy.ext.asyncio import AsyncSession

from app.posts.models import Post, PostLike, PostComment
from app.posts import repository as repo


def like_out(like: PostLike) -> dict:
    return {"id": like.id, "user": like.user_id}


def comment_out(c: PostComment) -> dict:
    return {
        "id": c.id,
        "user": c.user_id,
        "text": c.text,
        "name": c.name,
        "avatar": c.avatar,
        "date": c.date,
    }


async def likes_out(db: AsyncSession, post_id: str) -> list[dict]:
    return [like_out(lk) for lk in await repo.list_likes(db, post_id)]


async def comments_out(db: AsyncSession, post_id: str) -> list[dict]:
    return [comment_out(c) for c in await repo.list_comments(db, post_id)]


async def hydrate_post_out(db: AsyncSession, post: Post) -> dict:
    """
    Post + likes + comentarios (ambos más nuevos primero).
    `name`/`avatar` son la copia guardada al publicar, no se re-leen del usuario.
    """
    return {
        "id": post.id,
        "user": post.user_id,
        "text": post.text,
        "name": post.name,
        "avatar": post.avatar,
        "likes": await likes_out(db, post.id),
        "comments": await comments_out(db, post.id),
        "date": post.date,
    }
