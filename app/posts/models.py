# app/posts/models.py
from datetime import datetime

from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.types import UnicodeText
from app.db.base import Base, ObjectIdMixin, utcnow


class Post(ObjectIdMixin, Base):
    __tablename__ = "posts"

    user_id: Mapped[str] = mapped_column(
        String(24), ForeignKey("users.id", ondelete="CASCADE"), index=True
    )
    text: Mapped[str] = mapped_column(UnicodeText, nullable=False)
    # copia de nombre/avatar del autor al momento de publicar
    name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    avatar: Mapped[str | None] = mapped_column(String(255), nullable=True)
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)


class PostLike(ObjectIdMixin, Base):
    """
    Like de un usuario sobre un post.
    Un usuario solo puede dar like una vez al mismo post.
    """
    __tablename__ = "post_likes"
    __table_args__ = (
        UniqueConstraint("post_id", "user_id", name="uq_post_like"),
    )

    post_id: Mapped[str] = mapped_column(
        String(24), ForeignKey("posts.id", ondelete="CASCADE"), index=True
    )
    # sin FK: el like sobrevive aunque se borre la cuenta que lo dio
    user_id: Mapped[str] = mapped_column(String(24), index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)


class PostComment(ObjectIdMixin, Base):
    __tablename__ = "post_comments"

    post_id: Mapped[str] = mapped_column(
        String(24), ForeignKey("posts.id", ondelete="CASCADE"), index=True
    )
    # sin FK: el comentario queda con su copia de nombre/avatar
    user_id: Mapped[str] = mapped_column(String(24), index=True)
    text: Mapped[str] = mapped_column(UnicodeText, nullable=False)
    name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    avatar: Mapped[str | None] = mapped_column(String(255), nullable=True)
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
