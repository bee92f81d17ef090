# app/posts/schemas.py
from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from app.core.validation import required


class TextIn(BaseModel):
    """Body de POST /posts y POST /posts/comment/{id}."""
    text: str | None = Field(default=None, validate_default=True)

    @field_validator("text")
    @classmethod
    def _text(cls, v):
        return required(v, "Text is required")


class LikeOut(BaseModel):
    id: str
    user: str


class CommentOut(BaseModel):
    id: str
    user: str
    text: str
    name: str | None = None
    avatar: str | None = None
    date: datetime


class PostOut(BaseModel):
    id: str
    user: str
    text: str
    name: str | None = None
    avatar: str | None = None
    likes: list[LikeOut] = []
    comments: list[CommentOut] = []
    date: datetime
