# app/users/schemas.py
from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from app.core.validation import required, valid_email


class UserCreate(BaseModel):
    name: str | None = Field(default=None, validate_default=True)
    email: str | None = Field(default=None, validate_default=True)
    password: str | None = Field(default=None, validate_default=True)

    @field_validator("name")
    @classmethod
    def _name(cls, v):
        return required(v, "Name is required").strip()

    @field_validator("email")
    @classmethod
    def _email(cls, v):
        return valid_email(v, "Please include a valid email")

    @field_validator("password")
    @classmethod
    def _password(cls, v):
        if not isinstance(v, str) or len(v) < 6:
            raise ValueError("Please enter a password with 6 or more characters")
        return v


class UserOut(BaseModel):
    id: str
    name: str
    email: str
    avatar: str | None = None
    date: datetime

    class Config:
        from_attributes = True


class UserMini(BaseModel):
    """Proyección pública usada al "popular" perfiles."""
    id: str
    name: str
    avatar: str | None = None

    class Config:
        from_attributes = True


class TokenOut(BaseModel):
    token: str
