# app/auth/schemas.py
from pydantic import BaseModel, Field, field_validator

from app.core.validation import valid_email


class LoginIn(BaseModel):
    email: str | None = Field(default=None, validate_default=True)
    password: str | None = Field(default=None, validate_default=True)

    @field_validator("email")
    @classmethod
    def _email(cls, v):
        return valid_email(v, "Please include a valid email")

    @field_validator("password")
    @classmethod
    def _password(cls, v):
        # solo tiene que venir; el contenido lo valida el hash
        if v is None:
            raise ValueError("Password is required")
        return v
