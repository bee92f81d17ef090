# app/profile/schemas.py
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from app.core.validation import required, is_empty
from app.users.schemas import UserMini

FROM_DATE_MSG = "From date is required and needs to be from the past"


class ProfileIn(BaseModel):
    status: Optional[str] = Field(default=None, validate_default=True)
    # string separado por comas o lista
    skills: str | list[str] | None = Field(default=None, validate_default=True)
    company: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    githubusername: Optional[str] = None
    youtube: Optional[str] = None
    twitter: Optional[str] = None
    facebook: Optional[str] = None
    linkedin: Optional[str] = None
    instagram: Optional[str] = None

    @field_validator("status")
    @classmethod
    def _status(cls, v):
        return required(v, "Status is required")

    @field_validator("skills")
    @classmethod
    def _skills(cls, v):
        return required(v, "Skills is required")


def _check_from(v: date | None, info: ValidationInfo) -> date:
    if v is None:
        raise ValueError(FROM_DATE_MSG)
    to = info.data.get("to")
    if to is not None and not v < to:
        raise ValueError(FROM_DATE_MSG)
    return v


class ExperienceIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = Field(default=None, validate_default=True)
    company: Optional[str] = Field(default=None, validate_default=True)
    location: Optional[str] = None
    # `to` va antes que `from` para que el validator de `from` lo vea
    to: Optional[date] = None
    from_: Optional[date] = Field(default=None, alias="from", validate_default=True)
    current: bool = False
    description: Optional[str] = None

    @field_validator("title")
    @classmethod
    def _title(cls, v):
        return required(v, "Title is required")

    @field_validator("company")
    @classmethod
    def _company(cls, v):
        return required(v, "Company is required")

    @field_validator("to", mode="before")
    @classmethod
    def _blank_to(cls, v):
        return None if is_empty(v) else v

    @field_validator("from_", mode="before")
    @classmethod
    def _blank_from(cls, v):
        return None if is_empty(v) else v

    @field_validator("from_")
    @classmethod
    def _from(cls, v, info: ValidationInfo):
        return _check_from(v, info)


class EducationIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    school: Optional[str] = Field(default=None, validate_default=True)
    degree: Optional[str] = Field(default=None, validate_default=True)
    fieldofstudy: Optional[str] = Field(default=None, validate_default=True)
    to: Optional[date] = None
    from_: Optional[date] = Field(default=None, alias="from", validate_default=True)
    current: bool = False
    description: Optional[str] = None

    @field_validator("school")
    @classmethod
    def _school(cls, v):
        return required(v, "School is required")

    @field_validator("degree")
    @classmethod
    def _degree(cls, v):
        return required(v, "Degree is required")

    @field_validator("fieldofstudy")
    @classmethod
    def _fieldofstudy(cls, v):
        return required(v, "Field of study is required")

    @field_validator("to", mode="before")
    @classmethod
    def _blank_to(cls, v):
        return None if is_empty(v) else v

    @field_validator("from_", mode="before")
    @classmethod
    def _blank_from(cls, v):
        return None if is_empty(v) else v

    @field_validator("from_")
    @classmethod
    def _from(cls, v, info: ValidationInfo):
        return _check_from(v, info)


class ExperienceOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    company: str
    location: str | None = None
    from_: date = Field(alias="from")
    to: date | None = None
    current: bool = False
    description: str | None = None


class EducationOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    school: str
    degree: str
    fieldofstudy: str
    from_: date = Field(alias="from")
    to: date | None = None
    current: bool = False
    description: str | None = None


class SocialOut(BaseModel):
    youtube: str | None = None
    twitter: str | None = None
    facebook: str | None = None
    linkedin: str | None = None
    instagram: str | None = None


class ProfileOut(BaseModel):
    id: str
    user: UserMini | None
    company: str | None = None
    website: str | None = None
    location: str | None = None
    status: str
    skills: list[str] = []
    bio: str | None = None
    githubusername: str | None = None
    social: SocialOut
    experience: list[ExperienceOut] = []
    education: list[EducationOut] = []
    date: datetime


class MessageOut(BaseModel):
    msg: str
