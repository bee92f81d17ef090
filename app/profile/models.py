# app/profile/models.py
from datetime import date, datetime

from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, Text, Date, DateTime, Boolean, ForeignKey
from sqlalchemy.dialects.postgresql import JSONB
from app.db.base import Base, ObjectIdMixin, utcnow


class Profile(ObjectIdMixin, Base):
    __tablename__ = "profiles"

    # un perfil por usuario (upsert por user_id)
    user_id: Mapped[str] = mapped_column(
        String(24),
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
    )
    company: Mapped[str | None] = mapped_column(String(255), nullable=True)
    website: Mapped[str | None] = mapped_column(String(500), nullable=True)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    status: Mapped[str] = mapped_column(String(255), nullable=False)
    skills: Mapped[list] = mapped_column(JSONB, nullable=False, default=list)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    githubusername: Mapped[str | None] = mapped_column(String(100), nullable=True)
    # {youtube, twitter, facebook, linkedin, instagram}
    social: Mapped[dict] = mapped_column(JSONB, nullable=False, default=dict)
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)


class Experience(ObjectIdMixin, Base):
    __tablename__ = "profile_experience"

    profile_id: Mapped[str] = mapped_column(
        String(24), ForeignKey("profiles.id", ondelete="CASCADE"), index=True
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    company: Mapped[str] = mapped_column(String(255), nullable=False)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    from_date: Mapped[date] = mapped_column(Date, nullable=False)
    to_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    current: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)


class Education(ObjectIdMixin, Base):
    __tablename__ = "profile_education"

    profile_id: Mapped[str] = mapped_column(
        String(24), ForeignKey("profiles.id", ondelete="CASCADE"), index=True
    )
    school: Mapped[str] = mapped_column(String(255), nullable=False)
    degree: Mapped[str] = mapped_column(String(255), nullable=False)
    fieldofstudy: Mapped[str] = mapped_column(String(255), nullable=False)
    from_date: Mapped[date] = mapped_column(Date, nullable=False)
    to_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    current: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
