# app/db/base.py
from datetime import datetime, timezone

from sqlalchemy import String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from app.core.object_id import new_object_id


def utcnow() -> datetime:
    # se genera en Python (microsegundos) para ordenar "más nuevo primero" sin empates
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class ObjectIdMixin:
    id: Mapped[str] = mapped_column(String(24), primary_key=True, default=new_object_id)
