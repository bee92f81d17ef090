# app/db/session.py
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from app.core.config import settings


def build_engine(db_url: str) -> AsyncEngine:
    # Timeouts cortos: si la DB no responde → falla rápido (5s)
    if db_url.startswith("postgresql+asyncpg"):
        return create_async_engine(
            db_url,
            pool_pre_ping=True,
            pool_recycle=300,
            pool_size=5,
            max_overflow=10,
            connect_args={
                "timeout": 5,
                "server_settings": {"client_encoding": "UTF8"},
            },
        )
    if db_url.startswith("postgresql+psycopg"):
        return create_async_engine(
            db_url,
            pool_pre_ping=True,
            pool_recycle=300,
            pool_size=5,
            max_overflow=10,
            connect_args={"connect_timeout": 5},
        )
    # sqlite+aiosqlite (dev/tests): sin opciones de pool
    return create_async_engine(db_url)


engine = build_engine(settings.DATABASE_URL)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()
