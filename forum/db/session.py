# forum/db/session.py
from typing import AsyncIterator

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from forum.core.config import Settings


def build_engine(cfg: Settings) -> AsyncEngine:
    db_url = cfg.DATABASE_URL

    # Timeouts cortos: si la DB no responde → falla rápido (5s)
    if db_url.startswith("postgresql+psycopg"):
        connect_args = {"connect_timeout": 5}
    elif db_url.startswith("postgresql+asyncpg"):
        connect_args = {
            "timeout": 5,
            "server_settings": {"client_encoding": "UTF8"},
        }
    else:
        connect_args = {}

    if db_url.startswith("sqlite"):
        # sqlite (dev/tests): pool por defecto del dialecto
        return create_async_engine(db_url, connect_args=connect_args)

    # pool acotado y sin overflow: lo que sobra espera en el pool
    return create_async_engine(
        db_url,
        pool_pre_ping=True,
        pool_recycle=300,
        pool_size=cfg.DB_POOL_SIZE,
        max_overflow=0,
        pool_timeout=cfg.DB_POOL_TIMEOUT,
        connect_args=connect_args,
    )


def build_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def get_session(request: Request) -> AsyncIterator[AsyncSession]:
    # el sessionmaker lo crea el lifespan de la app (app.state)
    async with request.app.state.sessionmaker() as session:
        try:
            yield session
        finally:
            await session.close()
