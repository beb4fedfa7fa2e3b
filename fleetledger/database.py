"""
Connexion a la base de donnees / Database connection.
SQLite (dev, hors-ligne) ou PostgreSQL (prod) via SQLAlchemy 2.0 async.
SQLite (dev, offline) or PostgreSQL (prod) through SQLAlchemy 2.0 async.
"""

import logging

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from fleetledger.config import settings

logger = logging.getLogger(__name__)


def enable_sqlite_foreign_keys(async_engine: AsyncEngine) -> None:
    """Activer les cles etrangeres sur chaque connexion SQLite / Enforce foreign keys on every SQLite connection."""

    @event.listens_for(async_engine.sync_engine, "connect")
    def _set_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys = ON")
        cursor.close()


def _build_engine(url: str) -> AsyncEngine:
    if settings.is_sqlite:
        async_engine = create_async_engine(url, echo=settings.DEBUG)
        enable_sqlite_foreign_keys(async_engine)
        return async_engine
    # PostgreSQL : pool de connexions / connection pooling
    return create_async_engine(
        url,
        echo=settings.DEBUG,
        pool_size=10,
        max_overflow=20,
        pool_recycle=1800,
        pool_pre_ping=True,
    )


engine = _build_engine(settings.DATABASE_URL)

async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


class Base(DeclarativeBase):
    pass


async def get_db() -> AsyncSession:
    """Session par requete, commit si succes / One session per request, committed on success."""
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db(target: AsyncEngine | None = None) -> None:
    """Creer les tables manquantes / Create missing tables."""
    # Enregistrer tous les modeles sur Base.metadata / Register every model on Base.metadata
    import fleetledger.models  # noqa: F401

    async with (target or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database ready (%d tables)", len(Base.metadata.tables))
