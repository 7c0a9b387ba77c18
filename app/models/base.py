# app/models/base.py
"""
SQLAlchemy Base and catalogue engine
"""

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base
from app.config import settings

# Base model
Base = declarative_base()


def build_database_url() -> str:
    return (
        f"postgresql+asyncpg://{settings.postgres_user}:{settings.postgres_password}"
        f"@{settings.postgres_host}:{settings.postgres_port}/{settings.postgres_database}"
    )


def create_catalog_engine(database_url: str = None, **kwargs):
    """Async engine with a bounded connection pool"""
    url = database_url or build_database_url()
    options = {
        "echo": settings.debug,
        "pool_pre_ping": True,
    }
    if url.startswith("postgresql"):
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=0,
            pool_recycle=settings.db_pool_recycle,
        )
        # managed databases terminate TLS with their own certificate
        if settings.postgres_ssl:
            options["connect_args"] = {"ssl": "require"}
    options.update(kwargs)
    return create_async_engine(url, **options)


def create_session_factory(engine) -> async_sessionmaker:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
