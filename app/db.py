import argparse
import asyncio
from collections.abc import AsyncGenerator

from sqlalchemy import inspect, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

from app import models  # noqa: F401
from app.config import settings
from app.models.base import Base
from app.utils.logger import setup_logger

logger = setup_logger("db")

if not settings.database_url:
    raise ValueError("DATABASE_URL environment variable not set for Application DB")


def normalize_database_url(url: str) -> str:
    """Map plain driver URLs onto their async drivers."""
    if url.startswith("postgresql+asyncpg://") or url.startswith("sqlite+aiosqlite://"):
        return url
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+asyncpg://", 1)
    if url.startswith("sqlite://"):
        return url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    raise ValueError(f"Unsupported database URL prefix: {url}")


def build_engine(url: str) -> AsyncEngine:
    if url.startswith("sqlite"):
        # Connections must not outlive the event loop that opened them
        return create_async_engine(url, poolclass=NullPool, echo=False)
    return create_async_engine(
        url,
        pool_pre_ping=True,
        pool_size=10,
        max_overflow=20,
        pool_timeout=60,
        pool_recycle=300,
        echo=False,
        connect_args={"timeout": 30},
    )


settings.database_url = normalize_database_url(settings.database_url)
logger.debug(f"Application DB URL: {settings.database_url}")

app_engine = build_engine(settings.database_url)

AppAsyncSessionLocal = async_sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=app_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# --- Dependency for FastAPI (Application DB) ---
async def get_app_db() -> AsyncGenerator[AsyncSession, None]:
    async with AppAsyncSessionLocal() as session:
        yield session


async def init_db():
    """Create any missing tables."""
    if not Base.metadata.tables:
        logger.warning("Base.metadata.tables is EMPTY! No tables will be created.")
    else:
        logger.debug(
            f"Tables registered in Base.metadata: {list(Base.metadata.tables.keys())}"
        )

    async with app_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Database schema initialized.")


async def reset_db():
    """Drop and recreate every table. Destroys all content."""
    logger.warning(
        "Resetting the Application database. THIS IS A DESTRUCTIVE OPERATION."
    )
    async with app_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await init_db()
    logger.info("Application database has been reset and re-initialized.")


async def close_db():
    """Closes database connections."""
    logger.info("Closing database connections.")
    await app_engine.dispose()
    logger.info("Database connections closed.")


async def list_tables() -> list[str]:
    async with app_engine.connect() as conn:
        table_names = await conn.run_sync(
            lambda sync_conn: inspect(sync_conn).get_table_names()
        )
    logger.info(f"Tables in Application DB: {table_names}")
    return table_names


async def check_db_connection(engine: AsyncEngine | None = None) -> bool:
    """Run ``SELECT 1`` against the content database; raise if it cannot be reached."""
    engine = engine or app_engine
    try:
        async with engine.connect() as conn:
            value = (await conn.execute(text("SELECT 1"))).scalar_one()
    except Exception as e:
        logger.error(f"Content database is unreachable: {e}", exc_info=True)
        raise RuntimeError("Database connectivity check failed") from e

    if value != 1:
        raise RuntimeError(f"Connectivity check returned {value!r} instead of 1")
    logger.info("Content database connection verified.")
    return True


if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        description="Application Database Initialization Utility"
    )
    parser.add_argument(
        "action",
        choices=["init", "reset", "list-tables", "check"],
        help="'init' to create missing tables, "
        "'reset' to drop and recreate every table, "
        "'list-tables' to show existing tables, "
        "'check' to verify connectivity.",
    )
    args = parser.parse_args()

    if args.action == "init":
        asyncio.run(init_db())
    elif args.action == "reset":
        confirm = input(
            "WARNING: This will delete all data in the Application DB. Are you sure? (yes/no): "
        )
        if confirm.lower() == "yes":
            asyncio.run(reset_db())
        else:
            logger.info("Application Database reset cancelled by user.")
    elif args.action == "list-tables":
        asyncio.run(list_tables())
    elif args.action == "check":
        asyncio.run(check_db_connection())
    logger.info("Application Database utility script finished.")
