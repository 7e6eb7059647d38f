from __future__ import annotations

import asyncio
from collections.abc import Sequence
from functools import wraps
from typing import Any, Generic, TypeVar

from asyncpg.exceptions import ConnectionDoesNotExistError
from sqlalchemy import select
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import AppAsyncSessionLocal
from app.models.base import Base
from app.utils.logger import setup_logger

logger = setup_logger("db_handlers")

MAX_SESSION_ATTEMPTS = 3

ModelType = TypeVar("ModelType", bound=Base)


def _is_dropped_connection(error: DBAPIError) -> bool:
    return isinstance(error.orig, ConnectionDoesNotExistError)


def check_local_db(func):
    """
    Give the wrapped handler method a session unless the caller passed ``db=``.

    The outermost call owns the session: it commits on success, rolls back on any
    error and retries the whole call when Postgres dropped the connection. Nested
    calls reuse the caller's session and leave the transaction alone.
    """

    @wraps(func)
    async def wrapper(*args, **kwargs):
        if kwargs.get("db") is not None:
            return await func(*args, **kwargs)

        for attempt in range(1, MAX_SESSION_ATTEMPTS + 1):
            async with AppAsyncSessionLocal() as db:
                kwargs["db"] = db
                try:
                    result = await func(*args, **kwargs)
                    await db.commit()
                    return result
                except DBAPIError as e:
                    await db.rollback()
                    if not _is_dropped_connection(e) or attempt == MAX_SESSION_ATTEMPTS:
                        logger.error(
                            f"{func.__qualname__} failed on attempt {attempt}: {e}",
                            exc_info=True,
                        )
                        raise
                    logger.warning(
                        f"{func.__qualname__} lost its database connection "
                        f"(attempt {attempt}/{MAX_SESSION_ATTEMPTS}), retrying"
                    )
                    await asyncio.sleep(attempt)
                except SQLAlchemyError as e:
                    await db.rollback()
                    logger.error(f"{func.__qualname__} rolled back: {e}", exc_info=True)
                    raise
                except Exception as e:
                    # Domain errors such as AccountExistsError are reported by callers
                    await db.rollback()
                    logger.info(f"{func.__qualname__} rolled back: {e}")
                    raise

    return wrapper


class BaseDBHandler(Generic[ModelType]):
    """CRUD for one content model, keyed by its 24-hex ``id``."""

    def __init__(self, model: type[ModelType]):
        self.model = model
        self.model_name = model.__name__

    @check_local_db
    async def create(
        self, values: dict[str, Any], *, db: AsyncSession = None
    ) -> ModelType:
        obj = self.model(**values)
        db.add(obj)
        try:
            await db.flush()
        except SQLAlchemyError as e:
            logger.warning(f"Could not insert {self.model_name}: {e}")
            raise
        await db.refresh(obj)
        return obj

    @check_local_db
    async def get(self, id: str, *, db: AsyncSession = None) -> ModelType | None:
        return await db.get(self.model, id)

    @check_local_db
    async def list_all(
        self,
        *,
        order_by: Sequence[Any] = (),
        db: AsyncSession = None,
        **filters,
    ) -> list[ModelType]:
        """All rows matching ``filters`` (column equality), in ``order_by`` order."""
        stmt = select(self.model).filter_by(**filters).order_by(*order_by)
        result = await db.execute(stmt)
        return list(result.scalars().all())

    @check_local_db
    async def update(
        self, obj: ModelType, values: dict[str, Any], *, db: AsyncSession = None
    ) -> ModelType:
        """Apply ``values`` to ``obj``; keys that are not columns are an error."""
        columns = self.model.__table__.columns
        for field, value in values.items():
            if field not in columns or field == "id":
                raise AttributeError(f"{self.model_name} has no writable field '{field}'")
            setattr(obj, field, value)

        obj = await db.merge(obj)
        await db.flush()
        await db.refresh(obj)
        return obj

    @check_local_db
    async def update_by_id(
        self, id: str, values: dict[str, Any], *, db: AsyncSession = None
    ) -> ModelType | None:
        """Load a record by id and apply ``values``; None if there is no such record."""
        obj = await self.get(id, db=db)
        if obj is None:
            return None
        return await self.update(obj, values, db=db)

    @check_local_db
    async def remove(self, id: str, *, db: AsyncSession = None) -> ModelType | None:
        """Delete a record by id and return it, or None if it did not exist."""
        obj = await self.get(id, db=db)
        if obj is None:
            return None
        await db.delete(obj)
        await db.flush()
        logger.debug(f"Deleted {self.model_name} {id}")
        return obj
