from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from app.db_handlers.base import BaseDBHandler, check_local_db
from app.models.base import utc_now
from app.models.project import Project
from app.utils.logger import setup_logger

logger = setup_logger("db_handlers.project")

# Canonical listing order: rank first, newest first among equal ranks.
# The id is a last resort so identical timestamps still list deterministically.
CANONICAL_ORDER = [Project.order.asc(), Project.created_at.desc(), Project.id.desc()]


class ProjectDBHandler(BaseDBHandler[Project]):
    def __init__(self):
        super().__init__(Project)

    @check_local_db
    async def list_ordered(self, *, db: AsyncSession = None) -> list[Project]:
        """Return every project in canonical display order."""
        return await self.list_all(db=db, order_by=CANONICAL_ORDER)

    @check_local_db
    async def reorder(
        self, item_ids: Sequence[str], *, db: AsyncSession = None
    ) -> int:
        """
        Assign ``order = i`` to the project at position ``i`` of ``item_ids``.

        Ids that match no project are skipped without touching anything else; a
        repeated id ends up with the rank of its last position. All updates share
        one transaction. Returns the number of projects that were updated.
        """
        now = utc_now()
        matched = 0
        for index, item_id in enumerate(item_ids):
            result = await db.execute(
                update(Project)
                .where(Project.id == item_id)
                .values(order=index, updated_at=now)
            )
            matched += result.rowcount

        if matched < len(item_ids):
            logger.info(
                f"Reorder matched {matched} of {len(item_ids)} ids; unknown ids were skipped"
            )
        return matched

    @check_local_db
    async def set_order(
        self, item_id: str, order: int, *, db: AsyncSession = None
    ) -> Project | None:
        """Change one project's rank, leaving every other rank as it is."""
        return await self.update_by_id(item_id, {"order": order}, db=db)
