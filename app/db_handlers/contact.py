from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from app.db_handlers.base import BaseDBHandler, check_local_db
from app.models.contact import Contact


class ContactDBHandler(BaseDBHandler[Contact]):
    def __init__(self):
        super().__init__(Contact)

    @check_local_db
    async def list_newest_first(self, *, db: AsyncSession = None) -> list[Contact]:
        return await self.list_all(
            db=db, order_by=[Contact.created_at.desc(), Contact.id.desc()]
        )
