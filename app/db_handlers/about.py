from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db_handlers.base import BaseDBHandler, check_local_db
from app.models.about import About
from app.utils.logger import setup_logger

logger = setup_logger("db_handlers.about")

DEFAULT_PROFILE = {
    "name": "Your Name",
    "title": "Portfolio Owner",
    "bio": "A short introduction shown in the hero section.",
    "long_bio": "A longer introduction shown in the about section.",
    "email": "hello@example.com",
    "profile_image": "https://via.placeholder.com/400",
    "social_links": {},
    "skills": [],
    "experience": [],
    "education": [],
}

REQUIRED_FIELDS = ("name", "title", "bio", "long_bio", "email", "profile_image")


class IncompleteProfileError(ValueError):
    """Raised when the first profile write lacks required fields."""


class AboutDBHandler(BaseDBHandler[About]):
    def __init__(self):
        super().__init__(About)

    @check_local_db
    async def get_profile(self, *, db: AsyncSession = None) -> About | None:
        stmt = select(About).order_by(About.created_at.asc()).limit(1)
        result = await db.execute(stmt)
        return result.scalars().first()

    @check_local_db
    async def get_or_create_profile(self, *, db: AsyncSession = None) -> About:
        """Return the profile, creating the placeholder one on first access."""
        profile = await self.get_profile(db=db)
        if profile is None:
            logger.info("No about profile found, creating the default one")
            profile = await self.create(dict(DEFAULT_PROFILE), db=db)
        return profile

    @check_local_db
    async def upsert_profile(
        self, update_data: dict[str, Any], *, db: AsyncSession = None
    ) -> About:
        """Apply a partial update, creating the profile if it does not exist yet."""
        profile = await self.get_profile(db=db)
        if profile is not None:
            return await self.update(profile, update_data, db=db)

        missing = [f for f in REQUIRED_FIELDS if not update_data.get(f)]
        if missing:
            raise IncompleteProfileError(
                f"Missing required profile fields: {', '.join(missing)}"
            )
        return await self.create(update_data, db=db)
