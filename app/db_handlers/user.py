from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.db_handlers.base import BaseDBHandler, check_local_db
from app.models.user import User
from app.utils.auth import get_password_hash
from app.utils.logger import setup_logger

logger = setup_logger("db_handlers.user")


class AccountExistsError(ValueError):
    """Raised when provisioning an account whose name or email is taken."""


class UserDBHandler(BaseDBHandler[User]):
    def __init__(self):
        super().__init__(User)

    @check_local_db
    async def get_user_by_name(
        self, name: str, *, db: AsyncSession = None
    ) -> User | None:
        """Get an account by its exact (already trimmed) name."""
        try:
            stmt = select(User).filter(User.name == name)
            result = await db.execute(stmt)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving user by name '{name}': {e}")
            raise

    @check_local_db
    async def create_account(
        self,
        name: str,
        email: str,
        password: str,
        *,
        rounds: int | None = None,
        db: AsyncSession = None,
    ) -> User:
        """Provision a new account with a freshly salted password hash."""
        name = name.strip()
        email = email.strip().lower()
        stmt = select(User).filter((User.name == name) | (User.email == email))
        existing = (await db.execute(stmt)).scalars().first()
        if existing:
            raise AccountExistsError(
                f"An account named '{name}' or with email '{email}' already exists"
            )

        user = await self.create(
            {
                "name": name,
                "email": email,
                "hashed_password": get_password_hash(password, rounds=rounds),
            },
            db=db,
        )
        logger.info(f"Provisioned account '{user.name}' ({user.id})")
        return user

    @check_local_db
    async def list_accounts(self, *, db: AsyncSession = None) -> list[User]:
        return await self.list_all(
            db=db, order_by=[User.created_at.asc(), User.id.asc()]
        )

    @check_local_db
    async def delete_all_except_oldest(self, *, db: AsyncSession = None) -> int:
        """Keep the first-provisioned account and delete every other one."""
        accounts = await self.list_accounts(db=db)
        if len(accounts) <= 1:
            return 0

        keep = accounts[0]
        result = await db.execute(delete(User).where(User.id != keep.id))
        logger.info(
            f"Kept account '{keep.name}', deleted {result.rowcount} other account(s)"
        )
        return result.rowcount
