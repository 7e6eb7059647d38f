"""
Authentication dependencies for FastAPI route protection.

The admin API accepts the session cookie set at login and, for non-browser clients,
an ``Authorization: Bearer`` header carrying the same token.
"""


from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.db import get_app_db
from app.db_handlers import UserDBHandler
from app.models import User
from app.services.token_service import TokenService
from app.utils.logger import setup_logger

logger = setup_logger("dependencies.auth")

bearer_scheme = HTTPBearer(auto_error=False)


def get_token_service(request: Request) -> TokenService:
    """The token service built by the application factory."""
    return request.app.state.token_service


def _credentials_exception(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    token_service: TokenService = Depends(get_token_service),
    db: AsyncSession = Depends(get_app_db),
) -> User:
    """
    Dependency to get the current admin account from the session token.
    """
    token = request.cookies.get(settings.auth_cookie_name)
    if not token and credentials is not None:
        token = credentials.credentials
    if not token:
        raise _credentials_exception("Not authenticated")

    user_id = token_service.verify(token)
    if user_id is None:
        raise _credentials_exception("Invalid token")

    user_handler = UserDBHandler()
    user = await user_handler.get(user_id, db=db)
    if user is None:
        logger.info(f"Valid token for unknown account {user_id}")
        raise _credentials_exception("Invalid token")

    return user
