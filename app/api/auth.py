# Authentication API routes for admin login, logout and session inspection

from fastapi import APIRouter, Depends, HTTPException, Response, status

from app.config import settings
from app.db_handlers import UserDBHandler
from app.dependencies.auth import get_current_user, get_token_service
from app.models import User
from app.schemas import LoginResponse, MessageResponse, UserInfo, UserLogin
from app.services.token_service import TokenService
from app.utils.auth import get_password_hash, verify_password
from app.utils.logger import setup_logger

logger = setup_logger("api.auth")

router = APIRouter(prefix="/auth", tags=["Authentication"])

INVALID_CREDENTIALS = "Invalid username or password"

# Checked when the name is unknown so both failures cost one bcrypt check
DUMMY_PASSWORD_HASH = get_password_hash("unused-dummy-password")


def set_auth_cookie(response: Response, token: str, max_age: int) -> None:
    response.set_cookie(
        key=settings.auth_cookie_name,
        value=token,
        max_age=max_age,
        path="/",
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )


def clear_auth_cookie(response: Response) -> None:
    response.delete_cookie(
        key=settings.auth_cookie_name,
        path="/",
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )


@router.post("/login", response_model=LoginResponse)
async def login_user(
    credentials: UserLogin,
    response: Response,
    user_db_handler: UserDBHandler = Depends(),
    token_service: TokenService = Depends(get_token_service),
):
    """Authenticate an admin account and start a cookie-backed session."""
    user = await user_db_handler.get_user_by_name(credentials.name)

    # Same answer for an unknown name and a wrong password
    stored_hash = user.hashed_password if user else DUMMY_PASSWORD_HASH
    password_ok = verify_password(credentials.password, stored_hash)
    if not user or not password_ok:
        logger.info(f"Failed login attempt for name '{credentials.name}'")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=INVALID_CREDENTIALS,
        )

    token = token_service.issue(user.id, email=user.email)
    set_auth_cookie(response, token, token_service.max_age_seconds)
    logger.info(f"Login succeeded for '{user.name}' ({user.id})")

    return LoginResponse(token=token, user=UserInfo.model_validate(user))


@router.post("/logout", response_model=MessageResponse)
async def logout_user(response: Response):
    """End the session by clearing the auth cookie."""
    clear_auth_cookie(response)
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=UserInfo)
async def get_current_user_info(
    current_user: User = Depends(get_current_user),
):
    """Retrieve the current admin account's public fields."""
    return UserInfo.model_validate(current_user)
