from app.dependencies.auth import get_current_user, get_token_service

__all__ = [
    "get_current_user",
    "get_token_service",
]
