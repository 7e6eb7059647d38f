"""
Common utilities package for the portfolio API.

Logging setup and identifier helpers. Password hashing lives in
``app.utils.auth`` and is imported from there directly, since it depends on the
application settings.
"""

from app.utils.logger import setup_logger
from app.utils.object_id import (
    is_valid_object_id,
    new_object_id,
    normalize_object_id,
)

__all__ = [
    # Logging utilities
    "setup_logger",
    # Identifier utilities
    "is_valid_object_id",
    "new_object_id",
    "normalize_object_id",
]
