"""
Database models for the portfolio content API.

Key Features: admin accounts, ordered projects, contact messages, singleton about profile.
"""

from app.models.about import About
from app.models.contact import Contact
from app.models.project import Project
from app.models.user import User

__all__ = [
    "User",
    "Project",
    "Contact",
    "About",
]
