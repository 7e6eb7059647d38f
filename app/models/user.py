"""
Admin account model.

Accounts are provisioned out of band (see scripts/manage_users.py) and are only read
by the login flow and by the admin API's authentication dependency.
"""

from sqlalchemy import Column, Index, String

from app.models.base import Base, ObjectIdMixin, TimestampMixin


class User(Base, ObjectIdMixin, TimestampMixin):
    """
    Admin account. ``name`` is the login key and matches case-sensitively.
    """

    __tablename__ = "users"
    __table_args__ = (
        Index("ix_users_name", "name", unique=True),
        Index("ix_users_email", "email", unique=True),
    )

    name = Column(
        String(100),
        nullable=False,
        comment="Display name, also used as the login name",
    )

    email = Column(
        String(255),
        nullable=False,
        comment="Lowercased contact email",
    )

    hashed_password = Column(
        String(255),
        nullable=False,
        comment="Bcrypt hashed password",
    )

    def __repr__(self):
        return f"<User(id={self.id}, name='{self.name}')>"
