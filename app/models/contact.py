from sqlalchemy import Boolean, Column, String, Text

from app.models.base import Base, ObjectIdMixin, TimestampMixin


class Contact(Base, ObjectIdMixin, TimestampMixin):
    """Message submitted through the public contact form."""

    __tablename__ = "contacts"

    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    read = Column(Boolean, nullable=False, default=False)

    def __repr__(self):
        return f"<Contact(id={self.id}, email='{self.email}', read={self.read})>"
