"""
Portfolio project model.

Projects are listed by ``order`` ascending, newest first among equal ranks. Ranks are
not unique; the bulk reorder endpoint is the only operation that renumbers them.
"""

from sqlalchemy import JSON, Boolean, Column, Index, Integer, String, Text

from app.models.base import Base, ObjectIdMixin, TimestampMixin


class Project(Base, ObjectIdMixin, TimestampMixin):
    __tablename__ = "projects"
    __table_args__ = (Index("ix_projects_order_created", "order", "created_at"),)

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    long_description = Column(Text, nullable=True)
    image_url = Column(String(2048), nullable=False)
    category = Column(String(100), nullable=False, default="General")
    tags = Column(JSON, nullable=False, default=list)
    featured = Column(Boolean, nullable=False, default=False)
    order = Column(
        Integer,
        nullable=False,
        default=0,
        comment="Display rank; lower sorts first, ties broken by created_at desc",
    )

    def __repr__(self):
        return f"<Project(id={self.id}, title='{self.title}', order={self.order})>"
