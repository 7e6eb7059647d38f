"""
About/hero profile. The site has exactly one profile row; the about handler creates
it on first read.
"""

from sqlalchemy import JSON, Column, String, Text

from app.models.base import Base, ObjectIdMixin, TimestampMixin


class About(Base, ObjectIdMixin, TimestampMixin):
    __tablename__ = "about"

    name = Column(String(255), nullable=False)
    title = Column(String(255), nullable=False)
    bio = Column(Text, nullable=False)
    long_bio = Column(Text, nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=True)
    location = Column(String(255), nullable=True)
    profile_image = Column(String(2048), nullable=False)
    hero_image = Column(String(2048), nullable=True)
    resume_url = Column(String(2048), nullable=True)
    social_links = Column(JSON, nullable=False, default=dict)
    skills = Column(JSON, nullable=False, default=list)
    experience = Column(JSON, nullable=False, default=list)
    education = Column(JSON, nullable=False, default=list)

    def __repr__(self):
        return f"<About(id={self.id}, name='{self.name}')>"
