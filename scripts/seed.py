#!/usr/bin/env python3
"""
Seed the database with sample projects, an about profile and the default admin.

Existing projects and the about profile are replaced; the admin account
'Admin User' is recreated with the password given on the command line
(default: admin123). Meant for local development only.
"""

import argparse
import asyncio

from sqlalchemy import delete

from app.db import AppAsyncSessionLocal, init_db
from app.db_handlers import AboutDBHandler, ProjectDBHandler, UserDBHandler
from app.models import About, Project, User
from app.utils.logger import setup_logger

logger = setup_logger("scripts.seed")

SAMPLE_PROJECTS = [
    {
        "title": "Recruitment Campaign",
        "description": "Employer branding campaign for a graduate hiring programme.",
        "long_description": "Planned and ran a multi-channel campaign to attract graduates.",
        "image_url": "https://images.unsplash.com/photo-1522071820081-009f0129c71c?w=800",
        "category": "Recruitment",
        "tags": ["HR", "Talent", "Recruitment"],
        "featured": True,
    },
    {
        "title": "Onboarding Programme",
        "description": "Structured first-month programme for new team members.",
        "long_description": "Designed onboarding checklists, mentoring pairs and feedback loops.",
        "image_url": "https://images.unsplash.com/photo-1552664730-d307ca884978?w=800",
        "category": "Training",
        "tags": ["Training", "Development", "HR"],
        "featured": True,
    },
    {
        "title": "Retention Strategy",
        "description": "Analysis of turnover drivers and a retention plan.",
        "image_url": "https://images.unsplash.com/photo-1556761175-5973dc0f32e7?w=800",
        "category": "Strategy",
        "tags": ["Strategy", "Planning"],
    },
]

SAMPLE_PROFILE = {
    "name": "Portfolio Owner",
    "title": "Marketing Student | Future HR Specialist",
    "bio": "Marketing student focused on connecting marketing strategy with HR practice.",
    "long_bio": "I study marketing and spend most of my time on talent acquisition, "
    "employer branding and the people side of organisations.",
    "email": "owner@example.com",
    "location": "Belgrade, Serbia",
    "profile_image": "https://images.unsplash.com/photo-1494790108377-be9c29b29330?w=400",
    "social_links": {"linkedin": "https://linkedin.com/in/example"},
    "skills": ["Marketing Strategy", "Talent Acquisition", "Employer Branding"],
    "experience": [
        {
            "company": "Student Organisations",
            "position": "Volunteer, Marketing Projects",
            "duration": "2022 - Present",
            "description": "Organising student events and marketing campaigns.",
        }
    ],
    "education": [
        {
            "institution": "Faculty of Organizational Sciences",
            "degree": "BSc Marketing",
            "duration": "2021 - Present",
        }
    ],
}

ADMIN_NAME = "Admin User"
ADMIN_EMAIL = "admin@example.com"


async def seed(admin_password: str):
    await init_db()

    async with AppAsyncSessionLocal() as db:
        await db.execute(delete(Project))
        await db.execute(delete(About))
        await db.execute(delete(User).where(User.name == ADMIN_NAME))
        await db.commit()

    project_handler = ProjectDBHandler()
    for index, project in enumerate(SAMPLE_PROJECTS, start=1):
        await project_handler.create({**project, "order": index})
    print(f"[SUCCESS] {len(SAMPLE_PROJECTS)} projects seeded")

    await AboutDBHandler().upsert_profile(dict(SAMPLE_PROFILE))
    print("[SUCCESS] About profile seeded")

    await UserDBHandler().create_account(ADMIN_NAME, ADMIN_EMAIL, admin_password)
    print(f"[SUCCESS] Admin account seeded (name: {ADMIN_NAME})")


def main():
    parser = argparse.ArgumentParser(description="Seed sample portfolio content")
    parser.add_argument(
        "--admin-password", default="admin123", help="Password for the seeded admin"
    )
    args = parser.parse_args()
    asyncio.run(seed(args.admin_password))


if __name__ == "__main__":
    main()
