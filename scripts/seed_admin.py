#!/usr/bin/env python3
"""Seed the roles, an administrator and a first tag.

Safe to run more than once: anything that already exists is left alone.

Usage:
    ADMIN_EMAIL=admin@example.com ADMIN_PASSWORD=Secret123 \
        python scripts/seed_admin.py
"""

import logging
import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from src.config import get_settings
from src.database import SessionLocal, init_db
from src.models import Role, Tag, User
from src.services.auth import get_password_hash, is_strong_password

logger = logging.getLogger("seed_admin")

USER_ROLE_NAME = "User"
DEFAULT_TAG = {"name": "General", "description": "Ideas that fit nowhere else"}


def seed_admin() -> None:
    """Create the admin role, the user role, the admin account and a default tag."""
    settings = get_settings()
    if not settings.admin_email or not settings.admin_password:
        raise SystemExit("ADMIN_EMAIL and ADMIN_PASSWORD must be set")
    if not is_strong_password(settings.admin_password):
        raise SystemExit("ADMIN_PASSWORD must have 8+ characters, an uppercase letter and a digit")

    init_db()
    session = SessionLocal()

    try:
        admin_role = session.query(Role).filter(Role.id == settings.admin_role_id).first()
        if admin_role is None:
            admin_role = Role(id=settings.admin_role_id, name="Admin")
            session.add(admin_role)
            logger.info(f"Creating admin role with id {settings.admin_role_id}")

        if session.query(Role).filter(Role.name == USER_ROLE_NAME).first() is None:
            session.add(Role(name=USER_ROLE_NAME))
            logger.info("Creating user role")
        session.flush()

        admin = session.query(User).filter(User.email == settings.admin_email).first()
        if admin is None:
            session.add(
                User(
                    name="Admin",
                    email=settings.admin_email,
                    password=get_password_hash(settings.admin_password),
                    role_id=admin_role.id,
                )
            )
            logger.info(f"Creating admin user {settings.admin_email}")
        else:
            logger.info(f"Admin user {settings.admin_email} already exists")

        if session.query(Tag).filter(Tag.name == DEFAULT_TAG["name"]).first() is None:
            session.add(Tag(**DEFAULT_TAG))
            logger.info(f"Creating tag {DEFAULT_TAG['name']}")

        session.commit()
        logger.info("Seeding complete")
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")
    seed_admin()
