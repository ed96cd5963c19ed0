#!/usr/bin/env python3
"""
Create the NutriPlan tables and, optionally, a first admin account.

The admin can be given on the command line or through the ADMIN_EMAIL,
ADMIN_PASSWORD, ADMIN_FIRST_NAME and ADMIN_LAST_NAME environment variables.
"""

import argparse
import os
import sys
import logging
from pathlib import Path

# Add parent directory to path to import app modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import inspect  # noqa: E402

from domain.enums import UserRole  # noqa: E402
from domain.models import SessionLocal, User, engine, init_database  # noqa: E402
from repositories import UserRepository  # noqa: E402
from services.security import hash_password  # noqa: E402

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger("nutriplan.init_db")


def create_tables() -> None:
    init_database()
    tables = inspect(engine).get_table_names()
    logger.info(f"Created {len(tables)} tables: {', '.join(sorted(tables))}")


def ensure_admin(email: str, password: str, first_name: str, last_name: str) -> None:
    """Create the admin account, or promote an existing user with that email"""
    db = SessionLocal()
    try:
        repo = UserRepository(db)
        user = repo.get_by_email(email)
        if user:
            if user.role != UserRole.ADMIN:
                user.role = UserRole.ADMIN
                repo.update(user)
                logger.info(f"admin_promoted email={email}")
            else:
                logger.info(f"admin_exists email={email}")
            return
        repo.create(
            User(
                email=email.lower(),
                password=hash_password(password),
                first_name=first_name,
                last_name=last_name,
                role=UserRole.ADMIN,
            )
        )
        logger.info(f"admin_created email={email}")
    finally:
        db.close()


def main() -> int:
    p = argparse.ArgumentParser(description="Initialize the NutriPlan database")
    p.add_argument("--admin-email", default=os.environ.get("ADMIN_EMAIL"))
    p.add_argument("--admin-password", default=os.environ.get("ADMIN_PASSWORD"))
    p.add_argument("--admin-first-name", default=os.environ.get("ADMIN_FIRST_NAME", "Admin"))
    p.add_argument("--admin-last-name", default=os.environ.get("ADMIN_LAST_NAME", "User"))
    args = p.parse_args()

    try:
        create_tables()
    except Exception as e:
        logger.error(f"Failed to create tables: {e}")
        return 1

    if args.admin_email:
        if not args.admin_password or len(args.admin_password) < 6:
            logger.error("An admin password of at least 6 characters is required")
            return 1
        ensure_admin(
            args.admin_email,
            args.admin_password,
            args.admin_first_name,
            args.admin_last_name,
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())
