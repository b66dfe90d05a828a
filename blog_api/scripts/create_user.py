"""
Create a user (e.g. first admin). Run from project root:
  python -m blog_api.scripts.create_user NAME EMAIL PASSWORD [role]
Example:
  python -m blog_api.scripts.create_user admin admin@example.com your-secure-password admin
"""
import argparse
import logging
import sys
import uuid

from sqlalchemy import or_

from blog_api.core.config import get_settings
from blog_api.core.database import SessionLocal
from blog_api.core.logs import configure_logging
from blog_api.core.security import (
    NAME_MAX_LEN,
    NAME_MIN_LEN,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    hash_password,
)
from blog_api.models import USER_ROLES, User

configure_logging()
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a blog user from the command line.")
    parser.add_argument("name", help=f"Display name ({NAME_MIN_LEN}-{NAME_MAX_LEN} chars)")
    parser.add_argument("email", help="Login email")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument("role", nargs="?", default="user", choices=USER_ROLES)
    args = parser.parse_args(argv)

    name = args.name.strip()
    email = args.email.strip()
    if not (NAME_MIN_LEN <= len(name) <= NAME_MAX_LEN):
        logger.error("Invalid name length.")
        return 1
    if not email:
        logger.error("Email must not be empty.")
        return 1
    if not (PASSWORD_MIN_LEN <= len(args.password) <= PASSWORD_MAX_LEN):
        logger.error("Password must be %s-%s characters.", PASSWORD_MIN_LEN, PASSWORD_MAX_LEN)
        return 1

    settings = get_settings()
    db = SessionLocal()
    try:
        existing = db.query(User).filter(or_(User.email == email, User.name == name)).first()
        if existing:
            logger.error("A user with name '%s' or that email already exists.", name)
            return 1
        user = User(
            id=uuid.uuid4(),
            name=name,
            email=email,
            password_hash=hash_password(args.password, settings.BCRYPT_ROUNDS),
            role=args.role,
        )
        db.add(user)
        db.commit()
        logger.info("Created user '%s' with role '%s' (id=%s).", name, args.role, user.id)
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
