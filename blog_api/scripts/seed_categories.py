"""
Insert the fixed set of post categories. Safe to run repeatedly:

  python -m blog_api.scripts.seed_categories
"""

import logging
import sys
import uuid

from sqlalchemy.orm import Session

from blog_api.core.logs import configure_logging
from blog_api.models import CATEGORY_NAMES, Category

logger = logging.getLogger(__name__)


def seed_categories(session: Session) -> int:
    """Add any missing categories; returns how many were inserted."""
    existing = {name for (name,) in session.query(Category.name).all()}
    missing = [name for name in CATEGORY_NAMES if name not in existing]
    for name in missing:
        session.add(Category(id=uuid.uuid4(), name=name))
    session.commit()
    return len(missing)


def main() -> int:
    configure_logging()
    from blog_api.core.database import SessionLocal

    db = SessionLocal()
    try:
        inserted = seed_categories(db)
        logger.info("Categories seeded: inserted=%s", inserted)
        return 0
    except Exception as e:
        logger.exception("Category seeding failed: %s", e)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
