"""URL slugs for posts: derived from the title, unique across posts."""

import re
import unicodedata
import uuid

from sqlalchemy.orm import Session

from blog_api.models import Post

SLUG_MAX_LEN = 200


def slugify(text: str, max_length: int = SLUG_MAX_LEN) -> str:
    if not text:
        return ""

    text = unicodedata.normalize("NFKD", text)
    text = text.encode("ascii", "ignore").decode("ascii")

    text = text.lower()

    text = re.sub(r"[^\w\s-]", "", text)
    text = text.replace("_", " ")

    text = re.sub(r"[-\s]+", "-", text)

    return text.strip("-")[:max_length].rstrip("-")


def slug_exists(db: Session, slug: str, exclude_id: uuid.UUID | None = None) -> bool:
    query = db.query(Post.id).filter(Post.slug == slug)
    if exclude_id is not None:
        query = query.filter(Post.id != exclude_id)
    return query.first() is not None


def unique_slug(db: Session, title: str, exclude_id: uuid.UUID | None = None) -> str:
    """Slugify the title, appending -2, -3, ... until no other post uses it."""
    base = slugify(title) or "post"
    candidate = base
    counter = 2
    while slug_exists(db, candidate, exclude_id):
        candidate = f"{base}-{counter}"
        counter += 1
    return candidate
