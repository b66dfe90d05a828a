"""Resource ownership checks applied before any mutation."""

import uuid

from blog_api.core.errors import ForbiddenError


def is_owner(caller_id: uuid.UUID | str, owner_id: uuid.UUID | str | None) -> bool:
    """Compare identifiers by value (as strings), never by object identity."""
    if owner_id is None:
        return False
    return str(caller_id) == str(owner_id)


def ensure_owner(
    caller_id: uuid.UUID | str,
    owner_id: uuid.UUID | str | None,
    message: str = "You are not authorized to modify this resource",
) -> None:
    """Raise ForbiddenError unless the caller owns the resource."""
    if not is_owner(caller_id, owner_id):
        raise ForbiddenError(message)
