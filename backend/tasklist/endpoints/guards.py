from typing import Optional, Protocol, TypeVar

from ..errors import NotAuthorized, NotFound


class Owned(Protocol):
    user_id: str


T = TypeVar("T", bound=Owned)


def require_owner(record: Optional[T], user_id: str, noun: str, verb: str = "access") -> T:
    """Return ``record`` if it exists and belongs to ``user_id``."""
    if record is None:
        raise NotFound(f"{noun} not found")
    if record.user_id != user_id:
        raise NotAuthorized(f"Not authorized to {verb} this {noun.lower()}")
    return record
