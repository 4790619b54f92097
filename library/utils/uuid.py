"""UUID helpers."""

import uuid


def uuid7_or_4() -> uuid.UUID:
    """Return uuid7 when available, else uuid4 (used for primary keys)."""
    return getattr(uuid, "uuid7", uuid.uuid4)()


def as_uuid(value):
    """Coerce an id (UUID, str or None) to a UUID; None stays None."""
    if value is None or isinstance(value, uuid.UUID):
        return value
    return uuid.UUID(str(value))
