import uuid

from jobboard.errors import InvalidIdentifier


def new_id() -> str:
    return str(uuid.uuid4())


def parse_id(value: str, kind: str = "ID") -> str:
    """Return the canonical form of a store identifier.

    Raises InvalidIdentifier when ``value`` is not a UUID.
    """
    try:
        return str(uuid.UUID(value))
    except (ValueError, TypeError, AttributeError) as exc:
        raise InvalidIdentifier(f"Invalid {kind}") from exc
