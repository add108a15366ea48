import uuid


def new_id() -> str:
    """Return a random UUID4 string identifying one analysis session."""
    return str(uuid.uuid4())


def is_valid_id(value: object) -> bool:
    return isinstance(value, str) and value.strip() != ""
