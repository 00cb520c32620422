import re
from datetime import UTC, datetime

FIELD_NAME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9_]*$")


def is_field_name(value: str) -> bool:
    return bool(FIELD_NAME_RE.fullmatch(value))


def now() -> datetime:
    return datetime.now(UTC)
