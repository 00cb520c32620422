from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Ok[T]:
    value: T


@dataclass(frozen=True)
class Err:
    reason: str


type Result[T] = Ok[T] | Err


@dataclass
class Submission:
    """Record payload split into top-level columns and the custom_fields object."""

    columns: dict[str, Any] = field(default_factory=dict)
    custom_fields: dict[str, Any] = field(default_factory=dict)

    def to_payload(self) -> dict[str, Any]:
        return {**self.columns, "custom_fields": dict(self.custom_fields)}
