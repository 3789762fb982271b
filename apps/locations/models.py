"""Reference data types for the state/district hierarchy.

These are plain value objects, not database models: the lists are fetched
from the remote service once per process and never written back.
"""

from dataclasses import dataclass
from typing import Any, Optional


def as_int(value: Any) -> Optional[int]:
    """Coerce a form or wire value to an int, returning None when impossible."""
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class GeoState:
    """A state - top level of the hierarchy."""

    id: int
    code: str
    name: str

    @classmethod
    def from_dict(cls, data: dict) -> "GeoState":
        return cls(
            id=as_int(data.get("id")) or 0,
            code=str(data.get("code") or ""),
            name=str(data.get("name") or ""),
        )


@dataclass(frozen=True)
class GeoDistrict:
    """A district, referencing its state by id.

    A district whose state_id matches no loaded state is an orphan and is
    simply never offered under any state.
    """

    id: int
    state_id: Optional[int]
    name: str

    @classmethod
    def from_dict(cls, data: dict) -> "GeoDistrict":
        return cls(
            id=as_int(data.get("id")) or 0,
            state_id=as_int(data.get("stateId")),
            name=str(data.get("name") or ""),
        )
