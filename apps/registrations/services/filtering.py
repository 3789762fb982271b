"""Filter, search and sort pipeline producing the view list.

The view list is always recomputed from the base list in a fixed order:
status filter, then free-text search, then sort. The sort key and order
are part of the view state, so a later filter or search change keeps the
rows sorted.
"""

from dataclasses import asdict, dataclass, replace
from typing import Any, Iterable

from apps.registrations.variants import APPROVAL_STATUSES

STATUS_ALL = "all"
STATUS_FILTERS = (STATUS_ALL,) + APPROVAL_STATUSES

SORT_ASC = "asc"
SORT_DESC = "desc"


@dataclass(frozen=True)
class ViewState:
    """Per-user inputs to the pipeline."""

    status: str = STATUS_ALL
    search_query: str = ""
    sort_by: str = ""
    sort_order: str = SORT_ASC

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict | None) -> "ViewState":
        data = data or {}
        state = cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})
        if state.status not in STATUS_FILTERS:
            state = replace(state, status=STATUS_ALL)
        if state.sort_order not in (SORT_ASC, SORT_DESC):
            state = replace(state, sort_order=SORT_ASC)
        return state

    def with_status(self, status: str) -> "ViewState":
        if status not in STATUS_FILTERS:
            status = STATUS_ALL
        return replace(self, status=status)

    def with_search(self, query: str) -> "ViewState":
        """Snapshot a search query, as typed, at the moment the user runs the search."""
        return replace(self, search_query=query or "")

    def toggle_sort(self, key: str) -> "ViewState":
        """Same key flips the order; a new key starts ascending."""
        if key == self.sort_by:
            order = SORT_DESC if self.sort_order == SORT_ASC else SORT_ASC
            return replace(self, sort_order=order)
        return replace(self, sort_by=key, sort_order=SORT_ASC)


def filter_by_status(records: Iterable[dict], status: str) -> list[dict]:
    if status == STATUS_ALL:
        return list(records)
    return [r for r in records if r.get("approvalStatus") == status]


def matches_query(record: dict, query: str, fields: Iterable[str]) -> bool:
    """Case-insensitive substring match against any of ``fields``.

    A field that is missing or None just doesn't match; the other fields
    still get a chance.
    """
    if not query:
        return True
    needle = query.lower()
    for name in fields:
        value = record.get(name)
        if value is None:
            continue
        if needle in str(value).lower():
            return True
    return False


def search(records: Iterable[dict], query: str, fields: Iterable[str]) -> list[dict]:
    fields = tuple(fields)
    return [r for r in records if matches_query(r, query, fields)]


def _sort_value(value: Any) -> tuple:
    # Numbers order before strings so a mixed column never raises.
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return (0, value)
    if value is None:
        return (1, "")
    return (1, str(value))


def sort_records(records: Iterable[dict], key: str, order: str = SORT_ASC) -> list[dict]:
    if not key:
        return list(records)
    return sorted(records, key=lambda r: _sort_value(r.get(key)), reverse=order == SORT_DESC)


def recompute(base: Iterable[dict], state: ViewState, search_fields: Iterable[str]) -> list[dict]:
    """Derive the view list from the base list and the view state."""
    records = filter_by_status(base, state.status)
    records = search(records, state.search_query, search_fields)
    return sort_records(records, state.sort_by, state.sort_order)
