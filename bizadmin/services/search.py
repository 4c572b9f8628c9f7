"""Search filtering and foreign-key label resolution shared by editors and routes."""
from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Sequence, TypeVar

UNKNOWN_LABEL = "Unknown"

R = TypeVar("R", bound=Mapping[str, Any])


def _text(value: Any) -> str:
    return "" if value is None else str(value).lower()


# PUBLIC_INTERFACE
def matches(row: Mapping[str, Any], fields: Sequence[str], term: str) -> bool:
    """True when any of `fields` contains `term`, case-insensitively."""
    needle = (term or "").lower()
    return any(needle in _text(row.get(f)) for f in fields)


# PUBLIC_INTERFACE
def filter_rows(rows: Iterable[R], fields: Sequence[str], term: str) -> List[R]:
    """Return the rows matching `term` in their original order; empty term keeps all."""
    return [row for row in rows if matches(row, fields, term)]


# PUBLIC_INTERFACE
def resolve_label(value: Any, options: Iterable[Any]) -> str:
    """
    Return the label of the first option whose value equals `value`.

    Options are objects with `value`/`label` attributes. Equality is strict, so
    the string "1" does not match the integer 1.
    An empty label also renders as the placeholder.
    """
    for option in options:
        if option.value == value and type(option.value) is type(value):
            return option.label or UNKNOWN_LABEL
    return UNKNOWN_LABEL
