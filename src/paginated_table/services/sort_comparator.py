"""Type-aware record sorting with natural string order.

Comparison policy (first matching rule wins):

 1. both values empty -> equal
 2. one value empty -> the empty one sorts last, in either direction
 3. both numbers -> numeric order
 4. both dates -> chronological order
 5. both booleans -> ``False`` before ``True``
 6. otherwise -> natural comparison of the display strings (case- and
    accent-insensitive so ``Émile`` sorts with the e's, digit runs compared
    by numeric value so ``file2`` precedes ``file10``)

Direction only flips rules 3-6. Python's sort is stable, so ties keep the
incoming order.
"""

from __future__ import annotations

import re
import unicodedata
from datetime import date, datetime, time
from functools import cmp_to_key
from typing import Any, Iterable, List, Sequence, TypeVar

from paginated_table.models import Record, SortDirection, SortState

from .value_normalizer import is_empty, to_display_string

__all__ = ["compare_values", "natural_compare", "natural_sorted", "sort_records"]

R = TypeVar("R", bound=Record)

_DIGIT_RUN = re.compile(r"([0-9]+)")


def _sign(delta: float) -> int:
    return (delta > 0) - (delta < 0)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _as_datetime(value: date) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min)


def _compare_dates(a: date, b: date) -> int:
    da, db = _as_datetime(a), _as_datetime(b)
    if (da.tzinfo is None) != (db.tzinfo is None):
        # Naive vs aware: compare wall-clock time
        da, db = da.replace(tzinfo=None), db.replace(tzinfo=None)
    return (da > db) - (da < db)


def _fold(text: str) -> str:
    """Case- and accent-insensitive collation key (``"Émile"`` -> ``"emile"``)."""
    decomposed = unicodedata.normalize("NFKD", text.casefold())
    return "".join(c for c in decomposed if not unicodedata.combining(c))


def _compare_runs(a: str, b: str) -> int:
    # split() with a capture group alternates text, digits, text, ...
    parts_a = _DIGIT_RUN.split(a)
    parts_b = _DIGIT_RUN.split(b)
    for i, (pa, pb) in enumerate(zip(parts_a, parts_b)):
        if pa == pb:
            continue
        if i % 2:
            result = _sign(int(pa) - int(pb))
            if result:
                return result
            continue
        return -1 if pa < pb else 1
    return _sign(len(parts_a) - len(parts_b))


def natural_compare(a: str, b: str) -> int:
    """Compare strings ignoring case and accents, with numeric digit runs.

    Strings that differ only by accents are ordered unaccented first.
    """
    return _compare_runs(_fold(a), _fold(b)) or _compare_runs(a.casefold(), b.casefold())


def _compare_present(a: Any, b: Any) -> int:
    if _is_number(a) and _is_number(b):
        return _sign(a - b)
    if isinstance(a, date) and isinstance(b, date):
        return _compare_dates(a, b)
    if isinstance(a, bool) and isinstance(b, bool):
        return int(a) - int(b)
    return natural_compare(to_display_string(a), to_display_string(b))


def compare_values(a: Any, b: Any, direction: SortDirection = SortDirection.ASC) -> int:
    a_empty = is_empty(a)
    b_empty = is_empty(b)
    if a_empty and b_empty:
        return 0
    if a_empty:
        return 1
    if b_empty:
        return -1
    result = _compare_present(a, b)
    return result if direction is SortDirection.ASC else -result


def natural_sorted(values: Iterable[str]) -> List[str]:
    return sorted(values, key=cmp_to_key(natural_compare))


def sort_records(records: Sequence[R], sort: SortState) -> List[R]:
    """Return a sorted copy; ``sort.property_id is None`` keeps source order."""
    if sort.property_id is None:
        return list(records)
    prop = sort.property_id
    direction = sort.direction
    # Read each value once; get_value may be costly on real hosts
    decorated = [(r.get_value(prop), r) for r in records]
    decorated.sort(key=cmp_to_key(lambda x, y: compare_values(x[0], y[0], direction)))
    return [r for _, r in decorated]
