from __future__ import annotations

from typing import Any, List

from paginated_table.models import DictRecord


def make_record(path: str, **values: Any) -> DictRecord:
    return DictRecord(path=path, values=values)


def make_numbered(count: int, **extra: Any) -> List[DictRecord]:
    return [
        DictRecord(path=f"notes/item{i}.md", values={"title": f"item{i}", "n": i, **extra})
        for i in range(1, count + 1)
    ]


def paths(records) -> List[str]:
    return [r.path for r in records]
