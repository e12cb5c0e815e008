"""Versioned JSON files for view config and paginator settings.

Files live in the data directory (``PAGINATED_TABLE_DATA_DIR``, read on each
call so hosts and tests can redirect it) unless a caller passes ``base_dir``.
Reads never raise: a missing, unreadable or version-mismatched file reads as
``None`` and the caller falls back to defaults. Writes go through a sibling
``.tmp`` file and ``Path.replace`` so a crash never leaves half a file.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from paginated_table.config.settings import DATA_DIR, DATA_DIR_ENV

_logger = logging.getLogger(__name__)

__all__ = ["data_dir", "store_path", "read_document", "write_document"]


def data_dir() -> Path:
    return Path(os.environ.get(DATA_DIR_ENV) or DATA_DIR)


def store_path(filename: str, base_dir: str | Path | None = None) -> Path:
    return (Path(base_dir) if base_dir else data_dir()) / filename


def read_document(path: Path, *, version: Optional[int] = None) -> Optional[Dict[str, Any]]:
    """Load a JSON object; ``None`` when absent, corrupt or (if given) of another version."""
    if not path.exists():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        _logger.warning("Unreadable %s (%s); using defaults", path, exc)
        return None
    if not isinstance(data, dict):
        _logger.warning("Ignoring %s: top level is not an object", path)
        return None
    if version is not None and data.get("version") != version:
        _logger.warning("Ignoring %s: version %r != %s", path, data.get("version"), version)
        return None
    return data


def write_document(path: Path, data: Dict[str, Any]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    staging = path.with_name(path.name + ".tmp")
    staging.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
    staging.replace(path)
    return path
