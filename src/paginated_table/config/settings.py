"""Global constants for the paginated table view."""

from __future__ import annotations

import os
from typing import Final

DEFAULT_PAGE_SIZE: Final = 25
PAGE_SIZE_OPTIONS: Final = (10, 25, 50, 100)
SEARCH_DEBOUNCE_MS: Final = 300
JUMP_PAGES: Final = 10  # "-10" / "+10" navigation buttons
EMPTY_VALUE_LABEL: Final = "(empty)"

DATA_DIR_ENV: Final = "PAGINATED_TABLE_DATA_DIR"
DATA_DIR: Final = os.environ.get(DATA_DIR_ENV, "data")
