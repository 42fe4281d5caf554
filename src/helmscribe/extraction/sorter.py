#!/usr/bin/env python3
"""
HELMSCRIBE ROW SORTER
---------------------
Orders the walker's rows either as they appear in the values file or
alphabetically by key-path. Unknown orders fall back to alphabetical
with a warning.

Author: HelmScribe Team
Date: 2026-10-19
"""

import logging
from typing import Iterable, List, Tuple

from helmscribe.core.models import ValueRow

logger = logging.getLogger("helmscribe.sorter")

FILE_SORT_ORDER = "file"
ALPHANUM_SORT_ORDER = "alphanum"
SORT_ORDERS = (FILE_SORT_ORDER, ALPHANUM_SORT_ORDER)


def resolve_sort_order(sort_order: str) -> str:
    """Validates a configured order, substituting alphanum for unknown values."""
    if sort_order in SORT_ORDERS:
        return sort_order
    logger.warning(f"Invalid sort order provided {sort_order}, defaulting to {ALPHANUM_SORT_ORDER}")
    return ALPHANUM_SORT_ORDER


def file_order_key(row: ValueRow) -> Tuple[int, int]:
    """Line first; the column only decides between rows on the same line."""
    return row.line, row.column


def alphanum_key(row: ValueRow) -> str:
    return row.key


def sort_value_rows(rows: Iterable[ValueRow], sort_order: str) -> List[ValueRow]:
    """
    Returns a new, stably sorted list. The input is left untouched and
    every sort order value is accepted.
    """
    if resolve_sort_order(sort_order) == FILE_SORT_ORDER:
        return sorted(rows, key=file_order_key)
    return sorted(rows, key=alphanum_key)
