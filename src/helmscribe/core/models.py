#!/usr/bin/env python3
"""
HELMSCRIBE CORE MODELS
----------------------
Defines the fundamental records shared across the HelmScribe pipeline:
comment-derived descriptions, documentation rows and the separator
sentinel that marks values-file boundaries.

Author: HelmScribe Team
Date: 2026-10-19
"""

from dataclasses import dataclass

# Closed set of value types a documentation row can carry
TYPE_STRING = "string"
TYPE_INTEGER = "integer"
TYPE_FLOAT = "float"
TYPE_BOOLEAN = "boolean"
TYPE_LIST = "list"
TYPE_OBJECT = "object"
TYPE_NULL = "null"

SEPARATOR = "---"


@dataclass(frozen=True)
class ValueDescription:
    """
    The (description, default-override) pair recovered from a
    `# key -- text` comment block.
    """
    description: str = ""
    default: str = ""   # Text of the `# @default -- ...` line, if any


@dataclass(frozen=True)
class ValueRow:
    """
    One line of the values table.

    Rows are created once by the walker and never mutated; the sorter
    only changes their position in the list.
    """
    key: str                    # Dotted/bracketed key-path, '' for the root
    type: str                   # One of the TYPE_* constants
    auto_default: str = ""      # Literal value as written in the values file
    default: str = ""           # Override from `# @default -- ...`
    auto_description: str = ""
    description: str = ""       # Override from `# key -- ...`
    line: int = 0               # 1-based source position
    column: int = 0

    @property
    def is_separator(self) -> bool:
        return self.key == SEPARATOR and self.type == SEPARATOR


def separator_row(values_file_name: str) -> ValueRow:
    """Builds the sentinel row placed before each values file's block."""
    return ValueRow(
        key=SEPARATOR,
        type=SEPARATOR,
        auto_default=SEPARATOR,
        default=SEPARATOR,
        auto_description=SEPARATOR,
        description=values_file_name,
    )
