#!/usr/bin/env python3
"""
HELMSCRIBE FILE I/O
-------------------
Reading chart files with uniform error reporting, and atomic README
persistence.

Author: HelmScribe Team
Date: 2026-10-19
"""

import os
import logging
from pathlib import Path
from typing import Union

from helmscribe.core.errors import FileReadError, MissingFileError

logger = logging.getLogger("helmscribe.files")

PathLike = Union[str, Path]


def read_chart_file(file_path: PathLike) -> str:
    """
    Reads a chart file as text (BOM-aware) with line endings normalised to LF.

    Raises:
        MissingFileError: the file does not exist.
        FileReadError: the file exists but cannot be read or decoded.
    """
    path = Path(file_path)
    try:
        text = path.read_text(encoding="utf-8-sig")
    except FileNotFoundError:
        logger.warning(f"Required chart file {path} missing. Skipping documentation for chart")
        raise MissingFileError(f"Required chart file {path} missing", path=str(path))
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Error occurred in reading chart file {path}. Skipping documentation for chart")
        raise FileReadError(f"Unable to read chart file {path}: {e}", path=str(path)) from e

    return text.replace("\r\n", "\n")


def atomic_write(target_path: PathLike, content: str):
    """Writes through a temporary sibling file so readers never see a partial README."""
    target_path = Path(target_path)
    if not os.access(target_path.parent, os.W_OK):
        raise PermissionError(f"No write access to {target_path.parent}")

    temp_file = target_path.with_name(f".{target_path.name}.helmscribe.tmp")
    try:
        temp_file.write_text(content, encoding="utf-8")
        os.replace(temp_file, target_path)
    except OSError as e:
        if temp_file.exists():
            temp_file.unlink()
        raise IOError(f"Atomic write failed: {e}") from e
