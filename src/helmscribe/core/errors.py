#!/usr/bin/env python3
"""
HELMSCRIBE ERRORS
-----------------
Exception hierarchy raised by the extraction pipeline and chart loader.

Author: HelmScribe Team
Date: 2026-10-19
"""

from typing import Optional


class HelmScribeError(Exception):
    """Base class for every error HelmScribe raises on purpose."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class ChartFileError(HelmScribeError):
    """A chart file could not be obtained. Recoverable: the chart is skipped."""


class MissingFileError(ChartFileError):
    """A required chart file does not exist."""


class FileReadError(ChartFileError):
    """A chart file exists but could not be read."""


class SchemaError(HelmScribeError):
    """The values document does not have the expected structure."""


class YamlSyntaxError(HelmScribeError):
    """A chart or values file is not a single well-formed YAML document."""
