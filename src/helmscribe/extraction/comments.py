#!/usr/bin/env python3
"""
HELMSCRIBE COMMENT SCANNER
--------------------------
Recovers per-key documentation from the raw text of a values file.

Recognised grammar (everything else is ignored):

    # service.port -- Port the service listens on,
    # continued on the next comment line
    # @default -- derived from the release name

The first line opens a block for the key-path before `--`. Following
comment lines are either the `@default` override or continuation text.
The first non-comment line closes the block.

Author: HelmScribe Team
Date: 2026-10-19
"""

import re
import logging
from typing import Dict, Iterable, List, Optional, Tuple

from helmscribe.core.errors import ChartFileError
from helmscribe.core.files import PathLike, read_chart_file
from helmscribe.core.models import ValueDescription

logger = logging.getLogger("helmscribe.comments")

KEY_COMMENT_PATTERN = re.compile(r"^\s*#\s*(?P<key>.*)\s+--\s*(?P<description>.*)$")
DEFAULT_COMMENT_PATTERN = re.compile(r"^\s*# @default -- (?P<default>.*)$")
CONTINUATION_PATTERN = re.compile(r"^\s*# (?P<text>.*)$")


def match_key_comment(line: str) -> Optional[Tuple[str, str]]:
    """Returns (key-path, description) for a `# key -- text` line, else None."""
    match = KEY_COMMENT_PATTERN.match(line)
    if not match:
        return None

    key = match.group("key").strip()
    if not key:
        return None
    return key, match.group("description")


def parse_comment_block(comment_lines: List[str]) -> Tuple[str, ValueDescription]:
    """
    Reduces one buffered comment block to its key-path and description.

    The first key comment in the block names the key; later lines either set
    the default override or extend the description with a single space.
    """
    key = ""
    description = ""
    default = ""
    start = 0

    for i, line in enumerate(comment_lines):
        found = match_key_comment(line)
        if found:
            key, description = found
            start = i
            break

    for line in comment_lines[start + 1:]:
        default_match = DEFAULT_COMMENT_PATTERN.match(line)
        if default_match:
            default = default_match.group("default").strip()
            continue

        continuation_match = CONTINUATION_PATTERN.match(line)
        if continuation_match:
            description = f"{description} {continuation_match.group('text')}"

    return key, ValueDescription(description=description.strip(), default=default)


class CommentScanner:
    """
    Two-state line scanner: SEEKING a key comment, then ACCUMULATING its
    continuation lines until a non-comment line (or end of input) flushes it.
    """

    def scan(self, lines: Iterable[str]) -> Dict[str, ValueDescription]:
        """Maps each documented key-path to its description. Later blocks win."""
        descriptions: Dict[str, ValueDescription] = {}
        buffer: List[str] = []

        for line in lines:
            line = line.rstrip("\r\n")

            if not buffer:
                if match_key_comment(line):
                    buffer.append(line)
                continue

            if DEFAULT_COMMENT_PATTERN.match(line) or CONTINUATION_PATTERN.match(line):
                buffer.append(line)
                continue

            # The closing line is not re-examined as a new key comment
            self._flush(buffer, descriptions)
            buffer = []

        # Input ended mid-block
        if buffer:
            self._flush(buffer, descriptions)

        return descriptions

    def scan_file(self, values_path: PathLike) -> Tuple[Dict[str, ValueDescription], Optional[ChartFileError]]:
        """
        Scans a values file on disk.

        I/O failures do not raise: they come back as the second element with an
        empty mapping, leaving the caller to decide whether to carry on.
        """
        try:
            text = read_chart_file(values_path)
        except ChartFileError as e:
            return {}, e

        descriptions = self.scan(text.split("\n"))
        logger.debug(f"Found {len(descriptions)} documented keys in {values_path}")
        return descriptions, None

    def _flush(self, buffer: List[str], descriptions: Dict[str, ValueDescription]):
        key, description = parse_comment_block(buffer)
        if key in descriptions:
            logger.debug(f"Key '{key}' documented more than once; keeping the last comment")
        descriptions[key] = description
