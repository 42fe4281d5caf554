#!/usr/bin/env python3
"""
HELMSCRIBE VALUES PIPELINE
--------------------------
Runs one values file through the extraction phases in a fixed order:

1. Compose   - raw text -> ruamel.yaml representation tree
2. Scan      - raw text -> key-path descriptions (comment grammar)
3. Walk      - tree + descriptions -> unordered rows
4. Sort      - rows -> final order for the values table

Each pass owns its own descriptions and rows; nothing is shared between
files.

Author: HelmScribe Team
Date: 2026-10-19
"""

import logging
from typing import Dict, List, Optional

from ruamel.yaml import YAML, YAMLError
from ruamel.yaml.nodes import Node

from helmscribe.core.errors import YamlSyntaxError
from helmscribe.core.models import ValueDescription, ValueRow
from helmscribe.extraction.comments import CommentScanner
from helmscribe.extraction.sorter import ALPHANUM_SORT_ORDER, sort_value_rows
from helmscribe.extraction.walker import ValuesWalker

logger = logging.getLogger("helmscribe.pipeline")


def compose_values(text: str, source: str = "<values>") -> Optional[Node]:
    """
    Parses values text into its representation tree (node kinds, resolved
    tags and source marks). Only the first document of a multi-document
    stream is used; returns None when there is no document at all.

    Raises:
        YamlSyntaxError: the first document is not well-formed YAML.
    """
    try:
        return next(iter(YAML().compose_all(text)), None)
    except YAMLError as e:
        raise YamlSyntaxError(f"Unable to parse {source}: {e}", path=source) from e


class ValuesPipeline:
    """Coordinates scanner, walker and sorter for a single values file."""

    def __init__(self, sort_order: str = ALPHANUM_SORT_ORDER):
        self.sort_order = sort_order
        self.scanner = CommentScanner()

    def extract(self, document: Node, descriptions: Dict[str, ValueDescription]) -> List[ValueRow]:
        """Walks an already composed document and orders the rows."""
        rows = ValuesWalker(descriptions).walk(document)
        return sort_value_rows(rows, self.sort_order)

    def run(self, text: str, source: str = "<values>") -> List[ValueRow]:
        """
        Full pass over raw values text. An empty document yields no rows.

        Raises:
            YamlSyntaxError: the text is not valid YAML.
            SchemaError: the document root is not a mapping.
        """
        text = text.replace("\r\n", "\n")
        document = compose_values(text, source)
        if document is None:
            logger.debug(f"{source} is empty; nothing to document")
            return []

        descriptions = self.scanner.scan(text.split("\n"))
        return self.extract(document, descriptions)
