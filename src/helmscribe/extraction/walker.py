#!/usr/bin/env python3
"""
HELMSCRIBE VALUES WALKER
------------------------
Flattens a composed values document (ruamel.yaml representation tree)
into documentation rows, one per scalar leaf or empty container.

Key-paths join mapping keys with '.' and sequence indexes with '[n]',
e.g. `service.ports[0].name`, so they line up with the key-paths written
in `# key -- description` comments.

Author: HelmScribe Team
Date: 2026-10-19
"""

import logging
from typing import Dict, List, Optional, Set, Tuple

from ruamel.yaml.nodes import MappingNode, Node, ScalarNode, SequenceNode

from helmscribe.core.errors import SchemaError
from helmscribe.core.models import (
    TYPE_BOOLEAN, TYPE_FLOAT, TYPE_INTEGER, TYPE_LIST, TYPE_NULL,
    TYPE_OBJECT, TYPE_STRING, ValueDescription, ValueRow,
)

logger = logging.getLogger("helmscribe.walker")

YAML_TAG_PREFIX = "tag:yaml.org,2002:"
MERGE_TAG = YAML_TAG_PREFIX + "merge"

# Resolved YAML 1.2 scalar tags; anything else (timestamps, custom tags) is a string
SCALAR_TYPES = {
    YAML_TAG_PREFIX + "str": TYPE_STRING,
    YAML_TAG_PREFIX + "int": TYPE_INTEGER,
    YAML_TAG_PREFIX + "float": TYPE_FLOAT,
    YAML_TAG_PREFIX + "bool": TYPE_BOOLEAN,
    YAML_TAG_PREFIX + "null": TYPE_NULL,
}


def node_kind(node: Optional[Node]) -> str:
    """Human-readable node kind for error messages."""
    if isinstance(node, MappingNode):
        return "mapping"
    if isinstance(node, SequenceNode):
        return "sequence"
    if isinstance(node, ScalarNode):
        return "scalar"
    return "null" if node is None else type(node).__name__


def infer_type(node: ScalarNode) -> str:
    return SCALAR_TYPES.get(str(node.tag), TYPE_STRING)


def join_key(prefix: str, key: str) -> str:
    return f"{prefix}.{key}" if prefix else key


def join_index(prefix: str, index: int) -> str:
    return f"{prefix}[{index}]"


class ValuesWalker:
    """
    Depth-first walker producing unordered ValueRows.

    Mappings and sequences do not get a row of their own unless they are
    empty ('{}' / '[]') or their key-path carries a description comment, in
    which case a summary row is emitted before descending into them.
    """

    def __init__(self, descriptions: Optional[Dict[str, ValueDescription]] = None):
        self.descriptions = descriptions or {}

    def walk(self, root: Node) -> List[ValueRow]:
        """
        Flattens the document root, which must be a mapping.

        Raises:
            SchemaError: the root is not a mapping, or the tree holds a complex
                key or a recursive alias. No rows are returned in that case.
        """
        if not isinstance(root, MappingNode):
            raise SchemaError(f"values file must resolve to a map, not {node_kind(root)}")

        rows: List[ValueRow] = []
        self._visit("", root, rows, set())
        logger.debug(f"Walker produced {len(rows)} rows")
        return rows

    def _visit(self, prefix: str, node: Node, rows: List[ValueRow], active: Set[int]):
        if id(node) in active:
            raise SchemaError(f"recursive alias at '{prefix}' (line {node.start_mark.line + 1})")

        if isinstance(node, ScalarNode):
            rows.append(self._scalar_row(prefix, node))
            return

        if isinstance(node, MappingNode):
            active.add(id(node))
            entries = self._mapping_entries(node, active)
            if not entries:
                rows.append(self._row(prefix, node, TYPE_OBJECT, "{}"))
            else:
                self._summarise(prefix, node, TYPE_OBJECT, rows)
                for key, child in entries:
                    self._visit(join_key(prefix, key), child, rows, active)
            active.discard(id(node))
            return

        if isinstance(node, SequenceNode):
            active.add(id(node))
            if not node.value:
                rows.append(self._row(prefix, node, TYPE_LIST, "[]"))
            else:
                self._summarise(prefix, node, TYPE_LIST, rows)
                for index, child in enumerate(node.value):
                    self._visit(join_index(prefix, index), child, rows, active)
            active.discard(id(node))
            return

        raise SchemaError(f"unexpected node kind {node_kind(node)} at '{prefix}'")

    def _mapping_entries(self, node: MappingNode, active: Set[int]) -> List[Tuple[str, Node]]:
        """
        (key, child) pairs in source order, with `<<` merge keys expanded in
        place. Explicit keys override merged ones; earlier merge sources win.
        """
        explicit = {
            self._key_text(key_node)
            for key_node, _ in node.value
            if str(key_node.tag) != MERGE_TAG
        }
        entries: List[Tuple[str, Node]] = []
        seen: Set[str] = set()

        for key_node, value_node in node.value:
            if str(key_node.tag) != MERGE_TAG:
                key = self._key_text(key_node)
                entries.append((key, value_node))
                seen.add(key)
                continue

            for source in self._merge_sources(value_node):
                if id(source) in active:
                    raise SchemaError(f"recursive merge at line {source.start_mark.line + 1}")
                for key, child in self._mapping_entries(source, active | {id(source)}):
                    if key in explicit or key in seen:
                        continue
                    entries.append((key, child))
                    seen.add(key)

        return entries

    def _merge_sources(self, value_node: Node) -> List[MappingNode]:
        if isinstance(value_node, MappingNode):
            return [value_node]
        if isinstance(value_node, SequenceNode) and all(isinstance(n, MappingNode) for n in value_node.value):
            return list(value_node.value)
        raise SchemaError(
            f"merge key at line {value_node.start_mark.line + 1} must reference a mapping "
            f"or a list of mappings, not {node_kind(value_node)}"
        )

    def _key_text(self, key_node: Node) -> str:
        if not isinstance(key_node, ScalarNode):
            raise SchemaError(
                f"complex {node_kind(key_node)} key at line {key_node.start_mark.line + 1} cannot be documented"
            )
        return key_node.value

    def _summarise(self, prefix: str, node: Node, value_type: str, rows: List[ValueRow]):
        # Only documented containers get a summary row ahead of their children
        if prefix and prefix in self.descriptions:
            rows.append(self._row(prefix, node, value_type, ""))

    def _scalar_row(self, key: str, node: ScalarNode) -> ValueRow:
        value_type = infer_type(node)
        auto_default = "null" if value_type == TYPE_NULL else node.value
        return self._row(key, node, value_type, auto_default)

    def _row(self, key: str, node: Node, value_type: str, auto_default: str) -> ValueRow:
        entry = self.descriptions.get(key)
        return ValueRow(
            key=key,
            type=value_type,
            auto_default=auto_default,
            default=entry.default if entry else "",
            description=entry.description if entry else "",
            line=node.start_mark.line + 1,
            column=node.start_mark.column + 1,
        )
