#!/usr/bin/env python3
"""
HELMSCRIBE COMMENT SCANNER SUITE
--------------------------------
Verifies the `# key -- description` grammar, block termination rules
and file-level error reporting of the CommentScanner.

Author: HelmScribe Team
Date: 2026-10-19
"""

import os
import sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))

from helmscribe.core.errors import MissingFileError
from helmscribe.core.models import ValueDescription
from helmscribe.extraction.comments import (
    CommentScanner,
    match_key_comment,
    parse_comment_block,
)


def scan(text: str):
    return CommentScanner().scan(text.splitlines())


def test_description_and_default_are_associated():
    descriptions = scan(
        "a:\n"
        "  b:\n"
        "    # a.b.c -- does X\n"
        "    # @default -- 5\n"
        "    c: 3\n"
    )
    assert descriptions == {"a.b.c": ValueDescription(description="does X", default="5")}


def test_continuation_lines_extend_description():
    descriptions = scan(
        "# replicas -- Number of pods\n"
        "# to run behind the service\n"
        "replicas: 1\n"
    )
    assert descriptions["replicas"].description == "Number of pods to run behind the service"
    assert descriptions["replicas"].default == ""


def test_block_open_at_end_of_input_is_flushed():
    descriptions = scan("foo: 1\n# foo -- trailing comment\n# @default -- one")
    assert descriptions["foo"] == ValueDescription(description="trailing comment", default="one")


def test_last_block_for_a_key_wins():
    descriptions = scan(
        "# foo -- first\n"
        "foo: 1\n"
        "# foo -- second\n"
        "foo: 2\n"
    )
    assert descriptions == {"foo": ValueDescription(description="second")}


def test_closing_line_is_not_read_as_new_key():
    # '#bar' lacks the space continuation needs, so it ends the foo block
    descriptions = scan(
        "# foo -- a\n"
        "#bar -- b\n"
        "bar: 1\n"
    )
    assert list(descriptions) == ["foo"]


def test_blank_line_ends_block():
    descriptions = scan("# foo -- a\n\n# unrelated note\nfoo: 1\n")
    assert descriptions["foo"].description == "a"


def test_plain_comments_and_empty_keys_are_ignored():
    descriptions = scan(
        "# Default values for my-chart.\n"
        "#  -- orphan text\n"
        "image: nginx\n"
    )
    assert descriptions == {}


def test_indented_key_comment():
    descriptions = scan("service:\n    # service.port -- Port to expose\n    port: 80\n")
    assert descriptions["service.port"].description == "Port to expose"


def test_match_key_comment_strips_key_path():
    assert match_key_comment("  #   ingress.hosts[0].host   -- Hostname") == ("ingress.hosts[0].host", "Hostname")
    assert match_key_comment("# no separator here") is None
    assert match_key_comment("image: nginx") is None


def test_parse_comment_block_reduces_buffer():
    key, description = parse_comment_block([
        "# resources -- CPU/memory requests",
        "# @default -- see below",
        "# and limits",
    ])
    assert key == "resources"
    assert description == ValueDescription(description="CPU/memory requests and limits", default="see below")


def test_scan_file_reads_from_disk(tmp_path):
    values = tmp_path / "values.yaml"
    values.write_text("# name -- Release name override\r\nname: demo\r\n")

    descriptions, error = CommentScanner().scan_file(values)

    assert error is None
    assert descriptions["name"].description == "Release name override"


def test_scan_file_missing_returns_empty_mapping_and_error(tmp_path):
    descriptions, error = CommentScanner().scan_file(tmp_path / "absent.yaml")

    assert descriptions == {}
    assert isinstance(error, MissingFileError)
    assert error.path.endswith("absent.yaml")


def test_only_newlines_split_lines(tmp_path):
    # A form feed is not a line break for the comment grammar
    values = tmp_path / "values.yaml"
    values.write_text("# foo -- a\x0cb\n# more text\nfoo: 1\n", encoding="utf-8")

    descriptions, error = CommentScanner().scan_file(values)

    assert error is None
    assert descriptions["foo"].description == "a\x0cb more text"
