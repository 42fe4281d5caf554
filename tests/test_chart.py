#!/usr/bin/env python3
"""
HELMSCRIBE CHART SUITE
----------------------
Chart.yaml / requirements loading, values file discovery and the
assembly of multi-file values tables with separator rows.

Author: HelmScribe Team
Date: 2026-10-19
"""

import os
import sys
import pytest
from pathlib import Path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))

from helmscribe.chart.assembler import build_template_data
from helmscribe.chart.info import (
    get_chart_values_files,
    parse_chart_information,
    parse_chart_requirements,
)
from helmscribe.core.errors import MissingFileError, SchemaError, YamlSyntaxError

CHART_V2 = """\
apiVersion: v2
name: demo
description: A demo chart
version: 1.0
appVersion: "2.3.4"
type: application
home: https://example.com
sources:
  - https://github.com/example/demo
maintainers:
  - name: Ops
    email: ops@example.com
dependencies:
  - name: redis
    version: 17.0.0
    repository: https://charts.bitnami.com/bitnami
  - name: common
    version: 2.0.0
    repository: https://charts.bitnami.com/bitnami
  - name: local
    version: 0.1.0
    repository: file://../local
"""


def make_chart(root: Path, chart_yaml: str = CHART_V2, **files) -> Path:
    root.mkdir(parents=True, exist_ok=True)
    (root / "Chart.yaml").write_text(chart_yaml)
    for name, content in files.items():
        (root / name.replace("_", ".")).write_text(content)
    return root


def test_chart_metadata_is_loaded(tmp_path):
    chart = make_chart(tmp_path / "demo", values_yaml="a: 1\n")
    info = parse_chart_information(chart)

    assert info.meta.name == "demo"
    assert info.meta.version == "1.0"
    assert info.meta.app_version == "2.3.4"
    assert info.meta.maintainers[0].email == "ops@example.com"
    assert info.meta.sources == ["https://github.com/example/demo"]


def test_dependencies_sorted_by_repository_and_name(tmp_path):
    chart = make_chart(tmp_path / "demo")
    requirements = parse_chart_requirements(chart, "v2")
    assert [r.name for r in requirements] == ["local", "common", "redis"]


def test_v1_chart_reads_requirements_file(tmp_path):
    chart = make_chart(tmp_path / "legacy", "apiVersion: v1\nname: legacy\nversion: 0.1.0\n")
    assert parse_chart_requirements(chart, "v1") == []

    (chart / "requirements.yaml").write_text(
        "dependencies:\n  - name: mysql\n    version: 1.0.0\n    repository: https://example.com/charts\n"
    )
    assert [r.name for r in parse_chart_requirements(chart, "v1")] == ["mysql"]


def test_values_file_discovery(tmp_path):
    chart = make_chart(tmp_path / "demo", values_yaml="a: 1\n")
    (chart / "values-prod.yaml").write_text("b: 2\n")

    files = get_chart_values_files(chart, ["values-prod.yaml", "values-missing.yaml"])

    assert [f.name for f in files] == ["values.yaml", "values-prod.yaml"]


def test_missing_values_file_raises(tmp_path):
    chart = make_chart(tmp_path / "demo")
    with pytest.raises(MissingFileError):
        parse_chart_information(chart)


def test_missing_chart_file_raises(tmp_path):
    with pytest.raises(MissingFileError):
        parse_chart_information(tmp_path)


def test_separator_precedes_each_values_file(tmp_path):
    chart = make_chart(tmp_path / "demo", values_yaml="# b -- Bee\nb: 1\na: 2\n")
    (chart / "values-extra.yaml").write_text("c: true\n")

    info = parse_chart_information(chart, ["values-extra.yaml"])
    data = build_template_data(info, "1.0.0", "alphanum")

    assert [r.key for r in data.values] == ["---", "a", "b", "---", "c"]
    first, second = data.values[0], data.values[3]
    assert first.is_separator and second.is_separator
    assert first.description == "values.yaml"
    assert second.description == "values-extra.yaml"
    assert {first.type, first.auto_default, first.default, first.auto_description} == {"---"}
    assert data.values[2].description == "Bee"


def test_empty_values_file_contributes_nothing(tmp_path):
    chart = make_chart(tmp_path / "demo", values_yaml="# nothing configurable yet\n")
    data = build_template_data(parse_chart_information(chart), "1.0.0")
    assert data.values == []


def test_non_mapping_values_abort_chart(tmp_path):
    chart = make_chart(tmp_path / "demo", values_yaml="- 1\n- 2\n")
    info = parse_chart_information(chart)
    with pytest.raises(SchemaError) as excinfo:
        build_template_data(info, "1.0.0")
    assert excinfo.value.path.endswith("values.yaml")


def test_invalid_chart_yaml(tmp_path):
    chart = make_chart(tmp_path / "demo", "name: [unclosed\n", values_yaml="a: 1\n")
    with pytest.raises(YamlSyntaxError):
        parse_chart_information(chart)
