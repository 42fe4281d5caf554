#!/usr/bin/env python3
"""
HELMSCRIBE CHART LOADER
-----------------------
Reads everything a chart contributes to its documentation:

- Chart.yaml metadata (name, versions, maintainers, ...)
- Dependencies (requirements.yaml for apiVersion v1, Chart.yaml otherwise)
- values.yaml plus any extra values files, each composed into a
  representation tree and scanned for description comments

Author: HelmScribe Team
Date: 2026-10-19
"""

import os
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from ruamel.yaml import YAML, YAMLError
from ruamel.yaml.nodes import Node

from helmscribe.core.errors import FileReadError, SchemaError, YamlSyntaxError
from helmscribe.core.files import PathLike, read_chart_file
from helmscribe.core.models import ValueDescription
from helmscribe.extraction.comments import CommentScanner
from helmscribe.extraction.pipeline import compose_values

logger = logging.getLogger("helmscribe.chart")

CHART_FILE = "Chart.yaml"
REQUIREMENTS_FILE = "requirements.yaml"
VALUES_FILE = "values.yaml"


def _text(value: Any) -> str:
    # Unquoted versions such as `version: 1.0` load as floats
    return "" if value is None else str(value)


@dataclass
class ChartMaintainer:
    name: str = ""
    email: str = ""
    url: str = ""


@dataclass
class ChartMeta:
    """Fields of Chart.yaml that end up in the README."""
    api_version: str = ""
    app_version: str = ""
    kube_version: str = ""
    name: str = ""
    deprecated: bool = False
    description: str = ""
    version: str = ""
    home: str = ""
    type: str = ""
    sources: List[str] = field(default_factory=list)
    engine: str = ""
    maintainers: List[ChartMaintainer] = field(default_factory=list)
    annotations: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ChartMeta":
        return cls(
            api_version=_text(data.get("apiVersion")),
            app_version=_text(data.get("appVersion")),
            kube_version=_text(data.get("kubeVersion")),
            name=_text(data.get("name")),
            deprecated=bool(data.get("deprecated", False)),
            description=_text(data.get("description")),
            version=_text(data.get("version")),
            home=_text(data.get("home")),
            type=_text(data.get("type")),
            sources=[_text(s) for s in data.get("sources") or []],
            engine=_text(data.get("engine")),
            maintainers=[
                ChartMaintainer(_text(m.get("name")), _text(m.get("email")), _text(m.get("url")))
                for m in data.get("maintainers") or []
                if isinstance(m, dict)
            ],
            annotations={str(k): _text(v) for k, v in (data.get("annotations") or {}).items()},
        )


@dataclass
class ChartRequirement:
    name: str = ""
    version: str = ""
    repository: str = ""
    alias: str = ""

    @property
    def sort_key(self) -> str:
        return f"{self.repository}/{self.name}"


@dataclass
class ChartValues:
    """One values file: its name, composed tree and comment descriptions."""
    file_name: str
    document: Optional[Node]
    descriptions: Dict[str, ValueDescription] = field(default_factory=dict)


@dataclass
class ChartDocumentationInfo:
    chart_directory: str
    meta: ChartMeta = field(default_factory=ChartMeta)
    requirements: List[ChartRequirement] = field(default_factory=list)
    values: List[ChartValues] = field(default_factory=list)


def load_yaml_mapping(file_path: PathLike) -> Dict[str, Any]:
    """
    Loads a small chart file (Chart.yaml, requirements.yaml) as plain data.
    An empty file loads as an empty mapping.
    """
    text = read_chart_file(file_path)
    try:
        data = YAML(typ="safe").load(text)
    except YAMLError as e:
        raise YamlSyntaxError(f"Unable to parse {file_path}: {e}", path=str(file_path)) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise SchemaError(f"{file_path} must resolve to a map, not {type(data).__name__}", path=str(file_path))
    return data


def parse_chart_file(chart_directory: PathLike) -> ChartMeta:
    return ChartMeta.from_dict(load_yaml_mapping(Path(chart_directory) / CHART_FILE))


def parse_chart_requirements(chart_directory: PathLike, api_version: str) -> List[ChartRequirement]:
    """
    Dependencies sorted by `repository/name`. v1 charts keep them in an
    optional requirements.yaml, later charts in Chart.yaml.
    """
    if api_version == "v1":
        requirements_path = Path(chart_directory) / REQUIREMENTS_FILE
        if not requirements_path.exists():
            return []
    else:
        requirements_path = Path(chart_directory) / CHART_FILE

    data = load_yaml_mapping(requirements_path)
    requirements = [
        ChartRequirement(
            name=_text(d.get("name")),
            version=_text(d.get("version")),
            repository=_text(d.get("repository")),
            alias=_text(d.get("alias")),
        )
        for d in data.get("dependencies") or []
        if isinstance(d, dict)
    ]
    return sorted(requirements, key=lambda r: r.sort_key)


def get_chart_values_files(chart_directory: PathLike, extra_values_files: Optional[List[str]] = None) -> List[Path]:
    """
    values.yaml first, then each extra file that exists in the chart
    directory, in the order given. Extras that do not exist are skipped.
    """
    chart_directory = Path(chart_directory)
    values_files = [chart_directory / VALUES_FILE]

    for name in extra_values_files or []:
        candidate = chart_directory / name
        try:
            os.stat(candidate)
        except FileNotFoundError:
            logger.debug(f"Extra values file {candidate} not present, skipping")
            continue
        except OSError as e:
            logger.warning(f"Something went wrong reading file path {candidate}")
            raise FileReadError(f"Unable to stat {candidate}: {e}", path=str(candidate)) from e
        values_files.append(candidate)

    return values_files


def parse_chart_values(values_path: PathLike, scanner: Optional[CommentScanner] = None) -> ChartValues:
    """
    Composes one values file and scans its comments.

    Raises:
        MissingFileError / FileReadError: the file cannot be read.
        YamlSyntaxError: the file is not valid YAML.
    """
    values_path = Path(values_path)
    scanner = scanner or CommentScanner()

    document = compose_values(read_chart_file(values_path), str(values_path))
    descriptions, error = scanner.scan_file(values_path)
    if error is not None:
        raise error

    return ChartValues(file_name=values_path.name, document=document, descriptions=descriptions)


def parse_chart_information(chart_directory: PathLike,
                            extra_values_files: Optional[List[str]] = None) -> ChartDocumentationInfo:
    """
    Collects metadata, dependencies and every values file of one chart.
    The first failure aborts the chart; nothing partial is returned.
    """
    info = ChartDocumentationInfo(chart_directory=str(chart_directory))
    info.meta = parse_chart_file(chart_directory)
    info.requirements = parse_chart_requirements(chart_directory, info.meta.api_version)

    scanner = CommentScanner()
    for values_path in get_chart_values_files(chart_directory, extra_values_files):
        info.values.append(parse_chart_values(values_path, scanner))

    logger.debug(f"Loaded chart '{info.meta.name}' with {len(info.values)} values file(s)")
    return info
