#!/usr/bin/env python3
"""
HELMSCRIBE ENGINE - Chart Documentation Orchestrator
----------------------------------------------------
Discovers charts under a search root and takes each one through
load -> extract -> render -> write. Charts are processed one at a time
and a failure in one chart never stops the others.

Author: HelmScribe Team
Date: 2026-10-19
"""

import os
import time
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from helmscribe.chart.assembler import build_template_data
from helmscribe.chart.info import CHART_FILE, parse_chart_information
from helmscribe.core.errors import ChartFileError, SchemaError, YamlSyntaxError
from helmscribe.core.files import atomic_write
from helmscribe.extraction.sorter import ALPHANUM_SORT_ORDER, resolve_sort_order
from helmscribe.render.markdown import MarkdownRenderer

HELMSCRIBE_VERSION = "1.0.0"

logger = logging.getLogger("helmscribe.engine")

# Statuses that mean the chart could not be documented because of its content
FAILURE_STATUSES = ("SCHEMA_ERROR", "SYNTAX_ERROR", "WRITE_ERROR")


class DocumentationEngine:
    """
    Principal orchestrator. Holds the run-wide settings (already resolved by
    the CLI) and hands them explicitly to each stage.
    """

    def __init__(self, search_root: str, sort_order: str = ALPHANUM_SORT_ORDER,
                 values_files: Optional[List[str]] = None, output_file: str = "README.md"):
        self.search_root = Path(search_root).resolve()
        self.sort_order = resolve_sort_order(sort_order)
        self.values_files = list(values_files or [])
        self.output_file = output_file
        self.renderer = MarkdownRenderer()

    def find_chart_directories(self) -> List[Path]:
        """Every directory holding a Chart.yaml. Hidden and symlinked directories are not entered."""
        charts = []
        for dirpath, dirnames, filenames in os.walk(self.search_root, followlinks=False):
            dirnames[:] = sorted(d for d in dirnames if not d.startswith("."))
            chart_file = Path(dirpath) / CHART_FILE
            if CHART_FILE in filenames and chart_file.is_file() and not chart_file.is_symlink():
                charts.append(Path(dirpath))
        return sorted(charts)

    def document_chart(self, chart_directory: Path, dry_run: bool = False) -> Dict[str, Any]:
        """Generates (and unless dry_run, writes) the README for one chart."""
        chart_directory = Path(chart_directory).resolve()
        rel_path = self._relative(chart_directory)

        try:
            info = parse_chart_information(chart_directory, self.values_files)
            data = build_template_data(info, HELMSCRIBE_VERSION, self.sort_order)
        except ChartFileError as e:
            return self._chart_error(rel_path, "SKIPPED", str(e))
        except YamlSyntaxError as e:
            logger.error(f"Invalid YAML in chart {rel_path}: {e}")
            return self._chart_error(rel_path, "SYNTAX_ERROR", str(e))
        except SchemaError as e:
            logger.error(f"Aborting documentation for chart {rel_path}: {e}")
            return self._chart_error(rel_path, "SCHEMA_ERROR", str(e))

        content = self.renderer.render(data)
        readme_path = chart_directory / self.output_file
        previous = self._read_previous(readme_path)
        is_modified = previous != content

        result = {
            "chart_path": rel_path,
            "chart_name": info.meta.name,
            "success": True,
            "status": self._derive_status(is_modified, dry_run),
            "rows": sum(1 for row in data.values if not row.is_separator),
            "values_files": [v.file_name for v in info.values],
            "content": content,
            "written": False,
            "error": None,
            "timestamp": time.time(),
        }

        if not dry_run and is_modified:
            try:
                atomic_write(readme_path, content)
                result["written"] = True
                logger.info(f"Wrote {readme_path}")
            except (IOError, PermissionError) as e:
                logger.error(f"Failed to write {readme_path}: {e}")
                result.update(success=False, status="WRITE_ERROR", error=str(e))

        return result

    def document_all(self, dry_run: bool = False,
                     progress_callback: Optional[Callable[[int, int], None]] = None) -> List[Dict[str, Any]]:
        """Documents every chart under the search root, sequentially."""
        charts = self.find_chart_directories()
        if not charts:
            logger.warning(f"No charts found under {self.search_root}")

        reports = []
        for processed, chart_directory in enumerate(charts, 1):
            reports.append(self.document_chart(chart_directory, dry_run=dry_run))
            if progress_callback:
                progress_callback(processed, len(charts))
        return reports

    def generate_summary(self, reports: List[Dict[str, Any]]) -> Dict[str, Any]:
        total = len(reports)
        documented = sum(1 for r in reports if r.get("success", False))
        return {
            "total_charts": total,
            "documented": documented,
            "success_rate": (documented / total) if total > 0 else 0,
            "written_to_disk": sum(1 for r in reports if r.get("written", False)),
            "skipped": sum(1 for r in reports if r.get("status") == "SKIPPED"),
            "failed": sum(1 for r in reports if r.get("status") in FAILURE_STATUSES),
            "rows": sum(r.get("rows", 0) for r in reports),
        }

    def _read_previous(self, readme_path: Path) -> Optional[str]:
        """Existing README text, or None when absent or unreadable (it is then regenerated)."""
        if not readme_path.is_file():
            return None
        try:
            return readme_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Unable to read existing {readme_path}, regenerating it: {e}")
            return None

    def _derive_status(self, modified: bool, dry: bool) -> str:
        if not modified:
            return "UNCHANGED"
        return "PREVIEW" if dry else "DOCUMENTED"

    def _relative(self, chart_directory: Path) -> str:
        try:
            return str(chart_directory.relative_to(self.search_root)) or "."
        except ValueError:
            return str(chart_directory)

    def _chart_error(self, path: str, status: str, error: str) -> Dict[str, Any]:
        return {
            "chart_path": path, "chart_name": None, "status": status, "error": error,
            "success": False, "rows": 0, "written": False, "content": None,
        }
