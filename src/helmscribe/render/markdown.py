#!/usr/bin/env python3
"""
HELMSCRIBE MARKDOWN RENDERER
----------------------------
Turns assembled chart data into a README. The layout is fixed: header,
metadata, maintainers, requirements and the values table.

Author: HelmScribe Team
Date: 2026-10-19
"""

import io
from typing import List

from helmscribe.chart.assembler import ChartTemplateData
from helmscribe.chart.info import ChartMeta, ChartRequirement
from helmscribe.core.models import ValueRow


def escape_cell(text: str) -> str:
    """Keeps a value on one table row: pipes escaped, newlines as <br>."""
    return text.replace("|", "\\|").replace("\r\n", "\n").replace("\n", "<br>")


class MarkdownRenderer:
    """Renders ChartTemplateData as Markdown text."""

    def render(self, data: ChartTemplateData) -> str:
        stream = io.StringIO()
        meta = data.info.meta

        self._write_header(stream, meta)
        self._write_maintainers(stream, meta)
        self._write_requirements(stream, data.info.requirements)
        self._write_values(stream, data.values)

        stream.write("----------------------------------------------\n")
        stream.write(f"Autogenerated from chart metadata using helmscribe v{data.tool_version}\n")
        return stream.getvalue()

    def _write_header(self, stream: io.StringIO, meta: ChartMeta):
        stream.write(f"# {meta.name}\n\n")
        if meta.deprecated:
            stream.write("> **This chart is deprecated.**\n\n")

        badges = [f"Version: {meta.version}"]
        if meta.type:
            badges.append(f"Type: {meta.type}")
        if meta.app_version:
            badges.append(f"AppVersion: {meta.app_version}")
        stream.write(" | ".join(badges) + "\n\n")

        if meta.description:
            stream.write(f"{meta.description}\n\n")
        if meta.home:
            stream.write(f"**Homepage:** <{meta.home}>\n\n")
        if meta.sources:
            stream.write("## Source Code\n\n")
            for source in meta.sources:
                stream.write(f"* <{source}>\n")
            stream.write("\n")

    def _write_maintainers(self, stream: io.StringIO, meta: ChartMeta):
        if not meta.maintainers:
            return
        stream.write("## Maintainers\n\n")
        stream.write("| Name | Email | Url |\n")
        stream.write("| ---- | ------ | --- |\n")
        for m in meta.maintainers:
            stream.write(f"| {escape_cell(m.name)} | {escape_cell(m.email)} | {escape_cell(m.url)} |\n")
        stream.write("\n")

    def _write_requirements(self, stream: io.StringIO, requirements: List[ChartRequirement]):
        if not requirements:
            return
        stream.write("## Requirements\n\n")
        stream.write("| Repository | Name | Version |\n")
        stream.write("|------------|------|---------|\n")
        for r in requirements:
            name = f"{r.name} ({r.alias})" if r.alias else r.name
            stream.write(f"| {escape_cell(r.repository)} | {escape_cell(name)} | {escape_cell(r.version)} |\n")
        stream.write("\n")

    def _write_values(self, stream: io.StringIO, rows: List[ValueRow]):
        if not rows:
            return
        stream.write("## Values\n\n")
        stream.write("| Key | Type | Default | Description |\n")
        stream.write("|-----|------|---------|-------------|\n")
        for row in rows:
            stream.write(self.render_row(row) + "\n")
        stream.write("\n")

    def render_row(self, row: ValueRow) -> str:
        if row.is_separator:
            return f"| **{escape_cell(row.description)}** | | | |"

        default = row.default or (f"`{row.auto_default}`" if row.auto_default else "")
        description = row.description or row.auto_description
        return f"| {escape_cell(row.key)} | {row.type} | {escape_cell(default)} | {escape_cell(description)} |"
