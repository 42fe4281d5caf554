#!/usr/bin/env python3
"""
HELMSCRIBE ASSEMBLER
--------------------
Merges the per-file row blocks of a chart into the single values table
handed to the renderer. Every block is preceded by a separator row
naming its values file.

Author: HelmScribe Team
Date: 2026-10-19
"""

import os
import logging
from dataclasses import dataclass, field
from typing import List

from helmscribe.core.errors import SchemaError
from helmscribe.core.models import ValueRow, separator_row
from helmscribe.chart.info import ChartDocumentationInfo
from helmscribe.extraction.pipeline import ValuesPipeline
from helmscribe.extraction.sorter import ALPHANUM_SORT_ORDER

logger = logging.getLogger("helmscribe.assembler")


@dataclass
class ChartTemplateData:
    info: ChartDocumentationInfo
    tool_version: str
    values: List[ValueRow] = field(default_factory=list)


def build_template_data(info: ChartDocumentationInfo, tool_version: str,
                        sort_order: str = ALPHANUM_SORT_ORDER) -> ChartTemplateData:
    """
    Runs the extraction pipeline on each values file in order.

    Raises:
        SchemaError: a values file does not resolve to a mapping. The whole
            chart is abandoned; no partial table is produced.
    """
    pipeline = ValuesPipeline(sort_order)
    rows: List[ValueRow] = []

    for chart_values in info.values:
        # Empty values files have no document and contribute nothing
        if chart_values.document is None:
            logger.debug(f"Skipping empty values file {chart_values.file_name}")
            continue

        values_path = os.path.join(info.chart_directory, chart_values.file_name)
        try:
            block = pipeline.extract(chart_values.document, chart_values.descriptions)
        except SchemaError as e:
            raise SchemaError(f"{values_path}: {e}", path=values_path) from e

        rows.append(separator_row(chart_values.file_name))
        rows.extend(block)

    return ChartTemplateData(info=info, tool_version=tool_version, values=rows)
