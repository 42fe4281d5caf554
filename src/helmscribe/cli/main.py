#!/usr/bin/env python3
"""
HELMSCRIBE CLI
--------------
Command-line entry point. Reads the run settings once, configures
logging, and drives the DocumentationEngine over every chart found.

Author: HelmScribe Team
Date: 2026-10-19
"""

import sys
import logging
import argparse
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.progress import (
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
    BarColumn,
    TaskProgressColumn
)

from helmscribe.cli.formatter import ScribeFormatter
from helmscribe.core.engine import HELMSCRIBE_VERSION, DocumentationEngine
from helmscribe.extraction.sorter import ALPHANUM_SORT_ORDER, SORT_ORDERS

# Global console for consistent styling across the application
console = Console()

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def setup_logging(level: str):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


class HelmScribeCLI:
    """
    CLI wrapper that translates flags into Engine settings.
    Provides progress feedback, dry-run previews and the final report.
    """

    def __init__(self):
        self.parser = argparse.ArgumentParser(
            prog="helmscribe",
            description="HelmScribe - Generate README documentation for Helm charts from values.yaml comments",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        self.formatter = ScribeFormatter(console)
        self._setup_args()

    def _setup_args(self):
        self.parser.add_argument("-v", "--version", action="version", version=f"helmscribe v{HELMSCRIBE_VERSION}")
        self.parser.add_argument("-c", "--chart-search-root", default=".",
                                 help="Directory to search recursively for charts (default: .)")
        self.parser.add_argument("-f", "--values-file", action="append", default=[], dest="values_files",
                                 help="Extra values file to document after values.yaml (repeatable)")
        # No `choices`: unknown orders fall back to alphanum with a warning
        self.parser.add_argument("-s", "--sort-values-order", default=ALPHANUM_SORT_ORDER,
                                 help=f"Order of the values table, one of {', '.join(SORT_ORDERS)} "
                                      f"(default: {ALPHANUM_SORT_ORDER})")
        self.parser.add_argument("-o", "--output-file", default="README.md",
                                 help="README file name written in each chart directory (default: README.md)")
        self.parser.add_argument("--dry-run", action="store_true",
                                 help="Print the generated README instead of writing it")
        self.parser.add_argument("-l", "--log-level", default="INFO", type=str.upper, choices=LOG_LEVELS,
                                 help="Log level (default: INFO)")

    def print_header(self, subtitle: str):
        console.print(Panel.fit(
            f"[bold cyan]HelmScribe v{HELMSCRIBE_VERSION}[/bold cyan]\n"
            "══════════════════════════════════════════════════",
            title=f"[bold white]{subtitle}[/bold white]",
            border_style="cyan"
        ))

    def run(self, argv: Optional[List[str]] = None) -> int:
        args = self.parser.parse_args(argv)
        setup_logging(args.log_level)

        search_root = Path(args.chart_search_root)
        if not search_root.is_dir():
            console.print(f"[bold red]Error:[/bold red] Chart search root '{args.chart_search_root}' not found.")
            return 1

        self.print_header("Dry Run" if args.dry_run else "Chart Documentation")
        engine = DocumentationEngine(
            str(search_root),
            sort_order=args.sort_values_order,
            values_files=args.values_files,
            output_file=args.output_file,
        )

        charts = engine.find_chart_directories()
        if not charts:
            console.print("\n[bold yellow]⚠️  No charts found.[/bold yellow]")
            return 0

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(bar_width=40),
            TaskProgressColumn(),
            TimeElapsedColumn(),
            console=console
        ) as progress:
            task_id = progress.add_task("Documenting charts...", total=len(charts))

            def advance(processed: int, total: int):
                progress.update(task_id, completed=processed, description=f"Documented {processed}/{total} charts")

            reports = engine.document_all(dry_run=args.dry_run, progress_callback=advance)

        if args.dry_run:
            for report in reports:
                if report.get("content"):
                    self.formatter.display_preview(report["chart_path"], report["content"])

        self.formatter.print_final_table(reports)
        summary = engine.generate_summary(reports)
        self.formatter.print_summary(summary)

        return 1 if summary["failed"] else 0


def main():
    """Application entry point with interrupt handling."""
    try:
        sys.exit(HelmScribeCLI().run())
    except KeyboardInterrupt:
        console.print("\n[bold red]Terminated by user.[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
