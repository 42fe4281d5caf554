# src/helmscribe/cli/formatter.py
from typing import Any, Dict, List

from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

# Initialize the Rich console for high-quality terminal output
console = Console()


class ScribeFormatter:
    """
    ScribeFormatter: The visual side of the CLI.
    Responsible for README previews and the execution report.
    """

    def __init__(self, out: Console = console):
        self.console = out

    def display_preview(self, chart_path: str, content: str):
        """Shows the README that would be written for a chart."""
        if not content:
            return

        syntax = Syntax(content, "markdown", theme="monokai", line_numbers=True, word_wrap=True)
        self.console.print(Panel(
            syntax,
            title=f"README preview: {chart_path}",
            subtitle="dry run, nothing written",
            border_style="cyan"
        ))

    def print_final_table(self, reports: List[Dict[str, Any]]):
        """Builds the per-chart table shown at the end of a run."""
        table = Table(title="HelmScribe Execution Report", show_lines=True, header_style="bold magenta")
        table.add_column("Chart Path", style="cyan")
        table.add_column("Name", style="white")
        table.add_column("Status", style="bold")
        table.add_column("Rows", justify="right")
        table.add_column("Result", justify="center")

        for r in reports:
            success = r.get("success", False)
            skipped = r.get("status") == "SKIPPED"
            status_color = "green" if success else "yellow" if skipped else "red"
            result_icon = "✅" if success else "⚠️" if skipped else "❌"

            table.add_row(
                str(r.get("chart_path")),
                str(r.get("chart_name") or "-"),
                f"[{status_color}]{r.get('status', 'FAILED')}[/{status_color}]",
                str(r.get("rows", 0)),
                result_icon
            )

        self.console.print(table)

        for r in reports:
            if r.get("error"):
                self.console.print(f"[bold red]{r['chart_path']}:[/bold red] {r['error']}")

    def print_summary(self, summary: Dict[str, Any]):
        self.console.print(Panel(
            f"[bold white]Summary Report[/bold white]\n"
            f"════════════════════════════════════════\n"
            f"Total Charts:    {summary['total_charts']}\n"
            f"Documented:      [green]{summary['documented']}[/green]\n"
            f"Skipped:         [yellow]{summary['skipped']}[/yellow]\n"
            f"Failed:          [red]{summary['failed']}[/red]\n"
            f"READMEs Written: {summary['written_to_disk']}\n"
            f"Values Rows:     {summary['rows']}",
            border_style="dim"
        ))
