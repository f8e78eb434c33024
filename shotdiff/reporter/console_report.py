"""Console summary rendered with rich."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from shotdiff.models.results import RunSummary


def build_summary_table(summary: RunSummary) -> Table:
    table = Table(title="Screenshot Comparison Summary")
    table.add_column("Metric", style="bold")
    table.add_column("Value")
    table.add_row("Duration", f"{summary.duration_seconds}s")
    table.add_row("Total URLs", str(summary.total_urls))
    table.add_row(
        "Screenshots",
        f"{summary.successful_screenshots}/{summary.screenshots_attempted} successful "
        f"({summary.screenshot_success_rate:.2f}%)",
    )
    table.add_row("Failed Screenshots", f"[red]{summary.failed_screenshots}[/red]")
    table.add_row(
        "Comparisons",
        f"{summary.successful_comparisons}/{summary.comparisons_attempted} successful",
    )
    table.add_row("Failed Comparisons", f"[red]{summary.failed_comparisons}[/red]")
    table.add_row("Unmatched Rows", f"[yellow]{summary.unmatched_rows}[/yellow]")
    table.add_row("Total Pixel Differences", str(summary.total_differences))
    table.add_row("Average Differences", f"{summary.average_differences:.2f}")
    table.add_row("Errors", f"[red]{len(summary.errors)}[/red]" if summary.errors else "0")
    return table


def print_console_summary(summary: RunSummary, console: Console) -> None:
    console.print(build_summary_table(summary))
