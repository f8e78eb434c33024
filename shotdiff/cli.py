"""CLI entry point for the screenshot comparison pipeline."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from shotdiff.errors import SetupError
from shotdiff.models.config import PipelineConfig
from shotdiff.naming import PHASES
from shotdiff.orchestrator import Pipeline
from shotdiff.reporter.console_report import print_console_summary

console = Console()

DEFAULT_CONFIG = "shotdiff-config.json"
SAMPLE_SOURCE = "url,name\nhttps://example.com,Example\nhttps://google.com,Google\n"


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def _load_config(path: str) -> PipelineConfig:
    try:
        return PipelineConfig.load(path)
    except FileNotFoundError:
        console.print(f"[red]Config file not found: {path}[/red]")
        console.print("Run 'shotdiff init' to create a default config.")
        sys.exit(1)
    except (ValueError, ValidationError) as e:
        console.print(f"[red]Invalid config {path}:[/red] {escape(str(e))}")
        sys.exit(1)


def _print_results(results: dict) -> None:
    summary = results["summary"]
    console.print("\n[bold green]Run Complete[/bold green]")
    print_console_summary(summary, console)
    for fmt, path in results["reports"].items():
        console.print(f"  {fmt.upper()} report: [blue]{path}[/blue]")


def _exit_code(results: dict, fail_on_diff: bool) -> int:
    return 1 if fail_on_diff and results["summary"].has_failures else 0


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Batch screenshot capture and visual comparison"""
    setup_logging(verbose)


@cli.command()
@click.option("--config", "-c", default=DEFAULT_CONFIG, help="Config file path")
@click.option("--fail-on-diff", is_flag=True, help="Exit 1 on any failure or pixel difference")
def run(config: str, fail_on_diff: bool) -> None:
    """Run the full pipeline: capture baseline → capture checkpoint → compare → report."""
    cfg = _load_config(config)
    try:
        results = Pipeline(cfg).run_full_pipeline()
    except SetupError as e:
        console.print(f"[red]Setup failed:[/red] {escape(str(e))}")
        sys.exit(1)
    _print_results(results)
    sys.exit(_exit_code(results, fail_on_diff))


@cli.command()
@click.option("--phase", "-p", type=click.Choice(PHASES), required=True, help="Which source to capture")
@click.option("--config", "-c", default=DEFAULT_CONFIG, help="Config file path")
def capture(phase: str, config: str) -> None:
    """Capture screenshots for one phase only."""
    cfg = _load_config(config)
    try:
        summary = Pipeline(cfg).run_capture_only(phase)
    except SetupError as e:
        console.print(f"[red]Setup failed:[/red] {escape(str(e))}")
        sys.exit(1)
    console.print(
        f"[green]Capture complete:[/green] {summary.successful_screenshots} succeeded, "
        f"{summary.failed_screenshots} failed"
    )
    console.print(f"  Log: [blue]{cfg.capture_log(phase)}[/blue]")


@cli.command()
@click.option("--config", "-c", default=DEFAULT_CONFIG, help="Config file path")
@click.option("--fail-on-diff", is_flag=True, help="Exit 1 on any failure or pixel difference")
def compare(config: str, fail_on_diff: bool) -> None:
    """Compare previously captured screenshots and write the report."""
    cfg = _load_config(config)
    try:
        results = Pipeline(cfg).run_compare_only()
    except SetupError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        sys.exit(1)
    _print_results(results)
    sys.exit(_exit_code(results, fail_on_diff))


@cli.command()
@click.option("--config", "-c", default=DEFAULT_CONFIG, help="Config file path")
def init(config: str) -> None:
    """Create a default configuration file and sample sources."""
    config_path = Path(config)
    if config_path.exists():
        if not click.confirm(f"{config_path} already exists. Overwrite?"):
            return

    cfg = PipelineConfig()
    cfg.save(config_path)
    console.print(f"[green]Created {config_path}[/green]")

    for source in (Path(cfg.source_csv), Path(cfg.target_csv)):
        if source.exists():
            continue
        source.parent.mkdir(parents=True, exist_ok=True)
        source.write_text(SAMPLE_SOURCE, encoding="utf-8")
        console.print(f"[yellow]Created sample CSV file: {source}[/yellow]")

    console.print("\nEdit the sources, then run:")
    console.print("  [blue]shotdiff run[/blue]")


if __name__ == "__main__":
    cli()
