import asyncio
from typing import Annotated

import typer

from ts_expect_errors.cli.common import configure_logging, console, render_reports
from ts_expect_errors.config import load_settings
from ts_expect_errors.core.annotate import run_remove


def remove(
    target: Annotated[str, typer.Option("--target", "-t", help="Target directory or file path.")] = ".",
    dry_run: Annotated[bool, typer.Option("--dry-run", help="Show the diff without writing files.")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
) -> None:
    """Remove every expect-error marker under a directory."""
    configure_logging(verbose)
    settings = load_settings()

    try:
        reports = asyncio.run(run_remove(target, settings, dry_run=dry_run))
    except FileNotFoundError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1) from None

    changed = [report for report in reports if report.changed or report.error]
    console.print(f"Processed {len(reports)} files")
    if changed:
        render_reports(changed, show_diffs=dry_run)
    if any(report.error for report in reports):
        raise typer.Exit(1)
    console.print("[green]Done![/green]")
