import asyncio
from typing import Annotated

import typer

from ts_expect_errors.cli.common import configure_logging, console, render_reports
from ts_expect_errors.config import load_settings
from ts_expect_errors.core.annotate import run_add
from ts_expect_errors.core.report import CheckerError


def add(
    project: Annotated[str, typer.Option("--project", "-p", help="Project directory path.")] = ".",
    checker: Annotated[
        str | None, typer.Option("--checker", "-c", help="Type checker to run (tsc or vue-tsc).")
    ] = None,
    log_file: Annotated[
        str | None,
        typer.Option("--log-file", "-l", help="Existing checker log to process instead of running the checker."),
    ] = None,
    dry_run: Annotated[bool, typer.Option("--dry-run", help="Show the diff without writing files.")] = False,
    keep_else_attributes: Annotated[
        bool,
        typer.Option(
            "--keep-else-attributes",
            help="Place attribute errors on v-else/v-else-if elements before the element, not the v-if chain.",
        ),
    ] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
) -> None:
    """Insert expect-error markers for every reported type error."""
    configure_logging(verbose)
    settings = load_settings(
        checker=checker,
        forward_attributes=False if keep_else_attributes else None,
    )

    try:
        reports = asyncio.run(run_add(project, settings, log_file=log_file, dry_run=dry_run))
    except (CheckerError, FileNotFoundError) as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1) from None

    if not reports:
        console.print("[green]No type errors found.[/green]")
        return
    render_reports(reports, show_diffs=dry_run)
    if any(report.error for report in reports):
        raise typer.Exit(1)
    console.print("[green]Done![/green]")
