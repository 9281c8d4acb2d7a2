import logging
from collections.abc import Sequence

from rich.console import Console
from rich.table import Table

from ts_expect_errors.models import FileReport

console = Console()


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def render_reports(reports: Sequence[FileReport], show_diffs: bool = False) -> None:
    table = Table(show_lines=False)
    for header in ("file", "inserted", "removed", "skipped", "status"):
        table.add_column(header)
    for report in reports:
        if report.error:
            status = f"[red]error: {report.error}[/red]"
        elif report.changed:
            status = "[green]changed[/green]"
        else:
            status = "unchanged"
        table.add_row(report.path, str(report.inserted), str(report.removed), str(report.skipped), status)
    console.print(table)
    console.print(f"({len(reports)} files)")

    if show_diffs:
        for report in reports:
            if report.diff:
                console.print(report.diff, markup=False, highlight=False)
