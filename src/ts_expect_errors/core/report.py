import logging
import re
import shutil
import subprocess
from collections import defaultdict
from collections.abc import Iterable
from pathlib import Path

from ts_expect_errors.models import Diagnostic

logger = logging.getLogger(__name__)

_DIAGNOSTIC_LINE = re.compile(
    r"^(?P<file>.+?)\((?P<line>\d+),(?P<column>\d+)\): error (?P<code>TS\d+): (?P<message>.+)$"
)


class CheckerError(RuntimeError):
    """Raised when the type checker cannot be launched."""


def parse_checker_output(output: str) -> list[Diagnostic]:
    """Parse ``path(line,col): error TSxxxx: message`` lines; anything else is dropped."""
    diagnostics: list[Diagnostic] = []
    for raw_line in output.splitlines():
        match = _DIAGNOSTIC_LINE.match(raw_line.rstrip("\r"))
        if match is None:
            continue
        diagnostics.append(
            Diagnostic(
                file=match["file"],
                line=int(match["line"]),
                column=int(match["column"]),
                code=match["code"],
                message=match["message"],
            )
        )
    return diagnostics


def read_log_file(path: str) -> str:
    log_path = Path(path)
    try:
        return log_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise FileNotFoundError(f"Log file not found: {path}") from None


def run_checker(project: Path, checker: str) -> str:
    """Run ``npx <checker> --noEmit`` in ``project`` and return its stdout.

    A non-zero exit status is expected when there are type errors and is not
    treated as a failure.
    """
    npx = shutil.which("npx")
    if npx is None:
        raise CheckerError("npx is not installed or not in PATH.")
    logger.info("Running %s in %s", checker, project)
    result = subprocess.run(
        [npx, checker, "--noEmit"],
        cwd=str(project),
        check=False,
        capture_output=True,
        text=True,
    )
    if result.returncode == 0:
        logger.info("%s reported no errors", checker)
    return result.stdout


def group_by_file(diagnostics: Iterable[Diagnostic], project: Path) -> dict[Path, list[Diagnostic]]:
    """Group diagnostics by absolute file path, resolving relative paths against ``project``."""
    by_file: dict[Path, list[Diagnostic]] = defaultdict(list)
    for diagnostic in diagnostics:
        file_path = Path(diagnostic.file)
        if not file_path.is_absolute():
            file_path = project / file_path
        by_file[file_path.resolve()].append(diagnostic)
    return dict(by_file)
