import asyncio
import difflib
import logging
import os
import shutil
import tempfile
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

from ts_expect_errors.config import Settings
from ts_expect_errors.core.files import discover_source_files
from ts_expect_errors.core.languages import detect_document_kind, is_supported_file
from ts_expect_errors.core.processors import process_source
from ts_expect_errors.core.removal import strip_markers
from ts_expect_errors.core.report import group_by_file, parse_checker_output, read_log_file, run_checker
from ts_expect_errors.models import Diagnostic, FileReport

logger = logging.getLogger(__name__)


def read_source(path: Path) -> str:
    with path.open(encoding="utf-8", newline="") as handle:
        return handle.read()


def write_atomically(path: Path, text: str) -> None:
    """Replace ``path`` with ``text`` in one step; the original survives any failure."""
    with tempfile.NamedTemporaryFile(
        "w",
        encoding="utf-8",
        newline="",
        dir=path.parent,
        prefix=f".{path.name}.",
        suffix=".tmp",
        delete=False,
    ) as handle:
        handle.write(text)
        temp_path = Path(handle.name)
    try:
        shutil.copymode(path, temp_path)
        os.replace(temp_path, path)
    except OSError:
        temp_path.unlink(missing_ok=True)
        raise


def unified_diff(path: Path, before: str, after: str) -> str:
    return "".join(
        difflib.unified_diff(
            before.splitlines(keepends=True),
            after.splitlines(keepends=True),
            fromfile=f"a/{path.name}",
            tofile=f"b/{path.name}",
        )
    )


def _finish(path: Path, source: str, text: str, report: FileReport, dry_run: bool) -> FileReport:
    if not report.changed:
        return report
    if dry_run:
        report.diff = unified_diff(path, source, text)
    else:
        write_atomically(path, text)
    return report


def annotate_file(path: Path, diagnostics: Sequence[Diagnostic], settings: Settings, dry_run: bool = False) -> FileReport:
    """Read ``path`` once, apply every edit for its diagnostics, write it back once."""
    kind = detect_document_kind(path)
    source = read_source(path)
    text, report = process_source(source, kind, diagnostics, settings, path=str(path))
    logger.info("%s: %d inserted, %d removed, %d skipped", path, report.inserted, report.removed, report.skipped)
    return _finish(path, source, text, report, dry_run)


def strip_file(path: Path, settings: Settings, dry_run: bool = False) -> FileReport:
    kind = detect_document_kind(path)
    source = read_source(path)
    text, removed = strip_markers(source, kind, settings)
    report = FileReport(path=str(path), removed=removed, changed=text != source)
    if removed:
        logger.info("%s: removed %d marker(s)", path, removed)
    return _finish(path, source, text, report, dry_run)


async def _guarded(func: Callable[..., FileReport], path: Path, *args: Any) -> FileReport:
    """Run one file's processing off the event loop; failures stay scoped to that file."""
    try:
        return await asyncio.to_thread(func, path, *args)
    except (OSError, ValueError) as exc:
        logger.error("Failed to process %s: %s", path, exc)
        return FileReport(path=str(path), error=str(exc))


async def run_add(
    project: str,
    settings: Settings,
    log_file: str | None = None,
    dry_run: bool = False,
) -> list[FileReport]:
    """Annotate every file the checker reports for ``project``.

    Reads diagnostics from ``log_file`` when given, otherwise runs the
    configured checker. Files are processed concurrently, one task each.
    """
    project_path = Path(project).resolve()
    if not project_path.is_dir():
        raise FileNotFoundError(f"Project directory not found: {project}")

    if log_file is not None:
        output = read_log_file(log_file)
    else:
        output = await asyncio.to_thread(run_checker, project_path, settings.checker)

    diagnostics = parse_checker_output(output)
    logger.info("Found %d diagnostic(s)", len(diagnostics))

    tasks = []
    reports: list[FileReport] = []
    for path, file_diagnostics in sorted(group_by_file(diagnostics, project_path).items()):
        if not is_supported_file(path):
            logger.warning("Skipping %d diagnostic(s) in unsupported file %s", len(file_diagnostics), path)
            reports.append(FileReport(path=str(path), skipped=len(file_diagnostics)))
            continue
        tasks.append(_guarded(annotate_file, path, file_diagnostics, settings, dry_run))

    reports.extend(await asyncio.gather(*tasks))
    return sorted(reports, key=lambda report: report.path)


async def run_remove(target: str, settings: Settings, dry_run: bool = False) -> list[FileReport]:
    """Strip every marker from the supported files under ``target``."""
    paths = [path for path in discover_source_files(Path(target)) if is_supported_file(path)]
    logger.info("Found %d file(s) to process", len(paths))
    reports = await asyncio.gather(*(_guarded(strip_file, path, settings, dry_run) for path in paths))
    return list(reports)
