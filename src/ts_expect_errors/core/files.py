import os
import subprocess
from pathlib import Path

from ts_expect_errors.core.languages import SCANNED_EXTENSIONS

_SKIPPED_DIRECTORIES = {"node_modules"}


def get_git_repo_root(start_dir: Path) -> Path | None:
    try:
        result = subprocess.run(
            ["git", "-C", str(start_dir), "rev-parse", "--show-toplevel"],
            check=False,
            capture_output=True,
            text=True,
        )
    except FileNotFoundError:
        return None
    if result.returncode != 0:
        return None
    root = result.stdout.strip()
    if not root:
        return None
    return Path(root)


def _git_files(directory: Path) -> list[Path] | None:
    """Tracked and untracked-but-not-ignored files under ``directory``, or None outside git."""
    if get_git_repo_root(directory) is None:
        return None
    result = subprocess.run(
        ["git", "-C", str(directory), "ls-files", "-z", "--cached", "--others", "--exclude-standard"],
        check=False,
        capture_output=True,
        text=True,
    )
    if result.returncode != 0:
        return None
    return [directory / name for name in result.stdout.split("\0") if name]


def _walk_files(directory: Path) -> list[Path]:
    found: list[Path] = []
    for current, dirnames, filenames in os.walk(directory):
        dirnames[:] = sorted(d for d in dirnames if d not in _SKIPPED_DIRECTORIES and not d.startswith("."))
        found.extend(Path(current) / name for name in sorted(filenames))
    return found


def discover_source_files(target: Path) -> list[Path]:
    """List the ``.ts``, ``.tsx`` and ``.vue`` files under ``target``.

    Inside a git work tree ``.gitignore`` rules apply; elsewhere
    ``node_modules`` and hidden directories are skipped.
    """
    if target.is_file():
        return [target.resolve()]
    if not target.is_dir():
        raise FileNotFoundError(f"Target not found: {target}")

    candidates = _git_files(target)
    if candidates is None:
        candidates = _walk_files(target)
    return sorted(
        path.resolve()
        for path in candidates
        if path.suffix.lower() in SCANNED_EXTENSIONS and path.is_file()
    )
