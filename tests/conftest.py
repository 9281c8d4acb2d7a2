"""Shared fixtures and helpers for tests."""

from pathlib import Path

import pytest

from ts_expect_errors.config import Settings

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's TS_EXPECT_ERRORS_* variables out of the tests."""
    for name in ("CHECKER", "UNUSED_DIRECTIVE_CODE", "TS_DIRECTIVE", "VUE_DIRECTIVE", "FORWARD_ATTRIBUTES"):
        monkeypatch.delenv(f"TS_EXPECT_ERRORS_{name}", raising=False)
