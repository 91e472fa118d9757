"""Pytest configuration and shared fixtures.

Ensures the repository root is importable (so tests can import packages like
`cli`, `core`, `tools` without an editable install), resets structlog between
tests, and provides a helper for building temporary file trees.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest
import structlog

# Make repo root importable for tests (avoid requiring `pip install -e .`).
_REPO_ROOT = Path(__file__).resolve().parent.parent
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))


@pytest.fixture(autouse=True)
def _reset_structlog():
    """The CLI points structlog at the runner's stderr; undo that per test."""
    yield
    structlog.reset_defaults()


@pytest.fixture(autouse=True)
def _no_user_config(monkeypatch, tmp_path: Path) -> None:
    """Keep a real ``~/.diskfit/config.yaml`` or env var out of the tests."""
    monkeypatch.delenv("DISKFIT_CONFIG", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))


@pytest.fixture
def make_tree(tmp_path: Path):
    """Factory to create a file tree under ``tmp_path``.

    Values are file sizes in bytes; a key ending in ``/`` makes a directory.

    Example:
        make_tree({"a/b.bin": 10, "empty/": None})
    """

    def _make(layout: dict[str, int | None], *, root: Path | None = None) -> Path:
        base = root or tmp_path
        for rel, size in layout.items():
            p = base / rel
            if rel.endswith("/"):
                p.mkdir(parents=True, exist_ok=True)
                continue
            p.parent.mkdir(parents=True, exist_ok=True)
            p.write_bytes(b"x" * (size or 0))
        return base

    return _make

