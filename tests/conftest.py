from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

# Ensure the repo root (containing `auto_nbsp/`) is importable when pytest
# picks `tests/` as the rootdir (e.g., single-file runs).
REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))

from auto_nbsp.formatting.engine import engine_for  # noqa: E402


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch):
    """Hide host AUTO_NBSP_* settings and start every test with a cold engine cache."""

    for key in list(os.environ):
        if key.startswith("AUTO_NBSP_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("AUTO_NBSP_DISABLE_FILE_LOG", "1")
    engine_for.cache_clear()
    yield
    engine_for.cache_clear()
