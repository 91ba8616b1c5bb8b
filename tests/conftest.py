# tests/conftest.py
from __future__ import annotations

import pytest

from bignumber import runtime


@pytest.fixture(autouse=True)
def isolated_workspace(tmp_path, monkeypatch):
    """Every test gets its own workspace and a fresh runtime with built-in defaults."""
    home = tmp_path / "BigNumber"
    monkeypatch.setenv("BIGNUMBER_HOME", str(home))
    runtime.reset()
    yield home
    runtime.reset()
