"""Root pytest configuration for all tests."""

from __future__ import annotations

import os
import time
from pathlib import Path

import pytest

from pollwatch.config import reset_config
from pollwatch.registry import WatchRegistry, reset_registry
from tests.utils import FAST_INTERVAL, FakeFileSystem

pytest_plugins = ("pytest_asyncio",)


@pytest.fixture(autouse=True)
def isolate_global_state(monkeypatch: pytest.MonkeyPatch):
    """Keep cached config and the process-wide registry per-test."""
    monkeypatch.delenv("PW_LOG", raising=False)
    monkeypatch.delenv("PW_POLL_INTERVAL", raising=False)
    reset_config()
    reset_registry()
    yield
    reset_registry()
    reset_config()


@pytest.fixture
def registry():
    """A fast-polling registry on the real filesystem."""
    reg = WatchRegistry(poll_interval=FAST_INTERVAL)
    yield reg
    reg.unwatch_all()


@pytest.fixture
def fake_fs() -> FakeFileSystem:
    return FakeFileSystem()


@pytest.fixture
def shader_dir(tmp_path: Path) -> Path:
    """Directory with one shader and one unrelated file, both stamped in the past."""
    directory = tmp_path / "shaders"
    directory.mkdir()
    past = time.time() - 100
    for name in ("shader.vert", "notes.txt"):
        path = directory / name
        path.write_text(name)
        os.utime(path, (past, past))
    return directory
