"""Tests for ModificationTracker change detection."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from pollwatch.tracker import ModificationTracker
from tests.utils import FakeFileSystem


class TestHasChanged:
    """Baseline and strictly-newer semantics."""

    def test_first_observation_is_a_change(self, fake_fs: FakeFileSystem) -> None:
        path = fake_fs.add_file("/d/a.txt", mtime=10.0)
        tracker = ModificationTracker(fake_fs)

        assert tracker.has_changed(path) is True
        assert tracker.last_seen(path) == 10.0

    def test_unchanged_timestamp(self, fake_fs: FakeFileSystem) -> None:
        path = fake_fs.add_file("/d/a.txt", mtime=10.0)
        tracker = ModificationTracker(fake_fs)
        tracker.has_changed(path)

        assert tracker.has_changed(path) is False
        assert tracker.has_changed(path) is False

    def test_newer_timestamp(self, fake_fs: FakeFileSystem) -> None:
        path = fake_fs.add_file("/d/a.txt", mtime=10.0)
        tracker = ModificationTracker(fake_fs)
        tracker.has_changed(path)

        fake_fs.files[path] = 11.0
        assert tracker.has_changed(path) is True
        assert tracker.has_changed(path) is False
        assert tracker.last_seen(path) == 11.0

    def test_older_timestamp_is_not_a_change(self, fake_fs: FakeFileSystem) -> None:
        path = fake_fs.add_file("/d/a.txt", mtime=10.0)
        tracker = ModificationTracker(fake_fs)
        tracker.has_changed(path)

        fake_fs.files[path] = 5.0
        assert tracker.has_changed(path) is False
        assert tracker.last_seen(path) == 10.0

    def test_missing_path_raises(self, fake_fs: FakeFileSystem) -> None:
        tracker = ModificationTracker(fake_fs)
        with pytest.raises(FileNotFoundError):
            tracker.has_changed(Path("/nowhere"))
        assert len(tracker) == 0

    def test_paths_are_independent(self, fake_fs: FakeFileSystem) -> None:
        a = fake_fs.add_file("/d/a.txt")
        b = fake_fs.add_file("/d/b.txt")
        tracker = ModificationTracker(fake_fs)

        assert tracker.has_changed(a) is True
        assert tracker.has_changed(b) is True
        assert tracker.has_changed(a) is False
        assert len(tracker) == 2
        assert a in tracker


class TestBookkeeping:
    """forget() and clear()."""

    def test_forget_resets_baseline(self, fake_fs: FakeFileSystem) -> None:
        path = fake_fs.add_file("/d/a.txt")
        tracker = ModificationTracker(fake_fs)
        tracker.has_changed(path)

        tracker.forget(path)
        assert path not in tracker
        assert tracker.has_changed(path) is True

    def test_clear(self, fake_fs: FakeFileSystem) -> None:
        tracker = ModificationTracker(fake_fs)
        tracker.has_changed(fake_fs.add_file("/d/a.txt"))
        tracker.clear()
        assert len(tracker) == 0


class TestLocalFileSystem:
    """Tracker against real files."""

    def test_detects_utime(self, tmp_path: Path) -> None:
        path = tmp_path / "cfg.json"
        path.write_text("{}")
        os.utime(path, (1000, 1000))
        tracker = ModificationTracker()

        assert tracker.has_changed(path) is True
        assert tracker.has_changed(path) is False

        os.utime(path, (2000, 2000))
        assert tracker.has_changed(path) is True
