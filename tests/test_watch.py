"""Tests for watch mode functionality."""

import tempfile
from pathlib import Path

from watchdog.events import (
    DirCreatedEvent,
    FileCreatedEvent,
    FileDeletedEvent,
    FileModifiedEvent,
    FileMovedEvent,
)

from devdiary.watch import DebounceHandler


def test_watch_skip_temp_files():
    """Test that watch mode skips temp, swap and unrelated files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        handler = DebounceHandler(lambda changed: None, debounce_ms=50)

        for name in ("test.swp", "test~", ".#test.md", ".hidden.md", "build.log", "script.py"):
            assert handler._should_skip(root / name)

        for name in ("stage-01.md", "stages-index.json", "project-url.txt", "shot.PNG"):
            assert not handler._should_skip(root / name)


def test_watch_ignores_output_dir():
    """Writes into the output tree do not trigger rebuilds."""
    with tempfile.TemporaryDirectory() as tmpdir:
        out = Path(tmpdir) / "public"
        out.mkdir()
        handler = DebounceHandler(lambda changed: None, ignore_dir=out)

        handler.on_created(FileCreatedEvent(str(out / "ru" / "index.html")))
        handler.on_created(DirCreatedEvent(str(Path(tmpdir) / "input")))
        assert handler.changed == set()

        handler.on_modified(FileModifiedEvent(str(Path(tmpdir) / "input" / "a.md")))
        assert handler.changed == {Path(tmpdir) / "input" / "a.md"}


def test_watch_debounce():
    """Test that debouncing coalesces multiple events."""
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        batches = []
        handler = DebounceHandler(lambda changed: batches.append(changed), debounce_ms=60_000)

        handler.on_created(FileCreatedEvent(str(root / "a.md")))
        handler.on_modified(FileModifiedEvent(str(root / "a.md")))
        handler.on_deleted(FileDeletedEvent(str(root / "b.md")))
        handler.on_moved(FileMovedEvent(str(root / "c.md"), str(root / "d.md")))

        # Still inside the debounce window
        handler.check_and_flush()
        assert batches == []

        handler.flush()
        assert batches == [{root / "a.md", root / "b.md", root / "c.md", root / "d.md"}]
        assert handler.changed == set()

        # Nothing pending, nothing emitted
        handler.flush()
        assert len(batches) == 1


def test_watch_flushes_after_window():
    with tempfile.TemporaryDirectory() as tmpdir:
        batches = []
        handler = DebounceHandler(lambda changed: batches.append(changed), debounce_ms=0)
        handler.on_modified(FileModifiedEvent(str(Path(tmpdir) / "intro.md")))
        handler.check_and_flush()
        assert len(batches) == 1
