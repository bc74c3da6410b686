"""Watch mode for devdiary - rebuilds the site when diary sources change."""

import signal
import sys
import time
from pathlib import Path
from typing import Any, Callable

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from .errors import DiaryError

WATCHED_SUFFIXES = (".md", ".json", ".txt", ".png", ".jpg", ".jpeg", ".html", ".toml")


class DebounceHandler(FileSystemEventHandler):
    """File system event handler with debouncing."""

    def __init__(
        self,
        on_batch: Callable[[set[Path]], None],
        debounce_ms: int = 300,
        ignore_dir: Path | None = None,
    ):
        super().__init__()
        self.on_batch = on_batch
        self.debounce_ms = debounce_ms
        self.ignore_dir = ignore_dir.resolve() if ignore_dir else None

        self.changed: set[Path] = set()
        self.last_event_time = 0.0

    def _should_skip(self, path: Path) -> bool:
        """Check if file should be skipped."""
        name = path.name

        # Skip hidden files
        if name.startswith("."):
            return True

        # Skip temp/swap files
        if name.endswith("~") or name.endswith(".swp") or name.startswith(".#"):
            return True

        if path.suffix.lower() not in WATCHED_SUFFIXES:
            return True

        # Writes into the output tree must not trigger another build
        if self.ignore_dir is not None:
            try:
                path.resolve().relative_to(self.ignore_dir)
                return True
            except ValueError:
                pass

        return False

    def _record(self, src_path: Any) -> None:
        path = Path(str(src_path))
        if not self._should_skip(path):
            self.changed.add(path)
            self.last_event_time = time.time()

    def on_created(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._record(event.src_path)

    def on_modified(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._record(event.src_path)

    def on_deleted(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._record(event.src_path)

    def on_moved(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._record(event.src_path)
            self._record(event.dest_path)

    def check_and_flush(self) -> None:
        """Check if debounce period has elapsed and flush if so."""
        if not self.changed:
            return

        elapsed = (time.time() - self.last_event_time) * 1000
        if elapsed >= self.debounce_ms:
            self.flush()

    def flush(self) -> None:
        """Process accumulated events."""
        if not self.changed:
            return

        changed = set(self.changed)
        self.changed.clear()

        if self.on_batch:
            self.on_batch(changed)


def watch_diary(runtime: Any, debounce_ms: int = 300, quiet: bool = False) -> int:
    """
    Watch the input tree (and template) and rebuild the site on change.

    Args:
        runtime: Runtime instance with config and builder
        debounce_ms: Debounce window in milliseconds
        quiet: Suppress output

    Returns:
        Exit code
    """
    config = runtime.config
    input_dir = config.paths.input
    if not input_dir.exists():
        print(f"Error: Input directory not found: {input_dir}", file=sys.stderr)
        return 1

    running = True

    def rebuild(changed: set[Path]) -> None:
        start_time = time.time()
        try:
            report = runtime.builder.build()
        except (DiaryError, OSError) as e:
            print(f"Error: {e}", file=sys.stderr, flush=True)
            return
        if not quiet:
            duration_ms = int((time.time() - start_time) * 1000)
            print(
                f"Rebuilt {len(report.pages)} pages after {len(changed)} change(s) ({duration_ms}ms)",
                flush=True,
            )

    def signal_handler(signum: int, frame: Any) -> None:
        nonlocal running
        running = False
        if not quiet:
            print("\nShutting down...", flush=True)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    rebuild(set())

    handler = DebounceHandler(rebuild, debounce_ms, ignore_dir=config.paths.output)
    observer = Observer()
    observer.schedule(handler, str(input_dir), recursive=True)
    if config.paths.template is not None and config.paths.template.parent.exists():
        observer.schedule(handler, str(config.paths.template.parent), recursive=False)

    if not quiet:
        print(f"Watching {input_dir} (debounce: {debounce_ms}ms)", flush=True)
        print("Press Ctrl+C to stop", flush=True)

    observer.start()

    try:
        while running:
            time.sleep(0.1)
            handler.check_and_flush()
    finally:
        handler.flush()
        observer.stop()
        observer.join()

    if not quiet:
        print("Watch stopped", flush=True)

    return 0
