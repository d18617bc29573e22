"""File system watcher that reports changes inside the served tree."""

import logging
import threading
from pathlib import Path
from typing import Callable

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

logger = logging.getLogger(__name__)


class TreeEventHandler(FileSystemEventHandler):
    """Collects changed paths and reports them in debounced batches."""

    def __init__(
        self,
        on_change: Callable[[list[Path]], None],
        debounce_seconds: float = 0.5,
    ):
        super().__init__()
        self.on_change = on_change
        self.debounce_seconds = debounce_seconds
        self._pending_paths: list[str] = []
        self._lock = threading.Lock()
        self._timer: threading.Timer | None = None

    def _is_visible(self, path: str) -> bool:
        return not Path(path).name.startswith(".")

    def _schedule_update(self, path: str) -> None:
        """Schedule a debounced update for the given path."""
        if not self._is_visible(path):
            return
        logger.debug("Change detected: %s", path)
        with self._lock:
            if path not in self._pending_paths:
                self._pending_paths.append(path)

            if self._timer:
                self._timer.cancel()

            self._timer = threading.Timer(
                self.debounce_seconds,
                self.flush,
            )
            self._timer.daemon = True
            self._timer.start()

    def flush(self) -> None:
        """Report all pending changes now."""
        with self._lock:
            paths = [Path(p) for p in self._pending_paths]
            self._pending_paths.clear()
            if self._timer:
                self._timer.cancel()
            self._timer = None

        if not paths:
            return

        logger.info("Processing %d changed path(s)", len(paths))
        self.on_change(paths)

    def on_created(self, event: FileSystemEvent) -> None:
        self._schedule_update(event.src_path)

    def on_modified(self, event: FileSystemEvent) -> None:
        # Directory modifications only echo changes to their children
        if not event.is_directory:
            self._schedule_update(event.src_path)

    def on_deleted(self, event: FileSystemEvent) -> None:
        self._schedule_update(event.src_path)

    def on_moved(self, event: FileSystemEvent) -> None:
        self._schedule_update(event.src_path)
        if hasattr(event, "dest_path"):
            self._schedule_update(event.dest_path)


class TreeWatcher:
    """Watches the served directory for changes."""

    def __init__(
        self,
        root: Path,
        on_change: Callable[[list[Path]], None],
    ):
        self.root = root
        self.on_change = on_change
        self._observer: Observer | None = None
        self._handler: TreeEventHandler | None = None

    def start(self) -> None:
        """Start watching the root directory."""
        if self._observer is not None:
            return  # Already running

        self._handler = TreeEventHandler(self.on_change)

        self._observer = Observer()
        self._observer.schedule(
            self._handler,
            str(self.root),
            recursive=True,
        )
        self._observer.daemon = True
        self._observer.start()
        logger.info("Tree watcher started: %s", self.root)

    def stop(self) -> None:
        """Stop watching."""
        if self._observer is not None:
            self._observer.stop()
            self._observer.join(timeout=1.0)
            self._observer = None
            self._handler = None

    def __enter__(self) -> "TreeWatcher":
        self.start()
        return self

    def __exit__(self, *args) -> None:
        self.stop()
