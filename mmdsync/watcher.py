"""Watch a project and re-run sync after a quiet period."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from pathlib import Path

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from mmdsync.config.loader import CONFIG_FILENAME
from mmdsync.storage.local import IGNORED_DIRS

logger = logging.getLogger(__name__)

WATCHED_SUFFIXES = {".md", ".mmd"}


def is_relevant(path: str, root: str | Path | None = None) -> bool:
    """Markdown, diagram sources and the config; never anything in IGNORED_DIRS.

    Ignored directories are matched below ``root`` only, so a project that
    itself lives under e.g. ``~/build`` is still watched.
    """
    p = Path(path)
    parts = p.parts
    if root is not None:
        try:
            parts = p.relative_to(root).parts
        except ValueError:
            pass
    if any(part in IGNORED_DIRS for part in parts[:-1]):
        return False
    return p.suffix in WATCHED_SUFFIXES or p.name == CONFIG_FILENAME


class _ChangeHandler(FileSystemEventHandler):
    """Records the time of the most recent relevant event.

    A move counts by its destination too (temp file renamed over a document).
    """

    def __init__(
        self,
        lock: threading.Lock,
        clock: Callable[[], float] = time.monotonic,
        root: Path | None = None,
    ) -> None:
        super().__init__()
        self._lock = lock
        self._clock = clock
        self._root = root
        self.pending: set[str] = set()
        self.last_event = 0.0

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.is_directory:
            return
        paths = [str(event.src_path)]
        dest = getattr(event, "dest_path", "")
        if dest:
            paths.append(str(dest))
        relevant = [p for p in paths if is_relevant(p, self._root)]
        if not relevant:
            return
        with self._lock:
            self.pending.update(relevant)
            self.last_event = self._clock()


class SyncWatcher:
    """Runs ``on_change`` once changes have settled for ``debounce_seconds``.

    Editors often save through temp file + rename, so a burst of events is
    folded into a single run.
    """

    def __init__(
        self,
        project_path: str | Path,
        on_change: Callable[[set[str]], None],
        debounce_seconds: float = 1.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._project_path = Path(project_path).resolve()
        self._on_change = on_change
        self._debounce = debounce_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._handler = _ChangeHandler(self._lock, clock, root=self._project_path)
        self._observer: Observer | None = None

    def start(self) -> None:
        if self._observer is not None:
            return
        self._observer = Observer()
        self._observer.schedule(self._handler, str(self._project_path), recursive=True)
        self._observer.start()
        logger.info("Watching %s for changes", self._project_path)

    def stop(self) -> None:
        if self._observer is None:
            return
        self._observer.stop()
        self._observer.join(timeout=5)
        self._observer = None
        logger.info("Stopped watching %s", self._project_path)

    def poll(self) -> bool:
        """Fire the callback if changes are pending and quiet. Returns True if fired."""
        with self._lock:
            if not self._handler.pending:
                return False
            if self._clock() - self._handler.last_event < self._debounce:
                return False
            changed = set(self._handler.pending)
            self._handler.pending.clear()

        try:
            self._on_change(changed)
        except Exception:
            logger.exception("Sync after change failed")
        return True

    def run_forever(self, interval: float = 0.2) -> None:
        self.start()
        try:
            while True:
                self.poll()
                time.sleep(interval)
        finally:
            self.stop()
