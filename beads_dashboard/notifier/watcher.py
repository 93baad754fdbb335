"""
File system watcher for the beads directory.

watchdog delivers events on its observer thread; they are handed to the
asyncio loop with run_coroutine_threadsafe and collapsed by a short debounce
before the change callback (normally the refresh broadcast) runs.
"""

import asyncio
import logging
from pathlib import Path
from typing import Awaitable, Callable, Optional, Union

from watchdog.events import (
    EVENT_TYPE_CLOSED,
    EVENT_TYPE_CREATED,
    EVENT_TYPE_DELETED,
    EVENT_TYPE_MODIFIED,
    EVENT_TYPE_MOVED,
    FileSystemEvent,
    FileSystemEventHandler,
)
from watchdog.observers import Observer

logger = logging.getLogger("beads_dashboard.notifier")

# Opened / closed-without-write are left out: reading issues.jsonl must not trigger a refresh
CHANGE_EVENT_TYPES = frozenset({
    EVENT_TYPE_CREATED,
    EVENT_TYPE_MODIFIED,
    EVENT_TYPE_DELETED,
    EVENT_TYPE_MOVED,
    EVENT_TYPE_CLOSED,
})


def _event_path(raw_path: Union[str, bytes]) -> Path:
    return Path(raw_path.decode() if isinstance(raw_path, bytes) else raw_path)


def _is_dotfile(raw_path: Union[str, bytes, None]) -> bool:
    if not raw_path:
        return True
    return _event_path(raw_path).name.startswith(".")


class BeadsDirEventHandler(FileSystemEventHandler):
    """Forwards mutations of files inside the beads directory."""

    def __init__(self, notifier: "ChangeNotifier"):
        self.notifier = notifier

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.event_type not in CHANGE_EVENT_TYPES:
            return
        dest_path = getattr(event, "dest_path", None)
        if _is_dotfile(event.src_path) and _is_dotfile(dest_path):
            return
        logger.info(f"File {event.event_type}: {_event_path(event.src_path)}")
        self.notifier.schedule_refresh()


class BeadsDirCreatedHandler(FileSystemEventHandler):
    """Watches a project root for the beads directory to appear."""

    def __init__(self, notifier: "ChangeNotifier"):
        self.notifier = notifier

    def _check(self, raw_path: Union[str, bytes, None]) -> None:
        if raw_path and _event_path(raw_path).name == self.notifier.beads_dir.name:
            self.notifier.schedule_bootstrap()

    def on_created(self, event: FileSystemEvent) -> None:
        if event.is_directory:
            self._check(event.src_path)

    def on_moved(self, event: FileSystemEvent) -> None:
        if event.is_directory:
            self._check(event.dest_path)


class ChangeNotifier:
    """Watch a beads directory and invoke a coroutine callback on change."""

    def __init__(
        self,
        beads_dir: Union[str, Path],
        on_change: Callable[[], Awaitable[None]],
        debounce_seconds: float = 0.1,
    ):
        self.beads_dir = Path(beads_dir)
        self.on_change = on_change
        self.debounce_seconds = debounce_seconds
        self.observer: Optional[Observer] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._debounce_task: Optional[asyncio.Task] = None
        self._dir_watch = None

    def start(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> bool:
        """
        Start watching. Must be called with a running loop or an explicit one.

        Returns:
            True when a watch is active, False when running without live refresh
        """
        if self.observer is not None:
            return True

        self._loop = loop or asyncio.get_running_loop()
        observer = Observer()

        try:
            if self.beads_dir.is_dir():
                self._dir_watch = observer.schedule(
                    BeadsDirEventHandler(self), str(self.beads_dir), recursive=False
                )
                logger.info(f"Watching directory: {self.beads_dir}")
            else:
                parent = self.beads_dir.parent
                if not parent.is_dir():
                    raise FileNotFoundError(f"project root does not exist: {parent}")
                observer.schedule(BeadsDirCreatedHandler(self), str(parent), recursive=False)
                logger.info(f"No {self.beads_dir.name} directory found at {self.beads_dir}. Waiting for it to be created...")
            observer.start()
        except Exception as e:
            logger.warning(f"File watching unavailable for {self.beads_dir}: {e}; live refresh disabled")
            self._dir_watch = None
            return False

        self.observer = observer
        return True

    def stop(self) -> None:
        if self._debounce_task and not self._debounce_task.done():
            self._debounce_task.cancel()
        self._debounce_task = None

        if self.observer is not None:
            self.observer.stop()
            self.observer.join(timeout=1.0)
            self.observer = None
        self._dir_watch = None

    def retarget(self, beads_dir: Union[str, Path]) -> bool:
        """Move the watch to another beads directory (project switch)."""
        self.stop()
        self.beads_dir = Path(beads_dir)
        if self._loop is None:
            # Never started; the next start() picks up the new directory
            return False
        return self.start(self._loop)

    @property
    def is_running(self) -> bool:
        return self.observer is not None and self.observer.is_alive()

    def schedule_refresh(self) -> None:
        """Thread-safe entry point for observer handlers."""
        if self._loop is None or self._loop.is_closed():
            return
        asyncio.run_coroutine_threadsafe(self._schedule_callback(), self._loop)

    def schedule_bootstrap(self) -> None:
        if self._loop is None or self._loop.is_closed():
            return
        asyncio.run_coroutine_threadsafe(self._on_beads_dir_created(), self._loop)

    async def _schedule_callback(self) -> None:
        """Restart the debounce window on every event."""
        if self._debounce_task and not self._debounce_task.done():
            self._debounce_task.cancel()
        self._debounce_task = asyncio.create_task(self._debounced_callback())

    async def _debounced_callback(self) -> None:
        await asyncio.sleep(self.debounce_seconds)
        await self._run_callback()

    async def _run_callback(self) -> None:
        try:
            await self.on_change()
        except Exception as e:
            logger.error(f"Change callback failed: {e}", exc_info=True)

    async def _on_beads_dir_created(self) -> None:
        logger.info(f"{self.beads_dir.name} directory created! Attaching watcher...")
        if self.observer is not None and self.beads_dir.is_dir():
            if self._dir_watch is not None:
                self.observer.unschedule(self._dir_watch)
            self._dir_watch = self.observer.schedule(
                BeadsDirEventHandler(self), str(self.beads_dir), recursive=False
            )
        await self._run_callback()
