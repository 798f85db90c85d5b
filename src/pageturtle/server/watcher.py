"""Filesystem watching and serialized rebuilds for the dev server"""

import threading
from enum import Enum
from pathlib import Path
from typing import Callable

from loguru import logger
from watchdog.events import FileSystemEvent, FileSystemEventHandler

from pageturtle.core.parse import MD_EXTENSIONS
from pageturtle.server.broadcast import Broadcaster


class DevState(str, Enum):
    idle = "idle"
    change_detected = "change_detected"
    filtering = "filtering"
    rebuilding = "rebuilding"


TRIGGER_EVENTS = {"modified", "deleted"}


def _src_path(event: FileSystemEvent) -> str:
    path = event.src_path
    return path.decode() if isinstance(path, bytes) else str(path)


class Rebuilder:
    """Runs one rebuild at a time and signals sessions once output is written."""

    def __init__(self, build: Callable[[], object], broadcaster: Broadcaster):
        self._build = build
        self._broadcaster = broadcaster
        self._lock = threading.Lock()
        self.rebuilds = 0

    def rebuild(self, changed: str) -> bool:
        """Rebuild the whole site, then publish changed. False if the build raised."""
        with self._lock:
            try:
                self._build()
            except Exception as e:
                logger.error("Rebuild after change to {} failed: {}", changed, e)
                return False
            self.rebuilds += 1
        sessions = self._broadcaster.publish(changed)
        logger.info("Rebuilt after change to {}; notified {} session(s)", changed, sessions)
        return True


class ContentChangeHandler(FileSystemEventHandler):
    """Turns watchdog events on content files into rebuilds."""

    def __init__(self, rebuilder: Rebuilder, extensions: set[str] = MD_EXTENSIONS):
        self._rebuilder = rebuilder
        self._extensions = extensions
        self.state = DevState.idle

    def _transition(self, state: DevState) -> None:
        logger.debug("dev server: {} -> {}", self.state.value, state.value)
        self.state = state

    def accepts(self, event: FileSystemEvent) -> bool:
        """True for modify/delete events on files with a content extension."""
        if event.is_directory or event.event_type not in TRIGGER_EVENTS:
            return False
        return Path(_src_path(event)).suffix in self._extensions

    def on_any_event(self, event: FileSystemEvent) -> None:
        self._transition(DevState.change_detected)
        self._transition(DevState.filtering)
        try:
            if not self.accepts(event):
                return
            self._transition(DevState.rebuilding)
            self._rebuilder.rebuild(_src_path(event))
        finally:
            self._transition(DevState.idle)
