"""External Sync - Best-effort write-through of the document to sync targets.

Writes run on a background thread so they never block the caller. Each
target gets its own dispatcher with a single pending slot: a snapshot
submitted while a write is in flight replaces any snapshot still waiting,
and writes to one target never overlap.
"""

import logging
import threading
from pathlib import Path
from typing import Protocol


logger = logging.getLogger(__name__)


class SyncTarget(Protocol):
    """Something the document can be written to."""

    name: str

    def write(self, text: str) -> None:
        """Write the full document text. Raises on failure."""
        ...

    def read(self) -> str | None:
        """Read the document text back, None if there is nothing stored."""
        ...


class FileSyncTarget:
    """A linked JSON file on disk."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self.name = path.name

    def read(self) -> str:
        """Read the file's current content.

        Raises:
            OSError: If the file can't be read (PermissionError included)
        """
        return self.path.read_text(encoding="utf-8")

    def write(self, text: str) -> None:
        self.path.write_text(text, encoding="utf-8")


class SyncDispatcher:
    """Fire-and-forget writer for one sync target.

    Failures are logged and remembered in last_error; they never reach the
    code that submitted the snapshot.
    """

    def __init__(self, target: SyncTarget) -> None:
        self.target = target
        self.writes = 0
        self.failures = 0
        self.last_error: Exception | None = None
        self._lock = threading.Lock()
        self._pending: str | None = None
        self._worker: threading.Thread | None = None
        self._idle = threading.Event()
        self._idle.set()

    def submit(self, text: str) -> None:
        """Queue a snapshot for writing, superseding any snapshot still waiting."""
        with self._lock:
            self._pending = text
            if self._worker is None:
                self._idle.clear()
                self._worker = threading.Thread(
                    target=self._drain,
                    name=f"nutritrack-sync-{self.target.name}",
                    daemon=True,
                )
                self._worker.start()

    def cancel(self) -> None:
        """Drop the snapshot still waiting. A write already in flight finishes."""
        with self._lock:
            self._pending = None

    def flush(self, timeout: float | None = None) -> bool:
        """Wait until nothing is pending or in flight.

        Returns:
            True if the dispatcher went idle before the timeout
        """
        return self._idle.wait(timeout)

    def _drain(self) -> None:
        while True:
            with self._lock:
                text = self._pending
                self._pending = None
                if text is None:
                    self._worker = None
                    self._idle.set()
                    return

            try:
                self.target.write(text)
                self.writes += 1
                logger.info("Synced document to %s", self.target.name)
            except Exception as e:
                self.failures += 1
                self.last_error = e
                logger.error("Sync to %s failed: %s", self.target.name, str(e))
