"""Session - The application controller that owns all tracker state.

The session holds the profile, log and meal plan stores, and is the single
writer of the persisted document. Every store mutation calls back into
commit(), which saves the local copy synchronously and hands the same
snapshot to the sync dispatchers.
"""

import logging
from contextlib import contextmanager
from datetime import date
from pathlib import Path
from typing import Callable, Iterator

from ..core.document import (
    DocumentUpdate,
    InvalidDocumentError,
    build_document,
    dump_document,
    export_filename,
    parse_document,
)
from ..core.logbook import DailyLogStore
from ..core.meal_plans import MealPlanStore
from ..core.models import DailyBalance, DailyLog, DaySummary, MealPlans, NutriDocument, NutritionStats
from ..core.profile import ProfileStore, default_profile
from ..core.targets import compute_targets
from ..core.trends import daily_balance, project_trend
from .local_store import LocalStore
from .sync import FileSyncTarget, SyncDispatcher, SyncTarget


logger = logging.getLogger(__name__)


class NutriTrackSession:
    """Owns the stores for one user session and persists every change."""

    def __init__(
        self,
        local_store: LocalStore,
        backup_target: SyncTarget | None = None,
        clock: Callable[[], date] = date.today,
    ) -> None:
        """Initialize session and load the stored document.

        Args:
            local_store: Local persistence for the document
            backup_target: Optional extra sync target (e.g. Firestore)
            clock: Returns the current local date
        """
        self.local_store = local_store
        self.clock = clock
        self.linked: SyncDispatcher | None = None
        self.backup = SyncDispatcher(backup_target) if backup_target is not None else None
        self._suspended = 0
        self._dirty = False

        self.profile_store = ProfileStore(default_profile(clock()), on_commit=self._on_change)
        self.log_store = DailyLogStore(
            default_weight=lambda: self.profile_store.profile.weight,
            on_commit=self._on_change,
        )
        self.meal_plans = MealPlanStore(on_commit=self._on_change)

        self._load()

    # ==================== Persistence ====================

    def _load(self) -> None:
        text = self.local_store.load()
        if text is None:
            return
        try:
            update = parse_document(text)
        except InvalidDocumentError as e:
            logger.error("Stored document is invalid, using defaults: %s", str(e))
            self.local_store.quarantine()
            return
        with self._batch(commit=False):
            self._apply(update)
        logger.info("Loaded document with %d day logs", len(self.log_store.logs))

    def document(self) -> NutriDocument:
        """Snapshot of the full state."""
        return build_document(self.profile_store.profile, self.log_store.logs, self.meal_plans.plans)

    def commit(self) -> None:
        """Persist the current state locally and queue it for every sync target."""
        text = dump_document(self.document())
        self.local_store.save(text)
        for dispatcher in (self.linked, self.backup):
            if dispatcher is not None:
                dispatcher.submit(text)

    def flush(self, timeout: float | None = None) -> bool:
        """Wait for pending sync writes (tests and shutdown)."""
        idle = True
        for dispatcher in (self.linked, self.backup):
            if dispatcher is not None:
                idle = dispatcher.flush(timeout) and idle
        return idle

    def _on_change(self) -> None:
        if self._suspended:
            self._dirty = True
            return
        self.commit()

    @contextmanager
    def _batch(self, commit: bool = True) -> Iterator[None]:
        """Group several store mutations into one commit."""
        self._suspended += 1
        try:
            yield
        finally:
            self._suspended -= 1
        if commit and not self._suspended and self._dirty:
            self._dirty = False
            self.commit()
        elif not self._suspended:
            self._dirty = False

    def _apply(self, update: DocumentUpdate) -> None:
        if update.profile is not None:
            self.profile_store.replace(update.profile)
        if update.logs is not None:
            self.log_store.replace(update.logs)
        if update.meal_plans is not None:
            self.meal_plans.replace(update.meal_plans)

    # ==================== Import / Export ====================

    def export_json(self) -> str:
        return dump_document(self.document())

    def export_to(self, directory: Path) -> Path:
        """Write a dated backup file into a directory.

        Returns:
            Path of the written file
        """
        path = Path(directory) / export_filename(self.clock())
        path.write_text(self.export_json(), encoding="utf-8")
        logger.info("Exported document to %s", path)
        return path

    def import_json(self, text: str) -> None:
        """Replace profile, logs and meal plans with the parts present in text.

        Raises:
            InvalidDocumentError: If the text is malformed; state is untouched
        """
        update = parse_document(text)
        with self._batch():
            self._apply(update)
        logger.info("Imported document")

    def import_file(self, path: Path) -> None:
        """Import a document file.

        Raises:
            InvalidDocumentError: If the content is malformed
            OSError: If the file can't be read
        """
        self.import_json(Path(path).read_text(encoding="utf-8"))

    def link_file(self, path: Path) -> bool:
        """Link an external file for write-through sync.

        The file is read once and any parts it contains are merged in; from
        then on every commit is written to it. A file that can't be read or
        holds a malformed document aborts the link and keeps the previous one.

        Returns:
            True if the file is now linked
        """
        target = FileSyncTarget(Path(path))
        try:
            text = target.read()
        except FileNotFoundError:
            text = ""
        except OSError as e:
            logger.warning("Could not link %s: %s", path, str(e))
            return False

        update = DocumentUpdate()
        if text.strip():
            try:
                update = parse_document(text)
            except InvalidDocumentError as e:
                logger.warning("Could not link %s: %s", path, str(e))
                return False

        self.linked = SyncDispatcher(target)
        with self._batch():
            self._apply(update)
            self._dirty = True
        logger.info("Linked %s, syncing on every change", target.name)
        return True

    def unlink_file(self) -> None:
        """Stop syncing to the linked file. Snapshots not yet written are dropped."""
        if self.linked is not None:
            self.linked.cancel()
        self.linked = None

    @property
    def linked_file_name(self) -> str | None:
        return self.linked.target.name if self.linked is not None else None

    def restore_from_backup(self) -> bool:
        """Import the cloud backup, if one is configured and exists.

        Returns:
            True if a backup was imported
        """
        if self.backup is None:
            return False
        text = self.backup.target.read()
        if not text:
            logger.info("No backup to restore")
            return False
        try:
            self.import_json(text)
        except InvalidDocumentError as e:
            logger.error("Backup is invalid: %s", str(e))
            return False
        return True

    def reset(self) -> None:
        """Forget everything: delete the local document and restore defaults.

        A linked file is unlinked but not deleted.
        """
        self.local_store.clear()
        self.unlink_file()
        with self._batch(commit=False):
            self.profile_store.replace(default_profile(self.clock()))
            self.log_store.clear()
            self.meal_plans.replace(MealPlans())
        logger.info("Session reset to defaults")

    # ==================== Queries ====================

    def today_key(self) -> str:
        return self.clock().isoformat()

    def stats(self) -> NutritionStats | None:
        return compute_targets(self.profile_store.profile, self.clock())

    def today_log(self) -> DailyLog:
        return self.log_store.get(self.today_key())

    def trend(self) -> list[DaySummary]:
        stats = self.stats()
        target = stats.target_calories if stats is not None else None
        return project_trend(self.log_store.logs, target, self.clock())

    def today_balance(self) -> DailyBalance:
        stats = self.stats()
        target = stats.target_calories if stats is not None else None
        return daily_balance(self.today_log(), target, self.profile_store.profile.water_goal)

    # ==================== Actions ====================

    def log_weight(self, weight: float, day: date | str | None = None) -> None:
        """Record a weigh-in: the day's snapshot and the profile's current weight."""
        day = day if day is not None else self.today_key()
        with self._batch():
            self.profile_store.update(weight=weight)
            self.log_store.set_weight(day, weight)
