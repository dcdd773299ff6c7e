"""Daily Log Store - Date-keyed aggregation of intake, outtake, water and weight.

The module-level helpers are pure: they take a DailyLog and return a new one.
DailyLogStore holds the date-keyed mapping and calls its commit hook after
every mutation that changed something.
"""

import logging
import math
from datetime import date
from types import MappingProxyType
from typing import Callable, Mapping, Optional

from .models import DailyLog, EntryId, EntryKind, LogEntry


logger = logging.getLogger(__name__)

CommitHook = Callable[[], None]

# Older exports label activities "act"
_KIND_ALIASES = {"act": EntryKind.ACTIVITY}


def day_key(day: date | str) -> str:
    """Return the ISO-8601 key for a calendar day."""
    if isinstance(day, date):
        return day.isoformat()
    return day


def entry_kind(kind: EntryKind | str) -> Optional[EntryKind]:
    """Normalize an entry kind, accepting the legacy "act" alias.

    Returns:
        The kind, or None if it is neither food nor activity
    """
    if isinstance(kind, EntryKind):
        return kind
    if kind in _KIND_ALIASES:
        return _KIND_ALIASES[kind]
    try:
        return EntryKind(kind)
    except ValueError:
        logger.warning("Unknown entry kind: %r", kind)
        return None


def default_log(weight: float) -> DailyLog:
    """The log a day reads as before anything has been recorded on it."""
    return DailyLog(weight=weight, intake=0, outtake=0, water=0, foods=[], activities=[])


def append_entry(log: DailyLog, kind: EntryKind, entry: LogEntry) -> DailyLog:
    """Return a copy of the log with the entry appended and its total bumped."""
    if kind is EntryKind.FOOD:
        return log.model_copy(update={
            "foods": [*log.foods, entry],
            "intake": log.intake + entry.cal,
        })
    return log.model_copy(update={
        "activities": [*log.activities, entry],
        "outtake": log.outtake + entry.cal,
    })


def drop_entry(log: DailyLog, kind: EntryKind, entry_id: EntryId) -> DailyLog | None:
    """Return a copy of the log without the entry, or None if it isn't there."""
    entries = log.foods if kind is EntryKind.FOOD else log.activities
    removed = next((e for e in entries if e.id == entry_id), None)
    if removed is None:
        return None

    remaining = [e for e in entries if e.id != entry_id]
    if kind is EntryKind.FOOD:
        return log.model_copy(update={"foods": remaining, "intake": log.intake - removed.cal})
    return log.model_copy(update={"activities": remaining, "outtake": log.outtake - removed.cal})


def with_weight(log: DailyLog, weight: float) -> DailyLog:
    """Return a copy of the log with a new weight snapshot."""
    return log.model_copy(update={"weight": weight})


def with_water(log: DailyLog, delta: int) -> DailyLog:
    """Return a copy of the log with water adjusted, clamped at zero."""
    return log.model_copy(update={"water": max(0, log.water + delta)})


def _finite(number: object) -> Optional[float]:
    try:
        value = float(number)
    except (TypeError, ValueError):
        return None
    return value if math.isfinite(value) else None


class DailyLogStore:
    """Date-keyed mapping of daily logs.

    Reads of a day without a log synthesize a default from the current
    profile weight; the mapping itself only changes through mutations.
    """

    def __init__(
        self,
        logs: Mapping[str, DailyLog] | None = None,
        default_weight: Callable[[], float] | None = None,
        on_commit: CommitHook | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            logs: Existing logs keyed by ISO date
            default_weight: Supplies the weight of a day that has no log yet
            on_commit: Called after every effective mutation
        """
        self._logs: dict[str, DailyLog] = dict(logs or {})
        self._default_weight = default_weight or (lambda: 0.0)
        self._on_commit = on_commit

    @property
    def logs(self) -> Mapping[str, DailyLog]:
        """Read-only view of the persisted logs."""
        return MappingProxyType(self._logs)

    def get(self, day: date | str) -> DailyLog:
        """Return the day's log, or the synthesized default. Never stores anything."""
        log = self._logs.get(day_key(day))
        if log is None:
            return default_log(self._default_weight() or 0.0)
        return log

    def has_log(self, day: date | str) -> bool:
        return day_key(day) in self._logs

    def replace(self, logs: Mapping[str, DailyLog]) -> None:
        """Replace every log at once (import)."""
        self._logs = dict(logs)
        self._commit()

    def clear(self) -> None:
        self._logs = {}

    # ==================== Mutations ====================

    def add_entry(
        self, day: date | str, kind: EntryKind | str, name: str, cal: object
    ) -> EntryId | None:
        """Log a food or activity on a day.

        Args:
            day: Day to log on
            kind: "food" or "activity"
            name: What was eaten or done
            cal: Calories; added to the running total exactly

        Returns:
            The new entry's id, or None if nothing was logged: the kind is
            unknown, the name is empty or cal is not a finite number
        """
        kind = entry_kind(kind)
        value = _finite(cal)
        if kind is None or not name or not name.strip() or value is None:
            logger.debug("Ignoring %r entry with name=%r cal=%r", kind, name, cal)
            return None

        entry = LogEntry(name=name, cal=value)
        key = day_key(day)
        self._logs[key] = append_entry(self.get(key), kind, entry)
        logger.debug("Added %s entry %s on %s (%.1f kcal)", kind.value, entry.id, key, value)
        self._commit()
        return entry.id

    def remove_entry(self, day: date | str, kind: EntryKind | str, entry_id: EntryId) -> None:
        """Remove an entry and subtract its calories. Unknown day or id is a no-op."""
        kind = entry_kind(kind)
        if kind is None:
            return
        key = day_key(day)
        log = self._logs.get(key)
        if log is None:
            logger.warning("No log on %s, nothing to remove", key)
            return

        updated = drop_entry(log, kind, entry_id)
        if updated is None:
            logger.warning("Entry not found: %s", entry_id)
            return

        self._logs[key] = updated
        self._commit()

    def set_weight(self, day: date | str, weight: float) -> None:
        """Overwrite the day's weight snapshot. A non-finite weight is ignored."""
        value = _finite(weight)
        if value is None:
            logger.debug("Ignoring weight %r on %s", weight, day_key(day))
            return
        key = day_key(day)
        self._logs[key] = with_weight(self.get(key), value)
        self._commit()

    def adjust_water(self, day: date | str, delta: int) -> None:
        """Add (or with a negative delta, remove) cups of water, never below zero."""
        key = day_key(day)
        self._logs[key] = with_water(self.get(key), delta)
        self._commit()

    def _commit(self) -> None:
        if self._on_commit is not None:
            self._on_commit()
