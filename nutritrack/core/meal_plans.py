"""Meal Plan Store - Reusable meal slots that can be logged in one go."""

import logging
from datetime import date
from typing import Callable

from .logbook import DailyLogStore
from .models import EntryId, EntryKind, MealItem, MealPlans, MealSlot


logger = logging.getLogger(__name__)


def meal_slot(slot: MealSlot | str) -> MealSlot:
    """Normalize a slot name.

    Raises:
        ValueError: If the slot is not breakfast, lunch, dinner or other
    """
    return slot if isinstance(slot, MealSlot) else MealSlot(slot)


def toggle_item(selection: list[MealItem], item: MealItem) -> list[MealItem]:
    """Add the item to a selection, or remove it if one with the same name is there.

    Returns a new list; the selection passed in is left alone.
    """
    if any(selected.name == item.name for selected in selection):
        return [selected for selected in selection if selected.name != item.name]
    return [*selection, item]


def items_total(items: list[MealItem]) -> float:
    return sum(item.cal for item in items)


class MealPlanStore:
    """Breakfast, lunch, dinner and other slots.

    Edits happen on a scratch selection returned by select_for_editing and
    only reach the store through commit, so an edit session can be dropped.
    """

    def __init__(self, plans: MealPlans | None = None, on_commit: Callable[[], None] | None = None) -> None:
        self._plans = plans or MealPlans()
        self._on_commit = on_commit

    @property
    def plans(self) -> MealPlans:
        return self._plans

    def slot(self, slot: MealSlot | str) -> list[MealItem]:
        return list(getattr(self._plans, meal_slot(slot).value))

    def select_for_editing(self, slot: MealSlot | str) -> list[MealItem]:
        """Scratch copy of a slot's items for an edit session."""
        return self.slot(slot)

    def commit(self, slot: MealSlot | str, selection: list[MealItem]) -> None:
        """Replace a slot's items with the edited selection."""
        slot = meal_slot(slot)
        self._plans = self._plans.model_copy(update={slot.value: list(selection)})
        logger.debug("Meal plan %s now has %d items", slot.value, len(selection))
        self._commit()

    def replace(self, plans: MealPlans) -> None:
        self._plans = plans
        self._commit()

    def slot_total(self, slot: MealSlot | str) -> float:
        return items_total(self.slot(slot))

    def total_calories(self) -> float:
        """Calories across every slot."""
        return sum(self.slot_total(slot) for slot in MealSlot)

    def apply_to_log(self, slot: MealSlot | str, log_store: DailyLogStore, day: date | str) -> list[EntryId]:
        """Log every item of a slot as a food on the given day.

        Each item becomes a new entry with its own id; the slot is unchanged
        so it can be applied again tomorrow.

        Args:
            slot: Slot to apply
            log_store: Store receiving the entries
            day: Day to log on

        Returns:
            Ids of the created entries (empty if the slot is empty)
        """
        items = self.slot(slot)
        if not items:
            logger.debug("Meal plan %s is empty, nothing to log", meal_slot(slot).value)
            return []

        entry_ids = []
        for item in items:
            entry_id = log_store.add_entry(day, EntryKind.FOOD, item.name, item.cal)
            if entry_id is not None:
                entry_ids.append(entry_id)

        logger.info(
            "Logged %s plan: %d items, %.1f kcal",
            meal_slot(slot).value, len(entry_ids), items_total(items),
        )
        return entry_ids

    def _commit(self) -> None:
        if self._on_commit is not None:
            self._on_commit()
