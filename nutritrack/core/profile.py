"""Profile Store - Holds the user's biometric and goal parameters."""

from datetime import date
from typing import Any, Callable

from .models import ActivityLevel, Gender, Profile


DEFAULT_TARGET_DATE = date(2026, 3, 1)


def default_profile(today: date | None = None) -> Profile:
    """Built-in profile used before the user has entered anything."""
    return Profile(
        name="User",
        gender=Gender.MALE.value,
        age=25,
        height=175,
        weight=70,
        target_weight=65,
        activity_level=ActivityLevel.MODERATE.value,
        start_date=today or date.today(),
        target_date=DEFAULT_TARGET_DATE,
        water_goal=8,
    )


class ProfileStore:
    """Holds the current profile and reports every change to the commit hook."""

    def __init__(self, profile: Profile, on_commit: Callable[[], None] | None = None) -> None:
        self._profile = profile
        self._on_commit = on_commit

    @property
    def profile(self) -> Profile:
        return self._profile

    def update(self, **changes: Any) -> Profile:
        """Apply field changes given by attribute name (e.g. target_weight=64).

        The merged profile is validated before it replaces the current one.

        Raises:
            pydantic.ValidationError: If the result is not a valid profile
        """
        data = self._profile.model_dump()
        data.update(changes)
        self._profile = Profile.model_validate(data)
        self._commit()
        return self._profile

    def replace(self, profile: Profile) -> None:
        self._profile = profile
        self._commit()

    def _commit(self) -> None:
        if self._on_commit is not None:
            self._on_commit()
