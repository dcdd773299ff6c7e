"""Core Data Models - Pydantic models for type safety.

Models carry validation only; behavior lives in the pure functions of the
sibling modules. JSON field names are camelCase to stay compatible with
documents exported by earlier versions of the app.
"""

from datetime import date as DateType
from enum import Enum
from typing import Optional, Union
import uuid

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


# Entry ids written by older exports are millisecond timestamps (numbers).
EntryId = Union[str, int, float]


def new_entry_id() -> str:
    """Generate a fresh, unique entry id."""
    return str(uuid.uuid4())


class CamelModel(BaseModel):
    """Base model serialized with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, allow_inf_nan=False)


class Gender(str, Enum):
    """Genders modeled by the BMR formula."""

    MALE = "male"
    FEMALE = "female"


class ActivityLevel(str, Enum):
    """Activity levels and their TDEE multipliers."""

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    EXTRA = "extra"


class EntryKind(str, Enum):
    """Which list of a daily log an entry belongs to."""

    FOOD = "food"
    ACTIVITY = "activity"


class MealSlot(str, Enum):
    """Named meal categories of the meal planner."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    OTHER = "other"


class Profile(CamelModel):
    """The user's biometric and goal parameters.

    age, height and weight are optional so a half-filled form can be stored;
    the target calculation refuses to run until they are present. Blank
    strings for the numeric and date fields read as unset.
    gender and activity_level are plain strings: values outside the known
    enums are kept and handled by the calculator's fallbacks.
    """

    name: str = Field(default="User")
    gender: str = Field(default=Gender.MALE.value)
    age: Optional[int] = Field(default=None, gt=0, description="Age in years")
    height: Optional[float] = Field(default=None, gt=0, description="Height in cm")
    weight: Optional[float] = Field(default=None, gt=0, description="Current weight in kg")
    target_weight: Optional[float] = Field(default=None, gt=0, description="Goal weight in kg")
    activity_level: str = Field(default=ActivityLevel.MODERATE.value)
    start_date: Optional[DateType] = None
    target_date: Optional[DateType] = None
    start_time: Optional[str] = None
    water_goal: int = Field(default=8, ge=0, description="Daily water goal in cups")

    @field_validator("age", "height", "weight", "target_weight", "start_date", "target_date", mode="before")
    @classmethod
    def _blank_is_unset(cls, value: object) -> object:
        # Cleared form inputs are stored as empty strings
        if isinstance(value, str) and not value.strip():
            return None
        return value


class LogEntry(CamelModel):
    """A single food or activity logged on a day. Never mutated in place."""

    model_config = ConfigDict(frozen=True)

    id: EntryId = Field(default_factory=new_entry_id)
    name: str = Field(min_length=1)
    cal: float = Field(description="Calories; may be zero, negative or fractional")


class DailyLog(CamelModel):
    """Per-day aggregate: running totals plus the itemized entries behind them."""

    weight: float = Field(default=0.0, description="Weight snapshot for the day in kg")
    intake: float = Field(default=0.0, description="Sum of foods[].cal")
    outtake: float = Field(default=0.0, description="Sum of activities[].cal")
    water: int = Field(default=0, ge=0, description="Cups of water")
    foods: list[LogEntry] = Field(default_factory=list)
    activities: list[LogEntry] = Field(default_factory=list)


class MealItem(CamelModel):
    """A reusable food item in a meal plan slot."""

    name: str = Field(min_length=1)
    cal: float


class MealPlans(CamelModel):
    """The four meal slots, each an ordered list of items."""

    model_config = ConfigDict(extra="forbid")

    breakfast: list[MealItem] = Field(default_factory=list)
    lunch: list[MealItem] = Field(default_factory=list)
    dinner: list[MealItem] = Field(default_factory=list)
    other: list[MealItem] = Field(default_factory=list)


class NutritionStats(CamelModel):
    """Result of the daily target calculation."""

    bmr: float
    tdee: float
    target_calories: int


class DaySummary(CamelModel):
    """One point of the rolling trend window."""

    log_date: DateType
    day_name: str = Field(description="Short English weekday, e.g. 'Mon'")
    weight: float = Field(description="0 when the day has no log")
    net_calories: int
    target: int
    logged: bool = Field(description="False when the day has no log at all")


class DailyBalance(CamelModel):
    """Dashboard numbers for a single day."""

    intake: float
    outtake: float
    net: float
    target: int
    remaining: float = Field(description="Negative if over target")
    over_target: bool
    water: int
    water_goal: int


class NutriDocument(CamelModel):
    """The complete persisted state: the unit of every import and export."""

    profile: Profile = Field(default_factory=Profile)
    logs: dict[str, DailyLog] = Field(default_factory=dict)
    meal_plans: MealPlans = Field(default_factory=MealPlans)

    @field_validator("logs")
    @classmethod
    def _keys_are_iso_dates(cls, logs: dict[str, DailyLog]) -> dict[str, DailyLog]:
        for key in logs:
            DateType.fromisoformat(key)
        return logs
