"""Trend Projection - Pure functions for the rolling window and daily balance.

All functions are pure: same input always produces same output, no side effects.
"""

from datetime import date, timedelta
from typing import Mapping

from .models import DailyBalance, DailyLog, DaySummary
from .targets import round_half_up


TREND_DAYS = 7

WEEKDAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def generate_day_summary(day: date, log: DailyLog | None, target_calories: int | None) -> DaySummary:
    """Summarize one day of the trend window.

    A day without a log reports zero net calories and zero weight, with
    logged=False so it can be told apart from a real zero-calorie day.

    Args:
        day: The calendar day
        log: That day's log, or None if nothing was recorded
        target_calories: Today's target, repeated on every point

    Returns:
        DaySummary for the day
    """
    net = log.intake - log.outtake if log is not None else 0
    return DaySummary(
        log_date=day,
        day_name=WEEKDAY_NAMES[day.weekday()],
        weight=log.weight if log is not None else 0,
        net_calories=round_half_up(net),
        target=target_calories or 0,
        logged=log is not None,
    )


def project_trend(
    logs: Mapping[str, DailyLog],
    target_calories: int | None,
    today: date | None = None,
    days: int = TREND_DAYS,
) -> list[DaySummary]:
    """Build the rolling window of day summaries ending today.

    Args:
        logs: Persisted logs keyed by ISO date
        target_calories: Current daily target (None if it can't be computed)
        today: Last day of the window (defaults to today)
        days: Window length

    Returns:
        Exactly `days` summaries, oldest first
    """
    if today is None:
        today = date.today()

    window = [today - timedelta(days=offset) for offset in range(days - 1, -1, -1)]
    return [generate_day_summary(day, logs.get(day.isoformat()), target_calories) for day in window]


def daily_balance(log: DailyLog, target_calories: int | None, water_goal: int) -> DailyBalance:
    """Compare a day's net calories against the target."""
    target = target_calories or 0
    net = log.intake - log.outtake
    return DailyBalance(
        intake=log.intake,
        outtake=log.outtake,
        net=net,
        target=target,
        remaining=target - net,
        over_target=net > target,
        water=log.water,
        water_goal=water_goal,
    )
