"""Habit scheduling, completion and streaks."""

import logging
from datetime import date, timedelta
from pathlib import Path

import aiosqlite

from ..db.repositories import HabitLogRepository, HabitRepository
from ..errors import NotFoundError, ValidationError
from ..models.habits import WEEKDAY_NAMES, Habit, HabitLog

logger = logging.getLogger(__name__)

FREQUENCY_TOKENS = {"daily", "weekdays", *WEEKDAY_NAMES}


def is_scheduled(habit: Habit, day: date) -> bool:
    """Return True if ``habit`` is due on ``day``."""
    return habit.is_scheduled(day)


def previous_scheduled_day(habit: Habit, day: date) -> date | None:
    """The closest scheduled day strictly before ``day``."""
    for offset in range(1, 8):
        candidate = day - timedelta(days=offset)
        if habit.is_scheduled(candidate):
            return candidate
    return None


def habit_completion_rate(
    habit: Habit,
    logs: list[HabitLog],
    days: int = 30,
    today: date | None = None,
) -> float:
    """Percentage of scheduled days in the last ``days`` days that were completed."""
    today = today or date.today()
    window = [today - timedelta(days=i) for i in range(days)]
    scheduled = [d for d in window if habit.is_scheduled(d)]
    if not scheduled:
        return 0.0
    completed = {log.completed_on for log in logs if log.habit_id == habit.id}
    hits = sum(1 for d in scheduled if d in completed)
    return round(hits / len(scheduled) * 100, 1)


async def create_habit(habit: Habit, db_path: Path | None = None) -> Habit:
    if not habit.title.strip():
        raise ValidationError("Habit title is required")
    unknown = [f for f in habit.frequency if f.lower() not in FREQUENCY_TOKENS]
    if unknown:
        raise ValidationError(f"Unknown habit frequency: {', '.join(unknown)}")

    repo = HabitRepository(db_path)
    habit.id = await repo.create(habit)
    logger.info("Created habit %s '%s' for %s", habit.id, habit.title, habit.user_id)
    return await repo.get(habit.id)


async def complete_habit(
    habit_id: int, on: date | None = None, db_path: Path | None = None
) -> Habit:
    """Mark a habit done for a day and update its streak.

    Completing the same habit twice on one day changes nothing.

    Raises:
        NotFoundError: If the habit does not exist
    """
    on = on or date.today()
    habits = HabitRepository(db_path)
    logs = HabitLogRepository(db_path)

    habit = await habits.get(habit_id)
    if habit is None:
        raise NotFoundError(f"Habit {habit_id} not found")

    if await logs.exists(habit_id, on):
        return habit

    try:
        await logs.create(HabitLog(habit_id=habit_id, user_id=habit.user_id, completed_on=on))
    except aiosqlite.IntegrityError:
        logger.info("Habit %s already completed on %s", habit_id, on)
        return await habits.get(habit_id)

    # Backfilled days are logged but leave the current streak alone
    if habit.last_completed and on < habit.last_completed:
        return habit

    previous = previous_scheduled_day(habit, on)
    if previous and await logs.exists(habit_id, previous):
        habit.streak += 1
    else:
        habit.streak = 1
    habit.longest_streak = max(habit.longest_streak, habit.streak)
    habit.last_completed = on

    await habits.update(habit)
    return habit
