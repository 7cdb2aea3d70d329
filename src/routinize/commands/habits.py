"""Habit commands."""

from datetime import date

import click

from ..db import HabitLogRepository, HabitRepository
from ..models.habits import Habit, HabitCategory
from ..services.habits import complete_habit, create_habit, habit_completion_rate
from .base import (
    async_command,
    echo_info,
    echo_success,
    ensure_initialized,
    format_table,
    resolve_user,
    user_option,
)


@click.group()
@click.pass_context
def habit(ctx):
    """Track recurring habits and streaks."""
    ensure_initialized(ctx)


@habit.command()
@click.argument("title")
@user_option
@click.option("--category", type=click.Choice([c.value for c in HabitCategory]), default="health")
@click.option("--frequency", "-f", multiple=True, default=("daily",),
              help="daily, weekdays or a weekday name (repeatable)")
@click.option("--time", "time_of_day", help="Time of day, HH:MM")
@click.option("--duration", type=int, default=0, help="Minutes")
@async_command
async def add(
    title: str,
    user_id: str | None,
    category: str,
    frequency: tuple[str, ...],
    time_of_day: str | None,
    duration: int,
):
    """Add a habit.

    Example:

        routinize habit add "Stretch" -f monday -f thursday --time 07:30
    """
    created = await create_habit(
        Habit(
            user_id=resolve_user(user_id),
            title=title,
            category=HabitCategory(category),
            frequency=list(frequency),
            time_of_day=time_of_day,
            duration=duration,
        )
    )
    echo_success(f"Habit '{created.title}' added (ID: {created.id})")


@habit.command()
@click.argument("habit_id", type=int)
@click.option("--date", "on", type=click.DateTime(formats=["%Y-%m-%d"]),
              help="Day completed (default: today)")
@async_command
async def done(habit_id: int, on):
    """Mark a habit as done."""
    day = on.date() if on else date.today()
    updated = await complete_habit(habit_id, day)
    echo_success(
        f"'{updated.title}' done for {day.isoformat()} "
        f"(streak {updated.streak}, best {updated.longest_streak})"
    )


@habit.command(name="list")
@user_option
@async_command
async def list_habits(user_id: str | None):
    """List habits with streaks and 30-day completion."""
    user_id = resolve_user(user_id)
    habits = await HabitRepository().list_by_user(user_id)
    if not habits:
        echo_info("No habits yet. Add one with 'routinize habit add'")
        return

    logs = await HabitLogRepository().list_by_user(user_id)
    today = date.today()
    headers = ["ID", "Title", "Frequency", "Today", "Streak", "Best", "30d"]
    rows = [
        [
            str(h.id),
            h.title,
            ",".join(h.frequency),
            "due" if h.is_scheduled(today) else "-",
            str(h.streak),
            str(h.longest_streak),
            f"{habit_completion_rate(h, logs, today=today)}%",
        ]
        for h in habits
    ]
    click.echo()
    click.echo(format_table(headers, rows))
