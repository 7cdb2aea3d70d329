"""Dashboard command."""

import click

from ..services.dashboards import build_dashboard
from .base import async_command, ensure_initialized, resolve_user, user_option


def _line(label: str, value) -> None:
    click.echo(f"  {label:<22}{value}")


@click.command()
@user_option
@click.option("--days", "-d", default=7, type=click.IntRange(1, 365), help="Days to cover")
@click.pass_context
@async_command
async def dashboard(ctx, user_id: str | None, days: int):
    """Show nutrition, sleep, mood, wellness and workout summaries."""
    ensure_initialized(ctx)
    data = await build_dashboard(resolve_user(user_id), days=days)

    click.echo()
    click.echo(f"Dashboard for {data['user_id']}: {data['start']} to {data['end']}")

    wellness = data["wellness"]
    click.echo()
    click.echo(click.style("Wellness", bold=True))
    _line("Score", wellness["score"])
    for name, value in wellness["components"].items():
        _line(name.replace("_", " ").capitalize(), value)

    sleep = data["sleep"]
    click.echo()
    click.echo(click.style("Sleep", bold=True))
    _line("Nights logged", sleep["total_entries"])
    _line("Average duration", f"{sleep['average_duration']} min")
    _line("Average quality", sleep["average_quality"])
    _line("Sleep debt", f"{sleep['sleep_debt']} min")
    _line("Sleep score", sleep["sleep_score"])

    mood = data["mood"]
    click.echo()
    click.echo(click.style("Mood", bold=True))
    _line("Check-ins", mood["entries"])
    _line("Average mood", mood["average_mood"])
    _line("Average stress", mood["average_stress"])
    _line("Most common mood", mood["most_common_mood"] or "-")

    nutrition = data["nutrition"]
    click.echo()
    click.echo(click.style("Nutrition", bold=True))
    _line("Days logged", nutrition["days"])
    for key, value in nutrition["daily_average"].items():
        _line(f"Daily {key}", value)

    workouts = data["workouts"]
    click.echo()
    click.echo(click.style("Workouts", bold=True))
    for key, value in workouts.items():
        _line(key.replace("_", " ").capitalize(), value)
