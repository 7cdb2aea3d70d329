"""Profile commands."""

import click
import questionary
from questionary import Style

from ..models.user_profile import DEFAULT_FULL_NAME, Profile, TrainingGoal, TrainingLevel
from ..services.profiles import create_profile, get_profile, update_profile
from .base import (
    async_command,
    echo_info,
    echo_success,
    ensure_initialized,
    resolve_user,
    user_option,
)

custom_style = Style(
    [
        ("qmark", "fg:#673ab7 bold"),
        ("question", "bold"),
        ("answer", "fg:#f44336 bold"),
        ("pointer", "fg:#673ab7 bold"),
        ("highlighted", "fg:#673ab7 bold"),
        ("selected", "fg:#cc5454"),
        ("separator", "fg:#cc5454"),
        ("instruction", ""),
        ("text", ""),
    ]
)


def _positive_number(value: str) -> bool | str:
    if not value:
        return True
    try:
        return float(value) > 0 or "Enter a positive number"
    except ValueError:
        return "Enter a number"


async def collect_profile(user_id: str) -> Profile | None:
    """Run the interactive questionnaire. Returns None if cancelled."""
    click.echo("\n=== Profile Questionnaire ===\n")

    name = await questionary.text(
        "What's your name?",
        default=DEFAULT_FULL_NAME,
        style=custom_style,
    ).ask_async()
    if name is None:
        return None

    level = await questionary.select(
        "What's your training experience level?",
        choices=[
            questionary.Choice("Beginner (less than 1 year)", TrainingLevel.BEGINNER),
            questionary.Choice("Intermediate (1-3 years)", TrainingLevel.INTERMEDIATE),
            questionary.Choice("Advanced (3+ years)", TrainingLevel.ADVANCED),
        ],
        style=custom_style,
    ).ask_async()

    goal = await questionary.select(
        "What's your primary goal?",
        choices=[
            questionary.Choice("Build muscle (hypertrophy)", TrainingGoal.HYPERTROPHY),
            questionary.Choice("Build strength", TrainingGoal.STRENGTH),
            questionary.Choice("Power and explosiveness", TrainingGoal.POWER),
            questionary.Choice("Muscular endurance", TrainingGoal.ENDURANCE),
            questionary.Choice("Lose weight", TrainingGoal.WEIGHT_LOSS),
            questionary.Choice("General fitness", TrainingGoal.GENERAL_FITNESS),
        ],
        style=custom_style,
    ).ask_async()

    weight = await questionary.text(
        "Body weight in kg (optional):",
        validate=_positive_number,
        style=custom_style,
    ).ask_async()

    height = await questionary.text(
        "Height in cm (optional):",
        validate=_positive_number,
        style=custom_style,
    ).ask_async()

    return Profile(
        user_id=user_id,
        full_name=name.strip() or DEFAULT_FULL_NAME,
        level=level,
        goal=goal,
        weight=float(weight) if weight else None,
        height=float(height) if height else None,
    )


@click.group()
@click.pass_context
def profile(ctx):
    """Create and view your profile."""
    ensure_initialized(ctx)


@profile.command()
@user_option
@click.option("--update", is_flag=True, help="Replace an existing profile")
@async_command
async def create(user_id: str | None, update: bool):
    """Create a profile with an interactive questionnaire."""
    user_id = resolve_user(user_id)
    answers = await collect_profile(user_id)
    if answers is None:
        echo_info("Cancelled")
        return

    if update:
        saved = await update_profile(answers)
    else:
        saved = await create_profile(answers)

    echo_success(f"Profile saved for {saved.user_id}")
    click.echo()
    click.echo(saved.get_summary())


@profile.command()
@user_option
@async_command
async def show(user_id: str | None):
    """Show your profile."""
    saved = await get_profile(resolve_user(user_id))
    click.echo()
    click.echo(saved.get_summary())
