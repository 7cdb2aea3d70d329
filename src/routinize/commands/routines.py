"""Routine commands."""

import json
import random

import click
import pyperclip

from ..db import ExerciseRepository, RoutineRepository
from ..generators.routine_generator import (
    PeriodizationType,
    RoutineConfig,
    generate_routine,
    routine_summary,
)
from ..models.routine import SplitType
from ..models.user_profile import TrainingGoal, TrainingLevel
from ..science.bodybuilding import ADVANCED_TECHNIQUES, METHOD_TECHNIQUES
from ..science.mesocycles import LONG_TERM_PLANS
from ..services.profiles import get_or_default_profile
from .base import (
    async_command,
    echo_error,
    echo_info,
    echo_success,
    ensure_initialized,
    format_table,
    resolve_user,
    user_option,
)


@click.group()
@click.pass_context
def routine(ctx):
    """Generate and manage workout routines."""
    ensure_initialized(ctx)


@routine.command()
@user_option
@click.option("--name", "-n", default="Advanced Routine", help="Routine name")
@click.option("--days", "-d", "frequency", default=4, type=click.IntRange(1, 7),
              help="Training days per week")
@click.option("--weeks", "-w", default=8, type=click.IntRange(1, 52), help="Duration in weeks")
@click.option("--level", type=click.Choice([lv.value for lv in TrainingLevel]),
              help="Training level (default: from profile)")
@click.option("--goal", type=click.Choice([g.value for g in TrainingGoal]),
              help="Training goal (default: from profile)")
@click.option("--split", type=click.Choice([s.value for s in SplitType]), default="ppl")
@click.option("--technique", "-t", "techniques", multiple=True,
              type=click.Choice([t.name for t in ADVANCED_TECHNIQUES]),
              help="Advanced technique to apply (repeatable)")
@click.option("--method", "-m", "methods", multiple=True,
              type=click.Choice([m.name for m in METHOD_TECHNIQUES]),
              help="Method technique to apply (repeatable)")
@click.option("--periodization", type=click.Choice([p.value for p in PeriodizationType]),
              help="Vary reps and RIR across days")
@click.option("--plan", type=click.Choice([p.name for p in LONG_TERM_PLANS]),
              help="Follow a long-term plan")
@click.option("--variants", is_flag=True, help="Use exercise variants")
@click.option("--no-deload", is_flag=True, help="Skip deload weeks")
@click.option("--seed", type=int, help="Random seed for reproducible output")
@click.option("--save", "-s", is_flag=True, help="Save the routine")
@async_command
async def generate(
    user_id: str | None,
    name: str,
    frequency: int,
    weeks: int,
    level: str | None,
    goal: str | None,
    split: str,
    techniques: tuple[str, ...],
    methods: tuple[str, ...],
    periodization: str | None,
    plan: str | None,
    variants: bool,
    no_deload: bool,
    seed: int | None,
    save: bool,
):
    """Generate a routine from the exercise library.

    Level and goal default to the ones in your profile.

    Examples:

        routinize routine generate --days 4 --save

        routinize routine generate -t "Drop Sets" --periodization undulating

        routinize routine generate --plan "Hypertrophy-Strength Cycle" --weeks 12
    """
    user_id = resolve_user(user_id)
    profile = await get_or_default_profile(user_id)

    config = RoutineConfig(
        name=name,
        level=TrainingLevel(level) if level else profile.level or TrainingLevel.INTERMEDIATE,
        goal=TrainingGoal(goal) if goal else profile.goal or TrainingGoal.HYPERTROPHY,
        split=SplitType(split),
        frequency=frequency,
        duration_weeks=weeks,
        include_deload=not no_deload,
        techniques=list(techniques),
        method_techniques=list(methods),
        use_variants=variants,
        use_periodization=periodization is not None,
        periodization_type=PeriodizationType(periodization or "undulating"),
        use_long_term_plan=plan is not None,
        long_term_plan=plan,
    )

    exercises = await ExerciseRepository().list_all()
    rng = random.Random(seed) if seed is not None else None
    result = generate_routine(config, exercises, user_id, rng=rng)

    click.echo()
    click.echo(routine_summary(result))
    click.echo()

    if save:
        await RoutineRepository().save(result)
        echo_success(f"Routine saved (ID: {result.id})")
    else:
        echo_info("Not saved. Re-run with --save to keep it.")


@routine.command(name="list")
@user_option
@click.option("--active", is_flag=True, help="Only active routines")
@async_command
async def list_routines(user_id: str | None, active: bool):
    """List saved routines."""
    routines = await RoutineRepository().list_by_user(resolve_user(user_id), active_only=active)

    if not routines:
        echo_info("No routines found. Generate one with 'routinize routine generate --save'")
        return

    headers = ["ID", "Name", "Days", "Weeks", "Active", "Created"]
    rows = []
    for r in routines:
        created = r.created_at.strftime("%Y-%m-%d") if r.created_at else "N/A"
        rows.append([
            r.id[:8],
            r.name[:30] + "..." if len(r.name) > 30 else r.name,
            str(r.frequency),
            str(r.duration_weeks or "-"),
            "yes" if r.is_active else "no",
            created,
        ])

    click.echo()
    click.echo(format_table(headers, rows))
    click.echo()
    click.echo(f"Total: {len(routines)} routine(s)")


async def _load(ctx: click.Context, routine_id: str):
    """Load by full id or unique prefix, exiting if not found."""
    repo = RoutineRepository()
    found = await repo.get(routine_id)
    if found is None and len(routine_id) < 36:
        matches = [
            r for r in await repo.list_by_user(resolve_user(None))
            if r.id.startswith(routine_id)
        ]
        if len(matches) == 1:
            found = matches[0]
    if found is None:
        echo_error(f"Routine {routine_id} not found")
        ctx.exit(1)
    return found


@routine.command()
@click.argument("routine_id")
@click.pass_context
@async_command
async def show(ctx, routine_id: str):
    """Show a saved routine."""
    found = await _load(ctx, routine_id)
    click.echo()
    click.echo("=" * 60)
    click.echo(f"Routine: {found.name} (ID: {found.id})")
    click.echo("=" * 60)
    if found.description:
        click.echo(found.description)
    click.echo(f"Source: {found.source}")
    click.echo(f"Total sets per week: {found.total_sets}")
    click.echo()
    click.echo(routine_summary(found))


@routine.command()
@click.argument("routine_id")
@click.option("--clipboard", "-c", is_flag=True, help="Copy to clipboard instead of printing")
@click.option("--output", "-o", type=click.Path(), help="Write to file instead of stdout")
@click.pass_context
@async_command
async def export(ctx, routine_id: str, clipboard: bool, output: str | None):
    """Export a routine as JSON.

    Examples:

        routinize routine export 1a2b3c4d

        routinize routine export 1a2b3c4d --clipboard

        routinize routine export 1a2b3c4d -o routine.json
    """
    found = await _load(ctx, routine_id)
    content = json.dumps(found.to_view(), indent=2)

    if clipboard:
        try:
            pyperclip.copy(content)
            echo_success("Routine copied to clipboard")
        except pyperclip.PyperclipException as e:
            echo_error(f"Failed to copy to clipboard: {e}")
            echo_info("Try using --output to save to a file instead")
            ctx.exit(1)
    elif output:
        with open(output, "w") as f:
            f.write(content)
        echo_success(f"Routine exported to {output}")
    else:
        click.echo(content)
