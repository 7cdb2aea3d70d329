"""Initialize project command."""

import click

from ..config import get_settings
from ..db import describe_structure, get_db_path, init_db, missing_items, seed_exercises
from .base import async_command, echo_info, echo_success, echo_warning


@click.command()
@async_command
async def init():
    """Initialize the routinize database.

    Creates the data directory, every table and index, and the exercise
    library. Running it again adds any missing columns and leaves data alone.
    """
    data_dir = get_settings().data_dir
    db_path = get_db_path(data_dir)

    echo_info(f"Initializing routinize in {data_dir}")
    data_dir.mkdir(parents=True, exist_ok=True)

    await init_db(db_path)
    echo_success("Database initialized")

    count = await seed_exercises(db_path)
    echo_success(f"Exercise library populated ({count} new exercises)")

    missing = missing_items(await describe_structure(db_path))
    if missing:
        echo_warning(f"Still missing: {', '.join(missing)}")

    click.echo()
    click.echo("routinize is ready to use!")
    click.echo()
    click.echo("Next steps:")
    click.echo("  routinize profile create        # Interactive questionnaire")
    click.echo("  routinize routine generate --days 4 --save")
    click.echo("  routinize serve                 # Start the JSON API")
