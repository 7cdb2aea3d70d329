"""CLI entry point for routinize."""

import click

from .commands import dashboard, habit, init, profile, routine, serve
from .config import get_settings
from .logging_setup import configure_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="routinize")
@click.option("--verbose", "-v", is_flag=True, help="Log at DEBUG level")
def main(verbose: bool):
    """routinize: fitness and wellness tracker.

    Generate science-based workout routines, track habits, sleep, mood and
    nutrition, and serve everything as a JSON API.

    Example usage:

        # Initialize the database
        routinize init

        # Create your profile
        routinize profile create

        # Generate and save a routine
        routinize routine generate --days 4 --save

        # Track a habit
        routinize habit add "Meditate" --category mindfulness
        routinize habit done 1

        # Start the API
        routinize serve
    """
    configure_logging("DEBUG" if verbose else get_settings().log_level)


main.add_command(init)
main.add_command(profile)
main.add_command(routine)
main.add_command(habit)
main.add_command(dashboard)
main.add_command(serve)


def run():
    """Run the CLI."""
    main()


if __name__ == "__main__":
    run()
