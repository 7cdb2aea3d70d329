"""CLI commands for routinize."""

from .dashboard import dashboard
from .habits import habit
from .init import init
from .profile import profile
from .routines import routine
from .serve import serve

__all__ = ["dashboard", "habit", "init", "profile", "routine", "serve"]
