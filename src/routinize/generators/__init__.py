"""Routine generators."""

from .routine_generator import (
    PeriodizationType,
    RoutineConfig,
    RoutineGenerator,
    generate_routine,
    routine_summary,
)

__all__ = [
    "generate_routine",
    "PeriodizationType",
    "RoutineConfig",
    "RoutineGenerator",
    "routine_summary",
]
