"""Utility functions for routinize."""

from .exercise_utils import (
    find_matching_exercise,
    group_exercises_by_region,
    normalize_exercise_name,
    search_exercises,
)

__all__ = [
    "find_matching_exercise",
    "group_exercises_by_region",
    "normalize_exercise_name",
    "search_exercises",
]
