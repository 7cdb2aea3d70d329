"""Utilities for exercise name normalization and matching."""

import re
from difflib import SequenceMatcher

from ..models.exercises import COMMON_EXERCISES, MUSCLE_REGIONS, Exercise, region_for_muscle

ABBREVIATIONS = {
    "bb": "barbell",
    "db": "dumbbell",
    "kb": "kettlebell",
    "ohp": "overhead press",
    "rdl": "romanian deadlift",
    "bss": "bulgarian split squat",
    "cgbp": "close grip bench press",
}


def normalize_exercise_name(name: str) -> str:
    """Normalize an exercise name for comparison.

    Lowercases, collapses whitespace and hyphens, and expands common
    abbreviations ("DB Row" -> "dumbbell row").
    """
    normalized = name.lower().strip()
    normalized = re.sub(r"[\s\-]+", " ", normalized)

    if normalized in ABBREVIATIONS:
        return ABBREVIATIONS[normalized]

    for abbrev, full in ABBREVIATIONS.items():
        normalized = re.sub(rf"\b{abbrev}\b", full, normalized)

    return normalized


def find_matching_exercise(
    name: str,
    exercises: list[Exercise] | None = None,
    threshold: float = 0.8,
) -> Exercise | None:
    """Find the best matching exercise.

    Args:
        name: The exercise name to match
        exercises: Exercises to search (defaults to the built-in library)
        threshold: Minimum similarity ratio (0-1) to consider a match

    Returns:
        The best matching Exercise or None if no match above threshold
    """
    if exercises is None:
        exercises = COMMON_EXERCISES

    wanted = normalize_exercise_name(name)

    best_match: Exercise | None = None
    best_score = 0.0

    for exercise in exercises:
        candidates = [exercise.name, *exercise.aliases]
        for candidate in candidates:
            normalized = normalize_exercise_name(candidate)
            if normalized == wanted:
                return exercise
            score = SequenceMatcher(None, wanted, normalized).ratio()
            if score > best_score:
                best_score = score
                best_match = exercise

    if best_score >= threshold:
        return best_match

    return None


def search_exercises(query: str, exercises: list[Exercise]) -> list[Exercise]:
    """Exercises whose name or alias contains ``query``, else the fuzzy best match."""
    wanted = normalize_exercise_name(query)
    hits = [
        ex
        for ex in exercises
        if any(wanted in normalize_exercise_name(n) for n in [ex.name, *ex.aliases])
    ]
    if hits:
        return hits
    match = find_matching_exercise(query, exercises, threshold=0.6)
    return [match] if match else []


def group_exercises_by_region(exercises: list[Exercise]) -> dict[str, list[Exercise]]:
    """Group exercises by the body region of their primary muscle."""
    result: dict[str, list[Exercise]] = {region: [] for region in MUSCLE_REGIONS}

    for exercise in exercises:
        if not exercise.muscle_groups:
            continue
        result[region_for_muscle(exercise.muscle_groups[0])].append(exercise)

    return result
