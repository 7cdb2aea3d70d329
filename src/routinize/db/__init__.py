"""Database layer for routinize."""

from .engine import (
    describe_structure,
    fix_structure,
    get_db_path,
    init_db,
    missing_items,
    seed_exercises,
)
from .repositories import (
    AvatarRepository,
    ChallengeRepository,
    CorporateProgramRepository,
    ExerciseRepository,
    HabitLogRepository,
    HabitRepository,
    MindfulnessRepository,
    MoodRepository,
    NutritionRepository,
    ParticipantRepository,
    ProfileRepository,
    RoutineRepository,
    SleepRepository,
    WorkoutLogRepository,
)

__all__ = [
    "AvatarRepository",
    "ChallengeRepository",
    "CorporateProgramRepository",
    "describe_structure",
    "ExerciseRepository",
    "fix_structure",
    "get_db_path",
    "HabitLogRepository",
    "HabitRepository",
    "init_db",
    "MindfulnessRepository",
    "missing_items",
    "MoodRepository",
    "NutritionRepository",
    "ParticipantRepository",
    "ProfileRepository",
    "RoutineRepository",
    "seed_exercises",
    "SleepRepository",
    "WorkoutLogRepository",
]
