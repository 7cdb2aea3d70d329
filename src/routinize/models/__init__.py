"""Data models for routinize."""

from .avatar import TrainerAvatar, default_avatar
from .corporate import ChallengeParticipant, CorporateChallenge, CorporateWellnessProgram
from .exercises import Exercise, ExerciseType, MovementPattern, MuscleGroup
from .habits import Habit, HabitCategory, HabitLog
from .routine import Difficulty, ExerciseSet, SplitType, WorkoutDay, WorkoutRoutine
from .user_profile import Profile, TrainingGoal, TrainingLevel
from .wellness import MindfulnessLog, MoodEntry, NutritionEntry, SleepEntry
from .workout_log import CompletedSet, WorkoutLog

__all__ = [
    "ChallengeParticipant",
    "CompletedSet",
    "CorporateChallenge",
    "CorporateWellnessProgram",
    "default_avatar",
    "Difficulty",
    "Exercise",
    "ExerciseSet",
    "ExerciseType",
    "Habit",
    "HabitCategory",
    "HabitLog",
    "MindfulnessLog",
    "MoodEntry",
    "MovementPattern",
    "MuscleGroup",
    "NutritionEntry",
    "Profile",
    "SleepEntry",
    "SplitType",
    "TrainerAvatar",
    "TrainingGoal",
    "TrainingLevel",
    "WorkoutDay",
    "WorkoutLog",
    "WorkoutRoutine",
]
