"""Workout routine data models."""

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum

from .user_profile import TrainingGoal, TrainingLevel


class SplitType(str, Enum):
    """How training days are divided across the week."""

    PPL = "ppl"
    UPPER_LOWER = "upper_lower"
    FULL_BODY = "full_body"
    BODY_PART = "body_part"
    PUSH_PULL = "push_pull"
    CUSTOM = "custom"


class Difficulty(str, Enum):
    """Perceived difficulty of a workout day."""

    EASY = "easy"
    MODERATE = "moderate"
    HARD = "hard"


def new_id() -> str:
    """Generate a record id for routines, days and sets."""
    return str(uuid.uuid4())


@dataclass
class ExerciseSet:
    """A single prescribed set within a workout day."""

    exercise_name: str
    target_reps: int
    target_rir: int
    rest_time: int  # seconds
    exercise_id: int | None = None
    alternative_exercise_id: int | None = None
    is_warmup: bool = False
    is_drop_set: bool = False
    is_rest_pause: bool = False
    is_mechanical_set: bool = False
    is_partial_reps: bool = False
    superset_with: str | None = None  # Exercise name
    pre_fatigue_with: str | None = None  # Exercise name
    notes: str = ""
    id: str = field(default_factory=new_id)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "exercise_id": self.exercise_id,
            "exercise_name": self.exercise_name,
            "alternative_exercise_id": self.alternative_exercise_id,
            "target_reps": self.target_reps,
            "target_rir": self.target_rir,
            "rest_time": self.rest_time,
            "is_warmup": self.is_warmup,
            "is_drop_set": self.is_drop_set,
            "is_rest_pause": self.is_rest_pause,
            "is_mechanical_set": self.is_mechanical_set,
            "is_partial_reps": self.is_partial_reps,
            "superset_with": self.superset_with,
            "pre_fatigue_with": self.pre_fatigue_with,
            "notes": self.notes,
        }

    def to_view(self) -> dict:
        return {
            "id": self.id,
            "exerciseId": self.exercise_id,
            "exerciseName": self.exercise_name,
            "alternativeExerciseId": self.alternative_exercise_id,
            "targetReps": self.target_reps,
            "targetRir": self.target_rir,
            "restTime": self.rest_time,
            "isWarmup": self.is_warmup,
            "isDropSet": self.is_drop_set,
            "isRestPause": self.is_rest_pause,
            "isMechanicalSet": self.is_mechanical_set,
            "isPartialReps": self.is_partial_reps,
            "supersetWith": self.superset_with,
            "preFatigueWith": self.pre_fatigue_with,
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ExerciseSet":
        """Create from dictionary."""
        return cls(
            id=data.get("id") or new_id(),
            exercise_id=data.get("exercise_id"),
            exercise_name=data["exercise_name"],
            alternative_exercise_id=data.get("alternative_exercise_id"),
            target_reps=data["target_reps"],
            target_rir=data["target_rir"],
            rest_time=data["rest_time"],
            is_warmup=data.get("is_warmup", False),
            is_drop_set=data.get("is_drop_set", False),
            is_rest_pause=data.get("is_rest_pause", False),
            is_mechanical_set=data.get("is_mechanical_set", False),
            is_partial_reps=data.get("is_partial_reps", False),
            superset_with=data.get("superset_with"),
            pre_fatigue_with=data.get("pre_fatigue_with"),
            notes=data.get("notes", ""),
        )


@dataclass
class WorkoutDay:
    """A single training day of a routine."""

    name: str
    exercise_sets: list[ExerciseSet] = field(default_factory=list)
    description: str = ""
    target_muscle_groups: list[str] = field(default_factory=list)
    difficulty: Difficulty = Difficulty.MODERATE
    estimated_duration: int = 0  # minutes
    id: str = field(default_factory=new_id)

    @property
    def exercise_names(self) -> list[str]:
        """Distinct exercise names in prescription order."""
        names: list[str] = []
        for s in self.exercise_sets:
            if s.exercise_name not in names:
                names.append(s.exercise_name)
        return names

    def sets_for(self, exercise_name: str) -> list[ExerciseSet]:
        return [s for s in self.exercise_sets if s.exercise_name == exercise_name]

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "exercise_sets": [s.to_dict() for s in self.exercise_sets],
            "target_muscle_groups": self.target_muscle_groups,
            "difficulty": self.difficulty.value,
            "estimated_duration": self.estimated_duration,
        }

    def to_view(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "exerciseSets": [s.to_view() for s in self.exercise_sets],
            "targetMuscleGroups": self.target_muscle_groups,
            "difficulty": self.difficulty.value,
            "estimatedDuration": self.estimated_duration,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "WorkoutDay":
        """Create from dictionary."""
        return cls(
            id=data.get("id") or new_id(),
            name=data["name"],
            description=data.get("description", ""),
            exercise_sets=[ExerciseSet.from_dict(s) for s in data.get("exercise_sets", [])],
            target_muscle_groups=data.get("target_muscle_groups", []),
            difficulty=Difficulty(data.get("difficulty", "moderate")),
            estimated_duration=data.get("estimated_duration", 0),
        )


@dataclass
class WorkoutRoutine:
    """A complete workout routine owned by one user."""

    user_id: str
    name: str
    days: list[WorkoutDay] = field(default_factory=list)
    description: str = ""
    level: TrainingLevel = TrainingLevel.INTERMEDIATE
    goal: TrainingGoal = TrainingGoal.HYPERTROPHY
    split: SplitType = SplitType.CUSTOM
    frequency: int = 0  # Training days per week
    is_active: bool = True
    start_date: date | None = None
    end_date: date | None = None
    includes_deload: bool = False
    deload_frequency: int | None = None  # Weeks between deloads
    deload_strategy: str | None = None
    source: str = ""
    tags: list[str] = field(default_factory=list)
    id: str = field(default_factory=new_id)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "name": self.name,
            "description": self.description,
            "level": self.level.value,
            "goal": self.goal.value,
            "split": self.split.value,
            "frequency": self.frequency,
            "days": [day.to_dict() for day in self.days],
            "is_active": self.is_active,
            "start_date": self.start_date.isoformat() if self.start_date else None,
            "end_date": self.end_date.isoformat() if self.end_date else None,
            "includes_deload": self.includes_deload,
            "deload_frequency": self.deload_frequency,
            "deload_strategy": self.deload_strategy,
            "source": self.source,
            "tags": self.tags,
        }

    def to_view(self) -> dict:
        """API representation."""
        return {
            "id": self.id,
            "userId": self.user_id,
            "name": self.name,
            "description": self.description,
            "level": self.level.value,
            "goal": self.goal.value,
            "split": self.split.value,
            "frequency": self.frequency,
            "days": [day.to_view() for day in self.days],
            "isActive": self.is_active,
            "startDate": self.start_date.isoformat() if self.start_date else None,
            "endDate": self.end_date.isoformat() if self.end_date else None,
            "includesDeload": self.includes_deload,
            "deloadFrequency": self.deload_frequency,
            "deloadStrategy": self.deload_strategy,
            "source": self.source,
            "tags": self.tags,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }

    @classmethod
    def from_dict(
        cls,
        data: dict,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ) -> "WorkoutRoutine":
        """Create from dictionary."""
        start = data.get("start_date")
        end = data.get("end_date")
        return cls(
            id=data.get("id") or new_id(),
            user_id=data["user_id"],
            name=data["name"],
            description=data.get("description", ""),
            level=TrainingLevel(data.get("level", "intermediate")),
            goal=TrainingGoal(data.get("goal", "hypertrophy")),
            split=SplitType(data.get("split", "custom")),
            frequency=data.get("frequency", 0),
            days=[WorkoutDay.from_dict(d) for d in data.get("days", [])],
            is_active=bool(data.get("is_active", True)),
            start_date=date.fromisoformat(start) if start else None,
            end_date=date.fromisoformat(end) if end else None,
            includes_deload=bool(data.get("includes_deload", False)),
            deload_frequency=data.get("deload_frequency"),
            deload_strategy=data.get("deload_strategy"),
            source=data.get("source", ""),
            tags=data.get("tags", []),
            created_at=created_at,
            updated_at=updated_at,
        )

    @property
    def total_sets(self) -> int:
        return sum(len(day.exercise_sets) for day in self.days)

    @property
    def duration_weeks(self) -> int | None:
        if not self.start_date or not self.end_date:
            return None
        return (self.end_date - self.start_date).days // 7

    def get_day(self, day_id: str) -> WorkoutDay | None:
        for day in self.days:
            if day.id == day_id:
                return day
        return None
