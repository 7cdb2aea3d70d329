"""Workout log model."""

from dataclasses import dataclass, field
from datetime import date, datetime


@dataclass
class CompletedSet:
    """A set the user actually performed."""

    exercise_name: str
    reps: int
    weight: float = 0.0  # kg
    rir: int | None = None
    exercise_id: int | None = None

    @property
    def volume(self) -> float:
        return self.reps * self.weight


@dataclass
class WorkoutLog:
    """A completed workout session."""

    user_id: str
    date: date
    completed_sets: list[CompletedSet] = field(default_factory=list)
    routine_id: str | None = None
    day_id: str | None = None
    duration: int = 0  # minutes
    notes: str = ""
    perceived_effort: int | None = None  # 1-10
    id: int | None = None
    created_at: datetime | None = None

    @property
    def total_volume(self) -> float:
        """Sum of reps x weight across all sets."""
        return sum(s.volume for s in self.completed_sets)

    @property
    def total_sets(self) -> int:
        return len(self.completed_sets)

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "user_id": self.user_id,
            "routine_id": self.routine_id,
            "day_id": self.day_id,
            "date": self.date.isoformat(),
            "duration": self.duration,
            "completed_sets": [
                {
                    "exercise_id": s.exercise_id,
                    "exercise_name": s.exercise_name,
                    "reps": s.reps,
                    "weight": s.weight,
                    "rir": s.rir,
                }
                for s in self.completed_sets
            ],
            "notes": self.notes,
            "perceived_effort": self.perceived_effort,
        }

    def to_view(self) -> dict:
        return {
            "id": self.id,
            "userId": self.user_id,
            "routineId": self.routine_id,
            "dayId": self.day_id,
            "date": self.date.isoformat(),
            "duration": self.duration,
            "completedSets": [
                {
                    "exerciseId": s.exercise_id,
                    "exerciseName": s.exercise_name,
                    "reps": s.reps,
                    "weight": s.weight,
                    "rir": s.rir,
                }
                for s in self.completed_sets
            ],
            "notes": self.notes,
            "perceivedEffort": self.perceived_effort,
            "totalVolume": self.total_volume,
            "totalSets": self.total_sets,
        }

    @classmethod
    def from_dict(
        cls,
        data: dict,
        id: int | None = None,
        created_at: datetime | None = None,
    ) -> "WorkoutLog":
        """Create from dictionary."""
        return cls(
            id=id,
            user_id=data["user_id"],
            routine_id=data.get("routine_id"),
            day_id=data.get("day_id"),
            date=date.fromisoformat(data["date"]),
            duration=data.get("duration", 0),
            completed_sets=[
                CompletedSet(
                    exercise_id=s.get("exercise_id"),
                    exercise_name=s["exercise_name"],
                    reps=s["reps"],
                    weight=s.get("weight", 0.0),
                    rir=s.get("rir"),
                )
                for s in data.get("completed_sets", [])
            ],
            notes=data.get("notes", ""),
            perceived_effort=data.get("perceived_effort"),
            created_at=created_at,
        )
