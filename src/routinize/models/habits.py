"""Habit tracking models."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum

WEEKDAY_NAMES = [
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
]


class HabitCategory(str, Enum):
    """Broad habit categories."""

    HEALTH = "health"
    FITNESS = "fitness"
    NUTRITION = "nutrition"
    SLEEP = "sleep"
    MINDFULNESS = "mindfulness"
    PRODUCTIVITY = "productivity"


@dataclass
class Habit:
    """A recurring habit and its streak state.

    ``frequency`` holds ``"daily"``, ``"weekdays"`` and/or weekday names
    (``"monday"`` .. ``"sunday"``).
    """

    user_id: str
    title: str
    description: str = ""
    category: HabitCategory = HabitCategory.HEALTH
    frequency: list[str] = field(default_factory=lambda: ["daily"])
    time_of_day: str | None = None  # "HH:MM"
    duration: int = 0  # minutes
    streak: int = 0
    longest_streak: int = 0
    last_completed: date | None = None
    is_active: bool = True
    id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def is_scheduled(self, day: date) -> bool:
        """Return True if the habit is due on ``day``."""
        tokens = {f.lower() for f in self.frequency}
        if not tokens or "daily" in tokens:
            return True
        if "weekdays" in tokens and day.weekday() < 5:
            return True
        return WEEKDAY_NAMES[day.weekday()] in tokens

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "user_id": self.user_id,
            "title": self.title,
            "description": self.description,
            "category": self.category.value,
            "frequency": self.frequency,
            "time_of_day": self.time_of_day,
            "duration": self.duration,
            "streak": self.streak,
            "longest_streak": self.longest_streak,
            "last_completed": (
                self.last_completed.isoformat() if self.last_completed else None
            ),
            "is_active": self.is_active,
        }

    def to_view(self) -> dict:
        return {
            "id": self.id,
            "userId": self.user_id,
            "title": self.title,
            "description": self.description,
            "category": self.category.value,
            "frequency": self.frequency,
            "timeOfDay": self.time_of_day,
            "duration": self.duration,
            "streak": self.streak,
            "longestStreak": self.longest_streak,
            "lastCompleted": (
                self.last_completed.isoformat() if self.last_completed else None
            ),
            "isActive": self.is_active,
        }

    @classmethod
    def from_dict(
        cls,
        data: dict,
        id: int | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ) -> "Habit":
        """Create from dictionary."""
        last = data.get("last_completed")
        return cls(
            id=id,
            user_id=data["user_id"],
            title=data["title"],
            description=data.get("description", ""),
            category=HabitCategory(data.get("category", "health")),
            frequency=data.get("frequency") or ["daily"],
            time_of_day=data.get("time_of_day"),
            duration=data.get("duration", 0),
            streak=data.get("streak", 0),
            longest_streak=data.get("longest_streak", 0),
            last_completed=date.fromisoformat(last) if last else None,
            is_active=bool(data.get("is_active", True)),
            created_at=created_at,
            updated_at=updated_at,
        )


@dataclass
class HabitLog:
    """One completion of a habit on a calendar day."""

    habit_id: int
    user_id: str
    completed_on: date
    id: int | None = None

    def to_view(self) -> dict:
        return {
            "id": self.id,
            "habitId": self.habit_id,
            "userId": self.user_id,
            "completedOn": self.completed_on.isoformat(),
        }
