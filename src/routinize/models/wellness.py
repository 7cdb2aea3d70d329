"""Mood, sleep, mindfulness and nutrition entries."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum


class MealType(str, Enum):
    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


class MindfulnessType(str, Enum):
    MEDITATION = "meditation"
    BREATHING = "breathing"
    BODY_SCAN = "body_scan"
    JOURNALING = "journaling"


@dataclass
class MoodEntry:
    """Daily mood check-in."""

    user_id: str
    date: date
    mood_level: int = 3  # 1-5
    stress_level: int = 50  # 0-100
    sleep_hours: float | None = None
    notes: str = ""
    id: int | None = None
    created_at: datetime | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "user_id": self.user_id,
            "date": self.date.isoformat(),
            "mood_level": self.mood_level,
            "stress_level": self.stress_level,
            "sleep_hours": self.sleep_hours,
            "notes": self.notes,
        }

    def to_view(self) -> dict:
        return {
            "id": self.id,
            "userId": self.user_id,
            "date": self.date.isoformat(),
            "moodLevel": self.mood_level,
            "stressLevel": self.stress_level,
            "sleepHours": self.sleep_hours,
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: dict, id: int | None = None) -> "MoodEntry":
        """Create from dictionary."""
        return cls(
            id=id,
            user_id=data["user_id"],
            date=date.fromisoformat(data["date"]),
            mood_level=data.get("mood_level", 3),
            stress_level=data.get("stress_level", 50),
            sleep_hours=data.get("sleep_hours"),
            notes=data.get("notes", ""),
        )


@dataclass
class SleepEntry:
    """A night of sleep.

    ``start_time`` and ``end_time`` are "HH:MM" clock times; ``date`` is the
    morning the user woke up.
    """

    user_id: str
    date: date
    duration: int  # minutes
    start_time: str | None = None
    end_time: str | None = None
    quality: int = 50  # 0-100
    deep_sleep: int | None = None  # minutes
    rem_sleep: int | None = None
    light_sleep: int | None = None
    hrv: float | None = None
    resting_heart_rate: float | None = None
    notes: str = ""
    id: int | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "user_id": self.user_id,
            "date": self.date.isoformat(),
            "start_time": self.start_time,
            "end_time": self.end_time,
            "duration": self.duration,
            "quality": self.quality,
            "deep_sleep": self.deep_sleep,
            "rem_sleep": self.rem_sleep,
            "light_sleep": self.light_sleep,
            "hrv": self.hrv,
            "resting_heart_rate": self.resting_heart_rate,
            "notes": self.notes,
        }

    def to_view(self) -> dict:
        return {
            "id": self.id,
            "userId": self.user_id,
            "date": self.date.isoformat(),
            "startTime": self.start_time,
            "endTime": self.end_time,
            "duration": self.duration,
            "quality": self.quality,
            "deepSleep": self.deep_sleep,
            "remSleep": self.rem_sleep,
            "lightSleep": self.light_sleep,
            "hrv": self.hrv,
            "restingHeartRate": self.resting_heart_rate,
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: dict, id: int | None = None) -> "SleepEntry":
        """Create from dictionary."""
        return cls(
            id=id,
            user_id=data["user_id"],
            date=date.fromisoformat(data["date"]),
            start_time=data.get("start_time"),
            end_time=data.get("end_time"),
            duration=data.get("duration", 0),
            quality=data.get("quality", 50),
            deep_sleep=data.get("deep_sleep"),
            rem_sleep=data.get("rem_sleep"),
            light_sleep=data.get("light_sleep"),
            hrv=data.get("hrv"),
            resting_heart_rate=data.get("resting_heart_rate"),
            notes=data.get("notes", ""),
        )


@dataclass
class MindfulnessLog:
    """A mindfulness or breathing session."""

    user_id: str
    date: date
    duration: int  # minutes
    exercise_type: MindfulnessType = MindfulnessType.MEDITATION
    notes: str = ""
    id: int | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "user_id": self.user_id,
            "date": self.date.isoformat(),
            "exercise_type": self.exercise_type.value,
            "duration": self.duration,
            "notes": self.notes,
        }

    def to_view(self) -> dict:
        return {
            "id": self.id,
            "userId": self.user_id,
            "date": self.date.isoformat(),
            "exerciseType": self.exercise_type.value,
            "duration": self.duration,
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: dict, id: int | None = None) -> "MindfulnessLog":
        """Create from dictionary."""
        return cls(
            id=id,
            user_id=data["user_id"],
            date=date.fromisoformat(data["date"]),
            exercise_type=MindfulnessType(data.get("exercise_type", "meditation")),
            duration=data.get("duration", 0),
            notes=data.get("notes", ""),
        )


@dataclass
class NutritionEntry:
    """A logged food item."""

    user_id: str
    date: date
    food_name: str
    meal_type: MealType = MealType.SNACK
    calories: float = 0.0
    protein: float = 0.0  # grams
    carbs: float = 0.0
    fat: float = 0.0
    notes: str = ""
    id: int | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "user_id": self.user_id,
            "date": self.date.isoformat(),
            "meal_type": self.meal_type.value,
            "food_name": self.food_name,
            "calories": self.calories,
            "protein": self.protein,
            "carbs": self.carbs,
            "fat": self.fat,
            "notes": self.notes,
        }

    def to_view(self) -> dict:
        return {
            "id": self.id,
            "userId": self.user_id,
            "date": self.date.isoformat(),
            "mealType": self.meal_type.value,
            "foodName": self.food_name,
            "calories": self.calories,
            "protein": self.protein,
            "carbs": self.carbs,
            "fat": self.fat,
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: dict, id: int | None = None) -> "NutritionEntry":
        """Create from dictionary."""
        return cls(
            id=id,
            user_id=data["user_id"],
            date=date.fromisoformat(data["date"]),
            meal_type=MealType(data.get("meal_type", "snack")),
            food_name=data["food_name"],
            calories=data.get("calories", 0.0),
            protein=data.get("protein", 0.0),
            carbs=data.get("carbs", 0.0),
            fat=data.get("fat", 0.0),
            notes=data.get("notes", ""),
        )
