"""User profile data models."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class TrainingLevel(str, Enum):
    """Training experience level."""

    BEGINNER = "beginner"  # < 1 year consistent training
    INTERMEDIATE = "intermediate"  # 1-3 years
    ADVANCED = "advanced"  # 3+ years


class TrainingGoal(str, Enum):
    """Primary training goal."""

    STRENGTH = "strength"
    HYPERTROPHY = "hypertrophy"
    ENDURANCE = "endurance"
    POWER = "power"
    WEIGHT_LOSS = "weight_loss"
    GENERAL_FITNESS = "general_fitness"


DEFAULT_FULL_NAME = "User"


@dataclass
class Profile:
    """A user's profile row."""

    user_id: str
    full_name: str = DEFAULT_FULL_NAME
    avatar_url: str | None = None
    weight: float | None = None  # kg
    height: float | None = None  # cm
    goal: TrainingGoal | None = None
    level: TrainingLevel | None = None
    is_admin: bool = False
    id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def bmi(self) -> float | None:
        """Body mass index, when weight and height are known."""
        if not self.weight or not self.height:
            return None
        meters = self.height / 100
        return round(self.weight / (meters * meters), 1)

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "user_id": self.user_id,
            "full_name": self.full_name,
            "avatar_url": self.avatar_url,
            "weight": self.weight,
            "height": self.height,
            "goal": self.goal.value if self.goal else None,
            "level": self.level.value if self.level else None,
            "is_admin": self.is_admin,
        }

    def to_view(self) -> dict:
        """API representation."""
        return {
            "id": self.id,
            "userId": self.user_id,
            "fullName": self.full_name,
            "avatarUrl": self.avatar_url,
            "weight": self.weight,
            "height": self.height,
            "goal": self.goal.value if self.goal else None,
            "level": self.level.value if self.level else None,
            "isAdmin": self.is_admin,
            "bmi": self.bmi,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }

    @classmethod
    def from_dict(
        cls,
        data: dict,
        id: int | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ) -> "Profile":
        """Create from dictionary."""
        goal = data.get("goal")
        level = data.get("level")
        return cls(
            id=id,
            user_id=data["user_id"],
            full_name=data.get("full_name") or DEFAULT_FULL_NAME,
            avatar_url=data.get("avatar_url"),
            weight=data.get("weight"),
            height=data.get("height"),
            goal=TrainingGoal(goal) if goal else None,
            level=TrainingLevel(level) if level else None,
            is_admin=bool(data.get("is_admin", False)),
            created_at=created_at,
            updated_at=updated_at,
        )

    def get_summary(self) -> str:
        """Human-readable one-block summary."""
        summary = f"User: {self.full_name} ({self.user_id})\n"
        if self.level:
            summary += f"Level: {self.level.value}\n"
        if self.goal:
            summary += f"Goal: {self.goal.value}\n"
        if self.weight:
            summary += f"Weight: {self.weight}kg\n"
        if self.height:
            summary += f"Height: {self.height}cm\n"
        if self.bmi:
            summary += f"BMI: {self.bmi}\n"
        return summary
