"""Gamified trainer avatar model."""

import copy
from dataclasses import dataclass, field
from datetime import datetime

PHRASE_CATEGORIES = ("greeting", "encouragement", "milestone", "workout")

EXPERIENCE_PER_LEVEL = 100

# Accessory -> minimum avatar level required to wear it
ACCESSORY_UNLOCK_LEVELS: dict[str, int] = {
    "headband": 1,
    "wristbands": 2,
    "sunglasses": 3,
    "cap": 4,
    "lifting_belt": 5,
    "headphones": 6,
    "gold_chain": 8,
    "champion_medal": 10,
}

DEFAULT_CUSTOMIZATION: dict = {
    "body_type": "athletic",
    "hair_style": "short",
    "hair_color": "brown",
    "skin_tone": "medium",
    "facial_features": "neutral",
    "outfit": "athletic",
    "accessories": [],
}

DEFAULT_PHRASES: dict[str, list[str]] = {
    "greeting": [
        "Hi! I'm your personal trainer. Ready to train?",
        "Welcome back! Ready to sweat?",
        "It's a great day to train. Let's go!",
    ],
    "encouragement": [
        "Keep it up! You're doing great.",
        "A little more, you can do it!",
        "Remember to breathe and keep good form.",
        "You're outdoing yourself today!",
    ],
    "milestone": [
        "Congratulations on reaching this milestone!",
        "Impressive progress! Keep going.",
        "You've come a long way. I'm proud of you!",
    ],
    "workout": [
        "Keep tension on the target muscles.",
        "Control the movement, don't let gravity do the work.",
        "Focus on the mind-muscle connection.",
        "Keep good posture throughout the exercise.",
    ],
}


@dataclass
class TrainerAvatar:
    """A user's virtual coach."""

    user_id: str
    name: str = "Coach"
    personality: str = "motivational"
    specialization: str = "general"
    experience: int = 0
    customization: dict = field(default_factory=lambda: copy.deepcopy(DEFAULT_CUSTOMIZATION))
    phrases: dict[str, list[str]] = field(default_factory=lambda: copy.deepcopy(DEFAULT_PHRASES))
    is_default: bool = False
    updated_at: datetime | None = None

    @property
    def level(self) -> int:
        """Level 1 at zero experience, +1 every 100 points."""
        return 1 + max(self.experience, 0) // EXPERIENCE_PER_LEVEL

    @property
    def unlocked_accessories(self) -> list[str]:
        return [
            name
            for name, required in ACCESSORY_UNLOCK_LEVELS.items()
            if required <= self.level
        ]

    def to_dict(self) -> dict:
        """Convert to the JSON document stored in ``avatar_data``."""
        return {
            "name": self.name,
            "personality": self.personality,
            "specialization": self.specialization,
            "experience": self.experience,
            "customization": self.customization,
            "phrases": self.phrases,
        }

    def to_view(self) -> dict:
        return {
            "userId": self.user_id,
            "name": self.name,
            "personality": self.personality,
            "specialization": self.specialization,
            "experience": self.experience,
            "level": self.level,
            "customization": self.customization,
            "phrases": self.phrases,
            "unlockedAccessories": self.unlocked_accessories,
            "isDefault": self.is_default,
        }

    @classmethod
    def from_dict(
        cls, user_id: str, data: dict, updated_at: datetime | None = None
    ) -> "TrainerAvatar":
        """Create from a stored ``avatar_data`` document.

        Missing keys fall back to the default avatar's values.
        """
        customization = copy.deepcopy(DEFAULT_CUSTOMIZATION)
        customization.update(data.get("customization") or {})

        phrases = copy.deepcopy(DEFAULT_PHRASES)
        for category, items in (data.get("phrases") or {}).items():
            if category in PHRASE_CATEGORIES and isinstance(items, list):
                phrases[category] = items

        return cls(
            user_id=user_id,
            name=data.get("name", "Coach"),
            personality=data.get("personality", "motivational"),
            specialization=data.get("specialization", "general"),
            experience=data.get("experience", 0),
            customization=customization,
            phrases=phrases,
            updated_at=updated_at,
        )


def default_avatar(user_id: str) -> TrainerAvatar:
    """The avatar every user starts with."""
    return TrainerAvatar(user_id=user_id, is_default=True)
