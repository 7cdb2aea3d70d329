"""Exercise definitions and the built-in exercise library."""

from dataclasses import dataclass, field
from enum import Enum


class MuscleGroup(str, Enum):
    """Muscle groups targeted by exercises and workout days."""

    CHEST = "chest"
    BACK = "back"
    SHOULDERS = "shoulders"
    BICEPS = "biceps"
    TRICEPS = "triceps"
    FOREARMS = "forearms"
    QUADS = "quads"
    HAMSTRINGS = "hamstrings"
    GLUTES = "glutes"
    CALVES = "calves"
    ABS = "abs"
    TRAPS = "traps"
    LOWER_BACK = "lower_back"


class MovementPattern(str, Enum):
    """Fundamental movement patterns."""

    PUSH_HORIZONTAL = "push_horizontal"
    PUSH_VERTICAL = "push_vertical"
    PULL_HORIZONTAL = "pull_horizontal"
    PULL_VERTICAL = "pull_vertical"
    SQUAT = "squat"
    HINGE = "hinge"
    LUNGE = "lunge"
    CARRY = "carry"
    ISOLATION = "isolation"


class EquipmentType(str, Enum):
    """Equipment types for exercises."""

    BARBELL = "barbell"
    DUMBBELL = "dumbbell"
    CABLE = "cable"
    MACHINE = "machine"
    BODYWEIGHT = "bodyweight"
    EZ_BAR = "ez_bar"
    KETTLEBELL = "kettlebell"
    BANDS = "bands"


class ExerciseType(str, Enum):
    """Role of an exercise inside a workout day."""

    COMPOUND = "compound"
    ISOLATION = "isolation"
    ACCESSORY = "accessory"


# Coarse body regions used for weekly volume recommendations
MUSCLE_REGIONS: dict[str, list[MuscleGroup]] = {
    "chest": [MuscleGroup.CHEST],
    "back": [MuscleGroup.BACK, MuscleGroup.TRAPS, MuscleGroup.LOWER_BACK],
    "legs": [
        MuscleGroup.QUADS,
        MuscleGroup.HAMSTRINGS,
        MuscleGroup.GLUTES,
        MuscleGroup.CALVES,
    ],
    "shoulders": [MuscleGroup.SHOULDERS],
    "arms": [MuscleGroup.BICEPS, MuscleGroup.TRICEPS, MuscleGroup.FOREARMS],
    "core": [MuscleGroup.ABS],
}


def region_for_muscle(muscle: MuscleGroup) -> str:
    """Map a muscle group to its coarse region."""
    for region, muscles in MUSCLE_REGIONS.items():
        if muscle in muscles:
            return region
    return "core"


@dataclass
class Exercise:
    """Represents an exercise with metadata."""

    name: str
    muscle_groups: list[MuscleGroup]
    movement_pattern: MovementPattern
    equipment: list[EquipmentType]
    aliases: list[str] = field(default_factory=list)
    is_compound: bool = False  # True for multi-joint movements
    id: int | None = None

    @property
    def exercise_type(self) -> ExerciseType:
        return ExerciseType.COMPOUND if self.is_compound else ExerciseType.ISOLATION

    def targets_any(self, muscles: list[MuscleGroup]) -> bool:
        """Return True if the exercise works at least one of ``muscles``."""
        return any(mg in muscles for mg in self.muscle_groups)

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "name": self.name,
            "muscle_groups": [mg.value for mg in self.muscle_groups],
            "movement_pattern": self.movement_pattern.value,
            "equipment": [eq.value for eq in self.equipment],
            "aliases": self.aliases,
            "is_compound": self.is_compound,
        }

    def to_view(self) -> dict:
        """API representation."""
        return {
            "id": self.id,
            "name": self.name,
            "muscleGroups": [mg.value for mg in self.muscle_groups],
            "movementPattern": self.movement_pattern.value,
            "equipment": [eq.value for eq in self.equipment],
            "aliases": self.aliases,
            "isCompound": self.is_compound,
        }

    @classmethod
    def from_dict(cls, data: dict, id: int | None = None) -> "Exercise":
        """Create from dictionary."""
        return cls(
            id=id,
            name=data["name"],
            muscle_groups=[MuscleGroup(mg) for mg in data["muscle_groups"]],
            movement_pattern=MovementPattern(data["movement_pattern"]),
            equipment=[EquipmentType(eq) for eq in data["equipment"]],
            aliases=data.get("aliases", []),
            is_compound=bool(data.get("is_compound", False)),
        )


def _ex(
    name: str,
    muscles: list[MuscleGroup],
    pattern: MovementPattern,
    equipment: list[EquipmentType],
    aliases: list[str] | None = None,
    compound: bool = False,
) -> Exercise:
    return Exercise(
        name=name,
        muscle_groups=muscles,
        movement_pattern=pattern,
        equipment=equipment,
        aliases=aliases or [],
        is_compound=compound,
    )


M = MuscleGroup
P = MovementPattern
E = EquipmentType

# Built-in library seeded by ``routinize init``
COMMON_EXERCISES: list[Exercise] = [
    # Chest
    _ex("Bench Press", [M.CHEST, M.TRICEPS, M.SHOULDERS], P.PUSH_HORIZONTAL,
        [E.BARBELL], ["Flat Bench Press", "BB Bench"], compound=True),
    _ex("Incline Dumbbell Press", [M.CHEST, M.SHOULDERS, M.TRICEPS], P.PUSH_HORIZONTAL,
        [E.DUMBBELL], ["Incline DB Press"], compound=True),
    _ex("Dips", [M.CHEST, M.TRICEPS], P.PUSH_VERTICAL,
        [E.BODYWEIGHT], ["Chest Dip", "Parallel Bar Dip"], compound=True),
    _ex("Chest Fly", [M.CHEST], P.ISOLATION,
        [E.DUMBBELL], ["Dumbbell Fly", "Pec Fly"]),
    _ex("Cable Crossover", [M.CHEST], P.ISOLATION,
        [E.CABLE], ["Cable Fly"]),
    # Back
    _ex("Deadlift", [M.BACK, M.HAMSTRINGS, M.GLUTES, M.LOWER_BACK], P.HINGE,
        [E.BARBELL], ["Conventional Deadlift"], compound=True),
    _ex("Barbell Row", [M.BACK, M.BICEPS], P.PULL_HORIZONTAL,
        [E.BARBELL], ["Bent Over Row", "BB Row"], compound=True),
    _ex("Pull Up", [M.BACK, M.BICEPS], P.PULL_VERTICAL,
        [E.BODYWEIGHT], ["Pull-up", "Pullup", "Chin Up"], compound=True),
    _ex("Lat Pulldown", [M.BACK, M.BICEPS], P.PULL_VERTICAL,
        [E.CABLE], ["Pulldown", "Wide Grip Pulldown"], compound=True),
    _ex("Seated Cable Row", [M.BACK, M.BICEPS], P.PULL_HORIZONTAL,
        [E.CABLE], ["Cable Row"], compound=True),
    _ex("Straight Arm Pulldown", [M.BACK], P.ISOLATION,
        [E.CABLE], ["Lat Pushdown"]),
    _ex("Face Pull", [M.SHOULDERS, M.TRAPS], P.PULL_HORIZONTAL,
        [E.CABLE], ["Rope Face Pull"]),
    _ex("Shrug", [M.TRAPS], P.ISOLATION,
        [E.DUMBBELL], ["Dumbbell Shrug"]),
    # Shoulders
    _ex("Overhead Press", [M.SHOULDERS, M.TRICEPS], P.PUSH_VERTICAL,
        [E.BARBELL], ["Military Press", "Standing Press"], compound=True),
    _ex("Seated Dumbbell Press", [M.SHOULDERS, M.TRICEPS], P.PUSH_VERTICAL,
        [E.DUMBBELL], ["DB Shoulder Press"], compound=True),
    _ex("Lateral Raise", [M.SHOULDERS], P.ISOLATION,
        [E.DUMBBELL], ["Side Raise", "Side Lateral"]),
    _ex("Rear Delt Fly", [M.SHOULDERS], P.ISOLATION,
        [E.DUMBBELL], ["Reverse Fly"]),
    # Arms
    _ex("Barbell Curl", [M.BICEPS, M.FOREARMS], P.ISOLATION,
        [E.BARBELL], ["BB Curl", "Standing Curl"]),
    _ex("Hammer Curl", [M.BICEPS, M.FOREARMS], P.ISOLATION,
        [E.DUMBBELL], ["DB Hammer Curl"]),
    _ex("Preacher Curl", [M.BICEPS], P.ISOLATION,
        [E.EZ_BAR], ["EZ Bar Preacher Curl"]),
    _ex("Tricep Pushdown", [M.TRICEPS], P.ISOLATION,
        [E.CABLE], ["Cable Pushdown", "Rope Pushdown"]),
    _ex("Overhead Tricep Extension", [M.TRICEPS], P.ISOLATION,
        [E.DUMBBELL], ["Overhead Extension"]),
    _ex("Close Grip Bench Press", [M.TRICEPS, M.CHEST], P.PUSH_HORIZONTAL,
        [E.BARBELL], ["CGBP"], compound=True),
    _ex("Wrist Curl", [M.FOREARMS], P.ISOLATION,
        [E.DUMBBELL], ["Forearm Curl"]),
    # Legs
    _ex("Squat", [M.QUADS, M.GLUTES, M.HAMSTRINGS], P.SQUAT,
        [E.BARBELL], ["Back Squat", "BB Squat"], compound=True),
    _ex("Leg Press", [M.QUADS, M.GLUTES], P.SQUAT,
        [E.MACHINE], ["Machine Leg Press"], compound=True),
    _ex("Romanian Deadlift", [M.HAMSTRINGS, M.GLUTES, M.LOWER_BACK], P.HINGE,
        [E.BARBELL], ["RDL", "Stiff Leg Deadlift"], compound=True),
    _ex("Bulgarian Split Squat", [M.QUADS, M.GLUTES], P.LUNGE,
        [E.DUMBBELL], ["BSS", "Split Squat"], compound=True),
    _ex("Hip Thrust", [M.GLUTES, M.HAMSTRINGS], P.HINGE,
        [E.BARBELL], ["Barbell Hip Thrust", "Glute Bridge"], compound=True),
    _ex("Leg Extension", [M.QUADS], P.ISOLATION,
        [E.MACHINE], ["Quad Extension"]),
    _ex("Leg Curl", [M.HAMSTRINGS], P.ISOLATION,
        [E.MACHINE], ["Lying Leg Curl", "Hamstring Curl"]),
    _ex("Standing Calf Raise", [M.CALVES], P.ISOLATION,
        [E.MACHINE], ["Calf Raise"]),
    _ex("Seated Calf Raise", [M.CALVES], P.ISOLATION,
        [E.MACHINE], []),
    _ex("Hip Abduction", [M.GLUTES], P.ISOLATION,
        [E.MACHINE], ["Abductor Machine"]),
    # Core
    _ex("Plank", [M.ABS], P.ISOLATION, [E.BODYWEIGHT], ["Front Plank"]),
    _ex("Cable Crunch", [M.ABS], P.ISOLATION, [E.CABLE], ["Kneeling Cable Crunch"]),
]



def get_exercise_by_name(name: str) -> Exercise | None:
    """Look up a built-in exercise by exact name or alias (case-insensitive)."""
    lowered = name.lower()
    for exercise in COMMON_EXERCISES:
        if exercise.name.lower() == lowered:
            return exercise
        if any(alias.lower() == lowered for alias in exercise.aliases):
            return exercise
    return None


def get_exercises_for_muscle(muscle: MuscleGroup) -> list[Exercise]:
    """Built-in exercises working the given muscle group."""
    return [ex for ex in COMMON_EXERCISES if muscle in ex.muscle_groups]
