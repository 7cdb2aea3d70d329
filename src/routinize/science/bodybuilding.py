"""Training science tables: rest, volume, deloads, techniques and variants.

Everything here is static reference data plus small lookup helpers. The
routine generator combines these tables; nothing in this module touches
storage.
"""

import re
from dataclasses import dataclass, field
from enum import Enum

from ..models.exercises import ExerciseType
from ..models.user_profile import TrainingGoal, TrainingLevel

G = TrainingGoal
T = ExerciseType


@dataclass(frozen=True)
class VolumeRange:
    """Weekly set and frequency recommendation for one body region."""

    region: str
    sets_min: int
    sets_optimal: int
    sets_max: int
    freq_min: int
    freq_optimal: int
    freq_max: int


def _volume(region: str, sets: tuple[int, int, int], freq: tuple[int, int, int]) -> VolumeRange:
    return VolumeRange(region, *sets, *freq)


OPTIMAL_VOLUME_BY_LEVEL: dict[TrainingLevel, list[VolumeRange]] = {
    TrainingLevel.BEGINNER: [
        _volume("chest", (8, 10, 12), (1, 2, 3)),
        _volume("back", (8, 10, 12), (1, 2, 3)),
        _volume("legs", (8, 10, 12), (1, 2, 3)),
        _volume("shoulders", (6, 8, 10), (1, 2, 3)),
        _volume("arms", (6, 8, 10), (1, 2, 3)),
        _volume("core", (4, 6, 8), (1, 2, 3)),
    ],
    TrainingLevel.INTERMEDIATE: [
        _volume("chest", (10, 14, 18), (2, 2, 3)),
        _volume("back", (10, 14, 18), (2, 2, 3)),
        _volume("legs", (12, 16, 20), (2, 2, 3)),
        _volume("shoulders", (8, 12, 16), (2, 2, 3)),
        _volume("arms", (8, 12, 16), (2, 2, 3)),
        _volume("core", (6, 8, 12), (2, 2, 3)),
    ],
    TrainingLevel.ADVANCED: [
        _volume("chest", (12, 18, 22), (2, 3, 4)),
        _volume("back", (14, 18, 22), (2, 3, 4)),
        _volume("legs", (14, 18, 22), (2, 3, 4)),
        _volume("shoulders", (10, 14, 18), (2, 3, 4)),
        _volume("arms", (10, 14, 18), (2, 3, 4)),
        _volume("core", (8, 10, 14), (2, 3, 4)),
    ],
}

# Goal -> multiplier applied to both weekly sets and frequency
VOLUME_GOAL_MULTIPLIERS: dict[TrainingGoal, float] = {
    G.STRENGTH: 0.8,
    G.HYPERTROPHY: 1.0,
    G.ENDURANCE: 1.2,
    G.POWER: 0.7,
    G.WEIGHT_LOSS: 1.1,
}

DEFAULT_VOLUME = {"sets_per_week": 10, "frequency": 2}


def get_optimal_volume(region: str, level: TrainingLevel, goal: TrainingGoal) -> dict:
    """Recommended weekly sets and sessions for a body region.

    Args:
        region: One of chest, back, legs, shoulders, arms, core
        level: Training level
        goal: Training goal

    Returns:
        ``{"sets_per_week": int, "frequency": int}``; 10 sets twice a week
        when the region is unknown.
    """
    config = next(
        (v for v in OPTIMAL_VOLUME_BY_LEVEL[level] if v.region == region), None
    )
    if config is None:
        return dict(DEFAULT_VOLUME)

    multiplier = VOLUME_GOAL_MULTIPLIERS.get(goal, 1.0)
    return {
        "sets_per_week": round(config.sets_optimal * multiplier),
        "frequency": min(round(config.freq_optimal * multiplier), config.freq_max),
    }


# (exercise type, goal) -> rest between sets in seconds
REST_PERIODS: dict[tuple[ExerciseType, TrainingGoal], int] = {
    (T.COMPOUND, G.STRENGTH): 180,
    (T.COMPOUND, G.HYPERTROPHY): 120,
    (T.COMPOUND, G.ENDURANCE): 60,
    (T.COMPOUND, G.POWER): 180,
    (T.COMPOUND, G.WEIGHT_LOSS): 45,
    (T.ISOLATION, G.STRENGTH): 120,
    (T.ISOLATION, G.HYPERTROPHY): 90,
    (T.ISOLATION, G.ENDURANCE): 45,
    (T.ISOLATION, G.POWER): 120,
    (T.ISOLATION, G.WEIGHT_LOSS): 30,
    (T.ACCESSORY, G.STRENGTH): 90,
    (T.ACCESSORY, G.HYPERTROPHY): 60,
    (T.ACCESSORY, G.ENDURANCE): 30,
    (T.ACCESSORY, G.POWER): 90,
    (T.ACCESSORY, G.WEIGHT_LOSS): 20,
}

DEFAULT_REST_SECONDS = 60


def get_recommended_rest(exercise_type: ExerciseType, goal: TrainingGoal) -> int:
    """Rest between sets in seconds."""
    return REST_PERIODS.get((exercise_type, goal), DEFAULT_REST_SECONDS)


@dataclass(frozen=True)
class SetPrescription:
    sets: int
    reps: int
    rir: int


# goal -> (compound, isolation) prescription when periodization is off
BASIC_PRESCRIPTIONS: dict[TrainingGoal, tuple[SetPrescription, SetPrescription]] = {
    G.STRENGTH: (SetPrescription(5, 5, 1), SetPrescription(3, 8, 2)),
    G.HYPERTROPHY: (SetPrescription(4, 8, 2), SetPrescription(3, 12, 2)),
    G.ENDURANCE: (SetPrescription(3, 15, 3), SetPrescription(3, 20, 3)),
    G.POWER: (SetPrescription(5, 3, 1), SetPrescription(3, 6, 2)),
    G.WEIGHT_LOSS: (SetPrescription(3, 12, 1), SetPrescription(3, 15, 1)),
}

DEFAULT_PRESCRIPTION = SetPrescription(3, 10, 2)


def get_sets_and_reps(goal: TrainingGoal, exercise_type: ExerciseType) -> SetPrescription:
    """Basic sets x reps @ RIR for a goal."""
    pair = BASIC_PRESCRIPTIONS.get(goal)
    if pair is None:
        return DEFAULT_PRESCRIPTION
    return pair[0] if exercise_type == ExerciseType.COMPOUND else pair[1]


class DeloadType(str, Enum):
    VOLUME = "volume"
    INTENSITY = "intensity"
    BOTH = "both"
    FREQUENCY = "frequency"


@dataclass(frozen=True)
class DeloadStrategy:
    """A deload week recipe. Reductions are percentages, frequency in days."""

    type: DeloadType
    volume_reduction: int
    intensity_reduction: int
    frequency_reduction: int
    duration_days: int = 7

    def to_dict(self) -> dict:
        return {
            "type": self.type.value,
            "volume_reduction": self.volume_reduction,
            "intensity_reduction": self.intensity_reduction,
            "frequency_reduction": self.frequency_reduction,
            "duration_days": self.duration_days,
        }


DELOAD_STRATEGIES: dict[DeloadType, DeloadStrategy] = {
    DeloadType.VOLUME: DeloadStrategy(DeloadType.VOLUME, 40, 0, 0),
    DeloadType.INTENSITY: DeloadStrategy(DeloadType.INTENSITY, 0, 20, 0),
    DeloadType.BOTH: DeloadStrategy(DeloadType.BOTH, 30, 15, 0),
    DeloadType.FREQUENCY: DeloadStrategy(DeloadType.FREQUENCY, 0, 0, 1),
}


def get_recommended_deload(level: TrainingLevel, goal: TrainingGoal) -> DeloadStrategy:
    """Pick a deload strategy for a level and goal."""
    if level == TrainingLevel.BEGINNER:
        return DELOAD_STRATEGIES[DeloadType.VOLUME]
    if goal in (G.STRENGTH, G.POWER):
        return DELOAD_STRATEGIES[DeloadType.INTENSITY]
    if level == TrainingLevel.ADVANCED and goal == G.HYPERTROPHY:
        return DELOAD_STRATEGIES[DeloadType.BOTH]
    return DELOAD_STRATEGIES[DeloadType.VOLUME]


@dataclass(frozen=True)
class AdvancedTechnique:
    """An intensity technique and where it applies."""

    name: str
    description: str
    goals: tuple[TrainingGoal, ...]
    exercise_types: tuple[ExerciseType, ...]
    fatigue_impact: int  # 1-10
    recovery_requirement: int  # 1-10

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "goals": [g.value for g in self.goals],
            "exercise_types": [t.value for t in self.exercise_types],
            "fatigue_impact": self.fatigue_impact,
            "recovery_requirement": self.recovery_requirement,
        }


DROP_SETS = "Drop Sets"
SUPER_SETS = "Super Sets"
REST_PAUSE = "Rest-Pause"
PRE_FATIGUE = "Pre-fatigue"
MECHANICAL_SETS = "Mechanical Sets"
PARTIAL_REPS = "Partial Reps"

ADVANCED_TECHNIQUES: list[AdvancedTechnique] = [
    AdvancedTechnique(
        DROP_SETS,
        "Take a set to failure, then reduce the weight and continue immediately",
        (G.HYPERTROPHY, G.ENDURANCE), (T.ISOLATION, T.ACCESSORY), 8, 7,
    ),
    AdvancedTechnique(
        SUPER_SETS,
        "Two exercises back to back without rest",
        (G.HYPERTROPHY, G.ENDURANCE, G.WEIGHT_LOSS), (T.ISOLATION, T.ACCESSORY), 6, 5,
    ),
    AdvancedTechnique(
        REST_PAUSE,
        "Go to failure, rest 10-15 seconds and continue",
        (G.STRENGTH, G.HYPERTROPHY), (T.COMPOUND, T.ISOLATION), 7, 6,
    ),
    AdvancedTechnique(
        "Tempo Training",
        "Control the speed of the concentric and eccentric phases",
        (G.STRENGTH, G.HYPERTROPHY), (T.COMPOUND, T.ISOLATION), 5, 4,
    ),
    AdvancedTechnique(
        "Cluster Sets",
        "Split a set into mini-sets with very short rests",
        (G.STRENGTH, G.POWER), (T.COMPOUND,), 6, 7,
    ),
    AdvancedTechnique(
        "Giant Sets",
        "Three to five exercises for the same muscle group without rest",
        (G.HYPERTROPHY, G.ENDURANCE, G.WEIGHT_LOSS), (T.ISOLATION, T.ACCESSORY), 9, 8,
    ),
    AdvancedTechnique(
        "Myo-reps",
        "An activation set followed by short-rest mini-sets",
        (G.HYPERTROPHY,), (T.ISOLATION, T.ACCESSORY), 7, 6,
    ),
    AdvancedTechnique(
        PRE_FATIGUE,
        "An isolation exercise before a compound lift for the same muscle",
        (G.HYPERTROPHY,), (T.ISOLATION, T.COMPOUND), 7, 6,
    ),
    AdvancedTechnique(
        "Post-fatigue",
        "An isolation exercise after a compound lift for the same muscle",
        (G.HYPERTROPHY,), (T.ISOLATION, T.COMPOUND), 6, 5,
    ),
    AdvancedTechnique(
        MECHANICAL_SETS,
        "Change the exercise mechanics mid-set to hit different angles",
        (G.HYPERTROPHY,), (T.ISOLATION,), 7, 6,
    ),
    AdvancedTechnique(
        PARTIAL_REPS,
        "Limited range-of-motion reps after reaching failure",
        (G.HYPERTROPHY, G.STRENGTH), (T.COMPOUND, T.ISOLATION), 8, 7,
    ),
    AdvancedTechnique(
        "Isometrics",
        "Hold a static position for a set time",
        (G.STRENGTH, G.HYPERTROPHY), (T.COMPOUND, T.ISOLATION), 6, 5,
    ),
]

_TECHNIQUES_BY_NAME = {t.name: t for t in ADVANCED_TECHNIQUES}


def get_technique(name: str) -> AdvancedTechnique | None:
    return _TECHNIQUES_BY_NAME.get(name)


def is_technique_applicable(
    technique: str, exercise_type: ExerciseType, goal: TrainingGoal
) -> bool:
    """True if the named technique suits the exercise type and goal."""
    config = _TECHNIQUES_BY_NAME.get(technique)
    if config is None:
        return False
    return exercise_type in config.exercise_types and goal in config.goals


def get_recommended_techniques(
    exercise_type: ExerciseType, goal: TrainingGoal
) -> list[AdvancedTechnique]:
    """All techniques applicable to an exercise type and goal, in table order."""
    return [
        t
        for t in ADVANCED_TECHNIQUES
        if exercise_type in t.exercise_types and goal in t.goals
    ]


@dataclass(frozen=True)
class MethodTechnique:
    """A training method; ``suits`` is the exercise type it is applied to."""

    name: str
    description: str
    fatigue_impact: int
    muscle_growth_potential: int
    strength_gain_potential: int
    suits: ExerciseType | None = None

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "fatigue_impact": self.fatigue_impact,
            "muscle_growth_potential": self.muscle_growth_potential,
            "strength_gain_potential": self.strength_gain_potential,
            "suits": self.suits.value if self.suits else None,
        }


ANTAGONIST_COMPOUND_SETS = "Antagonist Compound Sets"
DESCENDING_ASCENDING_SETS = "Descending-Ascending Sets"
TRAINING_3_7 = "3/7 Training"
SPECIFIC_GIANT_SETS = "Specific Giant Sets"
HOLISTIC_METHOD = "Holistic Method"

METHOD_TECHNIQUES: list[MethodTechnique] = [
    MethodTechnique(
        ANTAGONIST_COMPOUND_SETS,
        "Alternate exercises for opposing muscles with minimal rest",
        6, 8, 5, T.COMPOUND,
    ),
    MethodTechnique(
        DESCENDING_ASCENDING_SETS,
        "Pyramid reps up then back down within the same exercise",
        9, 9, 7, T.ISOLATION,
    ),
    MethodTechnique(
        TRAINING_3_7,
        "Mini-sets of 3 reps on 15 seconds rest, finishing with a set of 7",
        8, 8, 9, T.COMPOUND,
    ),
    MethodTechnique(
        SPECIFIC_GIANT_SETS,
        "Four or five exercises in a row for one muscle from different angles",
        10, 10, 4, T.ISOLATION,
    ),
    MethodTechnique(
        HOLISTIC_METHOD,
        "Heavy compound, medium compound, then isolation with intensity techniques",
        9, 10, 7, T.COMPOUND,
    ),
    MethodTechnique(
        "Progressive Density",
        "A fixed rep total in the shortest time, shrinking rests each week",
        8, 7, 5,
    ),
    MethodTechnique(
        "Selective Fatigue",
        "Pre-fatigue a target muscle before a compound lift",
        7, 9, 4,
    ),
    MethodTechnique(
        "Controlled Occlusion",
        "Light loads with partial blood-flow restriction",
        6, 8, 3,
    ),
    MethodTechnique(
        "Mechanical Compound Sets",
        "Paused, normal and rebound variants of one lift in a single set",
        9, 9, 8, T.COMPOUND,
    ),
    MethodTechnique(
        "Maximum Contraction",
        "Isometric pauses at the point of peak tension",
        7, 10, 5,
    ),
    MethodTechnique(
        "Extended Partial Range",
        "Full reps followed by partials in the top and bottom ranges",
        8, 9, 7,
    ),
]

_METHODS_BY_NAME = {m.name: m for m in METHOD_TECHNIQUES}


def is_method_suitable(method: str, exercise_type: ExerciseType) -> bool:
    """True if the named method is applied to exercises of this type."""
    config = _METHODS_BY_NAME.get(method)
    return config is not None and config.suits == exercise_type


@dataclass(frozen=True)
class ExerciseVariant:
    """A variation of a base movement (grip, angle, implement)."""

    name: str
    description: str
    emphasis: tuple[str, ...]
    difficulty_modifier: float  # -1 easier .. +1 harder
    base_movements: tuple[str, ...]


EXERCISE_VARIANTS: list[ExerciseVariant] = [
    ExerciseVariant("Incline", "Emphasises the upper portion of the muscle",
                    ("upper_chest", "front_delts"), 0, ("press", "fly")),
    ExerciseVariant("Decline", "Emphasises the lower portion of the muscle",
                    ("lower_chest", "triceps"), 0, ("press", "fly")),
    ExerciseVariant("Close Grip", "Narrow grip, more triceps",
                    ("triceps", "inner_chest"), 0.5, ("press", "pull_up", "row")),
    ExerciseVariant("Wide Grip", "Wide grip, more lats",
                    ("lats", "rear_delts"), 0.5, ("pull_up", "row", "pulldown")),
    ExerciseVariant("Unilateral", "One limb at a time to fix imbalances",
                    ("stabilizers", "core"), 0.5,
                    ("row", "curl", "extension", "squat", "deadlift")),
    ExerciseVariant("Barbell", "Barbell version, allows heavier loads",
                    ("primary_movers",), 0, ("press", "row", "curl", "squat", "deadlift")),
    ExerciseVariant("Dumbbell", "Dumbbells, longer range and independent sides",
                    ("stabilizers",), 0.2, ("press", "row", "curl", "extension", "raise")),
    ExerciseVariant("Machine", "Machine version, safer and more isolated",
                    ("primary_movers",), -0.5, ("press", "row", "curl", "extension", "squat")),
    ExerciseVariant("Cable", "Cable version, constant tension",
                    ("primary_movers",), 0, ("press", "row", "curl", "extension", "fly")),
    ExerciseVariant("Sumo", "Wider stance, more adductors and glutes",
                    ("adductors", "inner_hamstrings", "glutes"), 0.2, ("squat", "deadlift")),
    ExerciseVariant("Front", "Front-loaded, more quads and core",
                    ("quads", "core"), 0.5, ("squat",)),
    ExerciseVariant("Romanian", "Less knee bend, more hamstrings and glutes",
                    ("hamstrings", "glutes", "lower_back"), 0.3, ("deadlift",)),
]

# Ordered (keywords, base movement); first hit wins
_BASE_MOVEMENT_KEYWORDS: list[tuple[tuple[str, ...], str]] = [
    (("press", "bench"), "press"),
    (("row",), "row"),
    (("curl",), "curl"),
    (("extension", "pushdown"), "extension"),
    (("squat",), "squat"),
    (("deadlift",), "deadlift"),
    (("raise",), "raise"),
    (("fly", "crossover"), "fly"),
    (("pull_up", "pullup", "chin_up"), "pull_up"),
    (("pulldown",), "pulldown"),
]


def _slug(name: str) -> str:
    return re.sub(r"[\s\-]+", "_", name.lower().strip())


def get_base_movement(exercise_name: str) -> str | None:
    """Classify an exercise name into a base movement, if recognisable."""
    slug = _slug(exercise_name)
    for keywords, movement in _BASE_MOVEMENT_KEYWORDS:
        if any(k in slug for k in keywords):
            return movement
    return None


def get_exercise_variants(exercise_name: str) -> list[ExerciseVariant]:
    """Variants applicable to an exercise, in table order.

    Variants already present in the name (e.g. "Incline" for
    "Incline Dumbbell Press") are excluded.
    """
    slug = _slug(exercise_name)
    base = get_base_movement(exercise_name)
    lowered = exercise_name.lower()
    return [
        v
        for v in EXERCISE_VARIANTS
        if any(m == base or m in slug for m in v.base_movements)
        and v.name.lower() not in lowered
    ]


@dataclass(frozen=True)
class ProgressionMethod:
    name: str
    description: str
    goals: tuple[TrainingGoal, ...]
    example: str = field(default="")


PROGRESSION_METHODS: list[ProgressionMethod] = [
    ProgressionMethod(
        "Double Progression",
        "Add reps to the top of the range, then add weight and return to the bottom",
        (G.STRENGTH, G.HYPERTROPHY),
        "3x8-12: once you hit 3x12, add weight and go back to 3x8",
    ),
    ProgressionMethod(
        "Linear Periodization",
        "Raise intensity and lower volume week over week",
        (G.STRENGTH, G.POWER),
        "3x12 @70%, 4x8 @75%, 5x5 @80%, 6x3 @85%",
    ),
    ProgressionMethod(
        "Undulating Periodization",
        "Vary intensity and volume within the same week",
        (G.STRENGTH, G.HYPERTROPHY, G.POWER),
        "Mon 3x12 @70%, Wed 4x8 @75%, Fri 5x5 @80%",
    ),
    ProgressionMethod(
        "Block Periodization",
        "Sequential blocks each with a single focus",
        (G.STRENGTH, G.HYPERTROPHY, G.POWER, G.ENDURANCE),
        "4 weeks hypertrophy, 4 weeks strength, 2 weeks power",
    ),
    ProgressionMethod(
        "RIR Progression",
        "Hold a target RIR and add weight when sets feel too easy",
        (G.STRENGTH, G.HYPERTROPHY),
        "Keep RIR 2; when sets end above RIR 2, add weight",
    ),
    ProgressionMethod(
        "Volume Progression",
        "Add sets before adding load",
        (G.HYPERTROPHY, G.ENDURANCE),
        "3x10, 4x10, 5x10, then 3x10 heavier",
    ),
]

DEFAULT_PROGRESSION_METHOD = PROGRESSION_METHODS[0].name


def get_progression_methods(goal: TrainingGoal) -> list[ProgressionMethod]:
    return [p for p in PROGRESSION_METHODS if goal in p.goals]
