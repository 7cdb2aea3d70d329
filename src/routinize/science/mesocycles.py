"""Mesocycle configurations and long-term periodization models."""

from dataclasses import dataclass
from enum import Enum

from ..models.user_profile import TrainingGoal, TrainingLevel


class MesocycleType(str, Enum):
    """Training block focus."""

    VOLUME = "volume"
    STRENGTH = "strength"
    CUT = "cut"
    POWER = "power"
    RECOVERY = "recovery"


@dataclass(frozen=True)
class MesocycleConfig:
    """Rep, RIR and intensity ranges for one block.

    ``intensity_range`` is a percentage of 1RM.
    """

    type: MesocycleType
    duration_weeks: int
    volume_multiplier: float
    intensity_range: tuple[int, int]
    rep_range: tuple[int, int]
    rir_range: tuple[int, int]
    recommended_techniques: tuple[str, ...]
    deload_required: bool
    description: str

    @property
    def mean_intensity(self) -> float:
        return (self.intensity_range[0] + self.intensity_range[1]) / 2

    def to_dict(self) -> dict:
        return {
            "type": self.type.value,
            "duration_weeks": self.duration_weeks,
            "volume_multiplier": self.volume_multiplier,
            "intensity_range": list(self.intensity_range),
            "rep_range": list(self.rep_range),
            "rir_range": list(self.rir_range),
            "recommended_techniques": list(self.recommended_techniques),
            "deload_required": self.deload_required,
            "description": self.description,
        }


MESOCYCLE_CONFIGS: list[MesocycleConfig] = [
    MesocycleConfig(
        MesocycleType.VOLUME, 6, 1.2, (65, 75), (8, 15), (1, 3),
        ("Mechanical Sets", "Super Sets", "Drop Sets", "Pre-fatigue"),
        True,
        "Volume accumulation to maximise hypertrophy",
    ),
    MesocycleConfig(
        MesocycleType.STRENGTH, 4, 0.8, (80, 90), (3, 6), (1, 2),
        ("Cluster Sets", "Rest-Pause", "Isometrics"),
        True,
        "Intensification: less volume, heavier loads",
    ),
    MesocycleConfig(
        MesocycleType.CUT, 4, 1.0, (70, 80), (10, 15), (0, 2),
        ("Super Sets", "Giant Sets", "Drop Sets", "Partial Reps"),
        True,
        "High density, short rests, intensity techniques",
    ),
    MesocycleConfig(
        MesocycleType.POWER, 3, 0.6, (75, 85), (2, 5), (2, 3),
        ("Cluster Sets", "Tempo Training"),
        True,
        "Bar speed and explosiveness",
    ),
    MesocycleConfig(
        MesocycleType.RECOVERY, 1, 0.5, (60, 70), (10, 15), (3, 4),
        (),
        False,
        "Reduced volume and intensity to recover",
    ),
]

_CONFIGS_BY_TYPE = {c.type: c for c in MESOCYCLE_CONFIGS}

GOAL_TO_MESOCYCLE: dict[TrainingGoal, MesocycleType] = {
    TrainingGoal.HYPERTROPHY: MesocycleType.VOLUME,
    TrainingGoal.STRENGTH: MesocycleType.STRENGTH,
    TrainingGoal.WEIGHT_LOSS: MesocycleType.CUT,
    TrainingGoal.POWER: MesocycleType.POWER,
}

NEXT_PHASE: dict[MesocycleType, MesocycleType] = {
    MesocycleType.VOLUME: MesocycleType.STRENGTH,
    MesocycleType.STRENGTH: MesocycleType.CUT,
    MesocycleType.CUT: MesocycleType.RECOVERY,
    MesocycleType.POWER: MesocycleType.RECOVERY,
    MesocycleType.RECOVERY: MesocycleType.VOLUME,
}


def get_mesocycle(mesocycle_type: MesocycleType) -> MesocycleConfig:
    return _CONFIGS_BY_TYPE[mesocycle_type]


def get_recommended_mesocycle(
    goal: TrainingGoal,
    level: TrainingLevel,
    current: MesocycleType | None = None,
) -> MesocycleConfig:
    """Pick the next training block.

    Without a current phase the goal decides; goals with no dedicated block
    get the volume block. With a current phase the next one in the cycle is
    returned. ``level`` does not currently change the result.
    """
    if current is None:
        return _CONFIGS_BY_TYPE.get(
            GOAL_TO_MESOCYCLE.get(goal, MesocycleType.VOLUME), MESOCYCLE_CONFIGS[0]
        )
    return _CONFIGS_BY_TYPE[NEXT_PHASE[current]]


@dataclass(frozen=True)
class LongTermPlan:
    """A multi-block periodization model."""

    name: str
    description: str
    duration_weeks: int
    phases: tuple[tuple[MesocycleType, int], ...]
    levels: tuple[TrainingLevel, ...]
    goals: tuple[TrainingGoal, ...]
    includes_deload: bool = True

    def phase_for_week(self, week: int) -> MesocycleType:
        """Block active in a 1-based week; the last block past the end."""
        remaining = week
        for phase, weeks in self.phases:
            if remaining <= weeks:
                return phase
            remaining -= weeks
        return self.phases[-1][0]

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "duration_weeks": self.duration_weeks,
            "phases": [{"type": p.value, "weeks": w} for p, w in self.phases],
            "levels": [lv.value for lv in self.levels],
            "goals": [g.value for g in self.goals],
            "includes_deload": self.includes_deload,
        }


V, S, C, P, R = (
    MesocycleType.VOLUME,
    MesocycleType.STRENGTH,
    MesocycleType.CUT,
    MesocycleType.POWER,
    MesocycleType.RECOVERY,
)
_INT_ADV = (TrainingLevel.INTERMEDIATE, TrainingLevel.ADVANCED)
_ADV = (TrainingLevel.ADVANCED,)

LONG_TERM_PLANS: list[LongTermPlan] = [
    LongTermPlan(
        "Hypertrophy-Strength Cycle",
        "12 weeks building muscle, then strength",
        12,
        ((V, 6), (R, 1), (S, 4), (R, 1)),
        _INT_ADV,
        (TrainingGoal.HYPERTROPHY, TrainingGoal.STRENGTH),
    ),
    LongTermPlan(
        "Complete Transformation",
        "16 weeks covering mass, strength and a cut",
        16,
        ((V, 6), (R, 1), (S, 4), (R, 1), (C, 3), (R, 1)),
        _INT_ADV,
        (TrainingGoal.HYPERTROPHY, TrainingGoal.STRENGTH, TrainingGoal.WEIGHT_LOSS),
    ),
    LongTermPlan(
        "Maximum Hypertrophy",
        "16 weeks of volume blocks with advanced techniques",
        16,
        ((V, 5), (R, 1), (V, 4), (R, 1), (S, 4), (R, 1)),
        _ADV,
        (TrainingGoal.HYPERTROPHY,),
    ),
    LongTermPlan(
        "PPL Bodybuilding",
        "20 weeks of push/pull/legs block periodization",
        20,
        ((V, 6), (R, 1), (S, 5), (R, 1), (V, 3), (R, 1), (C, 2), (R, 1)),
        _ADV,
        (TrainingGoal.HYPERTROPHY, TrainingGoal.STRENGTH),
    ),
    LongTermPlan(
        "Advanced Undulating",
        "12 weeks alternating volume, strength and power blocks",
        12,
        ((V, 3), (R, 1), (S, 3), (R, 1), (P, 3), (R, 1)),
        _ADV,
        (TrainingGoal.HYPERTROPHY, TrainingGoal.STRENGTH, TrainingGoal.POWER),
    ),
]



def get_long_term_plan(name: str) -> LongTermPlan | None:
    return next((p for p in LONG_TERM_PLANS if p.name == name), None)


def get_recommended_long_term_plan(
    goal: TrainingGoal, level: TrainingLevel
) -> LongTermPlan:
    """First plan matching both level and goal, else the first plan."""
    for plan in LONG_TERM_PLANS:
        if level in plan.levels and goal in plan.goals:
            return plan
    return LONG_TERM_PLANS[0]
