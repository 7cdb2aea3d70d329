"""Rule-based advanced bodybuilding routine generator.

Builds a WorkoutRoutine from a RoutineConfig and an exercise library:

1. Pick day templates for the split, cycled so the routine has exactly
   ``frequency`` days.
2. For each day, select compound lifts first, then isolation work, from the
   exercises that hit the day's target muscles.
3. Prescribe sets, reps, RIR and rest from either the basic goal table or the
   recommended mesocycle (periodized mode).
4. Apply intensity techniques per set (drop sets, supersets, 3/7 training...).
"""

import logging
import math
import random
from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import Enum

from ..errors import ValidationError
from ..models.exercises import Exercise, ExerciseType, MuscleGroup
from ..models.routine import (
    Difficulty,
    ExerciseSet,
    SplitType,
    WorkoutDay,
    WorkoutRoutine,
)
from ..models.user_profile import TrainingGoal, TrainingLevel
from ..science.bodybuilding import (
    ADVANCED_TECHNIQUES,
    ANTAGONIST_COMPOUND_SETS,
    DEFAULT_PROGRESSION_METHOD,
    DESCENDING_ASCENDING_SETS,
    DROP_SETS,
    MECHANICAL_SETS,
    METHOD_TECHNIQUES,
    PARTIAL_REPS,
    PRE_FATIGUE,
    PROGRESSION_METHODS,
    REST_PAUSE,
    SPECIFIC_GIANT_SETS,
    SUPER_SETS,
    TRAINING_3_7,
    DeloadType,
    get_exercise_variants,
    get_recommended_deload,
    get_recommended_rest,
    get_sets_and_reps,
    is_method_suitable,
    is_technique_applicable,
)
from ..science.mesocycles import (
    LongTermPlan,
    MesocycleConfig,
    get_long_term_plan,
    get_mesocycle,
    get_recommended_long_term_plan,
    get_recommended_mesocycle,
)

logger = logging.getLogger(__name__)

DEFAULT_SOURCE = "Advanced Bodybuilding Generator"
MINUTES_PER_SET = 3
MIN_REST_SECONDS = 45
MAX_REST_SECONDS = 240
GIANT_SET_REST_SECONDS = 30
CLUSTER_REST_SECONDS = 15


class PeriodizationType(str, Enum):
    LINEAR = "linear"
    UNDULATING = "undulating"
    BLOCK = "block"
    CONJUGATE = "conjugate"


M = MuscleGroup

# Target muscles per day type
DAY_MUSCLES: dict[str, list[MuscleGroup]] = {
    "push": [M.CHEST, M.SHOULDERS, M.TRICEPS],
    "pull": [M.BACK, M.BICEPS, M.FOREARMS],
    "legs": [M.QUADS, M.HAMSTRINGS, M.GLUTES, M.CALVES],
    "lower": [M.QUADS, M.HAMSTRINGS, M.GLUTES, M.CALVES],
    "upper": [M.CHEST, M.BACK, M.SHOULDERS, M.TRICEPS, M.BICEPS],
    "full_body": [
        M.CHEST, M.BACK, M.QUADS, M.HAMSTRINGS, M.GLUTES, M.SHOULDERS, M.BICEPS, M.TRICEPS,
    ],
    "chest": [M.CHEST, M.TRICEPS],
    "back": [M.BACK, M.BICEPS],
    "shoulders": [M.SHOULDERS, M.TRAPS],
    "arms": [M.BICEPS, M.TRICEPS, M.FOREARMS],
}


# (day name, day type) per split
DAY_TEMPLATES: dict[SplitType, list[tuple[str, str]]] = {
    SplitType.PPL: [
        ("Push A", "push"), ("Pull A", "pull"), ("Legs A", "legs"),
        ("Push B", "push"), ("Pull B", "pull"), ("Legs B", "legs"),
    ],
    SplitType.UPPER_LOWER: [
        ("Upper A", "upper"), ("Lower A", "lower"),
        ("Upper B", "upper"), ("Lower B", "lower"),
    ],
    SplitType.FULL_BODY: [
        ("Full Body A", "full_body"), ("Full Body B", "full_body"), ("Full Body C", "full_body"),
    ],
    SplitType.BODY_PART: [
        ("Chest", "chest"), ("Back", "back"), ("Legs", "legs"),
        ("Shoulders", "shoulders"), ("Arms", "arms"),
    ],
    SplitType.PUSH_PULL: [
        ("Push A", "push"), ("Pull A", "pull"), ("Push B", "push"), ("Pull B", "pull"),
    ],
}

DEFAULT_TEMPLATE = [("Full Body", "full_body")]

LEVEL_DIFFICULTY = {
    TrainingLevel.BEGINNER: Difficulty.EASY,
    TrainingLevel.INTERMEDIATE: Difficulty.MODERATE,
    TrainingLevel.ADVANCED: Difficulty.HARD,
}

COMPOUND_SETS_BY_LEVEL = {
    TrainingLevel.BEGINNER: 2,
    TrainingLevel.INTERMEDIATE: 3,
    TrainingLevel.ADVANCED: 4,
}

ISOLATION_COUNT_BY_LEVEL = {
    TrainingLevel.BEGINNER: 3,
    TrainingLevel.INTERMEDIATE: 4,
    TrainingLevel.ADVANCED: 5,
}


@dataclass
class RoutineConfig:
    """Options for routine generation."""

    name: str = "Advanced Routine"
    description: str = ""
    level: TrainingLevel = TrainingLevel.INTERMEDIATE
    goal: TrainingGoal = TrainingGoal.HYPERTROPHY
    split: SplitType = SplitType.PPL
    frequency: int = 4  # Training days per week
    duration_weeks: int = 8
    include_deload: bool = True
    deload_frequency: int = 4  # Weeks between deloads
    deload_strategy: str | None = None  # None picks the recommended strategy
    techniques: list[str] = field(default_factory=list)
    method_techniques: list[str] = field(default_factory=list)
    progression_method: str = DEFAULT_PROGRESSION_METHOD
    use_variants: bool = False
    use_alternatives: bool = True
    alternatives_per_exercise: int = 2
    use_periodization: bool = False
    periodization_type: PeriodizationType = PeriodizationType.UNDULATING
    use_long_term_plan: bool = False
    long_term_plan: str | None = None  # None picks the recommended plan
    start_date: date | None = None

    def validate(self) -> None:
        """Raise ValidationError for out-of-range or unknown options."""
        if not 1 <= self.frequency <= 7:
            raise ValidationError(f"frequency must be between 1 and 7, got {self.frequency}")
        if not 1 <= self.duration_weeks <= 52:
            raise ValidationError(
                f"duration_weeks must be between 1 and 52, got {self.duration_weeks}"
            )
        if self.alternatives_per_exercise < 0:
            raise ValidationError("alternatives_per_exercise cannot be negative")
        if self.include_deload and self.deload_frequency < 1:
            raise ValidationError("deload_frequency must be at least 1")

        known = {t.name for t in ADVANCED_TECHNIQUES}
        unknown = [t for t in self.techniques if t not in known]
        if unknown:
            raise ValidationError(f"Unknown techniques: {', '.join(unknown)}")

        known_methods = {m.name for m in METHOD_TECHNIQUES}
        unknown = [m for m in self.method_techniques if m not in known_methods]
        if unknown:
            raise ValidationError(f"Unknown method techniques: {', '.join(unknown)}")

        if self.long_term_plan and get_long_term_plan(self.long_term_plan) is None:
            raise ValidationError(f"Unknown long-term plan: {self.long_term_plan}")

        if self.progression_method not in {p.name for p in PROGRESSION_METHODS}:
            raise ValidationError(f"Unknown progression method: {self.progression_method}")

        if self.deload_strategy and self.deload_strategy not in {d.value for d in DeloadType}:
            raise ValidationError(f"Unknown deload strategy: {self.deload_strategy}")

    @classmethod
    def from_dict(cls, data: dict) -> "RoutineConfig":
        """Create from a snake_case dictionary, ignoring unknown keys."""
        try:
            kwargs = {
                k: v
                for k, v in data.items()
                if k in cls.__dataclass_fields__ and v is not None
            }
            for key, enum_cls in (
                ("level", TrainingLevel),
                ("goal", TrainingGoal),
                ("split", SplitType),
                ("periodization_type", PeriodizationType),
            ):
                if key in kwargs:
                    kwargs[key] = enum_cls(kwargs[key])
            if isinstance(kwargs.get("start_date"), str):
                kwargs["start_date"] = date.fromisoformat(kwargs["start_date"])
        except ValueError as e:
            raise ValidationError(str(e)) from e
        return cls(**kwargs)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


@dataclass
class _Prescription:
    sets: int
    reps: int
    rir: int
    rest: int


class RoutineGenerator:
    """Generates advanced routines from a fixed exercise library."""

    def __init__(self, exercises: list[Exercise], rng: random.Random | None = None):
        self.exercises = exercises
        self.rng = rng or random.Random()

    def generate(self, config: RoutineConfig, user_id: str) -> WorkoutRoutine:
        """Generate a routine for a user.

        Args:
            config: Generation options
            user_id: Owner of the routine

        Returns:
            An unsaved WorkoutRoutine with exactly ``config.frequency`` days

        Raises:
            ValidationError: If the config is invalid or no exercises exist
        """
        config.validate()
        if not self.exercises:
            raise ValidationError("No exercises available to build a routine")

        plan = self._resolve_plan(config)
        mesocycle = self._resolve_mesocycle(config, plan)

        days = [
            self._build_day(name, day_type, index, config, mesocycle)
            for index, (name, day_type) in enumerate(self._day_templates(config))
        ]

        start = config.start_date or date.today()
        deload_strategy = None
        if config.include_deload:
            deload_strategy = (
                config.deload_strategy
                or get_recommended_deload(config.level, config.goal).type.value
            )

        routine = WorkoutRoutine(
            user_id=user_id,
            name=config.name,
            description=config.description
            or f"{config.split.value} routine for {config.goal.value} ({config.level.value})",
            level=config.level,
            goal=config.goal,
            split=config.split,
            frequency=config.frequency,
            days=days,
            start_date=start,
            end_date=start + timedelta(weeks=config.duration_weeks),
            includes_deload=config.include_deload,
            deload_frequency=config.deload_frequency if config.include_deload else None,
            deload_strategy=deload_strategy,
            source=plan.name if plan else DEFAULT_SOURCE,
            tags=[
                config.level.value,
                config.goal.value,
                config.split.value,
                "advanced",
                "periodization",
            ],
        )

        logger.info(
            "Generated routine '%s' for %s: %d days, %d sets",
            routine.name, user_id, len(days), routine.total_sets,
        )
        return routine

    def _resolve_plan(self, config: RoutineConfig) -> LongTermPlan | None:
        if not config.use_long_term_plan:
            return None
        if config.long_term_plan:
            return get_long_term_plan(config.long_term_plan)
        return get_recommended_long_term_plan(config.goal, config.level)

    def _resolve_mesocycle(
        self, config: RoutineConfig, plan: LongTermPlan | None
    ) -> MesocycleConfig | None:
        if not config.use_periodization:
            return None
        if plan:
            return get_mesocycle(plan.phase_for_week(1))
        return get_recommended_mesocycle(config.goal, config.level)

    def _day_templates(self, config: RoutineConfig) -> list[tuple[str, str]]:
        """Exactly ``frequency`` templates, repeating the split when needed."""
        templates = DAY_TEMPLATES.get(config.split, DEFAULT_TEMPLATE)
        result: list[tuple[str, str]] = []
        for i in range(config.frequency):
            name, day_type = templates[i % len(templates)]
            cycle = i // len(templates)
            if cycle:
                name = f"{name} ({cycle + 1})"
            result.append((name, day_type))
        return result

    def _select_exercises(
        self, day_type: str, config: RoutineConfig
    ) -> tuple[list[Exercise], list[Exercise]]:
        """Return (selected, pool) for a day type, compound lifts first."""
        targets = DAY_MUSCLES[day_type]
        pool = [ex for ex in self.exercises if ex.targets_any(targets)]
        pool.sort(key=lambda ex: not ex.is_compound)

        full_body = day_type == "full_body"
        advanced = config.level == TrainingLevel.ADVANCED
        n_compound = 3 if full_body or advanced else 2
        n_isolation = 3 if full_body else ISOLATION_COUNT_BY_LEVEL[config.level]

        compounds = [ex for ex in pool if ex.is_compound][:n_compound]
        isolations = [ex for ex in pool if not ex.is_compound][:n_isolation]
        return compounds + isolations, pool

    def _display_name(self, exercise: Exercise, config: RoutineConfig) -> str:
        if not config.use_variants:
            return exercise.name
        options = [exercise.name] + [
            f"{v.name} {exercise.name}" for v in get_exercise_variants(exercise.name)
        ]
        return self.rng.choice(options)

    def _alternatives(
        self, exercise: Exercise, pool: list[Exercise], config: RoutineConfig
    ) -> list[Exercise]:
        if not config.use_alternatives:
            return []
        return [
            other
            for other in pool
            if other.name != exercise.name
            and other.is_compound == exercise.is_compound
            and other.targets_any(exercise.muscle_groups)
        ][: config.alternatives_per_exercise]

    def _prescribe(
        self,
        exercise: Exercise,
        day_index: int,
        config: RoutineConfig,
        mesocycle: MesocycleConfig | None,
    ) -> _Prescription:
        """Base sets, reps, RIR and rest before techniques are applied."""
        ex_type = exercise.exercise_type
        base_rest = get_recommended_rest(ex_type, config.goal)

        if mesocycle is None:
            basic = get_sets_and_reps(config.goal, ex_type)
            return _Prescription(basic.sets, basic.reps, basic.rir, base_rest)

        min_reps, max_reps = mesocycle.rep_range
        min_rir, max_rir = mesocycle.rir_range
        mid_reps = (min_reps + max_reps) // 2
        mid_rir = (min_rir + max_rir) // 2

        if ex_type == ExerciseType.COMPOUND:
            sets = COMPOUND_SETS_BY_LEVEL[config.level]
            reps, rir = mid_reps - 2, mid_rir
        else:
            sets = 3 if config.level == TrainingLevel.ADVANCED else 2
            reps, rir = mid_reps + 2, mid_rir + 1

        if config.periodization_type == PeriodizationType.UNDULATING:
            # Strength, hypertrophy, volume days in rotation
            reps, rir = (
                (min_reps, min_rir),
                (mid_reps, mid_rir),
                (max_reps, max_rir),
            )[day_index % 3]
        elif config.periodization_type == PeriodizationType.LINEAR:
            week = min(3, day_index // 2)
            if week == 0:
                reps, rir = max_reps, max_rir
            elif week == 1:
                reps, rir = mid_reps, mid_rir
            else:
                reps, rir = min_reps, min_rir

        rest = _round_half_up(base_rest * (mesocycle.mean_intensity / 75))
        rest = max(MIN_REST_SECONDS, min(MAX_REST_SECONDS, rest))
        return _Prescription(sets, reps, rir, rest)

    def _build_day(
        self,
        name: str,
        day_type: str,
        day_index: int,
        config: RoutineConfig,
        mesocycle: MesocycleConfig | None,
    ) -> WorkoutDay:
        selected, pool = self._select_exercises(day_type, config)
        if not selected:
            logger.warning("No exercises match day '%s' (%s)", name, day_type)

        names = [self._display_name(ex, config) for ex in selected]
        isolations = [ex for ex in selected if not ex.is_compound]

        exercise_sets: list[ExerciseSet] = []
        for position, exercise in enumerate(selected):
            ex_type = exercise.exercise_type
            standard = [
                t for t in config.techniques
                if is_technique_applicable(t, ex_type, config.goal)
            ]
            methods = [
                m for m in config.method_techniques if is_method_suitable(m, ex_type)
            ]

            superset_partner = names[position + 1] if position + 1 < len(selected) else None
            pre_fatigue_partner = None
            if exercise.is_compound and PRE_FATIGUE in standard:
                partner = next(
                    (iso for iso in isolations if iso.targets_any(exercise.muscle_groups)),
                    None,
                )
                if partner:
                    pre_fatigue_partner = names[selected.index(partner)]

            alternatives = self._alternatives(exercise, pool, config)
            base = self._prescribe(exercise, day_index, config, mesocycle)

            techniques_used = standard + methods
            first_note = config.progression_method
            if techniques_used:
                first_note += f". Techniques: {', '.join(techniques_used)}"

            for i in range(base.sets):
                exercise_sets.append(
                    self._build_set(
                        i,
                        base,
                        names[position],
                        exercise,
                        alternatives,
                        standard,
                        methods,
                        superset_partner,
                        pre_fatigue_partner,
                        first_note,
                    )
                )

        return WorkoutDay(
            name=name,
            description=f"{name} workout",
            exercise_sets=exercise_sets,
            target_muscle_groups=[m.value for m in DAY_MUSCLES[day_type]],
            difficulty=LEVEL_DIFFICULTY[config.level],
            estimated_duration=len(exercise_sets) * MINUTES_PER_SET,
        )

    def _build_set(
        self,
        i: int,
        base: _Prescription,
        display_name: str,
        exercise: Exercise,
        alternatives: list[Exercise],
        standard: list[str],
        methods: list[str],
        superset_partner: str | None,
        pre_fatigue_partner: str | None,
        first_note: str,
    ) -> ExerciseSet:
        first = i == 0
        last = i == base.sets - 1
        reps, rir, rest = base.reps, base.rir, base.rest

        is_drop_set = last and DROP_SETS in standard
        is_rest_pause = last and REST_PAUSE in standard
        is_mechanical = last and MECHANICAL_SETS in standard
        is_partial = last and PARTIAL_REPS in standard
        giant = first and SPECIFIC_GIANT_SETS in methods

        superset_with = None
        if first and (SUPER_SETS in standard or ANTAGONIST_COMPOUND_SETS in methods):
            superset_with = superset_partner

        if TRAINING_3_7 in methods:
            if last:
                reps, rir = 7, 0
            else:
                reps, rir, rest = 3, 3, CLUSTER_REST_SECONDS
        elif DESCENDING_ASCENDING_SETS in methods:
            if base.sets <= 3:
                if first or last:
                    reps, rir = reps - 2, rir - 1
            else:
                pos = i / (base.sets - 1)
                offset = pos if pos < 0.5 else 1 - pos
                reps = _round_half_up(reps + offset * 4)
                rir = _round_half_up(rir + offset * 2)

        if is_drop_set or is_rest_pause or is_mechanical:
            rest = _round_half_up(rest * 0.5)
        elif giant:
            rest = GIANT_SET_REST_SECONDS

        return ExerciseSet(
            exercise_id=exercise.id,
            exercise_name=display_name,
            alternative_exercise_id=alternatives[0].id if alternatives else None,
            target_reps=max(1, reps),
            target_rir=max(0, rir),
            rest_time=rest,
            is_drop_set=is_drop_set,
            is_rest_pause=is_rest_pause,
            is_mechanical_set=is_mechanical,
            is_partial_reps=is_partial,
            superset_with=superset_with,
            pre_fatigue_with=pre_fatigue_partner if first else None,
            notes=first_note if first else "",
        )


def generate_routine(
    config: RoutineConfig,
    exercises: list[Exercise],
    user_id: str,
    rng: random.Random | None = None,
) -> WorkoutRoutine:
    """Generate a routine with a one-off generator."""
    return RoutineGenerator(exercises, rng=rng).generate(config, user_id)


def routine_summary(routine: WorkoutRoutine) -> str:
    """Render a plain-text overview of a routine."""
    lines = [
        f"{routine.name}",
        f"  {routine.level.value} / {routine.goal.value} / {routine.split.value}, "
        f"{routine.frequency} days per week",
    ]
    if routine.start_date and routine.end_date:
        lines.append(
            f"  {routine.start_date.isoformat()} to {routine.end_date.isoformat()}"
            f" ({routine.duration_weeks} weeks)"
        )
    if routine.includes_deload:
        lines.append(
            f"  Deload every {routine.deload_frequency} weeks ({routine.deload_strategy})"
        )

    for day in routine.days:
        lines.append("")
        lines.append(f"{day.name} - ~{day.estimated_duration} min")
        for name in day.exercise_names:
            sets = day.sets_for(name)
            reps = "/".join(str(s.target_reps) for s in sets)
            lines.append(f"  {name}: {len(sets)} sets x {reps} @ RIR {sets[0].target_rir}")
            if sets[0].superset_with:
                lines.append(f"    superset with {sets[0].superset_with}")
            if sets[0].pre_fatigue_with:
                lines.append(f"    pre-fatigue with {sets[0].pre_fatigue_with}")

    return "\n".join(lines)
