"""Tests for the routine generator."""

import random
from datetime import date

import pytest

from routinize.errors import ValidationError
from routinize.science.bodybuilding import DESCENDING_ASCENDING_SETS
from routinize.generators.routine_generator import (
    DEFAULT_SOURCE,
    PeriodizationType,
    RoutineConfig,
    RoutineGenerator,
    _Prescription,
    generate_routine,
    routine_summary,
)
from routinize.models.exercises import get_exercise_by_name
from routinize.models.routine import Difficulty, SplitType
from routinize.models.user_profile import TrainingGoal, TrainingLevel


def _generate(exercises, **kwargs):
    config = RoutineConfig(start_date=date(2024, 1, 1), **kwargs)
    return generate_routine(config, exercises, "user-1", rng=random.Random(42))


def _is_compound(name: str) -> bool:
    return get_exercise_by_name(name).is_compound


class TestRoutineStructure:
    """Tests for day layout and exercise ordering."""

    def test_frequency_four_gives_four_days(self, sample_exercises):
        routine = _generate(sample_exercises, frequency=4)
        assert len(routine.days) == 4
        assert routine.frequency == 4

    @pytest.mark.parametrize("split", list(SplitType))
    @pytest.mark.parametrize("frequency", [1, 3, 7])
    def test_exact_day_count_for_every_split(self, sample_exercises, split, frequency):
        routine = _generate(sample_exercises, split=split, frequency=frequency)
        assert len(routine.days) == frequency

    def test_repeated_templates_are_numbered(self, sample_exercises):
        routine = _generate(sample_exercises, split=SplitType.UPPER_LOWER, frequency=6)
        names = [d.name for d in routine.days]
        assert names[:4] == ["Upper A", "Lower A", "Upper B", "Lower B"]
        assert names[4:] == ["Upper A (2)", "Lower A (2)"]

    def test_compound_before_isolation(self, sample_exercises):
        routine = _generate(sample_exercises, frequency=6, split=SplitType.PPL)
        for day in routine.days:
            kinds = [_is_compound(name) for name in day.exercise_names]
            assert kinds == sorted(kinds, reverse=True), day.name

    def test_day_exercises_hit_targets(self, sample_exercises):
        routine = _generate(sample_exercises, frequency=3, split=SplitType.PPL)
        push = routine.days[0]
        for name in push.exercise_names:
            muscles = {m.value for m in get_exercise_by_name(name).muscle_groups}
            assert muscles & set(push.target_muscle_groups)

    def test_metadata(self, sample_exercises):
        routine = _generate(
            sample_exercises, level=TrainingLevel.ADVANCED, duration_weeks=12
        )
        assert routine.user_id == "user-1"
        assert routine.source == DEFAULT_SOURCE
        assert routine.start_date == date(2024, 1, 1)
        assert routine.duration_weeks == 12
        assert all(d.difficulty == Difficulty.HARD for d in routine.days)
        assert routine.deload_strategy == "both"

    def test_no_deload(self, sample_exercises):
        routine = _generate(sample_exercises, include_deload=False)
        assert routine.deload_frequency is None
        assert routine.deload_strategy is None

    def test_estimated_duration(self, sample_exercises):
        day = _generate(sample_exercises).days[0]
        assert day.estimated_duration == len(day.exercise_sets) * 3

    def test_progression_note_on_first_set(self, sample_exercises):
        day = _generate(sample_exercises).days[0]
        first = day.sets_for(day.exercise_names[0])
        assert first[0].notes.startswith("Double Progression")
        assert all(s.notes == "" for s in first[1:])

    def test_explicit_deload_strategy_is_kept(self, sample_exercises):
        routine = _generate(sample_exercises, deload_strategy="frequency")
        assert routine.deload_strategy == "frequency"


class TestPrescription:
    def test_basic_hypertrophy(self, sample_exercises):
        day = _generate(sample_exercises, goal=TrainingGoal.HYPERTROPHY).days[0]
        compound = day.sets_for(day.exercise_names[0])
        assert len(compound) == 4
        assert {s.target_reps for s in compound} == {8}
        assert compound[0].rest_time == 120

    def test_undulating_rotates_rep_ranges(self, sample_exercises):
        routine = _generate(
            sample_exercises,
            frequency=3,
            use_periodization=True,
            periodization_type=PeriodizationType.UNDULATING,
        )
        # Volume block: reps 8-15
        reps = [d.exercise_sets[0].target_reps for d in routine.days]
        assert reps == [8, 11, 15]

    def test_linear_moves_from_high_to_low_reps(self, sample_exercises):
        routine = _generate(
            sample_exercises,
            frequency=6,
            include_deload=False,
            use_periodization=True,
            periodization_type=PeriodizationType.LINEAR,
        )
        firsts = [d.exercise_sets[0] for d in routine.days]
        assert [s.target_reps for s in firsts] == [15, 15, 11, 11, 8, 8]
        assert [s.target_rir for s in firsts] == [3, 3, 2, 2, 1, 1]

    def test_rest_scales_with_block_intensity(self, sample_exercises):
        # Strength block averages 85 % intensity
        day = _generate(
            sample_exercises, goal=TrainingGoal.STRENGTH, use_periodization=True
        ).days[0]
        for name in day.exercise_names:
            expected = 204 if _is_compound(name) else 136
            assert {s.rest_time for s in day.sets_for(name)} == {expected}

    def test_rest_is_clamped_to_minimum(self, sample_exercises):
        day = _generate(
            sample_exercises, goal=TrainingGoal.WEIGHT_LOSS, use_periodization=True
        ).days[0]
        assert {s.rest_time for s in day.exercise_sets} == {45}

    def test_long_term_plan_sets_source(self, sample_exercises):
        routine = _generate(
            sample_exercises,
            use_periodization=True,
            use_long_term_plan=True,
            long_term_plan="Maximum Hypertrophy",
        )
        assert routine.source == "Maximum Hypertrophy"

    def test_rir_and_reps_never_negative(self, sample_exercises):
        routine = _generate(
            sample_exercises,
            goal=TrainingGoal.POWER,
            use_periodization=True,
            periodization_type=PeriodizationType.LINEAR,
            method_techniques=["Descending-Ascending Sets"],
        )
        for day in routine.days:
            for s in day.exercise_sets:
                assert s.target_rir >= 0
                assert s.target_reps >= 1


class TestTechniques:
    def test_drop_sets_on_last_isolation_set(self, sample_exercises):
        day = _generate(sample_exercises, techniques=["Drop Sets"]).days[0]
        for name in day.exercise_names:
            sets = day.sets_for(name)
            if _is_compound(name):
                assert not any(s.is_drop_set for s in sets)
            else:
                assert [s.is_drop_set for s in sets] == [False] * (len(sets) - 1) + [True]
                assert sets[-1].rest_time == round(sets[0].rest_time * 0.5)

    def test_three_seven_on_compounds(self, sample_exercises):
        day = _generate(sample_exercises, method_techniques=["3/7 Training"]).days[0]
        sets = day.sets_for(day.exercise_names[0])
        assert [s.target_reps for s in sets] == [3] * (len(sets) - 1) + [7]
        assert sets[-1].target_rir == 0
        assert sets[0].rest_time == 15

    def test_superset_links_next_exercise(self, sample_exercises):
        day = _generate(sample_exercises, techniques=["Super Sets"]).days[0]
        names = day.exercise_names
        isolation = next(n for n in names if not _is_compound(n))
        index = names.index(isolation)
        sets = day.sets_for(isolation)
        expected = names[index + 1] if index + 1 < len(names) else None
        assert sets[0].superset_with == expected
        assert sets[1].superset_with is None

    def test_pre_fatigue_pairs_compound_with_isolation(self, sample_exercises):
        day = _generate(sample_exercises, techniques=["Pre-fatigue"]).days[0]
        isolations = [n for n in day.exercise_names if not _is_compound(n)]
        paired = 0
        for name in day.exercise_names:
            sets = day.sets_for(name)
            assert all(s.pre_fatigue_with is None for s in sets[1:])
            partner = sets[0].pre_fatigue_with
            if not _is_compound(name):
                assert partner is None
            elif partner is not None:
                paired += 1
                assert partner in isolations
                own = set(get_exercise_by_name(name).muscle_groups)
                assert own & set(get_exercise_by_name(partner).muscle_groups)
        assert paired > 0

    def test_specific_giant_sets_shorten_first_rest_only(self, sample_exercises):
        day = _generate(sample_exercises, method_techniques=["Specific Giant Sets"]).days[0]
        for name in day.exercise_names:
            rests = [s.rest_time for s in day.sets_for(name)]
            if _is_compound(name):
                assert set(rests) == {120}
            else:
                assert rests == [30, 90, 90]

    def test_standard_giant_sets_keep_rest(self, sample_exercises):
        day = _generate(sample_exercises, techniques=["Giant Sets"]).days[0]
        for name in day.exercise_names:
            if not _is_compound(name):
                assert {s.rest_time for s in day.sets_for(name)} == {90}

    def test_descending_ascending_short_pyramid(self, sample_exercises):
        day = _generate(
            sample_exercises, method_techniques=["Descending-Ascending Sets"]
        ).days[0]
        for name in day.exercise_names:
            sets = day.sets_for(name)
            if _is_compound(name):
                assert {s.target_reps for s in sets} == {8}
            else:
                assert [s.target_reps for s in sets] == [10, 12, 10]
                assert [s.target_rir for s in sets] == [1, 2, 1]

    def test_descending_ascending_long_pyramid(self, sample_exercises):
        exercise = next(ex for ex in sample_exercises if not ex.is_compound)
        generator = RoutineGenerator(sample_exercises, random.Random(1))
        base = _Prescription(sets=5, reps=10, rir=2, rest=90)
        sets = [
            generator._build_set(
                i, base, exercise.name, exercise, [], [],
                [DESCENDING_ASCENDING_SETS], None, None, "",
            )
            for i in range(base.sets)
        ]
        assert [s.target_reps for s in sets] == [10, 11, 12, 11, 10]
        assert [s.target_rir for s in sets] == [2, 3, 3, 3, 2]


class TestVariants:
    def test_variants_are_prefixed_names(self, sample_exercises):
        routine = _generate(sample_exercises, use_variants=True, frequency=6)
        base_names = {ex.name for ex in sample_exercises}
        for day in routine.days:
            for name in day.exercise_names:
                assert any(name == b or name.endswith(" " + b) for b in base_names)

    def test_alternatives_reference_library(self, sample_exercises):
        ids = {ex.id for ex in sample_exercises}
        day = _generate(sample_exercises, alternatives_per_exercise=1).days[0]
        alternatives = {s.alternative_exercise_id for s in day.exercise_sets}
        assert alternatives - {None} <= ids

    def test_seed_is_reproducible(self, sample_exercises):
        config = RoutineConfig(use_variants=True, start_date=date(2024, 1, 1))
        a = RoutineGenerator(sample_exercises, random.Random(7)).generate(config, "u")
        b = RoutineGenerator(sample_exercises, random.Random(7)).generate(config, "u")
        assert [d.exercise_names for d in a.days] == [d.exercise_names for d in b.days]


class TestValidation:
    @pytest.mark.parametrize(
        "kwargs",
        [
            {"frequency": 0},
            {"frequency": 8},
            {"duration_weeks": 0},
            {"alternatives_per_exercise": -1},
            {"deload_frequency": 0},
            {"techniques": ["Unknown"]},
            {"method_techniques": ["Unknown"]},
            {"long_term_plan": "Unknown"},
            {"progression_method": "Unknown"},
            {"deload_strategy": "nonsense"},
        ],
    )
    def test_invalid_config(self, sample_exercises, kwargs):
        with pytest.raises(ValidationError):
            _generate(sample_exercises, **kwargs)

    def test_empty_library(self):
        with pytest.raises(ValidationError):
            _generate([])

    def test_from_dict(self):
        config = RoutineConfig.from_dict(
            {
                "goal": "strength",
                "split": "upper_lower",
                "frequency": 5,
                "start_date": "2024-02-01",
                "progression_method": None,
                "unknown": 1,
            }
        )
        assert config.goal == TrainingGoal.STRENGTH
        assert config.split == SplitType.UPPER_LOWER
        assert config.start_date == date(2024, 2, 1)
        assert config.progression_method == "Double Progression"

    def test_from_dict_bad_enum(self):
        with pytest.raises(ValidationError):
            RoutineConfig.from_dict({"goal": "flying"})


def test_summary_lists_days(sample_exercises):
    routine = _generate(sample_exercises, frequency=2)
    summary = routine_summary(routine)
    assert routine.name in summary
    for day in routine.days:
        assert day.name in summary
