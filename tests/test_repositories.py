"""Tests for the SQLite repositories."""

import asyncio
import random
from datetime import date

import aiosqlite
import pytest

from routinize.db import (
    AvatarRepository,
    ExerciseRepository,
    HabitLogRepository,
    HabitRepository,
    MoodRepository,
    NutritionRepository,
    ProfileRepository,
    RoutineRepository,
    SleepRepository,
    WorkoutLogRepository,
)
from routinize.generators.routine_generator import RoutineConfig, generate_routine
from routinize.models.avatar import default_avatar
from routinize.models.exercises import COMMON_EXERCISES, MuscleGroup
from routinize.models.habits import HabitLog
from routinize.models.wellness import MoodEntry, NutritionEntry, SleepEntry
from routinize.models.workout_log import CompletedSet, WorkoutLog


class TestProfileRepository:
    def test_create_and_get(self, initialized_db, sample_profile):
        async def run():
            repo = ProfileRepository(initialized_db)
            profile_id = await repo.create(sample_profile)
            return await repo.get(profile_id), await repo.get_by_user_id("user-1")

        by_id, by_user = asyncio.run(run())
        assert by_id.full_name == "Test User"
        assert by_user.id == by_id.id
        assert by_id.created_at is not None

    def test_user_id_unique(self, initialized_db, sample_profile):
        async def run():
            repo = ProfileRepository(initialized_db)
            await repo.create(sample_profile)
            await repo.create(sample_profile)

        with pytest.raises(aiosqlite.IntegrityError):
            asyncio.run(run())

    def test_update_requires_id(self, initialized_db, sample_profile):
        with pytest.raises(ValueError):
            asyncio.run(ProfileRepository(initialized_db).update(sample_profile))

    def test_upsert_creates_then_updates(self, initialized_db, sample_profile):
        async def run():
            repo = ProfileRepository(initialized_db)
            first = await repo.upsert(sample_profile)
            sample_profile.weight = 85.0
            sample_profile.id = None
            second = await repo.upsert(sample_profile)
            return first, second, await repo.list_all()

        first, second, everyone = asyncio.run(run())
        assert first.id == second.id
        assert second.weight == 85.0
        assert len(everyone) == 1

    def test_delete(self, initialized_db, sample_profile):
        async def run():
            repo = ProfileRepository(initialized_db)
            await repo.create(sample_profile)
            return await repo.delete("user-1"), await repo.delete("user-1")

        assert asyncio.run(run()) == (True, False)


class TestExerciseRepository:
    def test_seeded_library(self, initialized_db):
        exercises = asyncio.run(ExerciseRepository(initialized_db).list_all())
        assert len(exercises) == len(COMMON_EXERCISES)
        assert all(ex.id for ex in exercises)

    def test_get_by_name_case_insensitive(self, initialized_db):
        exercise = asyncio.run(ExerciseRepository(initialized_db).get_by_name("bench press"))
        assert exercise.name == "Bench Press"

    def test_by_muscle(self, initialized_db):
        exercises = asyncio.run(
            ExerciseRepository(initialized_db).get_by_muscle_group(MuscleGroup.HAMSTRINGS)
        )
        assert exercises
        assert all(MuscleGroup.HAMSTRINGS in ex.muscle_groups for ex in exercises)

    def test_search_by_alias(self, initialized_db):
        results = asyncio.run(ExerciseRepository(initialized_db).search("BB Row"))
        assert [ex.name for ex in results] == ["Barbell Row"]


class TestRoutineRepository:
    def _routine(self, exercises, user_id="user-1"):
        return generate_routine(
            RoutineConfig(frequency=3), exercises, user_id, rng=random.Random(1)
        )

    def test_save_and_get_round_trip(self, initialized_db, sample_exercises):
        routine = self._routine(sample_exercises)

        async def run():
            repo = RoutineRepository(initialized_db)
            await repo.save(routine)
            return await repo.get(routine.id)

        stored = asyncio.run(run())
        assert stored.name == routine.name
        assert len(stored.days) == 3
        assert stored.days[0].id == routine.days[0].id
        assert stored.total_sets == routine.total_sets
        assert stored.tags == routine.tags

    def test_save_updates_existing(self, initialized_db, sample_exercises):
        routine = self._routine(sample_exercises)

        async def run():
            repo = RoutineRepository(initialized_db)
            await repo.save(routine)
            routine.name = "Renamed"
            await repo.save(routine)
            return await repo.list_by_user("user-1")

        routines = asyncio.run(run())
        assert [r.name for r in routines] == ["Renamed"]

    def test_active_filter_and_delete(self, initialized_db, sample_exercises):
        a = self._routine(sample_exercises)
        b = self._routine(sample_exercises)

        async def run():
            repo = RoutineRepository(initialized_db)
            await repo.save(a)
            await repo.save(b)
            await repo.set_active(a.id, False)
            active = await repo.list_by_user("user-1", active_only=True)
            deleted = await repo.delete(b.id)
            return active, deleted, await repo.get(b.id)

        active, deleted, missing = asyncio.run(run())
        assert [r.id for r in active] == [b.id]
        assert deleted
        assert missing is None

    def test_set_active_missing_routine(self, initialized_db):
        async def run():
            return await RoutineRepository(initialized_db).set_active("missing", True)

        assert asyncio.run(run()) is False


class TestWorkoutLogRepository:
    def test_date_range(self, initialized_db):
        async def run():
            repo = WorkoutLogRepository(initialized_db)
            for day in (1, 5, 10):
                await repo.create(
                    WorkoutLog(
                        user_id="user-1",
                        date=date(2024, 3, day),
                        completed_sets=[CompletedSet("Squat", reps=5, weight=100)],
                    )
                )
            return await repo.list_by_user("user-1", date(2024, 3, 2), date(2024, 3, 10))

        logs = asyncio.run(run())
        assert [log.date.day for log in logs] == [10, 5]
        assert logs[0].completed_sets[0].exercise_name == "Squat"


class TestHabitRepositories:
    def test_duplicate_day_rejected(self, initialized_db, sample_habit):
        async def run():
            habit_id = await HabitRepository(initialized_db).create(sample_habit)
            logs = HabitLogRepository(initialized_db)
            log = HabitLog(habit_id=habit_id, user_id="user-1", completed_on=date(2024, 3, 1))
            await logs.create(log)
            await logs.create(log)

        with pytest.raises(aiosqlite.IntegrityError):
            asyncio.run(run())

    def test_delete_cascades_to_logs(self, initialized_db, sample_habit):
        async def run():
            habits = HabitRepository(initialized_db)
            logs = HabitLogRepository(initialized_db)
            habit_id = await habits.create(sample_habit)
            await logs.create(
                HabitLog(habit_id=habit_id, user_id="user-1", completed_on=date(2024, 3, 1))
            )
            await habits.delete(habit_id)
            return await logs.list_by_user("user-1")

        assert asyncio.run(run()) == []

    def test_frequency_round_trip(self, initialized_db, sample_habit):
        sample_habit.frequency = ["monday", "friday"]

        async def run():
            repo = HabitRepository(initialized_db)
            return await repo.get(await repo.create(sample_habit))

        assert asyncio.run(run()).frequency == ["monday", "friday"]


class TestEntryRepositories:
    def test_mood_newest_first_with_limit(self, initialized_db):
        async def run():
            repo = MoodRepository(initialized_db)
            for day in range(1, 6):
                await repo.create(
                    MoodEntry(user_id="user-1", date=date(2024, 3, day), mood_level=day)
                )
            return await repo.list_by_user("user-1", limit=2)

        moods = asyncio.run(run())
        assert [m.mood_level for m in moods] == [5, 4]

    def test_sleep_round_trip(self, initialized_db):
        entry = SleepEntry(
            user_id="user-1",
            date=date(2024, 3, 1),
            duration=420,
            start_time="23:15",
            end_time="06:15",
            quality=70,
            deep_sleep=90,
        )

        async def run():
            repo = SleepRepository(initialized_db)
            await repo.create(entry)
            return await repo.list_by_user("user-1")

        stored = asyncio.run(run())[0]
        assert stored.start_time == "23:15"
        assert stored.deep_sleep == 90

    def test_users_are_isolated(self, initialized_db):
        async def run():
            repo = NutritionRepository(initialized_db)
            await repo.create(
                NutritionEntry(user_id="a", date=date(2024, 3, 1), food_name="Rice")
            )
            return await repo.list_by_user("b")

        assert asyncio.run(run()) == []


class TestAvatarRepository:
    def test_create_if_missing_only_once(self, initialized_db):
        async def run():
            repo = AvatarRepository(initialized_db)
            first = await repo.create_if_missing(default_avatar("user-1"))
            second = await repo.create_if_missing(default_avatar("user-1"))
            return first, second, await repo.get("user-1")

        first, second, stored = asyncio.run(run())
        assert first and not second
        assert stored.name == "Coach"
        assert not stored.is_default

    def test_save_overwrites(self, initialized_db):
        avatar = default_avatar("user-1")
        avatar.name = "Rex"
        avatar.experience = 150

        async def run():
            repo = AvatarRepository(initialized_db)
            await repo.save(default_avatar("user-1"))
            await repo.save(avatar)
            return await repo.get("user-1")

        stored = asyncio.run(run())
        assert stored.name == "Rex"
        assert stored.level == 2
