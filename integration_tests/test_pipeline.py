"""Integration tests for the full tracking flow.

These run against a real on-disk database: a profile drives routine
generation, the saved routine is trained and logged, and the dashboard
reflects the logged sessions alongside wellness entries.
"""

import asyncio
from datetime import date, timedelta

from routinize.db import (
    ExerciseRepository,
    HabitLogRepository,
    MoodRepository,
    RoutineRepository,
    SleepRepository,
    WorkoutLogRepository,
)
from routinize.generators.routine_generator import RoutineConfig, RoutineGenerator
from routinize.models.habits import Habit
from routinize.models.user_profile import Profile, TrainingGoal, TrainingLevel
from routinize.models.wellness import MoodEntry, SleepEntry
from routinize.models.workout_log import CompletedSet, WorkoutLog
from routinize.services import (
    build_dashboard,
    complete_habit,
    create_habit,
    create_profile,
    get_profile,
    habit_completion_rate,
)

TODAY = date(2024, 3, 10)


class TestPipelineIntegration:
    """Profile to routine to workout log to dashboard."""

    def test_profile_to_dashboard_flow(self, db_path):
        async def flow():
            await create_profile(
                Profile(
                    user_id="athlete",
                    full_name="Test Athlete",
                    weight=75,
                    height=178,
                    goal=TrainingGoal.STRENGTH,
                    level=TrainingLevel.ADVANCED,
                ),
                db_path,
            )
            profile = await get_profile("athlete", db_path)

            config = RoutineConfig(
                name="Strength Block",
                level=profile.level,
                goal=profile.goal,
                frequency=4,
                start_date=TODAY - timedelta(days=6),
            )
            exercises = await ExerciseRepository(db_path).list_all()
            routine = RoutineGenerator(exercises).generate(config, profile.user_id)
            saved = await RoutineRepository(db_path).save(routine)

            logs = WorkoutLogRepository(db_path)
            for offset, day in enumerate(saved.days[:3]):
                work_set = day.exercise_sets[0]
                await logs.create(
                    WorkoutLog(
                        user_id="athlete",
                        date=TODAY - timedelta(days=offset * 2),
                        routine_id=saved.id,
                        day_id=day.id,
                        duration=60,
                        completed_sets=[
                            CompletedSet(work_set.exercise_name, reps=5, weight=100.0),
                            CompletedSet(work_set.exercise_name, reps=5, weight=100.0),
                        ],
                    )
                )

            return saved, await build_dashboard("athlete", days=7, today=TODAY, db_path=db_path)

        saved, dashboard = asyncio.run(flow())

        assert saved.goal == TrainingGoal.STRENGTH
        assert len(saved.days) == 4
        assert dashboard["workouts"]["sessions"] == 3
        assert dashboard["workouts"]["total_sets"] == 6
        assert dashboard["workouts"]["total_volume"] == 3000.0
        assert dashboard["workouts"]["average_duration"] == 60

    def test_saved_routine_survives_reload(self, db_path):
        async def flow():
            exercises = await ExerciseRepository(db_path).list_all()
            config = RoutineConfig(frequency=5, techniques=["Drop Sets"])
            routine = RoutineGenerator(exercises).generate(config, "athlete")
            repo = RoutineRepository(db_path)
            await repo.save(routine)
            return routine, await repo.get(routine.id)

        generated, loaded = asyncio.run(flow())

        assert loaded.to_view()["days"] == generated.to_view()["days"]
        assert loaded.total_sets == generated.total_sets
        assert loaded.created_at is not None

    def test_wellness_and_habits_flow(self, db_path):
        async def flow():
            moods = MoodRepository(db_path)
            sleep = SleepRepository(db_path)
            for offset in range(7):
                day = TODAY - timedelta(days=offset)
                await moods.create(
                    MoodEntry(user_id="athlete", date=day, mood_level=4, stress_level=30)
                )
                await sleep.create(
                    SleepEntry(
                        user_id="athlete",
                        date=day,
                        duration=420,
                        quality=80,
                        start_time="23:30",
                        end_time="06:30",
                    )
                )

            habit = await create_habit(Habit(user_id="athlete", title="Walk"), db_path)
            for offset in (2, 1, 0):
                habit = await complete_habit(habit.id, TODAY - timedelta(days=offset), db_path)
            habit_logs = await HabitLogRepository(db_path).list_by_user("athlete")

            dashboard = await build_dashboard("athlete", days=7, today=TODAY, db_path=db_path)
            return habit, habit_logs, dashboard

        habit, habit_logs, dashboard = asyncio.run(flow())

        assert habit.streak == 3
        assert len(habit_logs) == 3
        assert habit_completion_rate(habit, habit_logs, days=7, today=TODAY) == 42.9
        assert dashboard["sleep"]["total_entries"] == 7
        assert dashboard["sleep"]["sleep_debt"] == 7 * 60
        assert dashboard["mood"]["average_mood"] == 4.0
        assert 0 < dashboard["wellness"]["score"] <= 100
