"""Tests for application services."""

import asyncio
from datetime import date, timedelta

import aiosqlite
import pytest

from routinize.db import AvatarRepository, CorporateProgramRepository, ProfileRepository
from routinize.errors import NotFoundError, StorageError, ValidationError
from routinize.models.corporate import CorporateChallenge, CorporateWellnessProgram
from routinize.models.habits import Habit, HabitLog
from routinize.models.wellness import (
    MindfulnessLog,
    MindfulnessType,
    MoodEntry,
    NutritionEntry,
    SleepEntry,
)
from routinize.models.workout_log import CompletedSet, WorkoutLog
from routinize.services.avatar import (
    MAX_PHRASES_PER_CATEGORY,
    award_experience,
    customize_avatar,
    get_avatar,
    train_phrases,
)
from routinize.services.corporate import (
    challenge_leaderboard,
    create_challenge,
    create_program,
    join_challenge,
    update_challenge_progress,
)
from routinize.services.dashboards import (
    mood_summary,
    nutrition_summary,
    sleep_stats,
    time_consistency,
    wellness_score,
    workout_stats,
)
from routinize.services.habits import complete_habit, create_habit, habit_completion_rate
from routinize.services.profiles import (
    create_profile,
    get_or_default_profile,
    get_profile,
    update_profile,
)


class TestProfiles:
    """Tests for profile creation and updates."""

    def test_update_is_reflected(self, initialized_db, sample_profile):
        async def run():
            created = await create_profile(sample_profile, initialized_db)
            created.weight = 82.5
            created.full_name = "Renamed"
            await update_profile(created, initialized_db)
            return await get_profile("user-1", initialized_db)

        stored = asyncio.run(run())
        assert stored.weight == 82.5
        assert stored.full_name == "Renamed"

    def test_duplicate_rejected(self, initialized_db, sample_profile):
        async def run():
            await create_profile(sample_profile, initialized_db)
            await create_profile(sample_profile, initialized_db)

        with pytest.raises(ValidationError):
            asyncio.run(run())

    def test_minimal_fallback(self, initialized_db, sample_profile, monkeypatch):
        """A failing full insert falls back to user id and name only."""

        async def broken_create(self, profile):
            raise aiosqlite.OperationalError("no such column: avatar_url")

        monkeypatch.setattr(ProfileRepository, "create", broken_create)
        stored = asyncio.run(create_profile(sample_profile, initialized_db))

        assert stored.user_id == "user-1"
        assert stored.full_name == "Test User"
        assert stored.weight is None
        assert stored.goal is None

    def test_both_inserts_failing_raises_storage_error(
        self, initialized_db, sample_profile, monkeypatch
    ):
        async def broken(self, *args):
            raise aiosqlite.OperationalError("disk I/O error")

        monkeypatch.setattr(ProfileRepository, "create", broken)
        monkeypatch.setattr(ProfileRepository, "create_minimal", broken)

        with pytest.raises(StorageError):
            asyncio.run(create_profile(sample_profile, initialized_db))

    def test_missing_profile(self, initialized_db):
        with pytest.raises(NotFoundError):
            asyncio.run(get_profile("nobody", initialized_db))

    def test_default_profile_not_saved(self, initialized_db):
        profile = asyncio.run(get_or_default_profile("nobody", initialized_db))
        assert profile.id is None
        assert profile.full_name == "User"


class TestHabits:
    """Tests for habit completion and streaks."""

    def test_double_completion_counts_once(self, initialized_db, sample_habit):
        day = date(2024, 3, 1)

        async def run():
            habit = await create_habit(sample_habit, initialized_db)
            await complete_habit(habit.id, day, initialized_db)
            return await complete_habit(habit.id, day, initialized_db)

        habit = asyncio.run(run())
        assert habit.streak == 1
        assert habit.last_completed == day

    def test_streak_grows_and_resets(self, initialized_db, sample_habit):
        start = date(2024, 3, 1)

        async def run():
            habit = await create_habit(sample_habit, initialized_db)
            for offset in (0, 1, 2):
                habit = await complete_habit(habit.id, start + timedelta(days=offset), initialized_db)
            peak = habit.streak
            habit = await complete_habit(habit.id, start + timedelta(days=5), initialized_db)
            return peak, habit

        peak, habit = asyncio.run(run())
        assert peak == 3
        assert habit.streak == 1
        assert habit.longest_streak == 3

    def test_weekly_schedule_keeps_streak(self, initialized_db):
        """Monday then Thursday is consecutive for a Mon/Thu habit."""
        habit = Habit(user_id="user-1", title="Run", frequency=["monday", "thursday"])

        async def run():
            created = await create_habit(habit, initialized_db)
            await complete_habit(created.id, date(2024, 3, 4), initialized_db)
            return await complete_habit(created.id, date(2024, 3, 7), initialized_db)

        assert asyncio.run(run()).streak == 2

    def test_backfill_keeps_streak(self, initialized_db, sample_habit):
        async def run():
            habit = await create_habit(sample_habit, initialized_db)
            await complete_habit(habit.id, date(2024, 3, 10), initialized_db)
            return await complete_habit(habit.id, date(2024, 3, 1), initialized_db)

        habit = asyncio.run(run())
        assert habit.streak == 1
        assert habit.last_completed == date(2024, 3, 10)

    def test_unknown_habit(self, initialized_db):
        with pytest.raises(NotFoundError):
            asyncio.run(complete_habit(999, db_path=initialized_db))

    @pytest.mark.parametrize(
        "title,frequency",
        [("", ["daily"]), ("Read", ["fortnightly"])],
    )
    def test_invalid_habit(self, initialized_db, title, frequency):
        habit = Habit(user_id="user-1", title=title, frequency=frequency)
        with pytest.raises(ValidationError):
            asyncio.run(create_habit(habit, initialized_db))

    def test_completion_rate(self, sample_habit):
        sample_habit.id = 1
        today = date(2024, 3, 10)
        logs = [
            HabitLog(habit_id=1, user_id="user-1", completed_on=today - timedelta(days=i))
            for i in range(5)
        ]
        assert habit_completion_rate(sample_habit, logs, days=10, today=today) == 50.0


class TestDashboards:
    """Tests for dashboard calculations."""

    def test_nutrition_summary(self):
        entries = [
            NutritionEntry("u", date(2024, 3, 1), "Oats", calories=300, protein=20, carbs=50),
            NutritionEntry("u", date(2024, 3, 1), "Eggs", calories=100, protein=10, fat=10),
            NutritionEntry("u", date(2024, 3, 2), "Shake", calories=200, protein=10),
        ]
        summary = nutrition_summary(entries)

        assert summary["totals"]["calories"] == 600
        assert summary["daily_average"]["calories"] == 300
        assert summary["days"]["2024-03-01"]["protein"] == 30
        assert summary["macro_split"] == {"protein": 35.6, "carbs": 44.4, "fat": 20.0}

    def test_nutrition_empty(self):
        summary = nutrition_summary([])
        assert summary["totals"]["calories"] == 0
        assert summary["macro_split"]["protein"] == 0.0

    def test_bedtime_consistency_wraps_midnight(self):
        assert time_consistency(["23:30", "00:30"], is_bedtime=True) == 30
        assert time_consistency(["23:30", "00:30"]) == 690

    def test_single_time_is_consistent(self):
        assert time_consistency(["23:00"], is_bedtime=True) == 0

    def test_sleep_stats(self, sample_wellness):
        _, sleep, _ = sample_wellness
        stats = sleep_stats(sleep, target_minutes=480)

        assert stats["total_entries"] == 7
        assert stats["sleep_debt"] == 7 * 30
        assert stats["consistency_score"] == 100
        assert stats["sleep_score"] == 90
        assert [t["date"] for t in stats["trend"]][0] == "2024-03-01"

    def test_sleep_trend_keeps_last_seven(self):
        entries = [
            SleepEntry("u", date(2024, 3, 1) + timedelta(days=i), duration=480)
            for i in range(10)
        ]
        stats = sleep_stats(entries, target_minutes=480)
        assert len(stats["trend"]) == 7
        assert stats["trend"][-1]["date"] == "2024-03-10"
        assert stats["sleep_debt"] == 0

    def test_sleep_stats_empty(self):
        assert sleep_stats([], target_minutes=480)["sleep_score"] == 0

    def test_wellness_score(self, sample_wellness):
        moods, sleep, mindfulness = sample_wellness
        result = wellness_score(moods, sleep, mindfulness)

        assert result["components"] == {
            "stress": 70.0,
            "mood": 80.0,
            "sleep": 80.0,
            "mindfulness": 50.0,
            "sessions": 60.0,
        }
        assert result["score"] == 71

    def test_wellness_score_without_data(self):
        assert wellness_score([], [], [])["score"] == 0

    def test_wellness_sleep_uses_quality_not_duration(self):
        sleep = [
            SleepEntry("u", date(2024, 3, 1), duration=240, quality=90),
            SleepEntry("u", date(2024, 3, 2), duration=600, quality=70),
        ]
        result = wellness_score([], sleep, [])
        assert result["components"]["sleep"] == 80.0

    def test_wellness_mindfulness_totals_minutes_over_window(self):
        logs = [
            MindfulnessLog(
                user_id="u",
                date=date(2024, 3, 1) + timedelta(days=i),
                duration=25,
                exercise_type=MindfulnessType.BODY_SCAN,
            )
            for i in range(3)
        ]
        components = wellness_score([], [], logs)["components"]
        assert components["mindfulness"] == 100.0
        assert components["sessions"] == 0.0

        components = wellness_score([], [], logs[:1])["components"]
        assert components["mindfulness"] == 41.7

    def test_mood_summary(self):
        moods = [
            MoodEntry(user_id="u", date=date(2024, 3, 2), mood_level=2, stress_level=70),
            MoodEntry(user_id="u", date=date(2024, 3, 1), mood_level=4, stress_level=20),
            MoodEntry(user_id="u", date=date(2024, 3, 3), mood_level=4, stress_level=30),
        ]
        result = mood_summary(moods)

        assert result["average_mood"] == 3.33
        assert result["average_stress"] == 40.0
        assert result["most_common_mood"] == 4
        assert [t["date"] for t in result["trend"]] == ["2024-03-01", "2024-03-02", "2024-03-03"]

    def test_workout_stats(self):
        sets = [CompletedSet("Squat", reps=5, weight=100.0)] * 3
        logs = [
            WorkoutLog(user_id="u", date=date(2024, 3, 1), completed_sets=sets, duration=50),
            WorkoutLog(user_id="u", date=date(2024, 3, 4), completed_sets=sets, duration=70),
        ]
        result = workout_stats(logs, weeks=2)

        assert result["sessions"] == 2
        assert result["total_volume"] == 3000.0
        assert result["sets_per_week"] == 3.0
        assert result["sessions_per_week"] == 1.0
        assert result["average_duration"] == 60

    def test_workout_stats_empty(self):
        assert workout_stats([])["sessions"] == 0


class TestCorporate:
    """Tests for programs, challenges and leaderboards."""

    def _setup(self, db_path, target=100):
        async def run():
            program = await create_program(
                CorporateWellnessProgram(company_id="acme", name="Spring Steps"), db_path
            )
            challenge = await create_challenge(
                CorporateChallenge(program_id=program.id, title="10k", target_value=target),
                db_path,
            )
            return program, challenge

        return asyncio.run(run())

    def test_completed_exactly_at_target(self, initialized_db):
        _, challenge = self._setup(initialized_db)

        async def run():
            await join_challenge(challenge.id, "user-1", initialized_db)
            below = await update_challenge_progress(challenge.id, "user-1", 99, initialized_db)
            at = await update_challenge_progress(challenge.id, "user-1", 100, initialized_db)
            return below.completed, at.completed

        assert asyncio.run(run()) == (False, True)

    def test_join_is_idempotent(self, initialized_db):
        program, challenge = self._setup(initialized_db)

        async def run():
            first = await join_challenge(challenge.id, "user-1", initialized_db)
            second = await join_challenge(challenge.id, "user-1", initialized_db)
            stored = await CorporateProgramRepository(initialized_db).get(program.id)
            return first, second, stored

        first, second, stored = asyncio.run(run())
        assert first.anonymous_id == second.anonymous_id
        assert stored.participants_count == 1

    def test_leaderboard_is_ranked_and_anonymous(self, initialized_db):
        _, challenge = self._setup(initialized_db)

        async def run():
            for user, value in (("a", 30), ("b", 120), ("c", 75)):
                await join_challenge(challenge.id, user, initialized_db)
                await update_challenge_progress(challenge.id, user, value, initialized_db)
            return await challenge_leaderboard(challenge.id, db_path=initialized_db)

        board = asyncio.run(run())
        assert [row["currentValue"] for row in board] == [120, 75, 30]
        assert [row["rank"] for row in board] == [1, 2, 3]
        assert board[0]["completed"]
        assert all("userId" not in row for row in board)

    def test_progress_requires_membership(self, initialized_db):
        _, challenge = self._setup(initialized_db)
        with pytest.raises(NotFoundError):
            asyncio.run(update_challenge_progress(challenge.id, "stranger", 10, initialized_db))

    def test_negative_progress(self, initialized_db):
        _, challenge = self._setup(initialized_db)
        with pytest.raises(ValidationError):
            asyncio.run(update_challenge_progress(challenge.id, "user-1", -1, initialized_db))

    def test_challenge_needs_program(self, initialized_db):
        with pytest.raises(NotFoundError):
            asyncio.run(
                create_challenge(CorporateChallenge(program_id=42, title="x"), initialized_db)
            )

    def test_program_dates_validated(self, initialized_db):
        program = CorporateWellnessProgram(
            company_id="acme",
            name="Backwards",
            start_date=date(2024, 5, 1),
            end_date=date(2024, 4, 1),
        )
        with pytest.raises(ValidationError):
            asyncio.run(create_program(program, initialized_db))


class TestAvatar:
    """Tests for avatar loading and customization."""

    def test_timeout_returns_default(self, initialized_db, monkeypatch):
        async def slow_get(self, user_id):
            await asyncio.sleep(1)

        monkeypatch.setattr(AvatarRepository, "get", slow_get)
        avatar = asyncio.run(get_avatar("user-1", db_path=initialized_db, timeout=0.05))
        assert avatar.is_default
        assert avatar.name == "Coach"

        monkeypatch.undo()
        assert asyncio.run(AvatarRepository(initialized_db).get("user-1")) is None

    def test_storage_error_returns_default(self, initialized_db, monkeypatch):
        async def broken_get(self, user_id):
            raise aiosqlite.OperationalError("no such table: user_avatars")

        monkeypatch.setattr(AvatarRepository, "get", broken_get)
        assert asyncio.run(get_avatar("user-1", db_path=initialized_db)).is_default

    def test_missing_avatar_is_persisted(self, initialized_db):
        async def run():
            first = await get_avatar("user-1", db_path=initialized_db)
            stored = await AvatarRepository(initialized_db).get("user-1")
            return first, stored

        first, stored = asyncio.run(run())
        assert first.is_default
        assert stored is not None

    def test_customize(self, initialized_db):
        changes = {"name": "Rex", "customization": {"hair_color": "black", "accessories": ["headband"]}}
        avatar = asyncio.run(customize_avatar("user-1", changes, initialized_db))
        assert avatar.name == "Rex"
        assert avatar.customization["hair_color"] == "black"
        assert avatar.customization["skin_tone"] == "medium"
        assert not avatar.is_default

    @pytest.mark.parametrize(
        "changes",
        [
            {"customization": {"accessories": ["cap"]}},
            {"customization": {"wings": True}},
            {"level": 10},
        ],
    )
    def test_customize_rejects(self, initialized_db, changes):
        with pytest.raises(ValidationError):
            asyncio.run(customize_avatar("user-1", changes, initialized_db))

    def test_train_phrases_dedupes_and_caps(self, initialized_db):
        phrases = [f"Phrase {i}" for i in range(30)] + ["Phrase 29", "  "]
        avatar = asyncio.run(train_phrases("user-1", "encouragement", phrases, initialized_db))
        stored = avatar.phrases["encouragement"]
        assert len(stored) == MAX_PHRASES_PER_CATEGORY
        assert stored[-1] == "Phrase 29"
        assert len(set(stored)) == len(stored)

    def test_train_unknown_category(self, initialized_db):
        with pytest.raises(ValidationError):
            asyncio.run(train_phrases("user-1", "insults", ["x"], initialized_db))

    def test_award_experience_levels_up(self, initialized_db):
        async def run():
            first = await award_experience("user-1", 50, initialized_db)
            second = await award_experience("user-1", 60, initialized_db)
            return first, second

        (a, up_a), (b, up_b) = asyncio.run(run())
        assert (a.level, up_a) == (1, False)
        assert (b.level, up_b) == (2, True)
        assert "wristbands" in b.unlocked_accessories

    def test_award_rejects_non_positive(self, initialized_db):
        with pytest.raises(ValidationError):
            asyncio.run(award_experience("user-1", 0, initialized_db))
