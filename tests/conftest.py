"""Pytest configuration and fixtures."""

import asyncio
import tempfile
from dataclasses import replace
from datetime import date
from pathlib import Path

import pytest

from routinize.config import get_settings
from routinize.db import init_db, seed_exercises
from routinize.models.exercises import COMMON_EXERCISES
from routinize.models.habits import Habit
from routinize.models.user_profile import Profile, TrainingGoal, TrainingLevel
from routinize.models.wellness import MindfulnessLog, MindfulnessType, MoodEntry, SleepEntry


@pytest.fixture
def temp_db_path():
    """Create a temporary database path."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "test.db"


@pytest.fixture
def initialized_db(temp_db_path):
    """A temporary database with every table and the exercise library."""

    async def setup():
        await init_db(temp_db_path)
        await seed_exercises(temp_db_path)

    asyncio.run(setup())
    return temp_db_path


@pytest.fixture
def data_dir(monkeypatch, tmp_path):
    """Point the settings (and default repositories) at a temporary directory."""
    monkeypatch.setenv("ROUTINIZE_DATA_DIR", str(tmp_path))
    get_settings.cache_clear()
    yield tmp_path
    get_settings.cache_clear()


@pytest.fixture
def sample_profile():
    """Create a sample profile for testing."""
    return Profile(
        user_id="user-1",
        full_name="Test User",
        weight=80.0,
        height=180.0,
        goal=TrainingGoal.HYPERTROPHY,
        level=TrainingLevel.INTERMEDIATE,
    )


@pytest.fixture
def sample_exercises():
    """The built-in exercise library with ids assigned."""
    return [
        replace(ex, id=i)
        for i, ex in enumerate(COMMON_EXERCISES, 1)
    ]


@pytest.fixture
def sample_habit():
    return Habit(user_id="user-1", title="Meditate", frequency=["daily"])


@pytest.fixture
def sample_wellness():
    """A week of mood, sleep and mindfulness entries."""
    days = [date(2024, 3, d) for d in range(1, 8)]
    moods = [MoodEntry(user_id="user-1", date=d, mood_level=4, stress_level=30) for d in days]
    sleep = [
        SleepEntry(
            user_id="user-1",
            date=d,
            duration=450,
            start_time="23:00",
            end_time="06:30",
            quality=80,
        )
        for d in days
    ]
    mindfulness = [
        MindfulnessLog(
            user_id="user-1",
            date=d,
            duration=10,
            exercise_type=MindfulnessType.MEDITATION,
        )
        for d in days[:3]
    ]
    return moods, sleep, mindfulness
