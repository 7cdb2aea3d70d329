"""Application settings and the storage schema.

Every table the application touches is enumerated here. The storage layer
creates tables from ``TABLE_COLUMNS`` and the structure check in
``db.engine`` compares a live database against the same definitions.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Default data directory (repository root / data)
DEFAULT_DATA_DIR = Path(__file__).parent.parent.parent / "data"


class Settings(BaseSettings):
    """Runtime configuration, read from ``ROUTINIZE_*`` environment variables."""

    data_dir: Path = Field(default=DEFAULT_DATA_DIR)
    db_filename: str = Field(default="routinize.db")
    log_level: str = Field(default="WARNING")

    # User the CLI acts for when --user is not given
    default_user_id: str = Field(default="local")

    # Seconds to wait for an avatar read before falling back to the default
    avatar_load_timeout: float = Field(default=3.0, gt=0)
    default_sleep_target_minutes: int = Field(default=480, gt=0)

    api_title: str = Field(default="routinize")
    api_version: str = Field(default="0.1.0")

    model_config = SettingsConfigDict(
        env_prefix="ROUTINIZE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_filename


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()


# Logical name -> table name
TABLES: dict[str, str] = {
    "profiles": "profiles",
    "exercises": "exercises",
    "routines": "workout_routines",
    "workout_logs": "workout_logs",
    "habits": "habits",
    "habit_logs": "habit_logs",
    "moods": "moods",
    "sleep": "sleep_entries",
    "mindfulness": "mindfulness_logs",
    "nutrition": "nutrition_entries",
    "corporate_programs": "corporate_wellness_programs",
    "corporate_challenges": "corporate_challenges",
    "challenge_participants": "challenge_participants",
    "avatars": "user_avatars",
}

# Declared for completeness; file storage is not served by this application.
STORAGE_BUCKETS: dict[str, str] = {
    "avatars": "avatars",
    "progress_photos": "progress-photos",
    "exercise_media": "exercise-media",
}

_ID = ("id", "INTEGER PRIMARY KEY AUTOINCREMENT")
_CREATED = ("created_at", "TIMESTAMP DEFAULT CURRENT_TIMESTAMP")
_UPDATED = ("updated_at", "TIMESTAMP DEFAULT CURRENT_TIMESTAMP")

# Table -> ordered (column, definition) pairs
TABLE_COLUMNS: dict[str, list[tuple[str, str]]] = {
    TABLES["profiles"]: [
        _ID,
        ("user_id", "TEXT UNIQUE NOT NULL"),
        ("full_name", "TEXT NOT NULL DEFAULT 'User'"),
        ("avatar_url", "TEXT"),
        ("weight", "REAL"),
        ("height", "REAL"),
        ("goal", "TEXT"),
        ("level", "TEXT"),
        ("is_admin", "INTEGER DEFAULT 0"),
        _CREATED,
        _UPDATED,
    ],
    TABLES["exercises"]: [
        _ID,
        ("name", "TEXT UNIQUE NOT NULL"),
        ("aliases", "TEXT DEFAULT '[]'"),
        ("muscle_groups", "TEXT NOT NULL DEFAULT '[]'"),
        ("equipment", "TEXT NOT NULL DEFAULT '[]'"),
        ("movement_pattern", "TEXT NOT NULL DEFAULT 'isolation'"),
        ("is_compound", "INTEGER DEFAULT 0"),
    ],
    TABLES["routines"]: [
        ("id", "TEXT PRIMARY KEY"),
        ("user_id", "TEXT NOT NULL"),
        ("name", "TEXT NOT NULL"),
        ("description", "TEXT DEFAULT ''"),
        ("level", "TEXT DEFAULT 'intermediate'"),
        ("goal", "TEXT DEFAULT 'hypertrophy'"),
        ("split", "TEXT DEFAULT 'custom'"),
        ("frequency", "INTEGER DEFAULT 0"),
        ("days", "TEXT DEFAULT '[]'"),
        ("is_active", "INTEGER DEFAULT 1"),
        ("start_date", "TEXT"),
        ("end_date", "TEXT"),
        ("includes_deload", "INTEGER DEFAULT 0"),
        ("deload_frequency", "INTEGER"),
        ("deload_strategy", "TEXT"),
        ("source", "TEXT DEFAULT ''"),
        ("tags", "TEXT DEFAULT '[]'"),
        _CREATED,
        _UPDATED,
    ],
    TABLES["workout_logs"]: [
        _ID,
        ("user_id", "TEXT NOT NULL"),
        ("routine_id", "TEXT"),
        ("day_id", "TEXT"),
        ("date", "TEXT NOT NULL"),
        ("duration", "INTEGER DEFAULT 0"),
        ("completed_sets", "TEXT DEFAULT '[]'"),
        ("notes", "TEXT DEFAULT ''"),
        ("perceived_effort", "INTEGER"),
        _CREATED,
    ],
    TABLES["habits"]: [
        _ID,
        ("user_id", "TEXT NOT NULL"),
        ("title", "TEXT NOT NULL"),
        ("description", "TEXT DEFAULT ''"),
        ("category", "TEXT DEFAULT 'health'"),
        ("frequency", "TEXT DEFAULT '[\"daily\"]'"),
        ("time_of_day", "TEXT"),
        ("duration", "INTEGER DEFAULT 0"),
        ("streak", "INTEGER DEFAULT 0"),
        ("longest_streak", "INTEGER DEFAULT 0"),
        ("last_completed", "TEXT"),
        ("is_active", "INTEGER DEFAULT 1"),
        _CREATED,
        _UPDATED,
    ],
    TABLES["habit_logs"]: [
        _ID,
        ("habit_id", "INTEGER NOT NULL REFERENCES habits(id) ON DELETE CASCADE"),
        ("user_id", "TEXT NOT NULL"),
        ("completed_on", "TEXT NOT NULL"),
        _CREATED,
    ],
    TABLES["moods"]: [
        _ID,
        ("user_id", "TEXT NOT NULL"),
        ("date", "TEXT NOT NULL"),
        ("mood_level", "INTEGER NOT NULL DEFAULT 3"),
        ("stress_level", "INTEGER DEFAULT 50"),
        ("sleep_hours", "REAL"),
        ("notes", "TEXT DEFAULT ''"),
        _CREATED,
    ],
    TABLES["sleep"]: [
        _ID,
        ("user_id", "TEXT NOT NULL"),
        ("date", "TEXT NOT NULL"),
        ("start_time", "TEXT"),
        ("end_time", "TEXT"),
        ("duration", "INTEGER NOT NULL DEFAULT 0"),
        ("quality", "INTEGER DEFAULT 50"),
        ("deep_sleep", "INTEGER"),
        ("rem_sleep", "INTEGER"),
        ("light_sleep", "INTEGER"),
        ("hrv", "REAL"),
        ("resting_heart_rate", "REAL"),
        ("notes", "TEXT DEFAULT ''"),
        _CREATED,
    ],
    TABLES["mindfulness"]: [
        _ID,
        ("user_id", "TEXT NOT NULL"),
        ("date", "TEXT NOT NULL"),
        ("exercise_type", "TEXT DEFAULT 'meditation'"),
        ("duration", "INTEGER NOT NULL DEFAULT 0"),
        ("notes", "TEXT DEFAULT ''"),
        _CREATED,
    ],
    TABLES["nutrition"]: [
        _ID,
        ("user_id", "TEXT NOT NULL"),
        ("date", "TEXT NOT NULL"),
        ("meal_type", "TEXT DEFAULT 'snack'"),
        ("food_name", "TEXT NOT NULL"),
        ("calories", "REAL DEFAULT 0"),
        ("protein", "REAL DEFAULT 0"),
        ("carbs", "REAL DEFAULT 0"),
        ("fat", "REAL DEFAULT 0"),
        ("notes", "TEXT DEFAULT ''"),
        _CREATED,
    ],
    TABLES["corporate_programs"]: [
        _ID,
        ("company_id", "TEXT NOT NULL"),
        ("name", "TEXT NOT NULL"),
        ("description", "TEXT DEFAULT ''"),
        ("start_date", "TEXT"),
        ("end_date", "TEXT"),
        ("goals", "TEXT DEFAULT '[]'"),
        ("participants_count", "INTEGER DEFAULT 0"),
        ("is_active", "INTEGER DEFAULT 1"),
        _CREATED,
        _UPDATED,
    ],
    TABLES["corporate_challenges"]: [
        _ID,
        (
            "program_id",
            "INTEGER NOT NULL REFERENCES corporate_wellness_programs(id) ON DELETE CASCADE",
        ),
        ("title", "TEXT NOT NULL"),
        ("description", "TEXT DEFAULT ''"),
        ("start_date", "TEXT"),
        ("end_date", "TEXT"),
        ("challenge_type", "TEXT DEFAULT 'steps'"),
        ("target_value", "REAL"),
        ("reward", "TEXT"),
        ("is_active", "INTEGER DEFAULT 1"),
        _CREATED,
    ],
    TABLES["challenge_participants"]: [
        _ID,
        (
            "challenge_id",
            "INTEGER NOT NULL REFERENCES corporate_challenges(id) ON DELETE CASCADE",
        ),
        ("user_id", "TEXT NOT NULL"),
        ("anonymous_id", "TEXT NOT NULL"),
        ("current_value", "REAL DEFAULT 0"),
        ("completed", "INTEGER DEFAULT 0"),
        ("joined_at", "TIMESTAMP DEFAULT CURRENT_TIMESTAMP"),
    ],
    TABLES["avatars"]: [
        _ID,
        ("user_id", "TEXT UNIQUE NOT NULL"),
        ("avatar_data", "TEXT NOT NULL DEFAULT '{}'"),
        _CREATED,
        _UPDATED,
    ],
}

# Table-level constraints appended to CREATE TABLE
TABLE_CONSTRAINTS: dict[str, list[str]] = {
    TABLES["habit_logs"]: ["UNIQUE (habit_id, completed_on)"],
    TABLES["challenge_participants"]: ["UNIQUE (challenge_id, user_id)"],
}

# (index name, table, column)
TABLE_INDEXES: list[tuple[str, str, str]] = [
    ("idx_routines_user", TABLES["routines"], "user_id"),
    ("idx_workout_logs_user", TABLES["workout_logs"], "user_id"),
    ("idx_habits_user", TABLES["habits"], "user_id"),
    ("idx_habit_logs_habit", TABLES["habit_logs"], "habit_id"),
    ("idx_moods_user", TABLES["moods"], "user_id"),
    ("idx_sleep_user", TABLES["sleep"], "user_id"),
    ("idx_mindfulness_user", TABLES["mindfulness"], "user_id"),
    ("idx_nutrition_user", TABLES["nutrition"], "user_id"),
    ("idx_challenges_program", TABLES["corporate_challenges"], "program_id"),
    ("idx_participants_challenge", TABLES["challenge_participants"], "challenge_id"),
]
