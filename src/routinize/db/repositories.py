"""Data access layer for routinize."""

import json
from datetime import date, datetime
from pathlib import Path

import aiosqlite

from ..models.avatar import TrainerAvatar
from ..models.corporate import (
    ChallengeParticipant,
    CorporateChallenge,
    CorporateWellnessProgram,
)
from ..models.exercises import (
    Exercise,
    EquipmentType,
    MovementPattern,
    MuscleGroup,
)
from ..models.habits import Habit, HabitLog
from ..models.routine import WorkoutRoutine
from ..models.user_profile import Profile
from ..models.wellness import MindfulnessLog, MoodEntry, NutritionEntry, SleepEntry
from ..models.workout_log import WorkoutLog
from ..utils.exercise_utils import search_exercises
from .engine import get_db_path


def _timestamp(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


def _row_dict(row: aiosqlite.Row) -> dict:
    """Row as a plain dict; tolerates tables missing optional columns."""
    return {key: row[key] for key in row.keys()}


class ProfileRepository:
    """Repository for user profiles."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, profile: Profile) -> int:
        """Insert a profile with every field."""
        data = profile.to_dict()
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                INSERT INTO profiles
                (user_id, full_name, avatar_url, weight, height, goal, level, is_admin)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    data["user_id"],
                    data["full_name"],
                    data["avatar_url"],
                    data["weight"],
                    data["height"],
                    data["goal"],
                    data["level"],
                    int(data["is_admin"]),
                ),
            )
            await db.commit()
            return cursor.lastrowid

    async def create_minimal(self, user_id: str, full_name: str) -> int:
        """Insert a profile with only the required columns."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                "INSERT INTO profiles (user_id, full_name) VALUES (?, ?)",
                (user_id, full_name),
            )
            await db.commit()
            return cursor.lastrowid

    async def get(self, profile_id: int) -> Profile | None:
        """Get a profile by ID."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute("SELECT * FROM profiles WHERE id = ?", (profile_id,))
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_profile(row)

    async def get_by_user_id(self, user_id: str) -> Profile | None:
        """Get the profile owned by a user."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute("SELECT * FROM profiles WHERE user_id = ?", (user_id,))
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_profile(row)

    async def list_all(self) -> list[Profile]:
        """List all profiles, most recently updated first."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute("SELECT * FROM profiles ORDER BY updated_at DESC, id DESC")
            rows = await cursor.fetchall()
            return [self._row_to_profile(row) for row in rows]

    async def update(self, profile: Profile) -> None:
        """Update an existing profile."""
        if profile.id is None:
            raise ValueError("Profile must have an ID to update")

        data = profile.to_dict()
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                UPDATE profiles SET
                    full_name = ?, avatar_url = ?, weight = ?, height = ?,
                    goal = ?, level = ?, is_admin = ?,
                    updated_at = CURRENT_TIMESTAMP
                WHERE id = ?
                """,
                (
                    data["full_name"],
                    data["avatar_url"],
                    data["weight"],
                    data["height"],
                    data["goal"],
                    data["level"],
                    int(data["is_admin"]),
                    profile.id,
                ),
            )
            await db.commit()

    async def upsert(self, profile: Profile) -> Profile:
        """Create or update the profile for ``profile.user_id``."""
        existing = await self.get_by_user_id(profile.user_id)
        if existing:
            profile.id = existing.id
            await self.update(profile)
        else:
            profile.id = await self.create(profile)
        return await self.get(profile.id)

    async def delete(self, user_id: str) -> bool:
        """Delete a user's profile. Returns False if none existed."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute("DELETE FROM profiles WHERE user_id = ?", (user_id,))
            await db.commit()
            return cursor.rowcount > 0

    def _row_to_profile(self, row: aiosqlite.Row) -> Profile:
        """Convert a database row to a Profile."""
        data = _row_dict(row)
        return Profile.from_dict(
            data,
            id=data["id"],
            created_at=_timestamp(data.get("created_at")),
            updated_at=_timestamp(data.get("updated_at")),
        )


class ExerciseRepository:
    """Repository for the exercise library."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def get(self, exercise_id: int) -> Exercise | None:
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute("SELECT * FROM exercises WHERE id = ?", (exercise_id,))
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_exercise(row)

    async def get_by_name(self, name: str) -> Exercise | None:
        """Get an exercise by name (case-insensitive)."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM exercises WHERE name = ? COLLATE NOCASE", (name,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_exercise(row)

    async def search(self, query: str) -> list[Exercise]:
        """Search exercises by name or alias, falling back to fuzzy matching."""
        return search_exercises(query, await self.list_all())

    async def get_by_muscle_group(self, muscle_group: MuscleGroup) -> list[Exercise]:
        """Get exercises targeting a muscle group."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM exercises WHERE muscle_groups LIKE ? ORDER BY name",
                (f'%"{muscle_group.value}"%',),
            )
            rows = await cursor.fetchall()
            return [self._row_to_exercise(row) for row in rows]

    async def list_all(self) -> list[Exercise]:
        """List all exercises."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute("SELECT * FROM exercises ORDER BY name")
            rows = await cursor.fetchall()
            return [self._row_to_exercise(row) for row in rows]

    async def add(self, exercise: Exercise) -> int:
        """Add a new exercise."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                INSERT INTO exercises
                (name, aliases, muscle_groups, equipment, movement_pattern, is_compound)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    exercise.name,
                    json.dumps(exercise.aliases),
                    json.dumps([mg.value for mg in exercise.muscle_groups]),
                    json.dumps([eq.value for eq in exercise.equipment]),
                    exercise.movement_pattern.value,
                    int(exercise.is_compound),
                ),
            )
            await db.commit()
            return cursor.lastrowid

    def _row_to_exercise(self, row: aiosqlite.Row) -> Exercise:
        """Convert a database row to an Exercise."""
        return Exercise(
            id=row["id"],
            name=row["name"],
            aliases=json.loads(row["aliases"] or "[]"),
            muscle_groups=[MuscleGroup(mg) for mg in json.loads(row["muscle_groups"])],
            equipment=[EquipmentType(eq) for eq in json.loads(row["equipment"])],
            movement_pattern=MovementPattern(row["movement_pattern"]),
            is_compound=bool(row["is_compound"]),
        )


class RoutineRepository:
    """Repository for workout routines. Days and sets live in a JSON column."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, routine: WorkoutRoutine) -> str:
        data = routine.to_dict()
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                INSERT INTO workout_routines
                (id, user_id, name, description, level, goal, split, frequency, days,
                 is_active, start_date, end_date, includes_deload, deload_frequency,
                 deload_strategy, source, tags)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    data["id"],
                    data["user_id"],
                    data["name"],
                    data["description"],
                    data["level"],
                    data["goal"],
                    data["split"],
                    data["frequency"],
                    json.dumps(data["days"]),
                    int(data["is_active"]),
                    data["start_date"],
                    data["end_date"],
                    int(data["includes_deload"]),
                    data["deload_frequency"],
                    data["deload_strategy"],
                    data["source"],
                    json.dumps(data["tags"]),
                ),
            )
            await db.commit()
        return routine.id

    async def update(self, routine: WorkoutRoutine) -> None:
        data = routine.to_dict()
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                UPDATE workout_routines SET
                    name = ?, description = ?, level = ?, goal = ?, split = ?,
                    frequency = ?, days = ?, is_active = ?, start_date = ?, end_date = ?,
                    includes_deload = ?, deload_frequency = ?, deload_strategy = ?,
                    source = ?, tags = ?, updated_at = CURRENT_TIMESTAMP
                WHERE id = ?
                """,
                (
                    data["name"],
                    data["description"],
                    data["level"],
                    data["goal"],
                    data["split"],
                    data["frequency"],
                    json.dumps(data["days"]),
                    int(data["is_active"]),
                    data["start_date"],
                    data["end_date"],
                    int(data["includes_deload"]),
                    data["deload_frequency"],
                    data["deload_strategy"],
                    data["source"],
                    json.dumps(data["tags"]),
                    routine.id,
                ),
            )
            await db.commit()

    async def save(self, routine: WorkoutRoutine) -> WorkoutRoutine:
        """Insert or update a routine by ID and return the stored version."""
        if await self.get(routine.id):
            await self.update(routine)
        else:
            await self.create(routine)
        return await self.get(routine.id)

    async def get(self, routine_id: str) -> WorkoutRoutine | None:
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM workout_routines WHERE id = ?", (routine_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_routine(row)

    async def list_by_user(self, user_id: str, active_only: bool = False) -> list[WorkoutRoutine]:
        """List a user's routines, newest first."""
        query = "SELECT * FROM workout_routines WHERE user_id = ?"
        if active_only:
            query += " AND is_active = 1"
        query += " ORDER BY created_at DESC, rowid DESC"
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(query, (user_id,))
            rows = await cursor.fetchall()
            return [self._row_to_routine(row) for row in rows]

    async def set_active(self, routine_id: str, is_active: bool) -> bool:
        """Toggle a routine. Returns False if it does not exist."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                UPDATE workout_routines SET is_active = ?, updated_at = CURRENT_TIMESTAMP
                WHERE id = ?
                """,
                (int(is_active), routine_id),
            )
            await db.commit()
            return cursor.rowcount > 0

    async def delete(self, routine_id: str) -> bool:
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                "DELETE FROM workout_routines WHERE id = ?", (routine_id,)
            )
            await db.commit()
            return cursor.rowcount > 0

    def _row_to_routine(self, row: aiosqlite.Row) -> WorkoutRoutine:
        """Convert a database row to a WorkoutRoutine."""
        data = _row_dict(row)
        data["days"] = json.loads(data["days"] or "[]")
        data["tags"] = json.loads(data["tags"] or "[]")
        return WorkoutRoutine.from_dict(
            data,
            created_at=_timestamp(data.get("created_at")),
            updated_at=_timestamp(data.get("updated_at")),
        )


class WorkoutLogRepository:
    """Repository for completed workouts."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, log: WorkoutLog) -> int:
        data = log.to_dict()
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                INSERT INTO workout_logs
                (user_id, routine_id, day_id, date, duration, completed_sets,
                 notes, perceived_effort)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    data["user_id"],
                    data["routine_id"],
                    data["day_id"],
                    data["date"],
                    data["duration"],
                    json.dumps(data["completed_sets"]),
                    data["notes"],
                    data["perceived_effort"],
                ),
            )
            await db.commit()
            return cursor.lastrowid

    async def get(self, log_id: int) -> WorkoutLog | None:
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute("SELECT * FROM workout_logs WHERE id = ?", (log_id,))
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_log(row)

    async def list_by_user(
        self,
        user_id: str,
        start: date | None = None,
        end: date | None = None,
    ) -> list[WorkoutLog]:
        """List a user's workouts in an inclusive date range, newest first."""
        query = "SELECT * FROM workout_logs WHERE user_id = ?"
        params: list = [user_id]
        if start:
            query += " AND date >= ?"
            params.append(start.isoformat())
        if end:
            query += " AND date <= ?"
            params.append(end.isoformat())
        query += " ORDER BY date DESC, id DESC"

        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(query, params)
            rows = await cursor.fetchall()
            return [self._row_to_log(row) for row in rows]

    async def delete(self, log_id: int) -> bool:
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute("DELETE FROM workout_logs WHERE id = ?", (log_id,))
            await db.commit()
            return cursor.rowcount > 0

    def _row_to_log(self, row: aiosqlite.Row) -> WorkoutLog:
        data = _row_dict(row)
        data["completed_sets"] = json.loads(data["completed_sets"] or "[]")
        return WorkoutLog.from_dict(
            data, id=data["id"], created_at=_timestamp(data.get("created_at"))
        )


class HabitRepository:
    """Repository for habits."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, habit: Habit) -> int:
        data = habit.to_dict()
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                INSERT INTO habits
                (user_id, title, description, category, frequency, time_of_day,
                 duration, streak, longest_streak, last_completed, is_active)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    data["user_id"],
                    data["title"],
                    data["description"],
                    data["category"],
                    json.dumps(data["frequency"]),
                    data["time_of_day"],
                    data["duration"],
                    data["streak"],
                    data["longest_streak"],
                    data["last_completed"],
                    int(data["is_active"]),
                ),
            )
            await db.commit()
            return cursor.lastrowid

    async def get(self, habit_id: int) -> Habit | None:
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute("SELECT * FROM habits WHERE id = ?", (habit_id,))
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_habit(row)

    async def list_by_user(self, user_id: str, active_only: bool = True) -> list[Habit]:
        query = "SELECT * FROM habits WHERE user_id = ?"
        if active_only:
            query += " AND is_active = 1"
        query += " ORDER BY id"
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(query, (user_id,))
            rows = await cursor.fetchall()
            return [self._row_to_habit(row) for row in rows]

    async def update(self, habit: Habit) -> None:
        """Update an existing habit."""
        if habit.id is None:
            raise ValueError("Habit must have an ID to update")

        data = habit.to_dict()
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                UPDATE habits SET
                    title = ?, description = ?, category = ?, frequency = ?,
                    time_of_day = ?, duration = ?, streak = ?, longest_streak = ?,
                    last_completed = ?, is_active = ?, updated_at = CURRENT_TIMESTAMP
                WHERE id = ?
                """,
                (
                    data["title"],
                    data["description"],
                    data["category"],
                    json.dumps(data["frequency"]),
                    data["time_of_day"],
                    data["duration"],
                    data["streak"],
                    data["longest_streak"],
                    data["last_completed"],
                    int(data["is_active"]),
                    habit.id,
                ),
            )
            await db.commit()

    async def delete(self, habit_id: int) -> bool:
        """Delete a habit and its completion logs."""
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute("PRAGMA foreign_keys = ON")
            cursor = await db.execute("DELETE FROM habits WHERE id = ?", (habit_id,))
            await db.commit()
            return cursor.rowcount > 0

    def _row_to_habit(self, row: aiosqlite.Row) -> Habit:
        data = _row_dict(row)
        data["frequency"] = json.loads(data["frequency"] or "[]")
        return Habit.from_dict(
            data,
            id=data["id"],
            created_at=_timestamp(data.get("created_at")),
            updated_at=_timestamp(data.get("updated_at")),
        )


class HabitLogRepository:
    """Repository for habit completions. One row per habit per day."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, log: HabitLog) -> int:
        """Record a completion. Raises IntegrityError if the day is already logged."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                "INSERT INTO habit_logs (habit_id, user_id, completed_on) VALUES (?, ?, ?)",
                (log.habit_id, log.user_id, log.completed_on.isoformat()),
            )
            await db.commit()
            return cursor.lastrowid

    async def exists(self, habit_id: int, on: date) -> bool:
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT 1 FROM habit_logs WHERE habit_id = ? AND completed_on = ?",
                (habit_id, on.isoformat()),
            )
            return await cursor.fetchone() is not None

    async def list_by_user(self, user_id: str, since: date | None = None) -> list[HabitLog]:
        query = "SELECT * FROM habit_logs WHERE user_id = ?"
        params: list = [user_id]
        if since:
            query += " AND completed_on >= ?"
            params.append(since.isoformat())
        query += " ORDER BY completed_on"
        return await self._fetch(query, params)

    async def _fetch(self, query: str, params: list) -> list[HabitLog]:
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(query, params)
            rows = await cursor.fetchall()
            return [
                HabitLog(
                    id=row["id"],
                    habit_id=row["habit_id"],
                    user_id=row["user_id"],
                    completed_on=date.fromisoformat(row["completed_on"]),
                )
                for row in rows
            ]


class _EntryRepository:
    """Shared CRUD for dated per-user wellness entries.

    Subclasses set ``table`` and ``model``; the model's ``to_dict`` keys are
    the table's columns.
    """

    table: str
    model: type

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, entry) -> int:
        data = entry.to_dict()
        columns = ", ".join(data)
        placeholders = ", ".join("?" for _ in data)
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                f"INSERT INTO {self.table} ({columns}) VALUES ({placeholders})",
                tuple(data.values()),
            )
            await db.commit()
            return cursor.lastrowid

    async def list_by_user(
        self,
        user_id: str,
        start: date | None = None,
        end: date | None = None,
        limit: int | None = None,
    ) -> list:
        """Entries for a user in an inclusive date range, newest first."""
        query = f"SELECT * FROM {self.table} WHERE user_id = ?"
        params: list = [user_id]
        if start:
            query += " AND date >= ?"
            params.append(start.isoformat())
        if end:
            query += " AND date <= ?"
            params.append(end.isoformat())
        query += " ORDER BY date DESC, id DESC"
        if limit:
            query += " LIMIT ?"
            params.append(limit)

        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(query, params)
            rows = await cursor.fetchall()
            return [self.model.from_dict(_row_dict(row), id=row["id"]) for row in rows]

    async def delete(self, entry_id: int) -> bool:
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(f"DELETE FROM {self.table} WHERE id = ?", (entry_id,))
            await db.commit()
            return cursor.rowcount > 0


class MoodRepository(_EntryRepository):
    table = "moods"
    model = MoodEntry


class SleepRepository(_EntryRepository):
    table = "sleep_entries"
    model = SleepEntry


class MindfulnessRepository(_EntryRepository):
    table = "mindfulness_logs"
    model = MindfulnessLog


class NutritionRepository(_EntryRepository):
    table = "nutrition_entries"
    model = NutritionEntry


class CorporateProgramRepository:
    """Repository for corporate wellness programs."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, program: CorporateWellnessProgram) -> int:
        data = program.to_dict()
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                INSERT INTO corporate_wellness_programs
                (company_id, name, description, start_date, end_date, goals,
                 participants_count, is_active)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    data["company_id"],
                    data["name"],
                    data["description"],
                    data["start_date"],
                    data["end_date"],
                    json.dumps(data["goals"]),
                    data["participants_count"],
                    int(data["is_active"]),
                ),
            )
            await db.commit()
            return cursor.lastrowid

    async def get(self, program_id: int) -> CorporateWellnessProgram | None:
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM corporate_wellness_programs WHERE id = ?", (program_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_program(row)

    async def list_by_company(self, company_id: str | None = None) -> list[CorporateWellnessProgram]:
        """List programs, optionally for a single company."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            if company_id:
                cursor = await db.execute(
                    "SELECT * FROM corporate_wellness_programs WHERE company_id = ? ORDER BY id",
                    (company_id,),
                )
            else:
                cursor = await db.execute("SELECT * FROM corporate_wellness_programs ORDER BY id")
            rows = await cursor.fetchall()
            return [self._row_to_program(row) for row in rows]

    async def increment_participants(self, program_id: int, amount: int = 1) -> None:
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                UPDATE corporate_wellness_programs
                SET participants_count = participants_count + ?, updated_at = CURRENT_TIMESTAMP
                WHERE id = ?
                """,
                (amount, program_id),
            )
            await db.commit()

    def _row_to_program(self, row: aiosqlite.Row) -> CorporateWellnessProgram:
        data = _row_dict(row)
        data["goals"] = json.loads(data["goals"] or "[]")
        return CorporateWellnessProgram.from_dict(
            data, id=data["id"], created_at=_timestamp(data.get("created_at"))
        )


class ChallengeRepository:
    """Repository for corporate challenges."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, challenge: CorporateChallenge) -> int:
        data = challenge.to_dict()
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                INSERT INTO corporate_challenges
                (program_id, title, description, start_date, end_date,
                 challenge_type, target_value, reward, is_active)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    data["program_id"],
                    data["title"],
                    data["description"],
                    data["start_date"],
                    data["end_date"],
                    data["challenge_type"],
                    data["target_value"],
                    data["reward"],
                    int(data["is_active"]),
                ),
            )
            await db.commit()
            return cursor.lastrowid

    async def get(self, challenge_id: int) -> CorporateChallenge | None:
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM corporate_challenges WHERE id = ?", (challenge_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return CorporateChallenge.from_dict(_row_dict(row), id=row["id"])

    async def list_by_program(self, program_id: int) -> list[CorporateChallenge]:
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM corporate_challenges WHERE program_id = ? ORDER BY id",
                (program_id,),
            )
            rows = await cursor.fetchall()
            return [CorporateChallenge.from_dict(_row_dict(row), id=row["id"]) for row in rows]


class ParticipantRepository:
    """Repository for challenge participants."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, participant: ChallengeParticipant) -> int:
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                INSERT INTO challenge_participants
                (challenge_id, user_id, anonymous_id, current_value, completed)
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    participant.challenge_id,
                    participant.user_id,
                    participant.anonymous_id,
                    participant.current_value,
                    int(participant.completed),
                ),
            )
            await db.commit()
            return cursor.lastrowid

    async def get(self, challenge_id: int, user_id: str) -> ChallengeParticipant | None:
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM challenge_participants WHERE challenge_id = ? AND user_id = ?",
                (challenge_id, user_id),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_participant(row)

    async def list_by_challenge(self, challenge_id: int) -> list[ChallengeParticipant]:
        """Participants ordered by progress, highest first."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                """
                SELECT * FROM challenge_participants WHERE challenge_id = ?
                ORDER BY current_value DESC, joined_at, id
                """,
                (challenge_id,),
            )
            rows = await cursor.fetchall()
            return [self._row_to_participant(row) for row in rows]

    async def update_progress(self, participant_id: int, value: float, completed: bool) -> None:
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                UPDATE challenge_participants SET current_value = ?, completed = ?
                WHERE id = ?
                """,
                (value, int(completed), participant_id),
            )
            await db.commit()

    def _row_to_participant(self, row: aiosqlite.Row) -> ChallengeParticipant:
        return ChallengeParticipant(
            id=row["id"],
            challenge_id=row["challenge_id"],
            user_id=row["user_id"],
            anonymous_id=row["anonymous_id"],
            current_value=row["current_value"] or 0.0,
            completed=bool(row["completed"]),
            joined_at=_timestamp(row["joined_at"]),
        )


class AvatarRepository:
    """Repository for trainer avatars, one JSON document per user."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def get(self, user_id: str) -> TrainerAvatar | None:
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM user_avatars WHERE user_id = ?", (user_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return TrainerAvatar.from_dict(
                user_id,
                json.loads(row["avatar_data"] or "{}"),
                updated_at=_timestamp(row["updated_at"]),
            )

    async def save(self, avatar: TrainerAvatar) -> None:
        """Insert or replace the user's avatar document."""
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                INSERT INTO user_avatars (user_id, avatar_data) VALUES (?, ?)
                ON CONFLICT(user_id) DO UPDATE SET
                    avatar_data = excluded.avatar_data,
                    updated_at = CURRENT_TIMESTAMP
                """,
                (avatar.user_id, json.dumps(avatar.to_dict())),
            )
            await db.commit()

    async def create_if_missing(self, avatar: TrainerAvatar) -> bool:
        """Store ``avatar`` unless the user already has one. True if inserted."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                "INSERT OR IGNORE INTO user_avatars (user_id, avatar_data) VALUES (?, ?)",
                (avatar.user_id, json.dumps(avatar.to_dict())),
            )
            await db.commit()
            return cursor.rowcount > 0
