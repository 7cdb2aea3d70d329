"""Database engine setup, initialization and structure checks."""

import json
import logging
import re
from pathlib import Path

import aiosqlite

from ..config import TABLE_COLUMNS, TABLE_CONSTRAINTS, TABLE_INDEXES, get_settings

logger = logging.getLogger(__name__)


def get_db_path(data_dir: Path | None = None) -> Path:
    """Get the database file path, creating the data directory if needed."""
    settings = get_settings()
    if data_dir is None:
        data_dir = settings.data_dir
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir / settings.db_filename


def _create_table_sql(table: str) -> str:
    parts = [f"{name} {definition}" for name, definition in TABLE_COLUMNS[table]]
    parts.extend(TABLE_CONSTRAINTS.get(table, []))
    body = ",\n    ".join(parts)
    return f"CREATE TABLE IF NOT EXISTS {table} (\n    {body}\n)"


_LITERAL_DEFAULT = re.compile(r"DEFAULT\s+('(?:[^']|'')*'|-?\d+(?:\.\d+)?)")


def _addable_definition(definition: str) -> str:
    """Reduce a column definition to what ALTER TABLE ADD COLUMN accepts.

    Keeps the type and a literal default; drops keys, uniqueness, NOT NULL,
    references and non-constant defaults.
    """
    col_type = definition.split()[0]
    match = _LITERAL_DEFAULT.search(definition)
    if match:
        return f"{col_type} DEFAULT {match.group(1)}"
    return col_type


async def _existing_columns(db: aiosqlite.Connection, table: str) -> list[str]:
    cursor = await db.execute(f"PRAGMA table_info({table})")
    rows = await cursor.fetchall()
    return [row[1] for row in rows]


async def _add_missing_columns(db: aiosqlite.Connection) -> list[str]:
    """Add columns declared in the schema but absent from existing tables."""
    changes: list[str] = []
    for table, columns in TABLE_COLUMNS.items():
        present = set(await _existing_columns(db, table))
        if not present:
            continue
        for name, definition in columns:
            if name in present:
                continue
            await db.execute(
                f"ALTER TABLE {table} ADD COLUMN {name} {_addable_definition(definition)}"
            )
            changes.append(f"added column {table}.{name}")
    return changes


async def _create_indexes(db: aiosqlite.Connection) -> None:
    for index_name, table, column in TABLE_INDEXES:
        await db.execute(f"CREATE INDEX IF NOT EXISTS {index_name} ON {table}({column})")


async def init_db(db_path: Path | None = None) -> None:
    """Create every table and index, and migrate older databases."""
    if db_path is None:
        db_path = get_db_path()

    async with aiosqlite.connect(db_path) as db:
        for table in TABLE_COLUMNS:
            await db.execute(_create_table_sql(table))

        # Run migrations for existing databases
        for change in await _add_missing_columns(db):
            logger.info("Migration: %s", change)

        await _create_indexes(db)
        await db.commit()

    logger.info("Database initialized at %s", db_path)


async def seed_exercises(db_path: Path | None = None) -> int:
    """Seed the database with the built-in exercise library.

    Returns:
        Number of exercises inserted (existing names are left untouched)
    """
    from ..models.exercises import COMMON_EXERCISES

    if db_path is None:
        db_path = get_db_path()

    inserted = 0
    async with aiosqlite.connect(db_path) as db:
        for exercise in COMMON_EXERCISES:
            cursor = await db.execute(
                """
                INSERT OR IGNORE INTO exercises
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
            inserted += cursor.rowcount

        await db.commit()

    logger.info("Seeded %d exercises", inserted)
    return inserted


async def describe_structure(db_path: Path | None = None) -> dict[str, dict]:
    """Compare the live database against the declared schema.

    Returns:
        Table name -> ``{"exists", "columns", "missing_columns"}``
    """
    if db_path is None:
        db_path = get_db_path()

    structure: dict[str, dict] = {}
    async with aiosqlite.connect(db_path) as db:
        for table, columns in TABLE_COLUMNS.items():
            present = await _existing_columns(db, table)
            structure[table] = {
                "exists": bool(present),
                "columns": present,
                "missing_columns": [name for name, _ in columns if name not in present],
            }
    return structure


def missing_items(structure: dict[str, dict]) -> list[str]:
    """Flatten a structure report into ``table`` / ``table.column`` entries."""
    items: list[str] = []
    for table, info in structure.items():
        if not info["exists"]:
            items.append(table)
        else:
            items.extend(f"{table}.{col}" for col in info["missing_columns"])
    return items


async def fix_structure(db_path: Path | None = None) -> list[str]:
    """Create missing tables and add missing columns.

    Returns:
        Human-readable list of applied changes (empty when nothing was missing)
    """
    if db_path is None:
        db_path = get_db_path()

    changes: list[str] = []
    async with aiosqlite.connect(db_path) as db:
        for table in TABLE_COLUMNS:
            if not await _existing_columns(db, table):
                await db.execute(_create_table_sql(table))
                changes.append(f"created table {table}")

        changes.extend(await _add_missing_columns(db))
        await _create_indexes(db)
        await db.commit()

    for change in changes:
        logger.info("Structure fix: %s", change)
    return changes
