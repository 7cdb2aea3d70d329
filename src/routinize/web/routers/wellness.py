"""Mood, sleep, mindfulness and nutrition routes."""

from datetime import date

from fastapi import APIRouter

from ...db.repositories import (
    MindfulnessRepository,
    MoodRepository,
    NutritionRepository,
    SleepRepository,
)
from ...models.wellness import MindfulnessLog, MoodEntry, NutritionEntry, SleepEntry
from ..schemas import MindfulnessCreate, MoodCreate, NutritionCreate, SleepCreate

router = APIRouter(prefix="/api/wellness", tags=["wellness"])


async def _store(repo, entry) -> dict:
    entry.id = await repo.create(entry)
    return {"success": True, "entry": entry.to_view()}


async def _list(repo, user_id: str, start: date | None, end: date | None, limit: int | None):
    entries = await repo.list_by_user(user_id, start, end, limit)
    return {"entries": [e.to_view() for e in entries]}


@router.post("/mood", status_code=201)
async def log_mood(body: MoodCreate):
    return await _store(MoodRepository(), MoodEntry(**body.model_dump()))


@router.get("/mood")
async def list_moods(
    user_id: str, start: date | None = None, end: date | None = None, limit: int | None = None
):
    return await _list(MoodRepository(), user_id, start, end, limit)


@router.post("/sleep", status_code=201)
async def log_sleep(body: SleepCreate):
    return await _store(SleepRepository(), SleepEntry(**body.model_dump()))


@router.get("/sleep")
async def list_sleep(
    user_id: str, start: date | None = None, end: date | None = None, limit: int | None = None
):
    return await _list(SleepRepository(), user_id, start, end, limit)


@router.post("/mindfulness", status_code=201)
async def log_mindfulness(body: MindfulnessCreate):
    return await _store(MindfulnessRepository(), MindfulnessLog(**body.model_dump()))


@router.get("/mindfulness")
async def list_mindfulness(
    user_id: str, start: date | None = None, end: date | None = None, limit: int | None = None
):
    return await _list(MindfulnessRepository(), user_id, start, end, limit)


@router.post("/nutrition", status_code=201)
async def log_nutrition(body: NutritionCreate):
    return await _store(NutritionRepository(), NutritionEntry(**body.model_dump()))


@router.get("/nutrition")
async def list_nutrition(
    user_id: str, start: date | None = None, end: date | None = None, limit: int | None = None
):
    return await _list(NutritionRepository(), user_id, start, end, limit)
