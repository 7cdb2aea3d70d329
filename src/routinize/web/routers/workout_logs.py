"""Workout log routes."""

from datetime import date

from fastapi import APIRouter

from ...db.repositories import WorkoutLogRepository
from ...errors import NotFoundError
from ...models.workout_log import CompletedSet, WorkoutLog
from ..schemas import WorkoutLogCreate

router = APIRouter(prefix="/api/workout-logs", tags=["workout-logs"])


@router.post("", status_code=201)
async def create(body: WorkoutLogCreate):
    data = body.model_dump()
    data["completed_sets"] = [CompletedSet(**s) for s in data["completed_sets"]]
    log = WorkoutLog(**data)

    repo = WorkoutLogRepository()
    log_id = await repo.create(log)
    return {"success": True, "log": (await repo.get(log_id)).to_view()}


@router.get("")
async def list_logs(user_id: str, start: date | None = None, end: date | None = None):
    logs = await WorkoutLogRepository().list_by_user(user_id, start, end)
    return {"logs": [log.to_view() for log in logs]}


@router.delete("/{log_id}")
async def delete(log_id: int):
    if not await WorkoutLogRepository().delete(log_id):
        raise NotFoundError(f"Workout log {log_id} not found")
    return {"success": True}
