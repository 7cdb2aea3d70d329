"""Habit routes."""

from fastapi import APIRouter

from ...db.repositories import HabitLogRepository, HabitRepository
from ...errors import NotFoundError
from ...models.habits import Habit
from ...services.habits import complete_habit, create_habit, habit_completion_rate
from ..schemas import HabitCompletion, HabitCreate

router = APIRouter(prefix="/api/habits", tags=["habits"])


@router.post("", status_code=201)
async def create(body: HabitCreate):
    habit = await create_habit(Habit(**body.model_dump()))
    return {"success": True, "habit": habit.to_view()}


@router.get("")
async def list_habits(user_id: str, include_inactive: bool = False):
    """Habits with their 30-day completion rate."""
    habits = await HabitRepository().list_by_user(user_id, active_only=not include_inactive)
    logs = await HabitLogRepository().list_by_user(user_id)

    items = []
    for habit in habits:
        view = habit.to_view()
        view["completionRate"] = habit_completion_rate(habit, logs)
        items.append(view)
    return {"habits": items}


@router.post("/{habit_id}/complete")
async def complete(habit_id: int, body: HabitCompletion | None = None):
    """Mark a habit done (today by default)."""
    on = body.date if body else None
    habit = await complete_habit(habit_id, on)
    return {"success": True, "habit": habit.to_view()}


@router.delete("/{habit_id}")
async def delete(habit_id: int):
    if not await HabitRepository().delete(habit_id):
        raise NotFoundError(f"Habit {habit_id} not found")
    return {"success": True}
