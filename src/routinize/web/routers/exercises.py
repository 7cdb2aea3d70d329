"""Exercise library routes."""

from fastapi import APIRouter

from ...db.repositories import ExerciseRepository
from ...errors import NotFoundError
from ...models.exercises import MuscleGroup
from ...utils.exercise_utils import group_exercises_by_region

router = APIRouter(prefix="/api/exercises", tags=["exercises"])


@router.get("")
async def list_exercises(
    q: str | None = None,
    muscle: MuscleGroup | None = None,
    grouped: bool = False,
):
    """List exercises, optionally filtered by search text or muscle group."""
    repo = ExerciseRepository()
    if q:
        exercises = await repo.search(q)
    elif muscle:
        exercises = await repo.get_by_muscle_group(muscle)
    else:
        exercises = await repo.list_all()

    if grouped:
        return {
            "exercises": {
                region: [ex.to_view() for ex in items]
                for region, items in group_exercises_by_region(exercises).items()
            }
        }
    return {"exercises": [ex.to_view() for ex in exercises]}


@router.get("/{exercise_id}")
async def show(exercise_id: int):
    exercise = await ExerciseRepository().get(exercise_id)
    if exercise is None:
        raise NotFoundError(f"Exercise {exercise_id} not found")
    return {"exercise": exercise.to_view()}
