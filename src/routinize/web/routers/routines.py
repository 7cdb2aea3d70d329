"""Workout routine routes."""

import random

from fastapi import APIRouter

from ...db.repositories import ExerciseRepository, RoutineRepository
from ...errors import NotFoundError
from ...generators.routine_generator import RoutineConfig, generate_routine, routine_summary
from ...science.bodybuilding import (
    ADVANCED_TECHNIQUES,
    METHOD_TECHNIQUES,
    PROGRESSION_METHODS,
)
from ...science.mesocycles import LONG_TERM_PLANS, MESOCYCLE_CONFIGS
from ..schemas import GenerateRoutineRequest, RoutineUpdate

router = APIRouter(prefix="/api/routines", tags=["routines"])


@router.post("/generate")
async def generate(body: GenerateRoutineRequest):
    """Generate a routine, optionally saving it."""
    data = body.model_dump(exclude={"user_id", "save", "seed"})
    config = RoutineConfig.from_dict(data)
    exercises = await ExerciseRepository().list_all()
    rng = random.Random(body.seed) if body.seed is not None else None

    routine = generate_routine(config, exercises, body.user_id, rng=rng)
    if body.save:
        routine = await RoutineRepository().save(routine)

    return {
        "routine": routine.to_view(),
        "summary": routine_summary(routine),
        "saved": body.save,
    }


@router.get("/options")
async def options():
    """Techniques, progression methods, mesocycles and long-term plans."""
    return {
        "techniques": [t.to_dict() for t in ADVANCED_TECHNIQUES],
        "methodTechniques": [m.to_dict() for m in METHOD_TECHNIQUES],
        "progressionMethods": [
            {"name": p.name, "description": p.description, "example": p.example}
            for p in PROGRESSION_METHODS
        ],
        "mesocycles": [m.to_dict() for m in MESOCYCLE_CONFIGS],
        "longTermPlans": [p.to_dict() for p in LONG_TERM_PLANS],
    }


@router.get("")
async def list_routines(user_id: str, active_only: bool = False):
    routines = await RoutineRepository().list_by_user(user_id, active_only=active_only)
    return {"routines": [r.to_view() for r in routines]}


@router.get("/{routine_id}")
async def show(routine_id: str):
    routine = await RoutineRepository().get(routine_id)
    if routine is None:
        raise NotFoundError(f"Routine {routine_id} not found")
    return {"routine": routine.to_view()}


@router.put("/{routine_id}")
async def update(routine_id: str, body: RoutineUpdate):
    repo = RoutineRepository()
    routine = await repo.get(routine_id)
    if routine is None:
        raise NotFoundError(f"Routine {routine_id} not found")

    changes = {k: v for k, v in body.model_dump(exclude_unset=True).items() if v is not None}
    is_active = changes.pop("is_active", None)
    if changes:
        for key, value in changes.items():
            setattr(routine, key, value)
        await repo.save(routine)
    if is_active is not None:
        await repo.set_active(routine_id, is_active)
    routine = await repo.get(routine_id)
    return {"success": True, "routine": routine.to_view()}


@router.delete("/{routine_id}")
async def delete(routine_id: str):
    if not await RoutineRepository().delete(routine_id):
        raise NotFoundError(f"Routine {routine_id} not found")
    return {"success": True}
