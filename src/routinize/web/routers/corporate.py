"""Corporate wellness routes."""

from fastapi import APIRouter, Query

from ...db.repositories import ChallengeRepository, CorporateProgramRepository
from ...errors import NotFoundError
from ...models.corporate import CorporateChallenge, CorporateWellnessProgram
from ...services.corporate import (
    challenge_leaderboard,
    create_challenge,
    create_program,
    join_challenge,
    update_challenge_progress,
)
from ..schemas import ChallengeCreate, ChallengeJoin, ChallengeProgress, ProgramCreate

router = APIRouter(prefix="/api/corporate", tags=["corporate"])


@router.post("/programs", status_code=201)
async def new_program(body: ProgramCreate):
    program = await create_program(CorporateWellnessProgram(**body.model_dump()))
    return {"success": True, "program": program.to_view()}


@router.get("/programs")
async def list_programs(company_id: str | None = None):
    programs = await CorporateProgramRepository().list_by_company(company_id)
    return {"programs": [p.to_view() for p in programs]}


@router.get("/programs/{program_id}")
async def show_program(program_id: int):
    program = await CorporateProgramRepository().get(program_id)
    if program is None:
        raise NotFoundError(f"Program {program_id} not found")
    challenges = await ChallengeRepository().list_by_program(program_id)
    return {
        "program": program.to_view(),
        "challenges": [c.to_view() for c in challenges],
    }


@router.post("/programs/{program_id}/challenges", status_code=201)
async def new_challenge(program_id: int, body: ChallengeCreate):
    challenge = await create_challenge(
        CorporateChallenge(program_id=program_id, **body.model_dump())
    )
    return {"success": True, "challenge": challenge.to_view()}


@router.post("/challenges/{challenge_id}/join")
async def join(challenge_id: int, body: ChallengeJoin):
    participant = await join_challenge(challenge_id, body.user_id)
    return {"success": True, "participant": participant.to_view()}


@router.post("/challenges/{challenge_id}/progress")
async def progress(challenge_id: int, body: ChallengeProgress):
    participant = await update_challenge_progress(challenge_id, body.user_id, body.value)
    return {"success": True, "participant": participant.to_view()}


@router.get("/challenges/{challenge_id}/leaderboard")
async def leaderboard(challenge_id: int, limit: int = Query(default=10, ge=1, le=100)):
    """Anonymised ranking; user ids are never exposed."""
    return {"leaderboard": await challenge_leaderboard(challenge_id, limit)}
