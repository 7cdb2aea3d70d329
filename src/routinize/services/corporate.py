"""Corporate wellness programs, challenges and leaderboards."""

import logging
import uuid
from pathlib import Path

import aiosqlite

from ..db.repositories import (
    ChallengeRepository,
    CorporateProgramRepository,
    ParticipantRepository,
)
from ..errors import NotFoundError, ValidationError
from ..models.corporate import (
    ChallengeParticipant,
    CorporateChallenge,
    CorporateWellnessProgram,
)

logger = logging.getLogger(__name__)


def _anonymous_id() -> str:
    return uuid.uuid4().hex[:8]


async def create_program(
    program: CorporateWellnessProgram, db_path: Path | None = None
) -> CorporateWellnessProgram:
    if not program.name.strip():
        raise ValidationError("Program name is required")
    if program.start_date and program.end_date and program.end_date < program.start_date:
        raise ValidationError("Program end date is before its start date")

    repo = CorporateProgramRepository(db_path)
    program_id = await repo.create(program)
    logger.info("Created corporate program %s for %s", program_id, program.company_id)
    return await repo.get(program_id)


async def create_challenge(
    challenge: CorporateChallenge, db_path: Path | None = None
) -> CorporateChallenge:
    if await CorporateProgramRepository(db_path).get(challenge.program_id) is None:
        raise NotFoundError(f"Program {challenge.program_id} not found")
    if challenge.target_value is not None and challenge.target_value <= 0:
        raise ValidationError("target_value must be positive")

    repo = ChallengeRepository(db_path)
    challenge_id = await repo.create(challenge)
    return await repo.get(challenge_id)


async def join_challenge(
    challenge_id: int, user_id: str, db_path: Path | None = None
) -> ChallengeParticipant:
    """Enrol a user in a challenge. Joining again returns the existing entry."""
    challenge = await ChallengeRepository(db_path).get(challenge_id)
    if challenge is None:
        raise NotFoundError(f"Challenge {challenge_id} not found")

    participants = ParticipantRepository(db_path)
    existing = await participants.get(challenge_id, user_id)
    if existing:
        return existing

    try:
        await participants.create(
            ChallengeParticipant(
                challenge_id=challenge_id,
                user_id=user_id,
                anonymous_id=_anonymous_id(),
            )
        )
    except aiosqlite.IntegrityError:
        logger.info("User %s already joined challenge %s", user_id, challenge_id)
        return await participants.get(challenge_id, user_id)

    await CorporateProgramRepository(db_path).increment_participants(challenge.program_id)
    logger.info("User %s joined challenge %s", user_id, challenge_id)
    return await participants.get(challenge_id, user_id)


async def update_challenge_progress(
    challenge_id: int, user_id: str, value: float, db_path: Path | None = None
) -> ChallengeParticipant:
    """Set a participant's current value; completed when it reaches the target."""
    if value < 0:
        raise ValidationError("Progress value cannot be negative")

    challenge = await ChallengeRepository(db_path).get(challenge_id)
    if challenge is None:
        raise NotFoundError(f"Challenge {challenge_id} not found")

    participants = ParticipantRepository(db_path)
    participant = await participants.get(challenge_id, user_id)
    if participant is None:
        raise NotFoundError(f"User {user_id} has not joined challenge {challenge_id}")

    participant.current_value = value
    participant.completed = challenge.is_met_by(value)
    await participants.update_progress(participant.id, value, participant.completed)
    return participant


async def challenge_leaderboard(
    challenge_id: int, limit: int = 10, db_path: Path | None = None
) -> list[dict]:
    """Ranked anonymous progress for a challenge."""
    if await ChallengeRepository(db_path).get(challenge_id) is None:
        raise NotFoundError(f"Challenge {challenge_id} not found")

    ranked = await ParticipantRepository(db_path).list_by_challenge(challenge_id)
    return [
        {
            "rank": rank,
            "anonymousId": p.anonymous_id,
            "currentValue": p.current_value,
            "completed": p.completed,
        }
        for rank, p in enumerate(ranked[:limit], 1)
    ]
