"""Profile creation and updates."""

import logging
from pathlib import Path

import aiosqlite

from ..db.repositories import ProfileRepository
from ..errors import NotFoundError, StorageError, ValidationError
from ..models.user_profile import DEFAULT_FULL_NAME, Profile

logger = logging.getLogger(__name__)


async def create_profile(profile: Profile, db_path: Path | None = None) -> Profile:
    """Create a profile, falling back to a minimal row if the full insert fails.

    Raises:
        ValidationError: If the user already has a profile or has no user id
        StorageError: If both the full and the minimal insert fail
    """
    if not profile.user_id:
        raise ValidationError("user_id is required")

    repo = ProfileRepository(db_path)
    if await repo.get_by_user_id(profile.user_id):
        raise ValidationError(f"Profile already exists for user {profile.user_id}")

    try:
        profile_id = await repo.create(profile)
    except aiosqlite.IntegrityError as e:
        raise ValidationError(f"Profile already exists for user {profile.user_id}") from e
    except aiosqlite.Error as e:
        logger.warning(
            "Full profile insert failed for %s (%s); retrying with minimal fields",
            profile.user_id,
            e,
        )
        try:
            profile_id = await repo.create_minimal(
                profile.user_id, profile.full_name or DEFAULT_FULL_NAME
            )
        except aiosqlite.Error as e2:
            logger.error("Minimal profile insert failed for %s: %s", profile.user_id, e2)
            raise StorageError(f"Could not create profile for {profile.user_id}") from e2

    logger.info("Created profile %s for %s", profile_id, profile.user_id)
    return await repo.get(profile_id)


async def update_profile(profile: Profile, db_path: Path | None = None) -> Profile:
    """Save a profile, creating it if the user has none yet."""
    if not profile.user_id:
        raise ValidationError("user_id is required")
    try:
        return await ProfileRepository(db_path).upsert(profile)
    except aiosqlite.Error as e:
        logger.error("Profile update failed for %s: %s", profile.user_id, e)
        raise StorageError(f"Could not save profile for {profile.user_id}") from e


async def get_profile(user_id: str, db_path: Path | None = None) -> Profile:
    profile = await ProfileRepository(db_path).get_by_user_id(user_id)
    if profile is None:
        raise NotFoundError(f"Profile not found for user {user_id}")
    return profile


async def get_or_default_profile(user_id: str, db_path: Path | None = None) -> Profile:
    """The stored profile, or an unsaved placeholder when there is none."""
    profile = await ProfileRepository(db_path).get_by_user_id(user_id)
    if profile is None:
        return Profile(user_id=user_id)
    return profile
