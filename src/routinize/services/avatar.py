"""Trainer avatar loading, customization and progression."""

import asyncio
import logging
from pathlib import Path

import aiosqlite

from ..config import get_settings
from ..db.repositories import AvatarRepository
from ..errors import ValidationError
from ..models.avatar import (
    ACCESSORY_UNLOCK_LEVELS,
    DEFAULT_CUSTOMIZATION,
    PHRASE_CATEGORIES,
    TrainerAvatar,
    default_avatar,
)

logger = logging.getLogger(__name__)

MAX_PHRASES_PER_CATEGORY = 20
EDITABLE_FIELDS = ("name", "personality", "specialization")


async def get_avatar(
    user_id: str, db_path: Path | None = None, timeout: float | None = None
) -> TrainerAvatar:
    """Load a user's avatar, never failing.

    The read is abandoned after ``timeout`` seconds (default from settings).
    A timeout or storage error returns the default avatar without saving it;
    a missing row saves and returns the default.
    """
    if timeout is None:
        timeout = get_settings().avatar_load_timeout

    repo = AvatarRepository(db_path)
    try:
        avatar = await asyncio.wait_for(repo.get(user_id), timeout)
    except asyncio.TimeoutError:
        logger.warning("Avatar load for %s timed out after %.1fs", user_id, timeout)
        return default_avatar(user_id)
    except aiosqlite.Error as e:
        logger.error("Avatar load for %s failed: %s", user_id, e)
        return default_avatar(user_id)

    if avatar is not None:
        return avatar

    avatar = default_avatar(user_id)
    try:
        await repo.create_if_missing(avatar)
    except aiosqlite.Error as e:
        logger.error("Could not store default avatar for %s: %s", user_id, e)
    return avatar


async def _load_for_update(repo: AvatarRepository, user_id: str) -> TrainerAvatar:
    avatar = await repo.get(user_id)
    return avatar or default_avatar(user_id)


async def customize_avatar(
    user_id: str, changes: dict, db_path: Path | None = None
) -> TrainerAvatar:
    """Merge partial changes into the avatar.

    ``changes`` may hold ``name``, ``personality``, ``specialization`` and a
    partial ``customization`` dict. Accessories must be unlocked at the
    avatar's current level.
    """
    repo = AvatarRepository(db_path)
    avatar = await _load_for_update(repo, user_id)

    unknown = set(changes) - {*EDITABLE_FIELDS, "customization"}
    if unknown:
        raise ValidationError(f"Unknown avatar fields: {', '.join(sorted(unknown))}")

    for key in EDITABLE_FIELDS:
        if changes.get(key):
            setattr(avatar, key, changes[key])

    customization = changes.get("customization") or {}
    unknown = set(customization) - set(DEFAULT_CUSTOMIZATION)
    if unknown:
        raise ValidationError(f"Unknown customization keys: {', '.join(sorted(unknown))}")

    accessories = customization.get("accessories")
    if accessories is not None:
        locked = [
            a for a in accessories
            if ACCESSORY_UNLOCK_LEVELS.get(a, float("inf")) > avatar.level
        ]
        if locked:
            raise ValidationError(
                f"Accessories not unlocked at level {avatar.level}: {', '.join(locked)}"
            )

    avatar.customization.update(customization)
    avatar.is_default = False
    await repo.save(avatar)
    return avatar


async def train_phrases(
    user_id: str, category: str, phrases: list[str], db_path: Path | None = None
) -> TrainerAvatar:
    """Teach the avatar new phrases for a category.

    Blank and duplicate phrases are ignored; each category keeps its newest
    phrases up to a fixed cap.
    """
    if category not in PHRASE_CATEGORIES:
        raise ValidationError(
            f"Unknown phrase category '{category}'; expected one of {', '.join(PHRASE_CATEGORIES)}"
        )

    repo = AvatarRepository(db_path)
    avatar = await _load_for_update(repo, user_id)

    current = avatar.phrases.setdefault(category, [])
    for phrase in phrases:
        phrase = phrase.strip()
        if phrase and phrase not in current:
            current.append(phrase)
    avatar.phrases[category] = current[-MAX_PHRASES_PER_CATEGORY:]

    avatar.is_default = False
    await repo.save(avatar)
    return avatar


async def award_experience(
    user_id: str, points: int, db_path: Path | None = None
) -> tuple[TrainerAvatar, bool]:
    """Add experience points. Returns the avatar and whether it levelled up."""
    if points <= 0:
        raise ValidationError("Experience points must be positive")

    repo = AvatarRepository(db_path)
    avatar = await _load_for_update(repo, user_id)
    before = avatar.level
    avatar.experience += points
    avatar.is_default = False
    await repo.save(avatar)

    levelled_up = avatar.level > before
    if levelled_up:
        logger.info("Avatar for %s reached level %d", user_id, avatar.level)
    return avatar, levelled_up
