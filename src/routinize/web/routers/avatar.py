"""Trainer avatar routes."""

from fastapi import APIRouter

from ...services.avatar import award_experience, customize_avatar, get_avatar, train_phrases
from ..schemas import AvatarCustomization, ExperienceAward, PhraseTraining

router = APIRouter(prefix="/api/avatar", tags=["avatar"])


@router.get("/{user_id}")
async def show(user_id: str):
    """Always answers; falls back to the default avatar."""
    avatar = await get_avatar(user_id)
    return {"avatar": avatar.to_view()}


@router.post("/{user_id}/customize")
async def customize(user_id: str, body: AvatarCustomization):
    changes = body.model_dump(exclude_none=True)
    avatar = await customize_avatar(user_id, changes)
    return {"success": True, "avatar": avatar.to_view()}


@router.post("/{user_id}/phrases")
async def phrases(user_id: str, body: PhraseTraining):
    avatar = await train_phrases(user_id, body.category, body.phrases)
    return {"success": True, "avatar": avatar.to_view()}


@router.post("/{user_id}/experience")
async def experience(user_id: str, body: ExperienceAward):
    avatar, levelled_up = await award_experience(user_id, body.points)
    return {"success": True, "levelledUp": levelled_up, "avatar": avatar.to_view()}
