"""Profile routes."""

from fastapi import APIRouter

from ...models.user_profile import Profile
from ...services.profiles import (
    create_profile,
    get_or_default_profile,
    get_profile,
    update_profile,
)
from ..schemas import ProfileCreate, ProfileUpdate

router = APIRouter(prefix="/api/profile", tags=["profile"])


@router.post("/create", status_code=201)
async def create(body: ProfileCreate):
    """Create a profile; falls back to a minimal row if the full insert fails."""
    profile = await create_profile(Profile(**body.model_dump()))
    return {"success": True, "profile": profile.to_view()}


@router.get("/{user_id}")
async def show(user_id: str):
    profile = await get_profile(user_id)
    return {"profile": profile.to_view()}


@router.put("/{user_id}")
async def update(user_id: str, body: ProfileUpdate):
    """Apply the provided fields, creating the profile if needed."""
    profile = await get_or_default_profile(user_id)
    for key, value in body.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(profile, key, value)
    saved = await update_profile(profile)
    return {"success": True, "profile": saved.to_view()}
