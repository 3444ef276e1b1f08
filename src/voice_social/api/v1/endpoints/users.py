"""User profile endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Path

from voice_social.schemas.common import ERROR_RESPONSES, MAX_FID
from voice_social.schemas.user import ProfileFields, UserOut, UserSave
from voice_social.schemas.voice import ProfileOut
from voice_social.services.identity import upsert_user
from voice_social.services.profiles import get_profile

from ..dependencies import SessionDep, WelcomeNotifierDep

router = APIRouter(prefix="/users", tags=["users"], responses=ERROR_RESPONSES)


@router.post("/save", response_model=UserOut)
async def save_user(body: UserSave, db: SessionDep, notifier: WelcomeNotifierDep) -> UserOut:
    """Create the user or update the profile fields that were sent."""
    profile = ProfileFields.model_validate(body.model_dump(exclude={"fid"}))
    user, created = upsert_user(db, body.fid, profile)
    db.commit()
    if created:
        await notifier.notify(user.fid, user.display_name or user.username)
    return UserOut.model_validate(user)


@router.get("/{fid}", response_model=ProfileOut)
async def read_profile(db: SessionDep, fid: int = Path(..., gt=0, le=MAX_FID)) -> ProfileOut:
    """Return a profile with stats, rank and voices."""
    return get_profile(db, fid)
