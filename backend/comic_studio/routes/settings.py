"""
Studio settings and the caller's own profile
"""
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..auth import CurrentUser, get_current_user
from ..db import get_db
from ..schemas import StudioSettings, StudioSettingsUpdate, UserProfileSettings, UserProfileUpdate
from ..services import studio_settings as service
from ..services import user_profiles

router = APIRouter(prefix="/settings", tags=["Settings"])


@router.get("/general", response_model=StudioSettings)
async def get_general_settings(db: AsyncSession = Depends(get_db)):
    row = await service.get_studio_settings(db)
    return service.studio_settings_to_schema(row)


@router.put("/general", response_model=StudioSettings)
async def update_general_settings(payload: StudioSettingsUpdate, db: AsyncSession = Depends(get_db)):
    row = await service.update_studio_settings(db, payload.model_dump(exclude_none=True))
    return service.studio_settings_to_schema(row)


@router.get("/profile", response_model=Optional[UserProfileSettings])
async def get_profile(
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """The caller's profile, or null before it is first saved"""
    row = await user_profiles.get_user_profile(db, user.uid)
    return user_profiles.user_profile_to_schema(row) if row else None


@router.put("/profile", response_model=UserProfileSettings)
async def update_profile(
    payload: UserProfileUpdate,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    row = await user_profiles.update_user_profile(
        db,
        user.uid,
        payload.model_dump(exclude_none=True),
        fallback_email=user.email,
    )
    return user_profiles.user_profile_to_schema(row)
