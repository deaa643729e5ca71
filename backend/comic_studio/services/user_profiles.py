from __future__ import annotations

from typing import Any, Mapping, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..logger import logger
from ..models import UserProfile
from ..schemas import UserProfileSettings

FIELD_MAP = {
    "displayName": "display_name",
    "email": "email",
    "avatarUrl": "avatar_url",
}


def user_profile_to_schema(row: UserProfile) -> UserProfileSettings:
    return UserProfileSettings(
        uid=row.uid,
        displayName=row.display_name,
        email=row.email,
        avatarUrl=row.avatar_url,
    )


async def get_user_profile(db: AsyncSession, uid: str) -> Optional[UserProfile]:
    result = await db.execute(select(UserProfile).where(UserProfile.uid == uid))
    return result.scalar_one_or_none()


async def update_user_profile(
    db: AsyncSession,
    uid: str,
    update: Mapping[str, Any],
    fallback_email: Optional[str] = None,
) -> UserProfile:
    """
    Apply a partial update to the caller's profile, creating it on first write.

    A new profile takes its email from the token when the update carries none.
    """
    changes = {field: value for field, value in update.items() if field in FIELD_MAP}
    row = await get_user_profile(db, uid)
    if row is None:
        row = UserProfile(uid=uid, display_name="", email=fallback_email or "")
        db.add(row)
        logger.info("Creating user profile", extra={"uid": uid})
    for field, value in changes.items():
        setattr(row, FIELD_MAP[field], value)
    await db.commit()
    await db.refresh(row)
    logger.info("Updated user profile", extra={"uid": uid, "fields": sorted(changes.keys())})
    return row
