from __future__ import annotations

from typing import Any, Mapping

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..logger import logger
from ..models import StudioSettings as StudioSettingsModel
from ..schemas import StudioSettings

SETTINGS_ID = "global"

DEFAULT_SETTINGS = {
    "displayName": "hello@dreamweavercomics.art",
    "email": "hello@dreamweavercomics.art",
    "studioName": "DreamWeaverComics",
    "timezone": "Europe/Rome",
    "aiCredits": 1200,
    "creditAlertThreshold": 200,
    "numberFormatLocale": "en-US",
}

FIELD_MAP = {
    "displayName": "display_name",
    "email": "email",
    "studioName": "studio_name",
    "timezone": "timezone",
    "aiCredits": "ai_credits",
    "creditAlertThreshold": "credit_alert_threshold",
    "numberFormatLocale": "number_format_locale",
}

# aiCredits is spent by the studio, never set from the settings form
EDITABLE_FIELDS = (
    "displayName",
    "email",
    "studioName",
    "timezone",
    "creditAlertThreshold",
    "numberFormatLocale",
)


def studio_settings_to_schema(row: StudioSettingsModel) -> StudioSettings:
    return StudioSettings(**{field: getattr(row, column) for field, column in FIELD_MAP.items()})


async def _create_default(db: AsyncSession, overrides: Mapping[str, Any]) -> StudioSettingsModel:
    values = {**DEFAULT_SETTINGS, **overrides}
    row = StudioSettingsModel(id=SETTINGS_ID, **{FIELD_MAP[f]: v for f, v in values.items()})
    db.add(row)
    await db.commit()
    await db.refresh(row)
    logger.info("Created studio settings with defaults")
    return row


async def _load(db: AsyncSession):
    result = await db.execute(select(StudioSettingsModel).where(StudioSettingsModel.id == SETTINGS_ID))
    return result.scalar_one_or_none()


async def get_studio_settings(db: AsyncSession) -> StudioSettingsModel:
    """Return the studio settings, creating them on first read."""
    row = await _load(db)
    if row is None:
        return await _create_default(db, {})
    if row.ai_credits is None:
        row.ai_credits = DEFAULT_SETTINGS["aiCredits"]
        await db.commit()
        await db.refresh(row)
    return row


async def update_studio_settings(db: AsyncSession, update: Mapping[str, Any]) -> StudioSettingsModel:
    changes = {field: value for field, value in update.items() if field in EDITABLE_FIELDS}
    row = await _load(db)
    if row is None:
        return await _create_default(db, changes)
    for field, value in changes.items():
        setattr(row, FIELD_MAP[field], value)
    await db.commit()
    await db.refresh(row)
    logger.info("Updated studio settings", extra={"fields": sorted(changes.keys())})
    return row
