"""
Third-party integration settings (Stripe, Gemini).

A single ``integration_settings`` row holds both blocks as JSON. Secrets are
never returned to clients; views only say whether one is stored.
"""
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import settings
from ..exceptions import IntegrationNotConfiguredError
from ..logger import logger
from ..models import IntegrationSettings as IntegrationSettingsModel
from ..schemas import GeminiIntegrationView, IntegrationsResponse, StripeIntegrationView

SETTINGS_ID = "global"

STRIPE_SECRET_FIELDS = ("secretKey", "publishableKey")
GEMINI_SECRET_FIELDS = ("apiKey",)
GEMINI_OPTION_FIELDS = (
    "model",
    "temperature",
    "maxOutputTokens",
    "safetyPreset",
    "systemPrompt",
    "streaming",
    "timeoutSec",
    "retryCount",
)


def mask_secret(secret: Optional[str]) -> Dict[str, Any]:
    if not secret:
        return {"hasSecret": False}
    return {"hasSecret": True, "last4": secret[-4:]}


def mask_key(secret: Optional[str]) -> Dict[str, Any]:
    return {"hasSecret": bool(secret)}


def stripe_view(stripe: Optional[Mapping[str, Any]]) -> StripeIntegrationView:
    stripe = stripe or {}
    return StripeIntegrationView(
        enabled=bool(stripe.get("enabled", False)),
        defaultCurrency=stripe.get("defaultCurrency"),
        **mask_secret(stripe.get("secretKey")),
    )


def gemini_view(gemini: Optional[Mapping[str, Any]]) -> GeminiIntegrationView:
    gemini = gemini or {}
    return GeminiIntegrationView(
        enabled=bool(gemini.get("enabled", False)),
        **{field: gemini.get(field) for field in GEMINI_OPTION_FIELDS},
        **mask_key(gemini.get("apiKey")),
    )


async def get_integration_settings(db: AsyncSession) -> Optional[IntegrationSettingsModel]:
    result = await db.execute(
        select(IntegrationSettingsModel).where(IntegrationSettingsModel.id == SETTINGS_ID)
    )
    return result.scalar_one_or_none()


async def _get_or_create(db: AsyncSession) -> IntegrationSettingsModel:
    row = await get_integration_settings(db)
    if row is None:
        row = IntegrationSettingsModel(id=SETTINGS_ID, stripe={"enabled": False}, gemini={"enabled": False})
        db.add(row)
        await db.flush()
    return row


def _apply_update(
    current: Optional[Mapping[str, Any]],
    update: Mapping[str, Any],
    secret_fields: Tuple[str, ...],
) -> Dict[str, Any]:
    merged: Dict[str, Any] = {"enabled": False, **(current or {})}
    for field, value in update.items():
        if field in secret_fields:
            # An empty string clears the stored secret
            if value:
                merged[field] = value
            else:
                merged.pop(field, None)
        else:
            merged[field] = value
    return merged


async def integrations_overview(db: AsyncSession) -> IntegrationsResponse:
    row = await get_integration_settings(db)
    return IntegrationsResponse(
        stripe=stripe_view(row.stripe if row else None),
        gemini=gemini_view(row.gemini if row else None),
    )


async def update_stripe_integration(db: AsyncSession, update: Mapping[str, Any]) -> StripeIntegrationView:
    row = await _get_or_create(db)
    # JSON columns are only flagged dirty on reassignment
    row.stripe = _apply_update(row.stripe, update, STRIPE_SECRET_FIELDS)
    await db.commit()
    await db.refresh(row)
    logger.info("Updated Stripe integration", extra={"fields": sorted(update.keys())})
    return stripe_view(row.stripe)


async def update_gemini_integration(db: AsyncSession, update: Mapping[str, Any]) -> GeminiIntegrationView:
    row = await _get_or_create(db)
    row.gemini = _apply_update(row.gemini, update, GEMINI_SECRET_FIELDS)
    await db.commit()
    await db.refresh(row)
    logger.info("Updated Gemini integration", extra={"fields": sorted(update.keys())})
    return gemini_view(row.gemini)


async def resolve_gemini(db: AsyncSession) -> Tuple[str, str]:
    """
    Return (api key, text model) for Gemini calls.

    The integration has to be enabled; the stored key wins over
    ``GEMINI_API_KEY``.
    """
    row = await get_integration_settings(db)
    gemini = (row.gemini if row else None) or {}
    api_key = gemini.get("apiKey") or settings.GEMINI_API_KEY
    if not gemini.get("enabled") or not api_key:
        raise IntegrationNotConfiguredError("Gemini")
    return api_key, gemini.get("model") or settings.GEMINI_TEXT_MODEL


async def resolve_stripe(db: AsyncSession) -> Tuple[bool, Optional[str]]:
    """Return (enabled, secret key); the stored key wins over ``STRIPE_SECRET``."""
    row = await get_integration_settings(db)
    stripe = (row.stripe if row else None) or {}
    if not stripe.get("enabled"):
        return False, None
    return True, stripe.get("secretKey") or settings.STRIPE_SECRET
