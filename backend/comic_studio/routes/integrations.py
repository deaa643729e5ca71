"""
Integration routes - masked settings for Stripe and Gemini, Stripe balance
"""
from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.ext.asyncio import AsyncSession

from ..clients import stripe
from ..db import get_db
from ..schemas import (
    GeminiIntegrationUpdate,
    IntegrationsResponse,
    StripeBalanceResponse,
    StripeIntegrationUpdate,
)
from ..services import integrations as service

router = APIRouter(prefix="/integrations", tags=["Integrations"])


@router.get("", response_model=IntegrationsResponse)
async def get_integrations(db: AsyncSession = Depends(get_db)):
    """Integration settings with secrets masked"""
    return await service.integrations_overview(db)


@router.put("/stripe")
async def update_stripe(payload: StripeIntegrationUpdate, db: AsyncSession = Depends(get_db)):
    # Empty strings pass through; the service treats them as "clear secret"
    view = await service.update_stripe_integration(db, payload.model_dump(exclude_unset=True, exclude_none=True))
    return {"stripe": view}


@router.put("/gemini")
async def update_gemini(payload: GeminiIntegrationUpdate, db: AsyncSession = Depends(get_db)):
    view = await service.update_gemini_integration(db, payload.model_dump(exclude_unset=True, exclude_none=True))
    return {"gemini": view}


@router.get("/stripe/balance", response_model=StripeBalanceResponse, response_model_exclude_none=True)
async def get_stripe_balance(db: AsyncSession = Depends(get_db)):
    enabled, secret_key = await service.resolve_stripe(db)
    if not enabled:
        return StripeBalanceResponse(enabled=False)
    if not secret_key:
        return StripeBalanceResponse(enabled=True, error="Stripe secret key is not configured.")

    balance = await run_in_threadpool(stripe.fetch_balance, secret_key)
    return StripeBalanceResponse(enabled=True, **stripe.summarize_balance(balance))
