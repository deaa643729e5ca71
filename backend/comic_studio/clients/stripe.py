"""Read-only Stripe account balance."""
from __future__ import annotations

from typing import Any, Dict, Optional

import requests

from ..config import settings
from ..exceptions import UpstreamServiceError
from ..logger import logger


def fetch_balance(secret_key: str) -> Dict[str, Any]:
    """GET /v1/balance with the given secret key"""
    url = f"{settings.STRIPE_API_BASE.rstrip('/')}/v1/balance"
    logger.debug(f"Fetching Stripe balance: {url}")
    try:
        resp = requests.get(url, auth=(secret_key, ""), timeout=settings.STRIPE_TIMEOUT_SECONDS)
        resp.raise_for_status()
        return resp.json()
    except (requests.RequestException, ValueError) as e:
        logger.error(f"Stripe balance request failed: {e}")
        raise UpstreamServiceError("Failed to retrieve Stripe balance.")


def summarize_balance(balance: Dict[str, Any]) -> Dict[str, Any]:
    available = balance.get("available") or []
    pending = balance.get("pending") or []
    currency: Optional[str] = available[0].get("currency") if available else None
    return {
        "currency": currency or "usd",
        "available": sum(int(entry.get("amount") or 0) for entry in available),
        "pending": sum(int(entry.get("amount") or 0) for entry in pending),
    }
