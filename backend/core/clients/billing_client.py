import logging
from typing import Optional

import requests

from settings import settings

logger = logging.getLogger(__name__)


def _stripe_get(path: str, params: dict) -> dict:
    response = requests.get(
        f"{settings.stripe_api_url}/{path}",
        params=params,
        headers={"Authorization": f"Bearer {settings.stripe_secret_key}"},
        timeout=settings.http_timeout,
    )
    response.raise_for_status()
    return response.json()


def find_customer_id(email: str) -> Optional[str]:
    """Return the Stripe customer id for an email, if any."""
    data = _stripe_get("customers", {"email": email, "limit": 1})
    customers = data.get("data") or []
    if not customers:
        return None
    return customers[0].get("id")


def is_user_subscribed(email: Optional[str]) -> bool:
    """
    Check whether the customer behind an email has an active subscription.

    Every failure mode resolves to "not subscribed".
    """
    if not settings.stripe_secret_key or not email:
        return False

    try:
        customer_id = find_customer_id(email)
        if not customer_id:
            return False

        data = _stripe_get("subscriptions", {"customer": customer_id, "status": "active", "limit": 1})
        return len(data.get("data") or []) > 0
    except Exception as e:
        logger.error(f"Error checking subscription: {str(e)}")
        return False
