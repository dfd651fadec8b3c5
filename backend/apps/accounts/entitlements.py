import logging
from dataclasses import dataclass
from datetime import date
from typing import Dict, Optional

from django.db import DatabaseError, transaction
from django.db.models import F
from django.utils import timezone

from core.clients.billing_client import is_user_subscribed
from settings import settings
from .models import MessageUsage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QuotaDecision:
    """Outcome of one message attempt against the daily quota."""

    allowed: bool
    count: int
    # None means unlimited
    remaining: Optional[int]


def check_and_increment(user_id: str, is_subscribed: bool, today: Optional[date] = None) -> QuotaDecision:
    """
    Consume one free message for the user, if any are left today.

    Subscribers bypass counting. The increment is a single conditional
    UPDATE, so concurrent requests cannot both take the last free slot.
    A storage failure lets the message through.
    """
    if is_subscribed:
        return QuotaDecision(allowed=True, count=0, remaining=None)

    limit = settings.free_messages_per_day
    today = today or timezone.localdate()

    try:
        with transaction.atomic():
            usage, _ = MessageUsage.objects.get_or_create(user_id=user_id, usage_date=today)
            updated = MessageUsage.objects.filter(
                pk=usage.pk,
                message_count__lt=limit
            ).update(message_count=F('message_count') + 1, updated_at=timezone.now())
            count = MessageUsage.objects.values_list('message_count', flat=True).get(pk=usage.pk)
    except DatabaseError as e:
        logger.error(f"Error incrementing message count for {user_id}, allowing message: {str(e)}")
        return QuotaDecision(allowed=True, count=0, remaining=limit)

    remaining = max(0, limit - count)
    logger.info(f"User {user_id}: message count = {count}, allowed = {bool(updated)}, remaining = {remaining}")
    return QuotaDecision(allowed=bool(updated), count=count, remaining=remaining)


def get_message_count(user_id: str, today: Optional[date] = None) -> int:
    """Messages the user has sent today, without consuming any."""
    today = today or timezone.localdate()
    count = (
        MessageUsage.objects
        .filter(user_id=user_id, usage_date=today)
        .values_list('message_count', flat=True)
        .first()
    )
    return count or 0


def get_usage_summary(user) -> Dict:
    """Subscription and quota state for the usage endpoint."""
    limit = settings.free_messages_per_day
    subscribed = is_user_subscribed(getattr(user, 'email', None))
    used = get_message_count(user.id)

    return {
        "messagesUsedToday": used,
        "freeMessagesPerDay": limit,
        "isSubscribed": subscribed,
        "remaining": None if subscribed else max(0, limit - used),
        "canSendMessage": subscribed or used < limit,
    }
