import logging
import re
from dataclasses import dataclass
from typing import List, Optional
from urllib.parse import urlparse

from django.db import IntegrityError, transaction

from .models import WishlistItem

logger = logging.getLogger(__name__)

PLACEHOLDER_TITLES = {'Produs', 'Vezi produs'}

# Path segments that never describe the product
SKIP_SEGMENTS = {'cautare', 'search', 'produs', 'product', 'p', 'item', 'pd', 'oferta', 'offer'}


@dataclass(frozen=True)
class AddResult:
    item: WishlistItem
    created: bool


def title_from_url(url: str) -> str:
    """Derive a readable product title from a shop URL."""
    try:
        parsed = urlparse(url)
    except ValueError:
        return 'Produs'
    if not parsed.netloc:
        return 'Produs'

    segments = [s for s in parsed.path.split('/') if s]
    meaningful = [s for s in segments if s.lower() not in SKIP_SEGMENTS]
    last_segment = (meaningful or segments or [''])[-1]

    cleaned = re.sub(r'\.(html|htm|php|aspx?)$', '', last_segment, flags=re.IGNORECASE)
    cleaned = re.sub(r'[-_]', ' ', cleaned)
    cleaned = re.sub(r'[0-9]+$', '', cleaned).strip()

    if len(cleaned) < 3:
        hostname = parsed.hostname or ''
        if hostname.startswith('www.'):
            hostname = hostname[4:]
        cleaned = hostname.split('.')[0]

    return cleaned[:1].upper() + cleaned[1:]


def list_wishlist(user_id: str) -> List[WishlistItem]:
    return list(WishlistItem.objects.filter(user_id=user_id).order_by('-created_at'))


def add_to_wishlist(
    user_id: str,
    url: str,
    title: Optional[str] = None,
    price: Optional[str] = None,
    image: Optional[str] = None
) -> AddResult:
    """
    Save a product for the user.

    Adding a URL that is already saved leaves the existing entry alone
    and reports created=False.
    """
    product_title = title if title and title not in PLACEHOLDER_TITLES else title_from_url(url)

    try:
        with transaction.atomic():
            item, created = WishlistItem.objects.get_or_create(
                user_id=user_id,
                product_url=url,
                defaults={
                    'product_title': product_title,
                    'product_price': price or None,
                    'product_image': image or None,
                }
            )
    except IntegrityError:
        # Lost a race against a concurrent add of the same URL
        item = WishlistItem.objects.get(user_id=user_id, product_url=url)
        created = False

    if created:
        logger.info(f"Added to wishlist for {user_id}: {url}")
    return AddResult(item=item, created=created)


def remove_from_wishlist(user_id: str, url: str) -> int:
    """Delete the user's entry for a URL; returns rows removed."""
    deleted, _ = WishlistItem.objects.filter(user_id=user_id, product_url=url).delete()
    return deleted
