import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from typing import List

import requests

from settings import settings
from .candidates import Candidate, RatingResult, extract_domain

logger = logging.getLogger(__name__)

PLACES_FIND_URL = "https://maps.googleapis.com/maps/api/place/findplacefromtext/json"

MAX_WORKERS = 16


def get_places_rating(business_name: str) -> RatingResult:
    """
    Look up a business's Google rating and review count.

    No match is a normal outcome (rating None, no error); only transport
    or payload failures carry an error.
    """
    if not settings.google_places_api_key:
        logger.info("GOOGLE_PLACES_API_KEY not configured")
        return RatingResult(error="API key not configured")

    params = {
        "input": f"{business_name} {settings.places_region_suffix}".strip(),
        "inputtype": "textquery",
        "fields": "place_id,name,rating,user_ratings_total",
        "key": settings.google_places_api_key,
    }

    try:
        response = requests.get(PLACES_FIND_URL, params=params, timeout=settings.http_timeout)
        response.raise_for_status()
        data = response.json()
    except (requests.RequestException, ValueError) as e:
        logger.error(f"Error fetching Google Places rating for {business_name}: {str(e)}")
        return RatingResult(error=str(e))

    candidates = data.get("candidates") or []
    if data.get("status") != "OK" or not candidates:
        logger.info(f"No Google Places results for: {business_name}")
        return RatingResult()

    place = candidates[0]
    rating = place.get("rating")
    review_count = place.get("user_ratings_total")
    logger.info(f"Google Places found: {place.get('name')} - Rating: {rating}, Reviews: {review_count}")

    return RatingResult(
        rating=float(rating) if rating else None,
        review_count=int(review_count) if review_count else None
    )


def business_name_for(candidate: Candidate) -> str:
    """
    The displayed host is the best guess at the shop's business name.

    SerpAPI shows links as "https://www.shop.ro › categorie", so the
    breadcrumb and scheme are dropped before taking the host.
    """
    displayed = (candidate.source or '').split('›')[0].strip()
    if displayed:
        name = extract_domain(displayed if '://' in displayed else f"https://{displayed}")
        if name and '://' not in name:
            return name
    return candidate.domain


def enrich_with_ratings(candidates: List[Candidate]) -> List[Candidate]:
    """
    Attach ratings to every candidate, one lookup per candidate, all in flight at once.

    Output order matches input order. A lookup that raises is treated as
    an absent rating.
    """
    if not candidates:
        return []

    with ThreadPoolExecutor(max_workers=min(len(candidates), MAX_WORKERS), thread_name_prefix="places") as executor:
        futures = [executor.submit(get_places_rating, business_name_for(c)) for c in candidates]

    enriched = []
    for candidate, future in zip(candidates, futures):
        try:
            result = future.result()
        except Exception as e:
            logger.error(f"Rating lookup crashed for {candidate.url}: {str(e)}")
            result = RatingResult(error=str(e))
        enriched.append(replace(candidate, rating=result.rating, review_count=result.review_count))

    rated = sum(1 for c in enriched if c.rating is not None)
    logger.info(f"Ratings resolved for {rated}/{len(enriched)} candidates")
    return enriched
