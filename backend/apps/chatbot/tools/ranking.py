"""
Filtering and ranking of web search candidates.

Candidates are sorted into three tiers: well rated (2), unrated (1) and
poorly rated (0). An unknown shop is surfaced before one that is known
to be bad. Within a tier, higher ratings come first, then known small
sellers; remaining ties keep provider order.
"""
import logging
from typing import Iterable, List, Optional

from settings import settings
from .candidates import Candidate, url_target
from .web_search import is_search_provider_link

logger = logging.getLogger(__name__)

TIER_WELL_RATED = 2
TIER_UNRATED = 1
TIER_POORLY_RATED = 0


def _matches_any(url: str, patterns: Iterable[str]) -> bool:
    target = url_target(url)
    return any(pattern.lower() in target for pattern in patterns)


def is_large_retailer(url: str, patterns: Optional[Iterable[str]] = None) -> bool:
    return _matches_any(url, settings.large_retailer_domains if patterns is None else patterns)


def is_media_site(url: str, patterns: Optional[Iterable[str]] = None) -> bool:
    return _matches_any(url, settings.media_site_patterns if patterns is None else patterns)


def filter_candidates(candidates: List[Candidate]) -> List[Candidate]:
    """Drop search provider pages, large retailers and media/social/blog pages."""
    kept = []
    for candidate in candidates:
        if is_search_provider_link(candidate.url):
            logger.info(f"Filtered out search provider link: {candidate.url}")
            continue
        if is_large_retailer(candidate.url):
            logger.info(f"Filtered out large retailer: {candidate.url}")
            continue
        if is_media_site(candidate.url):
            logger.info(f"Filtered out media site: {candidate.url}")
            continue
        kept.append(candidate)
    return kept


def rating_tier(candidate: Candidate, threshold: Optional[float] = None) -> int:
    threshold = settings.min_rating_threshold if threshold is None else threshold
    if candidate.rating is None:
        return TIER_UNRATED
    if candidate.rating >= threshold:
        return TIER_WELL_RATED
    return TIER_POORLY_RATED


def rank_candidates(
    candidates: List[Candidate],
    limit: Optional[int] = None,
    threshold: Optional[float] = None
) -> List[Candidate]:
    """
    Filter, sort and truncate candidates. Deterministic for equal input.

    Truncation happens after sorting so the cut keeps the best results,
    not the first ones the provider returned.
    """
    limit = settings.max_ranked_results if limit is None else limit
    filtered = filter_candidates(candidates)

    # sorted() is stable, so equal keys keep provider order
    ranked = sorted(
        filtered,
        key=lambda c: (
            -rating_tier(c, threshold),
            -(c.rating or 0.0),
            -int(c.is_known_small_seller),
        )
    )[:limit]

    logger.info("Sorted results: " + ", ".join(
        f"{c.source or c.domain}: {c.rating if c.rating is not None else 'N/A'}" for c in ranked
    ))
    return ranked
