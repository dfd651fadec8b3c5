import logging
from typing import Dict, List

import requests
from tavily import TavilyClient

from settings import settings
from .candidates import Candidate, SearchResult, extract_domain, url_target

logger = logging.getLogger(__name__)

SERPAPI_URL = "https://serpapi.com/search.json"


class SearchProviderError(Exception):
    """Search provider answered with an error payload."""


def build_search_query(query: str) -> str:
    """Append the purchase-intent suffix so results lean towards shops."""
    query = query.strip()
    suffix = settings.search_query_suffix.strip()
    return f"{query} {suffix}" if suffix else query


def is_search_provider_link(url: str) -> bool:
    target = url_target(url)
    return any(host in target for host in settings.search_provider_hosts)


def is_known_small_seller(url: str) -> bool:
    target = url_target(url)
    return any(domain in target for domain in settings.small_seller_domains)


def _normalize(items: List[Dict]) -> List[Candidate]:
    """Drop self-referential and duplicate links, keep provider order."""
    seen = set()
    candidates = []
    for item in items:
        url = item.get("url") or ""
        if not url or url in seen:
            continue
        if is_search_provider_link(url):
            logger.debug(f"Dropped search provider link: {url}")
            continue
        seen.add(url)
        candidates.append(Candidate(
            title=item.get("title") or "Produs",
            url=url,
            description=item.get("description") or "",
            source=item.get("source") or extract_domain(url),
            image=item.get("image") or None,
            is_known_small_seller=is_known_small_seller(url),
        ))
    return candidates


def _search_serpapi(search_query: str) -> List[Dict]:
    params = {
        "engine": "google",
        "q": search_query,
        "location": settings.search_location,
        "hl": settings.search_language,
        "gl": settings.search_country,
        "num": settings.search_result_count,
        "api_key": settings.serp_api_key,
    }
    response = requests.get(SERPAPI_URL, params=params, timeout=settings.http_timeout)
    data = response.json()

    if data.get("error"):
        raise SearchProviderError(str(data["error"]))
    response.raise_for_status()

    return [
        {
            "title": r.get("title"),
            "url": r.get("link"),
            "description": r.get("snippet"),
            "source": r.get("displayed_link"),
            "image": r.get("thumbnail"),
        }
        for r in data.get("organic_results") or []
    ]


def _search_tavily(search_query: str) -> List[Dict]:
    client = TavilyClient(api_key=settings.tavily_api_key)
    response = client.search(
        query=search_query,
        max_results=min(settings.search_result_count, 20),
        search_depth="basic",
        include_images=True,
    )
    # Tavily returns query-level images; pair them with results by position
    images = response.get("images") or []
    items = []
    for index, r in enumerate(response.get("results") or []):
        image = images[index] if index < len(images) else None
        if isinstance(image, dict):
            image = image.get("url")
        items.append({
            "title": r.get("title"),
            "url": r.get("url"),
            "description": r.get("content"),
            "image": image,
        })
    return items


def search_products(query: str) -> SearchResult:
    """
    Search the web for shops selling what the user asked for.

    SerpAPI is used when configured, Tavily otherwise. Missing
    credentials or a provider failure return an empty result with an
    error, never an exception.
    """
    if not query or not query.strip():
        return SearchResult(results=[], error="Empty query")

    search_query = build_search_query(query)

    if settings.serp_api_key:
        provider, search = "serpapi", _search_serpapi
    elif settings.tavily_api_key:
        provider, search = "tavily", _search_tavily
    else:
        logger.warning("No web search API key configured, skipping web search")
        return SearchResult(results=[], error="API key not configured")

    try:
        items = search(search_query)
    except Exception as e:
        logger.error(f"Web search via {provider} failed: {str(e)}")
        return SearchResult(results=[], error=str(e))

    candidates = _normalize(items)
    logger.info(f"Web search ({provider}) returned {len(candidates)} results for: {search_query[:50]}...")
    return SearchResult(results=candidates)

