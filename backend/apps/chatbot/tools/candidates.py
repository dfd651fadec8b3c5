from dataclasses import dataclass
from typing import List, Optional
from urllib.parse import urlparse


@dataclass(frozen=True)
class Candidate:
    """A product page returned by web search, optionally enriched with a rating."""

    title: str
    url: str
    description: str = ""
    source: str = ""
    image: Optional[str] = None
    rating: Optional[float] = None
    review_count: Optional[int] = None
    is_known_small_seller: bool = False

    @property
    def domain(self) -> str:
        return extract_domain(self.url)


@dataclass(frozen=True)
class SearchResult:
    results: List[Candidate]
    error: Optional[str] = None


@dataclass(frozen=True)
class RatingResult:
    """Rating lookup outcome; absent rating is normal, error is only for diagnostics."""

    rating: Optional[float] = None
    review_count: Optional[int] = None
    error: Optional[str] = None


def extract_domain(url: str) -> str:
    """Hostname without a leading www."""
    try:
        hostname = urlparse(url).hostname
    except ValueError:
        return url
    if not hostname:
        return url
    return hostname[4:] if hostname.startswith('www.') else hostname


def url_target(url: str) -> str:
    """Lowercased host + path, the string blocklist patterns are matched against."""
    try:
        parsed = urlparse(url)
    except ValueError:
        return (url or '').lower()
    if not parsed.netloc:
        return (url or '').lower()
    return f"{parsed.netloc}{parsed.path}".lower()
