from .candidates import Candidate, SearchResult, RatingResult, extract_domain
from .web_search import search_products, build_search_query
from .ratings import get_places_rating, enrich_with_ratings
from .ranking import filter_candidates, rank_candidates, rating_tier

__all__ = [
    'Candidate', 'SearchResult', 'RatingResult', 'extract_domain',
    'search_products', 'build_search_query',
    'get_places_rating', 'enrich_with_ratings',
    'filter_candidates', 'rank_candidates', 'rating_tier'
]
