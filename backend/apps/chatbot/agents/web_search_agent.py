import logging
from typing import Dict

from apps.chatbot.graph.state import DiscoveryState
from apps.chatbot.tools.ranking import filter_candidates, rank_candidates
from apps.chatbot.tools.ratings import enrich_with_ratings
from apps.chatbot.tools.web_search import search_products
from settings import settings

logger = logging.getLogger(__name__)


def candidate_search_node(state: DiscoveryState) -> Dict:
    """
    LangGraph node that searches the web, rates the shops and ranks them.

    Blocked domains are dropped before the rating lookups so no lookup
    is spent on a page that would be filtered anyway.

    Returns:
        Dict with candidates, search_error and logs
    """
    query = state.get("query", "")
    logger.info(f"Candidate search processing: {query[:50]}...")

    try:
        search_result = search_products(query)
        filtered = filter_candidates(search_result.results)[:settings.max_enriched_candidates]
        ranked = rank_candidates(enrich_with_ratings(filtered))
        search_error = search_result.error
    except Exception as e:
        logger.error(f"Candidate search failed: {str(e)}")
        ranked = []
        search_error = str(e)

    log_entry = {
        "node": "candidate_search",
        "action": "search_rate_rank",
        "candidates_found": len(ranked),
        "error": search_error
    }

    return {
        "candidates": ranked,
        "search_error": search_error,
        "logs": [log_entry]
    }
