import logging
from typing import Dict

from django.db import connection

from apps.chatbot.graph.state import DiscoveryState
from apps.companies.registry import search_sme_companies
from settings import settings

logger = logging.getLogger(__name__)


def sme_lookup_node(state: DiscoveryState) -> Dict:
    """
    LangGraph node that finds registered SMEs matching the query.

    Returns:
        Dict with sme_companies and logs
    """
    query = state.get("query", "")
    logger.info(f"SME lookup processing: {query[:50]}...")

    try:
        companies = search_sme_companies(query, limit=settings.sme_match_limit)
        sme_companies = [
            {
                "cui": c.cui,
                "name": c.name,
                "caen": c.caen,
                "turnover": c.turnover,
                "employees": c.employees,
            }
            for c in companies
        ]
        error = None
    except Exception as e:
        logger.error(f"SME lookup failed: {str(e)}")
        sme_companies = []
        error = str(e)
    finally:
        # Runs on a worker thread; release its connection unless a transaction owns it
        if not connection.in_atomic_block:
            connection.close()

    log_entry = {
        "node": "sme_lookup",
        "action": "search_registry",
        "companies_found": len(sme_companies),
        "error": error
    }

    return {
        "sme_companies": sme_companies,
        "logs": [log_entry]
    }
