import logging
from typing import Dict, List, Optional

from django.contrib.postgres.search import SearchQuery, SearchVector
from django.db import DatabaseError, transaction

from .models import Company

logger = logging.getLogger(__name__)

SEARCH_CONFIG = 'romanian'

SUMMARY_FIELDS = ['cui', 'name', 'caen', 'turnover', 'employees', 'is_sme']


def company_to_dict(company: Company) -> Dict:
    """Serialize a company row into the shape the API and prompt use."""
    return {
        'cui': company.cui,
        'name': company.name,
        'caen': company.caen,
        'reporting_year': company.reporting_year,
        'turnover': company.turnover,
        'fixed_assets': company.fixed_assets,
        'current_assets': company.current_assets,
        'balance_sheet_total': company.balance_sheet_total,
        'equity': company.equity,
        'net_profit': company.net_profit,
        'net_loss': company.net_loss,
        'employees': company.employees,
        'is_sme': company.is_sme,
    }


def check_company_is_sme(cui: str) -> Dict:
    """
    Look up a company by CUI.

    Returns:
        Dict with found, is_sme and the company payload (None if missing)
    """
    cui = (cui or '').strip()
    if not cui:
        return {"found": False, "is_sme": False, "company": None}

    try:
        company: Optional[Company] = Company.objects.filter(cui=cui).first()
    except DatabaseError as e:
        logger.error(f"Error checking CUI {cui}: {str(e)}")
        return {"found": False, "is_sme": False, "company": None}

    if company is None:
        return {"found": False, "is_sme": False, "company": None}

    return {
        "found": True,
        "is_sme": company.is_sme,
        "company": company_to_dict(company)
    }


def _full_text_search(query: str, limit: int) -> List[Company]:
    # Savepoint keeps a failed tsquery from poisoning the outer transaction
    with transaction.atomic():
        return list(
            Company.objects.filter(is_sme=True)
            .annotate(search=SearchVector('name', config=SEARCH_CONFIG))
            .filter(search=SearchQuery(query, search_type='websearch', config=SEARCH_CONFIG))
            .only(*SUMMARY_FIELDS)[:limit]
        )


def _substring_search(query: str, limit: int) -> List[Company]:
    return list(
        Company.objects.filter(is_sme=True, name__icontains=query)
        .only(*SUMMARY_FIELDS)[:limit]
    )


def search_sme_companies(query: str, limit: int = 10) -> List[Company]:
    """
    Find SMEs whose name matches the query.

    Tries Romanian full-text search first and falls back to a
    case-insensitive substring match when the database rejects it.
    Zero matches is an empty list, never an error.
    """
    query = (query or '').strip()
    if not query:
        return []

    try:
        companies = _full_text_search(query, limit)
        logger.info(f"Found {len(companies)} SME companies for query: {query[:50]}")
        return companies
    except DatabaseError as e:
        logger.info(f"SME full-text search failed, trying substring match: {str(e)}")

    try:
        return _substring_search(query, limit)
    except DatabaseError as e:
        logger.error(f"Error searching SME companies: {str(e)}")
        return []
