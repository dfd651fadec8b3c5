import csv
import logging
from pathlib import Path
from typing import Dict, Iterator, List, Optional

from django.db.models import Count, Q

from .models import Company
from .sme import classify_sme, parse_number

logger = logging.getLogger(__name__)

DEFAULT_YEAR = 2024

# Indicator codes used by the ANAF financial statement export
COLUMN_MAP = {
    'CUI': 'CUI',
    'CAEN': 'CAEN',
    'DENUMIRE': 'DENUMIRE',
    'I1': 'i1',    # fixed assets
    'I2': 'i2',    # current assets
    'I10': 'i10',  # total equity
    'I13': 'i13',  # net turnover
    'I18': 'i18',  # net profit
    'I19': 'i19',  # net loss
    'I20': 'i20',  # average employees
}

UPDATE_FIELDS = [
    'name', 'caen', 'reporting_year', 'turnover', 'fixed_assets', 'current_assets',
    'balance_sheet_total', 'equity', 'net_profit', 'net_loss', 'employees', 'is_sme', 'updated_at',
]


class ImportFormatError(ValueError):
    """Raised when a bulk file lacks the identifier column."""


def build_company(item: Dict, year: int) -> Company:
    """Turn one raw financial record into an unsaved Company with its SME flag."""
    fixed_assets = parse_number(item.get('i1'))
    current_assets = parse_number(item.get('i2'))
    balance_sheet_total = (fixed_assets or 0) + (current_assets or 0)
    turnover = parse_number(item.get('i13'))
    employees = parse_number(item.get('i20'))

    return Company(
        cui=str(item.get('CUI', '')).strip(),
        name=(item.get('DENUMIRE') or None),
        caen=(item.get('CAEN') or None),
        reporting_year=year or DEFAULT_YEAR,
        turnover=turnover,
        fixed_assets=fixed_assets,
        current_assets=current_assets,
        balance_sheet_total=balance_sheet_total,
        equity=parse_number(item.get('i10')),
        net_profit=parse_number(item.get('i18')),
        net_loss=parse_number(item.get('i19')),
        employees=int(employees) if employees is not None else None,
        is_sme=classify_sme(employees, turnover, balance_sheet_total),
    )


def upsert_companies(records: List[Dict], year: Optional[int] = None) -> int:
    """
    Insert or overwrite companies keyed by CUI.

    Re-importing a CUI replaces its previous values. Within a batch the
    last record for a CUI wins.

    Returns:
        Number of companies written
    """
    year = year or DEFAULT_YEAR
    by_cui: Dict[str, Company] = {}
    for item in records:
        company = build_company(item, year)
        if not company.cui:
            continue
        by_cui[company.cui] = company

    if not by_cui:
        return 0

    Company.objects.bulk_create(
        list(by_cui.values()),
        update_conflicts=True,
        unique_fields=['cui'],
        update_fields=UPDATE_FIELDS,
    )
    logger.info(f"Inserted/updated {len(by_cui)} company records for {year}")
    return len(by_cui)


def get_import_stats() -> Dict:
    """Aggregate SME/non-SME counts and the reporting years seen."""
    totals = Company.objects.aggregate(
        total=Count('id'),
        sme=Count('id', filter=Q(is_sme=True)),
    )
    years = sorted(
        Company.objects.order_by().values_list('reporting_year', flat=True).distinct()
    )
    total = totals['total'] or 0
    sme = totals['sme'] or 0
    return {
        "totalCompanies": total,
        "smeCount": sme,
        "nonSmeCount": total - sme,
        "years": years,
    }


def iter_financial_records(lines) -> Iterator[Dict]:
    """
    Parse a semicolon-delimited ANAF export.

    Columns are mapped by header name. Rows without a CUI, or rows that
    repeat the header, are skipped.
    """
    reader = csv.reader(lines, delimiter=';', quotechar='"')
    header = next(reader, None)
    if not header:
        return

    positions = {}
    for index, column in enumerate(header):
        key = COLUMN_MAP.get(column.strip().upper())
        if key:
            positions[key] = index

    if 'CUI' not in positions:
        raise ImportFormatError("Coloana CUI nu a fost găsită în fișier")

    for row in reader:
        if not row or not any(cell.strip() for cell in row):
            continue
        record = {
            key: row[index].strip() if index < len(row) else ''
            for key, index in positions.items()
        }
        cui = record.get('CUI', '')
        if not cui or cui.upper() == 'CUI':
            continue
        yield record


def import_file(path: str, year: int = DEFAULT_YEAR, batch_size: int = 100) -> Dict:
    """Stream a bulk export into the registry in batches."""
    processed = 0
    batch: List[Dict] = []

    with Path(path).open(encoding='utf-8', errors='replace', newline='') as handle:
        for record in iter_financial_records(handle):
            batch.append(record)
            if len(batch) >= batch_size:
                processed += upsert_companies(batch, year)
                batch = []

        if batch:
            processed += upsert_companies(batch, year)

    logger.info(f"Imported {processed} records from {path}")
    return {"processed": processed, **get_import_stats()}
