"""
SME classification per the EU definition.

A company is an SME when it has fewer than 250 employees and either its
net turnover or its balance sheet total stays under the EU ceiling. The
ceilings are converted to RON at a fixed 5 RON/EUR.
"""
import re
from typing import Optional

EUR_TO_RON = 5

MAX_EMPLOYEES = 250
MAX_TURNOVER_EUR = 50_000_000
MAX_BALANCE_SHEET_EUR = 43_000_000

MAX_TURNOVER_RON = MAX_TURNOVER_EUR * EUR_TO_RON            # 250M RON
MAX_BALANCE_SHEET_RON = MAX_BALANCE_SHEET_EUR * EUR_TO_RON  # 215M RON

_NON_NUMERIC = re.compile(r'[^\d.\-]')


def parse_number(value) -> Optional[float]:
    """Parse a raw cell into a float; empty or garbage becomes None."""
    if value is None:
        return None
    if isinstance(value, (int, float)):
        return float(value)

    text = str(value).strip()
    if not text:
        return None

    cleaned = _NON_NUMERIC.sub('', text)
    try:
        return float(cleaned)
    except ValueError:
        return None


def classify_sme(employees: Optional[float], turnover: Optional[float], balance_sheet: Optional[float]) -> bool:
    """Pure SME rule; missing inputs count as zero."""
    employees = employees or 0
    turnover = turnover or 0
    balance_sheet = balance_sheet or 0

    if employees >= MAX_EMPLOYEES:
        return False

    return turnover <= MAX_TURNOVER_RON or balance_sheet <= MAX_BALANCE_SHEET_RON
