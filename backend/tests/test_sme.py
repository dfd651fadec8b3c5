"""SME classification rule."""
from apps.companies.sme import (
    MAX_BALANCE_SHEET_RON,
    MAX_TURNOVER_RON,
    classify_sme,
    parse_number,
)


class TestClassifySme:
    """classify_sme tests."""

    def test_ceilings_in_ron(self):
        assert MAX_TURNOVER_RON == 250_000_000
        assert MAX_BALANCE_SHEET_RON == 215_000_000

    def test_249_employees_turnover_at_ceiling_is_sme(self):
        assert classify_sme(249, MAX_TURNOVER_RON, MAX_BALANCE_SHEET_RON * 10) is True

    def test_250_employees_never_sme(self):
        assert classify_sme(250, 0, 0) is False
        assert classify_sme(250, 1, 1) is False

    def test_either_financial_ceiling_is_enough(self):
        assert classify_sme(10, MAX_TURNOVER_RON + 1, MAX_BALANCE_SHEET_RON) is True
        assert classify_sme(10, MAX_TURNOVER_RON, MAX_BALANCE_SHEET_RON + 1) is True

    def test_both_ceilings_exceeded(self):
        assert classify_sme(10, MAX_TURNOVER_RON + 1, MAX_BALANCE_SHEET_RON + 1) is False

    def test_missing_values_count_as_zero(self):
        assert classify_sme(None, None, None) is True


class TestParseNumber:
    """parse_number tests."""

    def test_strips_non_numeric(self):
        assert parse_number("1 234 567") == 1234567.0
        assert parse_number("-12.5 RON") == -12.5

    def test_empty_and_garbage(self):
        assert parse_number("") is None
        assert parse_number("   ") is None
        assert parse_number("n/a") is None
        assert parse_number(None) is None

    def test_numbers_pass_through(self):
        assert parse_number(42) == 42.0
