"""
Tests de formateo de fechas y montos
"""

import sys
from pathlib import Path

# Agregar directorio raíz al PYTHONPATH para imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from datetime import date, datetime

from utils.formatters import (
    PLACEHOLDER,
    add_months,
    diff_in_days,
    format_currency,
    format_day_label,
    format_long_date,
    format_percentage,
    format_short_date,
    get_days_in_month,
    get_month_key,
    get_week_range,
    parse_currency,
    parse_date_key,
)


class TestCurrency:
    """Pesos colombianos sin decimales, separador de miles con punto"""

    def test_format_currency(self):
        assert format_currency(320000) == "$320.000"
        assert format_currency(1200000.4) == "$1.200.000"
        assert format_currency(0) == "$0"

    def test_format_currency_negative(self):
        assert format_currency(-5000) == "-$5.000"

    def test_format_currency_missing(self):
        assert format_currency(None) == PLACEHOLDER
        assert format_currency(float("nan")) == PLACEHOLDER

    def test_parse_currency_keeps_digits_only(self):
        assert parse_currency("$1.200.000") == 1200000
        assert parse_currency("abc") == 0
        assert parse_currency("") == 0
        assert parse_currency(None) == 0
        assert parse_currency(450) == 450


class TestDates:

    def test_parse_date_key_accepts_several_inputs(self):
        assert parse_date_key("2025-07-08") == date(2025, 7, 8)
        assert parse_date_key("2025-07-08T10:30:00Z") == date(2025, 7, 8)
        assert parse_date_key(datetime(2025, 7, 8, 22, 0)) == date(2025, 7, 8)
        assert parse_date_key(date(2025, 7, 8)) == date(2025, 7, 8)

    def test_parse_date_key_invalid(self):
        assert parse_date_key("08/07/2025") is None
        assert parse_date_key("") is None
        assert parse_date_key(None) is None

    def test_spanish_labels(self):
        # 2025-07-07 es lunes
        assert format_short_date("2025-07-08") == "08 jul"
        assert format_day_label("2025-07-07") == "lun 07"
        assert format_long_date("2025-12-01") == "01 dic 2025"
        assert format_short_date(None) == PLACEHOLDER

    def test_diff_in_days_never_negative(self):
        assert diff_in_days("2025-07-01", "2025-07-03") == 2
        assert diff_in_days("2025-07-03", "2025-07-01") == 0
        assert diff_in_days(None, "2025-07-01") == 0

    def test_months(self):
        assert add_months(date(2025, 1, 31), -1) == date(2024, 12, 1)
        assert add_months(date(2025, 11, 15), 2) == date(2026, 1, 1)
        assert get_month_key(date(2025, 3, 18)) == "2025-03-01"
        assert get_days_in_month(date(2024, 2, 10)) == 29
        assert get_days_in_month(date(2025, 6, 1)) == 30

    def test_week_range_monday_to_sunday(self):
        week = get_week_range(date(2025, 7, 10))  # jueves
        assert week.start == "2025-07-07"
        assert week.end == "2025-07-13"
        assert week.label == "07 jul - 13 jul"

    def test_format_percentage(self):
        assert format_percentage(75) == "75.0%"
        assert format_percentage(33.333, precision=2) == "33.33%"
        assert format_percentage(None) == PLACEHOLDER
