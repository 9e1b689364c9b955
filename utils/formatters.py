"""
Formateo de fechas y montos para la consola (es-CO, pesos sin decimales)
"""

import calendar
import math
from datetime import date, datetime, timedelta
from typing import NamedTuple, Optional, Union

from config import CURRENCY_SYMBOL

PLACEHOLDER = "—"

MONTHS_SHORT = ("ene", "feb", "mar", "abr", "may", "jun", "jul", "ago", "sep", "oct", "nov", "dic")
WEEKDAYS_SHORT = ("lun", "mar", "mié", "jue", "vie", "sáb", "dom")

DateLike = Union[date, datetime, str, None]


class WeekRange(NamedTuple):
    start: str
    end: str
    label: str


def _is_missing_number(value) -> bool:
    if value is None:
        return True
    try:
        return math.isnan(float(value))
    except (TypeError, ValueError):
        return True


def format_currency(value) -> str:
    """320000 -> '$320.000'; None/NaN -> '—'"""
    if _is_missing_number(value):
        return PLACEHOLDER
    amount = round(float(value))
    digits = f"{abs(amount):,}".replace(",", ".")
    sign = "-" if amount < 0 else ""
    return f"{sign}{CURRENCY_SYMBOL}{digits}"


def parse_currency(value) -> float:
    """Convierte '$1.200.000' (o un número) en valor numérico; vacío -> 0"""
    if value is None:
        return 0
    if isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return value
    digits = "".join(ch for ch in str(value) if ch.isdigit())
    return int(digits) if digits else 0


def format_date_key(value: date) -> str:
    return value.strftime("%Y-%m-%d")


def parse_date_key(value: DateLike) -> Optional[date]:
    """Acepta date, datetime, 'YYYY-MM-DD' o ISO con hora. Valores inválidos -> None"""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            if "T" in text:
                return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
            return datetime.strptime(text, "%Y-%m-%d").date()
        except ValueError:
            return None
    return None


def format_short_date(value: DateLike) -> str:
    parsed = parse_date_key(value)
    if not parsed:
        return PLACEHOLDER
    return f"{parsed.day:02d} {MONTHS_SHORT[parsed.month - 1]}"


def format_day_label(value: DateLike) -> str:
    parsed = parse_date_key(value)
    if not parsed:
        return PLACEHOLDER
    return f"{WEEKDAYS_SHORT[parsed.weekday()]} {parsed.day:02d}"


def format_long_date(value: DateLike) -> str:
    parsed = parse_date_key(value)
    if not parsed:
        return PLACEHOLDER
    return f"{parsed.day:02d} {MONTHS_SHORT[parsed.month - 1]} {parsed.year}"


def diff_in_days(start: DateLike, end: DateLike) -> int:
    """Noches entre dos fechas, nunca negativo. Fechas faltantes -> 0"""
    start_date = parse_date_key(start)
    end_date = parse_date_key(end)
    if not start_date or not end_date:
        return 0
    return max(0, (end_date - start_date).days)


def add_days(base: date, amount: int) -> date:
    return base + timedelta(days=amount)


def add_months(base: date, amount: int) -> date:
    """Primer día del mes desplazado `amount` meses"""
    month_index = base.year * 12 + (base.month - 1) + amount
    return date(month_index // 12, month_index % 12 + 1, 1)


def get_month_key(value: date) -> str:
    return format_date_key(value.replace(day=1))


def get_days_in_month(value: date) -> int:
    return calendar.monthrange(value.year, value.month)[1]


def get_week_range(base: date) -> WeekRange:
    """Semana lunes-domingo que contiene `base`"""
    start = base - timedelta(days=base.weekday())
    end = start + timedelta(days=6)
    start_key = format_date_key(start)
    end_key = format_date_key(end)
    return WeekRange(start_key, end_key, f"{format_short_date(start_key)} - {format_short_date(end_key)}")


def format_percentage(value, precision: int = 1) -> str:
    if _is_missing_number(value):
        return PLACEHOLDER
    return f"{float(value):.{precision}f}%"
