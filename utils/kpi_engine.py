"""
KPI Engine - Ocupación, ADR, RevPAR y tendencias mes contra mes
"""

import math
from datetime import date
from typing import List, Sequence, Tuple

from schemas.bookings import BookingStatus, ReservationRecord
from schemas.dashboard import (
    ArrivalItem,
    DepartureItem,
    KpiAggregate,
    KpiCard,
    MonthlyKpiRecord,
    Trend,
)
from utils.formatters import (
    PLACEHOLDER,
    format_currency,
    format_percentage,
    format_short_date,
    get_days_in_month,
    parse_date_key,
)

TREND_SUFFIX = "vs mes anterior"


def aggregate_kpis(rows: Sequence[MonthlyKpiRecord], month_key: str, room_count: int) -> KpiAggregate:
    """
    occupancy = noches vendidas / (habitaciones × días del mes) × 100
    ADR = ingresos / noches vendidas
    RevPAR = ingresos / (habitaciones × días del mes)
    """
    total_revenue = sum(row.total_revenue or 0 for row in rows)
    revenue_without_tax = sum(row.revenue_without_tax or 0 for row in rows)
    total_nights = sum(row.total_nights_sold or 0 for row in rows)
    total_bookings = sum(row.total_bookings or 0 for row in rows)

    month_date = parse_date_key(month_key) or date.today()
    rooms_available = max(0, room_count) * get_days_in_month(month_date)

    return KpiAggregate(
        total_revenue=total_revenue,
        revenue_without_tax=revenue_without_tax,
        total_nights=total_nights,
        total_bookings=total_bookings,
        occupancy_rate=(total_nights / rooms_available * 100) if rooms_available > 0 else 0,
        adr=(total_revenue / total_nights) if total_nights > 0 else 0,
        revpar=(total_revenue / rooms_available) if rooms_available > 0 else 0,
    )


def calculate_trend(current: float, previous: float) -> Trend:
    if not math.isfinite(current) or not math.isfinite(previous) or previous == 0:
        return Trend(text=PLACEHOLDER, direction="flat")
    diff = (current - previous) / abs(previous) * 100
    if diff == 0:
        return Trend(text=f"0.0% {TREND_SUFFIX}", direction="flat", change=0.0)
    sign = "+" if diff > 0 else ""
    return Trend(
        text=f"{sign}{diff:.1f}% {TREND_SUFFIX}",
        direction="up" if diff > 0 else "down",
        change=diff,
    )


def empty_kpi_cards() -> List[KpiCard]:
    return [
        KpiCard(label="Ocupacion", value=PLACEHOLDER, helper="Sin datos", accent="teal"),
        KpiCard(label="ADR", value=PLACEHOLDER, helper="Sin datos", accent="navy"),
        KpiCard(label="RevPAR", value=PLACEHOLDER, helper="Sin datos", accent="amber"),
        KpiCard(label="Ingresos mes", value=PLACEHOLDER, helper="Sin datos", accent="coral"),
    ]


def aggregate_months(
    rows: Sequence[MonthlyKpiRecord],
    current_key: str,
    previous_key: str,
    room_count: int,
) -> Tuple[KpiAggregate, KpiAggregate]:
    current_rows = [row for row in rows if row.month == current_key]
    previous_rows = [row for row in rows if row.month == previous_key]
    return (
        aggregate_kpis(current_rows, current_key, room_count),
        aggregate_kpis(previous_rows, previous_key, room_count),
    )


def build_kpi_cards(
    rows: Sequence[MonthlyKpiRecord],
    current_key: str,
    previous_key: str,
    room_count: int,
) -> List[KpiCard]:
    """Cuatro tarjetas (ocupación, ADR, RevPAR, ingresos) con tendencia mes contra mes"""
    if not rows:
        return empty_kpi_cards()
    current, previous = aggregate_months(rows, current_key, previous_key, room_count)
    return _kpi_cards(current, previous)


def _kpi_cards(current: KpiAggregate, previous: KpiAggregate) -> List[KpiCard]:
    occupancy = calculate_trend(current.occupancy_rate, previous.occupancy_rate)
    adr = calculate_trend(current.adr, previous.adr)
    revpar = calculate_trend(current.revpar, previous.revpar)
    revenue = calculate_trend(current.total_revenue, previous.total_revenue)
    nights = int(current.total_nights) if float(current.total_nights).is_integer() else current.total_nights

    return [
        KpiCard(
            label="Ocupacion",
            value=format_percentage(current.occupancy_rate),
            helper=f"{nights} noches vendidas",
            trend=occupancy.text,
            trend_direction=occupancy.direction,
            accent="teal",
        ),
        KpiCard(
            label="ADR",
            value=format_currency(current.adr),
            helper="Tarifa promedio",
            trend=adr.text,
            trend_direction=adr.direction,
            accent="navy",
        ),
        KpiCard(
            label="RevPAR",
            value=format_currency(current.revpar),
            helper="Ingreso por habitacion",
            trend=revpar.text,
            trend_direction=revpar.direction,
            accent="amber",
        ),
        KpiCard(
            label="Ingresos mes",
            value=format_currency(current.total_revenue),
            helper=f"Sin impuestos {format_currency(current.revenue_without_tax)}",
            trend=revenue.text,
            trend_direction=revenue.direction,
            accent="coral",
        ),
    ]


def build_arrivals(rows: Sequence[ReservationRecord], today: date) -> List[ArrivalItem]:
    return [
        ArrivalItem(
            guest=row.guest_name or "Sin huesped",
            room=row.room_number or "-",
            date=format_short_date(row.check_in_date),
            channel=row.channel_name or "Sin canal",
        )
        for row in rows
        if row.check_in_date == today and row.status != BookingStatus.CANCELLED
    ]


def build_departures(rows: Sequence[ReservationRecord], today: date) -> List[DepartureItem]:
    return [
        DepartureItem(
            guest=row.guest_name or "Sin huesped",
            room=row.room_number or "-",
            date=format_short_date(row.check_out_date),
            status="Pendiente" if (row.balance_due or 0) > 0 else "Pagado",
        )
        for row in rows
        if row.check_out_date == today and row.status != BookingStatus.CANCELLED
    ]
