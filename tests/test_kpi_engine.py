"""
Tests de KPIs del dashboard: ocupación, ADR, RevPAR y tendencias
"""

import sys
from pathlib import Path

# Agregar directorio raíz al PYTHONPATH para imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from datetime import date

import pytest

from schemas.bookings import BookingStatus, ReservationRecord
from schemas.dashboard import MonthlyKpiRecord
from utils.formatters import PLACEHOLDER
from utils.kpi_engine import (
    aggregate_kpis,
    build_arrivals,
    build_departures,
    build_kpi_cards,
    calculate_trend,
)

TODAY = date(2025, 6, 15)


class TestAggregate:

    def test_kpi_scenario(self):
        """20 habitaciones, mes de 30 días, 450 noches, 90.000.000 de ingresos"""
        rows = [
            MonthlyKpiRecord(month="2025-06-01", channel_name="Directo", total_nights_sold=250,
                             total_revenue=50_000_000, revenue_without_tax=42_000_000, total_bookings=60),
            MonthlyKpiRecord(month="2025-06-01", channel_name="Booking", total_nights_sold=200,
                             total_revenue=40_000_000, revenue_without_tax=33_600_000, total_bookings=40),
        ]
        kpis = aggregate_kpis(rows, "2025-06-01", 20)
        assert kpis.total_nights == 450
        assert kpis.total_revenue == 90_000_000
        assert kpis.occupancy_rate == pytest.approx(75.0)
        assert kpis.adr == pytest.approx(200_000)
        assert kpis.revpar == pytest.approx(150_000)
        assert kpis.total_bookings == 100

    def test_no_nights_means_zero_adr(self):
        kpis = aggregate_kpis([], "2025-06-01", 20)
        assert kpis.adr == 0
        assert kpis.occupancy_rate == 0

    def test_missing_values_count_as_zero(self):
        kpis = aggregate_kpis([MonthlyKpiRecord(month="2025-06-01")], "2025-06-01", 20)
        assert kpis.total_revenue == 0


class TestTrend:

    def test_up(self):
        trend = calculate_trend(110, 100)
        assert trend.text == "+10.0% vs mes anterior"
        assert trend.direction == "up"
        assert trend.change == pytest.approx(10.0)

    def test_down(self):
        trend = calculate_trend(75, 100)
        assert trend.text == "-25.0% vs mes anterior"
        assert trend.direction == "down"

    def test_previous_zero_is_flat(self):
        for current in (0, 50, -10, 1e9):
            trend = calculate_trend(current, 0)
            assert trend.direction == "flat"
            assert trend.text == PLACEHOLDER

    def test_no_change(self):
        trend = calculate_trend(100, 100)
        assert trend.text == "0.0% vs mes anterior"
        assert trend.direction == "flat"

    def test_not_finite(self):
        assert calculate_trend(float("inf"), 100).direction == "flat"


class TestCards:

    def test_no_rows_gives_placeholders(self):
        cards = build_kpi_cards([], "2025-06-01", "2025-05-01", 28)
        assert [c.label for c in cards] == ["Ocupacion", "ADR", "RevPAR", "Ingresos mes"]
        assert all(c.value == PLACEHOLDER and c.helper == "Sin datos" for c in cards)
        assert [c.accent for c in cards] == ["teal", "navy", "amber", "coral"]

    def test_cards_with_previous_month(self):
        rows = [
            MonthlyKpiRecord(month="2025-06-01", total_nights_sold=450, total_revenue=90_000_000,
                             revenue_without_tax=75_600_000, total_bookings=100),
            MonthlyKpiRecord(month="2025-05-01", total_nights_sold=310, total_revenue=62_000_000,
                             revenue_without_tax=52_000_000, total_bookings=80),
        ]
        cards = build_kpi_cards(rows, "2025-06-01", "2025-05-01", 20)
        occupancy, adr, revpar, revenue = cards
        assert occupancy.value == "75.0%"
        assert occupancy.helper == "450 noches vendidas"
        # mayo: 310 / (20 × 31) = 50%
        assert occupancy.trend == "+50.0% vs mes anterior"
        assert occupancy.trend_direction == "up"
        assert adr.value == "$200.000"
        assert adr.trend_direction == "flat"
        assert revpar.value == "$150.000"
        assert revenue.helper == "Sin impuestos $75.600.000"


class TestDayMovements:

    def setup_method(self):
        self.rows = [
            ReservationRecord(id="a", guest_name="Laura Gomez", room_number="101", channel_name="Directo",
                              check_in_date=TODAY, check_out_date=date(2025, 6, 17)),
            ReservationRecord(id="b", guest_name="Mateo Ruiz", room_number="202",
                              check_in_date=date(2025, 6, 12), check_out_date=TODAY, balance_due=80000),
            ReservationRecord(id="c", guest_name="Ana Torres", room_number="305",
                              check_in_date=date(2025, 6, 13), check_out_date=TODAY, balance_due=0),
            ReservationRecord(id="d", guest_name="Cancelado", check_in_date=TODAY,
                              check_out_date=date(2025, 6, 16), status=BookingStatus.CANCELLED),
        ]

    def test_arrivals(self):
        arrivals = build_arrivals(self.rows, TODAY)
        assert len(arrivals) == 1
        assert arrivals[0].guest == "Laura Gomez"
        assert arrivals[0].date == "15 jun"

    def test_departures_payment_status(self):
        departures = build_departures(self.rows, TODAY)
        assert [(d.guest, d.status) for d in departures] == [("Mateo Ruiz", "Pendiente"), ("Ana Torres", "Pagado")]
