"""
Dashboard operativo: KPIs del mes y movimientos del día
"""
from fastapi import APIRouter, Depends

from config import ROOMS_TOTAL
from database.gateway import DataGateway, GatewayError, get_gateway
from schemas.dashboard import DashboardResponse
from utils.api_errors import raise_gateway_error
from utils.formatters import add_months, format_date_key, get_month_key
from utils.kpi_engine import aggregate_months, build_arrivals, build_departures, build_kpi_cards
from utils.logging_utils import log_event
from utils.timezone import get_hotel_today


router = APIRouter(prefix="/api/dashboard", tags=["Dashboard"])


@router.get("", response_model=DashboardResponse)
def get_dashboard(gateway: DataGateway = Depends(get_gateway)):
    today = get_hotel_today()
    current_key = get_month_key(today)
    previous_key = get_month_key(add_months(today, -1))

    try:
        kpi_rows = gateway.fetch_monthly_kpis([current_key, previous_key])
        day_rows = gateway.fetch_day_reservations(today)
    except GatewayError as e:
        raise_gateway_error("dashboard", "cargar dashboard", e.message)

    current, previous = aggregate_months(kpi_rows, current_key, previous_key, ROOMS_TOTAL)
    log_event("dashboard", "Resumen", f"mes={current_key} filas={len(kpi_rows)} movimientos={len(day_rows)}")

    return DashboardResponse(
        date=format_date_key(today),
        current_month=current_key,
        previous_month=previous_key,
        kpis=build_kpi_cards(kpi_rows, current_key, previous_key, ROOMS_TOTAL),
        current=current,
        previous=previous,
        arrivals=build_arrivals(day_rows, today),
        departures=build_departures(day_rows, today),
    )
