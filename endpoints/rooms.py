"""
Tablero de habitaciones del día
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from config import ROOMS_LOOKAHEAD_DAYS
from database.gateway import DataGateway, GatewayError, get_gateway
from schemas.rooms import RoomBoardResponse, RoomStatus
from utils.api_errors import facet_from_query, raise_gateway_error, sorted_active
from utils.formatters import add_days, format_date_key
from utils.logging_utils import log_event
from utils.room_status_engine import (
    build_housekeeping_queue,
    build_priority_alerts,
    build_today_arrivals,
    derive_room_views,
    group_rooms_by_floor,
    summarize_room_board,
)
from utils.timezone import get_hotel_today


router = APIRouter(prefix="/api/rooms", tags=["Habitaciones"])


@router.get("/board", response_model=RoomBoardResponse)
def get_room_board(
    status_filter: Optional[List[str]] = Query(None, alias="status"),
    gateway: DataGateway = Depends(get_gateway),
):
    """
    Estado operativo de todas las habitaciones para hoy.
    Se consideran las reservas entre hoy y los próximos días de anticipación.
    """
    today = get_hotel_today()
    try:
        rooms = gateway.fetch_rooms()
        reservations = gateway.fetch_reservations(today, add_days(today, ROOMS_LOOKAHEAD_DAYS))
    except GatewayError as e:
        raise_gateway_error("habitaciones", "cargar tablero", e.message)

    statuses = facet_from_query(status_filter, (s.value for s in RoomStatus))
    views = derive_room_views(rooms, reservations, today)
    summary = summarize_room_board(views)

    log_event("habitaciones", "Tablero", f"fecha={today} total={summary.total} ocupadas={summary.occupied}")

    return RoomBoardResponse(
        date=format_date_key(today),
        rooms=views,
        summary=summary,
        floors=group_rooms_by_floor(views, statuses),
        alerts=build_priority_alerts(views),
        housekeeping_queue=build_housekeeping_queue(views),
        arrivals=build_today_arrivals(reservations, today),
        active_statuses=sorted_active(statuses),
    )
