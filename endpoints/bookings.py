"""
Agenda semanal de reservas y formularios de reserva
"""
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from database.gateway import DataGateway, GatewayError, get_gateway
from schemas.bookings import (
    BOOKING_STATUS_LABELS,
    BookingAgendaResponse,
    BookingDraft,
    BookingFormOptions,
    BookingStatus,
    OptionItem,
    ReservationRecord,
    WeekInfo,
)
from utils.api_errors import (
    facet_from_query,
    raise_gateway_error,
    raise_not_found,
    raise_validation_error,
    sorted_active,
)
from utils.bookings_engine import (
    booking_channels,
    filter_bookings,
    group_bookings_by_day,
    map_booking_row,
    summarize_bookings,
)
from utils.formatters import get_week_range, parse_date_key
from utils.logging_utils import log_event
from utils.status_mapping import booking_status_to_raw
from utils.timezone import get_hotel_today
from utils.validation_rules import booking_draft_to_row, validate_booking_draft


router = APIRouter(prefix="/api/bookings", tags=["Reservas"])

NOT_FOUND_DETAIL = "No se encontro la reserva"


@router.get("/agenda", response_model=BookingAgendaResponse)
def get_booking_agenda(
    week_of: Optional[date] = Query(None, description="Cualquier día de la semana a mostrar"),
    q: Optional[str] = Query(None),
    status_filter: Optional[List[str]] = Query(None, alias="status"),
    channel: Optional[List[str]] = Query(None),
    gateway: DataGateway = Depends(get_gateway),
):
    today = get_hotel_today()
    week = get_week_range(week_of or today)
    try:
        rows = gateway.fetch_reservations_by_check_in(parse_date_key(week.start), parse_date_key(week.end))
    except GatewayError as e:
        raise_gateway_error("reservas", "cargar agenda", e.message)

    items = [map_booking_row(row) for row in rows]
    channels = booking_channels(items)
    statuses = facet_from_query(status_filter, (s.value for s in BookingStatus))
    active_channels = facet_from_query(channel, channels)

    filtered = filter_bookings(items, statuses, active_channels, q)
    log_event("reservas", "Agenda", f"semana={week.start} total={len(items)} filtradas={len(filtered)}")

    return BookingAgendaResponse(
        week=WeekInfo(start=week.start, end=week.end, label=week.label),
        items=filtered,
        days=group_bookings_by_day(filtered, today),
        counters=summarize_bookings(items),
        channels=channels,
        active_statuses=sorted_active(statuses),
        active_channels=sorted_active(active_channels),
    )


@router.get("/options", response_model=BookingFormOptions)
def get_booking_form_options(gateway: DataGateway = Depends(get_gateway)):
    """Huéspedes, habitaciones y canales para los selectores del formulario"""
    try:
        guests = gateway.fetch_guests()
        rooms = gateway.fetch_rooms()
        channels = gateway.fetch_channels()
    except GatewayError as e:
        raise_gateway_error("reservas", "cargar opciones", e.message)

    return BookingFormOptions(
        guests=[OptionItem(id=g.id, label=g.full_name) for g in guests],
        rooms=[
            OptionItem(id=r.id, label=f"Habitacion {r.number} · Piso {r.floor}", is_active=r.is_active)
            for r in rooms
        ],
        channels=[OptionItem(id=c.id, label=c.name, is_active=c.is_active) for c in channels],
        statuses={booking_status_to_raw(s): label for s, label in BOOKING_STATUS_LABELS.items()},
    )


@router.get("/{booking_id}", response_model=ReservationRecord)
def get_booking(booking_id: str, gateway: DataGateway = Depends(get_gateway)):
    """Datos de la reserva para precargar el formulario de edición"""
    try:
        record = gateway.fetch_reservation(booking_id)
    except GatewayError as e:
        raise_gateway_error("reservas", "cargar reserva", e.message)
    if record is None:
        raise_not_found("reservas", NOT_FOUND_DETAIL, booking_id)
    return record


@router.post("", status_code=status.HTTP_201_CREATED)
def create_booking(draft: BookingDraft, gateway: DataGateway = Depends(get_gateway)):
    errors = validate_booking_draft(draft)
    if errors:
        raise_validation_error("reservas", errors)
    try:
        booking_id = gateway.insert_reservation(booking_draft_to_row(draft))
    except GatewayError as e:
        raise_gateway_error("reservas", "crear reserva", e.message)
    log_event("reservas", "Reserva creada", f"id={booking_id}")
    return {"id": booking_id, "message": "Reserva creada"}


@router.put("/{booking_id}")
def update_booking(booking_id: str, draft: BookingDraft, gateway: DataGateway = Depends(get_gateway)):
    errors = validate_booking_draft(draft)
    if errors:
        raise_validation_error("reservas", errors)
    try:
        updated = gateway.update_reservation(booking_id, booking_draft_to_row(draft))
    except GatewayError as e:
        raise_gateway_error("reservas", "actualizar reserva", e.message)
    if not updated:
        raise_not_found("reservas", NOT_FOUND_DETAIL, booking_id)
    log_event("reservas", "Reserva actualizada", f"id={booking_id}")
    return {"id": booking_id, "message": "Reserva actualizada"}


@router.post("/{booking_id}/cancel")
def cancel_booking(booking_id: str, gateway: DataGateway = Depends(get_gateway)):
    try:
        updated = gateway.update_reservation_status(booking_id, BookingStatus.CANCELLED)
    except GatewayError as e:
        raise_gateway_error("reservas", "cancelar reserva", e.message)
    if not updated:
        raise_not_found("reservas", NOT_FOUND_DETAIL, booking_id)
    log_event("reservas", "Reserva cancelada", f"id={booking_id}")
    return {"id": booking_id, "message": "La reserva se marco como cancelada."}
