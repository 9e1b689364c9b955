"""
Room Status Engine - Estado operativo de cada habitación para el día
Cruza el inventario de habitaciones con las reservas de la ventana
(hoy + días de anticipación) y elige una sola reserva "conductora" por habitación.
"""

from collections import defaultdict
from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence

from schemas.bookings import BookingStatus, ReservationRecord
from schemas.filters import FacetState
from schemas.rooms import (
    ArrivalSlot,
    BoardAlert,
    FloorGroup,
    HousekeepingTask,
    RoomBoardSummary,
    RoomRecord,
    RoomStatus,
    RoomView,
)
from utils.facets import facet_allows
from utils.formatters import PLACEHOLDER, format_currency, format_short_date

OUT_OF_SERVICE_NOTE = "Fuera de servicio"
CLEANING_NOTE = "Limpieza programada"
READY_NOTE = "Lista para check-in"
ROOM_TYPE = "Habitacion"

HOUSEKEEPING_SLOTS = ("11:00 AM", "12:20 PM", "2:00 PM", "3:15 PM")
ARRIVAL_SLOTS = ("2:00 PM", "3:20 PM", "4:10 PM")


def partition_by_room(reservations: Iterable[ReservationRecord]) -> Dict[str, List[ReservationRecord]]:
    """Agrupa por número de habitación; reservas sin habitación se descartan"""
    by_room: Dict[str, List[ReservationRecord]] = defaultdict(list)
    for reservation in reservations:
        if not reservation.room_number:
            continue
        by_room[reservation.room_number].append(reservation)
    return by_room


def select_active_booking(bookings: Sequence[ReservationRecord], today: date) -> Optional[ReservationRecord]:
    for booking in bookings:
        if (
            booking.check_in_date
            and booking.check_out_date
            and booking.check_in_date <= today < booking.check_out_date
            and booking.status != BookingStatus.CANCELLED
        ):
            return booking
    return None


def select_checkout_booking(bookings: Sequence[ReservationRecord], today: date) -> Optional[ReservationRecord]:
    for booking in bookings:
        if booking.check_out_date == today and booking.status == BookingStatus.CHECKED_OUT:
            return booking
    return None


def select_next_booking(bookings: Sequence[ReservationRecord], today: date) -> Optional[ReservationRecord]:
    upcoming = [
        b for b in bookings
        if b.check_in_date and b.check_in_date > today and b.status != BookingStatus.CANCELLED
    ]
    if not upcoming:
        return None
    # sorted() es estable: en empate gana el orden de llegada
    return sorted(upcoming, key=lambda b: b.check_in_date)[0]


def derive_room_view(room: RoomRecord, bookings: Sequence[ReservationRecord], today: date) -> RoomView:
    view = {
        "id": room.id,
        "number": room.number,
        "floor": room.floor,
        "status": RoomStatus.AVAILABLE,
        "type": ROOM_TYPE,
    }
    driving: Optional[ReservationRecord] = None

    if not room.is_active:
        view["status"] = RoomStatus.MAINTENANCE
        # nota vacía se respeta; solo None usa el texto por defecto
        view["note"] = room.notes if room.notes is not None else OUT_OF_SERVICE_NOTE
    elif (active := select_active_booking(bookings, today)) is not None:
        driving = active
        view["status"] = RoomStatus.OCCUPIED
        view["check_in"] = format_short_date(active.check_in_date)
        view["check_out"] = format_short_date(active.check_out_date)
    elif (checkout := select_checkout_booking(bookings, today)) is not None:
        driving = checkout
        view["status"] = RoomStatus.CLEANING
        view["check_out"] = format_short_date(checkout.check_out_date)
        view["housekeeping"] = CLEANING_NOTE
    elif (upcoming := select_next_booking(bookings, today)) is not None:
        driving = upcoming
        view["check_in"] = format_short_date(upcoming.check_in_date)
        view["check_out"] = format_short_date(upcoming.check_out_date)
        view["note"] = f"Ingreso {format_short_date(upcoming.check_in_date)}"
    else:
        view["housekeeping"] = READY_NOTE

    rate_value = None
    if driving is not None:
        view["guest"] = driving.guest_name
        view["channel"] = driving.channel_name
        view["booking_id"] = driving.id
        rate_value = driving.price_per_night

    view["rate_value"] = rate_value
    view["rate"] = format_currency(rate_value) if rate_value else PLACEHOLDER
    return RoomView(**view)


def derive_room_views(
    rooms: Sequence[RoomRecord],
    reservations: Iterable[ReservationRecord],
    today: date,
) -> List[RoomView]:
    """Una vista por habitación, en el orden del inventario. Nunca lanza excepciones."""
    by_room = partition_by_room(reservations)
    return [derive_room_view(room, by_room.get(room.number, []), today) for room in rooms]


def summarize_room_board(views: Sequence[RoomView]) -> RoomBoardSummary:
    counts = {status: 0 for status in RoomStatus}
    for view in views:
        counts[view.status] += 1
    total = len(views)
    occupancy = round(counts[RoomStatus.OCCUPIED] / total * 100) if total > 0 else 0
    return RoomBoardSummary(
        total=total,
        occupied=counts[RoomStatus.OCCUPIED],
        available=counts[RoomStatus.AVAILABLE],
        cleaning=counts[RoomStatus.CLEANING],
        maintenance=counts[RoomStatus.MAINTENANCE],
        occupancy_rate=occupancy,
    )


def group_rooms_by_floor(views: Sequence[RoomView], statuses: FacetState) -> List[FloorGroup]:
    groups = []
    for floor in sorted({view.floor for view in views}):
        floor_rooms = [view for view in views if view.floor == floor]
        groups.append(FloorGroup(
            floor=floor,
            label=f"Piso {floor}",
            rooms=floor_rooms,
            visible_rooms=[view for view in floor_rooms if facet_allows(statuses, view.status.value)],
        ))
    return groups


def build_priority_alerts(views: Sequence[RoomView]) -> List[BoardAlert]:
    """Una alerta por tipo: mantenimiento, limpieza y salida"""
    alerts = []
    maintenance = next((v for v in views if v.status == RoomStatus.MAINTENANCE), None)
    if maintenance:
        alerts.append(BoardAlert(
            title="Mantenimiento pendiente",
            detail=f"Habitacion {maintenance.number} · {maintenance.note or 'Revision programada'}",
        ))
    cleaning = next((v for v in views if v.status == RoomStatus.CLEANING), None)
    if cleaning:
        alerts.append(BoardAlert(
            title="Limpieza en curso",
            detail=f"Habitacion {cleaning.number} · {cleaning.housekeeping or 'En progreso'}",
        ))
    occupied = next((v for v in views if v.status == RoomStatus.OCCUPIED), None)
    if occupied:
        alerts.append(BoardAlert(
            title="Salida programada",
            detail=f"Habitacion {occupied.number} · {occupied.check_out or 'Salida hoy'}",
        ))
    return alerts


def build_housekeeping_queue(views: Sequence[RoomView]) -> List[HousekeepingTask]:
    cleaning = [v for v in views if v.status == RoomStatus.CLEANING]
    return [
        HousekeepingTask(
            room=view.number,
            task=view.housekeeping or CLEANING_NOTE,
            time=HOUSEKEEPING_SLOTS[index % len(HOUSEKEEPING_SLOTS)],
        )
        for index, view in enumerate(cleaning)
    ]


def build_today_arrivals(reservations: Iterable[ReservationRecord], today: date) -> List[ArrivalSlot]:
    arrivals = [
        r for r in reservations
        if r.check_in_date == today and r.status != BookingStatus.CANCELLED
    ]
    return [
        ArrivalSlot(
            guest=r.guest_name or "Sin huesped",
            room=r.room_number or "-",
            time=ARRIVAL_SLOTS[index % len(ARRIVAL_SLOTS)],
        )
        for index, r in enumerate(arrivals)
    ]
