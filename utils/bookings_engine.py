"""
Agenda semanal de reservas: mapeo, filtros, agrupación por día y contadores
"""

from datetime import date
from typing import Dict, List, Optional, Sequence

from schemas.bookings import (
    BookingCounters,
    BookingDayGroup,
    BookingListItem,
    BookingStatus,
    ReservationRecord,
)
from schemas.filters import FacetState
from utils.facets import count_by, distinct_sorted, facet_allows, matches_query
from utils.formatters import (
    PLACEHOLDER,
    diff_in_days,
    format_currency,
    format_date_key,
    format_day_label,
    format_short_date,
)

# Las claves de día son fechas ISO; el centinela debe ordenar después de todas
UNDATED_GROUP_KEY = "~sin-fecha"
UNDATED_GROUP_LABEL = "Sin fecha"

NO_GUEST = "Sin huesped"
NO_CHANNEL = "Sin canal"


def all_booking_statuses() -> FacetState:
    return FacetState.all(status.value for status in BookingStatus)


def booking_nights(record: ReservationRecord) -> int:
    if record.total_nights is not None:
        return max(0, record.total_nights)
    return diff_in_days(record.check_in_date, record.check_out_date)


def booking_total(record: ReservationRecord, nights: int) -> Optional[float]:
    if record.total_amount is not None:
        return record.total_amount
    if record.price_per_night and nights:
        return record.price_per_night * nights
    return None


def booking_note(record: ReservationRecord) -> Optional[str]:
    balance_due = record.balance_due or 0
    if balance_due > 0:
        return f"Saldo pendiente {format_currency(balance_due)}"
    if record.status == BookingStatus.PENDING:
        return "Pendiente de confirmacion"
    return None


def map_booking_row(record: ReservationRecord) -> BookingListItem:
    booking_id = record.id or record.reference or f"booking-{record.room_number or 'na'}"
    nights = booking_nights(record)
    total_value = booking_total(record, nights)
    return BookingListItem(
        id=booking_id,
        reference=record.reference or booking_id,
        guest=record.guest_name or NO_GUEST,
        room=record.room_number or "-",
        check_in_date=record.check_in_date,
        check_out_date=record.check_out_date,
        check_in=format_short_date(record.check_in_date),
        check_out=format_short_date(record.check_out_date),
        nights=nights,
        status=record.status,
        channel=record.channel_name or NO_CHANNEL,
        total=format_currency(total_value),
        total_value=total_value,
        note=booking_note(record),
    )


def booking_channels(items: Sequence[BookingListItem]) -> List[str]:
    return distinct_sorted(item.channel for item in items)


def filter_bookings(
    items: Sequence[BookingListItem],
    statuses: FacetState,
    channels: FacetState,
    query: Optional[str] = None,
) -> List[BookingListItem]:
    return [
        item for item in items
        if facet_allows(statuses, item.status.value)
        and facet_allows(channels, item.channel)
        and matches_query(query, (item.guest, item.reference, item.room))
    ]


def day_key(item: BookingListItem) -> str:
    if item.check_in_date is None:
        return UNDATED_GROUP_KEY
    return format_date_key(item.check_in_date)


def _group_sort_key(key: str):
    return (key == UNDATED_GROUP_KEY, key)


def group_bookings_by_day(items: Sequence[BookingListItem], today: date) -> List[BookingDayGroup]:
    """
    Agrupa por fecha de ingreso en orden ascendente.
    Las reservas sin fecha quedan en un grupo propio que siempre va al final.
    """
    groups: Dict[str, List[BookingListItem]] = {}
    for item in items:
        groups.setdefault(day_key(item), []).append(item)

    today_key = format_date_key(today)
    result = []
    for key in sorted(groups, key=_group_sort_key):
        undated = key == UNDATED_GROUP_KEY
        result.append(BookingDayGroup(
            key=key,
            label=UNDATED_GROUP_LABEL if undated else format_day_label(key),
            date=PLACEHOLDER if undated else format_short_date(key),
            is_today=key == today_key,
            bookings=groups[key],
        ))
    return result


def summarize_bookings(items: Sequence[BookingListItem]) -> BookingCounters:
    by_status = {status.value: 0 for status in BookingStatus}
    by_status.update(count_by(items, lambda item: item.status.value))
    return BookingCounters(
        total=len(items),
        pending=by_status[BookingStatus.PENDING.value],
        checked_in=by_status[BookingStatus.CHECKED_IN.value],
        cancelled=by_status[BookingStatus.CANCELLED.value],
        by_status=by_status,
    )
