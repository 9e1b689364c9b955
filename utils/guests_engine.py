"""
Registro de huéspedes: visitas, nivel de fidelidad y etiquetas derivadas
"""

from collections import defaultdict
from typing import List, Optional, Sequence

from schemas.bookings import BookingStatus
from schemas.filters import FacetState
from schemas.guests import (
    GuestCounters,
    GuestListItem,
    GuestRecord,
    GuestStatus,
    GuestStayRecord,
)
from utils.facets import distinct_sorted, facet_allows, facet_allows_any, matches_query
from utils.formatters import PLACEHOLDER, diff_in_days, format_long_date

VIP_MIN_VISITS = 3
LONG_STAY_MIN_NIGHTS = 4
BLOCKING_NOTE_MARKERS = ("bloqueado", "no show")
NO_NOTES = "Sin notas registradas."


def all_guest_statuses() -> FacetState:
    return FacetState.all(status.value for status in GuestStatus)


def derive_guest_status(notes: Optional[str], visits: int) -> GuestStatus:
    text = (notes or "").lower()
    if any(marker in text for marker in BLOCKING_NOTE_MARKERS):
        return GuestStatus.BLOCKED
    if visits >= VIP_MIN_VISITS:
        return GuestStatus.VIP
    return GuestStatus.ACTIVE


def derive_guest_tags(notes: Optional[str], visits: int, nights: int) -> List[str]:
    text = (notes or "").lower()
    tags = []
    if visits >= VIP_MIN_VISITS:
        tags.append("Preferente")
    if nights >= LONG_STAY_MIN_NIGHTS:
        tags.append("Larga estadia")
    if "late" in text:
        tags.append("Late check-out")
    if "directo" in text:
        tags.append("Reserva directa")
    return tags


def build_guest_item(guest: GuestRecord, stays: Sequence[GuestStayRecord]) -> GuestListItem:
    valid_stays = [stay for stay in stays if stay.status != BookingStatus.CANCELLED]
    visits = len(valid_stays)
    check_ins = [stay.check_in_date for stay in valid_stays if stay.check_in_date]
    last_stay = max(check_ins) if check_ins else None
    total_nights = sum(diff_in_days(stay.check_in_date, stay.check_out_date) for stay in valid_stays)

    return GuestListItem(
        id=guest.id,
        name=guest.full_name,
        email=guest.email,
        phone=guest.phone,
        visits=visits,
        total_nights=total_nights,
        last_stay=format_long_date(last_stay),
        status=derive_guest_status(guest.notes, visits),
        tags=derive_guest_tags(guest.notes, visits, total_nights),
        document=f"{guest.document_type} {guest.document_number}",
        document_type=guest.document_type,
        document_number=guest.document_number,
        country=guest.country or PLACEHOLDER,
        nationality=guest.nationality,
        address=guest.address,
        emergency_contact_name=guest.emergency_contact_name,
        emergency_contact_phone=guest.emergency_contact_phone,
        city=guest.city or PLACEHOLDER,
        notes=guest.notes or NO_NOTES,
    )


def build_guest_items(guests: Sequence[GuestRecord], stays: Sequence[GuestStayRecord]) -> List[GuestListItem]:
    stays_by_guest = defaultdict(list)
    for stay in stays:
        stays_by_guest[stay.guest_id].append(stay)
    return [build_guest_item(guest, stays_by_guest.get(guest.id, [])) for guest in guests]


def available_tags(items: Sequence[GuestListItem]) -> List[str]:
    return distinct_sorted(tag for item in items for tag in item.tags)


def filter_guests(
    items: Sequence[GuestListItem],
    statuses: FacetState,
    tags: FacetState,
    query: Optional[str] = None,
) -> List[GuestListItem]:
    return [
        item for item in items
        if facet_allows(statuses, item.status.value)
        and facet_allows_any(tags, item.tags)
        and matches_query(query, (item.name, item.email))
    ]


def summarize_guests(items: Sequence[GuestListItem]) -> GuestCounters:
    return GuestCounters(
        total=len(items),
        vip=sum(1 for item in items if item.status == GuestStatus.VIP),
        blocked=sum(1 for item in items if item.status == GuestStatus.BLOCKED),
        active=sum(1 for item in items if item.status == GuestStatus.ACTIVE),
    )
