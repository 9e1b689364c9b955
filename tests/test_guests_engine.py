"""
Tests del registro de huéspedes: visitas, nivel y etiquetas
"""

import sys
from pathlib import Path

# Agregar directorio raíz al PYTHONPATH para imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from datetime import date

from schemas.bookings import BookingStatus
from schemas.filters import FacetState
from schemas.guests import GuestRecord, GuestStatus, GuestStayRecord
from utils.facets import toggle_facet
from utils.guests_engine import (
    NO_NOTES,
    all_guest_statuses,
    available_tags,
    build_guest_items,
    derive_guest_status,
    derive_guest_tags,
    filter_guests,
    summarize_guests,
)


def _guest(guest_id, name, notes=None, email=None):
    return GuestRecord(
        id=guest_id,
        full_name=name,
        email=email or f"{guest_id}@mail.com",
        phone="3001234567",
        document_number="1023456789",
        notes=notes,
    )


def _stay(guest_id, check_in, check_out, status=BookingStatus.CHECKED_OUT):
    return GuestStayRecord(guest_id=guest_id, check_in_date=check_in, check_out_date=check_out, status=status)


class TestDerivedAttributes:

    def test_status_levels(self):
        assert derive_guest_status(None, 0) == GuestStatus.ACTIVE
        assert derive_guest_status("Cliente frecuente", 3) == GuestStatus.VIP
        assert derive_guest_status("No show en marzo", 5) == GuestStatus.BLOCKED
        assert derive_guest_status("BLOQUEADO por deuda", 0) == GuestStatus.BLOCKED

    def test_tags(self):
        assert derive_guest_tags(None, 0, 0) == []
        assert derive_guest_tags("Pide late checkout, reserva directo", 3, 5) == [
            "Preferente", "Larga estadia", "Late check-out", "Reserva directa",
        ]


class TestGuestRegistry:

    def setup_method(self):
        self.guests = [
            _guest("g1", "Laura Gomez"),
            _guest("g2", "Mateo Ruiz", notes="Late check-out habitual"),
            _guest("g3", "Pedro Lopez", notes="no show 2024"),
        ]
        self.stays = [
            _stay("g1", date(2025, 1, 10), date(2025, 1, 12)),
            _stay("g1", date(2025, 3, 1), date(2025, 3, 3)),
            _stay("g1", date(2025, 5, 20), date(2025, 5, 21)),
            _stay("g1", date(2025, 6, 1), date(2025, 6, 9), status=BookingStatus.CANCELLED),
            _stay("g2", date(2025, 2, 1), date(2025, 2, 6)),
        ]
        self.items = build_guest_items(self.guests, self.stays)

    def test_visits_exclude_cancelled(self):
        laura = self.items[0]
        assert laura.visits == 3
        assert laura.total_nights == 5
        assert laura.last_stay == "20 may 2025"
        assert laura.status == GuestStatus.VIP
        assert laura.tags == ["Preferente", "Larga estadia"]

    def test_guest_without_stays(self):
        pedro = self.items[2]
        assert pedro.visits == 0
        assert pedro.last_stay == "—"
        assert pedro.status == GuestStatus.BLOCKED
        assert pedro.tags == []

    def test_defaults(self):
        laura = self.items[0]
        assert laura.notes == NO_NOTES
        assert laura.city == "—"
        assert laura.document == "CC 1023456789"

    def test_available_tags(self):
        assert available_tags(self.items) == ["Larga estadia", "Late check-out", "Preferente"]

    def test_filter_by_tag_and_query(self):
        tags = FacetState.select(["Late check-out"], available_tags(self.items))
        result = filter_guests(self.items, all_guest_statuses(), tags)
        assert [g.name for g in result] == ["Mateo Ruiz"]

        by_email = filter_guests(self.items, all_guest_statuses(), FacetState.all(available_tags(self.items)), "g3@")
        assert [g.name for g in by_email] == ["Pedro Lopez"]

    def test_full_tag_facet_keeps_untagged_guests(self):
        tags = FacetState.all(available_tags(self.items))
        assert len(filter_guests(self.items, all_guest_statuses(), tags)) == 3

    def test_status_reset_law(self):
        only_vip = FacetState.select([GuestStatus.VIP.value], (s.value for s in GuestStatus))
        reset = toggle_facet(only_vip, GuestStatus.VIP.value)
        tags = FacetState.all(available_tags(self.items))
        assert filter_guests(self.items, reset, tags) == filter_guests(self.items, all_guest_statuses(), tags)

    def test_summary(self):
        counters = summarize_guests(self.items)
        assert (counters.total, counters.vip, counters.blocked, counters.active) == (3, 1, 1, 1)
