"""
Tests del motor de estado de habitaciones
Prioridad: mantenimiento > ocupada > limpieza > próximo ingreso > disponible
"""

import sys
from pathlib import Path

# Agregar directorio raíz al PYTHONPATH para imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from datetime import date, timedelta

from schemas.bookings import BookingStatus, ReservationRecord
from schemas.filters import FacetState
from schemas.rooms import RoomRecord, RoomStatus
from utils.bookings_engine import booking_nights
from utils.formatters import PLACEHOLDER
from utils.room_status_engine import (
    CLEANING_NOTE,
    OUT_OF_SERVICE_NOTE,
    READY_NOTE,
    build_housekeeping_queue,
    build_priority_alerts,
    build_today_arrivals,
    derive_room_views,
    group_rooms_by_floor,
    partition_by_room,
    select_next_booking,
    summarize_room_board,
)

TODAY = date(2025, 7, 8)


def _room(number="101", floor=1, active=True, notes=None):
    return RoomRecord(id=f"room-{number}", number=number, floor=floor, is_active=active, notes=notes)


def _booking(room="101", check_in=None, check_out=None, status=BookingStatus.CONFIRMED, **extra):
    return ReservationRecord(
        id=extra.pop("id", f"bk-{room}-{check_in}"),
        room_number=room,
        guest_name=extra.pop("guest_name", "Laura Gomez"),
        channel_name=extra.pop("channel_name", "Directo"),
        check_in_date=check_in,
        check_out_date=check_out,
        status=status,
        price_per_night=extra.pop("price_per_night", 180000),
        **extra,
    )


class TestMaintenance:

    def test_inactive_room_is_maintenance_even_with_active_stay(self):
        room = _room(active=False)
        stay = _booking(check_in=TODAY - timedelta(days=1), check_out=TODAY + timedelta(days=1))
        view = derive_room_views([room], [stay], TODAY)[0]
        assert view.status == RoomStatus.MAINTENANCE
        assert view.note == OUT_OF_SERVICE_NOTE
        assert view.guest is None
        assert view.rate == PLACEHOLDER

    def test_maintenance_note_uses_room_notes(self):
        view = derive_room_views([_room(active=False, notes="Cambio de griferia")], [], TODAY)[0]
        assert view.note == "Cambio de griferia"

    def test_empty_maintenance_note_is_kept(self):
        view = derive_room_views([_room(active=False, notes="")], [], TODAY)[0]
        assert view.note == ""


class TestOccupied:

    def test_active_stay_marks_room_occupied(self):
        stay = _booking(
            check_in=TODAY - timedelta(days=2),
            check_out=TODAY + timedelta(days=1),
            guest_name="Mateo Ruiz",
            channel_name="Booking",
        )
        view = derive_room_views([_room()], [stay], TODAY)[0]
        assert view.status == RoomStatus.OCCUPIED
        assert view.guest == "Mateo Ruiz"
        assert view.channel == "Booking"
        assert view.check_in == "06 jul"
        assert view.check_out == "09 jul"
        assert view.rate == "$180.000"
        assert view.rate_value == 180000

    def test_checkout_day_is_not_occupied(self):
        # [check_in, check_out) es semiabierto
        stay = _booking(check_in=TODAY - timedelta(days=2), check_out=TODAY)
        view = derive_room_views([_room()], [stay], TODAY)[0]
        assert view.status == RoomStatus.AVAILABLE

    def test_cancelled_stay_is_ignored(self):
        stay = _booking(
            check_in=TODAY - timedelta(days=1),
            check_out=TODAY + timedelta(days=2),
            status=BookingStatus.CANCELLED,
        )
        view = derive_room_views([_room()], [stay], TODAY)[0]
        assert view.status == RoomStatus.AVAILABLE
        assert view.housekeeping == READY_NOTE

    def test_room_202_scenario(self):
        day0 = TODAY - timedelta(days=1)
        stay = _booking(room="202", check_in=day0, check_out=day0 + timedelta(days=2),
                        status=BookingStatus.CHECKED_IN)
        view = derive_room_views([_room("202", floor=2)], [stay], day0 + timedelta(days=1))[0]
        assert view.status == RoomStatus.OCCUPIED
        assert booking_nights(stay) == 2


class TestCleaningAndUpcoming:

    def test_checked_out_today_goes_to_cleaning(self):
        stay = _booking(check_in=TODAY - timedelta(days=3), check_out=TODAY, status=BookingStatus.CHECKED_OUT)
        view = derive_room_views([_room()], [stay], TODAY)[0]
        assert view.status == RoomStatus.CLEANING
        assert view.housekeeping == CLEANING_NOTE
        assert view.check_out == "08 jul"
        assert view.guest == "Laura Gomez"

    def test_upcoming_arrival_previews_guest(self):
        later = _booking(check_in=TODAY + timedelta(days=4), check_out=TODAY + timedelta(days=6),
                         guest_name="Sofia Diaz", id="later")
        sooner = _booking(check_in=TODAY + timedelta(days=2), check_out=TODAY + timedelta(days=3),
                          guest_name="Juan Perez", id="sooner")
        view = derive_room_views([_room()], [later, sooner], TODAY)[0]
        assert view.status == RoomStatus.AVAILABLE
        assert view.guest == "Juan Perez"
        assert view.note == "Ingreso 10 jul"
        assert view.booking_id == "sooner"

    def test_next_booking_tie_keeps_input_order(self):
        first = _booking(check_in=TODAY + timedelta(days=1), check_out=TODAY + timedelta(days=2), id="first")
        second = _booking(check_in=TODAY + timedelta(days=1), check_out=TODAY + timedelta(days=3), id="second")
        assert select_next_booking([first, second], TODAY).id == "first"

    def test_cancelled_arrival_is_not_previewed(self):
        cancelled = _booking(check_in=TODAY + timedelta(days=1), check_out=TODAY + timedelta(days=2),
                             status=BookingStatus.CANCELLED, id="cancelled")
        later = _booking(check_in=TODAY + timedelta(days=5), check_out=TODAY + timedelta(days=6), id="later")
        assert select_next_booking([cancelled, later], TODAY).id == "later"
        view = derive_room_views([_room()], [cancelled], TODAY)[0]
        assert view.guest is None
        assert view.housekeeping == READY_NOTE

    def test_missing_dates_never_match(self):
        undated = _booking(check_in=None, check_out=None)
        view = derive_room_views([_room()], [undated], TODAY)[0]
        assert view.status == RoomStatus.AVAILABLE
        assert view.guest is None
        assert view.housekeeping == READY_NOTE


class TestBoardAggregates:

    def setup_method(self):
        self.rooms = [
            _room("101", floor=1),
            _room("102", floor=1, active=False),
            _room("201", floor=2),
            _room("202", floor=2),
        ]
        self.reservations = [
            _booking("101", TODAY - timedelta(days=1), TODAY + timedelta(days=2)),
            _booking("201", TODAY - timedelta(days=2), TODAY, status=BookingStatus.CHECKED_OUT),
            _booking("202", TODAY, TODAY + timedelta(days=1), guest_name="Ana Torres"),
            _booking(None, TODAY, TODAY + timedelta(days=1), id="no-room"),
        ]
        self.views = derive_room_views(self.rooms, self.reservations, TODAY)

    def test_views_follow_room_order(self):
        assert [v.number for v in self.views] == ["101", "102", "201", "202"]

    def test_partition_drops_reservations_without_room(self):
        partitioned = partition_by_room(self.reservations)
        assert set(partitioned) == {"101", "201", "202"}

    def test_summary(self):
        summary = summarize_room_board(self.views)
        assert summary.total == 4
        # 202 tiene ingreso hoy: ocupada desde hoy
        assert summary.occupied == 2
        assert summary.cleaning == 1
        assert summary.maintenance == 1
        assert summary.occupancy_rate == 50

    def test_summary_without_rooms(self):
        assert summarize_room_board([]).occupancy_rate == 0

    def test_floor_groups_respect_status_facet(self):
        facet = FacetState.select([RoomStatus.OCCUPIED.value], (s.value for s in RoomStatus))
        floors = group_rooms_by_floor(self.views, facet)
        assert [f.floor for f in floors] == [1, 2]
        assert [v.number for v in floors[0].visible_rooms] == ["101"]
        assert len(floors[0].rooms) == 2
        assert floors[1].label == "Piso 2"

    def test_priority_alerts_one_per_kind(self):
        alerts = build_priority_alerts(self.views)
        assert [a.title for a in alerts] == ["Mantenimiento pendiente", "Limpieza en curso", "Salida programada"]
        assert alerts[0].detail.startswith("Habitacion 102")

    def test_housekeeping_queue(self):
        queue = build_housekeeping_queue(self.views)
        assert len(queue) == 1
        assert queue[0].room == "201"
        assert queue[0].time == "11:00 AM"

    def test_today_arrivals(self):
        arrivals = build_today_arrivals(self.reservations, TODAY)
        assert [a.guest for a in arrivals] == ["Ana Torres", "Laura Gomez"]
        assert arrivals[1].room == "-"
        assert arrivals[1].time == "3:20 PM"

    def test_inputs_are_not_mutated(self):
        before = [r.model_dump() for r in self.reservations]
        derive_room_views(self.rooms, self.reservations, TODAY)
        assert [r.model_dump() for r in self.reservations] == before
