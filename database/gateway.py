"""
Gateway de datos: único punto de acceso al almacén remoto.

Lee tablas y vistas, traduce los valores crudos (estados, métodos de pago,
Numeric) a los registros canónicos de schemas/ y ejecuta las escrituras.
Cualquier falla del almacén se revierte, se registra y se relanza como
GatewayError con un mensaje legible para la consola.
"""

from datetime import date
from typing import Any, Dict, Iterable, List, Optional

from fastapi import Depends
from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from database import conexion
from models.core import (
    Apartment,
    Booking,
    BookingSummary,
    Channel,
    Guest,
    MonthlyKpi,
    Payment,
)
from schemas.bookings import ChannelRecord, ReservationRecord
from schemas.dashboard import MonthlyKpiRecord
from schemas.guests import GuestRecord, GuestStayRecord
from schemas.payments import PaymentRecord
from schemas.rooms import RoomRecord
from utils.formatters import format_date_key, parse_date_key
from utils.logging_utils import log_error, log_event
from utils.status_mapping import booking_status_to_raw, map_booking_status, map_payment_method


class GatewayError(Exception):
    """Falla del almacén remoto con mensaje listo para mostrar"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def _to_float(value) -> Optional[float]:
    """Numeric de PostgreSQL llega como Decimal"""
    if value is None:
        return None
    return float(value)


def _summary_to_record(row: BookingSummary) -> ReservationRecord:
    return ReservationRecord(
        id=str(row.id) if row.id is not None else None,
        reference=row.booking_reference,
        room_number=row.apartment_number,
        guest_name=row.guest_name,
        channel_name=row.channel_name,
        check_in_date=row.check_in_date,
        check_out_date=row.check_out_date,
        price_per_night=_to_float(row.price_per_night),
        status=map_booking_status(row.status),
        total_nights=row.total_nights,
        total_amount=_to_float(row.total_amount),
        balance_due=_to_float(row.balance_due),
    )


class DataGateway:
    def __init__(self, db: Session):
        self.db = db

    def _fail(self, accion: str, error: Exception, message: str):
        self.db.rollback()
        log_error("gateway", accion, f"error={str(error)}")
        raise GatewayError(message) from error

    # ===== Lecturas =====

    def fetch_rooms(self) -> List[RoomRecord]:
        try:
            rows = self.db.query(Apartment).order_by(Apartment.number.asc()).all()
        except SQLAlchemyError as e:
            self._fail("Leer habitaciones", e, "No se pudo cargar las habitaciones")
        return [
            RoomRecord(
                id=str(row.id),
                number=row.number,
                floor=row.floor,
                capacity=row.capacity,
                # is_active nulo se considera activa
                is_active=row.is_active is not False,
                notes=row.notes,
            )
            for row in rows
        ]

    def fetch_reservations(self, start: date, end: date) -> List[ReservationRecord]:
        """Reservas que se superponen con [start, end]"""
        try:
            rows = (
                self.db.query(BookingSummary)
                .filter(
                    BookingSummary.check_out_date >= start,
                    BookingSummary.check_in_date <= end,
                )
                .all()
            )
        except SQLAlchemyError as e:
            self._fail("Leer reservas", e, "No se pudo cargar las reservas")
        return [_summary_to_record(row) for row in rows]

    def fetch_reservations_by_check_in(self, start: date, end: date) -> List[ReservationRecord]:
        try:
            rows = (
                self.db.query(BookingSummary)
                .filter(
                    BookingSummary.check_in_date >= start,
                    BookingSummary.check_in_date <= end,
                )
                .order_by(BookingSummary.check_in_date.asc())
                .all()
            )
        except SQLAlchemyError as e:
            self._fail("Leer agenda", e, "No se pudo cargar las reservas")
        return [_summary_to_record(row) for row in rows]

    def fetch_day_reservations(self, day: date) -> List[ReservationRecord]:
        """Ingresos o salidas del día"""
        try:
            rows = (
                self.db.query(BookingSummary)
                .filter(or_(BookingSummary.check_in_date == day, BookingSummary.check_out_date == day))
                .order_by(BookingSummary.check_in_date.asc())
                .all()
            )
        except SQLAlchemyError as e:
            self._fail("Leer movimientos del dia", e, "No se pudo cargar los movimientos del dia")
        return [_summary_to_record(row) for row in rows]

    def fetch_reservation(self, booking_id: str) -> Optional[ReservationRecord]:
        try:
            row = self.db.query(Booking).filter(Booking.id == booking_id).first()
        except SQLAlchemyError as e:
            self._fail("Leer reserva", e, "No se pudo cargar la reserva")
        if row is None:
            return None
        return ReservationRecord(
            id=str(row.id),
            reference=row.booking_reference,
            guest_id=str(row.guest_id),
            room_id=str(row.apartment_id),
            channel_id=str(row.channel_id),
            check_in_date=row.check_in_date,
            check_out_date=row.check_out_date,
            price_per_night=_to_float(row.price_per_night),
            status=map_booking_status(row.status),
            number_of_guests=row.number_of_guests,
            includes_breakfast=bool(row.includes_breakfast),
            breakfast_quantity=row.breakfast_quantity,
            observations=row.observations,
        )

    def fetch_guests(self) -> List[GuestRecord]:
        try:
            rows = self.db.query(Guest).order_by(Guest.full_name.asc()).all()
        except SQLAlchemyError as e:
            self._fail("Leer huespedes", e, "No se pudo cargar los huespedes")
        return [GuestRecord.model_validate(row) for row in rows]

    def fetch_guest_stays(self) -> List[GuestStayRecord]:
        try:
            rows = (
                self.db.query(
                    Booking.guest_id,
                    Booking.check_in_date,
                    Booking.check_out_date,
                    Booking.status,
                )
                .all()
            )
        except SQLAlchemyError as e:
            self._fail("Leer historial de huespedes", e, "No se pudo cargar el historial de huespedes")
        return [
            GuestStayRecord(
                guest_id=str(row.guest_id),
                check_in_date=row.check_in_date,
                check_out_date=row.check_out_date,
                status=map_booking_status(row.status),
            )
            for row in rows
        ]

    def fetch_payments(self) -> List[PaymentRecord]:
        """Pagos con referencia, huésped y canal de la reserva; más recientes primero"""
        try:
            rows = (
                self.db.query(
                    Payment,
                    BookingSummary.booking_reference,
                    BookingSummary.guest_name,
                    BookingSummary.channel_name,
                )
                .outerjoin(BookingSummary, BookingSummary.id == Payment.booking_id)
                .order_by(Payment.payment_date.desc().nullslast())
                .all()
            )
        except SQLAlchemyError as e:
            self._fail("Leer pagos", e, "No se pudo cargar los pagos")
        return [
            PaymentRecord(
                id=str(payment.id),
                booking_id=str(payment.booking_id),
                amount=_to_float(payment.amount) or 0,
                method=map_payment_method(payment.payment_method),
                payment_date=payment.payment_date,
                created_at=payment.created_at,
                notes=payment.notes,
                booking_reference=reference,
                guest_name=guest_name,
                channel_name=channel_name,
            )
            for payment, reference, guest_name, channel_name in rows
        ]

    def fetch_channels(self) -> List[ChannelRecord]:
        try:
            rows = self.db.query(Channel).order_by(Channel.name.asc()).all()
        except SQLAlchemyError as e:
            self._fail("Leer canales", e, "No se pudo cargar los canales")
        return [
            ChannelRecord(
                id=str(row.id),
                code=row.code,
                name=row.name,
                commission_rate=_to_float(row.commission_rate),
                is_active=row.is_active is not False,
            )
            for row in rows
        ]

    def fetch_monthly_kpis(self, month_keys: Iterable[str]) -> List[MonthlyKpiRecord]:
        months = [parse_date_key(key) for key in month_keys]
        months = [month for month in months if month is not None]
        if not months:
            return []
        try:
            rows = self.db.query(MonthlyKpi).filter(MonthlyKpi.month.in_(months)).all()
        except SQLAlchemyError as e:
            self._fail("Leer indicadores", e, "No se pudo cargar los indicadores")
        return [
            MonthlyKpiRecord(
                month=format_date_key(row.month) if row.month else None,
                channel_name=row.channel_name,
                total_nights_sold=_to_float(row.total_nights_sold),
                total_revenue=_to_float(row.total_revenue),
                revenue_without_tax=_to_float(row.revenue_without_tax),
                total_bookings=row.total_bookings,
            )
            for row in rows
        ]

    # ===== Escrituras =====

    def _insert(self, model, row: Dict[str, Any], accion: str, message: str) -> str:
        try:
            record = model(**row)
            self.db.add(record)
            self.db.commit()
            self.db.refresh(record)
        except SQLAlchemyError as e:
            self._fail(accion, e, message)
        log_event("gateway", accion, f"id={record.id}")
        return str(record.id)

    def _update(self, model, record_id: str, row: Dict[str, Any], accion: str, message: str) -> bool:
        try:
            record = self.db.query(model).filter(model.id == record_id).first()
            if record is None:
                log_event("gateway", f"{accion} inexistente", f"id={record_id}")
                return False
            for field, value in row.items():
                setattr(record, field, value)
            self.db.commit()
        except SQLAlchemyError as e:
            self._fail(accion, e, message)
        log_event("gateway", accion, f"id={record_id}")
        return True

    def insert_reservation(self, row: Dict[str, Any]) -> str:
        return self._insert(Booking, row, "Crear reserva", "No se pudo guardar la reserva")

    def update_reservation(self, booking_id: str, row: Dict[str, Any]) -> bool:
        return self._update(Booking, booking_id, row, "Actualizar reserva", "No se pudo guardar la reserva")

    def update_reservation_status(self, booking_id: str, status) -> bool:
        raw = booking_status_to_raw(map_booking_status(status))
        return self._update(
            Booking, booking_id, {"status": raw}, "Cambiar estado de reserva", "No se pudo actualizar la reserva"
        )

    def insert_guest(self, row: Dict[str, Any]) -> str:
        return self._insert(Guest, row, "Crear huesped", "No se pudo guardar el huesped")

    def update_guest(self, guest_id: str, row: Dict[str, Any]) -> bool:
        return self._update(Guest, guest_id, row, "Actualizar huesped", "No se pudo guardar el huesped")

    def insert_payment(self, row: Dict[str, Any]) -> str:
        return self._insert(Payment, row, "Registrar pago", "No se pudo guardar el pago")

    def update_payment(self, payment_id: str, row: Dict[str, Any]) -> bool:
        return self._update(Payment, payment_id, row, "Actualizar pago", "No se pudo guardar el pago")


def get_gateway(db: Session = Depends(conexion.get_db)) -> DataGateway:
    return DataGateway(db)
