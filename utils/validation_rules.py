"""
Reglas de validación de formularios (reserva, huésped, pago)

Cada validador recibe el borrador tal como lo envía la consola y devuelve
un dict campo -> mensaje. Dict vacío = válido. Nunca lanza excepciones.
Los campos de contacto solo se validan por presencia.
"""

import math
from datetime import datetime
from typing import Any, Dict, Optional

from schemas.bookings import BookingDraft
from schemas.guests import GuestDraft
from schemas.payments import PaymentDraft
from utils.formatters import parse_currency, parse_date_key
from utils.status_mapping import RAW_BOOKING_STATUSES, RAW_PAYMENT_METHODS
from utils.timezone import HOTEL_TZ, get_hotel_now

INCOMPLETE_FIELDS_MESSAGE = "Campos incompletos"


def _to_number(value: Optional[str]) -> Optional[float]:
    """'180000' -> 180000.0; texto vacío, no numérico o no finito (nan, inf) -> None"""
    text = (value or "").strip()
    if not text:
        return None
    try:
        result = float(text)
    except ValueError:
        return None
    if not math.isfinite(result):
        return None
    return result


def _is_blank(value: Optional[str]) -> bool:
    return not (value or "").strip()


def _is_bad_date(value: Optional[str]) -> bool:
    """Texto presente que no se puede leer como fecha"""
    return not _is_blank(value) and parse_date_key(value) is None


def validate_booking_draft(draft: BookingDraft) -> Dict[str, str]:
    errors: Dict[str, str] = {}

    if _is_blank(draft.guest_id):
        errors["guest_id"] = "Huesped obligatorio."
    if _is_blank(draft.room_id):
        errors["room_id"] = "Habitacion obligatoria."
    if _is_blank(draft.channel_id):
        errors["channel_id"] = "Canal obligatorio."
    if _is_blank(draft.check_in_date):
        errors["check_in_date"] = "Fecha de ingreso obligatoria."
    if _is_blank(draft.check_out_date):
        errors["check_out_date"] = "Fecha de salida obligatoria."
    if _is_bad_date(draft.check_in_date):
        errors["check_in_date"] = "Fecha de ingreso invalida."
    if _is_bad_date(draft.check_out_date):
        errors["check_out_date"] = "Fecha de salida invalida."

    rate = _to_number(draft.price_per_night)
    if rate is None or rate <= 0:
        errors["price_per_night"] = "Tarifa invalida."

    check_in = parse_date_key(draft.check_in_date)
    check_out = parse_date_key(draft.check_out_date)
    if check_in and check_out and check_out <= check_in:
        errors["check_out_date"] = "Salida debe ser posterior al ingreso."

    guests = _to_number(draft.number_of_guests)
    if guests is None or guests <= 0 or not guests.is_integer():
        errors["number_of_guests"] = "Numero de huespedes invalido."

    if draft.includes_breakfast:
        breakfast = _to_number(draft.breakfast_quantity or "0")
        if breakfast is None or breakfast < 0 or not breakfast.is_integer():
            errors["breakfast_quantity"] = "Cantidad de desayunos invalida."

    return errors


def validate_guest_draft(draft: GuestDraft) -> Dict[str, str]:
    errors: Dict[str, str] = {}
    if _is_blank(draft.full_name):
        errors["full_name"] = "Nombre obligatorio."
    if _is_blank(draft.document_number):
        errors["document_number"] = "Documento obligatorio."
    if _is_blank(draft.country):
        errors["country"] = "Pais obligatorio."
    if _is_blank(draft.phone):
        errors["phone"] = "Telefono obligatorio."
    if _is_blank(draft.email):
        errors["email"] = "Correo obligatorio."
    return errors


def validate_payment_draft(draft: PaymentDraft) -> Dict[str, str]:
    errors: Dict[str, str] = {}
    if _is_blank(draft.booking_id):
        errors["booking_id"] = "Reserva obligatoria."
    if _is_blank(draft.amount) or parse_currency(draft.amount) <= 0:
        errors["amount"] = "Monto invalido."
    if (draft.payment_method or "").strip().upper() not in RAW_PAYMENT_METHODS:
        errors["payment_method"] = "Metodo obligatorio."
    if _is_bad_date(draft.payment_date):
        errors["payment_date"] = "Fecha de pago invalida."
    return errors


# ===== Payloads para el almacén =====

def _optional(value: Optional[str]) -> Optional[str]:
    text = (value or "").strip()
    return text or None


def booking_draft_to_row(draft: BookingDraft) -> Dict[str, Any]:
    """Borrador ya validado -> columnas de la tabla bookings"""
    status = (draft.status or "").strip().upper()
    breakfast = _to_number(draft.breakfast_quantity) or 0
    return {
        "guest_id": draft.guest_id.strip(),
        "apartment_id": draft.room_id.strip(),
        "channel_id": draft.channel_id.strip(),
        "check_in_date": parse_date_key(draft.check_in_date),
        "check_out_date": parse_date_key(draft.check_out_date),
        "price_per_night": _to_number(draft.price_per_night),
        "status": status if status in RAW_BOOKING_STATUSES else "PENDING",
        "includes_breakfast": draft.includes_breakfast,
        "breakfast_quantity": int(breakfast) if draft.includes_breakfast else 0,
        "number_of_guests": int(_to_number(draft.number_of_guests) or 1),
        "observations": _optional(draft.observations),
    }


def guest_draft_to_row(draft: GuestDraft) -> Dict[str, Any]:
    return {
        "full_name": draft.full_name.strip(),
        "document_type": (draft.document_type or "CC").strip() or "CC",
        "document_number": draft.document_number.strip(),
        "country": draft.country.strip(),
        "phone": draft.phone.strip(),
        "email": draft.email.strip(),
        "city": _optional(draft.city),
        "nationality": _optional(draft.nationality),
        "address": _optional(draft.address),
        "emergency_contact_name": _optional(draft.emergency_contact_name),
        "emergency_contact_phone": _optional(draft.emergency_contact_phone),
        "notes": _optional(draft.notes),
    }


def payment_draft_to_row(draft: PaymentDraft, creating: bool = True) -> Dict[str, Any]:
    """
    La fecha del formulario se interpreta como medianoche en la zona del hotel.
    Sin fecha: al crear se usa "ahora"; al editar se conserva la almacenada.
    Una fecha ilegible nunca llega aquí: validate_payment_draft la rechaza.
    """
    row: Dict[str, Any] = {
        "booking_id": draft.booking_id.strip(),
        "amount": parse_currency(draft.amount),
        "payment_method": draft.payment_method.strip().upper(),
        "notes": _optional(draft.notes),
    }
    payment_day = parse_date_key(draft.payment_date)
    if payment_day:
        row["payment_date"] = HOTEL_TZ.localize(datetime(payment_day.year, payment_day.month, payment_day.day))
    elif creating:
        row["payment_date"] = get_hotel_now()
    return row
