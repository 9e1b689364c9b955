"""
Traducción entre los estados crudos del almacén y los enums internos.
Toda comparación de estados dentro de los motores usa los enums; los
strings crudos solo existen en el borde (gateway y payloads de escritura).
"""

from typing import Optional

from schemas.bookings import BookingStatus
from schemas.payments import PAYMENT_METHOD_LABELS, PaymentMethod

_RAW_TO_BOOKING_STATUS = {
    "PENDING": BookingStatus.PENDING,
    "CONFIRMED": BookingStatus.CONFIRMED,
    "CHECKED_IN": BookingStatus.CHECKED_IN,
    "CHECKED_OUT": BookingStatus.CHECKED_OUT,
    "CANCELLED": BookingStatus.CANCELLED,
}

_BOOKING_STATUS_TO_RAW = {status: raw for raw, status in _RAW_TO_BOOKING_STATUS.items()}

_RAW_TO_PAYMENT_METHOD = {
    "CASH": PaymentMethod.CASH,
    "CARD": PaymentMethod.CARD,
    "TRANSFER": PaymentMethod.TRANSFER,
    "ONLINE": PaymentMethod.ONLINE,
}

RAW_BOOKING_STATUSES = tuple(_RAW_TO_BOOKING_STATUS)
RAW_PAYMENT_METHODS = tuple(_RAW_TO_PAYMENT_METHOD)

NO_METHOD_LABEL = "Sin metodo"


def map_booking_status(raw: Optional[str]) -> BookingStatus:
    """Estados desconocidos o vacíos se tratan como pendientes"""
    if isinstance(raw, BookingStatus):
        return raw
    return _RAW_TO_BOOKING_STATUS.get((raw or "").strip().upper(), BookingStatus.PENDING)


def booking_status_to_raw(status: BookingStatus) -> str:
    return _BOOKING_STATUS_TO_RAW[status]


def map_payment_method(raw: Optional[str]) -> Optional[PaymentMethod]:
    if isinstance(raw, PaymentMethod):
        return raw
    return _RAW_TO_PAYMENT_METHOD.get((raw or "").strip().upper())


def payment_method_label(method: Optional[PaymentMethod]) -> str:
    if method is None:
        return NO_METHOD_LABEL
    return PAYMENT_METHOD_LABELS[method]
