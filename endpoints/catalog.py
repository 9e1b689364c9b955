"""
Etiquetas en español de los estados y métodos que muestra la consola
"""
from fastapi import APIRouter

from schemas.bookings import BOOKING_STATUS_LABELS
from schemas.guests import GUEST_STATUS_LABELS
from schemas.payments import PAYMENT_METHOD_LABELS, PAYMENT_STATUS_LABELS
from schemas.rooms import ROOM_STATUS_LABELS
from utils.status_mapping import NO_METHOD_LABEL


router = APIRouter(prefix="/api/catalog", tags=["Catalogo"])


def _by_value(labels):
    return {key.value: label for key, label in labels.items()}


@router.get("/labels")
def get_labels():
    payment_methods = _by_value(PAYMENT_METHOD_LABELS)
    payment_methods["none"] = NO_METHOD_LABEL
    return {
        "rooms": _by_value(ROOM_STATUS_LABELS),
        "bookings": _by_value(BOOKING_STATUS_LABELS),
        "guests": _by_value(GUEST_STATUS_LABELS),
        "payments": _by_value(PAYMENT_STATUS_LABELS),
        "payment_methods": payment_methods,
    }
