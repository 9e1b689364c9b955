from datetime import date, datetime

import pytz

from config import HOTEL_TIMEZONE_STR

# La zona del hotel define qué es "hoy" para el tablero, la agenda y el dashboard
HOTEL_TZ = pytz.timezone(HOTEL_TIMEZONE_STR)


def get_hotel_now() -> datetime:
    return datetime.now(HOTEL_TZ)


def to_hotel_time(dt: datetime) -> datetime:
    """Datetimes sin zona se asumen UTC (así los devuelve el almacén)"""
    if dt.tzinfo is None:
        return pytz.utc.localize(dt).astimezone(HOTEL_TZ)
    return dt.astimezone(HOTEL_TZ)


def get_hotel_today() -> date:
    """Fecha operativa del hotel"""
    return get_hotel_now().date()
