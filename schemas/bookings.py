import enum
from datetime import date
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class BookingStatus(str, enum.Enum):
    PENDING = "pendiente"
    CONFIRMED = "confirmada"
    CHECKED_IN = "check-in"
    CHECKED_OUT = "check-out"
    CANCELLED = "cancelada"


BOOKING_STATUS_LABELS = {
    BookingStatus.CONFIRMED: "Confirmada",
    BookingStatus.PENDING: "Pendiente",
    BookingStatus.CHECKED_IN: "Check-in",
    BookingStatus.CHECKED_OUT: "Check-out",
    BookingStatus.CANCELLED: "Cancelada",
}


class ChannelRecord(BaseModel):
    id: str
    code: Optional[str] = None
    name: str
    commission_rate: Optional[float] = None
    is_active: bool = True

    model_config = ConfigDict(from_attributes=True)


class ReservationRecord(BaseModel):
    """Reserva con los datos unidos de huésped, habitación y canal"""
    id: Optional[str] = None
    reference: Optional[str] = None
    guest_id: Optional[str] = None
    room_id: Optional[str] = None
    channel_id: Optional[str] = None
    room_number: Optional[str] = None
    guest_name: Optional[str] = None
    channel_name: Optional[str] = None
    check_in_date: Optional[date] = None
    check_out_date: Optional[date] = None
    price_per_night: Optional[float] = None
    status: BookingStatus = BookingStatus.PENDING
    total_nights: Optional[int] = None
    total_amount: Optional[float] = None
    balance_due: Optional[float] = None
    number_of_guests: Optional[int] = None
    includes_breakfast: bool = False
    breakfast_quantity: Optional[int] = None
    observations: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class BookingListItem(BaseModel):
    id: str
    reference: str
    guest: str
    room: str
    check_in_date: Optional[date] = None
    check_out_date: Optional[date] = None
    check_in: str
    check_out: str
    nights: int
    status: BookingStatus
    channel: str
    total: str
    total_value: Optional[float] = None
    note: Optional[str] = None


class BookingDayGroup(BaseModel):
    key: str
    label: str
    date: str
    is_today: bool = False
    bookings: List[BookingListItem] = Field(default_factory=list)


class BookingCounters(BaseModel):
    total: int = 0
    pending: int = 0
    checked_in: int = 0
    cancelled: int = 0
    by_status: Dict[str, int] = Field(default_factory=dict)


class BookingDraft(BaseModel):
    """Formulario de reserva tal como lo envía la consola (valores en texto)"""
    guest_id: str = ""
    room_id: str = ""
    channel_id: str = ""
    check_in_date: str = ""
    check_out_date: str = ""
    price_per_night: str = ""
    status: str = "PENDING"
    includes_breakfast: bool = False
    breakfast_quantity: str = "0"
    number_of_guests: str = "1"
    observations: str = ""


class WeekInfo(BaseModel):
    start: str
    end: str
    label: str


class BookingAgendaResponse(BaseModel):
    week: WeekInfo
    items: List[BookingListItem]
    days: List[BookingDayGroup]
    counters: BookingCounters
    channels: List[str]
    active_statuses: List[BookingStatus]
    active_channels: List[str]


class OptionItem(BaseModel):
    id: str
    label: str
    is_active: bool = True


class BookingFormOptions(BaseModel):
    """Opciones de los selectores del formulario de reserva"""
    guests: List[OptionItem]
    rooms: List[OptionItem]
    channels: List[OptionItem]
    statuses: Dict[str, str]
