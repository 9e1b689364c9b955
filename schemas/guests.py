import enum
from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from schemas.bookings import BookingStatus


class GuestStatus(str, enum.Enum):
    ACTIVE = "activo"
    VIP = "vip"
    BLOCKED = "bloqueado"


GUEST_STATUS_LABELS = {
    GuestStatus.ACTIVE: "Activo",
    GuestStatus.VIP: "VIP",
    GuestStatus.BLOCKED: "Bloqueado",
}


class GuestRecord(BaseModel):
    id: str
    full_name: str
    email: str = ""
    phone: str = ""
    city: Optional[str] = None
    notes: Optional[str] = None
    document_type: str = "CC"
    document_number: str = ""
    country: Optional[str] = None
    nationality: Optional[str] = None
    address: Optional[str] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class GuestStayRecord(BaseModel):
    """Proyección mínima de una reserva para historial del huésped"""
    guest_id: str
    check_in_date: Optional[date] = None
    check_out_date: Optional[date] = None
    status: BookingStatus = BookingStatus.PENDING

    model_config = ConfigDict(from_attributes=True)


class GuestListItem(BaseModel):
    id: str
    name: str
    email: str
    phone: str
    visits: int
    total_nights: int = 0
    last_stay: str
    status: GuestStatus
    tags: List[str] = Field(default_factory=list)
    document: str
    document_type: str
    document_number: str
    country: str
    nationality: Optional[str] = None
    address: Optional[str] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone: Optional[str] = None
    city: str
    notes: str


class GuestCounters(BaseModel):
    total: int = 0
    vip: int = 0
    blocked: int = 0
    active: int = 0


class GuestDraft(BaseModel):
    full_name: str = ""
    document_type: str = "CC"
    document_number: str = ""
    country: str = ""
    phone: str = ""
    email: str = ""
    city: str = ""
    nationality: str = ""
    address: str = ""
    emergency_contact_name: str = ""
    emergency_contact_phone: str = ""
    notes: str = ""


class GuestRegistryResponse(BaseModel):
    items: List[GuestListItem]
    counters: GuestCounters
    tags: List[str]
    active_statuses: List[GuestStatus]
    active_tags: List[str]
