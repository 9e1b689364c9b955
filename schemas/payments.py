import enum
from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class PaymentStatus(str, enum.Enum):
    RECEIVED = "recibido"
    PENDING = "pendiente"
    REFUNDED = "reembolsado"


PAYMENT_STATUS_LABELS = {
    PaymentStatus.RECEIVED: "Recibido",
    PaymentStatus.PENDING: "Pendiente",
    PaymentStatus.REFUNDED: "Reembolsado",
}


class PaymentMethod(str, enum.Enum):
    CASH = "cash"
    CARD = "card"
    TRANSFER = "transfer"
    ONLINE = "online"


PAYMENT_METHOD_LABELS = {
    PaymentMethod.CASH: "Efectivo",
    PaymentMethod.CARD: "Tarjeta",
    PaymentMethod.TRANSFER: "Transferencia",
    PaymentMethod.ONLINE: "Online",
}


class PaymentRecord(BaseModel):
    id: str
    booking_id: str
    amount: float = 0
    method: Optional[PaymentMethod] = None
    payment_date: Optional[datetime] = None
    created_at: Optional[datetime] = None
    notes: Optional[str] = None
    booking_reference: Optional[str] = None
    guest_name: Optional[str] = None
    channel_name: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class PaymentListItem(BaseModel):
    id: str
    booking_id: str
    booking: str
    guest: str
    date: str
    date_value: Optional[datetime] = None
    method: str
    channel: str
    amount: str
    amount_value: float
    status: PaymentStatus
    notes: Optional[str] = None


class ChannelShare(BaseModel):
    label: str
    amount: float
    value: str
    share: float


class PendingAction(BaseModel):
    label: str
    detail: str


class PaymentCounters(BaseModel):
    total: int = 0
    pending: int = 0
    total_revenue: float = 0
    refund_total: float = 0
    by_status: Dict[str, int] = Field(default_factory=dict)


class PaymentDraft(BaseModel):
    booking_id: str = ""
    amount: str = ""
    payment_method: str = "CASH"
    payment_date: str = ""
    notes: str = ""


class PaymentLedgerResponse(BaseModel):
    items: List[PaymentListItem]
    counters: PaymentCounters
    channel_breakdown: List[ChannelShare]
    pending_actions: List[PendingAction]
    channels: List[str]
    active_statuses: List[PaymentStatus]
    active_channels: List[str]
