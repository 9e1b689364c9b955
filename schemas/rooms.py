import enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class RoomStatus(str, enum.Enum):
    AVAILABLE = "available"
    OCCUPIED = "occupied"
    CLEANING = "cleaning"
    MAINTENANCE = "maintenance"


ROOM_STATUS_LABELS = {
    RoomStatus.AVAILABLE: "Disponible",
    RoomStatus.OCCUPIED: "Ocupada",
    RoomStatus.CLEANING: "Limpieza",
    RoomStatus.MAINTENANCE: "Mantenimiento",
}


class RoomRecord(BaseModel):
    """Habitación tal como llega del almacén (tabla apartments)"""
    id: str
    number: str
    floor: int
    capacity: Optional[int] = None
    is_active: bool = True
    notes: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class RoomView(BaseModel):
    """Estado operativo derivado de una habitación para el día"""
    id: str
    number: str
    floor: int
    status: RoomStatus
    type: str = "Habitacion"
    rate: str
    rate_value: Optional[float] = None
    guest: Optional[str] = None
    check_in: Optional[str] = None
    check_out: Optional[str] = None
    channel: Optional[str] = None
    housekeeping: Optional[str] = None
    note: Optional[str] = None
    booking_id: Optional[str] = None


class RoomBoardSummary(BaseModel):
    total: int = 0
    occupied: int = 0
    available: int = 0
    cleaning: int = 0
    maintenance: int = 0
    occupancy_rate: int = 0


class FloorGroup(BaseModel):
    floor: int
    label: str
    rooms: List[RoomView] = Field(default_factory=list)
    visible_rooms: List[RoomView] = Field(default_factory=list)


class BoardAlert(BaseModel):
    title: str
    detail: str


class HousekeepingTask(BaseModel):
    room: str
    task: str
    time: str


class ArrivalSlot(BaseModel):
    guest: str
    room: str
    time: str


class RoomBoardResponse(BaseModel):
    date: str
    rooms: List[RoomView]
    summary: RoomBoardSummary
    floors: List[FloorGroup]
    alerts: List[BoardAlert]
    housekeeping_queue: List[HousekeepingTask]
    arrivals: List[ArrivalSlot]
    active_statuses: List[RoomStatus]
