from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict

TrendDirection = Literal["up", "down", "flat"]


class MonthlyKpiRecord(BaseModel):
    """Fila de la vista monthly_kpis (una por mes y canal)"""
    month: Optional[str] = None
    channel_name: Optional[str] = None
    total_nights_sold: Optional[float] = None
    total_revenue: Optional[float] = None
    revenue_without_tax: Optional[float] = None
    total_bookings: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)


class KpiAggregate(BaseModel):
    total_revenue: float = 0
    revenue_without_tax: float = 0
    total_nights: float = 0
    total_bookings: int = 0
    occupancy_rate: float = 0
    adr: float = 0
    revpar: float = 0


class Trend(BaseModel):
    text: str
    direction: TrendDirection
    change: Optional[float] = None


class KpiCard(BaseModel):
    label: str
    value: str
    helper: Optional[str] = None
    trend: Optional[str] = None
    trend_direction: Optional[TrendDirection] = None
    accent: Optional[Literal["teal", "amber", "navy", "coral"]] = None


class ArrivalItem(BaseModel):
    guest: str
    room: str
    date: str
    channel: str


class DepartureItem(BaseModel):
    guest: str
    room: str
    date: str
    status: str


class DashboardResponse(BaseModel):
    date: str
    current_month: str
    previous_month: str
    kpis: List[KpiCard]
    current: KpiAggregate
    previous: KpiAggregate
    arrivals: List[ArrivalItem]
    departures: List[DepartureItem]
