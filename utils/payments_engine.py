"""
Libro de pagos: estado derivado, filtros y participación por canal
"""

from typing import Dict, List, Optional, Sequence

from schemas.filters import FacetState
from schemas.payments import (
    ChannelShare,
    PaymentCounters,
    PaymentListItem,
    PaymentRecord,
    PaymentStatus,
    PendingAction,
)
from utils.facets import compute_share, count_by, distinct_sorted, facet_allows, matches_query
from utils.formatters import format_currency, format_long_date
from utils.status_mapping import payment_method_label
from utils.timezone import to_hotel_time

REFUND_MARKERS = ("reembolso", "refund")
NO_GUEST = "Sin huesped"
NO_CHANNEL = "Sin canal"


def all_payment_statuses() -> FacetState:
    return FacetState.all(status.value for status in PaymentStatus)


def derive_payment_status(record: PaymentRecord) -> PaymentStatus:
    notes = (record.notes or "").lower()
    if any(marker in notes for marker in REFUND_MARKERS):
        return PaymentStatus.REFUNDED
    if record.payment_date:
        return PaymentStatus.RECEIVED
    return PaymentStatus.PENDING


def map_payment_row(record: PaymentRecord) -> PaymentListItem:
    amount_value = float(record.amount or 0)
    date_value = record.payment_date or record.created_at
    if date_value is not None:
        date_value = to_hotel_time(date_value)
    return PaymentListItem(
        id=record.id,
        booking_id=record.booking_id,
        booking=record.booking_reference or record.booking_id,
        guest=record.guest_name or NO_GUEST,
        date=format_long_date(date_value),
        date_value=date_value,
        method=payment_method_label(record.method),
        channel=record.channel_name or NO_CHANNEL,
        amount=format_currency(amount_value),
        amount_value=amount_value,
        status=derive_payment_status(record),
        notes=record.notes,
    )


def payment_channels(items: Sequence[PaymentListItem]) -> List[str]:
    return distinct_sorted(item.channel for item in items)


def filter_payments(
    items: Sequence[PaymentListItem],
    statuses: FacetState,
    channels: FacetState,
    query: Optional[str] = None,
) -> List[PaymentListItem]:
    return [
        item for item in items
        if facet_allows(statuses, item.status.value)
        and facet_allows(channels, item.channel)
        and matches_query(query, (item.booking, item.guest))
    ]


def channel_breakdown(items: Sequence[PaymentListItem]) -> List[ChannelShare]:
    """
    Suma de montos por canal sobre todos los pagos.
    share = suma del canal / total; con total 0 todas las participaciones son 0.
    """
    totals: Dict[str, float] = {}
    for item in items:
        totals[item.channel] = totals.get(item.channel, 0.0) + item.amount_value
    grand_total = sum(totals.values())
    shares = [
        ChannelShare(
            label=label,
            amount=value,
            value=format_currency(value),
            share=compute_share(value, grand_total),
        )
        for label, value in totals.items()
    ]
    return sorted(shares, key=lambda share: share.share, reverse=True)


def pending_payment_actions(items: Sequence[PaymentListItem], limit: int = 3) -> List[PendingAction]:
    pending = [item for item in items if item.status != PaymentStatus.RECEIVED][:limit]
    return [
        PendingAction(
            label="Reembolso" if item.status == PaymentStatus.REFUNDED else "Cobro pendiente",
            detail=f"{item.booking} · {item.method}",
        )
        for item in pending
    ]


def summarize_payments(items: Sequence[PaymentListItem]) -> PaymentCounters:
    by_status = {status.value: 0 for status in PaymentStatus}
    by_status.update(count_by(items, lambda item: item.status.value))
    return PaymentCounters(
        total=len(items),
        pending=by_status[PaymentStatus.PENDING.value],
        total_revenue=sum(item.amount_value for item in items),
        refund_total=sum(item.amount_value for item in items if item.status == PaymentStatus.REFUNDED),
        by_status=by_status,
    )
