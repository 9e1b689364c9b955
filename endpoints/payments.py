"""
Libro de pagos
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from database.gateway import DataGateway, GatewayError, get_gateway
from schemas.payments import PaymentDraft, PaymentLedgerResponse, PaymentStatus
from utils.api_errors import (
    facet_from_query,
    raise_gateway_error,
    raise_not_found,
    raise_validation_error,
    sorted_active,
)
from utils.logging_utils import log_event
from utils.payments_engine import (
    channel_breakdown,
    filter_payments,
    map_payment_row,
    payment_channels,
    pending_payment_actions,
    summarize_payments,
)
from utils.validation_rules import payment_draft_to_row, validate_payment_draft


router = APIRouter(prefix="/api/payments", tags=["Pagos"])


@router.get("", response_model=PaymentLedgerResponse)
def list_payments(
    q: Optional[str] = Query(None),
    status_filter: Optional[List[str]] = Query(None, alias="status"),
    channel: Optional[List[str]] = Query(None),
    gateway: DataGateway = Depends(get_gateway),
):
    try:
        records = gateway.fetch_payments()
    except GatewayError as e:
        raise_gateway_error("pagos", "cargar pagos", e.message)

    items = [map_payment_row(record) for record in records]
    channels = payment_channels(items)
    statuses = facet_from_query(status_filter, (s.value for s in PaymentStatus))
    active_channels = facet_from_query(channel, channels)

    filtered = filter_payments(items, statuses, active_channels, q)
    log_event("pagos", "Listado", f"total={len(items)} filtrados={len(filtered)}")

    # El desglose por canal y los pendientes usan todos los pagos, no solo los filtrados
    return PaymentLedgerResponse(
        items=filtered,
        counters=summarize_payments(items),
        channel_breakdown=channel_breakdown(items),
        pending_actions=pending_payment_actions(items),
        channels=channels,
        active_statuses=sorted_active(statuses),
        active_channels=sorted_active(active_channels),
    )


@router.post("", status_code=status.HTTP_201_CREATED)
def create_payment(draft: PaymentDraft, gateway: DataGateway = Depends(get_gateway)):
    errors = validate_payment_draft(draft)
    if errors:
        raise_validation_error("pagos", errors)
    try:
        payment_id = gateway.insert_payment(payment_draft_to_row(draft, creating=True))
    except GatewayError as e:
        raise_gateway_error("pagos", "registrar pago", e.message)
    log_event("pagos", "Pago registrado", f"id={payment_id}")
    return {"id": payment_id, "message": "Pago registrado"}


@router.put("/{payment_id}")
def update_payment(payment_id: str, draft: PaymentDraft, gateway: DataGateway = Depends(get_gateway)):
    errors = validate_payment_draft(draft)
    if errors:
        raise_validation_error("pagos", errors)
    try:
        updated = gateway.update_payment(payment_id, payment_draft_to_row(draft, creating=False))
    except GatewayError as e:
        raise_gateway_error("pagos", "actualizar pago", e.message)
    if not updated:
        raise_not_found("pagos", "No se encontro el pago", payment_id)
    log_event("pagos", "Pago actualizado", f"id={payment_id}")
    return {"id": payment_id, "message": "Pago actualizado"}
