"""
Registro de huéspedes
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from database.gateway import DataGateway, GatewayError, get_gateway
from schemas.guests import GuestDraft, GuestRegistryResponse, GuestStatus
from utils.api_errors import (
    facet_from_query,
    raise_gateway_error,
    raise_not_found,
    raise_validation_error,
    sorted_active,
)
from utils.guests_engine import available_tags, build_guest_items, filter_guests, summarize_guests
from utils.logging_utils import log_event
from utils.validation_rules import guest_draft_to_row, validate_guest_draft


router = APIRouter(prefix="/api/guests", tags=["Huespedes"])


@router.get("", response_model=GuestRegistryResponse)
def list_guests(
    q: Optional[str] = Query(None),
    status_filter: Optional[List[str]] = Query(None, alias="status"),
    tag: Optional[List[str]] = Query(None),
    gateway: DataGateway = Depends(get_gateway),
):
    try:
        guests = gateway.fetch_guests()
        stays = gateway.fetch_guest_stays()
    except GatewayError as e:
        raise_gateway_error("huespedes", "cargar huespedes", e.message)

    items = build_guest_items(guests, stays)
    tags = available_tags(items)
    statuses = facet_from_query(status_filter, (s.value for s in GuestStatus))
    active_tags = facet_from_query(tag, tags)

    filtered = filter_guests(items, statuses, active_tags, q)
    log_event("huespedes", "Listado", f"total={len(items)} filtrados={len(filtered)}")

    return GuestRegistryResponse(
        items=filtered,
        counters=summarize_guests(items),
        tags=tags,
        active_statuses=sorted_active(statuses),
        active_tags=sorted_active(active_tags),
    )


@router.post("", status_code=status.HTTP_201_CREATED)
def create_guest(draft: GuestDraft, gateway: DataGateway = Depends(get_gateway)):
    errors = validate_guest_draft(draft)
    if errors:
        raise_validation_error("huespedes", errors)
    try:
        guest_id = gateway.insert_guest(guest_draft_to_row(draft))
    except GatewayError as e:
        raise_gateway_error("huespedes", "crear huesped", e.message)
    log_event("huespedes", "Huesped creado", f"id={guest_id}")
    return {"id": guest_id, "message": "Huesped creado"}


@router.put("/{guest_id}")
def update_guest(guest_id: str, draft: GuestDraft, gateway: DataGateway = Depends(get_gateway)):
    errors = validate_guest_draft(draft)
    if errors:
        raise_validation_error("huespedes", errors)
    try:
        updated = gateway.update_guest(guest_id, guest_draft_to_row(draft))
    except GatewayError as e:
        raise_gateway_error("huespedes", "actualizar huesped", e.message)
    if not updated:
        raise_not_found("huespedes", "No se encontro el huesped", guest_id)
    log_event("huespedes", "Huesped actualizado", f"id={guest_id}")
    return {"id": guest_id, "message": "Huesped actualizado"}
