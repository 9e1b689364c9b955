"""
Traducción de errores a respuestas HTTP para los routers de la consola
"""

from typing import Dict, Iterable, List, Optional

from fastapi import HTTPException, status

from schemas.filters import FacetState
from utils.logging_utils import log_event
from utils.validation_rules import INCOMPLETE_FIELDS_MESSAGE


def raise_validation_error(area: str, errors: Dict[str, str]) -> None:
    log_event(area, "Validacion rechazada", f"campos={','.join(sorted(errors))}")
    raise HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail={"message": INCOMPLETE_FIELDS_MESSAGE, "errors": errors},
    )


def raise_gateway_error(area: str, accion: str, message: str) -> None:
    log_event(area, f"Error al {accion}", f"error={message}")
    raise HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=message,
    )


def raise_not_found(area: str, detail: str, record_id: str) -> None:
    log_event(area, "Registro inexistente", f"id={record_id}")
    raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


def facet_from_query(values: Optional[List[str]], known: Iterable[str]) -> FacetState:
    """Parámetro repetido (?status=a&status=b); ausente = todos los valores"""
    if not values:
        return FacetState.all(known)
    return FacetState.select(values, known)


def sorted_active(state: FacetState) -> List[str]:
    return sorted(state.active)
