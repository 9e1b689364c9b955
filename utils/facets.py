"""
Filtros por facetas y búsqueda de texto compartidos por las páginas de la consola
"""

from collections import Counter
from typing import Callable, Dict, Iterable, Optional, Sequence, TypeVar

from schemas.filters import FacetState

T = TypeVar("T")


def toggle_facet(state: FacetState, value: str) -> FacetState:
    """
    Quita `value` si está activo, si no lo agrega.
    Si la selección queda vacía se restablece a todos los valores conocidos.
    """
    value = str(value)
    if value in state.active:
        remaining = state.active - {value}
    else:
        remaining = state.active | {value}
    known = state.known | {value}
    return FacetState(active=remaining or known, known=known)


def facet_allows(state: FacetState, value: Optional[str]) -> bool:
    if state.is_complete:
        return True
    return value is not None and str(value) in state.active


def facet_allows_any(state: FacetState, values: Iterable[str]) -> bool:
    """Faceta multivalor (etiquetas): alcanza con una coincidencia"""
    if state.is_complete or not state.active:
        return True
    return any(str(value) in state.active for value in values)


def normalize_query(query: Optional[str]) -> str:
    return (query or "").strip().lower()


def matches_query(query: Optional[str], fields: Sequence[Optional[str]]) -> bool:
    needle = normalize_query(query)
    if not needle:
        return True
    return any(field is not None and needle in str(field).lower() for field in fields)


def compute_share(part: float, total: float) -> float:
    if not total:
        return 0.0
    return part / total


def count_by(items: Iterable[T], key: Callable[[T], str]) -> Dict[str, int]:
    return dict(Counter(key(item) for item in items))


def distinct_sorted(values: Iterable[Optional[str]]) -> list:
    return sorted({value for value in values if value is not None})
