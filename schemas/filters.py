from typing import FrozenSet, Iterable

from pydantic import BaseModel, ConfigDict, Field


class FacetState(BaseModel):
    """
    Selección inmutable de un filtro categórico (estado, canal, etiqueta).

    `known` es el universo de valores posibles; `active` los valores
    seleccionados. Nunca se muta: cada cambio produce un FacetState nuevo.
    """
    active: FrozenSet[str] = Field(default_factory=frozenset)
    known: FrozenSet[str] = Field(default_factory=frozenset)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def all(cls, values: Iterable[str]) -> "FacetState":
        universe = frozenset(str(value) for value in values)
        return cls(active=universe, known=universe)

    @classmethod
    def select(cls, values: Iterable[str], known: Iterable[str]) -> "FacetState":
        """Selección explícita; valores desconocidos se descartan y una selección vacía equivale a todos"""
        universe = frozenset(str(value) for value in known)
        chosen = frozenset(str(value) for value in values) & universe
        return cls(active=chosen or universe, known=universe)

    @property
    def is_complete(self) -> bool:
        return self.active >= self.known
