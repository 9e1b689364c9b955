"""
Tests de facetas y búsqueda compartidas
"""

import sys
from pathlib import Path

# Agregar directorio raíz al PYTHONPATH para imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from schemas.filters import FacetState
from utils.facets import (
    compute_share,
    count_by,
    facet_allows,
    facet_allows_any,
    matches_query,
    toggle_facet,
)

STATUSES = ("pendiente", "confirmada", "check-in", "check-out", "cancelada")


class TestToggleFacet:

    def test_toggle_removes_and_adds(self):
        state = FacetState.all(STATUSES)
        without = toggle_facet(state, "cancelada")
        assert "cancelada" not in without.active
        assert toggle_facet(without, "cancelada").active == state.active

    def test_toggle_returns_new_object(self):
        state = FacetState.all(STATUSES)
        toggled = toggle_facet(state, "pendiente")
        assert toggled is not state
        assert "pendiente" in state.active

    def test_empty_selection_resets_to_all(self):
        state = FacetState.select(["pendiente"], STATUSES)
        assert state.active == frozenset({"pendiente"})
        reset = toggle_facet(state, "pendiente")
        assert reset.active == frozenset(STATUSES)
        assert reset.is_complete

    def test_reset_equals_unfiltered(self):
        values = ["pendiente", "confirmada", "cancelada", "pendiente"]
        unfiltered = [v for v in values if facet_allows(FacetState.all(STATUSES), v)]
        reset = toggle_facet(FacetState.select(["confirmada"], STATUSES), "confirmada")
        assert [v for v in values if facet_allows(reset, v)] == unfiltered


class TestFacetSelection:

    def test_select_drops_unknown_values(self):
        state = FacetState.select(["pendiente", "inexistente"], STATUSES)
        assert state.active == frozenset({"pendiente"})

    def test_select_only_unknown_means_all(self):
        assert FacetState.select(["inexistente"], STATUSES).is_complete

    def test_allows(self):
        state = FacetState.select(["confirmada"], STATUSES)
        assert facet_allows(state, "confirmada")
        assert not facet_allows(state, "pendiente")
        assert not facet_allows(state, None)

    def test_allows_any_for_tags(self):
        tags = ("Preferente", "Larga estadia")
        state = FacetState.select(["Preferente"], tags)
        assert facet_allows_any(state, ["Larga estadia", "Preferente"])
        assert not facet_allows_any(state, ["Larga estadia"])
        assert not facet_allows_any(state, [])

    def test_complete_tag_selection_lets_untagged_through(self):
        assert facet_allows_any(FacetState.all(["Preferente"]), [])


class TestQueryAndShares:

    def test_matches_query(self):
        assert matches_query("  LAURA ", ["Laura Gomez", None])
        assert matches_query("", [None])
        assert not matches_query("pedro", ["Laura Gomez", None])

    def test_compute_share(self):
        assert compute_share(50, 200) == 0.25
        assert compute_share(50, 0) == 0.0

    def test_count_by(self):
        assert count_by(["a", "b", "a"], lambda v: v) == {"a": 2, "b": 1}
