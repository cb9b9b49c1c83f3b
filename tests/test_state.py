"""
Dashboard state reducer tests.
"""

from dataclasses import FrozenInstanceError

import pytest

from catalog.data import ProductLoad, normalize_payload
from catalog.filters import ProductFilters
from catalog.state import DashboardState, dashboard_context, dispatch, initial_state


@pytest.fixture
def loaded(catalog):
    return dispatch(initial_state(), {"type": "products_loaded", "load": normalize_payload(catalog)})


def test_initial_state_is_loading_and_empty():
    state = initial_state()
    assert state.loading is True
    assert state.products == ()
    assert state.applied == ProductFilters()


def test_products_loaded_clears_loading(loaded):
    assert loaded.loading is False
    assert len(loaded.products) == 5
    assert loaded.load_error is None


def test_failed_load_ends_in_empty_not_loading_state():
    state = dispatch(initial_state(), {"type": "products_loaded", "load": ProductLoad(error="ConnectionError: down")})
    assert state.loading is False
    assert state.products == ()
    assert state.load_error == "ConnectionError: down"

    failed = dispatch(initial_state(), {"type": "fetch_failed", "error": "boom"})
    assert failed.loading is False
    assert failed.products == ()


def test_fetch_started_sets_loading_and_keeps_products(loaded):
    state = dispatch(loaded, {"type": "fetch_started"})
    assert state.loading is True
    assert state.products == loaded.products


def test_pending_filters_do_not_affect_table_until_applied(loaded):
    state = dispatch(loaded, {"type": "set_search", "value": "train"})
    state = dispatch(state, {"type": "set_category", "value": "Toys"})
    state = dispatch(state, {"type": "set_sold", "value": "Not Sold"})
    assert state.pending == ProductFilters(search_text="train", category="Toys", sold=False)
    assert state.applied == ProductFilters()
    assert len(dashboard_context(state)["filtered_products"]) == 5

    state = dispatch(state, {"type": "apply_filters"})
    assert state.applied == ProductFilters(search_text="train", category="Toys", sold=False)
    assert dashboard_context(state)["filtered_products"]["_id"].tolist() == ["p5"]


def test_apply_and_reset_return_to_first_page(loaded):
    state = dispatch(loaded, {"type": "set_page", "value": 3})
    assert state.page == 3
    assert dispatch(state, {"type": "apply_filters"}).page == 1

    state = dispatch(dispatch(state, {"type": "set_category", "value": "Books"}), {"type": "apply_filters"})
    reset = dispatch(state, {"type": "reset_filters"})
    assert reset.pending == ProductFilters()
    assert reset.applied == ProductFilters()
    assert reset.page == 1


def test_all_choices_clear_criteria(loaded):
    state = dispatch(loaded, {"type": "set_category", "value": "All"})
    state = dispatch(state, {"type": "set_sold", "value": "All"})
    assert state.pending == ProductFilters()


def test_set_page_ignores_bad_values(loaded):
    assert dispatch(loaded, {"type": "set_page", "value": "x"}).page == 1
    assert dispatch(loaded, {"type": "set_page", "value": -4}).page == 1


def test_dispatch_returns_new_snapshots(loaded):
    state = dispatch(loaded, {"type": "set_search", "value": "cook"})
    assert state is not loaded
    assert loaded.pending.search_text == ""


def test_unknown_action_raises(loaded):
    with pytest.raises(ValueError, match="Unknown dashboard action"):
        dispatch(loaded, {"type": "explode"})


def test_state_is_immutable(loaded):
    with pytest.raises(FrozenInstanceError):
        loaded.page = 2  # type: ignore[misc]
    assert isinstance(loaded, DashboardState)
