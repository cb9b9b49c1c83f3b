"""Dashboard state snapshot and the reducer that moves it forward.

The UI never mutates a ``DashboardState``; every interaction is expressed as
an action dict (``{"type": ..., ...}``) passed to :func:`dispatch`, which
returns a new snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, Optional, Tuple

from catalog.data import ProductLoad
from catalog.filters import ProductFilters, normalize_filters, prepare_context
from catalog.schemas import ProductRecord


@dataclass(frozen=True)
class DashboardState:
    products: Tuple[ProductRecord, ...] = ()
    loading: bool = True
    load_error: Optional[str] = None
    dropped_records: int = 0
    pending: ProductFilters = field(default_factory=ProductFilters)
    applied: ProductFilters = field(default_factory=ProductFilters)
    page: int = 1


def initial_state() -> DashboardState:
    return DashboardState()


def _fetch_started(state: DashboardState, action: Dict[str, Any]) -> DashboardState:
    return replace(state, loading=True, load_error=None)


def _products_loaded(state: DashboardState, action: Dict[str, Any]) -> DashboardState:
    load = action.get("load")
    if isinstance(load, ProductLoad):
        products, dropped, error = load.products, load.dropped, load.error
    else:
        products, dropped, error = tuple(action.get("products") or ()), 0, None
    return replace(
        state,
        products=tuple(products),
        loading=False,
        load_error=error,
        dropped_records=dropped,
        page=1,
    )


def _fetch_failed(state: DashboardState, action: Dict[str, Any]) -> DashboardState:
    return replace(state, products=(), loading=False, load_error=str(action.get("error") or "fetch failed"), page=1)


def _set_search(state: DashboardState, action: Dict[str, Any]) -> DashboardState:
    return replace(state, pending=replace(state.pending, search_text=str(action.get("value") or "")))


def _set_category(state: DashboardState, action: Dict[str, Any]) -> DashboardState:
    category = normalize_filters({"category": action.get("value")}).category
    return replace(state, pending=replace(state.pending, category=category))


def _set_sold(state: DashboardState, action: Dict[str, Any]) -> DashboardState:
    sold = normalize_filters({"sold": action.get("value")}).sold
    return replace(state, pending=replace(state.pending, sold=sold))


def _apply_filters(state: DashboardState, action: Dict[str, Any]) -> DashboardState:
    applied = normalize_filters(
        {"search_text": state.pending.search_text, "category": state.pending.category, "sold": state.pending.sold}
    )
    return replace(state, applied=applied, page=1)


def _reset_filters(state: DashboardState, action: Dict[str, Any]) -> DashboardState:
    return replace(state, pending=ProductFilters(), applied=ProductFilters(), page=1)


def _set_page(state: DashboardState, action: Dict[str, Any]) -> DashboardState:
    try:
        page = int(action.get("value", 1))
    except (TypeError, ValueError):
        page = 1
    return replace(state, page=max(1, page))


_REDUCERS: Dict[str, Callable[[DashboardState, Dict[str, Any]], DashboardState]] = {
    "fetch_started": _fetch_started,
    "products_loaded": _products_loaded,
    "fetch_failed": _fetch_failed,
    "set_search": _set_search,
    "set_category": _set_category,
    "set_sold": _set_sold,
    "apply_filters": _apply_filters,
    "reset_filters": _reset_filters,
    "set_page": _set_page,
}


def dispatch(state: DashboardState, action: Dict[str, Any]) -> DashboardState:
    action_type = action.get("type")
    reducer = _REDUCERS.get(action_type)  # type: ignore[arg-type]
    if reducer is None:
        raise ValueError(f"Unknown dashboard action: {action_type!r}")
    return reducer(state, action)


def dashboard_context(state: DashboardState) -> Dict[str, object]:
    """Frames derived from the snapshot: full catalog + table rows under the applied filters."""
    return prepare_context(state.applied, state.products)
