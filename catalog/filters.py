from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

import pandas as pd

from catalog.data import ProductsLike, products_frame


ALL_CATEGORIES = "All"
SOLD_LABELS = {"All": None, "Sold": True, "Not Sold": False}


@dataclass(frozen=True)
class ProductFilters:
    search_text: str = ""
    category: Optional[str] = None
    sold: Optional[bool] = None

    @property
    def is_empty(self) -> bool:
        return not self.search_text and not self.category and self.sold is None


def _as_sold(value: object) -> Optional[bool]:
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, str):
        v = value.strip()
        if v in SOLD_LABELS:
            return SOLD_LABELS[v]
        lowered = v.lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
        return None
    try:
        return bool(int(value))  # type: ignore[arg-type]
    except Exception:
        return None


def normalize_filters(raw: dict) -> ProductFilters:
    search_text = str(raw.get("search_text") or "").strip()

    category = raw.get("category")
    category = str(category) if category is not None else None
    if not category or category == ALL_CATEGORIES:
        category = None

    return ProductFilters(search_text=search_text, category=category, sold=_as_sold(raw.get("sold")))


def apply_filters(products: ProductsLike, filters: ProductFilters) -> pd.DataFrame:
    """Rows matching every supplied criterion, in their original order.

    Title match is a case-insensitive substring test; category and sold are
    exact matches. Empty criteria do not constrain the result.
    """
    df = products_frame(products)
    if df.empty:
        return df

    mask = pd.Series(True, index=df.index)
    if filters.search_text:
        titles = df["Title"].fillna("").astype(str).str.lower()
        mask &= titles.str.contains(filters.search_text.lower(), regex=False)
    if filters.category:
        mask &= df["Category"] == filters.category
    if filters.sold is not None:
        mask &= df["Sold"] == filters.sold
    return df[mask]


def prepare_context(filters: dict | ProductFilters, products: ProductsLike) -> Dict[str, object]:
    if isinstance(filters, dict):
        filters = normalize_filters(filters)
    frame = products_frame(products)
    return {
        "filters": filters,
        "products": frame,
        "filtered_products": apply_filters(frame, filters),
    }
