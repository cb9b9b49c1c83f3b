from __future__ import annotations

import logging
from typing import Any, Dict, List

import pandas as pd

from catalog.data import ProductsLike, month_label, products_frame


logger = logging.getLogger(__name__)

UNCATEGORIZED = "Uncategorized"
MONTH_KEY = "name"


def group_by_category_and_month(products: ProductsLike) -> Dict[str, Dict[str, Any]]:
    """Bucket products by (category, sale month) and sum price / count items.

    Keys look like ``"Toys-January 2024"`` and keep first-encounter order.
    Products whose DateOfSale is missing or unparseable are left out.
    """
    df = products_frame(products)
    if df.empty:
        return {}

    df = df.assign(
        Price=pd.to_numeric(df["Price"], errors="coerce").fillna(0.0),
        category=df["Category"].where(df["Category"].notna(), UNCATEGORIZED),
        month=df["DateOfSale"].apply(month_label),
    )
    dated = df.dropna(subset=["month"])
    skipped = len(df) - len(dated)
    if skipped:
        logger.debug("Skipped %d products without a parseable DateOfSale", skipped)
    if dated.empty:
        return {}

    grouped = (
        dated.groupby(["category", "month"], sort=False)
        .agg(totalSales=("Price", "sum"), totalItems=("Price", "size"))
        .reset_index()
    )
    out: Dict[str, Dict[str, Any]] = {}
    for row in grouped.itertuples(index=False):
        out[f"{row.category}-{row.month}"] = {
            "category": str(row.category),
            "month": str(row.month),
            "totalSales": float(row.totalSales),
            "totalItems": int(row.totalItems),
        }
    return out


def _pivot_by_month(grouped: Dict[str, Dict[str, Any]], value_field: str) -> List[Dict[str, Any]]:
    monthly: Dict[str, Dict[str, Any]] = {}
    for item in grouped.values():
        monthly.setdefault(item["month"], {})[item["category"]] = item[value_field]

    rows: List[Dict[str, Any]] = []
    for month, values in monthly.items():
        row: Dict[str, Any] = {MONTH_KEY: month}
        row.update(values)
        rows.append(row)
    return rows


def prepare_sales_series(grouped: Dict[str, Dict[str, Any]]) -> List[Dict[str, Any]]:
    """One row per month with total sales per category (sparse)."""
    return _pivot_by_month(grouped, "totalSales")


def prepare_items_series(grouped: Dict[str, Dict[str, Any]]) -> List[Dict[str, Any]]:
    """One row per month with item counts per category (sparse)."""
    return _pivot_by_month(grouped, "totalItems")


def prepare_category_distribution(products: ProductsLike) -> List[Dict[str, Any]]:
    df = products_frame(products)
    if df.empty:
        return []
    categories = df["Category"].where(df["Category"].notna(), UNCATEGORIZED).astype(str)
    counts = categories.groupby(categories, sort=False).size()
    return [{"name": str(name), "value": int(value)} for name, value in counts.items()]
