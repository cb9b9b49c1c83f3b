from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict

import pandas as pd

from catalog.aggregations import (
    group_by_category_and_month,
    prepare_category_distribution,
    prepare_items_series,
    prepare_sales_series,
)
from catalog.charts import category_pie_chart, items_line_chart, sales_bar_chart, to_vega_spec
from catalog.filters import ProductFilters


def compute_charts(filters: ProductFilters, ctx: Dict[str, Any]) -> Dict[str, Any]:
    # Charts always describe the whole catalog, not the filtered table.
    products: pd.DataFrame = ctx.get("products", pd.DataFrame())
    if products.empty:
        return {"filters": asdict(filters), "sales": [], "items": [], "distribution": [], "charts": {}}

    grouped = group_by_category_and_month(products)
    sales = prepare_sales_series(grouped)
    items = prepare_items_series(grouped)
    distribution = prepare_category_distribution(products)

    charts: Dict[str, Any] = {"category_distribution": to_vega_spec(category_pie_chart(distribution))}
    if sales:
        charts["monthly_sales"] = to_vega_spec(sales_bar_chart(sales))
        charts["monthly_items"] = to_vega_spec(items_line_chart(items))

    return {
        "filters": asdict(filters),
        "grouped": list(grouped.values()),
        "sales": sales,
        "items": items,
        "distribution": distribution,
        "charts": charts,
    }
