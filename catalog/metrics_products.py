from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict

import pandas as pd

from catalog.data import PAGE_SIZE, category_options, format_products_table, paginate
from catalog.filters import ProductFilters


def compute_products(filters: ProductFilters, ctx: Dict[str, Any], *, page: int = 1, page_size: int = PAGE_SIZE) -> Dict[str, Any]:
    products: pd.DataFrame = ctx.get("products", pd.DataFrame())
    filtered: pd.DataFrame = ctx.get("filtered_products", pd.DataFrame())

    page_df, pages = paginate(filtered, page, page_size)
    page = max(1, min(pages, int(page)))
    ids = page_df["_id"].tolist() if "_id" in page_df.columns else []
    rows = format_products_table(page_df).to_dict(orient="records")
    for row, row_id in zip(rows, ids):
        row["_id"] = row_id

    return {
        "filters": asdict(filters),
        "categories": category_options(products),
        "total": int(len(filtered)),
        "page": page,
        "page_count": pages,
        "rows": rows,
    }
