from __future__ import annotations

from typing import Any, Dict, List

import altair as alt
import pandas as pd

from catalog.aggregations import MONTH_KEY

alt.data_transformers.disable_max_rows()

COLORS = ["#0088FE", "#00C49F", "#FFBB28", "#FF8042", "#FF499E"]


def to_vega_spec(chart: alt.TopLevelMixin) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    return chart.to_dict()


def series_long_form(rows: List[Dict[str, Any]], value_name: str) -> pd.DataFrame:
    """Flatten sparse month rows into (name, category, value) records.

    Categories a month does not have are dropped rather than zero-filled.
    """
    if not rows:
        return pd.DataFrame(columns=[MONTH_KEY, "category", value_name])
    records = [
        {MONTH_KEY: row[MONTH_KEY], "category": category, value_name: value}
        for row in rows
        for category, value in row.items()
        if category != MONTH_KEY and value is not None
    ]
    return pd.DataFrame(records, columns=[MONTH_KEY, "category", value_name])


def _month_order(rows: List[Dict[str, Any]]) -> List[str]:
    return [str(r[MONTH_KEY]) for r in rows]


def sales_bar_chart(rows: List[Dict[str, Any]]) -> alt.Chart:
    long_df = series_long_form(rows, "sales")
    return (
        alt.Chart(long_df)
        .mark_bar(size=30, cornerRadiusTopLeft=10, cornerRadiusTopRight=10)
        .encode(
            x=alt.X(f"{MONTH_KEY}:N", title="Month-Year", sort=_month_order(rows)),
            xOffset=alt.XOffset("category:N"),
            y=alt.Y("sales:Q", title="Sales Amount (in USD)", axis=alt.Axis(format="$,.2f", gridDash=[4, 4])),
            color=alt.Color("category:N", title="Category", scale=alt.Scale(range=COLORS)),
            tooltip=[
                alt.Tooltip(f"{MONTH_KEY}:N", title="Month"),
                alt.Tooltip("category:N", title="Category"),
                alt.Tooltip("sales:Q", title="Sales", format="$,.2f"),
            ],
        )
        .properties(height=400, title="Category-Wise Sales Amount (Monthly)")
    )


def items_line_chart(rows: List[Dict[str, Any]]) -> alt.Chart:
    long_df = series_long_form(rows, "items")
    hover = alt.selection_point(fields=["category"], on="mouseover", empty="all")
    return (
        alt.Chart(long_df)
        .mark_line(point={"filled": True}, strokeWidth=3, interpolate="monotone")
        .encode(
            x=alt.X(f"{MONTH_KEY}:N", title="Month-Year", sort=_month_order(rows)),
            y=alt.Y("items:Q", title="Total Items", axis=alt.Axis(format="d", gridDash=[4, 4])),
            color=alt.Color("category:N", title="Category", scale=alt.Scale(range=COLORS)),
            opacity=alt.condition(hover, alt.value(1), alt.value(0.2)),
            tooltip=[
                alt.Tooltip(f"{MONTH_KEY}:N", title="Month"),
                alt.Tooltip("category:N", title="Category"),
                alt.Tooltip("items:Q", title="Items", format=","),
            ],
        )
        .add_params(hover)
        .properties(height=400, title="Total Items in Each Category (Monthly)")
    )


def category_pie_chart(rows: List[Dict[str, Any]]) -> alt.Chart:
    df = pd.DataFrame(rows, columns=["name", "value"])
    order = [str(r["name"]) for r in rows]
    return (
        alt.Chart(df)
        .mark_arc(outerRadius=150)
        .encode(
            theta=alt.Theta("value:Q"),
            color=alt.Color("name:N", title="Category", sort=order, scale=alt.Scale(range=COLORS), legend=alt.Legend(orient="bottom")),
            tooltip=[alt.Tooltip("name:N", title="Category"), alt.Tooltip("value:Q", title="Products")],
        )
        .properties(height=400, title="Category Distribution")
    )
