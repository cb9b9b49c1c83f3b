import logging
from contextlib import contextmanager
from typing import Optional

import pandas as pd
import streamlit as st

from catalog.data import PAGE_SIZE, load_products
from catalog.filters import SOLD_LABELS, ProductFilters
from catalog.metrics_charts import compute_charts
from catalog.metrics_products import compute_products
from catalog.state import dashboard_context, dispatch, initial_state

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

NAV_ITEMS = ["Dashboard", "Products", "Sales", "Orders", "Settings"]


# ---------- UI / layout helpers ----------
def inject_base_styles():
    if st.session_state.get("_base_css_injected"):
        return
    st.markdown(
        """
        <style>
        .app-top-bar {padding: 6px 0 4px;border-bottom: 1px solid #333;margin-bottom: 10px;}
        .app-top-bar .breadcrumb {color: #9ca3af;font-size: 0.9rem;margin-bottom: 2px;}
        .app-top-bar .page-title {font-size: 1.4rem;font-weight: 700;}
        .card {border: 1px solid #2c2c2c;border-radius: 10px;padding: 16px;margin-bottom: 12px;}
        .card-title {font-weight: 600;font-size: 1.0rem;margin-bottom: 8px;}
        .chip-row {display: flex;flex-wrap: wrap;gap: 6px;margin-top: 6px;}
        .chip {background: #2c2c2c;border: 1px solid #3f3f3f;border-radius: 14px;padding: 4px 10px;font-size: 0.85rem;}
        </style>
        """,
        unsafe_allow_html=True,
    )
    st.session_state["_base_css_injected"] = True


@contextmanager
def card(title: str):
    container = st.container()
    container.markdown(f"<div class='card'><div class='card-title'>{title}</div>", unsafe_allow_html=True)
    body = container.container()
    with body:
        yield body
    container.markdown("</div>", unsafe_allow_html=True)


def format_filter_summary(filters: ProductFilters) -> str:
    search_chip = f"Title: “{filters.search_text}”" if filters.search_text else "Title: Any"
    cat_chip = f"Category: {filters.category}" if filters.category else "Category: All"
    sold_chip = "Sold: All" if filters.sold is None else ("Sold: Yes" if filters.sold else "Sold: No")
    return "".join([f"<span class='chip'>{txt}</span>" for txt in [search_chip, cat_chip, sold_chip]])


def render_page_header(title: str, breadcrumb: str, filter_summary_html: str, export_df: Optional[pd.DataFrame] = None):
    inject_base_styles()
    c1, c2 = st.columns([8, 2])
    with c1:
        st.markdown(
            f"<div class='app-top-bar'><div class='breadcrumb'>{breadcrumb}</div><div class='page-title'>{title}</div></div>",
            unsafe_allow_html=True,
        )
    with c2:
        btn_cols = st.columns(2)
        if btn_cols[0].button("Refresh"):
            st.session_state["dashboard"] = dispatch(st.session_state["dashboard"], {"type": "fetch_started"})
            st.rerun()
        if export_df is not None and not export_df.empty:
            btn_cols[1].download_button(
                "Export CSV",
                data=export_df.to_csv(index=False).encode("utf-8"),
                file_name="products.csv",
                mime="text/csv",
            )
    st.markdown(f"<div class='chip-row'>{filter_summary_html}</div>", unsafe_allow_html=True)


def update(action: dict):
    st.session_state["dashboard"] = dispatch(st.session_state["dashboard"], action)


# ---------- UI setup ----------
st.set_page_config(page_title="E-Commerce Admin", layout="wide")
inject_base_styles()

if "dashboard" not in st.session_state:
    st.session_state["dashboard"] = initial_state()

if st.session_state["dashboard"].loading:
    with st.spinner("Loading products..."):
        update({"type": "products_loaded", "load": load_products()})

state = st.session_state["dashboard"]
ctx = dashboard_context(state)

# ----- Sidebar: navigation -----
with st.sidebar:
    st.markdown("## Admin Panel")
    st.radio("Navigate", NAV_ITEMS, index=0, label_visibility="collapsed")

st.title("E-Commerce Admin")
render_page_header(
    "Products",
    "Home / Dashboard",
    format_filter_summary(state.applied),
    export_df=ctx["filtered_products"],
)

# ----- Filters -----
payload = compute_products(state.applied, ctx, page=state.page, page_size=PAGE_SIZE)
with card("Filters"):
    search = st.text_input("Search by Product Title", value=state.pending.search_text, placeholder="Search by Product Title")
    category_choices = ["All"] + payload["categories"]
    current_category = state.pending.category if state.pending.category in category_choices else "All"
    category = st.selectbox("Select Category", category_choices, index=category_choices.index(current_category))
    sold_choices = list(SOLD_LABELS)
    current_sold = next(label for label, value in SOLD_LABELS.items() if value == state.pending.sold)
    sold = st.selectbox("Select Sold Status", sold_choices, index=sold_choices.index(current_sold))

    update({"type": "set_search", "value": search})
    update({"type": "set_category", "value": category})
    update({"type": "set_sold", "value": sold})

    if st.button("Apply Filters", type="primary", use_container_width=True):
        update({"type": "apply_filters"})
        st.rerun()

# ----- Products table -----
if payload["total"] == 0:
    st.info("No products available")
else:
    with card(f"Products ({payload['total']})"):
        table = pd.DataFrame(payload["rows"]).drop(columns=["_id"], errors="ignore")
        st.dataframe(
            table,
            hide_index=True,
            use_container_width=True,
            column_config={"Image": st.column_config.ImageColumn("Image", width="small")},
        )
        if payload["page_count"] > 1:
            page = st.number_input(
                f"Page (of {payload['page_count']})",
                min_value=1,
                max_value=payload["page_count"],
                value=payload["page"],
                step=1,
            )
            if int(page) != state.page:
                update({"type": "set_page", "value": int(page)})
                st.rerun()

# ----- Charts -----
charts_payload = compute_charts(state.applied, ctx)
st.subheader("Product Sales and Items Analysis")
if not charts_payload["distribution"]:
    st.info("No products available")
else:
    if charts_payload["sales"]:
        with card("Category-Wise Sales Amount (Monthly)"):
            st.vega_lite_chart(charts_payload["charts"]["monthly_sales"], use_container_width=True)
        with card("Total Items in Each Category (Monthly)"):
            st.vega_lite_chart(charts_payload["charts"]["monthly_items"], use_container_width=True)
    else:
        st.info("No products with a sale date to chart.")
    with card("Category Distribution"):
        st.vega_lite_chart(charts_payload["charts"]["category_distribution"], use_container_width=True)
