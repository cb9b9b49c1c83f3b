from __future__ import annotations

import logging
from datetime import date
import math
import os
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Tuple, Union

import pandas as pd
import requests
from pydantic import ValidationError

from catalog.schemas import PRODUCT_COLUMNS, ProductRecord


logger = logging.getLogger(__name__)

DEFAULT_PRODUCTS_API_URL = "https://e-comerce-backend-mf8i.onrender.com/api/v1/product"
PRODUCTS_API_URL = os.environ.get("PRODUCTS_API_URL", DEFAULT_PRODUCTS_API_URL)
REQUEST_TIMEOUT_SECONDS = 30
PAGE_SIZE = 5

TABLE_COLUMNS = {
    "Title": "Product Title",
    "Price": "Price",
    "Description": "Description",
    "Category": "Category",
    "Image": "Image",
    "Sold": "Sold",
    "Is Sale": "Is Sale",
    "DateOfSale": "Date of Sale",
}

ProductsLike = Union[pd.DataFrame, Iterable[Union[ProductRecord, dict]]]


class ProductSourceError(Exception):
    """Raised when the product listing cannot be turned into records."""


class ProductPayloadError(ProductSourceError):
    """Raised when the response JSON is neither a list nor ``{"products": [...]}``."""


@dataclass(frozen=True)
class ProductLoad:
    products: Tuple[ProductRecord, ...] = ()
    dropped: int = 0
    error: Optional[str] = None


def extract_product_list(payload: Any) -> List[Any]:
    """Return the product array from either accepted response shape."""
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict) and isinstance(payload.get("products"), list):
        return payload["products"]
    raise ProductPayloadError(f"Unexpected product payload of type {type(payload).__name__}")


def parse_products(items: Iterable[Any]) -> Tuple[List[ProductRecord], int]:
    products: List[ProductRecord] = []
    dropped = 0
    for idx, item in enumerate(items):
        if isinstance(item, ProductRecord):
            products.append(item)
            continue
        if not isinstance(item, dict):
            dropped += 1
            logger.warning("Dropping product #%d: expected an object, got %s", idx, type(item).__name__)
            continue
        try:
            products.append(ProductRecord.model_validate(item))
        except ValidationError as exc:
            dropped += 1
            logger.warning("Dropping product #%d: %s", idx, exc.errors(include_url=False))
    return products, dropped


def normalize_payload(payload: Any) -> ProductLoad:
    products, dropped = parse_products(extract_product_list(payload))
    return ProductLoad(products=tuple(products), dropped=dropped)


def fetch_products(
    url: Optional[str] = None,
    *,
    session: Optional[requests.Session] = None,
    timeout: float = REQUEST_TIMEOUT_SECONDS,
) -> ProductLoad:
    """GET the product listing and normalize it. Raises on any failure."""
    url = url or PRODUCTS_API_URL
    getter = session.get if session is not None else requests.get
    r = getter(url, timeout=timeout)
    r.raise_for_status()
    return normalize_payload(r.json())


def load_products(url: Optional[str] = None, *, session: Optional[requests.Session] = None) -> ProductLoad:
    """Best-effort fetch: any failure degrades to an empty load."""
    try:
        load = fetch_products(url, session=session)
    except (requests.RequestException, ValueError, ProductSourceError) as exc:
        logger.exception("load_products failed")
        return ProductLoad(error=f"{type(exc).__name__}: {exc}")
    if load.dropped:
        logger.warning("Dropped %d invalid product records", load.dropped)
    logger.info("Loaded %d products", len(load.products))
    return load


def products_frame(products: ProductsLike) -> pd.DataFrame:
    """Canonical DataFrame (one row per product, PRODUCT_COLUMNS) for any product input."""
    if isinstance(products, pd.DataFrame):
        df = products.copy()
        for col in PRODUCT_COLUMNS:
            if col not in df.columns:
                df[col] = None
        for col in ("Category", "Image"):
            blank = df[col].apply(lambda v: isinstance(v, str) and not v.strip()).astype(bool)
            df[col] = df[col].mask(blank, None)
        return df
    records, _ = parse_products(products)
    if not records:
        return pd.DataFrame(columns=PRODUCT_COLUMNS)
    return pd.DataFrame([r.to_row() for r in records], columns=PRODUCT_COLUMNS)


def parse_sale_date(value: object) -> Optional[pd.Timestamp]:
    # Bare numbers would be read as epoch nanoseconds.
    if not isinstance(value, (str, date)):
        return None
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        return None
    try:
        ts = pd.to_datetime(value, errors="coerce")
    except (TypeError, ValueError, OverflowError):
        return None
    if ts is None or pd.isna(ts):
        return None
    return ts


def month_label(value: object) -> Optional[str]:
    """'2024-01-05' -> 'January 2024'; None when the date cannot be parsed."""
    ts = parse_sale_date(value)
    if ts is None:
        return None
    return ts.strftime("%B %Y")


def category_options(products: ProductsLike) -> List[str]:
    df = products_frame(products)
    if df.empty:
        return []
    return [str(c) for c in df["Category"].dropna().unique().tolist()]


def format_price(value: object) -> str:
    if value is None:
        return "$0.00"
    try:
        out = float(value)
    except (TypeError, ValueError):
        return "$0.00"
    if math.isnan(out):
        return "$0.00"
    return f"${out:.2f}"


def _truthy(value: object) -> bool:
    return value is not None and not pd.isna(value) and bool(value)


def format_products_table(df: pd.DataFrame) -> pd.DataFrame:
    if df.empty:
        return pd.DataFrame(columns=list(TABLE_COLUMNS.values()))
    formatted = df[list(TABLE_COLUMNS)].copy()
    formatted["Price"] = formatted["Price"].apply(format_price)
    formatted["Sold"] = formatted["Sold"].apply(lambda v: "Yes" if _truthy(v) else "No")
    formatted["Is Sale"] = formatted["Is Sale"].apply(lambda v: "On Sale" if _truthy(v) else "Not On Sale")
    return formatted.rename(columns=TABLE_COLUMNS).reset_index(drop=True)


def page_count(total: int, page_size: int = PAGE_SIZE) -> int:
    page_size = max(1, int(page_size))
    return max(1, math.ceil(total / page_size))


def paginate(df: pd.DataFrame, page: int, page_size: int = PAGE_SIZE) -> Tuple[pd.DataFrame, int]:
    """Client-side slice of ``df`` for a 1-based page (clamped)."""
    page_size = max(1, int(page_size))
    pages = page_count(len(df), page_size)
    page = max(1, min(pages, int(page)))
    start = (page - 1) * page_size
    return df.iloc[start : start + page_size], pages
