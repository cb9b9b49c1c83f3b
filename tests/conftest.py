"""
Pytest fixtures for the catalog dashboard tests.

Provides sample product payloads in both response shapes the product API
uses, and a fake HTTP session so loading can be exercised offline.
"""

import pytest
import requests


# ── Sample data ───────────────────────────────────────────────────────────────

EXAMPLE_PRODUCTS = [
    {"Category": "Toys", "Price": 10, "Sold": False, "DateOfSale": "2024-01-05"},
    {"Category": "Toys", "Price": 20, "Sold": True, "DateOfSale": "2024-01-20"},
    {"Category": "Books", "Price": 15, "Sold": False, "DateOfSale": "2024-02-10"},
]

CATALOG = [
    {
        "_id": "p1",
        "Title": "Wooden Train Set",
        "Price": 34.5,
        "Description": "Classic toy train",
        "Category": "Toys",
        "Image": "https://example.com/train.png",
        "Sold": True,
        "Is Sale": False,
        "DateOfSale": "2024-01-05",
    },
    {
        "_id": "p2",
        "Title": "Puzzle Box",
        "Price": 12.0,
        "Description": "500 pieces",
        "Category": "Toys",
        "Image": "",
        "Sold": False,
        "Is Sale": True,
        "DateOfSale": "2024-02-14",
    },
    {
        "_id": "p3",
        "Title": "Python Cookbook",
        "Price": 45.0,
        "Description": "Recipes",
        "Category": "Books",
        "Sold": True,
        "Is Sale": False,
        "DateOfSale": "2024-01-28",
    },
    {
        "_id": "p4",
        "Title": "Mystery Item",
        "Price": 7.25,
        "Description": "No category",
        "Sold": False,
        "Is Sale": False,
        "DateOfSale": "not a date",
    },
    {
        "_id": "p5",
        "Title": "TRAIN Tracks",
        "Price": 8.0,
        "Description": "Extension pack",
        "category": "Toys",
        "Sold": False,
        "Is Sale": True,
    },
]


@pytest.fixture
def example_products():
    return [dict(p) for p in EXAMPLE_PRODUCTS]


@pytest.fixture
def catalog():
    return [dict(p) for p in CATALOG]


# ── Fake HTTP ─────────────────────────────────────────────────────────────────

class FakeResponse:
    def __init__(self, payload=None, status_code=200, json_error=None):
        self._payload = payload
        self.status_code = status_code
        self._json_error = json_error

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error")

    def json(self):
        if self._json_error is not None:
            raise self._json_error
        return self._payload


class FakeSession:
    """Stands in for ``requests.Session``; records every GET."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def get(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def fake_session():
    def _make(payload=None, status_code=200, json_error=None, error=None):
        return FakeSession(FakeResponse(payload, status_code, json_error), error=error)

    return _make
