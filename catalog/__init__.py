"""Core (UI-agnostic) catalog dashboard logic.

This package contains:
- product loading (HTTP JSON -> validated records -> pandas)
- filter normalization and the table filter composer
- grouping / pivot helpers feeding the charts
- dashboard state + reducer
- page compute functions (JSON-serializable payloads)
- chart helpers (Altair -> Vega-Lite spec dict)
"""
