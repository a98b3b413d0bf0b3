"""Core (UI-agnostic) marketing insights logic.

This package contains:
- data loading (JSON -> campaign dataclasses)
- dimension aggregation and rate derivation
- chart geometry (scales, line paths, bars, bubbles)
- view compute functions (JSON-serializable payloads)
- chart helpers (Altair -> Vega-Lite spec dict)
"""
