"""Presentation state of a query.

This enum is the only signal the rendering layer needs to choose between a
spinner, the result list, an empty message or an error. It lives in the
domain layer so the CLI and the services share it without importing each
other.
"""

from __future__ import annotations

from enum import Enum


class QueryState(str, Enum):
    """Presentation state machine values."""

    LOADING = "loading"
    LOADED = "loaded"
    NO_DATA_FOUND = "no_data_found"
    ERROR = "error"
