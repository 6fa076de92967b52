"""Error taxonomy for the dashboard core."""

from __future__ import annotations


class DashboardError(Exception):
    """Base class for dashboard failures."""


class FetchError(DashboardError):
    """Data source unreachable, unreadable, or returned a malformed bundle."""


class EmptyInputError(DashboardError, ValueError):
    """A best-of, peak, or average was requested over no data."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"{operation} requires at least one value")
        self.operation = operation
