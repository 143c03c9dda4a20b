from __future__ import annotations


class CostDataError(Exception):
    """A cost summary could not be obtained from its source."""


class DashboardError(Exception):
    """The interactive dashboard stopped because of an unexpected failure."""
