from __future__ import annotations

import logging
from dataclasses import replace

from core.config import DEFAULT_CONFIG
from core.errors import CostDataError
from core.models import CostSource
from core.state import DashboardState

logger = logging.getLogger(__name__)


def load_dashboard(
    state: DashboardState,
    source: CostSource,
    months: int = DEFAULT_CONFIG.trend_months,
) -> DashboardState:
    """Populate ``state`` from ``source`` once, before the dashboard starts.

    Only the current month is required. When it fails the error is recorded and
    nothing else is fetched; previous-month and trend failures just leave those
    fields empty.
    """
    state = replace(state, loading=True, error=None)

    try:
        current = source.get_current_month()
    except CostDataError as exc:
        logger.error("Failed to load current month: %s", exc)
        return replace(state, error=f"Failed to load current month: {exc}", loading=False)
    state = replace(state, current=current)

    try:
        state = replace(state, previous=source.get_previous_month())
    except CostDataError as exc:
        logger.warning("Failed to load previous month: %s", exc)

    try:
        state = replace(state, trend=tuple(source.get_trend(months)))
    except CostDataError as exc:
        logger.warning("Failed to load monthly trend: %s", exc)

    return replace(state, loading=False)
