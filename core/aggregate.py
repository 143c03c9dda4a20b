"""Derived values for the dashboard views.

Every function here is pure and cheap; views call them on each render instead
of caching results on the state.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from enum import Enum, IntEnum
from typing import List, Optional, Sequence, Tuple

import pandas as pd

from core.config import DEFAULT_CONFIG, DashboardConfig
from core.models import CostSummary, ServiceCost

VENDOR_PREFIXES: Tuple[str, ...] = ("Amazon ", "AWS ", "Amazon")
ELLIPSIS = "…"


class Severity(IntEnum):
    LOW = 0
    MODERATE = 1
    HIGH = 2
    CRITICAL = 3


class ChangeBand(Enum):
    INCREASE = "increase"
    DECREASE = "decrease"
    NEUTRAL = "neutral"


def round_half_up(value: object, ndigits: int = 0) -> Optional[float]:
    if value is None or pd.isna(value):
        return None
    q = Decimal(10) ** -ndigits
    return float(Decimal(str(value)).quantize(q, rounding=ROUND_HALF_UP))


def breakdown_frame(breakdown: Sequence[ServiceCost]) -> pd.DataFrame:
    return pd.DataFrame(
        [(s.service, float(s.cost)) for s in breakdown],
        columns=["service", "cost"],
    )


def compute_percentages(summary: CostSummary) -> Tuple[ServiceCost, ...]:
    """Breakdown with fresh percentage shares, ordered by cost descending.

    Equal costs keep their original relative order. The input is not modified.
    """
    df = breakdown_frame(summary.breakdown)
    if df.empty:
        return ()
    total = float(summary.total_cost)
    df["percentage"] = df["cost"] / total * 100.0 if total > 0 else 0.0
    df = df.sort_values("cost", ascending=False, kind="stable")
    return tuple(
        ServiceCost(service=str(row.service), cost=float(row.cost), percentage=float(row.percentage))
        for row in df.itertuples(index=False)
    )


def top_services_across_months(trend: Sequence[CostSummary], k: int = DEFAULT_CONFIG.top_n) -> List[str]:
    """Names of the ``k`` services with the largest cost summed over ``trend``.

    A service missing from a month contributes nothing for that month. Ties keep
    first-appearance order so the chart colors never shuffle between renders.
    """
    rows = [(s.service, float(s.cost)) for month in trend for s in month.breakdown]
    if not rows or k <= 0:
        return []
    df = pd.DataFrame(rows, columns=["service", "cost"])
    totals = df.groupby("service", sort=False)["cost"].sum()
    totals = totals.sort_values(ascending=False, kind="stable")
    return [str(name) for name in totals.head(k).index]


def service_cost_in(summary: CostSummary, service: str) -> float:
    for s in summary.breakdown:
        if s.service == service:
            return float(s.cost)
    return 0.0


def month_over_month_change(trend: Sequence[CostSummary], i: int) -> float:
    if i <= 0:
        return 0.0
    prev = float(trend[i - 1].total_cost)
    if prev == 0:
        return 0.0
    return (float(trend[i].total_cost) - prev) / prev * 100.0


def classify_change(change: float, threshold: float = DEFAULT_CONFIG.change_threshold) -> ChangeBand:
    if change > threshold:
        return ChangeBand.INCREASE
    if change < -threshold:
        return ChangeBand.DECREASE
    return ChangeBand.NEUTRAL


def cost_severity(cost: float, config: DashboardConfig = DEFAULT_CONFIG) -> Severity:
    critical, high, moderate = config.severity_breakpoints
    if cost > critical:
        return Severity.CRITICAL
    if cost > high:
        return Severity.HIGH
    if cost > moderate:
        return Severity.MODERATE
    return Severity.LOW


def proportional_fill(percentage: float, width: int = DEFAULT_CONFIG.bar_width) -> int:
    filled = round_half_up(percentage / 100.0 * width) or 0.0
    return int(max(0, min(width, filled)))


def strip_vendor_prefix(name: str) -> str:
    for prefix in VENDOR_PREFIXES:
        while name.startswith(prefix):
            name = name[len(prefix):]
    return name


def truncate_service_name(name: str, max_len: int = DEFAULT_CONFIG.name_max_len) -> str:
    name = strip_vendor_prefix(name)
    if len(name) > max_len:
        return name[: max_len - 1] + ELLIPSIS
    return name
