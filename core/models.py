from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Protocol, Tuple


@dataclass(frozen=True)
class ServiceCost:
    service: str
    cost: float
    percentage: float = 0.0


@dataclass(frozen=True)
class CostSummary:
    period: str
    total_cost: float
    currency: str = "USD"
    breakdown: Tuple[ServiceCost, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # Accept any sequence from callers; store a tuple so the summary stays immutable.
        object.__setattr__(self, "breakdown", tuple(self.breakdown))


class CostSource(Protocol):
    """Anything that can produce the three summaries the dashboard shows.

    Each call may raise ``CostDataError`` independently of the others.
    """

    def get_current_month(self) -> CostSummary: ...

    def get_previous_month(self) -> CostSummary: ...

    def get_trend(self, months: int) -> List[CostSummary]: ...
