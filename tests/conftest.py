"""
Shared pytest fixtures for the cost dashboard tests.
"""
from typing import List, Optional

import pytest

from core.errors import CostDataError
from core.models import CostSummary, ServiceCost
from core.state import DashboardState


def make_summary(period: str, costs: dict, currency: str = "USD") -> CostSummary:
    total = sum(costs.values())
    breakdown = [
        ServiceCost(service=name, cost=cost, percentage=cost / total * 100 if total else 0.0)
        for name, cost in costs.items()
    ]
    return CostSummary(period=period, total_cost=total, currency=currency, breakdown=breakdown)


class FakeCostSource:
    """In-memory stand-in for the Cost Explorer client."""

    def __init__(
        self,
        current: Optional[CostSummary] = None,
        previous: Optional[CostSummary] = None,
        trend: Optional[List[CostSummary]] = None,
        fail: tuple = (),
    ):
        self.current = current
        self.previous = previous
        self.trend = trend or []
        self.fail = set(fail)
        self.calls: List[str] = []

    def get_current_month(self) -> CostSummary:
        self.calls.append("current")
        if "current" in self.fail:
            raise CostDataError("access denied")
        return self.current

    def get_previous_month(self) -> CostSummary:
        self.calls.append("previous")
        if "previous" in self.fail:
            raise CostDataError("throttled")
        return self.previous

    def get_trend(self, months: int) -> List[CostSummary]:
        self.calls.append(f"trend:{months}")
        if "trend" in self.fail:
            raise CostDataError("timeout")
        return list(self.trend)


@pytest.fixture
def ec2_s3_summary():
    """The two-service month used throughout the examples."""
    return CostSummary(
        period="October 2026",
        total_cost=300.0,
        currency="USD",
        breakdown=[ServiceCost("Amazon EC2", 200.0), ServiceCost("Amazon S3", 100.0)],
    )


@pytest.fixture
def previous_summary():
    return make_summary(
        "September 2026",
        {"Amazon EC2": 150.0, "AWS Lambda": 40.0, "Amazon S3": 30.0, "Amazon CloudWatch": 5.0},
    )


@pytest.fixture
def trend_summaries():
    return [
        make_summary("August 2026", {"Amazon EC2": 100.0, "Amazon RDS": 80.0, "Amazon S3": 20.0}),
        make_summary("September 2026", {"Amazon EC2": 150.0, "AWS Lambda": 40.0, "Amazon S3": 30.0}),
        make_summary("October 2026", {"Amazon EC2": 200.0, "Amazon S3": 100.0}),
    ]


@pytest.fixture
def loaded_state(ec2_s3_summary, previous_summary, trend_summaries):
    return DashboardState(
        current=ec2_s3_summary,
        previous=previous_summary,
        trend=tuple(trend_summaries),
        loading=False,
    )


@pytest.fixture
def fake_source(ec2_s3_summary, previous_summary, trend_summaries):
    return FakeCostSource(current=ec2_s3_summary, previous=previous_summary, trend=trend_summaries)
