"""Cost Explorer access for the dashboard.

Credential discovery (environment variables, shared credentials and config
files, profile region) is left to ``boto3.Session``; this module only shapes
requests and turns responses into ``CostSummary`` values.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Any, Callable, Dict, List, Optional, Tuple

import boto3
import pandas as pd
from botocore.exceptions import BotoCoreError, ClientError
from pydantic import ValidationError

from api.schemas import CostAndUsageResponse
from core.aggregate import compute_percentages
from core.config import DEFAULT_CONFIG, DashboardConfig
from core.errors import CostDataError
from core.models import CostSummary, ServiceCost

logger = logging.getLogger(__name__)

DEFAULT_REGION = "us-east-1"
COST_METRIC = "UnblendedCost"
DATE_FORMAT = "%Y-%m-%d"
PERIOD_LABEL_FORMAT = "%B %Y"


class CostExplorerError(CostDataError):
    pass


def month_bounds(today: date, months_back: int = 0) -> Tuple[date, date]:
    """First day of the month ``months_back`` before ``today`` and of the month after it."""
    period = pd.Period(today, freq="M") - months_back
    return period.start_time.date(), (period + 1).start_time.date()


def summarize(
    response: CostAndUsageResponse,
    period: str,
    *,
    min_cost: float = DEFAULT_CONFIG.min_service_cost,
) -> CostSummary:
    total_cost = 0.0
    currency = "USD"
    services: List[ServiceCost] = []
    for result in response.results_by_time:
        for group in result.groups or []:
            metric = group.metrics.get(COST_METRIC)
            if metric is None or metric.amount <= min_cost:
                continue
            total_cost += metric.amount
            if metric.unit:
                currency = metric.unit
            services.append(ServiceCost(service=group.keys[0] if group.keys else "", cost=metric.amount))

    summary = CostSummary(period=period, total_cost=total_cost, currency=currency, breakdown=services)
    return CostSummary(
        period=period,
        total_cost=total_cost,
        currency=currency,
        breakdown=compute_percentages(summary),
    )


class CostExplorerClient:
    def __init__(
        self,
        profile: Optional[str] = None,
        region: Optional[str] = None,
        *,
        session: Optional[boto3.Session] = None,
        client: Any = None,
        clock: Callable[[], date] = date.today,
        config: DashboardConfig = DEFAULT_CONFIG,
    ):
        self.clock = clock
        self.config = config
        if client is None:
            try:
                if session is None:
                    # An explicit "default" profile would fail when only env credentials exist.
                    profile_name = None if profile in (None, "default") else profile
                    session = boto3.Session(profile_name=profile_name, region_name=region)
                self.region = session.region_name or DEFAULT_REGION
                client = session.client("ce", region_name=self.region)
            except BotoCoreError as exc:
                raise CostExplorerError(f"Could not set up AWS session: {exc}") from exc
        else:
            self.region = region or DEFAULT_REGION
        self.ce_client = client
        logger.info("Cost Explorer client ready for region %s", self.region)

    def get_cost_and_usage(
        self,
        start: date,
        end: date,
        granularity: str = "MONTHLY",
        group_by_service: bool = True,
    ) -> CostAndUsageResponse:
        request: Dict[str, Any] = {
            "TimePeriod": {"Start": start.strftime(DATE_FORMAT), "End": end.strftime(DATE_FORMAT)},
            "Granularity": granularity,
            "Metrics": [COST_METRIC],
        }
        if group_by_service:
            request["GroupBy"] = [{"Type": "DIMENSION", "Key": "SERVICE"}]

        logger.debug("GetCostAndUsage %s -> %s", request["TimePeriod"]["Start"], request["TimePeriod"]["End"])
        try:
            raw = self.ce_client.get_cost_and_usage(**request)
        except ClientError as exc:
            code = exc.response.get("Error", {}).get("Code", "Unknown")
            raise CostExplorerError(f"API request failed ({code}): {exc}") from exc
        except BotoCoreError as exc:
            raise CostExplorerError(f"Request failed: {exc}") from exc

        try:
            return CostAndUsageResponse.model_validate(raw)
        except ValidationError as exc:
            raise CostExplorerError(f"Failed to parse response: {exc}") from exc

    def get_costs_for_period(self, start: date, end: date, period: str) -> CostSummary:
        response = self.get_cost_and_usage(start, end)
        return summarize(response, period, min_cost=self.config.min_service_cost)

    def get_current_month(self) -> CostSummary:
        today = self.clock()
        start, _ = month_bounds(today)
        # End date is exclusive, so tomorrow includes today's spend.
        return self.get_costs_for_period(start, today + timedelta(days=1), start.strftime(PERIOD_LABEL_FORMAT))

    def get_previous_month(self) -> CostSummary:
        start, end = month_bounds(self.clock(), 1)
        return self.get_costs_for_period(start, end, start.strftime(PERIOD_LABEL_FORMAT))

    def get_trend(self, months: int) -> List[CostSummary]:
        """Summaries for the last ``months`` calendar months, oldest first.

        A month that fails is skipped, so the result can be shorter than asked.
        """
        if months < 1:
            raise ValueError("months must be at least 1")
        today = self.clock()
        results: List[CostSummary] = []
        for back in range(months):
            start, end = month_bounds(today, back)
            if back == 0:
                end = min(today + timedelta(days=1), end)
            label = start.strftime(PERIOD_LABEL_FORMAT)
            try:
                results.append(self.get_costs_for_period(start, end, label))
            except CostExplorerError as exc:
                logger.debug("Failed to get costs for %s: %s", label, exc)
        results.reverse()
        return results
