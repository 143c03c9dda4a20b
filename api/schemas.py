from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class MetricValueModel(BaseModel):
    amount: float = Field(default=0.0, alias="Amount")
    unit: Optional[str] = Field(default=None, alias="Unit")


class GroupModel(BaseModel):
    keys: List[str] = Field(default_factory=list, alias="Keys")
    metrics: Dict[str, MetricValueModel] = Field(default_factory=dict, alias="Metrics")


class TimePeriodModel(BaseModel):
    start: str = Field(alias="Start")
    end: str = Field(alias="End")


class ResultByTimeModel(BaseModel):
    time_period: Optional[TimePeriodModel] = Field(default=None, alias="TimePeriod")
    total: Optional[Dict[str, MetricValueModel]] = Field(default=None, alias="Total")
    groups: Optional[List[GroupModel]] = Field(default=None, alias="Groups")


class CostAndUsageResponse(BaseModel):
    results_by_time: List[ResultByTimeModel] = Field(default_factory=list, alias="ResultsByTime")
