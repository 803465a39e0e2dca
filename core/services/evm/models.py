from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Mapping, Optional, Sequence

from core.domain.budget import BudgetLine
from core.domain.enums import AnomalyType, PerformanceStatus, TrendDirection
from core.domain.money import Amount
from core.domain.task import ScheduleTask


@dataclass(frozen=True)
class MetricsRequest:
    tasks: Sequence[ScheduleTask]
    budget_lines: Sequence[BudgetLine]
    actual_costs: Mapping[str, Amount]
    report_date: date
    project_start_date: date
    budget_at_completion: Amount


@dataclass(frozen=True)
class TaskValue:
    """Per-task intermediate values behind PV/EV."""

    task_id: str
    budgeted_value: Decimal
    planned_fraction: Decimal
    planned_value: Decimal
    earned_value: Decimal
    has_budget_line: bool


@dataclass(frozen=True)
class EVMSnapshot:
    project_id: str
    report_date: date
    budget_at_completion: Decimal

    planned_value: Decimal
    earned_value: Decimal
    actual_cost: Decimal

    cost_performance_index: Decimal
    schedule_performance_index: Decimal
    cost_variance: Decimal
    schedule_variance: Decimal

    estimate_at_completion: Decimal
    estimate_to_complete: Decimal
    variance_at_completion: Decimal

    time_variance: int
    estimated_time_to_complete: int

    performance_status: PerformanceStatus
    health_score: int

    elapsed_days: int = 0
    planned_duration_days: int = 0
    percent_complete: Decimal = Decimal("0")
    percent_spent: Decimal = Decimal("0")
    tcpi_to_bac: Optional[Decimal] = None
    tcpi_to_eac: Optional[Decimal] = None
    notes: tuple[str, ...] = ()


@dataclass(frozen=True)
class EVMTrendPoint:
    date: date
    planned_value: Decimal
    earned_value: Decimal
    actual_cost: Decimal
    cpi: Decimal
    spi: Decimal


@dataclass(frozen=True)
class TrendAnomaly:
    date: date
    type: AnomalyType
    description: str


@dataclass(frozen=True)
class TrendAnalysis:
    points: tuple[EVMTrendPoint, ...]
    average_cpi: Decimal
    average_spi: Decimal
    cost_trend: TrendDirection
    schedule_trend: TrendDirection
    anomalies: tuple[TrendAnomaly, ...] = ()


@dataclass(frozen=True)
class CriticalPathImpact:
    """
    Heuristic schedule-risk view.

    critical_tasks are open high-priority tasks, not a longest-path result:
    no float or slack is computed.
    """

    critical_tasks: tuple[str, ...]
    schedule_risk: Decimal
    recommendations: tuple[str, ...] = ()


@dataclass(frozen=True)
class ForecastScenario:
    date: date
    cost: Decimal


@dataclass(frozen=True)
class ForecastScenarios:
    optimistic: ForecastScenario
    most_likely: ForecastScenario
    pessimistic: ForecastScenario


@dataclass(frozen=True)
class CompletionForecast:
    forecast_completion_date: date
    forecast_cost: Decimal
    confidence_level: Decimal
    scenarios: ForecastScenarios
    notes: tuple[str, ...] = ()


__all__ = [
    "MetricsRequest",
    "TaskValue",
    "EVMSnapshot",
    "EVMTrendPoint",
    "TrendAnomaly",
    "TrendAnalysis",
    "CriticalPathImpact",
    "ForecastScenario",
    "ForecastScenarios",
    "CompletionForecast",
]
