from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Iterable, List, Mapping, Sequence

from core.domain.budget import BudgetLine
from core.domain.cost import DatedActualCosts
from core.domain.enums import AnomalyType, TrendDirection
from core.domain.money import ZERO, Amount, round_index
from core.domain.task import ScheduleTask
from core.services.evm.metrics import calculate_metrics
from core.services.evm.models import EVMTrendPoint, MetricsRequest, TrendAnalysis, TrendAnomaly
from core.services.evm.policy import DEFAULT_THRESHOLDS, EvmThresholds

logger = logging.getLogger(__name__)

# index movement between first and last point below this counts as "stable"
TREND_TOLERANCE = Decimal("0.02")
# period-over-period AC growth above this multiple of the EV growth is a cost spike
COST_SPIKE_RATIO = Decimal("1.5")
# period-over-period index drop flagged as a performance drop / schedule delay
INDEX_DROP = Decimal("0.1")


def _as_dated(entry: DatedActualCosts | tuple[date, Mapping[str, Amount]]) -> DatedActualCosts:
    if isinstance(entry, DatedActualCosts):
        return entry
    report_date, costs = entry
    return DatedActualCosts.create(report_date, costs)


def generate_trend(
    tasks: Sequence[ScheduleTask],
    budget_lines: Sequence[BudgetLine],
    dated_actual_costs: Iterable[DatedActualCosts | tuple[date, Mapping[str, Amount]]],
    project_start_date: date,
    budget_at_completion: Amount,
    *,
    project_id: str = "trend",
    thresholds: EvmThresholds = DEFAULT_THRESHOLDS,
) -> List[EVMTrendPoint]:
    """
    One point per dated cost snapshot, each computed exactly like
    calculate_metrics() with that date as the report date.
    Output is sorted ascending by date; points are never dropped or merged.
    project_id only labels the log lines of the per-point calculations.
    """
    out: List[EVMTrendPoint] = []
    for entry in dated_actual_costs:
        dated = _as_dated(entry)
        request = MetricsRequest(
            tasks=tasks,
            budget_lines=budget_lines,
            actual_costs=dated.costs,
            report_date=dated.report_date,
            project_start_date=project_start_date,
            budget_at_completion=budget_at_completion,
        )
        evm = calculate_metrics(project_id, request, thresholds=thresholds)
        out.append(
            EVMTrendPoint(
                date=dated.report_date,
                planned_value=evm.planned_value,
                earned_value=evm.earned_value,
                actual_cost=evm.actual_cost,
                cpi=evm.cost_performance_index,
                spi=evm.schedule_performance_index,
            )
        )

    out.sort(key=lambda p: p.date)
    logger.debug("Generated %d EVM trend point(s) for %s.", len(out), project_id)
    return out


def _direction(first: Decimal, last: Decimal) -> TrendDirection:
    delta = last - first
    if delta > TREND_TOLERANCE:
        return TrendDirection.IMPROVING
    if delta < -TREND_TOLERANCE:
        return TrendDirection.DETERIORATING
    return TrendDirection.STABLE


def _anomalies(points: Sequence[EVMTrendPoint]) -> List[TrendAnomaly]:
    found: List[TrendAnomaly] = []
    for prev, cur in zip(points, points[1:]):
        ac_growth = cur.actual_cost - prev.actual_cost
        ev_growth = cur.earned_value - prev.earned_value
        if ac_growth > ZERO and ac_growth > COST_SPIKE_RATIO * max(ev_growth, ZERO):
            found.append(
                TrendAnomaly(
                    date=cur.date,
                    type=AnomalyType.COST_SPIKE,
                    description=(
                        f"Actual cost grew by {ac_growth:,.2f} against {ev_growth:,.2f} of earned value."
                    ),
                )
            )
        if prev.cpi - cur.cpi >= INDEX_DROP:
            found.append(
                TrendAnomaly(
                    date=cur.date,
                    type=AnomalyType.PERFORMANCE_DROP,
                    description=f"CPI fell from {round_index(prev.cpi)} to {round_index(cur.cpi)}.",
                )
            )
        if prev.spi - cur.spi >= INDEX_DROP:
            found.append(
                TrendAnomaly(
                    date=cur.date,
                    type=AnomalyType.SCHEDULE_DELAY,
                    description=f"SPI fell from {round_index(prev.spi)} to {round_index(cur.spi)}.",
                )
            )
    return found


def analyze_trend(points: Sequence[EVMTrendPoint]) -> TrendAnalysis:
    """Averages, direction of CPI/SPI from first to last point, and period-over-period anomalies."""
    ordered = tuple(sorted(points, key=lambda p: p.date))
    if not ordered:
        return TrendAnalysis(
            points=(),
            average_cpi=Decimal("1"),
            average_spi=Decimal("1"),
            cost_trend=TrendDirection.STABLE,
            schedule_trend=TrendDirection.STABLE,
        )

    count = Decimal(len(ordered))
    avg_cpi = sum((p.cpi for p in ordered), ZERO) / count
    avg_spi = sum((p.spi for p in ordered), ZERO) / count

    return TrendAnalysis(
        points=ordered,
        average_cpi=round_index(avg_cpi),
        average_spi=round_index(avg_spi),
        cost_trend=_direction(ordered[0].cpi, ordered[-1].cpi),
        schedule_trend=_direction(ordered[0].spi, ordered[-1].spi),
        anomalies=tuple(_anomalies(ordered)),
    )


__all__ = ["generate_trend", "analyze_trend"]
