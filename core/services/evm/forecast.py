from __future__ import annotations

import logging
from datetime import date, timedelta
from decimal import ROUND_CEILING, Decimal
from typing import List, Sequence

from core.domain.money import ONE, ZERO, INDEX_PLACES, round_whole
from core.domain.task import ScheduleTask
from core.services.evm.models import (
    CompletionForecast,
    EVMSnapshot,
    ForecastScenario,
    ForecastScenarios,
)
from core.services.evm.policy import DEFAULT_THRESHOLDS, EvmThresholds

logger = logging.getLogger(__name__)


def confidence_level(CPI: Decimal, SPI: Decimal, thresholds: EvmThresholds = DEFAULT_THRESHOLDS) -> Decimal:
    """
    Floor at 0.5, rising linearly with the weaker index; once both indices
    reach the stable level (0.95) confidence starts above 0.8 and climbs to 1.0.
    """
    floor = thresholds.confidence_floor
    stable = thresholds.stable_index
    stable_conf = thresholds.stable_confidence
    weakest = min(CPI, SPI)

    if weakest >= stable:
        headroom = ONE - stable
        if headroom <= ZERO:
            value = ONE
        else:
            value = stable_conf + (ONE - stable_conf) * (weakest - stable) / headroom
    else:
        span = stable - floor
        if span <= ZERO:
            value = floor
        else:
            value = floor + (weakest - floor) * (stable_conf - floor) / span

    value = max(floor, min(ONE, value))
    return value.quantize(INDEX_PLACES)


def _ceil_days(value: Decimal) -> int:
    return int(value.to_integral_value(rounding=ROUND_CEILING))


def forecast_completion(
    snapshot: EVMSnapshot,
    tasks: Sequence[ScheduleTask],
    project_start_date: date,
    *,
    thresholds: EvmThresholds = DEFAULT_THRESHOLDS,
) -> CompletionForecast:
    """
    Completion date/cost under three scenarios.

    - most likely: EAC, and the elapsed schedule plus estimated_time_to_complete.
    - optimistic: remaining work at CPI = SPI = 1 (never worse than most likely).
    - pessimistic: remaining work at the composite CPI x SPI index, degraded
      further (never better than most likely).
    """
    notes: List[str] = []
    CPI = snapshot.cost_performance_index
    SPI = snapshot.schedule_performance_index
    BAC = snapshot.budget_at_completion
    EV = snapshot.earned_value
    AC = snapshot.actual_cost
    EAC = snapshot.estimate_at_completion
    degradation = thresholds.pessimistic_degradation

    elapsed = max(0, (snapshot.report_date - project_start_date).days)
    planned_finish = max((t.end_date for t in tasks), default=None)
    if planned_finish is None:
        notes.append("No scheduled tasks; forecast dates are anchored to the report date.")
        planned_duration = 0
    else:
        planned_duration = max(0, (planned_finish - project_start_date).days)

    likely_days = max(1, snapshot.estimated_time_to_complete)

    optimistic_days = min(
        likely_days,
        max(1, round_whole(Decimal(planned_duration) - Decimal(elapsed) * SPI)),
    )
    if degradation < ONE:
        pessimistic_days = max(likely_days, _ceil_days(Decimal(likely_days) / (ONE - degradation)))
    else:
        pessimistic_days = likely_days

    remaining_work = BAC - EV
    optimistic_cost = min(EAC, AC + remaining_work)

    pessimistic_index = min(CPI, CPI * SPI) * (ONE - degradation)
    if pessimistic_index > ZERO:
        pessimistic_cost = max(EAC, AC + remaining_work / pessimistic_index)
    else:
        pessimistic_cost = EAC

    horizon = (date.max - project_start_date).days
    if elapsed + pessimistic_days > horizon:
        notes.append("Forecast runs past the last representable date; scenario dates are capped.")

    def _finish(remaining_days: int) -> date:
        return project_start_date + timedelta(days=min(elapsed + remaining_days, horizon))

    most_likely = ForecastScenario(date=_finish(likely_days), cost=EAC)
    scenarios = ForecastScenarios(
        optimistic=ForecastScenario(date=_finish(optimistic_days), cost=optimistic_cost),
        most_likely=most_likely,
        pessimistic=ForecastScenario(date=_finish(pessimistic_days), cost=pessimistic_cost),
    )
    confidence = confidence_level(CPI, SPI, thresholds)

    logger.debug(
        "Forecast for %s: finish=%s cost=%s confidence=%s",
        snapshot.project_id,
        most_likely.date,
        most_likely.cost,
        confidence,
    )

    return CompletionForecast(
        forecast_completion_date=most_likely.date,
        forecast_cost=most_likely.cost,
        confidence_level=confidence,
        scenarios=scenarios,
        notes=tuple(notes),
    )


__all__ = ["forecast_completion", "confidence_level"]
