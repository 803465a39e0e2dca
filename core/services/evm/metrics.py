from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Dict, List, Mapping, Sequence

from core.domain.budget import BudgetLine
from core.domain.enums import PerformanceStatus
from core.domain.money import (
    ONE,
    ZERO,
    Amount,
    clamp,
    clamp01,
    round_money,
    round_whole,
    to_decimal,
)
from core.domain.task import ScheduleTask
from core.services.evm.models import EVMSnapshot, MetricsRequest, TaskValue
from core.services.evm.policy import DEFAULT_THRESHOLDS, EvmThresholds

logger = logging.getLogger(__name__)

HUNDRED = Decimal("100")


def index_budget_lines(budget_lines: Sequence[BudgetLine]) -> Dict[str, BudgetLine]:
    return {str(line.id): line for line in budget_lines}


def planned_fraction(task: ScheduleTask, report_date: date) -> Decimal:
    """
    Linear time-phasing of a task's budget.
    Before start -> 0, on/after end -> 1, in between the elapsed share of its duration.
    """
    if report_date < task.start_date:
        return ZERO
    if report_date >= task.end_date:
        return ONE
    total_days = (task.end_date - task.start_date).days
    if total_days <= 0:
        return ONE
    done_days = (report_date - task.start_date).days
    return clamp01(Decimal(done_days) / Decimal(total_days))


def task_values(
    tasks: Sequence[ScheduleTask],
    budget_lines: Sequence[BudgetLine],
    report_date: date,
) -> List[TaskValue]:
    lines = index_budget_lines(budget_lines)
    out: List[TaskValue] = []
    for task in tasks:
        line = lines.get(str(task.budget_line_id)) if task.budget_line_id is not None else None
        budget = line.budgeted_value if line else ZERO
        frac = planned_fraction(task, report_date)
        pc = clamp(to_decimal(task.percent_complete), ZERO, HUNDRED) / HUNDRED
        out.append(
            TaskValue(
                task_id=task.id,
                budgeted_value=budget,
                planned_fraction=frac,
                planned_value=budget * frac,
                earned_value=budget * pc,
                has_budget_line=line is not None,
            )
        )
    return out


def sum_actual_costs(actual_costs: Mapping[str, Amount]) -> Decimal:
    # every recorded cost counts, whether or not its task id is known
    return sum((to_decimal(amount) for amount in actual_costs.values()), ZERO)


def performance_index(numerator: Decimal, denominator: Decimal) -> Decimal:
    """EV/AC or EV/PV; exactly 1 when there is nothing to divide by yet."""
    if denominator == ZERO:
        return ONE
    return numerator / denominator


def estimate_at_completion(BAC: Decimal, EV: Decimal, AC: Decimal, CPI: Decimal) -> Decimal:
    """Remaining work continues at the current cost efficiency: AC + (BAC - EV) / CPI."""
    if CPI == ZERO:
        # EV is 0 with spending recorded; fall back to remaining work at budget rate
        return AC + (BAC - EV)
    return AC + (BAC - EV) / CPI


def time_metrics(
    tasks: Sequence[ScheduleTask],
    report_date: date,
    project_start_date: date,
    SPI: Decimal,
) -> tuple[int, int, int, int]:
    """
    Returns (elapsed_days, planned_duration_days, time_variance, estimated_time_to_complete).

    Planned duration runs from the project start to the latest task end.
    Estimated time to complete is at least one day.
    """
    elapsed = max(0, (report_date - project_start_date).days)
    planned_finish = max((t.end_date for t in tasks), default=None)
    planned_duration = max(0, (planned_finish - project_start_date).days) if planned_finish else 0

    E = Decimal(elapsed)
    P = Decimal(planned_duration)

    time_variance = round_whole(E * (SPI - ONE))
    if SPI > ZERO:
        remaining = (P - E * SPI) / SPI
    else:
        remaining = P
    estimated = max(1, round_whole(remaining))

    return elapsed, planned_duration, time_variance, estimated


def performance_status(
    CPI: Decimal,
    SPI: Decimal,
    thresholds: EvmThresholds = DEFAULT_THRESHOLDS,
) -> PerformanceStatus:
    if CPI < thresholds.critical_index and SPI < thresholds.critical_index:
        return PerformanceStatus.CRITICAL
    if CPI < thresholds.on_track_index or SPI < thresholds.on_track_index:
        return PerformanceStatus.AT_RISK
    return PerformanceStatus.ON_TRACK


def health_score(
    CPI: Decimal,
    SPI: Decimal,
    CV: Decimal,
    SV: Decimal,
    BAC: Decimal,
    thresholds: EvmThresholds = DEFAULT_THRESHOLDS,
) -> int:
    """
    0-100 composite: indices capped at 1 reward being on/ahead of plan,
    negative CV/SV relative to BAC drag the variance component down.
    """
    cost_score = clamp01(CPI)
    schedule_score = clamp01(SPI)
    if BAC > ZERO:
        shortfall = max(ZERO, -CV) + max(ZERO, -SV)
        variance_score = ONE - min(ONE, shortfall / BAC)
    else:
        variance_score = ONE

    raw = (
        thresholds.cost_weight * cost_score
        + thresholds.schedule_weight * schedule_score
        + thresholds.variance_weight * variance_score
    ) * HUNDRED
    return max(0, min(100, round_whole(raw)))


def _share_of(amount: Decimal, BAC: Decimal) -> Decimal:
    if BAC <= ZERO:
        return ZERO
    return round_money(amount / BAC * HUNDRED)


def calculate_metrics(
    project_id: str,
    request: MetricsRequest,
    *,
    thresholds: EvmThresholds = DEFAULT_THRESHOLDS,
) -> EVMSnapshot:
    """
    Canonical EVM snapshot for one reporting date.

    - PV: each task's budget line (quantity x unit price) time-phased linearly over its dates.
    - EV: budget x percent complete.
    - AC: every amount in the actual-cost mapping.
    - CPI/SPI default to exactly 1 while AC/PV are 0.
    - EAC = AC + (BAC - EV) / CPI, ETC = EAC - AC, VAC = BAC - EAC.

    Data gaps (unlinked tasks, empty inputs) degrade to zero contributions and
    are described in ``notes``; nothing here raises for well-typed input.
    """
    notes: List[str] = []
    report_date = request.report_date
    BAC = to_decimal(request.budget_at_completion)

    values = task_values(request.tasks, request.budget_lines, report_date)
    PV = sum((v.planned_value for v in values), ZERO)
    EV = sum((v.earned_value for v in values), ZERO)
    AC = sum_actual_costs(request.actual_costs)

    unlinked = [v.task_id for v in values if not v.has_budget_line]
    if unlinked:
        logger.info(
            "Project %s: %d task(s) without a matching budget line contribute no value.",
            project_id,
            len(unlinked),
        )
        notes.append(
            f"{len(unlinked)} task(s) have no matching budget line and contribute no planned or earned value."
        )

    CPI = performance_index(EV, AC)
    SPI = performance_index(EV, PV)
    if AC == ZERO:
        notes.append("CPI defaults to 1 (no actual cost recorded yet).")
    if PV == ZERO:
        notes.append("SPI defaults to 1 (no work scheduled by the report date).")

    CV = EV - AC
    SV = EV - PV

    EAC = estimate_at_completion(BAC, EV, AC, CPI)
    if CPI == ZERO:
        logger.info("Project %s: CPI is 0, EAC uses remaining budget at planned rate.", project_id)
        notes.append("CPI is 0 (no earned value against recorded cost); EAC assumes budget rate for remaining work.")
    ETC = EAC - AC
    VAC = BAC - EAC

    TCPI_to_BAC = None
    remaining_work = BAC - EV
    if BAC - AC > ZERO:
        TCPI_to_BAC = remaining_work / (BAC - AC)
    else:
        notes.append("TCPI(BAC) N/A: AC >= BAC (already over the authorized budget).")

    TCPI_to_EAC = None
    if EAC - AC > ZERO:
        TCPI_to_EAC = remaining_work / (EAC - AC)

    if BAC > ZERO and AC > thresholds.ac_overrun_factor * BAC:
        notes.append("Warning: AC is much larger than BAC. Check currency/units or budget lines.")

    elapsed, planned_duration, time_variance, estimated_ttc = time_metrics(
        request.tasks, report_date, request.project_start_date, SPI
    )

    status = performance_status(CPI, SPI, thresholds)
    score = health_score(CPI, SPI, CV, SV, BAC, thresholds)

    logger.debug(
        "EVM %s @ %s: PV=%s EV=%s AC=%s CPI=%s SPI=%s status=%s health=%d",
        project_id,
        report_date,
        PV,
        EV,
        AC,
        CPI,
        SPI,
        status.value,
        score,
    )

    return EVMSnapshot(
        project_id=project_id,
        report_date=report_date,
        budget_at_completion=BAC,
        planned_value=PV,
        earned_value=EV,
        actual_cost=AC,
        cost_performance_index=CPI,
        schedule_performance_index=SPI,
        cost_variance=CV,
        schedule_variance=SV,
        estimate_at_completion=EAC,
        estimate_to_complete=ETC,
        variance_at_completion=VAC,
        time_variance=time_variance,
        estimated_time_to_complete=estimated_ttc,
        performance_status=status,
        health_score=score,
        elapsed_days=elapsed,
        planned_duration_days=planned_duration,
        percent_complete=_share_of(EV, BAC),
        percent_spent=_share_of(AC, BAC),
        tcpi_to_bac=TCPI_to_BAC,
        tcpi_to_eac=TCPI_to_EAC,
        notes=tuple(notes),
    )


def calculate_metrics_for(
    project_id: str,
    *,
    tasks: Sequence[ScheduleTask],
    budget_lines: Sequence[BudgetLine],
    actual_costs: Mapping[str, Amount],
    report_date: date,
    project_start_date: date,
    budget_at_completion: Amount,
    thresholds: EvmThresholds = DEFAULT_THRESHOLDS,
) -> EVMSnapshot:
    request = MetricsRequest(
        tasks=tasks,
        budget_lines=budget_lines,
        actual_costs=actual_costs,
        report_date=report_date,
        project_start_date=project_start_date,
        budget_at_completion=budget_at_completion,
    )
    return calculate_metrics(project_id, request, thresholds=thresholds)


__all__ = [
    "calculate_metrics",
    "calculate_metrics_for",
    "planned_fraction",
    "task_values",
    "performance_index",
    "estimate_at_completion",
    "time_metrics",
    "performance_status",
    "health_score",
]
