"""
Critical-path impact on EVM.

"Critical" here is a priority/status heuristic, not the critical path method:
a task is flagged when it is high priority and not yet completed. No network
is built and no float/slack is computed. Callers depend on these semantics,
so a true CPM pass would be a separate function rather than a change here.
"""
from __future__ import annotations

import logging
from decimal import Decimal
from typing import List, Sequence

from core.domain.enums import TaskPriority, coerce_priority
from core.domain.money import ONE, ZERO, CENT, clamp01
from core.domain.task import ScheduleTask
from core.services.evm.models import CriticalPathImpact, EVMSnapshot
from core.services.evm.policy import DEFAULT_THRESHOLDS, EvmThresholds

logger = logging.getLogger(__name__)


def is_critical(task: ScheduleTask) -> bool:
    return coerce_priority(task.priority) == TaskPriority.HIGH and not task.is_completed


def schedule_risk(SPI: Decimal, thresholds: EvmThresholds = DEFAULT_THRESHOLDS) -> Decimal:
    """0 at SPI >= 1, rising linearly to 1 at the risk floor SPI and below."""
    span = ONE - thresholds.risk_floor_spi
    if span <= ZERO:
        return ONE if SPI < ONE else ZERO
    return clamp01((ONE - SPI) / span).quantize(CENT)


def _recommendations(
    snapshot: EVMSnapshot,
    critical_count: int,
    critical_ratio: Decimal,
    thresholds: EvmThresholds,
) -> List[str]:
    out: List[str] = []

    if snapshot.schedule_performance_index < thresholds.recommendation_index:
        out.append("Focus resources on critical path activities")
        out.append("Consider fast-tracking or crashing critical path activities")

    if snapshot.cost_performance_index < thresholds.recommendation_index:
        out.append("Review resource allocation efficiency")
        out.append("Implement stricter cost controls")

    if critical_ratio > thresholds.critical_ratio:
        out.append("Consider parallel processing where possible")
        out.append(f"Increase monitoring frequency for the {critical_count} open critical task(s)")

    return out


def assess_critical_path_impact(
    tasks: Sequence[ScheduleTask],
    snapshot: EVMSnapshot,
    *,
    thresholds: EvmThresholds = DEFAULT_THRESHOLDS,
) -> CriticalPathImpact:
    critical = [t.id for t in tasks if is_critical(t)]
    total = len(tasks)
    ratio = Decimal(len(critical)) / Decimal(total) if total else ZERO

    risk = schedule_risk(snapshot.schedule_performance_index, thresholds)
    recommendations = _recommendations(snapshot, len(critical), ratio, thresholds)

    logger.debug(
        "Critical-path impact for %s: %d/%d critical, risk=%s, %d recommendation(s).",
        snapshot.project_id,
        len(critical),
        total,
        risk,
        len(recommendations),
    )

    return CriticalPathImpact(
        critical_tasks=tuple(critical),
        schedule_risk=risk,
        recommendations=tuple(recommendations),
    )


__all__ = ["assess_critical_path_impact", "is_critical", "schedule_risk"]
