from __future__ import annotations

from enum import Enum


class TaskStatus(str, Enum):
    TODO = "todo"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class PerformanceStatus(str, Enum):
    ON_TRACK = "On Track"
    AT_RISK = "At Risk"
    CRITICAL = "Critical"


class TrendDirection(str, Enum):
    IMPROVING = "improving"
    DETERIORATING = "deteriorating"
    STABLE = "stable"


class AnomalyType(str, Enum):
    COST_SPIKE = "cost_spike"
    SCHEDULE_DELAY = "schedule_delay"
    PERFORMANCE_DROP = "performance_drop"


def coerce_status(value: TaskStatus | str | None) -> TaskStatus | str:
    """Map store values onto TaskStatus; unknown values are kept as plain strings."""
    if isinstance(value, TaskStatus):
        return value
    token = str(value or "").strip().lower().replace("_", "-")
    for status in TaskStatus:
        if status.value == token:
            return status
    return token


def coerce_priority(value: TaskPriority | str | None) -> TaskPriority:
    if isinstance(value, TaskPriority):
        return value
    token = str(value or "").strip().lower()
    for priority in TaskPriority:
        if priority.value == token:
            return priority
    return TaskPriority.MEDIUM


__all__ = [
    "TaskStatus",
    "TaskPriority",
    "PerformanceStatus",
    "TrendDirection",
    "AnomalyType",
    "coerce_status",
    "coerce_priority",
]
