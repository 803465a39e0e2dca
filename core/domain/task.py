from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from core.domain.enums import TaskPriority, TaskStatus, coerce_priority, coerce_status
from core.domain.identifiers import generate_id
from core.domain.money import Amount, to_decimal


@dataclass(frozen=True)
class ScheduleTask:
    """
    A schedule item as supplied by the task store.
    Read-only here: end_date >= start_date is assumed, not enforced.
    """

    id: str
    start_date: date
    end_date: date
    percent_complete: Decimal = Decimal("0")
    status: TaskStatus | str = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    budget_line_id: Optional[str] = None
    name: str = ""

    @property
    def is_completed(self) -> bool:
        return coerce_status(self.status) == TaskStatus.COMPLETED

    @staticmethod
    def create(
        start_date: date,
        end_date: date,
        percent_complete: Amount = 0,
        status: TaskStatus | str = TaskStatus.TODO,
        priority: TaskPriority | str = TaskPriority.MEDIUM,
        budget_line_id: Optional[str] = None,
        name: str = "",
        task_id: Optional[str] = None,
    ) -> "ScheduleTask":
        return ScheduleTask(
            id=task_id or generate_id("task"),
            start_date=start_date,
            end_date=end_date,
            percent_complete=to_decimal(percent_complete),
            status=coerce_status(status),
            priority=coerce_priority(priority),
            budget_line_id=budget_line_id,
            name=name,
        )


__all__ = ["ScheduleTask"]
