from core.domain.budget import BudgetLine
from core.domain.cost import ActualCostMap, CostLedgerEntry, DatedActualCosts
from core.domain.enums import (
    AnomalyType,
    PerformanceStatus,
    TaskPriority,
    TaskStatus,
    TrendDirection,
)
from core.domain.identifiers import generate_id
from core.domain.task import ScheduleTask

__all__ = [
    "generate_id",
    "TaskStatus",
    "TaskPriority",
    "PerformanceStatus",
    "TrendDirection",
    "AnomalyType",
    "ScheduleTask",
    "BudgetLine",
    "ActualCostMap",
    "DatedActualCosts",
    "CostLedgerEntry",
]
