from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from types import MappingProxyType
from typing import Mapping

from core.domain.money import Amount, to_decimal

ActualCostMap = Mapping[str, Amount]


@dataclass(frozen=True)
class DatedActualCosts:
    """Cumulative actual cost per task id as of report_date."""

    report_date: date
    costs: Mapping[str, Decimal]

    @staticmethod
    def create(report_date: date, costs: ActualCostMap) -> "DatedActualCosts":
        frozen = {str(task_id): to_decimal(amount) for task_id, amount in costs.items()}
        return DatedActualCosts(report_date=report_date, costs=MappingProxyType(frozen))


@dataclass(frozen=True)
class CostLedgerEntry:
    """A single incurred cost line, before cumulation into dated snapshots."""

    task_id: str
    amount: Decimal
    incurred_on: date

    @staticmethod
    def create(task_id: str, amount: Amount, incurred_on: date) -> "CostLedgerEntry":
        return CostLedgerEntry(task_id=task_id, amount=to_decimal(amount), incurred_on=incurred_on)


__all__ = ["ActualCostMap", "DatedActualCosts", "CostLedgerEntry"]
