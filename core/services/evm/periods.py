from __future__ import annotations

import calendar
from datetime import date, timedelta
from decimal import Decimal
from typing import Dict, Iterable, List, Sequence

from core.domain.cost import CostLedgerEntry, DatedActualCosts
from core.domain.money import ZERO


def month_end_dates(start: date, as_of: date) -> List[date]:
    """Month-end reporting dates from start's month through as_of's month, inclusive."""
    points: List[date] = []
    cur = _month_end(start)
    end = _month_end(as_of)

    while cur <= end:
        points.append(cur)
        cur = _month_end(cur + timedelta(days=1))

    return points


def cumulative_cost_snapshots(
    entries: Iterable[CostLedgerEntry],
    report_dates: Sequence[date],
) -> List[DatedActualCosts]:
    """
    Cumulative cost per task as of each report date (entries incurred on or
    before the date count), ready for generate_trend().
    """
    ledger = sorted(entries, key=lambda e: e.incurred_on)
    out: List[DatedActualCosts] = []
    for report_date in sorted(report_dates):
        totals: Dict[str, Decimal] = {}
        for entry in ledger:
            if entry.incurred_on > report_date:
                break
            totals[entry.task_id] = totals.get(entry.task_id, ZERO) + entry.amount
        out.append(DatedActualCosts.create(report_date, totals))
    return out


def _month_end(d: date) -> date:
    _, days_in_month = calendar.monthrange(d.year, d.month)
    return d.replace(day=days_in_month)


__all__ = ["month_end_dates", "cumulative_cost_snapshots"]
