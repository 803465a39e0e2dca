# tests/conftest.py
from datetime import date
from decimal import Decimal

import matplotlib

matplotlib.use("Agg")

import pytest

from core.domain import BudgetLine, ScheduleTask, TaskPriority, TaskStatus
from core.services.evm import MetricsRequest


PROJECT_START = date(2024, 1, 1)
REPORT_DATE = date(2024, 5, 31)
BAC = Decimal("1000000")


def build_project(foundation_percent=100, structure_percent=60):
    """
    Three-phase build, nine months, reported after five:
    - foundation: done before the report date, 200k budget, 210k spent
    - structure: exactly half its window elapsed, 600k budget
    - finishing: not started, 200k budget
    """
    lines = [
        BudgetLine.create(1, 200000, "Foundation works", line_id="bl-foundation"),
        BudgetLine.create(12, 50000, "Structure works", line_id="bl-structure"),
        BudgetLine.create(4, 50000, "Finishing works", line_id="bl-finishing"),
    ]
    tasks = [
        ScheduleTask.create(
            date(2024, 1, 1),
            date(2024, 2, 29),
            percent_complete=foundation_percent,
            status=TaskStatus.COMPLETED if foundation_percent >= 100 else TaskStatus.IN_PROGRESS,
            priority=TaskPriority.HIGH,
            budget_line_id="bl-foundation",
            name="Foundation",
            task_id="t-foundation",
        ),
        ScheduleTask.create(
            date(2024, 3, 1),
            date(2024, 8, 30),
            percent_complete=structure_percent,
            status=TaskStatus.IN_PROGRESS,
            priority=TaskPriority.HIGH,
            budget_line_id="bl-structure",
            name="Structure",
            task_id="t-structure",
        ),
        ScheduleTask.create(
            date(2024, 9, 1),
            date(2024, 9, 30),
            percent_complete=0,
            status=TaskStatus.TODO,
            priority=TaskPriority.MEDIUM,
            budget_line_id="bl-finishing",
            name="Finishing",
            task_id="t-finishing",
        ),
    ]
    actual_costs = {
        "t-foundation": Decimal("210000"),
        "t-structure": Decimal("350000"),
    }
    return {
        "tasks": tasks,
        "budget_lines": lines,
        "actual_costs": actual_costs,
        "request": MetricsRequest(
            tasks=tasks,
            budget_lines=lines,
            actual_costs=actual_costs,
            report_date=REPORT_DATE,
            project_start_date=PROJECT_START,
            budget_at_completion=BAC,
        ),
    }


@pytest.fixture
def project():
    return build_project()


@pytest.fixture
def slipping_project():
    # same spend, structure progress halved
    return build_project(structure_percent=30)


@pytest.fixture
def halved_project():
    # same dates and spend, every completion percentage halved
    return build_project(foundation_percent=50, structure_percent=30)


@pytest.fixture
def monthly_costs():
    return [
        (date(2024, 3, 31), {"t-foundation": "210000", "t-structure": "60000"}),
        (date(2024, 1, 31), {"t-foundation": "90000"}),
        (date(2024, 5, 31), {"t-foundation": "210000", "t-structure": "350000"}),
        (date(2024, 2, 29), {"t-foundation": "205000"}),
        (date(2024, 4, 30), {"t-foundation": "210000", "t-structure": "180000"}),
    ]
