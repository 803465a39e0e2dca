from datetime import date, datetime
from decimal import Decimal

import pytest

from core.domain import ScheduleTask
from core.exceptions import ValidationError
from core.services.evm import (
    MetricsRequest,
    calculate_metrics,
    interpret_snapshot,
    validate_metrics_request,
)


def _request(**overrides):
    base = dict(
        tasks=[],
        budget_lines=[],
        actual_costs={},
        report_date=date(2024, 5, 31),
        project_start_date=date(2024, 1, 1),
        budget_at_completion=Decimal("1000"),
    )
    base.update(overrides)
    return MetricsRequest(**base)


def test_interpretation_of_on_plan_project(project):
    text = interpret_snapshot(calculate_metrics("P-1", project["request"]))

    assert "Cost: roughly on budget." in text
    assert "Schedule: ahead." in text
    assert "Forecast: within budget at completion." in text
    assert "TCPI(BAC): achievable" in text


def test_interpretation_of_slipping_project(slipping_project):
    evm = calculate_metrics("P-2", slipping_project["request"])
    text = interpret_snapshot(evm)

    assert "Cost: over budget (needs action)." in text
    assert f"behind by about {abs(evm.time_variance)} day(s)" in text
    assert "Forecast: likely over budget at completion." in text
    assert "TCPI(BAC): severely over budget" in text


def test_interpretation_without_activity():
    evm = calculate_metrics("EMPTY", _request())
    text = interpret_snapshot(evm)
    assert "no actual cost recorded yet" in text
    assert "no work planned yet" in text


def test_valid_request_passes(project):
    assert validate_metrics_request(project["request"]) is None


def test_task_ending_before_start_is_rejected():
    bad = ScheduleTask.create(date(2024, 2, 1), date(2024, 1, 1), task_id="bad")
    with pytest.raises(ValidationError) as exc:
        validate_metrics_request(_request(tasks=[bad]))
    assert exc.value.code == "EVM_INVALID_TASK_DATES"


@pytest.mark.parametrize("percent", [Decimal("-1"), Decimal("100.5"), Decimal("NaN")])
def test_percent_complete_out_of_range_is_rejected(percent):
    task = ScheduleTask(
        id="t", start_date=date(2024, 1, 1), end_date=date(2024, 2, 1), percent_complete=percent
    )
    with pytest.raises(ValidationError) as exc:
        validate_metrics_request(_request(tasks=[task]))
    assert exc.value.code == "EVM_INVALID_PERCENT"


def test_datetime_report_date_is_rejected():
    with pytest.raises(ValidationError) as exc:
        validate_metrics_request(_request(report_date=datetime(2024, 5, 31, 12, 0)))
    assert exc.value.code == "EVM_INVALID_DATE"


@pytest.mark.parametrize("bac", ["abc", Decimal("-1"), Decimal("Infinity"), True])
def test_bad_budget_at_completion_is_rejected(bac):
    with pytest.raises(ValidationError) as exc:
        validate_metrics_request(_request(budget_at_completion=bac))
    assert exc.value.code == "EVM_INVALID_BAC"


def test_non_numeric_cost_is_rejected():
    with pytest.raises(ValidationError) as exc:
        validate_metrics_request(_request(actual_costs={"t": "twelve"}))
    assert exc.value.code == "EVM_INVALID_COST"
