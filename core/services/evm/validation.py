from __future__ import annotations

from datetime import date
from decimal import Decimal

from core.domain.money import ZERO, to_decimal
from core.exceptions import ValidationError
from core.services.evm.models import MetricsRequest

HUNDRED = Decimal("100")


def _require_date(value: object, label: str) -> None:
    # datetime is a date subclass; reject it so day arithmetic stays whole-day
    if not isinstance(value, date) or hasattr(value, "hour"):
        raise ValidationError(f"{label} must be a date, got {type(value).__name__}.", code="EVM_INVALID_DATE")


def validate_metrics_request(request: MetricsRequest) -> None:
    """
    Caller-side contract check, run before calculate_metrics().
    The computation itself never calls this: it degrades instead of raising.
    """
    _require_date(request.report_date, "report_date")
    _require_date(request.project_start_date, "project_start_date")

    try:
        bac = to_decimal(request.budget_at_completion)
    except TypeError as exc:
        raise ValidationError(str(exc), code="EVM_INVALID_BAC") from exc
    if not bac.is_finite() or bac < ZERO:
        raise ValidationError("budget_at_completion must be a non-negative amount.", code="EVM_INVALID_BAC")

    for task in request.tasks:
        _require_date(task.start_date, f"Task {task.id} start_date")
        _require_date(task.end_date, f"Task {task.id} end_date")
        if task.end_date < task.start_date:
            raise ValidationError(
                f"Task {task.id} ends ({task.end_date}) before it starts ({task.start_date}).",
                code="EVM_INVALID_TASK_DATES",
            )
        try:
            pc = to_decimal(task.percent_complete)
        except TypeError as exc:
            raise ValidationError(str(exc), code="EVM_INVALID_PERCENT") from exc
        if not pc.is_finite() or not (ZERO <= pc <= HUNDRED):
            raise ValidationError(
                f"Task {task.id} percent_complete must be within 0-100, got {pc}.",
                code="EVM_INVALID_PERCENT",
            )

    for task_id, amount in request.actual_costs.items():
        try:
            value = to_decimal(amount)
        except TypeError as exc:
            raise ValidationError(str(exc), code="EVM_INVALID_COST") from exc
        if not value.is_finite():
            raise ValidationError(f"Actual cost for {task_id} is not a finite amount.", code="EVM_INVALID_COST")


__all__ = ["validate_metrics_request"]
