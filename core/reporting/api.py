"""Reporting API wrappers around renderer classes."""

from __future__ import annotations

import logging
from contextlib import suppress
from datetime import date
from pathlib import Path
from typing import Iterable, Mapping, Sequence

from core.domain.cost import DatedActualCosts
from core.domain.money import Amount
from core.exceptions import BusinessRuleError
from core.reporting.contexts import (
    ExcelReportContext,
    PdfReportContext,
    ReportExportContext,
)
from core.reporting.formatting import currency_symbol_from_code
from core.reporting.renderers.evm import EvmCurveRenderer
from core.reporting.renderers.excel import ExcelReportRenderer
from core.reporting.renderers.pdf import PdfReportRenderer
from core.services.evm import (
    DEFAULT_THRESHOLDS,
    EVMTrendPoint,
    EvmThresholds,
    MetricsRequest,
    analyze_trend,
    assess_critical_path_impact,
    calculate_metrics,
    forecast_completion,
    generate_trend,
    interpret_snapshot,
    validate_metrics_request,
)

logger = logging.getLogger(__name__)

DatedCosts = Iterable[DatedActualCosts | tuple[date, Mapping[str, Amount]]]


def _ensure_parent(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def _cleanup_temp_artifact(path: Path | None, temp_dir: Path | None = None) -> None:
    if path:
        with suppress(FileNotFoundError, PermissionError, OSError):
            path.unlink()

    parent = temp_dir if temp_dir is not None else (path.parent if path else None)
    if parent is None:
        return
    if parent.exists():
        with suppress(FileNotFoundError, PermissionError, OSError):
            if not any(parent.iterdir()):
                parent.rmdir()


def build_report_context(
    project_id: str,
    request: MetricsRequest,
    *,
    dated_actual_costs: DatedCosts | None = None,
    currency_code: str | None = None,
    thresholds: EvmThresholds = DEFAULT_THRESHOLDS,
) -> ReportExportContext:
    """
    Run the full analysis for one project and collect it for the renderers.
    The request is validated first; invalid input raises ValidationError.
    """
    validate_metrics_request(request)
    snapshot = calculate_metrics(project_id, request, thresholds=thresholds)

    trend: list[EVMTrendPoint] = []
    if dated_actual_costs is not None:
        trend = generate_trend(
            request.tasks,
            request.budget_lines,
            dated_actual_costs,
            request.project_start_date,
            request.budget_at_completion,
            project_id=project_id,
            thresholds=thresholds,
        )

    return ReportExportContext(
        snapshot=snapshot,
        trend=trend,
        trend_analysis=analyze_trend(trend) if trend else None,
        critical_path=assess_critical_path_impact(request.tasks, snapshot, thresholds=thresholds),
        forecast=forecast_completion(
            snapshot, request.tasks, request.project_start_date, thresholds=thresholds
        ),
        status_text=interpret_snapshot(snapshot),
        currency_symbol=currency_symbol_from_code(currency_code),
        as_of=request.report_date,
    )


def generate_evm_png(
    trend: Sequence[EVMTrendPoint],
    output_path: str | Path,
    title: str | None = None,
) -> Path:
    if not trend:
        raise BusinessRuleError("No EVM trend points to plot.", code="NO_TREND_DATA")
    output_path = _ensure_parent(Path(output_path))
    renderer = EvmCurveRenderer()
    if title:
        return renderer.render(trend, output_path, title=title)
    return renderer.render(trend, output_path)


def generate_excel_report(
    project_id: str,
    request: MetricsRequest,
    output_path: str | Path,
    *,
    dated_actual_costs: DatedCosts | None = None,
    currency_code: str | None = None,
    thresholds: EvmThresholds = DEFAULT_THRESHOLDS,
) -> Path:
    base = build_report_context(
        project_id,
        request,
        dated_actual_costs=dated_actual_costs,
        currency_code=currency_code,
        thresholds=thresholds,
    )
    ctx = ExcelReportContext(**vars(base))
    logger.info("Writing EVM workbook for %s to %s", project_id, output_path)
    return ExcelReportRenderer().render(ctx, _ensure_parent(Path(output_path)))


def generate_pdf_report(
    project_id: str,
    request: MetricsRequest,
    output_path: str | Path,
    *,
    dated_actual_costs: DatedCosts | None = None,
    currency_code: str | None = None,
    temp_dir: str | Path = "tmp_reports",
    thresholds: EvmThresholds = DEFAULT_THRESHOLDS,
) -> Path:
    base = build_report_context(
        project_id,
        request,
        dated_actual_costs=dated_actual_costs,
        currency_code=currency_code,
        thresholds=thresholds,
    )
    temp_dir = Path(temp_dir)
    temp_dir.mkdir(parents=True, exist_ok=True)

    evm_path: Path | None = None
    if base.trend:
        evm_path = generate_evm_png(base.trend, temp_dir / f"evm_{project_id}.png")

    ctx = PdfReportContext(**vars(base), evm_png_path=str(evm_path) if evm_path else "")
    logger.info("Writing EVM PDF report for %s to %s", project_id, output_path)
    try:
        return PdfReportRenderer().render(ctx, _ensure_parent(Path(output_path)))
    finally:
        _cleanup_temp_artifact(evm_path, temp_dir=temp_dir)


__all__ = [
    "build_report_context",
    "generate_evm_png",
    "generate_excel_report",
    "generate_pdf_report",
]
