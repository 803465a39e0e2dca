from __future__ import annotations

from datetime import date

import pytest
from openpyxl import load_workbook

from core.exceptions import BusinessRuleError, ValidationError
from core.domain import ScheduleTask
from core.reporting import api as reporting_api
from core.reporting.formatting import (
    currency_symbol_from_code,
    fmt_days,
    fmt_money,
    fmt_percent,
    fmt_ratio,
)
from core.services.evm import MetricsRequest


def test_build_report_context_collects_every_analysis(project, monthly_costs):
    ctx = reporting_api.build_report_context(
        "P-1", project["request"], dated_actual_costs=monthly_costs, currency_code="usd"
    )

    assert ctx.snapshot.project_id == "P-1"
    assert len(ctx.trend) == 5
    assert ctx.trend_analysis is not None
    assert ctx.critical_path.critical_tasks == ("t-structure",)
    assert ctx.forecast.forecast_completion_date == date(2024, 9, 1)
    assert ctx.status_text.startswith("Cost:")
    assert ctx.currency_symbol == "$"
    assert ctx.as_of == date(2024, 5, 31)


def test_build_report_context_without_history_has_no_trend(project):
    ctx = reporting_api.build_report_context("P-1", project["request"])
    assert ctx.trend == []
    assert ctx.trend_analysis is None
    assert ctx.currency_symbol == ""


def test_build_report_context_validates_input(project):
    req = project["request"]
    bad = MetricsRequest(
        tasks=[ScheduleTask.create(date(2024, 3, 1), date(2024, 2, 1), task_id="x")],
        budget_lines=req.budget_lines,
        actual_costs=req.actual_costs,
        report_date=req.report_date,
        project_start_date=req.project_start_date,
        budget_at_completion=req.budget_at_completion,
    )
    with pytest.raises(ValidationError):
        reporting_api.build_report_context("P-1", bad)


def test_generate_evm_png_writes_image(project, monthly_costs, tmp_path):
    ctx = reporting_api.build_report_context("P-1", project["request"], dated_actual_costs=monthly_costs)
    out = reporting_api.generate_evm_png(ctx.trend, tmp_path / "charts" / "evm.png")

    assert out.exists()
    assert out.read_bytes()[:4] == b"\x89PNG"


def test_generate_evm_png_without_points_is_rejected(tmp_path):
    with pytest.raises(BusinessRuleError) as exc:
        reporting_api.generate_evm_png([], tmp_path / "evm.png")
    assert exc.value.code == "NO_TREND_DATA"
    assert not (tmp_path / "evm.png").exists()


def test_excel_report_has_all_sheets(project, monthly_costs, tmp_path):
    out = reporting_api.generate_excel_report(
        "P-1",
        project["request"],
        tmp_path / "out" / "evm.xlsx",
        dated_actual_costs=monthly_costs,
    )

    wb = load_workbook(out)
    assert wb.sheetnames == ["Snapshot", "Trend", "Critical Path", "Forecast"]

    snapshot = wb["Snapshot"]
    values = {
        snapshot.cell(r, 1).value: snapshot.cell(r, 2).value
        for r in range(3, snapshot.max_row + 1)
        if snapshot.cell(r, 1).value
    }
    assert values["Status"] == "On Track"
    assert values["EV"] == pytest.approx(560000.0)
    assert values["SPI"] == pytest.approx(1.12)

    trend = wb["Trend"]
    assert [c.value for c in trend[1]] == ["Date", "PV", "EV", "AC", "CPI", "SPI"]
    assert trend.cell(2, 1).value == "2024-01-31"

    assert wb["Critical Path"].cell(4, 1).value == "t-structure"
    assert wb["Forecast"].cell(3, 2).value == "2024-09-01"


def test_excel_report_without_history_skips_trend_sheet(project, tmp_path):
    out = reporting_api.generate_excel_report("P-1", project["request"], tmp_path / "evm.xlsx")
    assert "Trend" not in load_workbook(out).sheetnames


def test_pdf_report_embeds_chart_and_cleans_up(slipping_project, monthly_costs, tmp_path):
    temp_dir = tmp_path / "tmp_reports"
    out = reporting_api.generate_pdf_report(
        "P-2",
        slipping_project["request"],
        tmp_path / "reports" / "evm.pdf",
        dated_actual_costs=monthly_costs,
        currency_code="EUR",
        temp_dir=temp_dir,
    )

    assert out.exists()
    assert out.read_bytes()[:4] == b"%PDF"
    assert not temp_dir.exists()


def test_pdf_report_without_history(project, tmp_path):
    out = reporting_api.generate_pdf_report(
        "P-1", project["request"], tmp_path / "evm.pdf", temp_dir=tmp_path / "tmp"
    )
    assert out.read_bytes()[:4] == b"%PDF"


def test_pdf_report_accepts_markup_characters_in_text(project, monthly_costs, tmp_path):
    out = reporting_api.generate_pdf_report(
        "R&D <2>",
        project["request"],
        tmp_path / "rd.pdf",
        dated_actual_costs=monthly_costs,
        temp_dir=tmp_path / "tmp",
    )
    assert out.read_bytes()[:4] == b"%PDF"


def test_formatting_helpers():
    assert fmt_money(1234567.8, "$") == "$ 1,234,567.80"
    assert fmt_money(None) == "-"
    assert fmt_ratio(1.12) == "1.12"
    assert fmt_percent(56) == "56.0 %"
    assert fmt_days(-36) == "-36 d"
    assert fmt_days(0) == "0 d"
    assert currency_symbol_from_code("gbp") == "£"
    assert currency_symbol_from_code("XYZ") == ""
