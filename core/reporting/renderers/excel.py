from pathlib import Path
from openpyxl import Workbook
from openpyxl.styles import Font, Alignment, PatternFill, Border, Side

from core.reporting.contexts import ExcelReportContext


def _num(value):
    return float(value) if value is not None else None


class ExcelReportRenderer:
    def render(self, ctx: ExcelReportContext, output_path: Path) -> Path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        wb = Workbook()

        header_font = Font(bold=True)
        title_font = Font(bold=True, size=14)
        center = Alignment(horizontal="center")
        thin_border = Border(
            left=Side(style="thin"),
            right=Side(style="thin"),
            top=Side(style="thin"),
            bottom=Side(style="thin"),
        )
        header_fill = PatternFill("solid", fgColor="DDDDDD")

        def header_row(ws, headers):
            for col_index, h in enumerate(headers, start=1):
                cell = ws.cell(row=1, column=col_index, value=h)
                cell.font = header_font
                cell.alignment = center
                cell.fill = header_fill
                cell.border = thin_border

        snap = ctx.snapshot

        # ---------------- Snapshot ----------------
        ws = wb.active
        ws.title = "Snapshot"

        ws["A1"] = f"Earned Value Management - {snap.project_id}"
        ws["A1"].font = title_font

        row = 3

        def kv(key, value):
            nonlocal row
            ws[f"A{row}"] = key
            ws[f"B{row}"] = value
            ws[f"A{row}"].font = header_font
            ws[f"A{row}"].border = thin_border
            ws[f"B{row}"].border = thin_border
            row += 1

        kv("Report date", snap.report_date.isoformat())
        kv("Status", snap.performance_status.value)
        kv("Health score", snap.health_score)

        row += 1
        kv("BAC", _num(snap.budget_at_completion))
        kv("PV", _num(snap.planned_value))
        kv("EV", _num(snap.earned_value))
        kv("AC", _num(snap.actual_cost))

        row += 1
        kv("CPI", _num(snap.cost_performance_index))
        kv("SPI", _num(snap.schedule_performance_index))
        kv("CV", _num(snap.cost_variance))
        kv("SV", _num(snap.schedule_variance))

        row += 1
        kv("EAC", _num(snap.estimate_at_completion))
        kv("ETC", _num(snap.estimate_to_complete))
        kv("VAC", _num(snap.variance_at_completion))
        kv("TCPI (BAC)", _num(snap.tcpi_to_bac))
        kv("TCPI (EAC)", _num(snap.tcpi_to_eac))

        row += 1
        kv("Time variance (days)", snap.time_variance)
        kv("Est. time to complete (days)", snap.estimated_time_to_complete)

        row += 1
        kv("Interpretation", ctx.status_text)
        for note in snap.notes:
            kv("Note", note)

        ws.column_dimensions["A"].width = 30
        ws.column_dimensions["B"].width = 60

        # ---------------- Trend ----------------
        if ctx.trend:
            ws_trend = wb.create_sheet("Trend")
            header_row(ws_trend, ["Date", "PV", "EV", "AC", "CPI", "SPI"])
            for r, p in enumerate(ctx.trend, start=2):
                values = [
                    p.date.isoformat(),
                    _num(p.planned_value),
                    _num(p.earned_value),
                    _num(p.actual_cost),
                    _num(p.cpi),
                    _num(p.spi),
                ]
                for c, v in enumerate(values, 1):
                    ws_trend.cell(r, c, v).border = thin_border
            for col_letter in ("A", "B", "C", "D", "E", "F"):
                ws_trend.column_dimensions[col_letter].width = 16

            if ctx.trend_analysis and ctx.trend_analysis.anomalies:
                start = len(ctx.trend) + 3
                ws_trend.cell(start, 1, "Anomalies").font = header_font
                for offset, a in enumerate(ctx.trend_analysis.anomalies, start=1):
                    ws_trend.cell(start + offset, 1, a.date.isoformat())
                    ws_trend.cell(start + offset, 2, a.type.value)
                    ws_trend.cell(start + offset, 3, a.description)

        # ---------------- Critical Path ----------------
        if ctx.critical_path:
            ws_cp = wb.create_sheet("Critical Path")
            ws_cp["A1"] = "Schedule risk"
            ws_cp["A1"].font = header_font
            ws_cp["B1"] = _num(ctx.critical_path.schedule_risk)
            ws_cp["A3"] = "Critical tasks (open, high priority)"
            ws_cp["A3"].font = header_font
            r = 4
            for task_id in ctx.critical_path.critical_tasks:
                ws_cp.cell(r, 1, task_id)
                r += 1
            r += 1
            ws_cp.cell(r, 1, "Recommendations").font = header_font
            for text in ctx.critical_path.recommendations:
                r += 1
                ws_cp.cell(r, 1, text)
            ws_cp.column_dimensions["A"].width = 60

        # ---------------- Forecast ----------------
        if ctx.forecast:
            ws_fc = wb.create_sheet("Forecast")
            header_row(ws_fc, ["Scenario", "Completion date", "Cost"])
            scenarios = ctx.forecast.scenarios
            rows = [
                ("Optimistic", scenarios.optimistic),
                ("Most likely", scenarios.most_likely),
                ("Pessimistic", scenarios.pessimistic),
            ]
            for r, (label, sc) in enumerate(rows, start=2):
                ws_fc.cell(r, 1, label).border = thin_border
                ws_fc.cell(r, 2, sc.date.isoformat()).border = thin_border
                ws_fc.cell(r, 3, _num(sc.cost)).border = thin_border
            ws_fc.cell(6, 1, "Confidence").font = header_font
            ws_fc.cell(6, 2, _num(ctx.forecast.confidence_level))
            for col_letter in ("A", "B", "C"):
                ws_fc.column_dimensions[col_letter].width = 20

        wb.save(output_path)
        return output_path
