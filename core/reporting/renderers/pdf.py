from pathlib import Path
from xml.sax.saxutils import escape

from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib import colors
from reportlab.platypus import (
    SimpleDocTemplate,
    Paragraph,
    Spacer,
    Table,
    TableStyle,
    Image,
)
from reportlab.lib.styles import getSampleStyleSheet

from core.reporting.contexts import PdfReportContext
from core.reporting.formatting import fmt_days, fmt_money, fmt_percent, fmt_ratio


class PdfReportRenderer:
    def render(self, ctx: PdfReportContext, output_path: Path) -> Path:
        doc = SimpleDocTemplate(
            str(output_path),
            pagesize=landscape(A4),
            leftMargin=40,
            rightMargin=40,
            topMargin=40,
            bottomMargin=40,
        )

        styles = getSampleStyleSheet()
        story = []
        snap = ctx.snapshot
        cur = ctx.currency_symbol

        table_style = TableStyle([
            ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
            ("ALIGN", (1, 1), (-1, -1), "RIGHT"),
        ])

        # ---------------- Title ----------------
        story.append(Paragraph(f"Earned Value Report - {escape(snap.project_id)}", styles["Title"]))
        story.append(Spacer(1, 12))

        # ---------------- Summary ----------------
        info = [
            f"Report date: {snap.report_date.isoformat()}",
            f"Status: {snap.performance_status.value} (health {snap.health_score}/100)",
            f"Budget at completion: {fmt_money(snap.budget_at_completion, cur)}",
            f"Complete: {fmt_percent(snap.percent_complete)} / Spent: {fmt_percent(snap.percent_spent)}",
            ctx.status_text,
        ]
        for line in info:
            story.append(Paragraph(escape(line), styles["Normal"]))
        story.append(Spacer(1, 12))

        data = [
            ["Metric", "Value", "Metric", "Value"],
            ["PV", fmt_money(snap.planned_value, cur), "CPI", fmt_ratio(snap.cost_performance_index)],
            ["EV", fmt_money(snap.earned_value, cur), "SPI", fmt_ratio(snap.schedule_performance_index)],
            ["AC", fmt_money(snap.actual_cost, cur), "CV", fmt_money(snap.cost_variance, cur)],
            ["EAC", fmt_money(snap.estimate_at_completion, cur), "SV", fmt_money(snap.schedule_variance, cur)],
            ["ETC", fmt_money(snap.estimate_to_complete, cur), "Time variance", fmt_days(snap.time_variance)],
            ["VAC", fmt_money(snap.variance_at_completion, cur), "Est. days to complete", str(snap.estimated_time_to_complete)],
        ]
        table = Table(data, colWidths=[120, 160, 140, 160])
        table.setStyle(table_style)
        story.append(table)
        story.append(Spacer(1, 16))

        # ---------------- S-curve ----------------
        if ctx.evm_png_path:
            story.append(Paragraph("EVM S-Curve", styles["Heading2"]))
            story.append(Spacer(1, 8))
            img = Image(ctx.evm_png_path)
            img._restrictSize(720, 300)
            story.append(img)
            story.append(Spacer(1, 16))

        # ---------------- Forecast ----------------
        if ctx.forecast:
            story.append(Paragraph("Completion Forecast", styles["Heading2"]))
            story.append(Spacer(1, 8))
            sc = ctx.forecast.scenarios
            data = [["Scenario", "Completion date", "Cost"]]
            for label, item in (
                ("Optimistic", sc.optimistic),
                ("Most likely", sc.most_likely),
                ("Pessimistic", sc.pessimistic),
            ):
                data.append([label, item.date.isoformat(), fmt_money(item.cost, cur)])
            table = Table(data, colWidths=[160, 160, 160])
            table.setStyle(table_style)
            story.append(table)
            story.append(Paragraph(
                f"Confidence: {fmt_percent(ctx.forecast.confidence_level * 100, 0)}",
                styles["Normal"],
            ))
            story.append(Spacer(1, 16))

        # ---------------- Critical path ----------------
        if ctx.critical_path:
            story.append(Paragraph("Critical Path Impact", styles["Heading2"]))
            story.append(Paragraph(
                f"Schedule risk: {fmt_ratio(ctx.critical_path.schedule_risk)} - "
                f"{len(ctx.critical_path.critical_tasks)} open high-priority task(s)",
                styles["Normal"],
            ))
            for text in ctx.critical_path.recommendations:
                story.append(Paragraph(f"- {escape(text)}", styles["Normal"]))

        doc.build(story)
        return output_path
