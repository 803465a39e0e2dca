from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from core.services.evm import (
    CompletionForecast,
    CriticalPathImpact,
    EVMSnapshot,
    EVMTrendPoint,
    TrendAnalysis,
)


@dataclass
class ReportExportContext:
    snapshot: EVMSnapshot
    trend: List[EVMTrendPoint]
    trend_analysis: Optional[TrendAnalysis]
    critical_path: Optional[CriticalPathImpact]
    forecast: Optional[CompletionForecast]
    status_text: str
    currency_symbol: str
    as_of: date


@dataclass
class ExcelReportContext(ReportExportContext):
    pass


@dataclass
class PdfReportContext(ReportExportContext):
    evm_png_path: str
