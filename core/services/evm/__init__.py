from .critical_path import assess_critical_path_impact
from .forecast import forecast_completion
from .interpretation import interpret_snapshot
from .metrics import calculate_metrics, calculate_metrics_for
from .models import (
    CompletionForecast,
    CriticalPathImpact,
    EVMSnapshot,
    EVMTrendPoint,
    ForecastScenario,
    ForecastScenarios,
    MetricsRequest,
    TaskValue,
    TrendAnalysis,
    TrendAnomaly,
)
from .periods import cumulative_cost_snapshots, month_end_dates
from .policy import DEFAULT_THRESHOLDS, EvmThresholds, load_thresholds_from_env
from .trend import analyze_trend, generate_trend
from .validation import validate_metrics_request

__all__ = [
    "calculate_metrics",
    "calculate_metrics_for",
    "generate_trend",
    "analyze_trend",
    "assess_critical_path_impact",
    "forecast_completion",
    "interpret_snapshot",
    "validate_metrics_request",
    "month_end_dates",
    "cumulative_cost_snapshots",
    "EvmThresholds",
    "DEFAULT_THRESHOLDS",
    "load_thresholds_from_env",
    "MetricsRequest",
    "TaskValue",
    "EVMSnapshot",
    "EVMTrendPoint",
    "TrendAnalysis",
    "TrendAnomaly",
    "CriticalPathImpact",
    "ForecastScenario",
    "ForecastScenarios",
    "CompletionForecast",
]
