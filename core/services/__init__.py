from .evm import (
    assess_critical_path_impact,
    calculate_metrics,
    forecast_completion,
    generate_trend,
)

__all__ = [
    "calculate_metrics",
    "generate_trend",
    "assess_critical_path_impact",
    "forecast_completion",
]
