from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from decimal import Decimal, InvalidOperation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EvmThresholds:
    # performance status
    critical_index: Decimal = Decimal("0.8")
    on_track_index: Decimal = Decimal("1")

    # health score weights (sum to 1)
    cost_weight: Decimal = Decimal("0.4")
    schedule_weight: Decimal = Decimal("0.4")
    variance_weight: Decimal = Decimal("0.2")

    # critical-path heuristic
    risk_floor_spi: Decimal = Decimal("0.5")
    recommendation_index: Decimal = Decimal("0.9")
    critical_ratio: Decimal = Decimal("0.3")

    # forecasting
    pessimistic_degradation: Decimal = Decimal("0.1")
    stable_index: Decimal = Decimal("0.95")
    confidence_floor: Decimal = Decimal("0.5")
    stable_confidence: Decimal = Decimal("0.85")

    # AC this many times above BAC is flagged as a probable units/currency mix-up
    ac_overrun_factor: Decimal = Decimal("5")


DEFAULT_THRESHOLDS = EvmThresholds()

# env var -> (field, inclusive upper bound); every value must be > 0
_ENV_OVERRIDES = {
    "EVM_CRITICAL_INDEX": ("critical_index", True),
    "EVM_RECOMMENDATION_INDEX": ("recommendation_index", True),
    "EVM_PESSIMISTIC_DEGRADATION": ("pessimistic_degradation", False),
    "EVM_CRITICAL_RATIO": ("critical_ratio", False),
}


def _read_fraction(name: str, allow_one: bool) -> Decimal | None:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return None
    try:
        value = Decimal(raw)
    except InvalidOperation:
        logger.warning("Ignoring %s=%r: not a number.", name, raw)
        return None
    upper_ok = value <= 1 if allow_one else value < 1
    if not (value > 0 and upper_ok):
        logger.warning("Ignoring %s=%r: out of range.", name, raw)
        return None
    return value


def load_thresholds_from_env(base: EvmThresholds = DEFAULT_THRESHOLDS) -> EvmThresholds:
    overrides: dict[str, Decimal] = {}
    for env_name, (field_name, allow_one) in _ENV_OVERRIDES.items():
        value = _read_fraction(env_name, allow_one)
        if value is not None:
            overrides[field_name] = value
    if not overrides:
        return base
    logger.info("EVM thresholds overridden from environment: %s", sorted(overrides))
    return replace(base, **overrides)


__all__ = ["EvmThresholds", "DEFAULT_THRESHOLDS", "load_thresholds_from_env"]
