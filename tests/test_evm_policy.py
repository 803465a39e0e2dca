from decimal import Decimal
import logging

from core.services.evm import DEFAULT_THRESHOLDS, EvmThresholds, load_thresholds_from_env


def _clear_env(monkeypatch):
    for name in (
        "EVM_CRITICAL_INDEX",
        "EVM_RECOMMENDATION_INDEX",
        "EVM_PESSIMISTIC_DEGRADATION",
        "EVM_CRITICAL_RATIO",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults_without_environment(monkeypatch):
    _clear_env(monkeypatch)
    thresholds = load_thresholds_from_env()

    assert thresholds is DEFAULT_THRESHOLDS
    assert thresholds.critical_index == Decimal("0.8")
    assert thresholds.recommendation_index == Decimal("0.9")
    assert thresholds.cost_weight + thresholds.schedule_weight + thresholds.variance_weight == Decimal("1")


def test_environment_overrides_are_applied(monkeypatch):
    _clear_env(monkeypatch)
    monkeypatch.setenv("EVM_CRITICAL_INDEX", "0.75")
    monkeypatch.setenv("EVM_PESSIMISTIC_DEGRADATION", " 0.2 ")
    monkeypatch.setenv("EVM_RECOMMENDATION_INDEX", "1")

    thresholds = load_thresholds_from_env()

    assert thresholds.critical_index == Decimal("0.75")
    assert thresholds.pessimistic_degradation == Decimal("0.2")
    assert thresholds.recommendation_index == Decimal("1")
    assert thresholds.critical_ratio == DEFAULT_THRESHOLDS.critical_ratio


def test_invalid_environment_values_are_ignored(monkeypatch, caplog):
    _clear_env(monkeypatch)
    monkeypatch.setenv("EVM_CRITICAL_INDEX", "high")
    monkeypatch.setenv("EVM_PESSIMISTIC_DEGRADATION", "1")
    monkeypatch.setenv("EVM_CRITICAL_RATIO", "-0.1")

    with caplog.at_level(logging.WARNING):
        thresholds = load_thresholds_from_env()

    assert thresholds == DEFAULT_THRESHOLDS
    assert "EVM_CRITICAL_INDEX" in caplog.text
    assert "EVM_PESSIMISTIC_DEGRADATION" in caplog.text


def test_overrides_start_from_given_base(monkeypatch):
    _clear_env(monkeypatch)
    monkeypatch.setenv("EVM_CRITICAL_RATIO", "0.5")
    base = EvmThresholds(risk_floor_spi=Decimal("0.6"))

    thresholds = load_thresholds_from_env(base)

    assert thresholds.critical_ratio == Decimal("0.5")
    assert thresholds.risk_floor_spi == Decimal("0.6")
