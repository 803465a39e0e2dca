from __future__ import annotations

from decimal import Decimal

from core.domain.money import ZERO
from core.services.evm.models import EVMSnapshot


def interpret_snapshot(evm: EVMSnapshot) -> str:
    parts = []

    if evm.actual_cost == ZERO:
        parts.append("Cost: no actual cost recorded yet.")
    elif evm.cost_performance_index >= Decimal("1.05"):
        parts.append("Cost: under budget (good).")
    elif evm.cost_performance_index >= Decimal("0.95"):
        parts.append("Cost: roughly on budget.")
    else:
        parts.append("Cost: over budget (needs action).")

    if evm.planned_value == ZERO:
        parts.append("Schedule: no work planned yet.")
    elif evm.schedule_performance_index >= Decimal("1.05"):
        parts.append("Schedule: ahead.")
    elif evm.schedule_performance_index >= Decimal("0.95"):
        parts.append("Schedule: on track.")
    else:
        parts.append(
            f"Schedule: behind by about {abs(evm.time_variance)} day(s) (recover plan)."
        )

    if evm.variance_at_completion >= ZERO:
        parts.append("Forecast: within budget at completion.")
    else:
        parts.append("Forecast: likely over budget at completion.")

    if evm.tcpi_to_bac is not None:
        if evm.tcpi_to_bac < Decimal("0.5"):
            parts.append("TCPI(BAC): unusually low; verify budget and progress data.")
        elif evm.tcpi_to_bac <= Decimal("1.05"):
            parts.append("TCPI(BAC): achievable efficiency to hit budget.")
        elif evm.tcpi_to_bac <= Decimal("1.15"):
            parts.append("TCPI(BAC): challenging; requires efficiency improvement.")
        else:
            parts.append("TCPI(BAC): severely over budget or BAC is unrealistic.")
    else:
        parts.append("TCPI(BAC): total planned budget exceeded.")

    return " ".join(parts)


__all__ = ["interpret_snapshot"]
