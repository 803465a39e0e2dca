from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from core.domain.identifiers import generate_id
from core.domain.money import Amount, to_decimal


@dataclass(frozen=True)
class BudgetLine:
    id: str
    quantity: Decimal
    unit_price: Decimal
    description: str = ""

    @property
    def budgeted_value(self) -> Decimal:
        return self.quantity * self.unit_price

    @staticmethod
    def create(
        quantity: Amount,
        unit_price: Amount,
        description: str = "",
        line_id: str | None = None,
    ) -> "BudgetLine":
        return BudgetLine(
            id=line_id or generate_id("bl"),
            quantity=to_decimal(quantity),
            unit_price=to_decimal(unit_price),
            description=description,
        )


__all__ = ["BudgetLine"]
