from __future__ import annotations

from decimal import Decimal
from enum import Enum


class MarginRate(str, Enum):
    TEN = "10%"
    TWENTY = "20%"
    TWENTY_FIVE = "25%"
    THIRTY = "30%"

    @property
    def fraction(self) -> Decimal:
        return Decimal(self.value.rstrip("%")) / 100
