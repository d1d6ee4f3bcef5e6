"""Domain models - immutable dataclasses representing plans and their dues"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Tuple


@dataclass(frozen=True)
class Due:
    """One month's scheduled payment within a plan"""

    month: date  # only year + month are significant
    amount: Decimal
    paid: bool = False


@dataclass(frozen=True)
class Plan:
    """Recurring payment obligation split into equal monthly dues"""

    id: int
    name: str
    starting_month: date
    duration_months: int
    total_amount: Decimal
    dues: Tuple[Due, ...]

    @property
    def monthly_amount(self) -> Decimal:
        """Nominal per-month figure, before the last due absorbs any remainder"""
        return self.total_amount / self.duration_months

    @property
    def paid_amount(self) -> Decimal:
        return sum((due.amount for due in self.dues if due.paid), Decimal(0))
