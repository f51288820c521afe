"""Budget status schemas."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel

from src.models.enums import BudgetApproach, ThresholdLevel


class Period(BaseModel):
    """Accounting window: ``start`` inclusive, ``end`` exclusive."""

    start: datetime
    end: datetime
    label: str

    def contains(self, instant: datetime) -> bool:
        """Check if an instant falls inside the window."""
        return self.start <= instant < self.end


class BudgetStatus(BaseModel):
    """Spending view of a group's budget. Money is in dollars."""

    approach: BudgetApproach
    budget_amount: Decimal
    spent: Decimal
    remaining: Decimal
    percentage: Decimal
    period_label: str
    is_over_budget: bool
    threshold_level: ThresholdLevel
