"""Group budget status service.

Derives spent / remaining / percentage / threshold for a group budget.
Nothing is persisted; every call recomputes from the store and the clock.

Currency: ``groups.budget_amount`` is stored in cents, contribution
amounts in dollars. The budget is converted to dollars before any
comparison.
"""

import logging
from datetime import UTC, datetime
from decimal import Decimal

from src.models.enums import BudgetApproach, ThresholdLevel
from src.schemas.budget import BudgetStatus
from src.services.contributions import ContributionAggregator
from src.services.exceptions import GroupNotFoundError
from src.services.periods import resolve_period
from src.store import Store

logger = logging.getLogger(__name__)

CENTS_PER_DOLLAR = Decimal("100")
WARNING_PERCENTAGE = Decimal("75")
DANGER_PERCENTAGE = Decimal("90")
OVER_PERCENTAGE = Decimal("100")


def cents_to_dollars(cents: int | None) -> Decimal:
    """Convert a stored cent amount to dollars; a missing amount is zero."""
    return Decimal(cents or 0) / CENTS_PER_DOLLAR


def threshold_level(percentage: Decimal) -> ThresholdLevel:
    """Bucket a spend percentage. Lower bounds are inclusive."""
    if percentage >= OVER_PERCENTAGE:
        return ThresholdLevel.OVER
    if percentage >= DANGER_PERCENTAGE:
        return ThresholdLevel.DANGER
    if percentage >= WARNING_PERCENTAGE:
        return ThresholdLevel.WARNING
    return ThresholdLevel.NORMAL


def spend_percentage(spent: Decimal, budget_amount: Decimal) -> Decimal:
    """Spent as a percentage of budget, not clamped."""
    if budget_amount > 0:
        return spent / budget_amount * 100
    # A zero budget with any spending is fully used
    return OVER_PERCENTAGE if spent > 0 else Decimal("0")


class BudgetService:
    """Service computing budget status for groups."""

    def __init__(self, store: Store, aggregator: ContributionAggregator | None = None):
        self.store = store
        self.aggregator = aggregator or ContributionAggregator(store)

    def get_status(self, group_id: int, now: datetime | None = None) -> BudgetStatus | None:
        """Get the budget status for a group.

        Args:
            group_id: The group to report on
            now: Evaluation instant, defaults to the current time

        Returns:
            BudgetStatus, or None when the group has no budget configured

        Raises:
            GroupNotFoundError: the group does not exist
            StoreError: the store failed
        """
        group = self.store.get_group(group_id)
        if group is None:
            raise GroupNotFoundError(f"Group {group_id} not found")

        if group.budget_approach is None:
            return None

        approach = BudgetApproach(group.budget_approach)
        budget_amount = cents_to_dollars(group.budget_amount)
        now = now or datetime.now(UTC)
        period = resolve_period(approach, group.created_at, now)

        # Per-gift budgets are advisory; nothing is spent against them
        if not approach.is_periodic():
            return BudgetStatus(
                approach=approach,
                budget_amount=budget_amount,
                spent=Decimal("0"),
                remaining=budget_amount,
                percentage=Decimal("0"),
                period_label=period.label,
                is_over_budget=False,
                threshold_level=ThresholdLevel.NORMAL,
            )

        spent = self.aggregator.sum_for_group(group_id, period)
        percentage = spend_percentage(spent, budget_amount)
        status = BudgetStatus(
            approach=approach,
            budget_amount=budget_amount,
            spent=spent,
            remaining=budget_amount - spent,
            percentage=percentage,
            period_label=period.label,
            is_over_budget=spent > budget_amount,
            threshold_level=threshold_level(percentage),
        )
        logger.debug(
            f"Budget status for group {group_id}: {status.threshold_level} ({percentage}%)"
        )
        return status
