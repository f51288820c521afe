"""Contribution aggregation for budget periods."""

import logging
from decimal import Decimal

from src.schemas.budget import Period
from src.store import Store

logger = logging.getLogger(__name__)


class ContributionAggregator:
    """Sums pledged contributions for a group's celebrations in a period."""

    def __init__(self, store: Store):
        self.store = store

    def sum_for_group(self, group_id: int, period: Period) -> Decimal:
        """Total contributed, in dollars, to celebrations created in the period.

        Two steps: celebration IDs in [start, end), then the exact decimal
        sum of their contributions. No celebrations means zero.
        """
        celebration_ids = self.store.list_celebrations(group_id, period.start, period.end)
        if not celebration_ids:
            return Decimal("0")

        total = self.store.sum_contributions(celebration_ids)
        logger.debug(
            f"Group {group_id} spent {total} across {len(celebration_ids)} celebrations "
            f"in {period.label}"
        )
        return total
