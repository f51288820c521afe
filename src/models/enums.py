"""Enums for model fields."""

from enum import StrEnum


class ItemType(StrEnum):
    """Wishlist item kinds."""

    STANDARD = "standard"
    SURPRISE_ME = "surprise_me"
    MYSTERY_BOX = "mystery_box"


class ItemStatus(StrEnum):
    """Lifecycle status of a wishlist item."""

    ACTIVE = "active"
    CLAIMED = "claimed"
    PURCHASED = "purchased"
    RECEIVED = "received"
    ARCHIVED = "archived"


class GroupRole(StrEnum):
    """Member roles within a group."""

    ADMIN = "admin"
    MEMBER = "member"


class BudgetApproach(StrEnum):
    """How a group's gift budget is accounted."""

    PER_GIFT = "per_gift"
    MONTHLY = "monthly"
    YEARLY = "yearly"

    def is_periodic(self) -> bool:
        """Check if this approach aggregates contributions over a period."""
        return self in (BudgetApproach.MONTHLY, BudgetApproach.YEARLY)


class ThresholdLevel(StrEnum):
    """Qualitative bucket for budget spend percentage."""

    NORMAL = "normal"
    WARNING = "warning"
    DANGER = "danger"
    OVER = "over"
