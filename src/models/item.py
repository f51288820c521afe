"""Wishlist item model."""

from sqlalchemy import Column, Enum, ForeignKey, Index, Integer, Numeric, String, text
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.enums import ItemStatus, ItemType
from src.models.mixins import SoftDeleteMixin, TimestampMixin

# Live special items; at most one per (owner, kind)
SINGLETON_INDEX_WHERE = text("item_type != 'standard' AND deleted_at IS NULL")


class Item(Base, TimestampMixin, SoftDeleteMixin):
    """Wishlist item owned by a user."""

    __tablename__ = "wishlist_items"
    __table_args__ = (
        Index(
            "uq_wishlist_items_owner_singleton",
            "owner_id",
            "item_type",
            unique=True,
            postgresql_where=SINGLETON_INDEX_WHERE,
            sqlite_where=SINGLETON_INDEX_WHERE,
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    item_type = Column(
        Enum(
            ItemType,
            name="itemtype",
            values_callable=lambda x: [e.value for e in x],
        ),
        default=ItemType.STANDARD,
        nullable=False,
    )
    title = Column(String(500), nullable=False)
    priority = Column(Integer, default=0, nullable=False)
    status = Column(
        Enum(
            ItemStatus,
            name="itemstatus",
            values_callable=lambda x: [e.value for e in x],
        ),
        default=ItemStatus.ACTIVE,
        nullable=False,
        index=True,
    )
    mystery_box_tier = Column(Integer, nullable=True)  # 25, 50 or 100
    surprise_me_budget = Column(Numeric(10, 2), nullable=True)

    # Relationships
    owner = relationship("User", backref="wishlist_items")

    @property
    def is_active(self) -> bool:
        """Check if the item can be someone's Most Wanted."""
        return self.status == ItemStatus.ACTIVE and not self.is_deleted
