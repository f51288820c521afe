"""Group favorite ("Most Wanted") model."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.mixins import utc_now


class Favorite(Base):
    """A user's Most Wanted item in one group."""

    __tablename__ = "group_favorites"
    __table_args__ = (
        UniqueConstraint("user_id", "group_id", name="uq_group_favorites_user_group"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    group_id = Column(Integer, ForeignKey("groups.id"), nullable=False, index=True)
    item_id = Column(Integer, ForeignKey("wishlist_items.id"), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)

    # Relationships
    group = relationship("Group")
    item = relationship("Item")
