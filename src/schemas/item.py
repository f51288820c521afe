"""Wishlist item schemas."""

from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field, model_validator

from src.models.enums import ItemType


class ItemCreate(BaseModel):
    """Create a new wishlist item."""

    title: str | None = Field(None, max_length=500)
    item_type: ItemType = ItemType.STANDARD
    priority: int = Field(0, ge=0, le=5)
    mystery_box_tier: Literal[25, 50, 100] | None = None
    surprise_me_budget: Decimal | None = Field(None, ge=0, max_digits=10, decimal_places=2)

    @model_validator(mode="after")
    def validate_kind_fields(self) -> "ItemCreate":
        """Standard items need a title; tiers only apply to mystery boxes."""
        if self.item_type == ItemType.STANDARD and not self.title:
            raise ValueError("Standard items require a title")
        if self.mystery_box_tier is not None and self.item_type != ItemType.MYSTERY_BOX:
            raise ValueError("mystery_box_tier only applies to mystery_box items")
        if self.surprise_me_budget is not None and self.item_type != ItemType.SURPRISE_ME:
            raise ValueError("surprise_me_budget only applies to surprise_me items")
        return self
