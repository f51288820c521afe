"""Favorite schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from src.models.enums import ItemType


class FavoriteView(BaseModel):
    """A user's Most Wanted item in one group, as shown on the wishlist."""

    model_config = ConfigDict(from_attributes=True)

    group_id: int
    group_name: str
    item_id: int
    item_type: ItemType
    updated_at: datetime
