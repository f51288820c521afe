"""SQLAlchemy models."""

from src.models.celebration import Celebration, Contribution
from src.models.favorite import Favorite
from src.models.group import Group, GroupMember
from src.models.item import Item
from src.models.user import User

__all__ = [
    "User",
    "Item",
    "Favorite",
    "Group",
    "GroupMember",
    "Celebration",
    "Contribution",
]
