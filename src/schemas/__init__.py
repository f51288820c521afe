"""Pydantic schemas for engine inputs and results."""

from src.schemas.budget import BudgetStatus, Period
from src.schemas.favorite import FavoriteView
from src.schemas.group import BudgetConfig, GroupCreate
from src.schemas.item import ItemCreate

__all__ = [
    "ItemCreate",
    "FavoriteView",
    "GroupCreate",
    "BudgetConfig",
    "Period",
    "BudgetStatus",
]
