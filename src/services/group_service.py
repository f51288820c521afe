"""Group membership and budget configuration."""

import logging

from src.models import Group
from src.models.enums import GroupRole
from src.schemas.group import BudgetConfig, GroupCreate
from src.services.exceptions import GroupNotFoundError, NotMemberError
from src.services.favorite_service import FavoriteService
from src.store import Store

logger = logging.getLogger(__name__)


class GroupService:
    """Service for group lifecycle steps that touch favorites or budgets."""

    def __init__(self, store: Store, favorites: FavoriteService | None = None):
        self.store = store
        self.favorites = favorites or FavoriteService(store)

    def create_group(self, creator_id: int, data: GroupCreate) -> Group:
        """Create a group with its creator as admin and a default favorite."""
        with self.store.transaction():
            group = self.store.add(
                Group(
                    name=data.name,
                    created_by=creator_id,
                    budget_approach=data.budget.budget_approach,
                    budget_amount=data.budget.budget_amount,
                )
            )
            self.store.add_membership(creator_id, group.id, GroupRole.ADMIN.value)
        logger.info(f"User {creator_id} created group {group.id}")

        self.favorites.set_default_favorite(creator_id, group.id)
        return group

    def join_group(self, user_id: int, group_id: int) -> None:
        """Add a member; a member without a favorite gets the default one."""
        self._require_group(group_id)
        with self.store.transaction():
            self.store.add_membership(user_id, group_id, GroupRole.MEMBER.value)
        logger.info(f"User {user_id} joined group {group_id}")

        if self.favorites.get_favorite_for_group(user_id, group_id) is None:
            self.favorites.set_default_favorite(user_id, group_id)

    def leave_group(self, user_id: int, group_id: int) -> None:
        """Remove a member together with their favorite in the group."""
        if self.store.get_membership(user_id, group_id) is None:
            raise NotMemberError(f"User {user_id} is not a member of group {group_id}")
        with self.store.transaction():
            self.store.delete_favorite(user_id, group_id)
            self.store.delete_membership(user_id, group_id)
        logger.info(f"User {user_id} left group {group_id}")

    def update_budget(self, group_id: int, config: BudgetConfig) -> Group:
        """Replace a group's budget approach and amount (cents)."""
        group = self._require_group(group_id)
        with self.store.transaction():
            group.budget_approach = config.budget_approach
            group.budget_amount = config.budget_amount
            self.store.add(group)
        logger.info(
            f"Group {group_id} budget set to {config.budget_approach} {config.budget_amount}"
        )
        return group

    def _require_group(self, group_id: int) -> Group:
        group = self.store.get_group(group_id)
        if group is None:
            raise GroupNotFoundError(f"Group {group_id} not found")
        return group
