"""Favorite ("Most Wanted") assignment service.

Keeps the invariant that every member of a group has exactly one favorite
item in that group. Standard items can be Most Wanted in one group at a
time; Surprise Me and Mystery Box items can be Most Wanted in many groups.
Whenever a favorite would disappear, the owner's Surprise Me item (created
on demand) takes its place.
"""

import logging

from src.config import get_settings
from src.models import Favorite, Item
from src.models.enums import ItemStatus, ItemType
from src.schemas.favorite import FavoriteView
from src.services.classifier import is_shareable
from src.services.exceptions import (
    GiftCoordinationError,
    ItemNotActiveError,
    ItemNotFoundError,
    ReconcileError,
)
from src.services.locks import KeyedLock
from src.store import Store

logger = logging.getLogger(__name__)

# Shared by every service instance in the process
_favorite_locks = KeyedLock()


class FavoriteService:
    """Service enforcing one favorite per (owner, group)."""

    def __init__(self, store: Store, locks: KeyedLock | None = None):
        self.store = store
        self.locks = locks or _favorite_locks
        self.settings = get_settings()

    # Writes

    def set_favorite(self, owner_id: int, group_id: int, item_id: int) -> Item:
        """Make an item the owner's favorite in a group.

        A standard item is first removed as favorite from the owner's other
        groups, which fall back to the default item. Everything shares one
        transaction, and the lock of every group touched is held throughout.

        Raises:
            ItemNotFoundError: item missing or owned by someone else
            ItemNotActiveError: item deleted or no longer active
            StoreError: the store failed
        """
        keys = {(owner_id, group_id)}
        keys.update((owner_id, other) for other in self.groups_where_favorite(owner_id, item_id))
        while True:
            with self.locks.hold_many(keys):
                with self.store.transaction():
                    item = self._require_active_item(owner_id, item_id)
                    needed = {
                        (owner_id, other)
                        for other in self._displaced_groups(owner_id, group_id, item)
                    }
                    if needed <= keys:
                        self._assign(owner_id, group_id, item)
                        break
            # The item moved to another group before the locks were taken
            keys |= needed
        logger.info(f"User {owner_id} set item {item_id} as favorite in group {group_id}")
        return item

    def toggle_for_group(
        self,
        owner_id: int,
        group_id: int,
        item_id: int,
        currently_selected: bool,
    ) -> Item:
        """Toggle an item's favorite status in one group.

        Deselecting falls back to the default item instead of leaving the
        group without a favorite.
        """
        if currently_selected:
            return self.set_default_favorite(owner_id, group_id)
        return self.set_favorite(owner_id, group_id, item_id)

    def remove_favorite(self, owner_id: int, group_id: int) -> Item:
        """Clear a chosen favorite; the default item replaces it."""
        return self.set_default_favorite(owner_id, group_id)

    def set_default_favorite(self, owner_id: int, group_id: int) -> Item:
        """Assign the owner's Surprise Me item, creating it if needed."""
        with self.locks.hold((owner_id, group_id)):
            with self.store.transaction():
                item = self._assign_default(owner_id, group_id)
        logger.info(f"Default favorite {item.id} assigned for user {owner_id} in group {group_id}")
        return item

    def promote_next_favorite(self, owner_id: int, group_id: int, excluded_item_id: int) -> Item:
        """Replace a favorite that went away with the best remaining item.

        Picks the highest priority active item other than ``excluded_item_id``
        (ties: oldest first, then lowest id). Standard items that are already
        Most Wanted in another group are skipped, since moving them would
        strip that group. Falls back to the default item.
        """
        with self.locks.hold((owner_id, group_id)):
            with self.store.transaction():
                taken = {
                    favorite.item_id
                    for favorite in self.store.list_favorites(owner_id)
                    if favorite.group_id != group_id
                }
                candidates = self.store.list_active_items(owner_id, exclude_id=excluded_item_id)
                for candidate in candidates:
                    if not is_shareable(candidate.item_type) and candidate.id in taken:
                        continue
                    self._assign(owner_id, group_id, candidate)
                    logger.info(
                        f"Promoted item {candidate.id} to favorite for user {owner_id} "
                        f"in group {group_id}"
                    )
                    return candidate
                item = self._assign_default(owner_id, group_id)
        logger.info(f"No items left to promote for user {owner_id}; group {group_id} uses default")
        return item

    def reconcile_all_group_favorites(self, owner_id: int) -> list[int]:
        """Give every group the owner belongs to a valid favorite.

        Groups with no favorite, or whose favorite points at a deleted or
        inactive item, get the default item. One group failing does not stop
        the others.

        Returns:
            IDs of the groups that were healed

        Raises:
            ReconcileError: one or more groups could not be reconciled
        """
        groups = self.store.list_groups_for_user(owner_id)
        healed: list[int] = []
        failures: dict[int, Exception] = {}

        for group in groups:
            try:
                with self.locks.hold((owner_id, group.id)):
                    with self.store.transaction():
                        if self._has_valid_favorite(owner_id, group.id):
                            continue
                        self._assign_default(owner_id, group.id)
            except GiftCoordinationError as e:
                logger.error(
                    f"Failed to reconcile favorite for user {owner_id} in group {group.id}: {e}"
                )
                failures[group.id] = e
                continue
            logger.warning(f"Healed missing favorite for user {owner_id} in group {group.id}")
            healed.append(group.id)

        if failures:
            raise ReconcileError(owner_id, failures)
        return healed

    # Reads

    def groups_where_favorite(self, owner_id: int, item_id: int) -> list[int]:
        """IDs of the groups where an item is the owner's favorite."""
        return [
            favorite.group_id
            for favorite in self.store.list_favorites(owner_id)
            if favorite.item_id == item_id
        ]

    def get_favorite_for_group(self, owner_id: int, group_id: int) -> Favorite | None:
        """The owner's favorite row in a group, or None."""
        return self.store.get_favorite(owner_id, group_id)

    def list_favorites(self, owner_id: int) -> list[FavoriteView]:
        """All of the owner's favorites with their group names."""
        return [
            FavoriteView(
                group_id=favorite.group_id,
                group_name=favorite.group.name,
                item_id=favorite.item_id,
                item_type=favorite.item.item_type,
                updated_at=favorite.updated_at,
            )
            for favorite in self.store.list_favorites(owner_id)
        ]

    # Helpers

    def _require_active_item(self, owner_id: int, item_id: int) -> Item:
        item = self.store.get_item(item_id)
        if item is None or item.owner_id != owner_id:
            raise ItemNotFoundError(f"Item {item_id} not found for user {owner_id}")
        if not item.is_active:
            raise ItemNotActiveError(f"Item {item_id} is not active")
        return item

    def _displaced_groups(self, owner_id: int, group_id: int, item: Item) -> list[int]:
        """Other groups that lose their favorite if ``item`` moves to ``group_id``."""
        if is_shareable(item.item_type):
            return []
        return [
            other
            for other in self.groups_where_favorite(owner_id, item.id)
            if other != group_id
        ]

    def _assign(self, owner_id: int, group_id: int, item: Item) -> None:
        displaced = self._displaced_groups(owner_id, group_id, item)
        if not is_shareable(item.item_type):
            self.store.delete_favorites(owner_id, item.id, except_group_id=group_id)
        self.store.upsert_favorite(owner_id, group_id, item.id)
        # Groups that lost a standard item fall back to the default
        for other_group_id in displaced:
            self._assign_default(owner_id, other_group_id)
            logger.info(
                f"Item {item.id} moved to group {group_id}; group {other_group_id} "
                f"falls back to default for user {owner_id}"
            )

    def _assign_default(self, owner_id: int, group_id: int) -> Item:
        item = self.ensure_default_item(owner_id)
        self.store.upsert_favorite(owner_id, group_id, item.id)
        return item

    def ensure_default_item(self, owner_id: int) -> Item:
        """Get or create the owner's Surprise Me item and make sure it is active."""
        item = self.store.create_item(
            owner_id,
            ItemType.SURPRISE_ME,
            {"title": self.settings.default_item_title},
        )
        if item.status != ItemStatus.ACTIVE:
            logger.info(f"Reactivating default item {item.id} for user {owner_id}")
            item.status = ItemStatus.ACTIVE
            self.store.add(item)
        return item

    def _has_valid_favorite(self, owner_id: int, group_id: int) -> bool:
        favorite = self.store.get_favorite(owner_id, group_id)
        if favorite is None:
            return False
        item = self.store.get_item(favorite.item_id)
        return item is not None and item.owner_id == owner_id and item.is_active
