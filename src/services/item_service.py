"""Wishlist item mutations that keep group favorites consistent."""

import logging

from src.config import get_settings
from src.models import Item
from src.models.enums import ItemStatus, ItemType
from src.schemas.item import ItemCreate
from src.services.classifier import is_shareable, is_singleton
from src.services.exceptions import DuplicateSingletonError, ItemNotFoundError
from src.services.favorite_service import FavoriteService
from src.store import Store

logger = logging.getLogger(__name__)


class ItemService:
    """Service for creating, deleting and changing wishlist items."""

    def __init__(self, store: Store, favorites: FavoriteService | None = None):
        self.store = store
        self.favorites = favorites or FavoriteService(store)
        self.settings = get_settings()

    def create_item(self, owner_id: int, data: ItemCreate) -> Item:
        """Create an item, then make sure every group has a favorite.

        Surprise Me and Mystery Box are get-or-create: asking for a second
        one returns the existing item.
        """
        defaults = {
            "title": data.title or self._default_title(data.item_type),
            "priority": data.priority,
            "mystery_box_tier": data.mystery_box_tier,
            "surprise_me_budget": data.surprise_me_budget,
        }
        with self.store.transaction():
            item = self.store.create_item(owner_id, data.item_type, defaults)
        logger.info(f"User {owner_id} created {item.item_type} item {item.id}")

        self.favorites.reconcile_all_group_favorites(owner_id)
        return item

    def delete_item(self, owner_id: int, item_id: int) -> list[int]:
        """Delete an item and promote a replacement wherever it was Most Wanted.

        Returns:
            IDs of the groups that received a new favorite
        """
        item = self._require_item(owner_id, item_id)
        group_ids = self.favorites.groups_where_favorite(owner_id, item_id)

        with self.store.transaction():
            item.soft_delete()
            self.store.add(item)
        logger.info(f"User {owner_id} deleted item {item_id}")

        for group_id in group_ids:
            self.favorites.promote_next_favorite(owner_id, group_id, excluded_item_id=item_id)
        return group_ids

    def change_item_kind(self, owner_id: int, item_id: int, new_kind: ItemType) -> Item:
        """Change an item's kind.

        When a shareable item becomes a standard one while favorited in
        several groups, the most recently chosen favorite is kept and the
        other groups get a promoted replacement.

        Raises:
            DuplicateSingletonError: the owner already has a live item of a
                singleton kind
        """
        item = self._require_item(owner_id, item_id)
        new_kind = ItemType(new_kind)
        if item.item_type == new_kind:
            return item

        if is_singleton(new_kind):
            existing = self.store.find_item(owner_id, new_kind)
            if existing is not None and existing.id != item.id:
                raise DuplicateSingletonError(f"User {owner_id} already has a {new_kind} item")

        with self.store.transaction():
            item.item_type = new_kind
            self.store.add(item)
        logger.info(f"Item {item_id} of user {owner_id} changed kind to {new_kind}")

        if not is_shareable(new_kind):
            favorites = sorted(
                (f for f in self.store.list_favorites(owner_id) if f.item_id == item_id),
                key=lambda f: f.updated_at,
                reverse=True,
            )
            for favorite in favorites[1:]:
                self.favorites.promote_next_favorite(
                    owner_id, favorite.group_id, excluded_item_id=item_id
                )
        return item

    def update_priority(self, owner_id: int, item_id: int, priority: int) -> Item:
        """Set an item's priority (used for promotion ordering)."""
        item = self._require_item(owner_id, item_id)
        with self.store.transaction():
            item.priority = priority
            self.store.add(item)
        return item

    def update_status(self, owner_id: int, item_id: int, status: ItemStatus) -> Item:
        """Set an item's status; an item leaving ``active`` stops being Most Wanted."""
        item = self._require_item(owner_id, item_id)
        status = ItemStatus(status)
        with self.store.transaction():
            item.status = status
            self.store.add(item)

        if status != ItemStatus.ACTIVE:
            for group_id in self.favorites.groups_where_favorite(owner_id, item_id):
                self.favorites.promote_next_favorite(owner_id, group_id, excluded_item_id=item_id)
        return item

    def _require_item(self, owner_id: int, item_id: int) -> Item:
        item = self.store.get_item(item_id)
        if item is None or item.owner_id != owner_id or item.is_deleted:
            raise ItemNotFoundError(f"Item {item_id} not found for user {owner_id}")
        return item

    def _default_title(self, kind: ItemType) -> str:
        if kind == ItemType.MYSTERY_BOX:
            return self.settings.mystery_box_title
        return self.settings.default_item_title
