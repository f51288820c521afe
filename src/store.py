"""Relational store client used by the favorite and budget engines.

Wraps a SQLAlchemy session with the row-level operations the engines need.
Uniqueness is enforced by the database: favorites are written with
``INSERT ... ON CONFLICT DO UPDATE`` and singleton items with
``INSERT ... ON CONFLICT DO NOTHING`` followed by a fetch, so concurrent
callers never create duplicate rows.

Lookups return ``None`` for absent rows. Any SQLAlchemy failure is raised
as :class:`StoreError` with the original exception as ``cause``.
"""

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import datetime
from decimal import Decimal
from functools import wraps
from typing import Any

from sqlalchemy import delete
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.models import Celebration, Contribution, Favorite, Group, GroupMember, Item
from src.models.enums import ItemStatus, ItemType
from src.models.item import SINGLETON_INDEX_WHERE
from src.models.mixins import utc_now
from src.services.classifier import is_singleton
from src.services.exceptions import StoreError

logger = logging.getLogger(__name__)


def _store_call(func: Callable) -> Callable:
    """Translate SQLAlchemy failures into StoreError."""

    @wraps(func)
    def wrapper(self: "Store", *args, **kwargs):
        try:
            return func(self, *args, **kwargs)
        except SQLAlchemyError as e:
            logger.error(f"Store call {func.__name__} failed: {e}")
            if self._depth == 0:
                self.db.rollback()
            raise StoreError(f"{func.__name__} failed: {e}", cause=e) from e

    return wrapper


class Store:
    """Row CRUD and filtered reads over the gift coordination tables."""

    def __init__(self, db: Session):
        self.db = db
        self._depth = 0

    @contextmanager
    def transaction(self) -> Iterator["Store"]:
        """Run the enclosed calls in one transaction.

        Nested blocks join the outermost one; only the outermost block
        commits. Any exception rolls everything back and propagates.
        """
        self._depth += 1
        try:
            yield self
            if self._depth == 1:
                self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreError(f"Transaction failed: {e}", cause=e) from e
        except Exception:
            self.db.rollback()
            raise
        finally:
            self._depth -= 1

    def _insert(self, model: Any):
        dialect = self.db.get_bind().dialect.name
        if dialect == "postgresql":
            return pg_insert(model)
        if dialect == "sqlite":
            return sqlite_insert(model)
        raise StoreError(f"Upsert is not supported on dialect '{dialect}'")

    def _write(self, statement) -> None:
        """Execute a Core write and drop stale ORM state."""
        self.db.flush()
        self.db.execute(statement)
        self.db.expire_all()

    # Items

    @_store_call
    def get_item(self, item_id: int) -> Item | None:
        return self.db.get(Item, item_id)

    @_store_call
    def find_item(self, owner_id: int, kind: ItemType) -> Item | None:
        """Get the owner's live item of a kind (singleton lookup)."""
        return (
            self.db.query(Item)
            .filter(
                Item.owner_id == owner_id,
                Item.item_type == kind,
                Item.deleted_at.is_(None),
            )
            .order_by(Item.id.asc())
            .first()
        )

    @_store_call
    def create_item(self, owner_id: int, kind: ItemType, defaults: dict[str, Any]) -> Item:
        """Create an item; singleton kinds return the existing row if present."""
        if not is_singleton(kind):
            item = Item(owner_id=owner_id, item_type=kind, **defaults)
            self.db.add(item)
            self.db.flush()
            return item

        now = utc_now()
        values = {
            "owner_id": owner_id,
            "item_type": kind,
            "status": ItemStatus.ACTIVE,
            "priority": 0,
            "created_at": now,
            "updated_at": now,
            **defaults,
        }
        statement = (
            self._insert(Item)
            .values(**values)
            .on_conflict_do_nothing(
                index_elements=["owner_id", "item_type"],
                index_where=SINGLETON_INDEX_WHERE,
            )
        )
        self._write(statement)
        item = self.find_item(owner_id, kind)
        if item is None:
            raise StoreError(f"Singleton {kind} for user {owner_id} vanished after insert")
        return item

    @_store_call
    def list_active_items(self, owner_id: int, exclude_id: int | None = None) -> list[Item]:
        """Owner's active items, highest priority first, then oldest first."""
        query = self.db.query(Item).filter(
            Item.owner_id == owner_id,
            Item.status == ItemStatus.ACTIVE,
            Item.deleted_at.is_(None),
        )
        if exclude_id is not None:
            query = query.filter(Item.id != exclude_id)
        return query.order_by(Item.priority.desc(), Item.created_at.asc(), Item.id.asc()).all()

    @_store_call
    def add(self, instance: Any) -> Any:
        """Persist a new or modified ORM instance within the current transaction."""
        self.db.add(instance)
        self.db.flush()
        return instance

    # Favorites

    @_store_call
    def upsert_favorite(self, owner_id: int, group_id: int, item_id: int) -> None:
        statement = self._insert(Favorite).values(
            user_id=owner_id,
            group_id=group_id,
            item_id=item_id,
            updated_at=utc_now(),
        )
        excluded = statement.excluded
        statement = statement.on_conflict_do_update(
            index_elements=["user_id", "group_id"],
            set_={"item_id": excluded.item_id, "updated_at": excluded.updated_at},
            where=Favorite.__table__.c.item_id != excluded.item_id,
        )
        self._write(statement)

    @_store_call
    def delete_favorites(self, owner_id: int, item_id: int, except_group_id: int | None) -> None:
        """Delete the owner's favorites pointing at an item, except in one group."""
        statement = delete(Favorite).where(
            Favorite.user_id == owner_id,
            Favorite.item_id == item_id,
        )
        if except_group_id is not None:
            statement = statement.where(Favorite.group_id != except_group_id)
        self._write(statement)

    @_store_call
    def delete_favorite(self, owner_id: int, group_id: int) -> None:
        self._write(
            delete(Favorite).where(Favorite.user_id == owner_id, Favorite.group_id == group_id)
        )

    @_store_call
    def get_favorite(self, owner_id: int, group_id: int) -> Favorite | None:
        return (
            self.db.query(Favorite)
            .filter(Favorite.user_id == owner_id, Favorite.group_id == group_id)
            .first()
        )

    @_store_call
    def list_favorites(self, owner_id: int) -> list[Favorite]:
        return (
            self.db.query(Favorite)
            .filter(Favorite.user_id == owner_id)
            .order_by(Favorite.group_id.asc())
            .all()
        )

    # Groups

    @_store_call
    def get_group(self, group_id: int) -> Group | None:
        return self.db.get(Group, group_id)

    @_store_call
    def list_groups_for_user(self, owner_id: int) -> list[Group]:
        return (
            self.db.query(Group)
            .join(GroupMember, GroupMember.group_id == Group.id)
            .filter(GroupMember.user_id == owner_id)
            .order_by(Group.id.asc())
            .all()
        )

    @_store_call
    def get_membership(self, user_id: int, group_id: int) -> GroupMember | None:
        return (
            self.db.query(GroupMember)
            .filter(GroupMember.user_id == user_id, GroupMember.group_id == group_id)
            .first()
        )

    @_store_call
    def add_membership(self, user_id: int, group_id: int, role: str) -> None:
        """Insert a membership row; joining twice is a no-op."""
        statement = (
            self._insert(GroupMember)
            .values(group_id=group_id, user_id=user_id, role=role, joined_at=utc_now())
            .on_conflict_do_nothing(index_elements=["group_id", "user_id"])
        )
        self._write(statement)

    @_store_call
    def delete_membership(self, user_id: int, group_id: int) -> None:
        self._write(
            delete(GroupMember).where(
                GroupMember.user_id == user_id, GroupMember.group_id == group_id
            )
        )

    # Celebrations and contributions

    @_store_call
    def list_celebrations(self, group_id: int, start: datetime, end: datetime) -> list[int]:
        """IDs of the group's celebrations created in [start, end)."""
        rows = (
            self.db.query(Celebration.id)
            .filter(
                Celebration.group_id == group_id,
                Celebration.created_at >= start,
                Celebration.created_at < end,
            )
            .all()
        )
        return [row.id for row in rows]

    @_store_call
    def sum_contributions(self, celebration_ids: list[int]) -> Decimal:
        """Exact decimal sum of contribution amounts for the celebrations."""
        if not celebration_ids:
            return Decimal("0")
        rows = (
            self.db.query(Contribution.amount)
            .filter(Contribution.celebration_id.in_(celebration_ids))
            .all()
        )
        return sum((Decimal(str(row.amount)) for row in rows), Decimal("0"))
