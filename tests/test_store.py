"""Tests for the relational store client."""

from datetime import UTC, datetime
from decimal import Decimal
from unittest.mock import patch

import pytest
from sqlalchemy.exc import OperationalError

from src.models import Favorite, Item
from src.models.enums import ItemStatus, ItemType
from src.services.exceptions import StoreError


def test_singleton_create_returns_existing(db, store, make_user):
    """A duplicate Surprise Me insert yields the original row."""
    user = make_user()

    first = store.create_item(user.id, ItemType.SURPRISE_ME, {"title": "Surprise Me"})
    second = store.create_item(user.id, ItemType.SURPRISE_ME, {"title": "Another"})
    db.commit()

    assert first.id == second.id
    assert second.title == "Surprise Me"
    assert db.query(Item).filter(Item.owner_id == user.id).count() == 1


def test_singleton_is_per_owner_and_kind(db, store, make_user):
    alice = make_user("Alice")
    bob = make_user("Bob")

    a_surprise = store.create_item(alice.id, ItemType.SURPRISE_ME, {"title": "Surprise Me"})
    a_box = store.create_item(alice.id, ItemType.MYSTERY_BOX, {"title": "Mystery Box"})
    b_surprise = store.create_item(bob.id, ItemType.SURPRISE_ME, {"title": "Surprise Me"})

    assert len({a_surprise.id, a_box.id, b_surprise.id}) == 3


def test_singleton_can_be_recreated_after_delete(db, store, make_user):
    """Soft-deleted singletons do not block a new one."""
    user = make_user()
    first = store.create_item(user.id, ItemType.SURPRISE_ME, {"title": "Surprise Me"})
    first.soft_delete()
    store.add(first)

    second = store.create_item(user.id, ItemType.SURPRISE_ME, {"title": "Surprise Me"})

    assert second.id != first.id
    assert store.find_item(user.id, ItemType.SURPRISE_ME).id == second.id


def test_standard_items_are_not_singletons(store, make_user):
    user = make_user()

    first = store.create_item(user.id, ItemType.STANDARD, {"title": "Book"})
    second = store.create_item(user.id, ItemType.STANDARD, {"title": "Book"})

    assert first.id != second.id


def test_upsert_favorite_keeps_one_row(db, store, make_user, make_group, make_item):
    user = make_user()
    group = make_group(user)
    book = make_item(user, "Book")
    lamp = make_item(user, "Lamp")

    store.upsert_favorite(user.id, group.id, book.id)
    store.upsert_favorite(user.id, group.id, lamp.id)
    db.commit()

    rows = db.query(Favorite).filter(Favorite.user_id == user.id).all()
    assert [row.item_id for row in rows] == [lamp.id]


def test_delete_favorites_spares_excepted_group(db, store, make_user, make_group, make_item):
    user = make_user()
    group_a = make_group(user, name="A")
    group_b = make_group(user, name="B")
    box = make_item(user, "Box", item_type=ItemType.MYSTERY_BOX)
    store.upsert_favorite(user.id, group_a.id, box.id)
    store.upsert_favorite(user.id, group_b.id, box.id)

    store.delete_favorites(user.id, box.id, except_group_id=group_b.id)

    assert [f.group_id for f in store.list_favorites(user.id)] == [group_b.id]


def test_list_active_items_order(db, store, make_user, make_item):
    """Priority descending, then creation order; inactive and excluded items left out."""
    user = make_user()
    low = make_item(user, "Low", priority=1)
    high = make_item(user, "High", priority=4)
    tie = make_item(user, "Tie", priority=4)
    claimed = make_item(user, "Claimed", priority=5)
    claimed.status = ItemStatus.CLAIMED
    deleted = make_item(user, "Deleted", priority=5)
    deleted.soft_delete()
    db.commit()

    items = store.list_active_items(user.id, exclude_id=tie.id)

    assert [item.id for item in items] == [high.id, low.id]


def test_list_groups_for_user(store, make_user, make_group):
    user = make_user()
    mine = make_group(user, name="Mine")
    make_group(make_user("Other"), name="Theirs")

    assert [group.id for group in store.list_groups_for_user(user.id)] == [mine.id]


def test_list_celebrations_half_open(store, make_group, add_celebration):
    group = make_group()
    inside = add_celebration(group, datetime(2026, 2, 1, tzinfo=UTC))
    add_celebration(group, datetime(2026, 3, 1, tzinfo=UTC))

    ids = store.list_celebrations(
        group.id, datetime(2026, 2, 1, tzinfo=UTC), datetime(2026, 3, 1, tzinfo=UTC)
    )

    assert ids == [inside.id]


def test_sum_contributions(store, make_group, add_celebration):
    group = make_group()
    first = add_celebration(group, datetime(2026, 2, 1, tzinfo=UTC), "25.50", "0.25")
    second = add_celebration(group, datetime(2026, 2, 2, tzinfo=UTC), "30.00")

    assert store.sum_contributions([first.id, second.id]) == Decimal("55.75")
    assert store.sum_contributions([]) == Decimal("0")


def test_store_errors_are_wrapped(db, store):
    """SQLAlchemy failures surface as StoreError with the cause attached."""
    failure = OperationalError("SELECT 1", {}, Exception("server closed the connection"))

    with patch.object(db, "get", side_effect=failure):
        with pytest.raises(StoreError) as exc_info:
            store.get_group(1)

    assert exc_info.value.cause is failure


def test_transaction_rolls_back_on_error(db, store, make_user):
    user = make_user()

    with pytest.raises(RuntimeError):
        with store.transaction():
            store.create_item(user.id, ItemType.STANDARD, {"title": "Book"})
            raise RuntimeError("boom")

    assert db.query(Item).filter(Item.owner_id == user.id).count() == 0


def test_nested_transaction_commits_once(db, store, make_user):
    user = make_user()

    with patch.object(db, "commit", wraps=db.commit) as commit:
        with store.transaction():
            with store.transaction():
                store.create_item(user.id, ItemType.STANDARD, {"title": "Book"})
            assert commit.call_count == 0

    assert commit.call_count == 1
