"""Tests for group membership and budget configuration."""

import pytest
from pydantic import ValidationError

from src.models import Favorite, GroupMember, Item
from src.models.enums import BudgetApproach, GroupRole, ItemType
from src.schemas.group import BudgetConfig, GroupCreate
from src.services.exceptions import GroupNotFoundError, NotMemberError
from src.services.group_service import GroupService


@pytest.fixture
def groups(store, favorites):
    return GroupService(store, favorites)


def test_create_group_assigns_default_favorite(db, groups, make_user):
    """The creator becomes admin and gets Surprise Me as Most Wanted."""
    user = make_user()

    group = groups.create_group(user.id, GroupCreate(name="Cousins"))

    membership = db.query(GroupMember).filter(GroupMember.group_id == group.id).one()
    assert membership.user_id == user.id
    assert membership.role == GroupRole.ADMIN
    favorite = db.query(Favorite).filter(Favorite.group_id == group.id).one()
    assert db.get(Item, favorite.item_id).item_type == ItemType.SURPRISE_ME


def test_create_group_with_budget(groups, make_user):
    user = make_user()
    data = GroupCreate(
        name="Office",
        budget=BudgetConfig(budget_approach=BudgetApproach.MONTHLY, budget_amount=5000),
    )

    group = groups.create_group(user.id, data)

    assert group.budget_approach == BudgetApproach.MONTHLY
    assert group.budget_amount == 5000


def test_join_group_assigns_default(db, groups, favorites, make_user, make_group):
    owner = make_user("Owner")
    joiner = make_user("Joiner")
    group = make_group(owner)

    groups.join_group(joiner.id, group.id)

    assert favorites.get_favorite_for_group(joiner.id, group.id) is not None
    assert (
        db.query(GroupMember)
        .filter(GroupMember.group_id == group.id, GroupMember.user_id == joiner.id)
        .count()
        == 1
    )


def test_rejoin_keeps_existing_favorite(groups, favorites, make_user, make_group, make_item):
    """Joining again neither duplicates the membership nor replaces the favorite."""
    user = make_user()
    group = make_group(user)
    book = make_item(user, "Book")
    favorites.set_favorite(user.id, group.id, book.id)

    groups.join_group(user.id, group.id)

    assert favorites.get_favorite_for_group(user.id, group.id).item_id == book.id


def test_join_missing_group(groups, make_user):
    user = make_user()

    with pytest.raises(GroupNotFoundError):
        groups.join_group(user.id, 999)


def test_leave_group_removes_favorite(db, groups, favorites, make_user, make_group, make_item):
    user = make_user()
    group = make_group(user)
    book = make_item(user, "Book")
    favorites.set_favorite(user.id, group.id, book.id)

    groups.leave_group(user.id, group.id)

    assert favorites.get_favorite_for_group(user.id, group.id) is None
    assert db.query(GroupMember).filter(GroupMember.user_id == user.id).count() == 0


def test_leave_group_not_member(groups, make_user, make_group):
    user = make_user()
    group = make_group()

    with pytest.raises(NotMemberError):
        groups.leave_group(user.id, group.id)


def test_update_budget(groups, make_group):
    group = make_group()

    updated = groups.update_budget(
        group.id, BudgetConfig(budget_approach=BudgetApproach.YEARLY, budget_amount=30000)
    )

    assert updated.budget_approach == BudgetApproach.YEARLY
    assert updated.budget_amount == 30000


def test_clear_budget(groups, make_group):
    group = make_group(approach=BudgetApproach.MONTHLY, amount=5000)

    updated = groups.update_budget(group.id, BudgetConfig())

    assert updated.budget_approach is None
    assert updated.budget_amount is None


class TestBudgetConfig:
    """Validation of budget settings."""

    def test_approach_requires_amount(self):
        with pytest.raises(ValidationError):
            BudgetConfig(budget_approach=BudgetApproach.MONTHLY)

    def test_amount_requires_approach(self):
        with pytest.raises(ValidationError):
            BudgetConfig(budget_amount=5000)

    def test_amount_must_be_positive(self):
        with pytest.raises(ValidationError):
            BudgetConfig(budget_approach=BudgetApproach.PER_GIFT, budget_amount=0)

    def test_accepts_string_approach(self):
        config = BudgetConfig(budget_approach="per_gift", budget_amount=2500)

        assert config.budget_approach == BudgetApproach.PER_GIFT
