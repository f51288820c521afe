"""create gift coordination tables

Revision ID: 4c1e2a9d7b10
Revises:
Create Date: 2026-02-02 18:21:07.412905

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "4c1e2a9d7b10"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
    ]


def upgrade() -> None:
    itemtype_enum = sa.Enum("standard", "surprise_me", "mystery_box", name="itemtype")
    itemstatus_enum = sa.Enum(
        "active", "claimed", "purchased", "received", "archived", name="itemstatus"
    )
    budgetapproach_enum = sa.Enum("per_gift", "monthly", "yearly", name="budgetapproach")

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=True),
        *_timestamps(),
    )
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)

    op.create_table(
        "groups",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("created_by", sa.Integer(), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("budget_approach", budgetapproach_enum, nullable=True),
        sa.Column("budget_amount", sa.Integer(), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "group_members",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("group_id", sa.Integer(), sa.ForeignKey("groups.id"), nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("role", sa.String(length=20), nullable=True),
        sa.Column(
            "joined_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.UniqueConstraint("group_id", "user_id", name="uq_group_members_group_user"),
    )
    op.create_index(op.f("ix_group_members_group_id"), "group_members", ["group_id"])
    op.create_index(op.f("ix_group_members_user_id"), "group_members", ["user_id"])

    op.create_table(
        "wishlist_items",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("owner_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("item_type", itemtype_enum, server_default="standard", nullable=False),
        sa.Column("title", sa.String(length=500), nullable=False),
        sa.Column("priority", sa.Integer(), server_default="0", nullable=False),
        sa.Column("status", itemstatus_enum, server_default="active", nullable=False),
        sa.Column("mystery_box_tier", sa.Integer(), nullable=True),
        sa.Column("surprise_me_budget", sa.Numeric(10, 2), nullable=True),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index(op.f("ix_wishlist_items_owner_id"), "wishlist_items", ["owner_id"])
    op.create_index(op.f("ix_wishlist_items_status"), "wishlist_items", ["status"])

    op.create_table(
        "group_favorites",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("group_id", sa.Integer(), sa.ForeignKey("groups.id"), nullable=False),
        sa.Column("item_id", sa.Integer(), sa.ForeignKey("wishlist_items.id"), nullable=False),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
    )
    op.create_index(op.f("ix_group_favorites_user_id"), "group_favorites", ["user_id"])
    op.create_index(op.f("ix_group_favorites_group_id"), "group_favorites", ["group_id"])
    op.create_index(op.f("ix_group_favorites_item_id"), "group_favorites", ["item_id"])

    op.create_table(
        "celebrations",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("group_id", sa.Integer(), sa.ForeignKey("groups.id"), nullable=False),
        sa.Column("celebrant_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("title", sa.String(length=255), nullable=True),
        *_timestamps(),
    )
    op.create_index(op.f("ix_celebrations_group_id"), "celebrations", ["group_id"])

    op.create_table(
        "celebration_contributions",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "celebration_id", sa.Integer(), sa.ForeignKey("celebrations.id"), nullable=False
        ),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("amount", sa.Numeric(10, 2), nullable=False),
        *_timestamps(),
    )
    op.create_index(
        op.f("ix_celebration_contributions_celebration_id"),
        "celebration_contributions",
        ["celebration_id"],
    )


def downgrade() -> None:
    op.drop_table("celebration_contributions")
    op.drop_table("celebrations")
    op.drop_table("group_favorites")
    op.drop_table("wishlist_items")
    op.drop_table("group_members")
    op.drop_table("groups")
    op.drop_table("users")
    sa.Enum(name="budgetapproach").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="itemstatus").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="itemtype").drop(op.get_bind(), checkfirst=True)
