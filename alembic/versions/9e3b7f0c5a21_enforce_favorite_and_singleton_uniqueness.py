"""enforce favorite and singleton uniqueness

Revision ID: 9e3b7f0c5a21
Revises: 4c1e2a9d7b10
Create Date: 2026-02-09 11:04:52.918334

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "9e3b7f0c5a21"
down_revision: str | None = "4c1e2a9d7b10"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

SINGLETON_WHERE = sa.text("item_type != 'standard' AND deleted_at IS NULL")


def upgrade() -> None:
    # Keep the newest favorite per (user, group) before adding the constraint
    op.execute(
        """
        DELETE FROM group_favorites
        WHERE id NOT IN (
            SELECT MAX(id) FROM group_favorites GROUP BY user_id, group_id
        )
        """
    )
    op.create_unique_constraint(
        "uq_group_favorites_user_group", "group_favorites", ["user_id", "group_id"]
    )

    # Soft-delete duplicate live Surprise Me / Mystery Box rows, keeping the oldest
    op.execute(
        """
        UPDATE wishlist_items SET deleted_at = now()
        WHERE item_type != 'standard'
          AND deleted_at IS NULL
          AND id NOT IN (
              SELECT MIN(id) FROM wishlist_items
              WHERE item_type != 'standard' AND deleted_at IS NULL
              GROUP BY owner_id, item_type
          )
        """
    )
    op.create_index(
        "uq_wishlist_items_owner_singleton",
        "wishlist_items",
        ["owner_id", "item_type"],
        unique=True,
        postgresql_where=SINGLETON_WHERE,
    )


def downgrade() -> None:
    op.drop_index("uq_wishlist_items_owner_singleton", table_name="wishlist_items")
    op.drop_constraint("uq_group_favorites_user_group", "group_favorites", type_="unique")
