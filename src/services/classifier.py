"""Item kind classification for favorite multiplicity rules."""

from src.models.enums import ItemType

# Kinds that may be Most Wanted in many groups at once. These are also the
# kinds an owner can hold at most one live instance of.
SHAREABLE_KINDS = frozenset({ItemType.SURPRISE_ME, ItemType.MYSTERY_BOX})


def is_shareable(kind: ItemType | str) -> bool:
    """Check if an item kind can be favorited in several groups simultaneously."""
    return ItemType(kind) in SHAREABLE_KINDS


def is_singleton(kind: ItemType | str) -> bool:
    """Check if an owner may hold at most one live item of this kind."""
    return ItemType(kind) in SHAREABLE_KINDS
