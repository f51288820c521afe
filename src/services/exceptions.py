"""
Domain-specific exceptions for gift coordination.

Optional lookups return None instead of raising; these exceptions cover
required records that are missing, rule violations, and store failures.
"""


class GiftCoordinationError(Exception):
    """Base exception for all gift coordination errors."""
    pass


class StoreError(GiftCoordinationError):
    """Raised when the relational store fails a read or write."""

    def __init__(self, message: str, cause: Exception | None = None):
        super().__init__(message)
        self.cause = cause


class ItemNotFoundError(GiftCoordinationError):
    """Raised when an item does not exist or belongs to someone else."""
    pass


class ItemNotActiveError(GiftCoordinationError):
    """Raised when an inactive item is used as a favorite."""
    pass


class DuplicateSingletonError(GiftCoordinationError):
    """Raised when a second live Surprise Me or Mystery Box would be created."""
    pass


class GroupNotFoundError(GiftCoordinationError):
    """Raised when a group does not exist."""
    pass


class NotMemberError(GiftCoordinationError):
    """Raised when a user acts on a group they do not belong to."""
    pass


class ReconcileError(GiftCoordinationError):
    """Raised when reconciling favorites failed for one or more groups."""

    def __init__(self, user_id: int, failures: dict[int, Exception]):
        groups = ", ".join(str(group_id) for group_id in sorted(failures))
        super().__init__(f"Failed to reconcile favorites for user {user_id} in groups: {groups}")
        self.user_id = user_id
        self.failures = failures
