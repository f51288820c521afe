"""Celery tasks for healing favorite drift."""

import logging

from sqlalchemy.orm import Session

from src.celery_app import app as celery_app
from src.database import SessionLocal
from src.models import GroupMember
from src.services.exceptions import ReconcileError, StoreError
from src.services.favorite_service import FavoriteService
from src.store import Store

logger = logging.getLogger(__name__)


@celery_app.task(bind=True, max_retries=3)
def reconcile_user_favorites(self, user_id: int) -> dict:
    """Make sure every group the user belongs to has a favorite.

    Queued on session start and after joining a group.

    Args:
        user_id: The user whose favorites to reconcile

    Returns:
        dict with the healed group IDs
    """
    db: Session = SessionLocal()
    try:
        healed = FavoriteService(Store(db)).reconcile_all_group_favorites(user_id)
        return {"user_id": user_id, "healed_groups": healed}
    except (ReconcileError, StoreError) as e:
        logger.error(f"Favorite reconcile failed for user {user_id}: {e}")
        raise self.retry(exc=e, countdown=30) from e
    finally:
        db.close()


@celery_app.task
def reconcile_all_favorites() -> dict:
    """Queue a reconcile for every user with at least one membership.

    This task runs hourly via celery-beat.
    """
    db: Session = SessionLocal()
    try:
        user_ids = [row.user_id for row in db.query(GroupMember.user_id).distinct().all()]
    finally:
        db.close()

    for user_id in user_ids:
        reconcile_user_favorites.delay(user_id)
    logger.info(f"Queued favorite reconcile for {len(user_ids)} users")
    return {"queued": len(user_ids)}
