"""Celery tasks for account housekeeping."""

import logging

from sqlalchemy.orm import Session

from accounts.celery_app import app as celery_app
from accounts.database import SessionLocal
from accounts.services.user_service import UserService

logger = logging.getLogger(__name__)


@celery_app.task(name="accounts.tasks.cleanup.delete_inactive_users")
def delete_inactive_users() -> dict:
    """Remove accounts that were never activated.

    Runs daily via celery-beat.

    Returns:
        dict with the number of deleted users
    """
    db: Session = SessionLocal()
    try:
        deleted = UserService(db).delete_inactive_users()
        logger.info(f"Inactive user cleanup removed {deleted} users")
        return {"deleted_users": deleted}
    finally:
        db.close()
