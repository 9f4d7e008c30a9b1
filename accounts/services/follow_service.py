"""Follow edges and the follower/following counters they summarize."""

import logging

from sqlalchemy import update
from sqlalchemy.orm import Session

from accounts.database import transaction
from accounts.exceptions import FollowSelfError, UserNotExistError
from accounts.models.follow import Follow
from accounts.models.user import User

logger = logging.getLogger(__name__)


class FollowService:
    """Service keeping follow edges and user counters in step.

    Counters are changed with relative UPDATE statements inside the same
    transaction as the edge, never recomputed from the edge table.
    """

    def __init__(self, db: Session):
        self.db = db

    def follow_user(self, user_id: int, follow_id: int) -> Follow:
        """Make ``user_id`` a follower of ``follow_id``."""
        if user_id == follow_id:
            raise FollowSelfError()

        edge = Follow(user_id=user_id, follow_id=follow_id)
        with transaction(self.db):
            endpoints = {user_id, follow_id}
            if self.db.query(User.id).filter(User.id.in_(endpoints)).count() != len(endpoints):
                raise UserNotExistError()

            self.db.add(edge)
            self.db.flush()
            self._shift_counters(user_id, follow_id, 1)

        logger.info(f"User {user_id} followed user {follow_id}")
        return edge

    def unfollow_user(self, user_id: int, follow_id: int) -> bool:
        """Remove the edge if present; returns whether one was removed."""
        with transaction(self.db):
            removed = (
                self.db.query(Follow)
                .filter(Follow.user_id == user_id, Follow.follow_id == follow_id)
                .delete()
            )
            if removed:
                self._shift_counters(user_id, follow_id, -1)

        if removed:
            logger.info(f"User {user_id} unfollowed user {follow_id}")
        return bool(removed)

    def _shift_counters(self, user_id: int, follow_id: int, delta: int) -> None:
        self.db.execute(
            update(User)
            .where(User.id == follow_id)
            .values(num_followers=User.num_followers + delta)
        )
        self.db.execute(
            update(User)
            .where(User.id == user_id)
            .values(num_followings=User.num_followings + delta)
        )

    def is_following(self, user_id: int, follow_id: int) -> bool:
        return (
            self.db.query(Follow.id)
            .filter(Follow.user_id == user_id, Follow.follow_id == follow_id)
            .first()
            is not None
        )

    def get_followers(self, user_id: int) -> list[User]:
        """Users following ``user_id``."""
        return (
            self.db.query(User)
            .join(Follow, Follow.user_id == User.id)
            .filter(Follow.follow_id == user_id)
            .order_by(User.id)
            .all()
        )

    def get_followings(self, user_id: int) -> list[User]:
        """Users that ``user_id`` follows."""
        return (
            self.db.query(User)
            .join(Follow, Follow.follow_id == User.id)
            .filter(Follow.user_id == user_id)
            .order_by(User.id)
            .all()
        )
