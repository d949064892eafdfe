"""
User registration and goal weight.
"""
import logging
from numbers import Real
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .. import models
from ..auth import get_password_hash
from ..exceptions import AuthError, UsernameTakenError, ValidationError

logger = logging.getLogger(__name__)


def register_user(db: Session, username: str, password: str, name: str) -> models.User:
    """Create a user with a hashed password. Usernames are unique."""
    existing_user = db.query(models.User).filter(models.User.username == username).first()
    if existing_user:
        raise UsernameTakenError(username)

    db_user = models.User(
        username=username,
        password=get_password_hash(password),
        name=name,
    )
    db.add(db_user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration of the same name
        db.rollback()
        raise UsernameTakenError(username)
    db.refresh(db_user)

    logger.info("Registered user %s (id=%s)", username, db_user.id)
    return db_user


def _get_user(db: Session, user_id: int) -> models.User:
    user = db.query(models.User).filter(models.User.id == user_id).first()
    if not user:
        # Valid session for a user that no longer exists
        raise AuthError("User not found")
    return user


def get_goal(db: Session, user_id: int) -> Optional[float]:
    return _get_user(db, user_id).goal_weight


def set_goal(db: Session, user_id: int, goal_weight: Optional[float]) -> Optional[float]:
    """Set the goal weight in kg, or clear it with None."""
    if goal_weight is not None:
        if isinstance(goal_weight, bool) or not isinstance(goal_weight, Real) or goal_weight <= 0:
            raise ValidationError("Invalid goal weight")

    user = _get_user(db, user_id)
    user.goal_weight = float(goal_weight) if goal_weight is not None else None
    db.commit()
    return user.goal_weight
