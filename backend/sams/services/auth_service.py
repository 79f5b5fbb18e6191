"""Authentication service for user management."""
import logging
from datetime import datetime
from typing import Optional, Tuple

from sqlalchemy.exc import IntegrityError

from sams import db
from sams.models.activity import Activity
from sams.models.user import User
from sams.schemas.auth import UserCreate, UserUpdate
from sams.utils.exceptions import ConflictError

logger = logging.getLogger(__name__)


class AuthService:

    @staticmethod
    def login(username: str, password: str) -> Tuple[Optional[User], Optional[str]]:
        """Authenticate a user; returns (user, None) or (None, error)."""
        user = User.query.filter_by(username=username).first()

        if not user or not user.check_password(password):
            logger.info("Failed login for username %r", username)
            return None, "Invalid username or password"

        if not user.is_active:
            return None, "Account is deactivated"

        user.last_login = datetime.utcnow()
        Activity.log(user.id, 'Login', f'User {user.username} logged in')
        db.session.commit()

        logger.info("User %s logged in", user.username)
        return user, None

    @staticmethod
    def logout(user_id: int) -> None:
        Activity.log(user_id, 'Logout', 'User logged out')
        db.session.commit()

    @staticmethod
    def user_exists(user_id: int) -> bool:
        return db.session.get(User, user_id) is not None

    @staticmethod
    def create_user(payload: UserCreate) -> User:
        """Create a user from a validated payload; raises ConflictError on duplicates."""
        user = User(
            username=payload.username,
            first_name=payload.first_name,
            last_name=payload.last_name,
            email=payload.email.lower(),
            role=payload.role,
            student_id=payload.student_id
        )
        user.set_password(payload.password)

        db.session.add(user)
        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            raise ConflictError("Username, email or student ID already exists")

        return user

    @staticmethod
    def update_user(user: User, payload: UserUpdate) -> User:
        changes = payload.changes()
        if 'email' in changes and changes['email']:
            changes['email'] = changes['email'].lower()

        try:
            user.update(**changes)
        except IntegrityError:
            db.session.rollback()
            raise ConflictError("Email or student ID already exists")

        return user
