# ============================================================================
# FILE: mixtape/services/user_service.py
# ============================================================================
from typing import List, Optional
from sqlalchemy.orm import Session
from mixtape.config import Settings
from mixtape.core.exceptions import ConflictError, ForbiddenError, NotAuthenticatedError, NotFoundError
from mixtape.core import permissions
from mixtape.core.permissions import Role
from mixtape.core.security import create_access_token, get_password_hash, verify_password
from mixtape.db.models.user import User, UserHistoryEntry
from mixtape.db.transaction import run_in_transaction
from mixtape.schemas.user import Preferences, UserCreate
import logging

logger = logging.getLogger(__name__)

class UserService:
    """Service layer for user operations"""

    def __init__(self, settings: Settings):
        self.settings = settings

    def create_user(self, db: Session, user_data: UserCreate, role: Role = Role.USER) -> User:
        """Create a new user account"""
        if self.get_user_by_username(db, user_data.username):
            raise ConflictError("Username already exists")

        def operation():
            user = User(
                username=user_data.username,
                password_hash=get_password_hash(user_data.password),
                role=role.value,
                preferred_genres=[],
                preferred_bands=[],
                preferred_years=[],
            )
            db.add(user)
            db.flush()
            logger.info(f"User created: {user.username} ({user.role})")
            return user

        return run_in_transaction(
            db, operation, self.settings.WRITE_RETRY_ATTEMPTS, "create user",
            integrity_message="Username already exists",
        )

    def get_user(self, db: Session, user_id: int) -> User:
        user = db.get(User, user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    def get_user_by_username(self, db: Session, username: str) -> Optional[User]:
        """Get user by username"""
        return db.query(User).filter(User.username == username).first()

    def authenticate_user(self, db: Session, username: str, password: str) -> User:
        """Check credentials; deactivated accounts cannot log in"""
        user = self.get_user_by_username(db, username)
        if not user:
            raise NotFoundError("User")
        if not verify_password(password, user.password_hash):
            logger.warning(f"Failed login for {username}")
            raise NotAuthenticatedError("Invalid credentials")
        if not user.is_active:
            raise ForbiddenError("Account is deactivated")
        return user

    def issue_token(self, user: User) -> str:
        return create_access_token(self.settings, {"sub": str(user.id), "role": user.role})

    # ------------------------------------------------------------------
    # preferences and history
    # ------------------------------------------------------------------

    def get_preferences(self, db: Session, user_id: int) -> Preferences:
        return Preferences(**self.get_user(db, user_id).preferences)

    def update_preferences(self, db: Session, user_id: int, preferences: Preferences) -> Preferences:
        """Replace the stated preferences"""
        def operation():
            user = self.get_user(db, user_id)
            user.preferred_genres = list(preferences.genres)
            user.preferred_bands = list(preferences.bands)
            user.preferred_years = list(preferences.years)
            logger.info(f"Preferences updated for user {user_id}")
            return Preferences(**user.preferences)

        return run_in_transaction(db, operation, self.settings.WRITE_RETRY_ATTEMPTS, "update preferences")

    def get_history(self, db: Session, user_id: int) -> List[UserHistoryEntry]:
        """Per-song history, most recently played first"""
        return (
            db.query(UserHistoryEntry)
            .filter(UserHistoryEntry.user_id == user_id)
            .order_by(UserHistoryEntry.played_at.desc(), UserHistoryEntry.id.desc())
            .all()
        )

    # ------------------------------------------------------------------
    # administration
    # ------------------------------------------------------------------

    def list_users(self, db: Session, actor: User) -> List[User]:
        permissions.ensure_administrator(actor.role)
        return db.query(User).order_by(User.id).all()

    def toggle_active(self, db: Session, user_id: int, actor: User) -> User:
        """Activate or deactivate an account (admin)"""
        permissions.ensure_administrator(actor.role)

        def operation():
            user = self.get_user(db, user_id)
            user.is_active = not user.is_active
            logger.info(f"User {user_id} {'activated' if user.is_active else 'deactivated'}")
            return user

        return run_in_transaction(db, operation, self.settings.WRITE_RETRY_ATTEMPTS, "toggle user")

    def set_role(self, db: Session, user_id: int, role: Role, actor: User) -> User:
        """Change an account's role (admin)"""
        permissions.ensure_administrator(actor.role)

        def operation():
            user = self.get_user(db, user_id)
            user.role = role.value
            logger.info(f"User {user_id} is now {role.value}")
            return user

        return run_in_transaction(db, operation, self.settings.WRITE_RETRY_ATTEMPTS, "set role")

    def delete_user(self, db: Session, user_id: int, actor: User) -> None:
        """Hard-delete an account with its playlists and history (admin)"""
        permissions.ensure_administrator(actor.role)

        def operation():
            user = self.get_user(db, user_id)
            db.delete(user)
            logger.info(f"User deleted: {user_id}")

        run_in_transaction(db, operation, self.settings.WRITE_RETRY_ATTEMPTS, "delete user")
