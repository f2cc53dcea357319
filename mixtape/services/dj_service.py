# ============================================================================
# FILE: mixtape/services/dj_service.py
# ============================================================================
from typing import List, Tuple
from sqlalchemy.orm import Session
from mixtape.config import Settings
from mixtape.core.exceptions import ForbiddenError, NotFoundError
from mixtape.core import permissions
from mixtape.db.models.dj import DjProfile
from mixtape.db.models.playlist import Playlist
from mixtape.db.models.user import User
from mixtape.db.transaction import run_in_transaction
from mixtape.schemas.dj import DjProfileUpdate
import logging

logger = logging.getLogger(__name__)

class DjService:
    """Public DJ profiles"""

    def __init__(self, settings: Settings):
        self.settings = settings

    def save_profile(self, db: Session, actor: User, profile_data: DjProfileUpdate) -> Tuple[DjProfile, bool]:
        """
        Create or update the caller's profile
        Returns (profile, created)
        """
        if not permissions.can_have_dj_profile(actor.role):
            raise ForbiddenError("Only DJs can have a profile")
        if profile_data.is_featured is not None and not permissions.is_administrator(actor.role):
            raise ForbiddenError("Only admins can feature a DJ")

        def operation():
            profile = db.query(DjProfile).filter(DjProfile.user_id == actor.id).first()
            created = profile is None
            if created:
                profile = DjProfile(user_id=actor.id, user=db.get(User, actor.id), is_featured=False)
                db.add(profile)
            profile.display_name = profile_data.display_name
            profile.bio = profile_data.bio
            profile.classifications = list(profile_data.classifications)
            if profile_data.is_featured is not None:
                profile.is_featured = profile_data.is_featured
            db.flush()
            logger.info(f"DJ profile {'created' if created else 'updated'} for user {actor.id}")
            return profile, created

        return run_in_transaction(
            db, operation, self.settings.WRITE_RETRY_ATTEMPTS, "save dj profile",
            integrity_message="DJ profile already exists",
        )

    def list_profiles(self, db: Session) -> List[DjProfile]:
        """Featured DJs first, then by name"""
        return (
            db.query(DjProfile)
            .order_by(DjProfile.is_featured.desc(), DjProfile.display_name, DjProfile.id)
            .all()
        )

    def get_profile(self, db: Session, profile_id: int) -> Tuple[DjProfile, List[Playlist]]:
        """Profile plus the DJ's public playlists, newest first"""
        profile = db.get(DjProfile, profile_id)
        if profile is None:
            raise NotFoundError("DJ", profile_id)
        playlists = (
            db.query(Playlist)
            .filter(Playlist.owner_id == profile.user_id, Playlist.is_public.is_(True))
            .order_by(Playlist.created_at.desc(), Playlist.id.desc())
            .all()
        )
        return profile, playlists
