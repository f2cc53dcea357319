# ============================================================================
# FILE: mixtape/api/dependencies.py
# ============================================================================
from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from typing import Iterator, Optional
from mixtape.config import Settings
from mixtape.core.exceptions import ForbiddenError, NotAuthenticatedError
from mixtape.core.security import decode_access_token
from mixtape.db.models.user import User
from mixtape.services.dj_service import DjService
from mixtape.services.playlist_service import PlaylistService
from mixtape.services.song_service import SongService
from mixtape.services.stats_service import StatsService
from mixtape.services.suggestion_service import SuggestionService
from mixtape.services.user_service import UserService

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/user/login", auto_error=False)

def get_settings(request: Request) -> Settings:
    return request.app.state.settings

def get_db(request: Request) -> Iterator[Session]:
    """One session per request, always closed"""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()

def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings)
) -> Optional[User]:
    """
    Get current authenticated user from JWT token
    Returns None if no token or invalid token (allows anonymous access)
    Deactivated accounts are rejected outright
    """
    if not token:
        return None
    
    try:
        payload = decode_access_token(settings, token)
        user_id = int(payload.get("sub"))
    except (NotAuthenticatedError, TypeError, ValueError):
        return None
    
    user = db.get(User, user_id)
    if user is not None and not user.is_active:
        raise ForbiddenError("Account is deactivated")
    return user

def require_current_user(
    current_user: Optional[User] = Depends(get_current_user)
) -> User:
    """
    Require authenticated user (raises 401 if not authenticated)
    Use this dependency for protected endpoints
    """
    if current_user is None:
        raise NotAuthenticatedError("Not authenticated")
    return current_user

def get_user_service(settings: Settings = Depends(get_settings)) -> UserService:
    return UserService(settings)

def get_song_service(settings: Settings = Depends(get_settings)) -> SongService:
    return SongService(settings)

def get_suggestion_service(settings: Settings = Depends(get_settings)) -> SuggestionService:
    return SuggestionService(settings)

def get_playlist_service(settings: Settings = Depends(get_settings)) -> PlaylistService:
    return PlaylistService(settings)

def get_stats_service(settings: Settings = Depends(get_settings)) -> StatsService:
    return StatsService(settings)

def get_dj_service(settings: Settings = Depends(get_settings)) -> DjService:
    return DjService(settings)
