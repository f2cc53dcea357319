# ============================================================================
# FILE: mixtape/api/v1/endpoints/songs.py
# ============================================================================
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
from mixtape.api.dependencies import (
    get_current_user,
    get_db,
    get_song_service,
    get_suggestion_service,
    require_current_user,
)
from mixtape.db.models.user import User
from mixtape.schemas.song import SongCreate, SongResponse, SongUpdate
from mixtape.services.song_service import SongService
from mixtape.services.suggestion_service import SuggestionService
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.get("/", response_model=List[SongResponse])
async def list_songs(
    genre: Optional[str] = Query(None),
    year: Optional[int] = Query(None),
    classification: Optional[str] = Query(None),
    q: Optional[str] = Query(None, description="Title search"),
    restricted: Optional[bool] = Query(None, description="Admin only filter"),
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_current_user),
    service: SongService = Depends(get_song_service)
):
    """
    Browse the catalog
    Restricted songs are only listed for admins
    """
    return service.list_songs(db, current_user, genre, year, classification, q, restricted)

@router.get("/suggest", response_model=List[SongResponse])
async def suggest_songs(
    limit: Optional[int] = Query(None, ge=1, le=100, description="Number of suggestions"),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user),
    service: SuggestionService = Depends(get_suggestion_service)
):
    """
    Personalized suggestions from play history and preferences
    Requires authentication
    """
    return service.suggest(db, current_user.id, limit)

@router.get("/{song_id}", response_model=SongResponse)
async def get_song(
    song_id: int,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_current_user),
    service: SongService = Depends(get_song_service)
):
    return service.get_song(db, song_id, current_user)

@router.post("/", response_model=SongResponse, status_code=status.HTTP_201_CREATED)
async def create_song(
    song_data: SongCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user),
    service: SongService = Depends(get_song_service)
):
    """Admin: add a song"""
    return service.create_song(db, song_data, current_user)

@router.put("/{song_id}", response_model=SongResponse)
async def update_song(
    song_id: int,
    update_data: SongUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user),
    service: SongService = Depends(get_song_service)
):
    """Admin: edit a song"""
    return service.update_song(db, song_id, update_data, current_user)

@router.patch("/{song_id}/toggle", response_model=SongResponse)
async def toggle_restricted(
    song_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user),
    service: SongService = Depends(get_song_service)
):
    """Admin: restrict or unrestrict a song"""
    return service.toggle_restricted(db, song_id, current_user)

@router.delete("/{song_id}")
async def delete_song(
    song_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user),
    service: SongService = Depends(get_song_service)
):
    """Admin: delete a song and drop it from playlists"""
    service.delete_song(db, song_id, current_user)
    return {"message": "Song deleted successfully"}
