# ============================================================================
# FILE: mixtape/api/v1/endpoints/playlist.py
# ============================================================================
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List, Optional
from mixtape.api.dependencies import get_current_user, get_db, get_playlist_service, require_current_user
from mixtape.db.models.user import User
from mixtape.schemas.playlist import (
    PlaylistCreate,
    PlaylistResponse,
    PlaylistSongAdd,
    PlaylistSongsReplace,
    PlaylistUpdate,
)
from mixtape.services.playlist_service import PlaylistService
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.post("/", response_model=PlaylistResponse, status_code=status.HTTP_201_CREATED)
async def create_playlist(
    playlist_data: PlaylistCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user),
    service: PlaylistService = Depends(get_playlist_service)
):
    """
    Create a new playlist, optionally with songs
    Requires authentication
    """
    playlist = service.create_playlist(db, current_user, playlist_data)
    return PlaylistResponse.from_playlist(playlist)

@router.get("/mine", response_model=List[PlaylistResponse])
async def get_my_playlists(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user),
    service: PlaylistService = Depends(get_playlist_service)
):
    """
    Get all playlists for the current user
    Requires authentication
    """
    return [PlaylistResponse.from_playlist(p) for p in service.get_user_playlists(db, current_user.id)]

@router.get("/discover", response_model=List[PlaylistResponse])
async def discover_playlists(
    db: Session = Depends(get_db),
    service: PlaylistService = Depends(get_playlist_service)
):
    """
    Public playlists, newest first
    Available to all users (authenticated and anonymous)
    """
    return [PlaylistResponse.from_playlist(p) for p in service.get_public_playlists(db)]

@router.get("/{playlist_id}", response_model=PlaylistResponse)
async def get_playlist(
    playlist_id: int,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_current_user),
    service: PlaylistService = Depends(get_playlist_service)
):
    """
    Get a specific playlist
    Public playlists are open to everyone, private ones to their owner
    """
    playlist = service.get_playlist(db, playlist_id, current_user)
    return PlaylistResponse.from_playlist(playlist)

@router.put("/{playlist_id}", response_model=PlaylistResponse)
async def update_playlist(
    playlist_id: int,
    update_data: PlaylistUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user),
    service: PlaylistService = Depends(get_playlist_service)
):
    """
    Rename, reclassify and/or replace songs
    Requires authentication and ownership
    """
    playlist = service.update_playlist(db, playlist_id, update_data, current_user)
    return PlaylistResponse.from_playlist(playlist)

@router.put("/{playlist_id}/songs", response_model=PlaylistResponse)
async def replace_playlist_songs(
    playlist_id: int,
    songs_data: PlaylistSongsReplace,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user),
    service: PlaylistService = Depends(get_playlist_service)
):
    """
    Replace the whole song list
    Requires authentication and ownership
    """
    playlist = service.replace_songs(db, playlist_id, songs_data.songs, current_user)
    return PlaylistResponse.from_playlist(playlist)

@router.post("/{playlist_id}/songs", response_model=PlaylistResponse)
async def add_song_to_playlist(
    playlist_id: int,
    song_data: PlaylistSongAdd,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user),
    service: PlaylistService = Depends(get_playlist_service)
):
    """
    Add a song to a playlist
    Requires authentication and ownership
    """
    playlist = service.add_song(db, playlist_id, song_data.song_id, current_user)
    return PlaylistResponse.from_playlist(playlist)

@router.delete("/{playlist_id}/songs/{song_id}", response_model=PlaylistResponse)
async def remove_song_from_playlist(
    playlist_id: int,
    song_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user),
    service: PlaylistService = Depends(get_playlist_service)
):
    """
    Remove a song from a playlist
    Requires authentication and ownership
    """
    playlist = service.remove_song(db, playlist_id, song_id, current_user)
    return PlaylistResponse.from_playlist(playlist)

@router.put("/{playlist_id}/publish", response_model=PlaylistResponse)
async def toggle_publish(
    playlist_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user),
    service: PlaylistService = Depends(get_playlist_service)
):
    """
    Make a playlist public or private again
    Admins may toggle any playlist, DJs only their own
    """
    playlist = service.toggle_publish(db, playlist_id, current_user)
    return PlaylistResponse.from_playlist(playlist)

@router.post("/{playlist_id}/clone", response_model=PlaylistResponse, status_code=status.HTTP_201_CREATED)
async def clone_playlist(
    playlist_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user),
    service: PlaylistService = Depends(get_playlist_service)
):
    """
    Copy a public playlist into the current user's account
    Requires authentication
    """
    playlist = service.clone_playlist(db, playlist_id, current_user)
    return PlaylistResponse.from_playlist(playlist)

@router.delete("/{playlist_id}")
async def delete_playlist(
    playlist_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user),
    service: PlaylistService = Depends(get_playlist_service)
):
    """
    Delete a playlist
    Requires authentication and ownership
    """
    service.delete_playlist(db, playlist_id, current_user)
    return {"message": "Playlist deleted successfully"}
