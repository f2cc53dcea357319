# ============================================================================
# FILE: mixtape/schemas/playlist.py
# ============================================================================
from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
from mixtape.db.models.playlist import Classification
from mixtape.schemas.song import SongResponse

class PlaylistSongIn(BaseModel):
    """One requested playlist entry; order defaults to the list position"""
    song_id: int
    order: Optional[int] = None

class PlaylistCreate(BaseModel):
    """Schema for creating a playlist"""
    name: str = Field(..., min_length=1)
    classification: Classification = Classification.GENERAL
    songs: List[PlaylistSongIn] = []

class PlaylistUpdate(BaseModel):
    """Schema for updating a playlist; songs, when given, replace the whole list"""
    name: Optional[str] = Field(None, min_length=1)
    classification: Optional[Classification] = None
    songs: Optional[List[PlaylistSongIn]] = None

class PlaylistSongsReplace(BaseModel):
    songs: List[PlaylistSongIn]

class PlaylistSongAdd(BaseModel):
    """Schema for adding a song to playlist"""
    song_id: int

class PlaylistSongResponse(BaseModel):
    """Schema for playlist song response"""
    song_id: int
    order: int
    song: Optional[SongResponse] = None
    
    class Config:
        from_attributes = True

class PlaylistResponse(BaseModel):
    """Schema for playlist response"""
    id: int
    name: str
    owner_id: int
    classification: Classification
    total_duration_sec: int
    visible_duration_sec: int = 0
    is_public: bool
    is_active: bool
    created_at: datetime
    updated_at: datetime
    songs: List[PlaylistSongResponse] = []
    
    class Config:
        from_attributes = True
    
    @classmethod
    def from_playlist(cls, playlist) -> "PlaylistResponse":
        """
        Serialize a playlist, hiding entries whose song is gone or restricted
        total_duration_sec is the stored total over every member (hidden ones
        included); visible_duration_sec sums only the entries returned
        """
        entries = [
            PlaylistSongResponse.model_validate(entry)
            for entry in playlist.songs
            if entry.song is not None and not entry.song.restricted
        ]
        return cls(
            id=playlist.id,
            name=playlist.name,
            owner_id=playlist.owner_id,
            classification=playlist.classification,
            total_duration_sec=playlist.total_duration_sec,
            visible_duration_sec=sum(entry.song.duration_sec for entry in entries),
            is_public=playlist.is_public,
            is_active=playlist.is_active,
            created_at=playlist.created_at,
            updated_at=playlist.updated_at,
            songs=entries,
        )
