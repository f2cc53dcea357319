# ============================================================================
# FILE: mixtape/schemas/song.py
# ============================================================================
from pydantic import BaseModel, Field
from typing import Optional, List

class SongCreate(BaseModel):
    """Schema for adding a song to the catalog (admin)"""
    title: str = Field(..., min_length=1)
    artist: Optional[str] = None
    genre: Optional[str] = None
    year: Optional[int] = None
    duration_sec: int = Field(..., gt=0)  # Duration in seconds
    classifications: List[str] = []
    restricted: bool = False
    audio_url: Optional[str] = None
    cover_url: Optional[str] = None

class SongUpdate(BaseModel):
    """Schema for a partial catalog update (admin)"""
    title: Optional[str] = Field(None, min_length=1)
    artist: Optional[str] = None
    genre: Optional[str] = None
    year: Optional[int] = None
    duration_sec: Optional[int] = Field(None, gt=0)
    classifications: Optional[List[str]] = None
    restricted: Optional[bool] = None
    audio_url: Optional[str] = None
    cover_url: Optional[str] = None

class SongResponse(BaseModel):
    """Schema for song information"""
    id: int
    title: str
    artist: Optional[str] = None
    genre: Optional[str] = None
    year: Optional[int] = None
    duration_sec: int
    classifications: List[str] = []
    restricted: bool = False
    audio_url: Optional[str] = None
    cover_url: Optional[str] = None
    
    class Config:
        from_attributes = True
