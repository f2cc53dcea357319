# ============================================================================
# FILE: mixtape/schemas/history.py
# ============================================================================
from pydantic import BaseModel
from typing import Optional
from datetime import date, datetime
from mixtape.schemas.song import SongResponse

class PlayLog(BaseModel):
    """Schema for logging a play"""
    song_id: int

class HistoryEntryResponse(BaseModel):
    """Per-song entry of the user's listening history"""
    song_id: int
    count: int
    played_at: datetime
    song: Optional[SongResponse] = None
    
    class Config:
        from_attributes = True

class SongPlayCount(BaseModel):
    song_id: int
    plays: int
    song: Optional[SongResponse] = None

class GroupPlayCount(BaseModel):
    """Plays grouped by artist or genre"""
    name: Optional[str] = None
    plays: int

class RecentPlay(BaseModel):
    song_id: int
    played_at: datetime
    song: Optional[SongResponse] = None

class TimelinePoint(BaseModel):
    day: date
    plays: int
