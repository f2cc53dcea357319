# ============================================================================
# FILE: mixtape/schemas/dj.py
# ============================================================================
from pydantic import BaseModel, Field
from typing import Optional, List
from mixtape.schemas.playlist import PlaylistResponse

class DjProfileUpdate(BaseModel):
    """Schema for creating or editing the caller's DJ profile"""
    display_name: str = Field(..., min_length=1)
    bio: Optional[str] = None
    classifications: List[str] = []
    is_featured: Optional[bool] = None

class DjProfileResponse(BaseModel):
    id: int
    user_id: int
    display_name: str
    bio: Optional[str] = None
    classifications: List[str] = []
    is_featured: bool
    
    class Config:
        from_attributes = True

class DjDetailResponse(BaseModel):
    """Public DJ page: profile plus that DJ's public playlists"""
    profile: DjProfileResponse
    playlists: List[PlaylistResponse] = []
