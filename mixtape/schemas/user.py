# ============================================================================
# FILE: mixtape/schemas/user.py
# ============================================================================
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import datetime
from mixtape.core.permissions import Role

class UserCreate(BaseModel):
    """Schema for user registration"""
    username: str = Field(..., min_length=3, max_length=64)
    password: str = Field(..., min_length=6)

class UserResponse(BaseModel):
    """Schema for user response"""
    id: int
    username: str
    role: Role
    is_active: bool
    created_at: datetime
    
    class Config:
        from_attributes = True

class Token(BaseModel):
    """Schema for JWT token response"""
    access_token: str
    token_type: str = "bearer"
    username: Optional[str] = None
    role: Optional[Role] = None

class RoleUpdate(BaseModel):
    role: Role

def _unique(values: list) -> list:
    return list(dict.fromkeys(values))

class Preferences(BaseModel):
    """
    Stated listening preferences
    Non-list input becomes an empty list; duplicates are dropped keeping first occurrence
    """
    genres: List[str] = []
    bands: List[str] = []
    years: List[int] = []
    
    @field_validator("genres", "bands", "years", mode="before")
    @classmethod
    def coerce_list(cls, value):
        if not isinstance(value, (list, tuple)):
            return []
        return list(value)
    
    @field_validator("genres", "bands", "years")
    @classmethod
    def drop_duplicates(cls, value):
        return _unique(value)
