# ============================================================================
# FILE: mixtape/config.py
# ============================================================================
from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    """Application configuration using Pydantic BaseSettings"""
    
    # App settings
    APP_NAME: str = "Mixtape"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    
    # Database
    DATABASE_URL: str = "sqlite:///./mixtape.db"  # Change to PostgreSQL in production
    WRITE_RETRY_ATTEMPTS: int = 3
    
    # Security
    SECRET_KEY: str = "your-secret-key-change-this-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7
    
    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173"]
    
    # Playlist composition
    MIN_PLAYLIST_DURATION_SEC: int = 0
    MAX_PLAYLIST_DURATION_SEC: int = 3 * 60 * 60
    
    # Suggestions
    SUGGESTION_LIMIT: int = 12
    SUGGESTION_TOP_N: int = 3
    SUGGESTION_PREFERENCE_BOOST: float = 2.0
    SUGGESTION_DECAY_DAYS: float = 30.0
    SUGGESTION_MIN_WEIGHT: float = 0.2
    
    # Listings
    SONG_LIST_LIMIT: int = 100
    RECENT_ACTIVITY_LIMIT: int = 20
    
    class Config:
        env_file = ".env"
        case_sensitive = True
