# ============================================================================
# FILE: mixtape/db/models/song.py
# ============================================================================
from sqlalchemy import Column, Integer, String, DateTime, Boolean, JSON
from sqlalchemy.orm import relationship
from mixtape.db.base import Base, utcnow

class Song(Base):
    """Catalog entry; restricted songs are hidden from everyone but admins"""
    __tablename__ = "songs"
    
    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    artist = Column(String, nullable=True, index=True)
    genre = Column(String, nullable=True, index=True)
    year = Column(Integer, nullable=True, index=True)
    duration_sec = Column(Integer, nullable=False)
    classifications = Column(JSON, nullable=False, default=list)
    restricted = Column(Boolean, nullable=False, default=False, index=True)
    audio_url = Column(String, nullable=True)
    cover_url = Column(String, nullable=True)
    created_at = Column(DateTime, default=utcnow)
    
    # Relationships
    playlist_entries = relationship("PlaylistSong", back_populates="song", cascade="all")
    history_entries = relationship("UserHistoryEntry", back_populates="song", cascade="all")
    plays = relationship("PlayHistory", back_populates="song", cascade="all")
