# ============================================================================
# FILE: mixtape/db/models/playlist.py
# ============================================================================
from enum import Enum
from sqlalchemy import Column, Integer, String, DateTime, Boolean, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from mixtape.db.base import Base, utcnow

class Classification(str, Enum):
    """Event type a playlist is built for (informational only)"""
    GENERAL = "general"
    WEDDING = "wedding"
    CORPORATE = "corporate"
    BIRTHDAY = "birthday"
    CLUB = "club"
    CHARITY = "charity"
    CUSTOM = "custom"

class Playlist(Base):
    """Playlist model; total_duration_sec always equals the sum of member song durations"""
    __tablename__ = "playlists"
    
    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    classification = Column(String, nullable=False, default=Classification.GENERAL.value)
    total_duration_sec = Column(Integer, nullable=False, default=0)
    is_public = Column(Boolean, nullable=False, default=False, index=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=utcnow, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)
    version = Column(Integer, nullable=False, default=1)
    
    # Relationships
    owner = relationship("User", back_populates="playlists")
    songs = relationship(
        "PlaylistSong", back_populates="playlist",
        cascade="all, delete-orphan", order_by="PlaylistSong.order"
    )
    
    __mapper_args__ = {"version_id_col": version}

class PlaylistSong(Base):
    """Junction table for playlist songs; a song appears at most once per playlist"""
    __tablename__ = "playlist_songs"
    __table_args__ = (UniqueConstraint("playlist_id", "song_id", name="uq_playlist_song"),)
    
    id = Column(Integer, primary_key=True, index=True)
    playlist_id = Column(Integer, ForeignKey("playlists.id", ondelete="CASCADE"), nullable=False, index=True)
    song_id = Column(Integer, ForeignKey("songs.id", ondelete="CASCADE"), nullable=False)
    order = Column(Integer, nullable=False, default=0)
    added_at = Column(DateTime, default=utcnow)
    
    # Relationships
    playlist = relationship("Playlist", back_populates="songs")
    song = relationship("Song", back_populates="playlist_entries")
