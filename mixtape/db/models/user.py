# ============================================================================
# FILE: mixtape/db/models/user.py
# ============================================================================
from sqlalchemy import Column, Integer, String, DateTime, Boolean, ForeignKey, JSON, UniqueConstraint
from sqlalchemy.orm import relationship
from mixtape.db.base import Base, utcnow

class User(Base):
    """User model for authentication, preferences and the per-song play cache"""
    __tablename__ = "users"
    
    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    role = Column(String, nullable=False, default="user")
    is_active = Column(Boolean, nullable=False, default=True)
    preferred_genres = Column(JSON, nullable=False, default=list)
    preferred_bands = Column(JSON, nullable=False, default=list)
    preferred_years = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)
    version = Column(Integer, nullable=False, default=1)
    
    # Relationships
    history = relationship(
        "UserHistoryEntry", back_populates="user",
        cascade="all, delete-orphan", order_by="UserHistoryEntry.id"
    )
    playlists = relationship("Playlist", back_populates="owner", cascade="all, delete-orphan")
    plays = relationship("PlayHistory", back_populates="user", cascade="all, delete-orphan")
    dj_profile = relationship("DjProfile", back_populates="user", uselist=False, cascade="all, delete-orphan")
    
    __mapper_args__ = {"version_id_col": version}
    
    @property
    def preferences(self) -> dict:
        return {
            "genres": list(self.preferred_genres or []),
            "bands": list(self.preferred_bands or []),
            "years": list(self.preferred_years or []),
        }

class UserHistoryEntry(Base):
    """One row per (user, song): play count and last play time"""
    __tablename__ = "user_history"
    __table_args__ = (UniqueConstraint("user_id", "song_id", name="uq_user_history_song"),)
    
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    song_id = Column(Integer, ForeignKey("songs.id", ondelete="CASCADE"), nullable=False)
    count = Column(Integer, nullable=False, default=1)
    played_at = Column(DateTime, nullable=False, default=utcnow)
    
    # Relationships
    user = relationship("User", back_populates="history")
    song = relationship("Song", back_populates="history_entries")
