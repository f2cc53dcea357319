# ============================================================================
# FILE: mixtape/db/models/history.py
# ============================================================================
from sqlalchemy import Column, Integer, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from mixtape.db.base import Base, utcnow

class PlayHistory(Base):
    """Append-only play event log, source for listening statistics"""
    __tablename__ = "play_history"
    
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    song_id = Column(Integer, ForeignKey("songs.id", ondelete="CASCADE"), nullable=False, index=True)
    played_at = Column(DateTime, nullable=False, default=utcnow, index=True)
    
    # Relationships
    user = relationship("User", back_populates="plays")
    song = relationship("Song", back_populates="plays")
