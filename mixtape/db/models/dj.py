# ============================================================================
# FILE: mixtape/db/models/dj.py
# ============================================================================
from sqlalchemy import Column, Integer, String, Text, Boolean, ForeignKey, JSON
from sqlalchemy.orm import relationship
from mixtape.db.base import Base

class DjProfile(Base):
    """Public profile shown on the discover page"""
    __tablename__ = "dj_profiles"
    
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    display_name = Column(String, nullable=False)
    bio = Column(Text, nullable=True)
    classifications = Column(JSON, nullable=False, default=list)
    is_featured = Column(Boolean, nullable=False, default=False)
    
    # Relationships
    user = relationship("User", back_populates="dj_profile")
