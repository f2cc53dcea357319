# ============================================================================
# FILE: mixtape/api/v1/endpoints/stats.py
# ============================================================================
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
from mixtape.api.dependencies import get_db, get_stats_service, require_current_user
from mixtape.db.models.user import User
from mixtape.schemas.history import (
    GroupPlayCount,
    HistoryEntryResponse,
    PlayLog,
    RecentPlay,
    SongPlayCount,
    TimelinePoint,
)
from mixtape.schemas.song import SongResponse
from mixtape.services.stats_service import StatsService
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.post("/log", response_model=HistoryEntryResponse, status_code=status.HTTP_201_CREATED)
async def log_play(
    play: PlayLog,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user),
    service: StatsService = Depends(get_stats_service)
):
    """
    Log a song play for the current user
    Returns the updated per-song history entry
    """
    return service.log_play(db, current_user.id, play.song_id)

@router.get("/frequency", response_model=List[SongPlayCount])
async def play_frequency(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user),
    service: StatsService = Depends(get_stats_service)
):
    return service.play_frequency(db, current_user.id)

@router.get("/artist", response_model=List[GroupPlayCount])
async def most_played_artists(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user),
    service: StatsService = Depends(get_stats_service)
):
    return service.top_artists(db, current_user.id)

@router.get("/genre", response_model=List[GroupPlayCount])
async def most_played_genres(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user),
    service: StatsService = Depends(get_stats_service)
):
    return service.top_genres(db, current_user.id)

@router.get("/recent", response_model=List[RecentPlay])
async def recent_activity(
    limit: Optional[int] = Query(None, ge=1, le=200),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user),
    service: StatsService = Depends(get_stats_service)
):
    """Latest plays, newest first"""
    return [
        RecentPlay(
            song_id=event.song_id,
            played_at=event.played_at,
            song=SongResponse.model_validate(event.song) if event.song is not None else None,
        )
        for event in service.recent_activity(db, current_user.id, limit)
    ]

@router.get("/timeline", response_model=List[TimelinePoint])
async def play_timeline(
    days: int = Query(30, ge=1, le=366),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user),
    service: StatsService = Depends(get_stats_service)
):
    """Plays per day over the last `days` days, oldest first"""
    return service.timeline(db, current_user.id, days)
