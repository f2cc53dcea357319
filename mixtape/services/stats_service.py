# ============================================================================
# FILE: mixtape/services/stats_service.py
# ============================================================================
from collections import Counter
from datetime import datetime, timedelta
from typing import Dict, List, Optional
from sqlalchemy.orm import Session
from mixtape.config import Settings
from mixtape.core.exceptions import NotFoundError, ValidationError
from mixtape.core import permissions
from mixtape.db.base import utcnow
from mixtape.db.models.history import PlayHistory
from mixtape.db.models.song import Song
from mixtape.db.models.user import User, UserHistoryEntry
from mixtape.db.transaction import run_in_transaction
import logging

logger = logging.getLogger(__name__)

class StatsService:
    """Play logging and listening statistics"""

    def __init__(self, settings: Settings):
        self.settings = settings

    def log_play(self, db: Session, user_id: int, song_id: int, now: Optional[datetime] = None) -> UserHistoryEntry:
        """
        Record one play

        Bumps the user's per-song history entry (count + last played) and
        appends an event to the play log, in the same transaction.
        """
        played_at = now or utcnow()

        def operation():
            user = db.get(User, user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            song = db.get(Song, song_id)
            if song is None or (song.restricted and not permissions.can_see_restricted(user.role)):
                raise NotFoundError("Song", song_id)

            # Single UPDATE so concurrent plays cannot lose increments
            updated = (
                db.query(UserHistoryEntry)
                .filter(UserHistoryEntry.user_id == user_id, UserHistoryEntry.song_id == song_id)
                .update(
                    {
                        UserHistoryEntry.count: UserHistoryEntry.count + 1,
                        UserHistoryEntry.played_at: played_at,
                    },
                    synchronize_session="fetch",
                )
            )
            if not updated:
                db.add(UserHistoryEntry(user=user, song=song, count=1, played_at=played_at))

            db.add(PlayHistory(user=user, song=song, played_at=played_at))
            db.flush()
            entry = (
                db.query(UserHistoryEntry)
                .filter(UserHistoryEntry.user_id == user_id, UserHistoryEntry.song_id == song_id)
                .one()
            )
            db.refresh(entry)
            logger.info(f"Play logged for user {user_id}: {song.title} (count {entry.count})")
            return entry

        return run_in_transaction(db, operation, self.settings.WRITE_RETRY_ATTEMPTS, "log play")

    def _events(self, db: Session, user_id: int) -> List[PlayHistory]:
        return db.query(PlayHistory).filter(PlayHistory.user_id == user_id).all()

    def play_frequency(self, db: Session, user_id: int) -> List[Dict]:
        """Plays per song, most played first"""
        counts = Counter(event.song_id for event in self._events(db, user_id))
        songs = {}
        if counts:
            songs = {song.id: song for song in db.query(Song).filter(Song.id.in_(counts)).all()}
        ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
        return [
            {"song_id": song_id, "plays": plays, "song": songs.get(song_id)}
            for song_id, plays in ranked
        ]

    def _group_plays(self, db: Session, user_id: int, attribute: str) -> List[Dict]:
        counts = Counter()
        for event in self._events(db, user_id):
            if event.song is None:
                continue
            counts[getattr(event.song, attribute)] += 1
        return [{"name": name, "plays": plays} for name, plays in counts.most_common()]

    def top_artists(self, db: Session, user_id: int) -> List[Dict]:
        """Plays per artist, most played first"""
        return self._group_plays(db, user_id, "artist")

    def top_genres(self, db: Session, user_id: int) -> List[Dict]:
        """Plays per genre, most played first"""
        return self._group_plays(db, user_id, "genre")

    def recent_activity(self, db: Session, user_id: int, limit: Optional[int] = None) -> List[PlayHistory]:
        """Latest plays, newest first"""
        limit = limit or self.settings.RECENT_ACTIVITY_LIMIT
        return (
            db.query(PlayHistory)
            .filter(PlayHistory.user_id == user_id)
            .order_by(PlayHistory.played_at.desc(), PlayHistory.id.desc())
            .limit(limit)
            .all()
        )

    def timeline(self, db: Session, user_id: int, days: int = 30, now: Optional[datetime] = None) -> List[Dict]:
        """Plays per UTC day for the last `days` days (today included), oldest first"""
        if days < 1:
            raise ValidationError("days must be at least 1")
        today = (now or utcnow()).date()
        first_day = today - timedelta(days=days - 1)
        start = datetime.combine(first_day, datetime.min.time())

        events = (
            db.query(PlayHistory)
            .filter(PlayHistory.user_id == user_id, PlayHistory.played_at >= start)
            .all()
        )
        per_day = Counter(event.played_at.date() for event in events)
        return [
            {"day": first_day + timedelta(days=offset), "plays": per_day.get(first_day + timedelta(days=offset), 0)}
            for offset in range(days)
        ]
