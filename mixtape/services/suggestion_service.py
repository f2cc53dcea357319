# ============================================================================
# FILE: mixtape/services/suggestion_service.py
# ============================================================================
from datetime import datetime
from typing import List, Optional
from sqlalchemy import func, or_
from sqlalchemy.orm import Session
from mixtape.config import Settings
from mixtape.core.exceptions import NotFoundError, ValidationError
from mixtape.core.recommender import ScoreBoard, rank_songs, score_history, unique_by_id
from mixtape.db.base import utcnow
from mixtape.db.models.song import Song
from mixtape.db.models.user import User
import logging

logger = logging.getLogger(__name__)

class SuggestionService:
    """Personalized song suggestions from play history and stated preferences"""

    def __init__(self, settings: Settings):
        self.settings = settings

    def build_scores(self, user: User, now: Optional[datetime] = None) -> ScoreBoard:
        """Recency-weighted history scores plus the flat preference boost"""
        now = now or utcnow()
        board = score_history(
            user.history,
            now,
            decay_days=self.settings.SUGGESTION_DECAY_DAYS,
            floor=self.settings.SUGGESTION_MIN_WEIGHT,
        )
        preferences = user.preferences
        board.boost(preferences["genres"], preferences["bands"], self.settings.SUGGESTION_PREFERENCE_BOOST)
        return board

    def suggest(self, db: Session, user_id: int, limit: Optional[int] = None, now: Optional[datetime] = None) -> List[Song]:
        """
        Suggest up to `limit` unrestricted songs for a user

        Songs matching a top genre, a top artist or a preferred year come
        first; when there are not enough of them the rest is a random sample
        of the remaining catalog. The result is ordered by genre+artist score.
        """
        limit = self.settings.SUGGESTION_LIMIT if limit is None else limit
        if limit < 1:
            raise ValidationError("limit must be at least 1")

        user = db.get(User, user_id)
        if user is None:
            raise NotFoundError("User", user_id)

        board = self.build_scores(user, now)
        top_genres = board.top_genres(self.settings.SUGGESTION_TOP_N)
        top_artists = board.top_artists(self.settings.SUGGESTION_TOP_N)
        years = list(dict.fromkeys(user.preferences["years"]))

        conditions = []
        if top_genres:
            conditions.append(Song.genre.in_(top_genres))
        if top_artists:
            conditions.append(Song.artist.in_(top_artists))
        if years:
            conditions.append(Song.year.in_(years))

        matches = []
        if conditions:
            matches = (
                db.query(Song)
                .filter(Song.restricted.is_(False), or_(*conditions))
                .order_by(Song.id)
                .all()
            )
        selected = unique_by_id(matches)

        if len(selected) < limit:
            selected.extend(self._random_fill(db, {song.id for song in selected}, limit - len(selected)))

        suggestions = rank_songs(selected, board)[:limit]
        logger.info(
            f"Suggested {len(suggestions)} songs for user {user_id} "
            f"(genres={top_genres}, artists={top_artists}, years={years}, matched={len(matches)})"
        )
        return suggestions

    def _random_fill(self, db: Session, exclude_ids: set, size: int) -> List[Song]:
        """Random unrestricted songs not already selected, drawn without replacement"""
        query = db.query(Song).filter(Song.restricted.is_(False))
        if exclude_ids:
            query = query.filter(Song.id.notin_(exclude_ids))
        return query.order_by(func.random()).limit(size).all()
