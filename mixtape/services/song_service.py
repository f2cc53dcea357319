# ============================================================================
# FILE: mixtape/services/song_service.py
# ============================================================================
from typing import List, Optional
from sqlalchemy.orm import Session
from mixtape.config import Settings
from mixtape.core.duration import compute_duration, ensure_duration_in_bounds
from mixtape.core.exceptions import NotFoundError
from mixtape.core import permissions
from mixtape.db.base import utcnow
from mixtape.db.models.song import Song
from mixtape.db.models.user import User
from mixtape.db.transaction import run_in_transaction
from mixtape.schemas.song import SongCreate, SongUpdate
import logging

logger = logging.getLogger(__name__)

class SongService:
    """Service layer for the song catalog"""

    def __init__(self, settings: Settings):
        self.settings = settings

    def list_songs(
        self,
        db: Session,
        caller: Optional[User],
        genre: Optional[str] = None,
        year: Optional[int] = None,
        classification: Optional[str] = None,
        q: Optional[str] = None,
        restricted: Optional[bool] = None,
    ) -> List[Song]:
        """
        List catalog songs matching the filters
        Non-admin callers never see restricted songs, whatever they ask for
        """
        query = db.query(Song)
        if genre:
            query = query.filter(Song.genre == genre)
        if year is not None:
            query = query.filter(Song.year == year)
        if q:
            query = query.filter(Song.title.ilike(f"%{q}%"))

        if not permissions.can_see_restricted(caller.role if caller else None):
            query = query.filter(Song.restricted.is_(False))
        elif restricted is not None:
            query = query.filter(Song.restricted.is_(restricted))

        songs = query.order_by(Song.id).all()
        if classification:
            songs = [song for song in songs if classification in (song.classifications or [])]
        return songs[:self.settings.SONG_LIST_LIMIT]

    def get_song(self, db: Session, song_id: int, caller: Optional[User] = None) -> Song:
        """Get a song visible to the caller"""
        song = db.get(Song, song_id)
        if song is None:
            raise NotFoundError("Song", song_id)
        if song.restricted and not permissions.can_see_restricted(caller.role if caller else None):
            raise NotFoundError("Song", song_id)
        return song

    def _load(self, db: Session, song_id: int) -> Song:
        song = db.get(Song, song_id)
        if song is None:
            raise NotFoundError("Song", song_id)
        return song

    def create_song(self, db: Session, song_data: SongCreate, actor: User) -> Song:
        """Add a song to the catalog (admin)"""
        permissions.ensure_administrator(actor.role)

        def operation():
            song = Song(**song_data.model_dump())
            db.add(song)
            db.flush()
            logger.info(f"Song created: {song.id} '{song.title}'")
            return song

        return run_in_transaction(db, operation, self.settings.WRITE_RETRY_ATTEMPTS, "create song")

    def update_song(self, db: Session, song_id: int, update_data: SongUpdate, actor: User) -> Song:
        """
        Partially update a song (admin)
        A duration change is pushed into every playlist containing the song and
        rejected if any of them would leave the allowed window
        """
        permissions.ensure_administrator(actor.role)
        changes = update_data.model_dump(exclude_unset=True, exclude_none=True)

        def operation():
            song = self._load(db, song_id)
            for field, value in changes.items():
                setattr(song, field, value)
            if "duration_sec" in changes:
                self._recompute_playlists(song)
            logger.info(f"Song updated: {song_id} ({', '.join(sorted(changes)) or 'no changes'})")
            return song

        return run_in_transaction(db, operation, self.settings.WRITE_RETRY_ATTEMPTS, "update song")

    def toggle_restricted(self, db: Session, song_id: int, actor: User) -> Song:
        """Flip the restricted flag (admin)"""
        permissions.ensure_administrator(actor.role)

        def operation():
            song = self._load(db, song_id)
            song.restricted = not song.restricted
            logger.info(f"Song {song_id} {'restricted' if song.restricted else 'unrestricted'}")
            return song

        return run_in_transaction(db, operation, self.settings.WRITE_RETRY_ATTEMPTS, "toggle restricted")

    def delete_song(self, db: Session, song_id: int, actor: User) -> None:
        """Delete a song (admin), dropping it from every playlist that contains it"""
        permissions.ensure_administrator(actor.role)

        def operation():
            song = self._load(db, song_id)
            affected = 0
            for entry in list(song.playlist_entries):
                playlist = entry.playlist
                playlist.songs.remove(entry)
                playlist.total_duration_sec = compute_duration(e.song for e in playlist.songs)
                playlist.updated_at = utcnow()
                affected += 1
            db.delete(song)
            logger.info(f"Song deleted: {song_id} (removed from {affected} playlists)")

        run_in_transaction(db, operation, self.settings.WRITE_RETRY_ATTEMPTS, "delete song")

    def _recompute_playlists(self, song: Song) -> None:
        for entry in song.playlist_entries:
            playlist = entry.playlist
            playlist.total_duration_sec = ensure_duration_in_bounds(
                compute_duration(e.song for e in playlist.songs),
                self.settings.MIN_PLAYLIST_DURATION_SEC,
                self.settings.MAX_PLAYLIST_DURATION_SEC,
            )
            playlist.updated_at = utcnow()
