# ============================================================================
# FILE: mixtape/services/playlist_service.py
# ============================================================================
from typing import List, Optional, Tuple
from sqlalchemy.orm import Session
from mixtape.config import Settings
from mixtape.core.duration import compute_duration, ensure_duration_in_bounds
from mixtape.core.exceptions import ConflictError, ForbiddenError, NotFoundError
from mixtape.core import permissions
from mixtape.db.base import utcnow
from mixtape.db.models.playlist import Playlist, PlaylistSong
from mixtape.db.models.song import Song
from mixtape.db.models.user import User
from mixtape.db.transaction import run_in_transaction
from mixtape.schemas.playlist import PlaylistCreate, PlaylistSongIn, PlaylistUpdate
import logging

logger = logging.getLogger(__name__)

COPY_SUFFIX = " (Copy)"

class PlaylistService:
    """
    Service layer for playlist operations

    Every composition change (create, add, remove, replace, clone) recomputes
    the total from the full member set with compute_duration and is rejected
    as a whole when the total leaves the allowed window.
    """

    def __init__(self, settings: Settings):
        self.settings = settings

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------

    def _check_duration(self, total_sec: int) -> int:
        return ensure_duration_in_bounds(
            total_sec,
            self.settings.MIN_PLAYLIST_DURATION_SEC,
            self.settings.MAX_PLAYLIST_DURATION_SEC,
        )

    def _load(self, db: Session, playlist_id: int) -> Playlist:
        playlist = db.get(Playlist, playlist_id)
        if playlist is None:
            raise NotFoundError("Playlist", playlist_id)
        return playlist

    def _resolve_entries(self, db: Session, entries: List[PlaylistSongIn]) -> List[Tuple[Song, int]]:
        """
        Turn requested entries into (song, order) pairs
        Raises ConflictError on repeated songs, NotFoundError on unknown or restricted ones
        """
        seen = set()
        for entry in entries:
            if entry.song_id in seen:
                raise ConflictError(f"Song {entry.song_id} appears more than once")
            seen.add(entry.song_id)

        if not seen:
            return []

        songs = {song.id: song for song in db.query(Song).filter(Song.id.in_(seen)).all()}
        resolved = []
        for position, entry in enumerate(entries):
            song = songs.get(entry.song_id)
            if song is None or song.restricted:
                raise NotFoundError("Song", entry.song_id)
            order = entry.order if entry.order is not None else position
            resolved.append((song, order))
        return resolved

    def _apply_songs(self, playlist: Playlist, resolved: List[Tuple[Song, int]]) -> None:
        """
        Replace the member list and cached total in place (duration already checked)
        Entries are sorted by requested order and renumbered 0..n-1
        """
        # Entries for songs that stay are reused so the flush never inserts a
        # (playlist, song) pair before deleting the old row for it
        existing = {entry.song_id: entry for entry in playlist.songs}
        entries = []
        ranked = sorted(resolved, key=lambda pair: pair[1])
        for order, (song, _) in enumerate(ranked):
            entry = existing.get(song.id)
            if entry is None:
                entry = PlaylistSong(song_id=song.id, song=song, order=order)
            else:
                entry.order = order
            entries.append(entry)
        playlist.songs = entries
        playlist.total_duration_sec = compute_duration(song for song, _ in resolved)
        playlist.updated_at = utcnow()

    # ------------------------------------------------------------------
    # reads
    # ------------------------------------------------------------------

    def get_user_playlists(self, db: Session, user_id: int) -> List[Playlist]:
        """Get all playlists for a user, newest first"""
        return (
            db.query(Playlist)
            .filter(Playlist.owner_id == user_id)
            .order_by(Playlist.created_at.desc(), Playlist.id.desc())
            .all()
        )

    def get_public_playlists(self, db: Session, owner_id: Optional[int] = None) -> List[Playlist]:
        """Discover listing: public playlists only, newest first"""
        query = db.query(Playlist).filter(Playlist.is_public.is_(True))
        if owner_id is not None:
            query = query.filter(Playlist.owner_id == owner_id)
        return query.order_by(Playlist.created_at.desc(), Playlist.id.desc()).all()

    def get_playlist(self, db: Session, playlist_id: int, caller: Optional[User] = None) -> Playlist:
        """Get a playlist the caller may see (public, or owned by the caller)"""
        playlist = self._load(db, playlist_id)
        caller_id = caller.id if caller is not None else None
        permissions.ensure_can_read_playlist(playlist.is_public, playlist.owner_id, caller_id)
        return playlist

    # ------------------------------------------------------------------
    # composition
    # ------------------------------------------------------------------

    def create_playlist(self, db: Session, owner: User, playlist_data: PlaylistCreate) -> Playlist:
        """Create a new playlist, optionally with songs; nothing is stored if the songs don't fit"""
        def operation():
            resolved = self._resolve_entries(db, playlist_data.songs)
            total = self._check_duration(compute_duration(song for song, _ in resolved))
            playlist = Playlist(
                owner_id=owner.id,
                name=playlist_data.name,
                classification=playlist_data.classification.value,
                is_public=False,
            )
            self._apply_songs(playlist, resolved)
            db.add(playlist)
            db.flush()
            logger.info(f"Playlist created: {playlist.id} for user {owner.id} ({len(resolved)} songs, {total}s)")
            return playlist

        return run_in_transaction(db, operation, self.settings.WRITE_RETRY_ATTEMPTS, "create playlist")

    def add_song(self, db: Session, playlist_id: int, song_id: int, actor: User) -> Playlist:
        """Append a song at the next order index"""
        def operation():
            playlist = self._load(db, playlist_id)
            permissions.ensure_can_mutate_playlist(playlist.owner_id, actor.id)

            song = db.get(Song, song_id)
            if song is None or song.restricted:
                raise NotFoundError("Song", song_id)

            if any(entry.song_id == song_id for entry in playlist.songs):
                logger.warning(f"Song {song_id} already in playlist {playlist_id}")
                raise ConflictError("Song already in playlist")

            members = [entry.song for entry in playlist.songs] + [song]
            total = self._check_duration(compute_duration(members))

            next_order = max((entry.order for entry in playlist.songs), default=-1) + 1
            playlist.songs.append(PlaylistSong(song_id=song.id, song=song, order=next_order))
            playlist.total_duration_sec = total
            playlist.updated_at = utcnow()
            logger.info(f"Song added to playlist {playlist_id}: {song_id} (total {total}s)")
            return playlist

        return run_in_transaction(
            db, operation, self.settings.WRITE_RETRY_ATTEMPTS, "add song",
            integrity_message="Song already in playlist",
        )

    def remove_song(self, db: Session, playlist_id: int, song_id: int, actor: User) -> Playlist:
        """Remove a song from a playlist"""
        def operation():
            playlist = self._load(db, playlist_id)
            permissions.ensure_can_mutate_playlist(playlist.owner_id, actor.id)

            entry = next((e for e in playlist.songs if e.song_id == song_id), None)
            if entry is None:
                raise NotFoundError("Song in playlist", song_id)

            playlist.songs.remove(entry)
            playlist.total_duration_sec = self._check_duration(
                compute_duration(e.song for e in playlist.songs)
            )
            playlist.updated_at = utcnow()
            logger.info(f"Song removed from playlist {playlist_id}: {song_id}")
            return playlist

        return run_in_transaction(db, operation, self.settings.WRITE_RETRY_ATTEMPTS, "remove song")

    def replace_songs(self, db: Session, playlist_id: int, songs: List[PlaylistSongIn], actor: User) -> Playlist:
        """Replace the whole song list; on any failure the playlist is left untouched"""
        return self.update_playlist(db, playlist_id, PlaylistUpdate(songs=songs), actor)

    def update_playlist(self, db: Session, playlist_id: int, update_data: PlaylistUpdate, actor: User) -> Playlist:
        """Rename, reclassify and/or replace songs in one atomic update"""
        def operation():
            playlist = self._load(db, playlist_id)
            permissions.ensure_can_mutate_playlist(playlist.owner_id, actor.id)

            # Validate everything before touching the row
            resolved = None
            if update_data.songs is not None:
                resolved = self._resolve_entries(db, update_data.songs)
                self._check_duration(compute_duration(song for song, _ in resolved))

            if update_data.name is not None:
                playlist.name = update_data.name
            if update_data.classification is not None:
                playlist.classification = update_data.classification.value
            if resolved is not None:
                self._apply_songs(playlist, resolved)
            playlist.updated_at = utcnow()
            logger.info(f"Playlist updated: {playlist_id}")
            return playlist

        return run_in_transaction(db, operation, self.settings.WRITE_RETRY_ATTEMPTS, "update playlist")

    def clone_playlist(self, db: Session, playlist_id: int, actor: User) -> Playlist:
        """Copy a public playlist into a new private playlist owned by actor"""
        def operation():
            source = self._load(db, playlist_id)
            if not source.is_public:
                raise ForbiddenError("This playlist is not public")

            name = f"{source.name}{COPY_SUFFIX}"
            existing = db.query(Playlist).filter(
                Playlist.owner_id == actor.id,
                Playlist.name == name
            ).first()
            if existing:
                raise ConflictError("You already added this playlist.")

            # Entries whose song was deleted or restricted are not carried over
            resolved = [
                (entry.song, entry.order)
                for entry in source.songs
                if entry.song is not None and not entry.song.restricted
            ]
            self._check_duration(compute_duration(song for song, _ in resolved))

            cloned = Playlist(
                owner_id=actor.id,
                name=name,
                classification=source.classification,
                is_public=False,
            )
            self._apply_songs(cloned, resolved)
            db.add(cloned)
            db.flush()
            logger.info(f"Playlist {playlist_id} cloned as {cloned.id} for user {actor.id}")
            return cloned

        return run_in_transaction(db, operation, self.settings.WRITE_RETRY_ATTEMPTS, "clone playlist")

    # ------------------------------------------------------------------
    # visibility and lifecycle
    # ------------------------------------------------------------------

    def toggle_publish(self, db: Session, playlist_id: int, actor: User) -> Playlist:
        """Flip is_public (admins: any playlist, DJs: their own, users: never)"""
        def operation():
            playlist = self._load(db, playlist_id)
            try:
                permissions.ensure_can_toggle_publish(actor.role, playlist.owner_id == actor.id)
            except ForbiddenError:
                logger.warning(f"User {actor.id} ({actor.role}) may not publish playlist {playlist_id}")
                raise
            playlist.is_public = not playlist.is_public
            playlist.updated_at = utcnow()
            logger.info(f"Playlist {playlist_id} is now {'public' if playlist.is_public else 'private'}")
            return playlist

        return run_in_transaction(db, operation, self.settings.WRITE_RETRY_ATTEMPTS, "toggle publish")

    def delete_playlist(self, db: Session, playlist_id: int, actor: User) -> None:
        """Delete a playlist (owner only); songs stay in the catalog"""
        def operation():
            playlist = self._load(db, playlist_id)
            permissions.ensure_can_mutate_playlist(playlist.owner_id, actor.id)
            db.delete(playlist)
            logger.info(f"Playlist deleted: {playlist_id}")

        run_in_transaction(db, operation, self.settings.WRITE_RETRY_ATTEMPTS, "delete playlist")
