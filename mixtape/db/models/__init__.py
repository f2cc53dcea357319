from mixtape.db.models.user import User, UserHistoryEntry
from mixtape.db.models.song import Song
from mixtape.db.models.playlist import Classification, Playlist, PlaylistSong
from mixtape.db.models.history import PlayHistory
from mixtape.db.models.dj import DjProfile

__all__ = [
    "User",
    "UserHistoryEntry",
    "Song",
    "Classification",
    "Playlist",
    "PlaylistSong",
    "PlayHistory",
    "DjProfile",
]
