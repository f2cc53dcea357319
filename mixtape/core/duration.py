# ============================================================================
# FILE: mixtape/core/duration.py
# ============================================================================
"""
Playlist duration rules.

`compute_duration` is the only place a playlist total is derived; every
mutation path recomputes from the full member set rather than adjusting the
cached value incrementally.
"""
from typing import Iterable
from mixtape.core.exceptions import InvalidDurationError

MAX_PLAYLIST_DURATION_SEC = 3 * 60 * 60


def compute_duration(songs: Iterable) -> int:
    """Sum `duration_sec` over songs (anything with that attribute)"""
    return sum(int(song.duration_sec) for song in songs)


def is_duration_valid(total_sec: int, min_sec: int = 0, max_sec: int = MAX_PLAYLIST_DURATION_SEC) -> bool:
    return min_sec <= total_sec <= max_sec


def format_duration(total_sec: int) -> str:
    """10800 -> '3h 00m'"""
    hours, rest = divmod(int(total_sec), 3600)
    return f"{hours}h {rest // 60:02d}m"


def ensure_duration_in_bounds(total_sec: int, min_sec: int = 0, max_sec: int = MAX_PLAYLIST_DURATION_SEC) -> int:
    """Return total_sec unchanged, or raise InvalidDurationError"""
    if not is_duration_valid(total_sec, min_sec, max_sec):
        if total_sec > max_sec:
            message = f"Playlist exceeds {format_duration(max_sec)} ({format_duration(total_sec)})"
        else:
            message = f"Playlist must be at least {format_duration(min_sec)} long"
        raise InvalidDurationError(message, total_duration_sec=total_sec)
    return total_sec
