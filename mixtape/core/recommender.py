# ============================================================================
# FILE: mixtape/core/recommender.py
# ============================================================================
"""
Scoring half of the suggestion engine.

History entries contribute `count * recency_weight` to the genre and artist of
their song, stated preferences add a flat boost, and the top genres/artists
drive the catalog query done by SuggestionService. Ties between equal scores
keep insertion order (history first, then preferences); callers must not rely
on which of several equally scored keys makes the cut.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, List

SECONDS_PER_DAY = 24 * 60 * 60


def recency_weight(played_at: datetime, now: datetime, decay_days: float = 30.0, floor: float = 0.2) -> float:
    """
    Linear decay from 1.0 (played now) down to `floor` at `decay_days` and beyond
    Timestamps in the future count as "now"
    """
    days_ago = max(0.0, (now - played_at).total_seconds() / SECONDS_PER_DAY)
    return min(1.0, max(floor, 1 - days_ago / decay_days))


@dataclass
class ScoreBoard:
    """Accumulated genre and artist scores for one user"""
    genre_scores: Dict[str, float] = field(default_factory=dict)
    artist_scores: Dict[str, float] = field(default_factory=dict)

    def add(self, genre, artist, score: float) -> None:
        if genre:
            self.genre_scores[genre] = self.genre_scores.get(genre, 0) + score
        if artist:
            self.artist_scores[artist] = self.artist_scores.get(artist, 0) + score

    def boost(self, genres: Iterable[str], artists: Iterable[str], amount: float) -> None:
        for genre in dict.fromkeys(genres or []):
            self.genre_scores[genre] = self.genre_scores.get(genre, 0) + amount
        for artist in dict.fromkeys(artists or []):
            self.artist_scores[artist] = self.artist_scores.get(artist, 0) + amount

    def top_genres(self, n: int = 3) -> List[str]:
        return top_keys(self.genre_scores, n)

    def top_artists(self, n: int = 3) -> List[str]:
        return top_keys(self.artist_scores, n)

    def score_song(self, song) -> float:
        return self.genre_scores.get(song.genre, 0) + self.artist_scores.get(song.artist, 0)

    @property
    def is_empty(self) -> bool:
        return not self.genre_scores and not self.artist_scores


def top_keys(scores: Dict[str, float], n: int) -> List[str]:
    ranked = sorted(scores.items(), key=lambda item: item[1], reverse=True)
    return [key for key, _ in ranked[:n]]


def score_history(entries: Iterable, now: datetime, decay_days: float = 30.0, floor: float = 0.2) -> ScoreBoard:
    """
    Build a ScoreBoard from history entries

    Each entry needs `song` (may be None for a deleted song, skipped), `count`
    and `played_at`.
    """
    board = ScoreBoard()
    for entry in entries:
        song = entry.song
        if song is None:
            continue
        weight = recency_weight(entry.played_at, now, decay_days, floor)
        board.add(song.genre, song.artist, entry.count * weight)
    return board


def unique_by_id(songs: Iterable) -> list:
    """Drop repeated song ids, first occurrence wins"""
    seen = set()
    unique = []
    for song in songs:
        if song.id in seen:
            continue
        seen.add(song.id)
        unique.append(song)
    return unique


def rank_songs(songs: Iterable, board: ScoreBoard) -> list:
    """Highest combined genre+artist score first; stable for equal scores"""
    return sorted(songs, key=board.score_song, reverse=True)
