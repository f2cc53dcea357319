"""Unit tests for suggestion scoring."""

from datetime import datetime, timedelta
from types import SimpleNamespace

import pytest

from mixtape.core.recommender import (
    ScoreBoard,
    rank_songs,
    recency_weight,
    score_history,
    top_keys,
    unique_by_id,
)

NOW = datetime(2024, 6, 1, 12, 0, 0)


def song(song_id, genre="rock", artist="A"):
    return SimpleNamespace(id=song_id, genre=genre, artist=artist)


def entry(s, count=1, days_ago=0.0):
    return SimpleNamespace(song=s, count=count, played_at=NOW - timedelta(days=days_ago))


class TestRecencyWeight:
    def test_played_now_is_full_weight(self):
        assert recency_weight(NOW, NOW) == 1.0

    def test_linear_decay(self):
        assert recency_weight(NOW - timedelta(days=15), NOW) == pytest.approx(0.5)

    def test_floor_after_thirty_days(self):
        assert recency_weight(NOW - timedelta(days=30), NOW) == pytest.approx(0.2)
        assert recency_weight(NOW - timedelta(days=400), NOW) == pytest.approx(0.2)

    def test_recent_plays_are_near_one(self):
        assert recency_weight(NOW - timedelta(days=2), NOW) > 0.9

    def test_future_timestamp_does_not_exceed_one(self):
        assert recency_weight(NOW + timedelta(days=3), NOW) == 1.0


class TestScoreHistory:
    def test_count_times_weight_per_genre_and_artist(self):
        board = score_history([entry(song(1, "pop", "X"), count=5)], NOW)
        assert board.genre_scores == {"pop": pytest.approx(5.0)}
        assert board.artist_scores == {"X": pytest.approx(5.0)}

    def test_scores_accumulate_across_entries(self):
        board = score_history(
            [
                entry(song(1, "pop", "X"), count=2),
                entry(song(2, "pop", "Y"), count=1, days_ago=15),
            ],
            NOW,
        )
        assert board.genre_scores["pop"] == pytest.approx(2.5)
        assert board.artist_scores["Y"] == pytest.approx(0.5)

    def test_old_history_still_contributes(self):
        board = score_history([entry(song(1, "jazz"), count=10, days_ago=90)], NOW)
        assert board.genre_scores["jazz"] == pytest.approx(2.0)

    def test_deleted_song_is_skipped(self):
        board = score_history([SimpleNamespace(song=None, count=3, played_at=NOW)], NOW)
        assert board.is_empty


class TestScoreBoard:
    def test_boost_adds_to_existing_and_new_keys(self):
        board = ScoreBoard(genre_scores={"rock": 1.0})
        board.boost(["rock", "jazz"], ["Band"], 2)
        assert board.genre_scores == {"rock": 3.0, "jazz": 2.0}
        assert board.artist_scores == {"Band": 2.0}

    def test_boost_counts_each_preference_once(self):
        board = ScoreBoard()
        board.boost(["rock", "rock"], [], 2)
        assert board.genre_scores == {"rock": 2.0}

    def test_top_n(self):
        scores = {"a": 1.0, "b": 5.0, "c": 3.0, "d": 4.0}
        assert top_keys(scores, 3) == ["b", "d", "c"]

    def test_top_n_with_ties_returns_a_valid_top_set(self):
        scores = {"a": 1.0, "b": 1.0, "c": 1.0, "d": 0.5}
        top = top_keys(scores, 2)
        assert len(top) == 2
        assert set(top) <= {"a", "b", "c"}

    def test_score_song_sums_genre_and_artist(self):
        board = ScoreBoard(genre_scores={"pop": 2.0}, artist_scores={"X": 1.5})
        assert board.score_song(song(1, "pop", "X")) == 3.5
        assert board.score_song(song(2, "metal", "Z")) == 0


class TestRanking:
    def test_unique_by_id_keeps_first(self):
        a, b = song(1), song(2)
        assert unique_by_id([a, b, song(1)]) == [a, b]

    def test_rank_highest_score_first_and_unscored_last(self):
        board = ScoreBoard(genre_scores={"pop": 3.0, "rock": 1.0}, artist_scores={"X": 1.0})
        filler = song(9, "ambient", "Nobody")
        ranked = rank_songs([filler, song(1, "rock", "Q"), song(2, "pop", "X")], board)
        assert [s.id for s in ranked] == [2, 1, 9]
