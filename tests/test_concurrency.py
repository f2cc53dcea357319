"""Two sessions racing on the same rows of a file-backed database."""

import pytest

from mixtape.core.exceptions import InvalidDurationError
from mixtape.core.security import get_password_hash
from mixtape.db.models.playlist import Playlist
from mixtape.db.models.song import Song
from mixtape.db.models.user import User
from mixtape.db.session import build_engine, build_session_factory, init_db
from mixtape.schemas.playlist import PlaylistCreate, PlaylistSongIn
from mixtape.services.playlist_service import PlaylistService
from mixtape.services.user_service import UserService

HOUR = 3600


@pytest.fixture
def file_settings(settings, tmp_path):
    return settings.model_copy(update={"DATABASE_URL": f"sqlite:///{tmp_path / 'race.db'}"})


@pytest.fixture
def session_factory(file_settings):
    engine = build_engine(file_settings)
    init_db(engine)
    yield build_session_factory(engine)
    engine.dispose()


def add_user(session, username, role="user"):
    user = User(username=username, password_hash=get_password_hash("secret123"), role=role)
    session.add(user)
    session.commit()
    return user


def add_song(session, duration_sec):
    song = Song(title=f"{duration_sec}s", duration_sec=duration_sec)
    session.add(song)
    session.commit()
    return song


def test_concurrent_adds_cannot_pass_the_cap(file_settings, session_factory):
    service = PlaylistService(file_settings)
    setup = session_factory()
    owner = add_user(setup, "owner")
    opener = add_song(setup, 2 * HOUR)
    first, second = add_song(setup, 45 * 60), add_song(setup, 45 * 60)
    playlist_id = service.create_playlist(
        setup, owner, PlaylistCreate(name="Race", songs=[PlaylistSongIn(song_id=opener.id)])
    ).id
    setup.close()

    slow, fast = session_factory(), session_factory()
    try:
        stale = slow.get(Playlist, playlist_id)
        assert [e.song_id for e in stale.songs] == [opener.id]

        service.add_song(fast, playlist_id, first.id, owner)

        with pytest.raises(InvalidDurationError):
            service.add_song(slow, playlist_id, second.id, owner)
    finally:
        slow.close()
        fast.close()

    check = session_factory()
    try:
        stored = check.get(Playlist, playlist_id)
        assert sorted(e.song_id for e in stored.songs) == sorted([opener.id, first.id])
        assert stored.total_duration_sec == sum(e.song.duration_sec for e in stored.songs) == 9900
    finally:
        check.close()


def test_concurrent_toggles_are_not_lost(file_settings, session_factory):
    service = UserService(file_settings)
    setup = session_factory()
    admin = add_user(setup, "root", role="admin")
    target_id = add_user(setup, "target").id
    setup.close()

    slow, fast = session_factory(), session_factory()
    try:
        assert slow.get(User, target_id).is_active is True

        assert service.toggle_active(fast, target_id, admin).is_active is False
        # The stale copy in `slow` still says active; the retry must re-read it
        assert service.toggle_active(slow, target_id, admin).is_active is True
    finally:
        slow.close()
        fast.close()

    check = session_factory()
    try:
        assert check.get(User, target_id).is_active is True
    finally:
        check.close()
