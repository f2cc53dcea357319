"""Catalog visibility and admin writes."""

import pytest

from mixtape.core.exceptions import ForbiddenError, InvalidDurationError, NotFoundError
from mixtape.db.models.playlist import Playlist
from mixtape.schemas.playlist import PlaylistCreate, PlaylistSongIn
from mixtape.schemas.song import SongCreate, SongUpdate
from mixtape.services.playlist_service import PlaylistService
from mixtape.services.song_service import SongService


@pytest.fixture
def service(settings):
    return SongService(settings)


@pytest.fixture
def playlists(settings):
    return PlaylistService(settings)


def test_users_never_see_restricted_songs(db, service, make_user, make_song):
    user = make_user("u")
    visible = make_song()
    hidden = make_song(restricted=True)

    ids = [song.id for song in service.list_songs(db, user, restricted=True)]
    assert ids == [visible.id]
    with pytest.raises(NotFoundError):
        service.get_song(db, hidden.id, user)
    with pytest.raises(NotFoundError):
        service.get_song(db, hidden.id, None)


def test_admin_sees_and_filters_restricted(db, service, make_user, make_song):
    admin = make_user("admin", role="admin")
    make_song()
    hidden = make_song(restricted=True)

    ids = [song.id for song in service.list_songs(db, admin, restricted=True)]
    assert ids == [hidden.id]
    assert service.get_song(db, hidden.id, admin).id == hidden.id


def test_filters(db, service, make_user, make_song):
    user = make_user("u")
    make_song(title="Blue Monday", genre="synth", year=1983)
    make_song(title="Blue Train", genre="jazz", year=1957)
    make_song(title="Red", genre="jazz", year=1990)

    assert [s.title for s in service.list_songs(db, user, genre="jazz", q="blue")] == ["Blue Train"]
    assert [s.title for s in service.list_songs(db, user, year=1983)] == ["Blue Monday"]


def test_classification_filter(db, service, make_user, make_song):
    user = make_user("u")
    wedding = make_song()
    wedding.classifications = ["wedding", "club"]
    make_song()
    db.commit()

    assert [s.id for s in service.list_songs(db, user, classification="wedding")] == [wedding.id]


def test_only_admins_write(db, service, make_user, make_song):
    dj = make_user("dj", role="dj")
    song = make_song()
    with pytest.raises(ForbiddenError):
        service.create_song(db, SongCreate(title="T", artist="A", duration_sec=100), dj)
    with pytest.raises(ForbiddenError):
        service.toggle_restricted(db, song.id, dj)
    with pytest.raises(ForbiddenError):
        service.delete_song(db, song.id, dj)


def test_create_and_toggle(db, service, make_user):
    admin = make_user("admin", role="admin")
    song = service.create_song(db, SongCreate(title="T", artist="A", genre="pop", duration_sec=200), admin)
    assert song.id is not None
    assert song.restricted is False
    assert service.toggle_restricted(db, song.id, admin).restricted is True


def test_delete_drops_song_from_playlists(db, service, playlists, make_user, make_song):
    admin, owner = make_user("admin", role="admin"), make_user("owner")
    keep, doomed = make_song(duration_sec=100), make_song(duration_sec=250)
    playlist = playlists.create_playlist(db, owner, PlaylistCreate(
        name="P", songs=[PlaylistSongIn(song_id=keep.id), PlaylistSongIn(song_id=doomed.id)],
    ))

    service.delete_song(db, doomed.id, admin)

    db.expire_all()
    stored = db.get(Playlist, playlist.id)
    assert [e.song_id for e in stored.songs] == [keep.id]
    assert stored.total_duration_sec == 100


def test_duration_update_recomputes_playlists(db, service, playlists, make_user, make_song):
    admin, owner = make_user("admin", role="admin"), make_user("owner")
    song = make_song(duration_sec=100)
    playlist = playlists.create_playlist(db, owner, PlaylistCreate(name="P", songs=[PlaylistSongIn(song_id=song.id)]))

    service.update_song(db, song.id, SongUpdate(duration_sec=300), admin)

    db.expire_all()
    assert db.get(Playlist, playlist.id).total_duration_sec == 300


def test_duration_update_that_breaks_a_playlist_is_rejected(db, service, playlists, make_user, make_song):
    admin, owner = make_user("admin", role="admin"), make_user("owner")
    a, b = make_song(duration_sec=3600), make_song(duration_sec=3600)
    playlists.create_playlist(db, owner, PlaylistCreate(
        name="P", songs=[PlaylistSongIn(song_id=a.id), PlaylistSongIn(song_id=b.id)],
    ))

    with pytest.raises(InvalidDurationError):
        service.update_song(db, a.id, SongUpdate(duration_sec=9000), admin)

    db.expire_all()
    assert service.get_song(db, a.id, admin).duration_sec == 3600
