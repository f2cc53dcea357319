"""Playlist endpoints end to end, including the duration cap over HTTP."""

import pytest

API = "/api/v1/playlist"
HOUR = 3600


@pytest.fixture
def owner(make_user):
    return make_user("owner", role="dj")


@pytest.fixture
def headers(owner, auth_headers):
    return auth_headers(owner)


def create(client, headers, name="Set", songs=(), classification="general"):
    payload = {
        "name": name,
        "classification": classification,
        "songs": [{"song_id": song.id} for song in songs],
    }
    return client.post(f"{API}/", json=payload, headers=headers)


def test_create_and_fetch(client, headers, make_song):
    a, b = make_song(duration_sec=200), make_song(duration_sec=100)
    response = create(client, headers, songs=(a, b), classification="wedding")
    assert response.status_code == 201
    body = response.json()
    assert body["total_duration_sec"] == 300
    assert body["visible_duration_sec"] == 300
    assert body["classification"] == "wedding"
    assert body["is_public"] is False
    assert [(s["song_id"], s["order"]) for s in body["songs"]] == [(a.id, 0), (b.id, 1)]

    fetched = client.get(f"{API}/{body['id']}", headers=headers).json()
    assert fetched["songs"][0]["song"]["duration_sec"] == 200


def test_create_requires_login(client):
    assert client.post(f"{API}/", json={"name": "x"}).status_code == 401


def test_over_cap_create_returns_400_and_stores_nothing(client, headers, make_song):
    songs = [make_song(duration_sec=HOUR) for _ in range(4)]
    response = create(client, headers, songs=songs)
    assert response.status_code == 400
    assert response.json()["error"] == "invalid_duration"
    assert client.get(f"{API}/mine", headers=headers).json() == []


def test_unknown_classification(client, headers):
    assert create(client, headers, classification="rave").status_code == 422


def test_add_and_remove_song(client, headers, make_song):
    song = make_song(duration_sec=120)
    playlist_id = create(client, headers).json()["id"]

    response = client.post(f"{API}/{playlist_id}/songs", json={"song_id": song.id}, headers=headers)
    assert response.status_code == 200
    assert response.json()["total_duration_sec"] == 120

    again = client.post(f"{API}/{playlist_id}/songs", json={"song_id": song.id}, headers=headers)
    assert again.status_code == 409

    response = client.delete(f"{API}/{playlist_id}/songs/{song.id}", headers=headers)
    assert response.json()["total_duration_sec"] == 0
    assert response.json()["songs"] == []


def test_replace_songs_over_cap_keeps_old_list(client, headers, make_song):
    small = make_song(duration_sec=60)
    big = [make_song(duration_sec=HOUR) for _ in range(4)]
    playlist_id = create(client, headers, songs=(small,)).json()["id"]

    response = client.put(
        f"{API}/{playlist_id}/songs",
        json={"songs": [{"song_id": s.id} for s in big]},
        headers=headers,
    )
    assert response.status_code == 400

    body = client.get(f"{API}/{playlist_id}", headers=headers).json()
    assert [s["song_id"] for s in body["songs"]] == [small.id]
    assert body["total_duration_sec"] == 60


def test_update_renames(client, headers):
    playlist_id = create(client, headers).json()["id"]
    response = client.put(f"{API}/{playlist_id}", json={"name": "Renamed"}, headers=headers)
    assert response.json()["name"] == "Renamed"


def test_private_playlist_visibility(client, headers, make_user, auth_headers):
    playlist_id = create(client, headers).json()["id"]
    stranger = auth_headers(make_user("stranger"))

    assert client.get(f"{API}/{playlist_id}").status_code == 403
    assert client.get(f"{API}/{playlist_id}", headers=stranger).status_code == 403
    assert client.get(f"{API}/404", headers=headers).status_code == 404


def test_publish_discover_and_clone(client, headers, make_song, make_user, auth_headers):
    song = make_song(duration_sec=240)
    playlist_id = create(client, headers, name="Night", songs=(song,)).json()["id"]
    fan = auth_headers(make_user("fan"))

    assert client.post(f"{API}/{playlist_id}/clone", headers=fan).status_code == 403

    response = client.put(f"{API}/{playlist_id}/publish", headers=headers)
    assert response.json()["is_public"] is True
    assert [p["id"] for p in client.get(f"{API}/discover").json()] == [playlist_id]
    assert client.get(f"{API}/{playlist_id}").status_code == 200

    response = client.post(f"{API}/{playlist_id}/clone", headers=fan)
    assert response.status_code == 201
    clone = response.json()
    assert clone["name"] == "Night (Copy)"
    assert clone["is_public"] is False
    assert clone["total_duration_sec"] == 240
    assert clone["id"] != playlist_id

    assert client.post(f"{API}/{playlist_id}/clone", headers=fan).status_code == 409


def test_plain_user_cannot_publish(client, make_user, auth_headers):
    user_headers = auth_headers(make_user("plain"))
    playlist_id = create(client, user_headers).json()["id"]
    response = client.put(f"{API}/{playlist_id}/publish", headers=user_headers)
    assert response.status_code == 403
    assert response.json()["error"] == "forbidden"


def test_restricted_songs_are_hidden_in_responses(client, headers, db, make_song):
    visible, later_hidden = make_song(duration_sec=100), make_song(duration_sec=50)
    playlist_id = create(client, headers, songs=(visible, later_hidden)).json()["id"]
    later_hidden.restricted = True
    db.commit()

    body = client.get(f"{API}/{playlist_id}", headers=headers).json()
    assert [s["song_id"] for s in body["songs"]] == [visible.id]
    assert body["total_duration_sec"] == 150
    assert body["visible_duration_sec"] == 100


def test_delete(client, headers, make_user, auth_headers):
    playlist_id = create(client, headers).json()["id"]
    other = auth_headers(make_user("other", role="admin"))

    assert client.delete(f"{API}/{playlist_id}", headers=other).status_code == 403
    response = client.delete(f"{API}/{playlist_id}", headers=headers)
    assert response.json() == {"message": "Playlist deleted successfully"}
    assert client.get(f"{API}/{playlist_id}", headers=headers).status_code == 404
