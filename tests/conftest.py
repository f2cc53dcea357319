"""Shared fixtures: an app on a private in-memory database plus small factories."""

import pytest
from fastapi.testclient import TestClient

from mixtape.config import Settings
from mixtape.core.security import create_access_token, get_password_hash
from mixtape.db.models.song import Song
from mixtape.db.models.user import User
from mixtape.db.session import init_db
from mixtape.main import create_app


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        DATABASE_URL="sqlite://",
        SECRET_KEY="test-secret",
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def app(settings):
    app = create_app(settings)
    init_db(app.state.engine)
    yield app
    app.state.engine.dispose()


@pytest.fixture
def client(app):
    with TestClient(app) as client:
        yield client


@pytest.fixture
def db(app):
    session = app.state.session_factory()
    yield session
    session.close()


@pytest.fixture
def make_user(db):
    """make_user("alice", role="dj") -> committed User"""
    def factory(username, role="user", password="secret123", is_active=True):
        user = User(
            username=username,
            password_hash=get_password_hash(password),
            role=role,
            is_active=is_active,
            preferred_genres=[],
            preferred_bands=[],
            preferred_years=[],
        )
        db.add(user)
        db.commit()
        return user
    return factory


@pytest.fixture
def make_song(db):
    """make_song(duration_sec=..., genre=..., ...) -> committed Song"""
    counter = {"n": 0}

    def factory(duration_sec=180, title=None, artist="Artist", genre="rock", year=2000, restricted=False):
        counter["n"] += 1
        song = Song(
            title=title or f"Song {counter['n']}",
            artist=artist,
            genre=genre,
            year=year,
            duration_sec=duration_sec,
            classifications=[],
            restricted=restricted,
        )
        db.add(song)
        db.commit()
        return song
    return factory


@pytest.fixture
def auth_headers(settings):
    """auth_headers(user) -> Authorization header dict for that user"""
    def factory(user):
        token = create_access_token(settings, {"sub": str(user.id), "role": user.role})
        return {"Authorization": f"Bearer {token}"}
    return factory
