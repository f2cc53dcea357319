"""The application is only ever built through create_app."""

import mixtape.main
from mixtape.main import create_app


def test_importing_main_builds_no_application():
    assert not hasattr(mixtape.main, "app")


def test_factory_keeps_its_own_settings_and_engine(settings):
    first, second = create_app(settings), create_app(settings)
    try:
        assert first.state.settings is settings
        assert first.state.engine is not second.state.engine
        assert str(first.state.engine.url) == "sqlite://"
    finally:
        first.state.engine.dispose()
        second.state.engine.dispose()


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}
