"""Mixtape: playlists, catalog and personalized suggestions for a DJ booking service."""

__version__ = "1.0.0"
