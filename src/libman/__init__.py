"""Interactive command-line client for the Spotify Web API."""

__version__ = "0.1.0"
