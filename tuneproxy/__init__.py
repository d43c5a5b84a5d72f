"""tuneproxy: a small backend proxy for the Spotify catalog API."""

__version__ = "0.1.0"
