"""Access-token providers."""

from tuneproxy.providers.auth.spotify_token_provider import SpotifyTokenProvider

__all__ = ["SpotifyTokenProvider"]
