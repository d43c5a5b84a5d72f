"""Application settings loaded from environment variables via pydantic-settings.

Values are read from (highest priority first):

  1. Environment variables, e.g. ``SPOTIFY_CLIENT_ID=abc123``
  2. A ``.env`` file in the working directory (local development only)
  3. The defaults declared below

Field names map to upper-cased env vars automatically, so
``spotify_client_secret`` is read from ``SPOTIFY_CLIENT_SECRET`` and
``port`` from ``PORT``.  The ``.env`` file is never committed.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """tuneproxy settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # === Spotify credentials ===
    # Empty string = "not configured"; the proxy still starts, but every
    # token fetch is rejected upstream and /health reports "degraded".
    spotify_client_id: str = ""
    spotify_client_secret: str = ""

    # === Upstream endpoints ===
    spotify_token_url: str = "https://accounts.spotify.com/api/token"
    spotify_api_base_url: str = "https://api.spotify.com/v1"
    # Sent as the search ``type`` parameter unless the caller supplies one.
    spotify_search_types: str = "album,artist,track"

    # === HTTP client ===
    http_timeout: float = 30.0

    # === App Config ===
    app_host: str = "0.0.0.0"
    port: int = 3000
    app_env: str = "development"
    log_level: str = "INFO"
    cors_origins: str = "*"  # comma-separated

    def get_cors_origins(self) -> list[str]:
        """Return the configured CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    def has_spotify_credentials(self) -> bool:
        """Return ``True`` when both client id and secret are non-empty."""
        return bool(self.spotify_client_id and self.spotify_client_secret)
