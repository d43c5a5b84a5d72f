"""Catalog API providers."""

from tuneproxy.providers.catalog.spotify_catalog_provider import SpotifyCatalogProvider

__all__ = ["SpotifyCatalogProvider"]
