"""Request-level services composed from the providers."""

from tuneproxy.services.catalog_service import CatalogService

__all__ = ["CatalogService"]
