"""Provider contracts used by the services and routes."""

from tuneproxy.interfaces.catalog_provider import ICatalogProvider
from tuneproxy.interfaces.token_provider import ITokenProvider

__all__ = ["ICatalogProvider", "ITokenProvider"]
