"""tuneproxy domain models.

Upstream catalog bodies are relayed as opaque JSON, so the only model the
proxy owns is the cached :class:`Credential`.
"""

from __future__ import annotations

from tuneproxy.models.credential import Credential

__all__ = ["Credential"]
