"""
HTTP transport for connector requests.
"""
from .base import ConnectorHttpClient, TransportError

__all__ = [
    "ConnectorHttpClient",
    "TransportError",
]
