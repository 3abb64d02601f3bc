"""
Factory for connector implementations.
"""
from __future__ import annotations

from domain.connector.enums import ConnectorName
from infrastructure.connectors.base import BaseConnector


def get_connector(name: str) -> BaseConnector:
    try:
        key = ConnectorName((name or "").lower())
    except ValueError:
        raise ValueError(f"Unsupported connector: {name}") from None
    if key is ConnectorName.MIFINITY:
        from .mifinity import Mifinity
        return Mifinity()
    if key is ConnectorName.PAYU:
        from .payu import Payu
        return Payu()
    raise ValueError(f"Unsupported connector: {name}")
