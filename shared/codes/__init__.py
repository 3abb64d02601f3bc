"""
Shared status codes used across layers (Domain/Application/Infrastructure).
"""
from .connector_codes import ConnectorCode

__all__ = ["ConnectorCode"]
