"""
Actions the orchestration layer can ask the processing step to take.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from domain.connector.enums import AttemptStatus


class ConnectorActionKind(str, Enum):
    TRIGGER = "trigger"
    AVOID = "avoid"
    STATUS_UPDATE = "status_update"
    HANDLE_RESPONSE = "handle_response"


@dataclass(frozen=True)
class CallConnectorAction:
    kind: ConnectorActionKind
    status: Optional[AttemptStatus] = None
    payload: Optional[bytes] = None

    @classmethod
    def trigger(cls) -> "CallConnectorAction":
        return cls(ConnectorActionKind.TRIGGER)

    @classmethod
    def avoid(cls) -> "CallConnectorAction":
        return cls(ConnectorActionKind.AVOID)

    @classmethod
    def status_update(cls, status: AttemptStatus) -> "CallConnectorAction":
        return cls(ConnectorActionKind.STATUS_UPDATE, status=status)

    @classmethod
    def handle_response(cls, payload: bytes) -> "CallConnectorAction":
        """Feed bytes already received (e.g. from a redirect) to handle_response."""
        return cls(ConnectorActionKind.HANDLE_RESPONSE, payload=payload)
