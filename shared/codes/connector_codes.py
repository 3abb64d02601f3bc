"""
Connector integration codes (7xxxx).
"""
from __future__ import annotations

from enum import IntEnum


class ConnectorCode(IntEnum):
    # Capability gaps
    NOT_IMPLEMENTED = 70001
    FLOW_NOT_IMPLEMENTED = 70002

    # Credentials
    FAILED_TO_OBTAIN_AUTH_TYPE = 70003

    # Wire encoding / decoding
    REQUEST_ENCODING_FAILED = 70004
    RESPONSE_DESERIALIZATION_FAILED = 70005
    RESPONSE_HANDLING_FAILED = 70006

    # Payload gaps
    MISSING_CONNECTOR_TRANSACTION_ID = 70007
    WEBHOOKS_NOT_IMPLEMENTED = 70008
    CAPTURE_METHOD_NOT_SUPPORTED = 70009
    MISSING_REQUIRED_FIELD = 70010

    # Configuration
    CONNECTOR_NOT_CONFIGURED = 70011

    # Transport boundary
    TRANSPORT_ERROR = 70100
