"""
Connector integration errors mapped to unified BusinessException variants.

Every error carries the connector name in `details` so the orchestration
layer can surface it verbatim. None of these are retried here.
"""
from __future__ import annotations

from typing import Optional

from domain.common.exceptions import BusinessException
from shared.codes.connector_codes import ConnectorCode


class ConnectorError(BusinessException):
    def __init__(
        self,
        message: str,
        *,
        code: int,
        error_type: str,
        connector: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        full_details = {"connector": connector}
        if details:
            full_details.update(details)
        super().__init__(
            code=code,
            message=message,
            error_type=error_type,
            details=full_details,
        )
        self.connector = connector


class NotImplementedFeature(ConnectorError):
    def __init__(self, feature: str, *, connector: Optional[str] = None):
        super().__init__(
            f"{feature} is not implemented",
            code=ConnectorCode.NOT_IMPLEMENTED,
            error_type="NotImplemented",
            connector=connector,
            details={"feature": feature},
        )
        self.feature = feature


class FlowNotImplemented(ConnectorError):
    def __init__(self, flow: str, *, connector: Optional[str] = None):
        super().__init__(
            f"{flow} flow is not implemented for connector {connector}",
            code=ConnectorCode.FLOW_NOT_IMPLEMENTED,
            error_type="FlowNotImplemented",
            connector=connector,
            details={"flow": flow},
        )
        self.flow = flow


class FailedToObtainAuthType(ConnectorError):
    def __init__(self, *, connector: Optional[str] = None, received: Optional[str] = None):
        super().__init__(
            "Failed to obtain authentication type",
            code=ConnectorCode.FAILED_TO_OBTAIN_AUTH_TYPE,
            error_type="FailedToObtainAuthType",
            connector=connector,
            details={"received": received} if received else None,
        )


class RequestEncodingFailed(ConnectorError):
    def __init__(self, *, connector: Optional[str] = None, context: Optional[str] = None):
        super().__init__(
            "Failed to encode connector request",
            code=ConnectorCode.REQUEST_ENCODING_FAILED,
            error_type="RequestEncodingFailed",
            connector=connector,
            details={"context": context} if context else None,
        )


class ResponseDeserializationFailed(ConnectorError):
    """Raised when connector bytes do not match the declared schema.

    The original bytes are kept on `raw_response`; a lossy text copy goes
    into `details` so the error stays diagnosable once serialized.
    """

    def __init__(
        self,
        *,
        connector: Optional[str] = None,
        context: Optional[str] = None,
        raw_response: bytes = b"",
    ):
        super().__init__(
            "Failed to deserialize connector response",
            code=ConnectorCode.RESPONSE_DESERIALIZATION_FAILED,
            error_type="ResponseDeserializationFailed",
            connector=connector,
            details={
                "context": context,
                "raw_response": raw_response.decode("utf-8", errors="replace"),
            },
        )
        self.raw_response = raw_response


class ResponseHandlingFailed(ConnectorError):
    def __init__(self, *, connector: Optional[str] = None, context: Optional[str] = None):
        super().__init__(
            "Failed to handle connector response",
            code=ConnectorCode.RESPONSE_HANDLING_FAILED,
            error_type="ResponseHandlingFailed",
            connector=connector,
            details={"context": context} if context else None,
        )


class MissingConnectorTransactionID(ConnectorError):
    def __init__(self, *, connector: Optional[str] = None):
        super().__init__(
            "Missing connector transaction ID",
            code=ConnectorCode.MISSING_CONNECTOR_TRANSACTION_ID,
            error_type="MissingConnectorTransactionID",
            connector=connector,
        )


class WebhooksNotImplemented(ConnectorError):
    def __init__(self, *, connector: Optional[str] = None):
        super().__init__(
            "Webhooks are not implemented for this connector",
            code=ConnectorCode.WEBHOOKS_NOT_IMPLEMENTED,
            error_type="WebhooksNotImplemented",
            connector=connector,
        )


class CaptureMethodNotSupported(ConnectorError):
    def __init__(self, capture_method: str, *, connector: Optional[str] = None):
        super().__init__(
            f"Capture method {capture_method} is not supported",
            code=ConnectorCode.CAPTURE_METHOD_NOT_SUPPORTED,
            error_type="CaptureMethodNotSupported",
            connector=connector,
            details={"capture_method": capture_method},
        )


class MissingRequiredField(ConnectorError):
    def __init__(self, field_name: str, *, connector: Optional[str] = None):
        super().__init__(
            f"Missing required field: {field_name}",
            code=ConnectorCode.MISSING_REQUIRED_FIELD,
            error_type="MissingRequiredField",
            connector=connector,
            details={"field_name": field_name},
        )
        self.field = field_name


class ConnectorNotConfigured(ConnectorError):
    def __init__(self, *, connector: Optional[str] = None):
        super().__init__(
            f"No configuration found for connector {connector}",
            code=ConnectorCode.CONNECTOR_NOT_CONFIGURED,
            error_type="ConnectorNotConfigured",
            connector=connector,
        )
