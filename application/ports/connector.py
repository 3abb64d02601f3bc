"""
Connector integration ports (application/ports) exposing replaceable protocols.

The application depends on these Protocols; infrastructure provides one
connector implementation per gateway plus the "not supported" defaults.
"""
from __future__ import annotations

from typing import Any, Optional, Protocol, TypeVar, runtime_checkable

from application.dtos.connector import CallConnectorAction
from application.dtos.http import Request, Response
from core.settings import Connectors
from domain.connector.auth import ConnectorAuthType
from domain.connector.enums import CurrencyUnit, IncomingWebhookEvent
from domain.connector.router_data import ErrorResponse, RouterData


FlowT = TypeVar("FlowT")
ReqT = TypeVar("ReqT")
RespT = TypeVar("RespT")


@runtime_checkable
class ConnectorIntegration(Protocol[FlowT, ReqT, RespT]):
    """Per-flow hooks. Called in order: headers, content type, url, body, request.

    Hooks are synchronous and side-effect free; I/O belongs to the transport.
    """

    def get_headers(
        self, req: RouterData[FlowT, ReqT, RespT], connectors: Connectors
    ) -> list[tuple[str, str]]: ...

    def get_content_type(self) -> str: ...

    def get_url(self, req: RouterData[FlowT, ReqT, RespT], connectors: Connectors) -> str: ...

    def get_request_body(self, req: RouterData[FlowT, ReqT, RespT]) -> Optional[str]: ...

    def build_request(
        self, req: RouterData[FlowT, ReqT, RespT], connectors: Connectors
    ) -> Optional[Request]: ...

    def handle_response(
        self, data: RouterData[FlowT, ReqT, RespT], res: Response
    ) -> RouterData[FlowT, ReqT, RespT]: ...

    def get_error_response(self, res: Response) -> ErrorResponse: ...


@runtime_checkable
class ConnectorCommon(Protocol):
    """Connector-wide facts shared by every flow."""

    id: str

    def common_get_content_type(self) -> str: ...

    def get_currency_unit(self) -> CurrencyUnit: ...

    def base_url(self, connectors: Connectors) -> str: ...

    def get_auth_header(self, auth_type: ConnectorAuthType) -> list[tuple[str, str]]: ...

    def build_error_response(self, res: Response) -> ErrorResponse: ...


@runtime_checkable
class IncomingWebhook(Protocol):
    def get_webhook_object_reference_id(self, body: bytes) -> str: ...

    def get_webhook_event_type(self, body: bytes) -> IncomingWebhookEvent: ...

    def get_webhook_resource_object(self, body: bytes) -> Any: ...


@runtime_checkable
class ConnectorRedirectResponse(Protocol):
    def get_flow_type(self, query_params: str) -> CallConnectorAction: ...


@runtime_checkable
class Connector(ConnectorCommon, IncomingWebhook, ConnectorRedirectResponse, Protocol):
    def get_connector_integration(self, flow: type) -> ConnectorIntegration: ...
