"""
Base connector implementing shared concerns: headers, auth, url, request
assembly, response parsing and the "not supported" defaults.

Concrete connectors subclass BaseConnector, register one ConnectorIntegration
subclass per flow they support and implement the connector-specific hooks.
Any flow left unregistered resolves to the plain ConnectorIntegration, whose
hooks raise FlowNotImplemented instead of returning an empty success.
"""
from __future__ import annotations

from typing import Any, ClassVar, Generic, Optional, TypeVar

from pydantic import BaseModel

from application.dtos.connector import CallConnectorAction
from application.dtos.http import Method, Request, RequestBuilder, Response
from core.logging_config import get_logger
from core.settings import Connectors
from domain.connector.auth import ConnectorAuthType
from domain.connector.enums import CurrencyUnit, IncomingWebhookEvent
from domain.connector.exceptions import (
    ConnectorError,
    FlowNotImplemented,
    NotImplementedFeature,
    ResponseHandlingFailed,
    WebhooksNotImplemented,
)
from domain.connector.router_data import ErrorResponse, ResponseRouterData, RouterData
from infrastructure.connectors.utils import parse_struct


logger = get_logger(__name__)

FlowT = TypeVar("FlowT")
ReqT = TypeVar("ReqT")
RespT = TypeVar("RespT")

CONTENT_TYPE = "Content-Type"
AUTHORIZATION = "Authorization"


class ConnectorIntegration(Generic[FlowT, ReqT, RespT]):
    """One flow of one connector.

    The base class is also the default for unsupported flows: with no
    `http_method` and no `response_model` set, the url/request/response hooks
    raise FlowNotImplemented.
    """

    flow: ClassVar[Optional[type]] = None
    http_method: ClassVar[Optional[Method]] = None
    response_model: ClassVar[Optional[type[BaseModel]]] = None

    def __init__(self, connector: "BaseConnector", flow: Optional[type] = None) -> None:
        self.connector = connector
        self.flow_type: Optional[type] = flow or type(self).flow

    @property
    def flow_name(self) -> str:
        return self.flow_type.__name__ if self.flow_type else "Unknown"

    def _not_implemented(self) -> FlowNotImplemented:
        return FlowNotImplemented(self.flow_name, connector=self.connector.id)

    def get_headers(self, req: RouterData[FlowT, ReqT, RespT], connectors: Connectors) -> list[tuple[str, str]]:
        return self.connector.build_headers(req, connectors)

    def get_content_type(self) -> str:
        return self.connector.common_get_content_type()

    def get_url(self, req: RouterData[FlowT, ReqT, RespT], connectors: Connectors) -> str:
        raise self._not_implemented()

    def get_request_body(self, req: RouterData[FlowT, ReqT, RespT]) -> Optional[str]:
        return None

    def build_request(self, req: RouterData[FlowT, ReqT, RespT], connectors: Connectors) -> Optional[Request]:
        if self.http_method is None:
            raise self._not_implemented()
        headers = self.get_headers(req, connectors)
        url = self.get_url(req, connectors)
        body = self.get_request_body(req)
        return (
            RequestBuilder()
            .method(self.http_method)
            .url(url)
            .headers(headers)
            .body(body)
            .build()
        )

    def handle_response(
        self, data: RouterData[FlowT, ReqT, RespT], res: Response
    ) -> RouterData[FlowT, ReqT, RespT]:
        if self.response_model is None:
            raise self._not_implemented()
        context = f"{self.connector.id} {self.response_model.__name__}"
        response = parse_struct(res.response, self.response_model, connector=self.connector.id, context=context)
        logger.debug(
            "connector_response_parsed",
            connector=self.connector.id,
            flow=self.flow_name,
            response=repr(response),
        )
        try:
            return self.transform_response(
                ResponseRouterData(response=response, data=data, http_code=res.status_code)
            )
        except ResponseHandlingFailed:
            raise
        except ConnectorError as exc:
            raise ResponseHandlingFailed(connector=self.connector.id, context=context) from exc

    def transform_response(self, item: ResponseRouterData) -> RouterData[FlowT, ReqT, RespT]:
        raise self._not_implemented()

    def get_error_response(self, res: Response) -> ErrorResponse:
        return self.connector.build_error_response(res)


class BaseConnector:
    id: ClassVar[str] = "base"
    integrations: ClassVar[dict[type, type[ConnectorIntegration]]] = {}

    # ConnectorCommon

    def common_get_content_type(self) -> str:
        return "application/json"

    def get_currency_unit(self) -> CurrencyUnit:
        return CurrencyUnit.MINOR

    def base_url(self, connectors: Connectors) -> str:
        return connectors.get(self.id).base_url

    def get_auth_header(self, auth_type: ConnectorAuthType) -> list[tuple[str, str]]:
        return []

    def build_error_response(self, res: Response) -> ErrorResponse:
        raise NotImplementedFeature("Error response handling", connector=self.id)

    def build_headers(self, req: RouterData, connectors: Connectors) -> list[tuple[str, str]]:
        headers = [(CONTENT_TYPE, self.common_get_content_type())]
        headers.extend(self.get_auth_header(req.connector_auth_type))
        return headers

    def get_connector_integration(self, flow: type) -> ConnectorIntegration:
        integration_cls = self.integrations.get(flow, ConnectorIntegration)
        return integration_cls(self, flow=flow)

    def supports(self, flow: type) -> bool:
        return flow in self.integrations

    # IncomingWebhook

    def get_webhook_object_reference_id(self, body: bytes) -> str:
        raise WebhooksNotImplemented(connector=self.id)

    def get_webhook_event_type(self, body: bytes) -> IncomingWebhookEvent:
        raise WebhooksNotImplemented(connector=self.id)

    def get_webhook_resource_object(self, body: bytes) -> Any:
        raise WebhooksNotImplemented(connector=self.id)

    # ConnectorRedirectResponse

    def get_flow_type(self, query_params: str) -> CallConnectorAction:
        return CallConnectorAction.trigger()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r})"
