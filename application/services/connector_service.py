"""
Connector processing step: the single entry the orchestration layer uses to
run one flow of one connector.

This module depends only on the application ports and DTOs. The transport is
injected by the caller, keeping network I/O outside the connector hooks.
Nothing here retries; a raised error means the call did not produce a
canonical result and the caller decides what to do next.
"""
from __future__ import annotations

import dataclasses
from typing import Protocol, TypeVar

from application.dtos.connector import CallConnectorAction, ConnectorActionKind
from application.dtos.http import Request, Response
from application.ports.connector import ConnectorIntegration
from core.logging_config import get_logger
from core.settings import Connectors
from domain.connector.router_data import RouterData


logger = get_logger(__name__)

FlowT = TypeVar("FlowT")
ReqT = TypeVar("ReqT")
RespT = TypeVar("RespT")


class Transport(Protocol):
    async def send(self, request: Request) -> Response: ...


async def execute_connector_processing_step(
    integration: ConnectorIntegration[FlowT, ReqT, RespT],
    router_data: RouterData[FlowT, ReqT, RespT],
    connectors: Connectors,
    transport: Transport,
    call_connector_action: CallConnectorAction = CallConnectorAction.trigger(),
) -> RouterData[FlowT, ReqT, RespT]:
    """Run one connector call and return the envelope with its response slot set.

    Gateway-level failures (non-2xx with a parseable error body) come back as
    an ErrorResponse in `response`; integration failures raise ConnectorError.
    """
    action = call_connector_action.kind
    log = logger.bind(
        connector=router_data.connector,
        payment_id=router_data.payment_id,
        flow=getattr(router_data.flow, "__name__", str(router_data.flow)),
        action=action.value,
    )

    if action is ConnectorActionKind.AVOID:
        log.info("connector_call_avoided")
        return router_data

    if action is ConnectorActionKind.STATUS_UPDATE:
        log.info("connector_status_update", status=call_connector_action.status)
        return dataclasses.replace(router_data, status=call_connector_action.status)

    if action is ConnectorActionKind.HANDLE_RESPONSE:
        response = Response(status_code=200, response=call_connector_action.payload or b"")
        return integration.handle_response(router_data, response)

    request = integration.build_request(router_data, connectors)
    if request is None:
        log.info("connector_request_skipped")
        return router_data

    log.info("connector_request", method=request.method.value, url=request.url)
    response = await transport.send(request)
    log.info("connector_response", status_code=response.status_code)

    if response.is_success:
        return integration.handle_response(router_data, response)

    error = integration.get_error_response(response)
    log.info("connector_error_response", status_code=error.status_code, code=error.code)
    return router_data.with_response(error)
