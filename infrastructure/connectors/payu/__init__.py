"""
PayU connector (REST API v2.1, `v2_1/orders`).

Auth is a BodyKey: `api_key` is the OAuth access token sent as a Bearer
header and `key1` is the merchant POS id carried in the order body.
"""
from __future__ import annotations

from typing import Optional

from application.dtos.http import Method, Response
from core.logging_config import get_logger
from core.settings import Connectors
from domain.connector.auth import ConnectorAuthType
from domain.connector.router_data import (
    Authorize,
    Capture,
    ErrorResponse,
    Execute,
    PaymentsAuthorizeRouterData,
    PaymentsCancelRouterData,
    PaymentsCaptureRouterData,
    PaymentsSyncRouterData,
    PSync,
    RefundsRouterData,
    ResponseRouterData,
    RSync,
    Void,
)
from infrastructure.connectors.base import AUTHORIZATION, BaseConnector, ConnectorIntegration
from infrastructure.connectors.payu import transformers as payu
from infrastructure.connectors.utils import encode, parse_struct


logger = get_logger(__name__)

ORDERS_PATH = "v2_1/orders"


class PayuAuthorize(ConnectorIntegration):
    flow = Authorize
    http_method = Method.POST
    response_model = payu.PayuPaymentsResponse

    def get_url(self, req: PaymentsAuthorizeRouterData, connectors: Connectors) -> str:
        return f"{self.connector.base_url(connectors)}{ORDERS_PATH}"

    def get_request_body(self, req: PaymentsAuthorizeRouterData) -> Optional[str]:
        connector_router_data = payu.PayuRouterData.from_amount(
            self.connector.get_currency_unit(),
            req.request.currency,
            req.request.amount,
            req,
        )
        connector_req = payu.PayuPaymentsRequest.from_router_data(connector_router_data)
        return encode(connector_req, connector=self.connector.id)

    def transform_response(self, item: ResponseRouterData) -> PaymentsAuthorizeRouterData:
        return payu.payments_response_to_router_data(item)


class PayuCapture(ConnectorIntegration):
    flow = Capture
    http_method = Method.PUT
    response_model = payu.PayuPaymentsCaptureResponse

    def get_url(self, req: PaymentsCaptureRouterData, connectors: Connectors) -> str:
        return (
            f"{self.connector.base_url(connectors)}{ORDERS_PATH}/"
            f"{req.request.connector_transaction_id}/status"
        )

    def get_request_body(self, req: PaymentsCaptureRouterData) -> Optional[str]:
        connector_req = payu.PayuPaymentsCaptureRequest.from_router_data(req)
        return encode(connector_req, connector=self.connector.id)

    def transform_response(self, item: ResponseRouterData) -> PaymentsCaptureRouterData:
        return payu.capture_response_to_router_data(item)


class PayuVoid(ConnectorIntegration):
    flow = Void
    http_method = Method.DELETE
    response_model = payu.PayuPaymentsCancelResponse

    def get_url(self, req: PaymentsCancelRouterData, connectors: Connectors) -> str:
        order_id = req.request.get_connector_transaction_id(connector=self.connector.id)
        return f"{self.connector.base_url(connectors)}{ORDERS_PATH}/{order_id}"

    def transform_response(self, item: ResponseRouterData) -> PaymentsCancelRouterData:
        return payu.cancel_response_to_router_data(item)


class PayuSync(ConnectorIntegration):
    flow = PSync
    http_method = Method.GET
    response_model = payu.PayuPaymentsSyncResponse

    def get_url(self, req: PaymentsSyncRouterData, connectors: Connectors) -> str:
        order_id = req.request.connector_transaction_id.get_connector_transaction_id(
            connector=self.connector.id
        )
        return f"{self.connector.base_url(connectors)}{ORDERS_PATH}/{order_id}"

    def transform_response(self, item: ResponseRouterData) -> PaymentsSyncRouterData:
        return payu.sync_response_to_router_data(item)


class PayuRefundExecute(ConnectorIntegration):
    flow = Execute
    http_method = Method.POST
    response_model = payu.PayuRefundResponse

    def get_url(self, req: RefundsRouterData, connectors: Connectors) -> str:
        return (
            f"{self.connector.base_url(connectors)}{ORDERS_PATH}/"
            f"{req.request.connector_transaction_id}/refunds"
        )

    def get_request_body(self, req: RefundsRouterData) -> Optional[str]:
        connector_router_data = payu.PayuRouterData.from_amount(
            self.connector.get_currency_unit(),
            req.request.currency,
            req.request.refund_amount,
            req,
        )
        connector_req = payu.PayuRefundRequest.from_router_data(connector_router_data)
        return encode(connector_req, connector=self.connector.id)

    def transform_response(self, item: ResponseRouterData) -> RefundsRouterData:
        return payu.refund_response_to_router_data(item)


class PayuRefundSync(ConnectorIntegration):
    flow = RSync
    http_method = Method.GET
    response_model = payu.PayuRefundSyncResponse

    def get_url(self, req: RefundsRouterData, connectors: Connectors) -> str:
        return (
            f"{self.connector.base_url(connectors)}{ORDERS_PATH}/"
            f"{req.request.connector_transaction_id}/refunds"
        )

    def transform_response(self, item: ResponseRouterData) -> RefundsRouterData:
        return payu.refund_sync_response_to_router_data(item)


class Payu(BaseConnector):
    id = "payu"
    integrations = {
        Authorize: PayuAuthorize,
        Capture: PayuCapture,
        Void: PayuVoid,
        PSync: PayuSync,
        Execute: PayuRefundExecute,
        RSync: PayuRefundSync,
    }

    def get_auth_header(self, auth_type: ConnectorAuthType) -> list[tuple[str, str]]:
        auth = payu.PayuAuthType.from_auth_type(auth_type)
        return [(AUTHORIZATION, auth.api_key.get_secret_value())]

    def build_error_response(self, res: Response) -> ErrorResponse:
        response = parse_struct(
            res.response,
            payu.PayuErrorResponse,
            connector=self.id,
            context="Payu ErrorResponse",
        )
        logger.debug("connector_error_response", connector=self.id, code=response.status.status_code, status_code=res.status_code)
        return response.to_error_response(res.status_code)


__all__ = ["Payu"]
