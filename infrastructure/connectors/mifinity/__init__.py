"""
Mifinity connector.

Card-only authorize with an inline auto-capture flag, plus capture, void,
sync, refund and refund sync against the `api/payments` resource. Auth is a
single API key sent verbatim in the Authorization header.
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
from infrastructure.connectors.mifinity import transformers as mifinity
from infrastructure.connectors.utils import encode, parse_struct


logger = get_logger(__name__)


class MifinityAuthorize(ConnectorIntegration):
    flow = Authorize
    http_method = Method.POST
    response_model = mifinity.MifinityPaymentsResponse

    def get_url(self, req: PaymentsAuthorizeRouterData, connectors: Connectors) -> str:
        return f"{self.connector.base_url(connectors)}api/payments"

    def get_request_body(self, req: PaymentsAuthorizeRouterData) -> Optional[str]:
        connector_router_data = mifinity.MifinityRouterData.from_amount(
            self.connector.get_currency_unit(),
            req.request.currency,
            req.request.amount,
            req,
        )
        connector_req = mifinity.MifinityPaymentsRequest.from_router_data(connector_router_data)
        return encode(connector_req, connector=self.connector.id)

    def transform_response(self, item: ResponseRouterData) -> PaymentsAuthorizeRouterData:
        return mifinity.payments_response_to_router_data(item)


class MifinityCapture(ConnectorIntegration):
    flow = Capture
    http_method = Method.POST
    response_model = mifinity.MifinityPaymentsResponse

    def get_url(self, req: PaymentsCaptureRouterData, connectors: Connectors) -> str:
        return (
            f"{self.connector.base_url(connectors)}api/payments/"
            f"{req.request.connector_transaction_id}/capture"
        )

    def get_request_body(self, req: PaymentsCaptureRouterData) -> Optional[str]:
        connector_router_data = mifinity.MifinityRouterData.from_amount(
            self.connector.get_currency_unit(),
            req.request.currency,
            req.request.amount_to_capture,
            req,
        )
        connector_req = mifinity.MifinityCaptureRequest.from_router_data(connector_router_data)
        return encode(connector_req, connector=self.connector.id)

    def transform_response(self, item: ResponseRouterData) -> PaymentsCaptureRouterData:
        return mifinity.payments_response_to_router_data(item)


class MifinityVoid(ConnectorIntegration):
    flow = Void
    http_method = Method.POST
    response_model = mifinity.MifinityPaymentsResponse

    def get_url(self, req: PaymentsCancelRouterData, connectors: Connectors) -> str:
        transaction_id = mifinity.MifinityVoidRequest.from_router_data(req).transaction_id
        return f"{self.connector.base_url(connectors)}api/payments/{transaction_id}/void"

    def get_request_body(self, req: PaymentsCancelRouterData) -> Optional[str]:
        connector_req = mifinity.MifinityVoidRequest.from_router_data(req)
        return encode(connector_req, connector=self.connector.id)

    def transform_response(self, item: ResponseRouterData) -> PaymentsCancelRouterData:
        return mifinity.void_response_to_router_data(item)


class MifinitySync(ConnectorIntegration):
    flow = PSync
    http_method = Method.GET
    response_model = mifinity.MifinityPaymentsResponse

    def get_url(self, req: PaymentsSyncRouterData, connectors: Connectors) -> str:
        transaction_id = mifinity.MifinitySyncRequest.from_router_data(req).transaction_id
        return f"{self.connector.base_url(connectors)}api/payments/{transaction_id}"

    def transform_response(self, item: ResponseRouterData) -> PaymentsSyncRouterData:
        return mifinity.payments_response_to_router_data(item)


class MifinityRefundExecute(ConnectorIntegration):
    flow = Execute
    http_method = Method.POST
    response_model = mifinity.MifinityRefundResponse

    def get_url(self, req: RefundsRouterData, connectors: Connectors) -> str:
        return (
            f"{self.connector.base_url(connectors)}api/payments/"
            f"{req.request.connector_transaction_id}/refunds"
        )

    def get_request_body(self, req: RefundsRouterData) -> Optional[str]:
        connector_router_data = mifinity.MifinityRouterData.from_amount(
            self.connector.get_currency_unit(),
            req.request.currency,
            req.request.refund_amount,
            req,
        )
        connector_req = mifinity.MifinityRefundRequest.from_router_data(connector_router_data)
        return encode(connector_req, connector=self.connector.id)

    def transform_response(self, item: ResponseRouterData) -> RefundsRouterData:
        return mifinity.refund_response_to_router_data(item)


class MifinityRefundSync(ConnectorIntegration):
    flow = RSync
    http_method = Method.GET
    response_model = mifinity.MifinityRefundResponse

    def get_url(self, req: RefundsRouterData, connectors: Connectors) -> str:
        return (
            f"{self.connector.base_url(connectors)}api/payments/"
            f"{req.request.connector_transaction_id}/refunds"
        )

    def transform_response(self, item: ResponseRouterData) -> RefundsRouterData:
        return mifinity.refund_response_to_router_data(item)


class Mifinity(BaseConnector):
    id = "mifinity"
    integrations = {
        Authorize: MifinityAuthorize,
        Capture: MifinityCapture,
        Void: MifinityVoid,
        PSync: MifinitySync,
        Execute: MifinityRefundExecute,
        RSync: MifinityRefundSync,
    }

    def get_auth_header(self, auth_type: ConnectorAuthType) -> list[tuple[str, str]]:
        auth = mifinity.MifinityAuthType.from_auth_type(auth_type)
        return [(AUTHORIZATION, auth.api_key.get_secret_value())]

    def build_error_response(self, res: Response) -> ErrorResponse:
        response = parse_struct(
            res.response,
            mifinity.MifinityErrorResponse,
            connector=self.id,
            context="Mifinity ErrorResponse",
        )
        logger.debug("connector_error_response", connector=self.id, code=response.code, status_code=res.status_code)
        return response.to_error_response()


__all__ = ["Mifinity"]
