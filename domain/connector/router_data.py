"""
Per-call envelope (RouterData) and the flow-specific payloads it carries.

A RouterData is built by the orchestration layer for one connector call,
handed to a flow integration, and returned with its `response` slot filled.
The slot holds either the flow's success payload or an ErrorResponse, so
success and error can never coexist. Return-path updates go through
`with_response`/`dataclasses.replace` and carry every other field over.
"""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Generic, Optional, TypeVar, Union

from domain.connector.auth import ConnectorAuthType
from domain.connector.enums import (
    AttemptStatus,
    AuthenticationType,
    CaptureMethod,
    Currency,
    CurrencyUnit,
    PaymentMethodType,
    RefundStatus,
)
from domain.connector.exceptions import (
    CaptureMethodNotSupported,
    MissingConnectorTransactionID,
)
from domain.connector.payment_methods import PaymentMethodData


# Flow markers. They carry no data; RouterData is parameterised by them so
# each flow integration only accepts envelopes of its own flow.
class Authorize:
    pass


class Capture:
    pass


class Void:
    pass


class PSync:
    pass


class Execute:
    pass


class RSync:
    pass


class Session:
    pass


class Verify:
    pass


FlowT = TypeVar("FlowT")
ReqT = TypeVar("ReqT")
RespT = TypeVar("RespT")
T = TypeVar("T")


# ---- Response identifiers -------------------------------------------------

@dataclass(frozen=True)
class ResponseId:
    """Connector reference for a payment: a transaction id, opaque encoded data, or nothing."""

    connector_transaction_id: Optional[str] = None
    encoded_data: Optional[str] = None

    @classmethod
    def transaction(cls, transaction_id: str) -> "ResponseId":
        return cls(connector_transaction_id=transaction_id)

    @classmethod
    def encoded(cls, data: str) -> "ResponseId":
        return cls(encoded_data=data)

    @classmethod
    def none(cls) -> "ResponseId":
        return cls()

    def get_connector_transaction_id(self, connector: Optional[str] = None) -> str:
        if not self.connector_transaction_id:
            raise MissingConnectorTransactionID(connector=connector)
        return self.connector_transaction_id


# ---- Request payloads -----------------------------------------------------

@dataclass(frozen=True)
class BrowserInformation:
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    accept_header: Optional[str] = None
    language: Optional[str] = None


@dataclass(frozen=True)
class PaymentsAuthorizeData:
    amount: int
    currency: Currency
    payment_method_data: PaymentMethodData
    confirm: bool = True
    capture_method: Optional[CaptureMethod] = None
    statement_descriptor_suffix: Optional[str] = None
    setup_future_usage: Optional[str] = None
    off_session: Optional[bool] = None
    browser_info: Optional[BrowserInformation] = None
    email: Optional[str] = None

    def is_auto_capture(self, connector: Optional[str] = None) -> bool:
        if self.capture_method in (None, CaptureMethod.AUTOMATIC):
            return True
        if self.capture_method is CaptureMethod.MANUAL:
            return False
        raise CaptureMethodNotSupported(self.capture_method.value, connector=connector)


@dataclass(frozen=True)
class PaymentsCaptureData:
    amount_to_capture: int
    currency: Currency
    connector_transaction_id: str
    amount: int


@dataclass(frozen=True)
class PaymentsCancelData:
    connector_transaction_id: Optional[str]
    cancellation_reason: Optional[str] = None

    def get_connector_transaction_id(self, connector: Optional[str] = None) -> str:
        if not self.connector_transaction_id:
            raise MissingConnectorTransactionID(connector=connector)
        return self.connector_transaction_id


@dataclass(frozen=True)
class PaymentsSyncData:
    connector_transaction_id: ResponseId
    encoded_data: Optional[str] = None
    capture_method: Optional[CaptureMethod] = None


@dataclass(frozen=True)
class RefundsData:
    refund_id: str
    connector_transaction_id: str
    currency: Currency
    amount: int
    refund_amount: int
    connector_refund_id: Optional[str] = None
    reason: Optional[str] = None
    connector_metadata: Optional[dict[str, Any]] = None


@dataclass(frozen=True)
class PaymentsSessionData:
    amount: int
    currency: Currency


@dataclass(frozen=True)
class VerifyRequestData:
    currency: Currency
    payment_method_data: PaymentMethodData
    confirm: bool = True


# ---- Response payloads ----------------------------------------------------

@dataclass(frozen=True)
class RedirectForm:
    endpoint: str
    method: str = "GET"
    form_fields: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class PaymentsResponseData:
    """Transaction response. Optional fields stay None unless the connector supplies them."""

    resource_id: ResponseId
    redirection_data: Optional[RedirectForm] = None
    mandate_reference: Optional[str] = None
    connector_metadata: Optional[dict[str, Any]] = None
    network_txn_id: Optional[str] = None
    connector_response_reference_id: Optional[str] = None
    incremental_authorization_allowed: Optional[bool] = None


@dataclass(frozen=True)
class RefundsResponseData:
    connector_refund_id: str
    refund_status: RefundStatus


@dataclass(frozen=True)
class ErrorResponse:
    """Canonical connector error. `code` and `message` are always set."""

    status_code: int
    code: str
    message: str
    reason: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.code or not self.message:
            raise ValueError("ErrorResponse requires both code and message")


# ---- Envelope ---------------------------------------------------------------

@dataclass(frozen=True)
class RouterData(Generic[FlowT, ReqT, RespT]):
    flow: type
    merchant_id: str
    connector: str
    payment_id: str
    connector_auth_type: ConnectorAuthType
    request: ReqT
    attempt_id: Optional[str] = None
    status: AttemptStatus = AttemptStatus.PENDING
    router_return_url: Optional[str] = None
    return_url: Optional[str] = None
    auth_type: AuthenticationType = AuthenticationType.NO_THREE_DS
    payment_method: PaymentMethodType = PaymentMethodType.CARD
    description: Optional[str] = None
    payment_method_id: Optional[str] = None
    connector_meta_data: Optional[dict[str, Any]] = None
    amount_captured: Optional[int] = None
    response: Optional[Union[RespT, ErrorResponse]] = None

    @property
    def is_error(self) -> bool:
        return isinstance(self.response, ErrorResponse)

    @property
    def is_success(self) -> bool:
        return self.response is not None and not self.is_error

    def with_response(
        self,
        response: Union[RespT, ErrorResponse],
        **changes: Any,
    ) -> "RouterData[FlowT, ReqT, RespT]":
        """Return a copy with the response slot filled; `changes` may update status etc."""
        return dataclasses.replace(self, response=response, **changes)


PaymentsAuthorizeRouterData = RouterData[Authorize, PaymentsAuthorizeData, PaymentsResponseData]
PaymentsCaptureRouterData = RouterData[Capture, PaymentsCaptureData, PaymentsResponseData]
PaymentsCancelRouterData = RouterData[Void, PaymentsCancelData, PaymentsResponseData]
PaymentsSyncRouterData = RouterData[PSync, PaymentsSyncData, PaymentsResponseData]
RefundsRouterData = RouterData[Any, RefundsData, RefundsResponseData]
RefundExecuteRouterData = RouterData[Execute, RefundsData, RefundsResponseData]
RefundSyncRouterData = RouterData[RSync, RefundsData, RefundsResponseData]


@dataclass(frozen=True)
class ConnectorRouterData(Generic[T]):
    """Pairs the amount a connector expects with the wrapped envelope."""

    amount: int
    router_data: T

    @classmethod
    def from_amount(
        cls,
        currency_unit: CurrencyUnit,
        currency: Currency,
        amount: int,
        item: T,
    ):
        # Amount arrives validated in minor units; connectors that need another
        # representation override this.
        return cls(amount=amount, router_data=item)


@dataclass(frozen=True)
class ResponseRouterData(Generic[FlowT, T, ReqT, RespT]):
    """A parsed wire response paired with the envelope it answers."""

    response: T
    data: RouterData[FlowT, ReqT, RespT]
    http_code: int
