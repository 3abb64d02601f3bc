"""
PayU (REST API v2.1) wire DTOs and their conversions.

PayU speaks camelCase JSON; every wire model here uses a camel alias
generator and is (de)serialized by alias.
"""
from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, SecretStr
from pydantic.alias_generators import to_camel

from domain.connector.auth import BodyKey, ConnectorAuthType
from domain.connector.enums import AttemptStatus, RefundStatus
from domain.connector.exceptions import (
    FailedToObtainAuthType,
    MissingRequiredField,
    NotImplementedFeature,
    ResponseHandlingFailed,
)
from domain.connector.payment_methods import Card, Wallet
from domain.connector.router_data import (
    ConnectorRouterData,
    ErrorResponse,
    PaymentsAuthorizeRouterData,
    PaymentsCaptureRouterData,
    PaymentsResponseData,
    RedirectForm,
    RefundsResponseData,
    RefundsRouterData,
    ResponseId,
    ResponseRouterData,
    RouterData,
)
from infrastructure.connectors.utils import ExposedSecret


CONNECTOR = "payu"
DEFAULT_CUSTOMER_IP = "127.0.0.1"

# PayU pay-by-link codes for tokenized wallets
WALLET_PAY_METHOD_VALUES = {
    "google_pay": "ap",
    "apple_pay": "jp",
}


class PayuRouterData(ConnectorRouterData):
    """PayU takes integer minor units."""


class _WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class _LenientEnum(str, Enum):
    """Status vocabulary whose unknown values fall back to `_default_`."""

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            for member in cls:
                if member.value == value.upper():
                    return member
        return cls._default_member()

    @classmethod
    def _default_member(cls):
        raise NotImplementedError


# ---- Auth -------------------------------------------------------------------

@dataclasses.dataclass(frozen=True)
class PayuAuthType:
    api_key: SecretStr
    merchant_pos_id: SecretStr

    @classmethod
    def from_auth_type(cls, auth_type: ConnectorAuthType) -> "PayuAuthType":
        if isinstance(auth_type, BodyKey):
            return cls(
                api_key=SecretStr(f"Bearer {auth_type.api_key.get_secret_value()}"),
                merchant_pos_id=auth_type.key1,
            )
        raise FailedToObtainAuthType(connector=CONNECTOR, received=getattr(auth_type, "auth_type", None))


# ---- Authorize --------------------------------------------------------------

class PayuCard(_WireModel):
    number: ExposedSecret
    expiration_month: ExposedSecret
    expiration_year: ExposedSecret
    cvv: ExposedSecret


class PayuCardPayMethod(_WireModel):
    card: PayuCard


class PayuWalletPayMethod(_WireModel):
    type: Literal["PBL"] = "PBL"
    value: str
    authorization_code: ExposedSecret


class PayuPaymentMethod(_WireModel):
    pay_method: Union[PayuCardPayMethod, PayuWalletPayMethod]


def _pay_method_from(payment_method_data) -> Union[PayuCardPayMethod, PayuWalletPayMethod]:
    if isinstance(payment_method_data, Card):
        return PayuCardPayMethod(
            card=PayuCard(
                number=payment_method_data.card_number,
                expiration_month=payment_method_data.card_exp_month,
                expiration_year=payment_method_data.card_exp_year,
                cvv=payment_method_data.card_cvc,
            )
        )
    if isinstance(payment_method_data, Wallet) and payment_method_data.wallet_type in WALLET_PAY_METHOD_VALUES:
        if payment_method_data.token is None:
            raise MissingRequiredField("payment_method_data.wallet.token", connector=CONNECTOR)
        return PayuWalletPayMethod(
            value=WALLET_PAY_METHOD_VALUES[payment_method_data.wallet_type],
            authorization_code=payment_method_data.token,
        )
    raise NotImplementedFeature("Payment methods", connector=CONNECTOR)


class PayuPaymentsRequest(_WireModel):
    customer_ip: str
    merchant_pos_id: ExposedSecret
    total_amount: int
    currency_code: str
    description: str
    pay_methods: PayuPaymentMethod
    continue_url: Optional[str] = None

    @classmethod
    def from_router_data(cls, item: PayuRouterData) -> "PayuPaymentsRequest":
        router_data: PaymentsAuthorizeRouterData = item.router_data
        auth = PayuAuthType.from_auth_type(router_data.connector_auth_type)
        pay_method = _pay_method_from(router_data.request.payment_method_data)
        if not router_data.description:
            raise MissingRequiredField("description", connector=CONNECTOR)
        browser_info = router_data.request.browser_info
        customer_ip = (browser_info.ip_address if browser_info else None) or DEFAULT_CUSTOMER_IP
        return cls(
            customer_ip=customer_ip,
            merchant_pos_id=auth.merchant_pos_id,
            total_amount=item.amount,
            currency_code=router_data.request.currency.value,
            description=router_data.description,
            pay_methods=PayuPaymentMethod(pay_method=pay_method),
            continue_url=router_data.router_return_url,
        )


class PayuPaymentStatus(_LenientEnum):
    SUCCESS = "SUCCESS"
    WARNING_CONTINUE_REDIRECT = "WARNING_CONTINUE_REDIRECT"
    WARNING_CONTINUE_3DS = "WARNING_CONTINUE_3DS"
    WARNING_CONTINUE_CVV = "WARNING_CONTINUE_CVV"
    PENDING = "PENDING"

    @classmethod
    def _default_member(cls):
        return cls.PENDING


PAYMENT_STATUS_TO_ATTEMPT_STATUS = {
    # SUCCESS only means the order was accepted; settlement is learnt via sync.
    PayuPaymentStatus.SUCCESS: AttemptStatus.PENDING,
    PayuPaymentStatus.WARNING_CONTINUE_REDIRECT: AttemptStatus.AUTHENTICATION_PENDING,
    PayuPaymentStatus.WARNING_CONTINUE_3DS: AttemptStatus.AUTHENTICATION_PENDING,
    PayuPaymentStatus.WARNING_CONTINUE_CVV: AttemptStatus.AUTHENTICATION_PENDING,
    PayuPaymentStatus.PENDING: AttemptStatus.PENDING,
}


def to_attempt_status(status: PayuPaymentStatus) -> AttemptStatus:
    return PAYMENT_STATUS_TO_ATTEMPT_STATUS[status]


class PayuPaymentStatusData(_WireModel):
    status_code: PayuPaymentStatus = PayuPaymentStatus.PENDING
    severity: Optional[str] = None
    status_desc: Optional[str] = None


class PayuPaymentsResponse(_WireModel):
    status: PayuPaymentStatusData
    redirect_uri: Optional[str] = None
    iframe_allowed: Optional[bool] = None
    three_ds_protocol_version: Optional[str] = Field(default=None, alias="threeDsProtocolVersion")
    order_id: str
    ext_order_id: Optional[str] = None


def payments_response_to_router_data(
    item: ResponseRouterData[object, PayuPaymentsResponse, object, PaymentsResponseData],
) -> RouterData:
    status = to_attempt_status(item.response.status.status_code)
    redirection_data = None
    if status is AttemptStatus.AUTHENTICATION_PENDING and item.response.redirect_uri:
        redirection_data = RedirectForm(endpoint=item.response.redirect_uri, method="GET")
    return item.data.with_response(
        PaymentsResponseData(
            resource_id=ResponseId.transaction(item.response.order_id),
            redirection_data=redirection_data,
            mandate_reference=None,
            connector_metadata=None,
            network_txn_id=None,
            connector_response_reference_id=item.response.ext_order_id,
            incremental_authorization_allowed=None,
        ),
        status=status,
    )


# ---- Capture ----------------------------------------------------------------

class PayuOrderStatus(_LenientEnum):
    NEW = "NEW"
    PENDING = "PENDING"
    WAITING_FOR_CONFIRMATION = "WAITING_FOR_CONFIRMATION"
    COMPLETED = "COMPLETED"
    CANCELED = "CANCELED"

    @classmethod
    def _default_member(cls):
        return cls.PENDING


ORDER_STATUS_TO_ATTEMPT_STATUS = {
    PayuOrderStatus.NEW: AttemptStatus.PAYMENT_METHOD_AWAITED,
    PayuOrderStatus.PENDING: AttemptStatus.PENDING,
    PayuOrderStatus.WAITING_FOR_CONFIRMATION: AttemptStatus.AUTHORIZED,
    PayuOrderStatus.COMPLETED: AttemptStatus.CHARGED,
    PayuOrderStatus.CANCELED: AttemptStatus.VOIDED,
}


class PayuPaymentsCaptureRequest(_WireModel):
    order_id: str
    order_status: PayuOrderStatus

    @classmethod
    def from_router_data(cls, router_data: PaymentsCaptureRouterData) -> "PayuPaymentsCaptureRequest":
        return cls(
            order_id=router_data.request.connector_transaction_id,
            order_status=PayuOrderStatus.COMPLETED,
        )


class PayuPaymentsCaptureResponse(_WireModel):
    status: PayuPaymentStatusData


def capture_response_to_router_data(
    item: ResponseRouterData[object, PayuPaymentsCaptureResponse, object, PaymentsResponseData],
) -> RouterData:
    succeeded = item.response.status.status_code is PayuPaymentStatus.SUCCESS
    return item.data.with_response(
        PaymentsResponseData(resource_id=ResponseId.transaction(item.data.request.connector_transaction_id)),
        status=AttemptStatus.CHARGED if succeeded else AttemptStatus.PENDING,
    )


# ---- Void -------------------------------------------------------------------

class PayuPaymentsCancelResponse(_WireModel):
    order_id: str
    ext_order_id: Optional[str] = None
    status: PayuPaymentStatusData


def cancel_response_to_router_data(
    item: ResponseRouterData[object, PayuPaymentsCancelResponse, object, PaymentsResponseData],
) -> RouterData:
    succeeded = item.response.status.status_code is PayuPaymentStatus.SUCCESS
    return item.data.with_response(
        PaymentsResponseData(
            resource_id=ResponseId.transaction(item.response.order_id),
            connector_response_reference_id=item.response.ext_order_id,
        ),
        status=AttemptStatus.VOIDED if succeeded else AttemptStatus.PENDING,
    )


# ---- Sync -------------------------------------------------------------------

class PayuOrderResponseData(_WireModel):
    order_id: str
    ext_order_id: Optional[str] = None
    order_create_date: Optional[str] = None
    notify_url: Optional[str] = None
    customer_ip: Optional[str] = None
    merchant_pos_id: Optional[str] = None
    description: Optional[str] = None
    currency_code: Optional[str] = None
    total_amount: Optional[int] = None
    status: PayuOrderStatus = PayuOrderStatus.PENDING


class PayuPaymentsSyncResponse(_WireModel):
    orders: list[PayuOrderResponseData] = Field(default_factory=list)
    status: PayuPaymentStatusData


def sync_response_to_router_data(
    item: ResponseRouterData[object, PayuPaymentsSyncResponse, object, PaymentsResponseData],
) -> RouterData:
    if not item.response.orders:
        raise ResponseHandlingFailed(connector=CONNECTOR, context="payu OrderResponse has no orders")
    order = item.response.orders[0]
    status = ORDER_STATUS_TO_ATTEMPT_STATUS[order.status]
    amount_captured = item.data.amount_captured
    if status is AttemptStatus.CHARGED and order.total_amount is not None:
        amount_captured = order.total_amount
    return item.data.with_response(
        PaymentsResponseData(
            resource_id=ResponseId.transaction(order.order_id),
            connector_response_reference_id=order.ext_order_id,
        ),
        status=status,
        amount_captured=amount_captured,
    )


# ---- Refunds ----------------------------------------------------------------

class PayuRefundRequestData(_WireModel):
    description: str
    amount: Optional[int] = None


class PayuRefundRequest(_WireModel):
    refund: PayuRefundRequestData

    @classmethod
    def from_router_data(cls, item: PayuRouterData) -> "PayuRefundRequest":
        router_data: RefundsRouterData = item.router_data
        return cls(
            refund=PayuRefundRequestData(
                description=router_data.request.reason or "Refund",
                amount=item.amount,
            )
        )


class PayuRefundStatus(_LenientEnum):
    FINALIZED = "FINALIZED"
    COMPLETED = "COMPLETED"
    CANCELED = "CANCELED"
    PENDING = "PENDING"

    @classmethod
    def _default_member(cls):
        return cls.PENDING


REFUND_STATUS_TO_REFUND_STATUS = {
    PayuRefundStatus.FINALIZED: RefundStatus.SUCCESS,
    PayuRefundStatus.COMPLETED: RefundStatus.SUCCESS,
    PayuRefundStatus.CANCELED: RefundStatus.FAILURE,
    PayuRefundStatus.PENDING: RefundStatus.PENDING,
}


def to_refund_status(status: PayuRefundStatus) -> RefundStatus:
    return REFUND_STATUS_TO_REFUND_STATUS[status]


class PayuRefundResponseData(_WireModel):
    refund_id: str
    ext_refund_id: Optional[str] = None
    amount: Optional[int] = None
    currency_code: Optional[str] = None
    description: Optional[str] = None
    creation_date_time: Optional[str] = None
    status: PayuRefundStatus = PayuRefundStatus.PENDING
    status_date_time: Optional[str] = None


class PayuRefundResponse(_WireModel):
    order_id: str
    refund: PayuRefundResponseData


def refund_response_to_router_data(
    item: ResponseRouterData[object, PayuRefundResponse, object, RefundsResponseData],
) -> RefundsRouterData:
    return item.data.with_response(
        RefundsResponseData(
            connector_refund_id=item.response.refund.refund_id,
            refund_status=to_refund_status(item.response.refund.status),
        )
    )


class PayuRefundSyncResponse(_WireModel):
    refunds: list[PayuRefundResponseData] = Field(default_factory=list)


def refund_sync_response_to_router_data(
    item: ResponseRouterData[object, PayuRefundSyncResponse, object, RefundsResponseData],
) -> RefundsRouterData:
    refunds = item.response.refunds
    if not refunds:
        raise ResponseHandlingFailed(connector=CONNECTOR, context="payu RefundSyncResponse has no refunds")
    wanted = item.data.request.connector_refund_id
    refund = next((r for r in refunds if r.refund_id == wanted), refunds[0])
    return item.data.with_response(
        RefundsResponseData(
            connector_refund_id=refund.refund_id,
            refund_status=to_refund_status(refund.status),
        )
    )


# ---- Errors -----------------------------------------------------------------

class PayuErrorData(_WireModel):
    status_code: str = Field(min_length=1)
    code: Optional[str] = None
    code_literal: Optional[str] = None
    status_desc: str = Field(min_length=1)


class PayuErrorResponse(_WireModel):
    status: PayuErrorData

    def to_error_response(self, http_code: int) -> ErrorResponse:
        return ErrorResponse(
            status_code=http_code,
            code=self.status.status_code,
            message=self.status.status_desc,
            reason=self.status.code_literal,
        )
