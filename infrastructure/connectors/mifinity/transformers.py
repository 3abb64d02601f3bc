"""
Mifinity wire DTOs and their conversions to/from the canonical envelope.

Nothing defined here leaves this package except through the conversion
functions at the bottom of each flow section.
"""
from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, SecretStr

from domain.connector.auth import ConnectorAuthType, HeaderKey
from domain.connector.enums import AttemptStatus, RefundStatus
from domain.connector.exceptions import FailedToObtainAuthType, NotImplementedFeature
from domain.connector.payment_methods import Card
from domain.connector.router_data import (
    ConnectorRouterData,
    ErrorResponse,
    PaymentsAuthorizeRouterData,
    PaymentsCancelRouterData,
    PaymentsCaptureRouterData,
    PaymentsResponseData,
    PaymentsSyncRouterData,
    RefundsResponseData,
    RefundsRouterData,
    ResponseId,
    ResponseRouterData,
    RouterData,
)
from infrastructure.connectors.utils import ExposedSecret


CONNECTOR = "mifinity"


class MifinityRouterData(ConnectorRouterData):
    """Mifinity takes integer minor units, so the amount passes through as is."""


class _WireModel(BaseModel):
    model_config = ConfigDict(frozen=True)


# ---- Auth -------------------------------------------------------------------

@dataclasses.dataclass(frozen=True)
class MifinityAuthType:
    api_key: SecretStr

    @classmethod
    def from_auth_type(cls, auth_type: ConnectorAuthType) -> "MifinityAuthType":
        if isinstance(auth_type, HeaderKey):
            return cls(api_key=auth_type.api_key)
        raise FailedToObtainAuthType(connector=CONNECTOR, received=getattr(auth_type, "auth_type", None))


# ---- Authorize --------------------------------------------------------------

class MifinityCard(_WireModel):
    number: ExposedSecret
    expiry_month: ExposedSecret
    expiry_year: ExposedSecret
    cvc: ExposedSecret
    complete: bool


class MifinityPaymentsRequest(_WireModel):
    amount: int
    card: MifinityCard

    @classmethod
    def from_router_data(cls, item: MifinityRouterData) -> "MifinityPaymentsRequest":
        router_data: PaymentsAuthorizeRouterData = item.router_data
        payment_method_data = router_data.request.payment_method_data
        if not isinstance(payment_method_data, Card):
            raise NotImplementedFeature("Payment methods", connector=CONNECTOR)
        card = MifinityCard(
            number=payment_method_data.card_number,
            expiry_month=payment_method_data.card_exp_month,
            expiry_year=payment_method_data.card_exp_year,
            cvc=payment_method_data.card_cvc,
            complete=router_data.request.is_auto_capture(connector=CONNECTOR),
        )
        return cls(amount=item.amount, card=card)


# ---- Capture / Void / Sync --------------------------------------------------

class MifinityCaptureRequest(_WireModel):
    amount: int
    transaction_id: str

    @classmethod
    def from_router_data(cls, item: MifinityRouterData) -> "MifinityCaptureRequest":
        router_data: PaymentsCaptureRouterData = item.router_data
        return cls(amount=item.amount, transaction_id=router_data.request.connector_transaction_id)


class MifinityVoidRequest(_WireModel):
    transaction_id: str

    @classmethod
    def from_router_data(cls, router_data: PaymentsCancelRouterData) -> "MifinityVoidRequest":
        return cls(transaction_id=router_data.request.get_connector_transaction_id(connector=CONNECTOR))


class MifinitySyncRequest(_WireModel):
    """Sync is a GET; this only carries the id used in the url."""

    transaction_id: str

    @classmethod
    def from_router_data(cls, router_data: PaymentsSyncRouterData) -> "MifinitySyncRequest":
        transaction_id = router_data.request.connector_transaction_id.get_connector_transaction_id(
            connector=CONNECTOR
        )
        return cls(transaction_id=transaction_id)


# ---- Payment responses ------------------------------------------------------

class MifinityPaymentStatus(str, Enum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    PROCESSING = "processing"

    @classmethod
    def _missing_(cls, value):
        # Unknown or differently-cased values degrade to "still in flight".
        if isinstance(value, str):
            for member in cls:
                if member.value == value.lower():
                    return member
        return cls.PROCESSING


PAYMENT_STATUS_TO_ATTEMPT_STATUS = {
    MifinityPaymentStatus.SUCCEEDED: AttemptStatus.CHARGED,
    MifinityPaymentStatus.FAILED: AttemptStatus.FAILURE,
    MifinityPaymentStatus.PROCESSING: AttemptStatus.AUTHORIZING,
}

VOID_STATUS_TO_ATTEMPT_STATUS = {
    MifinityPaymentStatus.SUCCEEDED: AttemptStatus.VOIDED,
    MifinityPaymentStatus.FAILED: AttemptStatus.VOID_FAILED,
    MifinityPaymentStatus.PROCESSING: AttemptStatus.VOID_INITIATED,
}


def to_attempt_status(status: MifinityPaymentStatus) -> AttemptStatus:
    return PAYMENT_STATUS_TO_ATTEMPT_STATUS[status]


class MifinityPaymentsResponse(_WireModel):
    status: MifinityPaymentStatus = MifinityPaymentStatus.PROCESSING
    id: str


def _transaction_response(transaction_id: str) -> PaymentsResponseData:
    return PaymentsResponseData(
        resource_id=ResponseId.transaction(transaction_id),
        redirection_data=None,
        mandate_reference=None,
        connector_metadata=None,
        network_txn_id=None,
        connector_response_reference_id=None,
        incremental_authorization_allowed=None,
    )


def payments_response_to_router_data(
    item: ResponseRouterData[object, MifinityPaymentsResponse, object, PaymentsResponseData],
) -> RouterData:
    return item.data.with_response(
        _transaction_response(item.response.id),
        status=to_attempt_status(item.response.status),
    )


def void_response_to_router_data(
    item: ResponseRouterData[object, MifinityPaymentsResponse, object, PaymentsResponseData],
) -> RouterData:
    return item.data.with_response(
        _transaction_response(item.response.id),
        status=VOID_STATUS_TO_ATTEMPT_STATUS[item.response.status],
    )


# ---- Refunds ----------------------------------------------------------------

class MifinityRefundRequest(_WireModel):
    amount: int

    @classmethod
    def from_router_data(cls, item: MifinityRouterData) -> "MifinityRefundRequest":
        return cls(amount=item.amount)


class MifinityRefundStatus(str, Enum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    PROCESSING = "processing"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            for member in cls:
                if member.value == value.lower():
                    return member
        return cls.PROCESSING


REFUND_STATUS_TO_REFUND_STATUS = {
    MifinityRefundStatus.SUCCEEDED: RefundStatus.SUCCESS,
    MifinityRefundStatus.FAILED: RefundStatus.FAILURE,
    MifinityRefundStatus.PROCESSING: RefundStatus.PENDING,
}


def to_refund_status(status: MifinityRefundStatus) -> RefundStatus:
    return REFUND_STATUS_TO_REFUND_STATUS[status]


class MifinityRefundResponse(_WireModel):
    id: str
    status: MifinityRefundStatus = MifinityRefundStatus.PROCESSING


def refund_response_to_router_data(
    item: ResponseRouterData[object, MifinityRefundResponse, object, RefundsResponseData],
) -> RefundsRouterData:
    # Shared by Execute and RSync: both answer with the same shape.
    return item.data.with_response(
        RefundsResponseData(
            connector_refund_id=item.response.id,
            refund_status=to_refund_status(item.response.status),
        )
    )


# ---- Errors -----------------------------------------------------------------

class MifinityErrorResponse(_WireModel):
    status_code: int
    code: str = Field(min_length=1)
    message: str = Field(min_length=1)
    reason: Optional[str] = None

    def to_error_response(self) -> ErrorResponse:
        return ErrorResponse(
            status_code=self.status_code,
            code=self.code,
            message=self.message,
            reason=self.reason,
        )
