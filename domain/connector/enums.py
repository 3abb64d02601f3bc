"""
Canonical enumerations shared by every connector.

Keep this layer free of infrastructure dependencies.
"""
from __future__ import annotations

from enum import Enum


class AttemptStatus(str, Enum):
    """Canonical payment attempt status"""
    STARTED = "started"
    AUTHENTICATION_FAILED = "authentication_failed"
    ROUTER_DECLINED = "router_declined"
    AUTHENTICATION_PENDING = "authentication_pending"
    AUTHENTICATION_SUCCESSFUL = "authentication_successful"
    AUTHORIZED = "authorized"
    AUTHORIZATION_FAILED = "authorization_failed"
    CHARGED = "charged"
    AUTHORIZING = "authorizing"
    COD_INITIATED = "cod_initiated"
    VOIDED = "voided"
    VOID_INITIATED = "void_initiated"
    CAPTURE_INITIATED = "capture_initiated"
    CAPTURE_FAILED = "capture_failed"
    VOID_FAILED = "void_failed"
    AUTO_REFUNDED = "auto_refunded"
    PARTIAL_CHARGED = "partial_charged"
    UNRESOLVED = "unresolved"
    PENDING = "pending"
    FAILURE = "failure"
    PAYMENT_METHOD_AWAITED = "payment_method_awaited"
    CONFIRMATION_AWAITED = "confirmation_awaited"


class RefundStatus(str, Enum):
    """Canonical refund status"""
    PENDING = "pending"
    SUCCESS = "success"
    FAILURE = "failure"
    MANUAL_REVIEW = "manual_review"
    TRANSACTION_FAILURE = "transaction_failure"


class AuthenticationType(str, Enum):
    THREE_DS = "three_ds"
    NO_THREE_DS = "no_three_ds"


class CaptureMethod(str, Enum):
    AUTOMATIC = "automatic"
    MANUAL = "manual"
    MANUAL_MULTIPLE = "manual_multiple"
    SCHEDULED = "scheduled"


class PaymentMethodType(str, Enum):
    CARD = "card"
    WALLET = "wallet"
    BANK_REDIRECT = "bank_redirect"
    PAY_LATER = "pay_later"
    CRYPTO = "crypto"


class CurrencyUnit(str, Enum):
    """Unit a connector expects amounts in."""
    BASE = "base"
    MINOR = "minor"


class Currency(str, Enum):
    # ISO-4217 alpha-3 (extend as needed)
    AUD = "AUD"
    CAD = "CAD"
    CHF = "CHF"
    CNY = "CNY"
    CZK = "CZK"
    EUR = "EUR"
    GBP = "GBP"
    HKD = "HKD"
    HUF = "HUF"
    JPY = "JPY"
    KRW = "KRW"
    PLN = "PLN"
    SEK = "SEK"
    SGD = "SGD"
    USD = "USD"


class ConnectorName(str, Enum):
    MIFINITY = "mifinity"
    PAYU = "payu"


class IncomingWebhookEvent(str, Enum):
    PAYMENT_INTENT_SUCCESS = "payment_intent_success"
    PAYMENT_INTENT_FAILURE = "payment_intent_failure"
    PAYMENT_INTENT_PROCESSING = "payment_intent_processing"
    REFUND_SUCCESS = "refund_success"
    REFUND_FAILURE = "refund_failure"
    EVENT_NOT_SUPPORTED = "event_not_supported"
