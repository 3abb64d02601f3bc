import uuid

import pytest
from pydantic import SecretStr

from core.settings import Connectors
from domain.connector.auth import BodyKey, HeaderKey
from domain.connector.enums import AttemptStatus, Currency, PaymentMethodType
from domain.connector.payment_methods import Card
from domain.connector.router_data import (
    Authorize,
    Capture,
    Execute,
    PaymentsAuthorizeData,
    PaymentsCancelData,
    PaymentsCaptureData,
    PaymentsSyncData,
    PSync,
    RefundsData,
    ResponseId,
    RouterData,
    Void,
)


TEST_CARD = Card(
    card_number=SecretStr("4111111111111111"),
    card_exp_month=SecretStr("02"),
    card_exp_year=SecretStr("30"),
    card_holder_name=SecretStr("John Doe"),
    card_cvc=SecretStr("123"),
)


_KIND_TO_TYPE = {
    "card": PaymentMethodType.CARD,
    "wallet": PaymentMethodType.WALLET,
    "bank_redirect": PaymentMethodType.BANK_REDIRECT,
    "pay_later": PaymentMethodType.PAY_LATER,
    "crypto": PaymentMethodType.CRYPTO,
}


def _base_fields(connector: str, auth) -> dict:
    return dict(
        merchant_id="merchant_1",
        connector=connector,
        payment_id=str(uuid.uuid4()),
        attempt_id="attempt_1",
        status=AttemptStatus.STARTED,
        connector_auth_type=auth,
        description="This is a test",
        return_url="https://merchant.example/return",
    )


@pytest.fixture
def card() -> Card:
    return TEST_CARD


@pytest.fixture
def connectors() -> Connectors:
    return Connectors()


@pytest.fixture
def header_key() -> HeaderKey:
    return HeaderKey(api_key=SecretStr("mf_test_key"))


@pytest.fixture
def body_key() -> BodyKey:
    return BodyKey(api_key=SecretStr("payu_token"), key1=SecretStr("145227"))


@pytest.fixture
def authorize_data():
    def _make(connector: str, auth, *, payment_method_data=TEST_CARD, capture_method=None, **overrides):
        request = PaymentsAuthorizeData(
            amount=100,
            currency=Currency.USD,
            payment_method_data=payment_method_data,
            capture_method=capture_method,
        )
        fields = _base_fields(connector, auth)
        fields["payment_method"] = _KIND_TO_TYPE[payment_method_data.kind]
        fields.update(overrides)
        return RouterData(flow=Authorize, request=request, **fields)
    return _make


@pytest.fixture
def capture_data():
    def _make(connector: str, auth, *, transaction_id: str = "TXN1", **overrides):
        request = PaymentsCaptureData(
            amount_to_capture=100,
            currency=Currency.USD,
            connector_transaction_id=transaction_id,
            amount=100,
        )
        fields = _base_fields(connector, auth)
        fields.update(overrides)
        return RouterData(flow=Capture, request=request, **fields)
    return _make


@pytest.fixture
def void_data():
    def _make(connector: str, auth, *, transaction_id="TXN1", **overrides):
        request = PaymentsCancelData(connector_transaction_id=transaction_id)
        fields = _base_fields(connector, auth)
        fields.update(overrides)
        return RouterData(flow=Void, request=request, **fields)
    return _make


@pytest.fixture
def sync_data():
    def _make(connector: str, auth, *, resource_id=None, **overrides):
        request = PaymentsSyncData(
            connector_transaction_id=resource_id or ResponseId.transaction("TXN1"),
        )
        fields = _base_fields(connector, auth)
        fields.update(overrides)
        return RouterData(flow=PSync, request=request, **fields)
    return _make


@pytest.fixture
def refund_data():
    def _make(connector: str, auth, *, flow=Execute, connector_refund_id=None, **overrides):
        request = RefundsData(
            refund_id=str(uuid.uuid4()),
            connector_transaction_id="TXN1",
            currency=Currency.USD,
            amount=100,
            refund_amount=10,
            connector_refund_id=connector_refund_id,
        )
        fields = _base_fields(connector, auth)
        fields.update(overrides)
        return RouterData(flow=flow, request=request, **fields)
    return _make

