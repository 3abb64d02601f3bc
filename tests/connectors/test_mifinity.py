import json

import pytest
from pydantic import SecretStr

from application.dtos.connector import ConnectorActionKind
from application.dtos.http import Method, Response
from domain.connector.enums import AttemptStatus, CaptureMethod, RefundStatus
from domain.connector.exceptions import (
    CaptureMethodNotSupported,
    FailedToObtainAuthType,
    FlowNotImplemented,
    MissingConnectorTransactionID,
    NotImplementedFeature,
    ResponseDeserializationFailed,
    WebhooksNotImplemented,
)
from domain.connector.payment_methods import BankRedirect, Crypto, PayLater, Wallet
from domain.connector.router_data import (
    Authorize,
    Capture,
    ErrorResponse,
    Execute,
    PaymentsResponseData,
    PSync,
    RefundsResponseData,
    ResponseId,
    RSync,
    Session,
    Verify,
    Void,
)
from infrastructure.connectors import get_connector
from infrastructure.connectors.mifinity import transformers as mifinity


@pytest.fixture
def connector():
    return get_connector("mifinity")


def _ok(payload: dict) -> Response:
    return Response(status_code=200, response=json.dumps(payload).encode())


# ---- Status translators -------------------------------------------------------

@pytest.mark.parametrize(
    "wire, expected",
    [
        ("succeeded", AttemptStatus.CHARGED),
        ("failed", AttemptStatus.FAILURE),
        ("processing", AttemptStatus.AUTHORIZING),
    ],
)
def test_payment_status_translation(wire, expected):
    assert mifinity.to_attempt_status(mifinity.MifinityPaymentStatus(wire)) is expected


def test_every_payment_status_has_exactly_one_translation():
    assert set(mifinity.PAYMENT_STATUS_TO_ATTEMPT_STATUS) == set(mifinity.MifinityPaymentStatus)
    assert set(mifinity.VOID_STATUS_TO_ATTEMPT_STATUS) == set(mifinity.MifinityPaymentStatus)
    assert set(mifinity.REFUND_STATUS_TO_REFUND_STATUS) == set(mifinity.MifinityRefundStatus)


@pytest.mark.parametrize(
    "wire, expected",
    [
        ("succeeded", RefundStatus.SUCCESS),
        ("failed", RefundStatus.FAILURE),
        ("processing", RefundStatus.PENDING),
    ],
)
def test_refund_status_translation(wire, expected):
    assert mifinity.to_refund_status(mifinity.MifinityRefundStatus(wire)) is expected


def test_missing_or_unknown_status_defaults_to_processing():
    absent = mifinity.MifinityPaymentsResponse.model_validate_json(b'{"id": "TXN1"}')
    unknown = mifinity.MifinityPaymentsResponse.model_validate_json(b'{"id": "TXN1", "status": "on_hold"}')
    shouted = mifinity.MifinityPaymentsResponse.model_validate_json(b'{"id": "TXN1", "status": "SUCCEEDED"}')
    assert absent.status is mifinity.MifinityPaymentStatus.PROCESSING
    assert unknown.status is mifinity.MifinityPaymentStatus.PROCESSING
    assert shouted.status is mifinity.MifinityPaymentStatus.SUCCEEDED


# ---- Authorize ------------------------------------------------------------------

def test_authorize_body_copies_card_and_sets_complete(connector, authorize_data, header_key):
    req = authorize_data("mifinity", header_key)
    integration = connector.get_connector_integration(Authorize)

    body = json.loads(integration.get_request_body(req))

    assert body == {
        "amount": 100,
        "card": {
            "number": "4111111111111111",
            "expiry_month": "02",
            "expiry_year": "30",
            "cvc": "123",
            "complete": True,
        },
    }


def test_manual_capture_sends_complete_false(connector, authorize_data, header_key):
    req = authorize_data("mifinity", header_key, capture_method=CaptureMethod.MANUAL)
    body = json.loads(connector.get_connector_integration(Authorize).get_request_body(req))
    assert body["card"]["complete"] is False


def test_scheduled_capture_is_rejected(connector, authorize_data, header_key):
    req = authorize_data("mifinity", header_key, capture_method=CaptureMethod.SCHEDULED)
    with pytest.raises(CaptureMethodNotSupported):
        connector.get_connector_integration(Authorize).get_request_body(req)


def test_card_secrets_do_not_leak_into_repr(card):
    wire_card = mifinity.MifinityCard(
        number=card.card_number,
        expiry_month=card.card_exp_month,
        expiry_year=card.card_exp_year,
        cvc=card.card_cvc,
        complete=True,
    )
    assert "4111111111111111" not in repr(wire_card)
    assert "4111111111111111" not in repr(card)


@pytest.mark.parametrize(
    "payment_method_data",
    [
        Wallet(wallet_type="google_pay", token=SecretStr("tok")),
        BankRedirect(bank_name="ideal"),
        PayLater(provider="klarna"),
        Crypto(network="btc"),
    ],
)
def test_non_card_payment_methods_are_not_implemented(connector, authorize_data, header_key, payment_method_data):
    req = authorize_data("mifinity", header_key, payment_method_data=payment_method_data)
    with pytest.raises(NotImplementedFeature) as exc_info:
        connector.get_connector_integration(Authorize).get_request_body(req)
    assert exc_info.value.feature == "Payment methods"
    assert exc_info.value.details["connector"] == "mifinity"


def test_authorize_build_request(connector, authorize_data, header_key, connectors):
    req = authorize_data("mifinity", header_key)
    request = connector.get_connector_integration(Authorize).build_request(req, connectors)

    assert request.method is Method.POST
    assert request.url == "https://demo.mifinity.com/api/payments"
    assert request.headers == (
        ("Content-Type", "application/json"),
        ("Authorization", "mf_test_key"),
    )
    assert json.loads(request.body)["amount"] == 100
    assert "mf_test_key" not in repr(request)
    assert ("Authorization", "*** masked ***") in request.masked_headers()


def test_authorize_response_charged_with_transaction_id(connector, authorize_data, header_key):
    req = authorize_data("mifinity", header_key)
    integration = connector.get_connector_integration(Authorize)

    result = integration.handle_response(req, _ok({"status": "succeeded", "id": "TXN1"}))

    assert result.status is AttemptStatus.CHARGED
    assert result.is_success and not result.is_error
    assert isinstance(result.response, PaymentsResponseData)
    assert result.response.resource_id.get_connector_transaction_id() == "TXN1"
    assert result.response.redirection_data is None
    assert result.response.mandate_reference is None
    assert result.response.connector_metadata is None
    assert result.response.network_txn_id is None
    assert result.response.incremental_authorization_allowed is None
    # everything except status/response is carried over
    assert result.payment_id == req.payment_id
    assert result.request is req.request
    assert result.description == req.description
    assert result.connector_auth_type is req.connector_auth_type
    assert req.response is None


def test_authorize_response_undecodable(connector, authorize_data, header_key):
    req = authorize_data("mifinity", header_key)
    with pytest.raises(ResponseDeserializationFailed) as exc_info:
        connector.get_connector_integration(Authorize).handle_response(
            req, Response(status_code=200, response=b"<html>oops</html>")
        )
    assert exc_info.value.raw_response == b"<html>oops</html>"


def test_wrong_auth_variant_fails(connector, authorize_data, body_key, connectors):
    req = authorize_data("mifinity", body_key)
    with pytest.raises(FailedToObtainAuthType):
        connector.get_connector_integration(Authorize).build_request(req, connectors)


# ---- Capture / Void / Sync ------------------------------------------------------

def test_capture_request(connector, capture_data, header_key, connectors):
    req = capture_data("mifinity", header_key)
    request = connector.get_connector_integration(Capture).build_request(req, connectors)
    assert request.url == "https://demo.mifinity.com/api/payments/TXN1/capture"
    assert json.loads(request.body) == {"amount": 100, "transaction_id": "TXN1"}


@pytest.mark.parametrize("transaction_id", [None, ""])
def test_void_without_transaction_id(connector, void_data, header_key, connectors, transaction_id):
    req = void_data("mifinity", header_key, transaction_id=transaction_id)
    integration = connector.get_connector_integration(Void)
    with pytest.raises(MissingConnectorTransactionID):
        integration.get_request_body(req)
    with pytest.raises(MissingConnectorTransactionID):
        integration.build_request(req, connectors)


def test_void_response_maps_to_voided(connector, void_data, header_key):
    req = void_data("mifinity", header_key)
    result = connector.get_connector_integration(Void).handle_response(
        req, _ok({"status": "succeeded", "id": "TXN1"})
    )
    assert result.status is AttemptStatus.VOIDED


@pytest.mark.parametrize("resource_id", [ResponseId.none(), ResponseId.encoded("opaque")])
def test_sync_without_transaction_id(connector, sync_data, header_key, connectors, resource_id):
    req = sync_data("mifinity", header_key, resource_id=resource_id)
    with pytest.raises(MissingConnectorTransactionID):
        connector.get_connector_integration(PSync).build_request(req, connectors)


def test_sync_is_get_without_body(connector, sync_data, header_key, connectors):
    req = sync_data("mifinity", header_key)
    request = connector.get_connector_integration(PSync).build_request(req, connectors)
    assert request.method is Method.GET
    assert request.url == "https://demo.mifinity.com/api/payments/TXN1"
    assert request.body is None


# ---- Refunds --------------------------------------------------------------------

def test_refund_body_carries_amount_only(connector, refund_data, header_key):
    req = refund_data("mifinity", header_key)
    body = connector.get_connector_integration(Execute).get_request_body(req)
    assert json.loads(body) == {"amount": 10}


@pytest.mark.parametrize(
    "payload, expected",
    [
        ({"id": "R1", "status": "succeeded"}, RefundStatus.SUCCESS),
        ({"id": "R1", "status": "failed"}, RefundStatus.FAILURE),
        ({"id": "R1"}, RefundStatus.PENDING),
    ],
)
def test_refund_execute_response(connector, refund_data, header_key, payload, expected):
    req = refund_data("mifinity", header_key)
    result = connector.get_connector_integration(Execute).handle_response(req, _ok(payload))
    assert isinstance(result.response, RefundsResponseData)
    assert result.response.connector_refund_id == "R1"
    assert result.response.refund_status is expected
    assert result.status is req.status


def test_refund_sync_has_no_body(connector, refund_data, header_key, connectors):
    req = refund_data("mifinity", header_key, flow=RSync)
    integration = connector.get_connector_integration(RSync)
    request = integration.build_request(req, connectors)
    assert request.method is Method.GET
    assert request.body is None
    result = integration.handle_response(req, _ok({"id": "R1", "status": "succeeded"}))
    assert result.response.refund_status is RefundStatus.SUCCESS


# ---- Errors ---------------------------------------------------------------------

ERROR_BYTES = json.dumps(
    {"status_code": 402, "code": "card_declined", "message": "Card declined", "reason": "insufficient_funds"}
).encode()


def test_error_normalizer(connector):
    error = connector.get_connector_integration(Authorize).get_error_response(
        Response(status_code=402, response=ERROR_BYTES)
    )
    assert error == ErrorResponse(
        status_code=402, code="card_declined", message="Card declined", reason="insufficient_funds"
    )


def test_error_normalizer_is_idempotent(connector):
    res = Response(status_code=402, response=ERROR_BYTES)
    assert connector.build_error_response(res) == connector.build_error_response(res)


@pytest.mark.parametrize("raw", [b"not json at all", b'{"message": "no code"}', b'{"status_code": 500, "code": "", "message": "x"}'])
def test_error_normalizer_rejects_undecodable_bytes(connector, raw):
    with pytest.raises(ResponseDeserializationFailed) as exc_info:
        connector.build_error_response(Response(status_code=500, response=raw))
    assert exc_info.value.raw_response == raw
    assert exc_info.value.details["raw_response"] == raw.decode()
    assert exc_info.value.details["connector"] == "mifinity"


# ---- Unsupported capabilities -----------------------------------------------------

@pytest.mark.parametrize("flow", [Session, Verify])
def test_unsupported_flows_signal_not_implemented(connector, authorize_data, header_key, connectors, flow):
    integration = connector.get_connector_integration(flow)
    req = authorize_data("mifinity", header_key)
    assert not connector.supports(flow)
    with pytest.raises(FlowNotImplemented) as exc_info:
        integration.build_request(req, connectors)
    assert exc_info.value.flow == flow.__name__
    with pytest.raises(FlowNotImplemented):
        integration.handle_response(req, _ok({}))


def test_webhooks_not_implemented(connector):
    for method in (
        connector.get_webhook_object_reference_id,
        connector.get_webhook_event_type,
        connector.get_webhook_resource_object,
    ):
        with pytest.raises(WebhooksNotImplemented):
            method(b"{}")


def test_redirect_defaults_to_trigger(connector):
    assert connector.get_flow_type("status=ok").kind is ConnectorActionKind.TRIGGER
