import pytest

from infrastructure.external.payments.exceptions import ProcessorError


def test_root_returns_liveness_text(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.text == "Stripe Payment Backend is running"
    assert resp.headers["content-type"].startswith("text/plain")


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "healthy"}


def test_routes_registered():
    from main import app
    paths = app.openapi()["paths"]
    assert {"/create-payment-intent", "/confirm-payment", "/cancel-order"} <= set(paths)
    for path in ("/create-payment-intent", "/confirm-payment", "/cancel-order"):
        assert "post" in paths[path]


def test_create_payment_intent_end_to_end(client, gateway):
    resp = client.post("/create-payment-intent", json={"amount": 25, "currency": "usd"})
    assert resp.status_code == 200
    body = resp.json()
    assert gateway.calls == [("create_payment_intent", 2500, "usd", {})]
    assert isinstance(body["clientSecret"], str)
    assert isinstance(body["paymentIntentId"], str)
    assert set(body) == {"clientSecret", "paymentIntentId"}


def test_create_payment_intent_converts_decimal_amount(client, gateway):
    resp = client.post("/create-payment-intent", json={"amount": 19.99, "metadata": {"order": "42"}})
    assert resp.status_code == 200
    assert gateway.calls == [("create_payment_intent", 1999, "usd", {"order": "42"})]


def test_create_payment_intent_accepts_numeric_string(client, gateway):
    resp = client.post("/create-payment-intent", json={"amount": "10.50"})
    assert resp.status_code == 200
    assert gateway.calls[0][1] == 1050


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"amount": None},
        {"amount": 0},
        {"amount": -3},
        {"amount": "abc"},
        {"amount": "NaN"},
        {"amount": True},
        {"amount": [1]},
    ],
)
def test_create_payment_intent_rejects_bad_amount_without_processor_call(client, gateway, payload):
    resp = client.post("/create-payment-intent", json=payload)
    assert resp.status_code == 400
    body = resp.json()
    assert body["error"] == "Valid amount is required"
    assert body["type"] == "InvalidRequest"
    assert body["field"] == "amount"
    assert gateway.calls == []


def test_create_payment_intent_rejects_bad_currency(client, gateway):
    resp = client.post("/create-payment-intent", json={"amount": 5, "currency": "dollars"})
    assert resp.status_code == 400
    assert resp.json()["field"] == "currency"
    assert gateway.calls == []


def test_create_payment_intent_rejects_non_json_body(client, gateway):
    resp = client.post("/create-payment-intent", content=b"amount=5", headers={"content-type": "application/json"})
    assert resp.status_code == 400
    assert resp.json()["type"] == "InvalidRequest"
    assert gateway.calls == []


def test_confirm_payment_returns_status_and_intent(client, gateway):
    gateway.add_intent("pi_abc", status="succeeded")
    resp = client.post("/confirm-payment", json={"paymentIntentId": "pi_abc"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "succeeded"
    assert body["paymentIntent"]["id"] == "pi_abc"
    assert body["paymentIntent"]["amount"] == 2500


@pytest.mark.parametrize("payload", [{}, {"paymentIntentId": ""}, {"paymentIntentId": "   "}, {"paymentIntentId": 12}])
def test_confirm_payment_requires_id(client, gateway, payload):
    resp = client.post("/confirm-payment", json=payload)
    assert resp.status_code == 400
    assert resp.json()["error"] == "Payment intent ID is required"
    assert gateway.calls == []


def test_confirm_payment_unknown_id_is_processor_error(client, gateway):
    resp = client.post("/confirm-payment", json={"paymentIntentId": "pi_missing"})
    assert resp.status_code == 500
    body = resp.json()
    assert body["error"] == "No such payment_intent: 'pi_missing'"
    assert body["type"] == "ProcessorError"


def test_cancel_order_refunds_and_reports_major_units(client, gateway):
    gateway.add_intent("pi_1", status="succeeded", amount=2500, latest_charge="ch_1")
    gateway.refund_amount = 500
    resp = client.post("/cancel-order", json={"paymentIntentId": "pi_1"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "succeeded"
    assert body["refundId"].startswith("re_")
    assert body["amount_refunded"] == 5.0
    assert body["amount_original"] == 25.0
    assert body["currency"] == "usd"
    assert body["message"] == "Refund processed successfully"
    assert body["metadata"] == {"note": "All amounts are shown in dollars"}
    assert gateway.call_names() == ["retrieve_payment_intent", "refund_charge"]


def test_cancel_order_rejects_unpaid_intent(client, gateway):
    gateway.add_intent("pi_1", status="requires_payment_method", latest_charge=None)
    resp = client.post("/cancel-order", json={"paymentIntentId": "pi_1"})
    assert resp.status_code == 400
    body = resp.json()
    assert "requires_payment_method" in body["error"]
    assert body["type"] == "IneligibleState"
    assert gateway.call_names() == ["retrieve_payment_intent"]


def test_cancel_order_rejects_intent_without_charge(client, gateway):
    gateway.add_intent("pi_1", status="succeeded", latest_charge=None)
    resp = client.post("/cancel-order", json={"paymentIntentId": "pi_1"})
    assert resp.status_code == 400
    assert resp.json()["error"] == "No charge found to refund"


def test_cancel_order_refund_failure_is_processor_error(client, gateway):
    gateway.add_intent("pi_1", status="succeeded", latest_charge="ch_1")
    gateway.refund_error = ProcessorError(
        "Charge ch_1 has already been refunded.", provider="stub", operation="refund_charge"
    )
    resp = client.post("/cancel-order", json={"paymentIntentId": "pi_1"})
    assert resp.status_code == 500
    assert resp.json()["error"] == "Charge ch_1 has already been refunded."


def test_cancel_order_requires_id(client, gateway):
    resp = client.post("/cancel-order", json={})
    assert resp.status_code == 400
    assert resp.json()["error"] == "Payment intent ID is required"
    assert gateway.calls == []


def test_request_id_is_echoed(client):
    resp = client.get("/", headers={"X-Request-ID": "req-42"})
    assert resp.headers["X-Request-ID"] == "req-42"


def test_error_body_carries_request_id(client):
    resp = client.post("/confirm-payment", json={}, headers={"X-Request-ID": "req-7"})
    assert resp.json()["request_id"] == "req-7"


def test_cors_allows_any_origin(client):
    resp = client.options(
        "/create-payment-intent",
        headers={"Origin": "https://shop.example", "Access-Control-Request-Method": "POST"},
    )
    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] in {"*", "https://shop.example"}


def test_unknown_route_uses_error_body(client):
    resp = client.get("/nope")
    assert resp.status_code == 404
    assert resp.json()["type"] == "HTTPError"


def test_lifespan_keeps_injected_gateway_and_closes_it(gateway):
    from fastapi.testclient import TestClient
    from main import app

    app.state.payment_gateway = gateway
    try:
        gateway.add_intent("pi_1")
        with TestClient(app) as c:
            assert c.post("/confirm-payment", json={"paymentIntentId": "pi_1"}).status_code == 200
        assert gateway.closed
    finally:
        app.state.payment_gateway = None


def test_lifespan_builds_gateway_from_settings():
    from fastapi.testclient import TestClient
    from main import app
    from infrastructure.external.payments.stripe_client import StripeGateway

    app.state.payment_gateway = None
    try:
        with TestClient(app):
            assert isinstance(app.state.payment_gateway, StripeGateway)
    finally:
        app.state.payment_gateway = None


def test_unhandled_error_keeps_request_id_header(gateway):
    from fastapi.testclient import TestClient
    from main import app
    from api.dependencies import get_payment_gateway

    async def broken_retrieve(intent_id):
        raise KeyError("amount")

    gateway.retrieve_payment_intent = broken_retrieve
    app.dependency_overrides[get_payment_gateway] = lambda: gateway
    try:
        c = TestClient(app, raise_server_exceptions=False)
        resp = c.post("/confirm-payment", json={"paymentIntentId": "pi_1"}, headers={"X-Request-ID": "rid-1"})
    finally:
        app.dependency_overrides.clear()
    assert resp.status_code == 500
    assert resp.json()["type"] == "SystemError"
    assert resp.json()["request_id"] == "rid-1"
    assert resp.headers["X-Request-ID"] == "rid-1"
