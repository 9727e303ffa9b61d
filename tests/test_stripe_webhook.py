import json
import time
import hmac
import hashlib
from decimal import Decimal
import pytest
import stripe
from fastapi import Request, HTTPException

from summitbook.core.config import GatewayConfig, StripeCredentials
from summitbook.routes.stripe_checkout import booking_from_session, stripe_webhook

SECRET = "whsec_test_secret"
LIVE = GatewayConfig(stripe=StripeCredentials("sk_test_x", SECRET))


def _generate_signature(payload: str, secret: str) -> str:
    timestamp = int(time.time())
    signed_payload = f"{timestamp}.{payload}"
    sig = hmac.new(secret.encode(), signed_payload.encode(), hashlib.sha256).hexdigest()
    return f"t={timestamp},v1={sig}"


def _build_request(payload: str) -> Request:
    scope = {"type": "http", "method": "POST", "headers": []}

    async def receive():
        return {"type": "http.request", "body": payload.encode(), "more_body": False}

    return Request(scope, receive)


def _completed_event():
    return {
        "id": "evt_test",
        "object": "event",
        "type": "checkout.session.completed",
        "data": {
            "object": {
                "id": "cs_test",
                "object": "checkout.session",
                "client_reference_id": "BKLIVE42",
                "payment_intent": "pi_test",
                "payment_status": "paid",
                "amount_total": 130000,
                "currency": "usd",
                "customer_email": "asha@example.com",
                "metadata": {
                    "bookingId": "BKLIVE42",
                    "mountainId": "mt-everest",
                    "mountainName": "Mount Everest",
                    "date": "2025-05-14",
                    "participants": "2",
                    "customerName": "Asha Raman",
                },
            }
        },
    }


@pytest.mark.asyncio
async def test_checkout_session_completed(dummy_conn, sent_confirmations):
    payload = json.dumps(_completed_event())
    req = _build_request(payload)
    result = await stripe_webhook(req, dummy_conn, LIVE, _generate_signature(payload, SECRET))

    assert result == {"received": True}
    args = dummy_conn.statements("INSERT INTO bookings")[0]
    assert args[0] == "BKLIVE42"
    assert args[4] == 2
    assert args[6] == "asha@example.com"
    assert args[8] == Decimal("1300.00")
    assert args[9] == "USD"
    assert args[12] == "cs_test"
    assert args[14] == "paid"
    assert [b.booking_id for b in sent_confirmations] == ["BKLIVE42"]


def test_booking_from_sdk_session():
    session = stripe.checkout.Session.construct_from(_completed_event()["data"]["object"], "sk_test_x")
    booking = booking_from_session(session)
    assert booking.booking_id == "BKLIVE42"
    assert booking.mountain_name == "Mount Everest"
    assert booking.participants == 2
    assert booking.amount == Decimal("1300.00")
    assert booking.currency == "USD"
    assert booking.provider_payment_id == "pi_test"


@pytest.mark.asyncio
async def test_invalid_signature(dummy_conn):
    payload = json.dumps({"id": "evt_test", "object": "event", "type": "ping", "data": {"object": {}}})
    with pytest.raises(HTTPException) as exc:
        await stripe_webhook(_build_request(payload), dummy_conn, LIVE, "bad")
    assert exc.value.status_code == 400
    assert dummy_conn.executed == []


@pytest.mark.asyncio
async def test_other_events_acknowledged(dummy_conn):
    event = {"id": "evt_2", "object": "event", "type": "payment_intent.created", "data": {"object": {"id": "pi_1", "object": "payment_intent"}}}
    payload = json.dumps(event)
    result = await stripe_webhook(_build_request(payload), dummy_conn, LIVE, _generate_signature(payload, SECRET))
    assert result == {"received": True}
    assert dummy_conn.executed == []


@pytest.mark.asyncio
async def test_demo_mode_skips_verification(dummy_conn):
    result = await stripe_webhook(_build_request("{}"), dummy_conn, GatewayConfig(), None)
    assert result == {"received": True}


@pytest.mark.asyncio
async def test_storage_failure_returns_500(sent_confirmations):
    class FailingConn:
        async def execute(self, query, *args):
            raise RuntimeError("db down")

    payload = json.dumps(_completed_event())
    result = await stripe_webhook(
        _build_request(payload), FailingConn(), LIVE, _generate_signature(payload, SECRET)
    )
    assert result.status_code == 500
    assert json.loads(result.body) == {"received": False}
    assert sent_confirmations == []
