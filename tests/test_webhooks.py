import json

import httpx
import pytest
from fastapi.testclient import TestClient

from app.core.errors import InvalidInputError, WebhookSendError
from app.schemas.webhook_schema import WebhookEventTypeEnum
from app.services.webhook_service import WebhookService, build_reminder_webhook_event
from main import create_app


def test_example_reminder_sent(client):
    resp = client.get("/webhooks/examples/reminder.sent")
    assert resp.status_code == 200
    event = resp.json()
    assert event["id"] == "evt_01HFQ3J5V6M9T2"
    assert event["type"] == "reminder.sent"
    reminder = event["data"]["reminder"]
    delivery = event["data"]["delivery"]
    assert reminder["status"] == "sent"
    assert reminder["lastSentAt"] is not None
    assert reminder["daysOffset"] == 3
    assert reminder["channelFallback"] == ["email"]
    assert delivery["status"] == "sent"
    assert delivery["attempts"] == 1
    assert delivery["failureReason"] is None


def test_example_reminder_failed(client):
    event = client.get("/webhooks/examples/reminder.failed").json()
    assert event["type"] == "reminder.failed"
    assert event["data"]["reminder"]["status"] == "failed"
    assert event["data"]["reminder"]["lastSentAt"] is None
    assert event["data"]["delivery"]["failureReason"] == "Provider timeout"


def test_unknown_example_is_not_found(client):
    resp = client.get("/webhooks/examples/reminder.bounced")
    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "NOT_FOUND"


def test_send_test_webhook(client, webhook_transport):
    resp = client.post(
        "/webhooks/reminders/test",
        json={"targetUrl": "https://hooks.example.com/payprompt", "eventType": "reminder.failed"},
    )
    assert resp.status_code == 202
    assert resp.json() == {"status": "queued"}

    assert len(webhook_transport.requests) == 1
    sent = webhook_transport.requests[0]
    assert sent.method == "POST"
    assert str(sent.url) == "https://hooks.example.com/payprompt"
    assert sent.headers["content-type"] == "application/json"
    payload = json.loads(sent.content)
    assert payload["type"] == "reminder.failed"
    assert payload["data"]["delivery"]["failureReason"] == "Provider timeout"


def test_remote_error_status_still_queued():
    transport = httpx.MockTransport(lambda request: httpx.Response(500, text="boom"))
    client = TestClient(create_app(webhook_transport=transport))
    resp = client.post(
        "/webhooks/reminders/test",
        json={"targetUrl": "https://hooks.example.com/x", "eventType": "reminder.sent"},
    )
    assert resp.status_code == 202
    assert resp.json() == {"status": "queued"}


def test_transport_failure_reports_webhook_send_failed():
    def refuse(request):
        raise httpx.ConnectError("Connection refused", request=request)

    client = TestClient(create_app(webhook_transport=httpx.MockTransport(refuse)))
    resp = client.post(
        "/webhooks/reminders/test",
        json={"targetUrl": "https://hooks.example.com/x", "eventType": "reminder.sent"},
    )
    assert resp.status_code == 500
    assert resp.json() == {"error": {"code": "WEBHOOK_SEND_FAILED", "message": "Connection refused"}}


def test_timeout_reports_webhook_send_failed():
    def slow(request):
        raise httpx.ReadTimeout("timed out", request=request)

    client = TestClient(create_app(webhook_transport=httpx.MockTransport(slow)))
    resp = client.post(
        "/webhooks/reminders/test",
        json={"targetUrl": "https://hooks.example.com/x", "eventType": "reminder.failed"},
    )
    assert resp.status_code == 500
    assert resp.json()["error"]["code"] == "WEBHOOK_SEND_FAILED"


@pytest.mark.parametrize(
    "body, message",
    [
        ({"eventType": "reminder.sent"}, "targetUrl and eventType are required."),
        ({"targetUrl": "https://hooks.example.com/x"}, "targetUrl and eventType are required."),
        ({"targetUrl": "", "eventType": "reminder.sent"}, "targetUrl and eventType are required."),
        ({"targetUrl": "https://hooks.example.com/x", "eventType": "loan.created"},
         "eventType must be reminder.sent or reminder.failed."),
    ],
)
def test_invalid_request_makes_no_call(client, webhook_transport, body, message):
    resp = client.post("/webhooks/reminders/test", json=body)
    assert resp.status_code == 400
    assert resp.json() == {"error": {"code": "INVALID_INPUT", "message": message}}
    assert webhook_transport.requests == []


def test_build_event_shape():
    event = build_reminder_webhook_event(WebhookEventTypeEnum.reminder_sent).to_payload()
    assert set(event) == {"id", "type", "createdAt", "data"}
    assert set(event["data"]) == {"reminder", "delivery"}
    assert set(event["data"]["delivery"]) == {"channel", "status", "attempts", "lastAttemptAt", "failureReason"}


@pytest.mark.asyncio
async def test_service_invalid_url_raises_send_error():
    service = WebhookService(timeout=1.0)
    with pytest.raises(WebhookSendError):
        await service.send_test_event({"targetUrl": "not-a-url", "eventType": "reminder.sent"})


@pytest.mark.asyncio
async def test_service_validates_before_sending():
    calls = []
    service = WebhookService(transport=httpx.MockTransport(lambda r: calls.append(r) or httpx.Response(200)))
    with pytest.raises(InvalidInputError):
        await service.send_test_event({"eventType": "reminder.sent"})
    assert calls == []
