import httpx
import pytest
from fastapi.testclient import TestClient

from main import create_app


class RecordingTransport(httpx.MockTransport):
    """MockTransport that remembers every request it handled."""

    def __init__(self, status_code: int = 200):
        self.requests = []
        self.status_code = status_code
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json={"ok": True})


@pytest.fixture
def webhook_transport():
    return RecordingTransport()


@pytest.fixture
def app(webhook_transport):
    return create_app(webhook_transport=webhook_transport)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def make_reminder(client):
    def _make(**overrides):
        body = {"loanId": "loan_1", "type": "sms", "triggerType": "before_due", "daysOffset": 3}
        body.update(overrides)
        resp = client.post("/reminders", json=body)
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _make


@pytest.fixture
def make_repayment(client):
    def _make(**overrides):
        body = {
            "loanId": "loan_1",
            "borrowerId": "bor_1",
            "amount": 5000,
            "currency": "NGN",
            "paidAt": "2024-05-01T10:00:00Z",
        }
        body.update(overrides)
        resp = client.post("/repayments", json=body)
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _make
