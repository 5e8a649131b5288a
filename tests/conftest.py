"""Test configuration and fixtures."""

import json
import os
from unittest.mock import MagicMock

import pytest
import requests

from core import dependencies
from core.settings import Settings
from payments.transport import BaseClient


INVOICE_JSON = {
    "id": "in_1",
    "object": "invoice",
    "amount_due": 500,
    "attempt_count": 0,
    "attempted": False,
    "closed": False,
    "paid": False,
    "period_end": 1700003600,
    "period_start": 1700000000,
    "subtotal": 500,
    "total": 500,
    "charge": None,
    "customer": "cus_1",
    "date": 1700000000,
    "discount": None,
    "lines": {
        "object": "list",
        "data": [
            {
                "type": "subscription",
                "description": None,
                "amount": 500,
                "period": {"start": 1700000000, "end": 1700003600},
                "plan": {
                    "id": "gold",
                    "amount": 500,
                    "currency": "usd",
                    "interval": "month",
                    "interval_count": 1,
                    "name": "Gold",
                    "trial_period_days": None,
                    "livemode": False,
                },
            }
        ],
    },
    "starting_balance": 0,
    "ending_balance": None,
    "next_payment_attempt": 1700007200,
    "livemode": False,
    "metadata": {"order": "42"},
}

ACCOUNT_JSON = {
    "id": "acct_1",
    "email": "ops@example.com",
    "statement_descriptor": None,
    "timezone": "Etc/UTC",
    "details_submitted": True,
    "charge_enabled": True,
    "transfer_enabled": False,
}

EVENT_JSON = {
    "id": "evt_1",
    "livemode": False,
    "created": 1700000000,
    "data": {
        "object": {"id": "in_1", "object": "invoice", "paid": True},
        "previous_attributes": {"paid": False},
    },
    "pending_webhooks": 1,
    "type": "invoice.updated",
    "request": "req_1",
}


class FakeBaseClient:
    """Records queries and decodes a canned body into the requested model."""

    def __init__(self, body=None):
        self.body = body
        self.calls = []

    def query(self, method, path, params, model):
        self.calls.append((method, path, params))
        return model.model_validate(self.body)


def make_response(status=200, body=None, headers=None):
    response = MagicMock(spec=requests.Response)
    response.status_code = status
    response.headers = headers or {"Request-Id": "req_test"}
    if isinstance(body, (dict, list)):
        raw = json.dumps(body)
        response.json.return_value = body
    else:
        raw = body or ""
        response.json.side_effect = ValueError("not json")
    response.content = raw.encode()
    response.text = raw
    return response


@pytest.fixture(autouse=True)
def setup_test_environment():
    """Setup test environment variables before each test."""
    original_env = dict(os.environ)

    os.environ.update(
        {
            "STRIPE_API_KEY": "sk_test_dummy",
            "ENVIRONMENT": "test",
            "LOG_LEVEL": "DEBUG",
        }
    )

    yield

    dependencies.clear_settings()
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def mock_settings():
    return Settings(
        STRIPE_API_KEY="sk_test_mock",
        STRIPE_API_BASE="https://stripe.test",
        STRIPE_API_VERSION="2014-01-31",
        STRIPE_TIMEOUT=5.0,
        ENVIRONMENT="test",
    )


@pytest.fixture
def mock_session():
    session = MagicMock(spec=requests.Session)
    session.request.return_value = make_response(body=INVOICE_JSON)
    return session


@pytest.fixture
def base_client(mock_settings, mock_session):
    return BaseClient.from_settings(mock_settings, session=mock_session)


@pytest.fixture
def fake_client():
    return FakeBaseClient(INVOICE_JSON)


@pytest.fixture
def invoice_json():
    return json.loads(json.dumps(INVOICE_JSON))
