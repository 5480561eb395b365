"""Pytest fixtures for the Daraja client tests."""

import json

import django
import pytest
import requests
from django.conf import settings

from daraja import Credentials, Daraja

FIXED_TIMESTAMP = "20230101000000"


def pytest_configure():
    if not settings.configured:
        settings.configure(
            DEBUG=True,
            SECRET_KEY="daraja-tests",
            ALLOWED_HOSTS=["*"],
            INSTALLED_APPS=["daraja"],
            ROOT_URLCONF="daraja.urls",
            DARAJA_CONSUMER_KEY="settings_key",
            DARAJA_CONSUMER_SECRET="settings_secret",
            DARAJA_SHORTCODE="174379",
        )
        django.setup()


def make_response(status_code=200, json_data=None, text=None):
    """Build a requests.Response without touching the network."""
    response = requests.Response()
    response.status_code = status_code
    response.encoding = "utf-8"
    if json_data is not None:
        response._content = json.dumps(json_data).encode("utf-8")
        response.headers["Content-Type"] = "application/json"
    else:
        response._content = (text or "").encode("utf-8")
    return response


class FakeSession:
    """
    Stand-in for requests.Session.

    GET calls answer from ``token_responses``, POST calls from
    ``post_responses``. The last queued item is repeated; exceptions are raised.
    """

    def __init__(self):
        self.calls = []
        self.token_responses = [make_response(json_data={"access_token": "api_token", "expires_in": 3599})]
        self.post_responses = [make_response(json_data={"message": "Success"})]
        self.closed = False

    def get(self, url, params=None, headers=None, timeout=None):
        self.calls.append({"method": "GET", "url": url, "params": params, "headers": headers, "timeout": timeout})
        return self._next(self.token_responses)

    def post(self, url, data=None, headers=None, timeout=None):
        self.calls.append({
            "method": "POST",
            "url": url,
            "headers": headers,
            "timeout": timeout,
            "json": json.loads(data) if data else None,
        })
        return self._next(self.post_responses)

    def close(self):
        self.closed = True

    @property
    def token_calls(self):
        return [call for call in self.calls if call["method"] == "GET"]

    @property
    def post_calls(self):
        return [call for call in self.calls if call["method"] == "POST"]

    @staticmethod
    def _next(queue):
        item = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(item, BaseException):
            raise item
        return item


class FakeClock:
    def __init__(self, now=1_700_000_000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def response_factory():
    return make_response


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def credentials():
    return Credentials(
        consumer_key="test_key",
        consumer_secret="test_secret",
        short_code="600988",
        passkey="test_passkey",
        initiator_name="test_initiator",
        security_credential="test_credential",
        environment="sandbox",
    )


@pytest.fixture
def client(credentials, session, clock):
    daraja = Daraja(credentials, session=session)
    daraja.auth.clock = clock
    return daraja


@pytest.fixture
def fixed_timestamp(monkeypatch):
    monkeypatch.setattr("daraja.services.stk_service.get_timestamp", lambda: FIXED_TIMESTAMP)
    return FIXED_TIMESTAMP
