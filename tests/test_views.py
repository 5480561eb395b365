import json

import pytest
from django.test import RequestFactory, override_settings

from daraja import views
from daraja.signals import (
    queue_timeout_received, stk_callback_received, transaction_result_received
)

STK_BODY = {
    "Body": {
        "stkCallback": {
            "MerchantRequestID": "29115-34620561-1",
            "CheckoutRequestID": "ws_CO_191220191020363925",
            "ResultCode": 1037,
            "ResultDesc": "DS timeout user cannot be reached",
        }
    }
}


@pytest.fixture
def rf():
    return RequestFactory()


@pytest.fixture
def received():
    events = []

    def handler(sender, **kwargs):
        events.append(kwargs)

    stk_callback_received.connect(handler)
    transaction_result_received.connect(handler)
    queue_timeout_received.connect(handler)
    yield events
    stk_callback_received.disconnect(handler)
    transaction_result_received.disconnect(handler)
    queue_timeout_received.disconnect(handler)


def _post(rf, path, body):
    data = body if isinstance(body, str) else json.dumps(body)
    return rf.post(path, data=data, content_type="application/json")


def test_stk_callback_is_acknowledged(rf, received):
    response = views.stk_callback(_post(rf, "/callback/stk/", STK_BODY))

    assert response.status_code == 200
    assert json.loads(response.content) == {"ResultCode": 0, "ResultDesc": "Accepted"}
    callback = received[0]["callback"]
    assert callback.checkout_request_id == "ws_CO_191220191020363925"
    assert "timed out" in callback.failure_reason


def test_malformed_stk_callback_is_rejected(rf, received):
    response = views.stk_callback(_post(rf, "/callback/stk/", "not json"))

    assert response.status_code == 400
    assert received == []


def test_result_callback_fires_signal(rf, received):
    body = {"Result": {"ResultType": 0, "ResultCode": 0, "ResultDesc": "ok", "OriginatorConversationID": "1"}}

    response = views.result_callback(_post(rf, "/callback/result/", body))

    assert response.status_code == 200
    assert received[0]["result"].originator_conversation_id == "1"


def test_timeout_callback_passes_raw_payload(rf, received):
    body = {"Result": {"ResultCode": 1, "ResultDesc": "timeout"}}

    response = views.timeout_callback(_post(rf, "/callback/timeout/", body))

    assert response.status_code == 200
    assert received[0]["payload"] == body


@override_settings(DARAJA_CALLBACK_ALLOWED_IPS=["196.201.214.200"])
def test_callbacks_from_unknown_ips_are_refused(rf, received):
    request = _post(rf, "/callback/stk/", STK_BODY)
    request.META["REMOTE_ADDR"] = "10.0.0.1"

    response = views.stk_callback(request)

    assert response.status_code == 403
    assert received == []


@override_settings(DARAJA_CALLBACK_ALLOWED_IPS=["196.201.214.200"])
def test_spoofed_forwarded_header_is_refused(rf, received):
    request = _post(rf, "/callback/stk/", STK_BODY)
    request.META["REMOTE_ADDR"] = "6.6.6.6"
    request.META["HTTP_X_FORWARDED_FOR"] = "196.201.214.200"

    assert views.stk_callback(request).status_code == 403
    assert received == []


@override_settings(DARAJA_CALLBACK_ALLOWED_IPS=["196.201.214.200"], DARAJA_TRUST_FORWARDED_FOR=True)
def test_forwarded_ip_is_used_behind_trusted_proxy(rf, received):
    request = _post(rf, "/callback/stk/", STK_BODY)
    request.META["REMOTE_ADDR"] = "10.0.0.1"
    request.META["HTTP_X_FORWARDED_FOR"] = "196.201.214.200, 10.0.0.1"

    assert views.stk_callback(request).status_code == 200


def test_callbacks_require_post(rf):
    response = views.stk_callback(rf.get("/callback/stk/"))

    assert response.status_code == 405
