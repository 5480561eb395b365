import pytest
import requests

from daraja import Daraja, LocalDispatchError, RemoteError, UnreachableError
from daraja.constants import ErrorCategory


def test_send_posts_json_with_bearer_token(client, session):
    body = {"Amount": 1, "Nested": {"Key": "Value"}}

    result = client.send("/mpesa/c2b/v1/simulate", body)

    assert result == {"message": "Success"}
    call = session.post_calls[0]
    assert call["url"] == "https://sandbox.safaricom.co.ke/mpesa/c2b/v1/simulate"
    assert call["headers"]["Authorization"] == "Bearer api_token"
    assert call["headers"]["Content-Type"] == "application/json"
    assert call["json"] == body


def test_response_payload_is_returned_verbatim(client, session, response_factory):
    payload = {"ResponseCode": "0", "Unexpected": [1, 2, 3]}
    session.post_responses = [response_factory(json_data=payload)]

    assert client.send("/any/path", {}) == payload


def test_empty_success_body_returns_empty_dict(client, session, response_factory):
    session.post_responses = [response_factory(200, text="")]

    assert client.send("/any/path", {}) == {}


def test_error_response_raises_remote_error(client, session, response_factory):
    session.post_responses = [response_factory(400, {"errorMessage": "Invalid request"})]

    with pytest.raises(RemoteError) as exc_info:
        client.send("/mpesa/stkpush/v1/processrequest", {})

    assert "API request failed with status 400: Invalid request" in str(exc_info.value)
    assert exc_info.value.status == 400


def test_non_json_success_body_raises_remote_error(client, session, response_factory):
    session.post_responses = [response_factory(200, text="<html>ok</html>")]

    with pytest.raises(RemoteError, match="Failed to parse API response"):
        client.send("/any/path", {})


@pytest.mark.parametrize("failure", [
    requests.ConnectionError("connection reset"),
    requests.Timeout("read timed out"),
])
def test_no_response_raises_unreachable_error(client, session, failure):
    session.post_responses = [failure]

    with pytest.raises(UnreachableError) as exc_info:
        client.send("/mpesa/b2c/v1/paymentrequest", {})

    assert exc_info.value.category == ErrorCategory.UNREACHABLE
    assert exc_info.value.retryable is True


def test_unserializable_body_raises_local_error_without_posting(client, session):
    with pytest.raises(LocalDispatchError) as exc_info:
        client.send("/any/path", {"when": object()})

    assert "setting up the API request" in exc_info.value.message
    assert session.post_calls == []


def test_each_send_makes_exactly_one_target_call(client, session):
    client.send("/a", {})
    client.send("/b", {})
    client.send("/c", {})

    assert [call["url"].rsplit("/", 1)[-1] for call in session.post_calls] == ["a", "b", "c"]
    assert len(session.token_calls) == 1


def test_client_closes_session(client, session):
    with client:
        pass
    assert session.closed is True


def test_no_timeout_is_imposed_by_default(client, session):
    client.send("/any/path", {})

    assert [call["timeout"] for call in session.calls] == [None, None]


def test_caller_timeout_reaches_transport(credentials, session):
    client = Daraja(credentials, timeout=5, session=session)

    client.send("/any/path", {})

    assert [call["timeout"] for call in session.calls] == [5, 5]
