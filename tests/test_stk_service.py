import base64

import pytest

from daraja import ConfigurationError, Credentials, Daraja, RemoteError

STK_PARAMS = {
    "amount": 1,
    "phone_number": "254712345678",
    "callback_url": "https://test.com/callback",
    "account_reference": "Test-Ref",
    "transaction_desc": "Test Desc",
}


def test_stk_push_builds_body_and_returns_payload(client, session, fixed_timestamp):
    result = client.stk.push(**STK_PARAMS)

    assert result == {"message": "Success"}
    assert len(session.token_calls) == 1

    call = session.post_calls[0]
    assert call["url"] == "https://sandbox.safaricom.co.ke/mpesa/stkpush/v1/processrequest"
    assert call["headers"]["Authorization"] == "Bearer api_token"

    expected_password = base64.b64encode(b"600988test_passkey20230101000000").decode()
    assert call["json"] == {
        "BusinessShortCode": "600988",
        "Password": expected_password,
        "Timestamp": "20230101000000",
        "TransactionType": "CustomerPayBillOnline",
        "Amount": 1,
        "PartyA": "254712345678",
        "PartyB": "600988",
        "PhoneNumber": "254712345678",
        "CallBackURL": "https://test.com/callback",
        "AccountReference": "Test-Ref",
        "TransactionDesc": "Test Desc",
    }


def test_stk_push_accepts_buy_goods(client, session, fixed_timestamp):
    client.stk.push(transaction_type="CustomerBuyGoodsOnline", **STK_PARAMS)

    assert session.post_calls[0]["json"]["TransactionType"] == "CustomerBuyGoodsOnline"


def test_stk_query_sends_password_and_checkout_id(client, session, fixed_timestamp):
    client.stk.query("ws_CO_123")

    call = session.post_calls[0]
    assert call["url"].endswith("/mpesa/stkpushquery/v1/query")
    assert call["json"]["CheckoutRequestID"] == "ws_CO_123"
    assert call["json"]["Timestamp"] == "20230101000000"
    assert call["json"]["BusinessShortCode"] == "600988"


@pytest.mark.parametrize("operation, message", [
    (lambda c: c.stk.push(**STK_PARAMS), "Passkey is required for STK Push."),
    (lambda c: c.stk.query("ws_CO_123"), "Passkey is required for STK Query."),
])
def test_missing_passkey_fails_before_network(session, operation, message):
    client = Daraja(
        Credentials(consumer_key="test_key", consumer_secret="test_secret", short_code="600988"),
        session=session,
    )

    with pytest.raises(ConfigurationError) as exc_info:
        operation(client)

    assert str(exc_info.value) == message
    assert session.calls == []


def test_api_error_is_translated(client, session, response_factory, fixed_timestamp):
    session.post_responses = [response_factory(400, {"errorMessage": "Invalid request"})]

    with pytest.raises(RemoteError, match="API request failed with status 400: Invalid request"):
        client.stk.push(**STK_PARAMS)


def test_non_object_success_body_is_returned(client, session, response_factory, fixed_timestamp):
    session.post_responses = [response_factory(json_data=None, text="null")]

    assert client.stk.push(**STK_PARAMS) is None
