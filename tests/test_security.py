import base64
from datetime import datetime

from django.test import RequestFactory

from daraja.utils.formatters import clean_payload, flatten_items
from daraja.utils.security import generate_password, get_client_ip, get_timestamp, verify_callback_ip


def test_password_derivation():
    password = generate_password("600988", "test_passkey", "20230101000000")

    assert password == base64.b64encode(b"600988test_passkey20230101000000").decode()


def test_timestamp_format():
    assert get_timestamp(datetime(2023, 1, 2, 3, 4, 5)) == "20230102030405"
    assert len(get_timestamp()) == 14


def test_callback_ip_allow_list():
    assert verify_callback_ip("10.0.0.1", []) is True
    assert verify_callback_ip("10.0.0.1", ["196.201.214.200"]) is False
    assert verify_callback_ip("196.201.214.200", ["196.201.214.200"]) is True


def test_clean_payload_keeps_falsy_values():
    assert clean_payload({"a": None, "b": 0, "c": "", "d": "x"}) == {"b": 0, "c": "", "d": "x"}


def test_flatten_items_accepts_single_item():
    assert flatten_items({"Key": "A", "Value": 1}, key_field="Key") == {"A": 1}
    assert flatten_items(None) == {}


def test_client_ip_ignores_forwarded_header_unless_trusted():
    request = RequestFactory().post("/callback/stk/", REMOTE_ADDR="10.0.0.1", HTTP_X_FORWARDED_FOR="196.201.214.200, 10.0.0.1")

    assert get_client_ip(request) == "10.0.0.1"
    assert get_client_ip(request, trust_forwarded_for=True) == "196.201.214.200"
