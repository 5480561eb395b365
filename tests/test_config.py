import base64

import pytest
from django.test import override_settings

from daraja import ConfigurationError, Credentials, Daraja
from daraja.config import DarajaConfig, get_client, reset_client


def test_environment_defaults_to_sandbox():
    credentials = Credentials(consumer_key="k", consumer_secret="s", short_code="600988")
    assert credentials.environment == "sandbox"
    assert credentials.base_url == "https://sandbox.safaricom.co.ke"


def test_production_environment_resolves_base_url():
    credentials = Credentials(
        consumer_key="k", consumer_secret="s", short_code="600988", environment="production"
    )
    assert credentials.base_url == "https://api.safaricom.co.ke"


def test_invalid_environment_fails_construction():
    with pytest.raises(ConfigurationError) as exc_info:
        Credentials(consumer_key="k", consumer_secret="s", short_code="600988", environment="invalid")
    assert "Invalid environment specified: invalid" in str(exc_info.value)


@pytest.mark.parametrize("missing", ["consumer_key", "consumer_secret", "short_code"])
def test_required_fields_are_enforced(missing):
    fields = {"consumer_key": "k", "consumer_secret": "s", "short_code": "600988"}
    fields[missing] = ""
    with pytest.raises(ConfigurationError, match="Consumer key, consumer secret, and shortcode are required"):
        Credentials(**fields)


def test_empty_credentials_fail_construction():
    with pytest.raises(ConfigurationError):
        Credentials()


def test_short_code_is_stored_as_string():
    credentials = Credentials(consumer_key="k", consumer_secret="s", short_code=600988)
    assert credentials.short_code == "600988"


def test_basic_auth_header_encodes_key_and_secret(credentials):
    expected = base64.b64encode(b"test_key:test_secret").decode()
    assert credentials.basic_auth_header() == f"Basic {expected}"


def test_optional_fields_are_checked_lazily():
    credentials = Credentials(consumer_key="k", consumer_secret="s", short_code="600988")

    with pytest.raises(ConfigurationError, match="Passkey is required for STK Push"):
        credentials.require_passkey("STK Push")
    with pytest.raises(ConfigurationError, match="InitiatorName and SecurityCredential"):
        credentials.require_initiator("B2C transactions")


def test_repr_does_not_leak_secrets(credentials):
    text = repr(credentials)
    assert "test_secret" not in text
    assert "test_credential" not in text


@override_settings(
    DARAJA_CONSUMER_KEY="key",
    DARAJA_CONSUMER_SECRET="secret",
    DARAJA_SHORTCODE=174379,
    DARAJA_PASSKEY="passkey",
    DARAJA_ENVIRONMENT="production",
)
def test_credentials_from_django_settings():
    credentials = DarajaConfig().credentials()

    assert credentials.consumer_key == "key"
    assert credentials.short_code == "174379"
    assert credentials.passkey == "passkey"
    assert credentials.initiator_name is None
    assert credentials.base_url == "https://api.safaricom.co.ke"


@override_settings(DARAJA_CONSUMER_KEY="")
def test_missing_setting_raises_configuration_error():
    with pytest.raises(ConfigurationError, match="DARAJA_CONSUMER_KEY"):
        DarajaConfig().credentials()


def test_get_client_returns_one_shared_client():
    reset_client()
    try:
        first = get_client()
        assert isinstance(first, Daraja)
        assert first is get_client()
        assert first.credentials.short_code == "174379"
    finally:
        reset_client()


def test_timeout_defaults_to_transport_default():
    assert DarajaConfig().timeout is None


@override_settings(DARAJA_TIMEOUT=10)
def test_timeout_can_be_set_in_settings():
    assert DarajaConfig().timeout == 10
