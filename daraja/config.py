"""
Configuration management for the Daraja payment utility.

Credentials are passed programmatically through :class:`Credentials`.
Django projects may instead load them from settings with :class:`DarajaConfig`.
"""

import base64
import threading
from dataclasses import dataclass
from typing import Optional

from django.conf import settings

from .constants import BASE_URLS, DEFAULT_ENVIRONMENT, DEFAULT_TIMEOUT
from .exceptions import ConfigurationError


@dataclass(frozen=True)
class Credentials:
    """
    Static credentials for one Daraja app and shortcode.

    ``consumer_key``, ``consumer_secret`` and ``short_code`` are required.
    The optional fields are only checked by the operations that need them.
    """

    consumer_key: Optional[str] = None
    consumer_secret: Optional[str] = None
    short_code: Optional[str] = None
    passkey: Optional[str] = None
    initiator_name: Optional[str] = None
    security_credential: Optional[str] = None
    environment: str = DEFAULT_ENVIRONMENT.value

    def __post_init__(self):
        if not self.consumer_key or not self.consumer_secret or not self.short_code:
            raise ConfigurationError(
                "Consumer key, consumer secret, and shortcode are required."
            )

        environment = getattr(self.environment, 'value', self.environment)
        if not environment:
            environment = DEFAULT_ENVIRONMENT.value
        if environment not in BASE_URLS:
            raise ConfigurationError(
                f"Invalid environment specified: {environment}. "
                "Use 'sandbox' or 'production'."
            )

        # Frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, 'environment', environment)
        object.__setattr__(self, 'short_code', str(self.short_code))

    @property
    def base_url(self) -> str:
        """Base URL for the configured environment."""
        return BASE_URLS[self.environment]

    def basic_auth_header(self) -> str:
        """Authorization header value for the OAuth token endpoint."""
        raw = f"{self.consumer_key}:{self.consumer_secret}".encode('utf-8')
        return f"Basic {base64.b64encode(raw).decode('ascii')}"

    def require_passkey(self, operation: str):
        """Fail fast when an operation needs the STK passkey."""
        if not self.passkey:
            raise ConfigurationError(f"Passkey is required for {operation}.")

    def require_initiator(self, operation: str):
        """Fail fast when an operation needs initiator credentials."""
        if not self.initiator_name or not self.security_credential:
            raise ConfigurationError(
                f"InitiatorName and SecurityCredential are required for {operation}."
            )

    def __repr__(self):
        return (
            f"Credentials(short_code={self.short_code!r}, "
            f"environment={self.environment!r})"
        )


class DarajaConfig:
    """
    Configuration manager for Daraja API settings.
    Loads and validates settings from Django settings.
    """

    @property
    def consumer_key(self):
        """Get Daraja consumer key."""
        consumer_key = getattr(settings, 'DARAJA_CONSUMER_KEY', '')
        if not consumer_key:
            raise ConfigurationError(
                "DARAJA_CONSUMER_KEY is not configured in Django settings. "
                "Please add it to your settings.py or .env file."
            )
        return consumer_key

    @property
    def consumer_secret(self):
        """Get Daraja consumer secret."""
        consumer_secret = getattr(settings, 'DARAJA_CONSUMER_SECRET', '')
        if not consumer_secret:
            raise ConfigurationError(
                "DARAJA_CONSUMER_SECRET is not configured in Django settings. "
                "Please add it to your settings.py or .env file."
            )
        return consumer_secret

    @property
    def short_code(self):
        """Get the business shortcode (Paybill or Till)."""
        short_code = getattr(settings, 'DARAJA_SHORTCODE', '')
        if not short_code:
            raise ConfigurationError(
                "DARAJA_SHORTCODE is not configured in Django settings."
            )
        return str(short_code)

    @property
    def passkey(self):
        """Get STK push passkey (optional)."""
        return getattr(settings, 'DARAJA_PASSKEY', None) or None

    @property
    def initiator_name(self):
        """Get initiator name (optional)."""
        return getattr(settings, 'DARAJA_INITIATOR_NAME', None) or None

    @property
    def security_credential(self):
        """Get encrypted initiator security credential (optional)."""
        return getattr(settings, 'DARAJA_SECURITY_CREDENTIAL', None) or None

    @property
    def environment(self):
        """Get Daraja environment."""
        return getattr(settings, 'DARAJA_ENVIRONMENT', DEFAULT_ENVIRONMENT.value)

    @property
    def timeout(self):
        """Get request timeout in seconds, None for the transport default."""
        return getattr(settings, 'DARAJA_TIMEOUT', DEFAULT_TIMEOUT)

    @property
    def callback_allowed_ips(self):
        """Get list of IPs allowed to post callbacks."""
        return getattr(settings, 'DARAJA_CALLBACK_ALLOWED_IPS', [])

    @property
    def trust_forwarded_for(self):
        """Whether to read the callback source IP from X-Forwarded-For."""
        return bool(getattr(settings, 'DARAJA_TRUST_FORWARDED_FOR', False))

    def credentials(self) -> Credentials:
        """Build credentials from Django settings."""
        return Credentials(
            consumer_key=self.consumer_key,
            consumer_secret=self.consumer_secret,
            short_code=self.short_code,
            passkey=self.passkey,
            initiator_name=self.initiator_name,
            security_credential=self.security_credential,
            environment=self.environment,
        )


config = DarajaConfig()

_client = None
_client_lock = threading.Lock()


def get_client():
    """
    Get the shared client for the credentials in Django settings.

    One client (and so one cached token) is kept per process for this
    credential set. Build ``Daraja`` instances directly for any other set.
    """
    global _client
    with _client_lock:
        if _client is None:
            from .client import Daraja
            _client = Daraja(config.credentials(), timeout=config.timeout)
        return _client


def reset_client():
    """Drop the shared client, closing its session."""
    global _client
    with _client_lock:
        if _client is not None:
            _client.close()
        _client = None
