"""
Client for the Safaricom Daraja API.
"""

import logging
from typing import Any, Optional

import requests

from .config import Credentials
from .constants import DEFAULT_TIMEOUT
from .services import (
    AccountService,
    AuthService,
    B2BService,
    B2CService,
    BillManagerService,
    C2BService,
    Dispatcher,
    QRCodeService,
    StandingOrderService,
    StkService,
)
from .utils.http_client import HTTPClient

logger = logging.getLogger(__name__)


class Daraja:
    """
    Entry point for Daraja API operations.

    Each instance owns one HTTP session and one cached access token.
    Operations are grouped by product::

        client = Daraja(Credentials(
            consumer_key="...",
            consumer_secret="...",
            short_code="174379",
            passkey="...",
        ))
        client.stk.push(
            amount=1,
            phone_number="254712345678",
            callback_url="https://example.com/daraja/callback/stk/",
            account_reference="Order-123",
            transaction_desc="Payment",
        )
    """

    def __init__(
        self,
        credentials: Credentials,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None
    ):
        self.credentials = credentials
        self.http_client = HTTPClient(credentials.base_url, timeout=timeout, session=session)
        self.auth = AuthService(credentials, self.http_client)
        self.dispatcher = Dispatcher(credentials, self.auth, self.http_client)

        self.stk = StkService(credentials, self.dispatcher)
        self.c2b = C2BService(credentials, self.dispatcher)
        self.b2c = B2CService(credentials, self.dispatcher)
        self.b2b = B2BService(credentials, self.dispatcher)
        self.account = AccountService(credentials, self.dispatcher)
        self.qr = QRCodeService(credentials, self.dispatcher)
        self.bill_manager = BillManagerService(credentials, self.dispatcher)
        self.standing_order = StandingOrderService(credentials, self.dispatcher)

        logger.debug(f"Daraja client ready for {credentials.short_code} ({credentials.environment})")

    def send(self, path: str, body: Any) -> Any:
        """POST a body to any Daraja endpoint with a bearer token."""
        return self.dispatcher.send(path, body)

    def close(self):
        """Close the underlying HTTP session."""
        self.http_client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()
