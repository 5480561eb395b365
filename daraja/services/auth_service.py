"""
Authentication service for the Daraja API.
Handles OAuth token generation and in-memory caching.
"""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional

from ..config import Credentials
from ..constants import APIEndpoints, ErrorCategory, GRANT_TYPE, TOKEN_EXPIRY_MARGIN_SECONDS
from ..error_normalizer import ErrorReport
from ..exceptions import AuthenticationError, RemoteError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CachedToken:
    """An access token and the instant (epoch seconds) it stops being used."""

    value: str
    valid_until: float

    def is_valid(self, now: float) -> bool:
        return now < self.valid_until


class AuthService:
    """
    Service for managing Daraja access tokens.

    Holds a single cached token per instance. Refreshes lazily when the
    token is absent or expired; concurrent callers share one refresh.
    """

    def __init__(self, credentials: Credentials, http_client, clock: Callable[[], float] = time.time):
        self.credentials = credentials
        self.http_client = http_client
        self.clock = clock
        self._token: Optional[CachedToken] = None
        self._lock = threading.Lock()

    @property
    def cached_token(self) -> Optional[CachedToken]:
        return self._token

    def generate_token(self) -> str:
        """
        Fetch a new access token from the Daraja API and cache it.

        Returns:
            Access token string

        Raises:
            AuthenticationError: If the provider rejects the request
            UnreachableError: If the provider did not answer
            LocalDispatchError: If the request could not be sent
        """
        logger.info("Generating new Daraja access token")

        headers = {'Authorization': self.credentials.basic_auth_header()}
        try:
            response = self.http_client.get(
                endpoint=APIEndpoints.GENERATE_TOKEN,
                params={'grant_type': GRANT_TYPE},
                headers=headers
            )
        except AuthenticationError:
            raise
        except RemoteError as e:
            raise AuthenticationError(
                e.message,
                error_code=e.error_code,
                response_data=e.response_data,
                report=e.report
            ) from e

        token = response.get('access_token') if isinstance(response, dict) else None
        if not token:
            report = ErrorReport(
                category=ErrorCategory.REMOTE,
                message="Token generation failed: No access_token in response",
                response_data=response,
            )
            raise AuthenticationError(report.message, response_data=response, report=report)

        try:
            expires_in = float(response.get('expires_in', 0))
        except (TypeError, ValueError):
            expires_in = 0

        self._token = CachedToken(
            value=token,
            valid_until=self.clock() + expires_in - TOKEN_EXPIRY_MARGIN_SECONDS,
        )

        logger.info("Successfully generated and cached new token")
        return token

    def get_valid_token(self, force_refresh: bool = False) -> str:
        """
        Get a valid access token.
        Returns the cached token if still valid, otherwise generates a new one.

        Args:
            force_refresh: Force generation of a new token

        Returns:
            Access token string
        """
        cached = self._token
        if not force_refresh and cached and cached.is_valid(self.clock()):
            logger.debug("Using cached token")
            return cached.value

        with self._lock:
            # Another caller may have refreshed while we waited
            cached = self._token
            if not force_refresh and cached and cached.is_valid(self.clock()):
                logger.debug("Using token refreshed by a concurrent call")
                return cached.value

            if cached:
                logger.info("Cached token expired, refreshing")
            else:
                logger.info("No cached token found")
            return self.generate_token()

    def invalidate_token(self):
        """Drop the cached token so the next call fetches a new one."""
        logger.info("Invalidating cached token")
        with self._lock:
            self._token = None

    def get_auth_header(self, force_refresh: bool = False) -> dict:
        """
        Get authorization header for API requests.

        Args:
            force_refresh: Force generation of a new token

        Returns:
            Dictionary with Authorization header
        """
        token = self.get_valid_token(force_refresh=force_refresh)
        return {'Authorization': f"Bearer {token}"}
