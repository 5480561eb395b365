"""
Authenticated dispatch of Daraja API requests.
"""

import logging
from typing import Any

from ..config import Credentials
from .auth_service import AuthService

logger = logging.getLogger(__name__)


class Dispatcher:
    """
    Sends authenticated POST requests to the Daraja API.

    Each call makes at most one token request (when the cache is cold or
    expired) and exactly one request to the target endpoint.
    """

    def __init__(self, credentials: Credentials, auth_service: AuthService, http_client):
        self.credentials = credentials
        self.auth_service = auth_service
        self.http_client = http_client

    def send(self, path: str, body: Any) -> Any:
        """
        POST a JSON body to an API path with a bearer token.

        Args:
            path: Endpoint path (e.g. "/mpesa/stkpush/v1/processrequest")
            body: JSON-serializable request body

        Returns:
            Decoded JSON response, unchanged

        Raises:
            RemoteError: If the API responded with an error
            UnreachableError: If no response was received
            LocalDispatchError: If the request could not be built or sent
        """
        headers = self.auth_service.get_auth_header()
        headers['Content-Type'] = 'application/json'

        response = self.http_client.post(
            endpoint=path,
            data=body,
            headers=headers
        )

        logger.debug(f"Daraja call to {path} succeeded")
        return response
