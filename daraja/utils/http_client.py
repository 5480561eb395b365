"""
HTTP client for Daraja API communication.
"""

import json
import logging
from typing import Any, Dict, Optional

import requests

from ..constants import DEFAULT_TIMEOUT, ErrorCategory
from ..error_normalizer import ErrorReport, raise_for_failure, to_exception

logger = logging.getLogger(__name__)

SENSITIVE_FIELDS = ('Password', 'SecurityCredential')


class HTTPClient:
    """
    HTTP client wrapper for Daraja API requests.
    Handles request/response, error normalization and logging.
    Requests are never retried.
    """

    def __init__(
        self,
        base_url: str,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize HTTP client.

        Args:
            base_url: Base URL for API requests
            timeout: Request timeout in seconds, None for the transport default
            session: Optional pre-configured requests session
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()

    def _get_full_url(self, endpoint: str) -> str:
        """Get full URL for endpoint."""
        endpoint = endpoint.lstrip('/')
        return f"{self.base_url}/{endpoint}"

    def _log_request(self, method: str, url: str, headers: Dict, data: Any = None):
        """Log API request details."""
        logger.info(f"Daraja API Request: {method} {url}")
        logger.debug(f"Headers: {self._sanitize_headers(headers)}")
        if data is not None:
            logger.debug(f"Payload: {self._sanitize_payload(data)}")

    def _log_response(self, response: requests.Response):
        """Log API response details."""
        logger.info(f"Daraja API Response: {response.status_code}")
        logger.debug(f"Response: {response.text}")

    def _sanitize_headers(self, headers: Dict) -> Dict:
        """Remove sensitive data from headers for logging."""
        sanitized = headers.copy()
        if 'Authorization' in sanitized:
            scheme = sanitized['Authorization'].split(' ', 1)[0]
            sanitized['Authorization'] = f"{scheme} ***"
        return sanitized

    def _sanitize_payload(self, data: Any) -> Any:
        """Mask passwords and credentials in a payload for logging."""
        if isinstance(data, dict):
            return {
                key: '***' if key in SENSITIVE_FIELDS else value
                for key, value in data.items()
            }
        if isinstance(data, list):
            return [self._sanitize_payload(item) for item in data]
        return data

    def _handle_response(self, response: requests.Response) -> Any:
        """
        Handle API response and extract data.

        Args:
            response: Response object from requests

        Returns:
            Decoded JSON body, or an empty dict for an empty body

        Raises:
            RemoteError: If the response is not a 2xx or is not valid JSON
        """
        self._log_response(response)

        if not 200 <= response.status_code < 300:
            raise_for_failure(response)

        if not response.content:
            return {}

        try:
            return response.json()
        except ValueError as e:
            report = ErrorReport(
                category=ErrorCategory.REMOTE,
                message=f"Failed to parse API response: {str(e)}",
                status=response.status_code,
                response_data=response.text,
            )
            raise to_exception(report) from e

    def post(
        self,
        endpoint: str,
        data: Any = None,
        headers: Optional[Dict[str, str]] = None
    ) -> Any:
        """
        Make POST request to API.

        Args:
            endpoint: API endpoint path
            data: Request payload, serialized as JSON
            headers: Request headers

        Returns:
            Response data
        """
        url = self._get_full_url(endpoint)
        headers = dict(headers or {})
        headers.setdefault('Content-Type', 'application/json')

        self._log_request('POST', url, headers, data)

        try:
            body = json.dumps(data)
            response = self.session.post(
                url,
                data=body,
                headers=headers,
                timeout=self.timeout
            )
        except Exception as e:
            raise_for_failure(e)

        return self._handle_response(response)

    def get(
        self,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None
    ) -> Any:
        """
        Make GET request to API.

        Args:
            endpoint: API endpoint path
            params: Query parameters
            headers: Request headers

        Returns:
            Response data
        """
        url = self._get_full_url(endpoint)
        headers = dict(headers or {})

        self._log_request('GET', url, headers)

        try:
            response = self.session.get(
                url,
                params=params,
                headers=headers,
                timeout=self.timeout
            )
        except Exception as e:
            raise_for_failure(e)

        return self._handle_response(response)

    def close(self):
        """Close the session."""
        self.session.close()
