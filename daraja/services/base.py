"""
Shared plumbing for endpoint services.
"""

from typing import Any, Dict

from ..config import Credentials
from ..utils.formatters import clean_payload
from .dispatcher import Dispatcher


class BaseService:
    """
    Base for services that build request bodies and hand them to a dispatcher.
    """

    def __init__(self, credentials: Credentials, dispatcher: Dispatcher):
        self.credentials = credentials
        self.dispatcher = dispatcher

    def _send(self, endpoint: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Drop unset optional fields and dispatch the payload."""
        return self.dispatcher.send(endpoint, clean_payload(payload))
