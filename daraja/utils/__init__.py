"""
Utility modules for Daraja API operations.
"""

from .http_client import HTTPClient
from .validators import validate_batch, validate_callback_url
from .formatters import clean_payload, flatten_items
from .security import (
    generate_password,
    get_client_ip,
    get_timestamp,
    verify_callback_ip
)

__all__ = [
    'HTTPClient',
    'validate_batch',
    'validate_callback_url',
    'clean_payload',
    'flatten_items',
    'generate_password',
    'get_client_ip',
    'get_timestamp',
    'verify_callback_ip',
]
