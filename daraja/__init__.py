"""
M-Pesa Daraja API client for Python and Django

Token caching, authenticated dispatch and error translation for the
Safaricom Daraja REST API, plus callback handling for Django projects.
"""

__version__ = "0.1.0"

from .client import Daraja
from .config import Credentials
from .error_normalizer import ErrorReport
from .exceptions import (
    APIError,
    AuthenticationError,
    CallbackError,
    ConfigurationError,
    DarajaException,
    LocalDispatchError,
    RemoteError,
    UnreachableError,
    ValidationError,
)

__all__ = [
    'Daraja',
    'Credentials',
    'ErrorReport',
    'APIError',
    'AuthenticationError',
    'CallbackError',
    'ConfigurationError',
    'DarajaException',
    'LocalDispatchError',
    'RemoteError',
    'UnreachableError',
    'ValidationError',
]
