"""
Custom exceptions for Daraja API operations.
"""


class DarajaException(Exception):
    """Base exception for all Daraja-related errors."""

    def __init__(self, message, error_code=None, response_data=None):
        self.message = message
        self.error_code = error_code
        self.response_data = response_data
        super().__init__(self.message)


class ConfigurationError(DarajaException):
    """Raised when credentials or settings are missing or invalid."""
    pass


class APIError(DarajaException):
    """
    Raised when a call to the Daraja API fails.

    Carries the normalized error report describing the failure.
    """

    def __init__(self, message, error_code=None, response_data=None, report=None):
        super().__init__(message, error_code=error_code, response_data=response_data)
        self.report = report

    @property
    def category(self):
        return self.report.category if self.report else None

    @property
    def status(self):
        return self.report.status if self.report else None


class RemoteError(APIError):
    """Raised when the Daraja API responded with an error."""
    pass


class AuthenticationError(RemoteError):
    """Raised when the OAuth token could not be obtained."""
    pass


class UnreachableError(APIError):
    """
    Raised when the request was sent but no response came back.

    This is the only failure callers may treat as transient.
    """
    retryable = True


class LocalDispatchError(APIError):
    """Raised when the request could not be built or sent."""
    pass


class ValidationError(DarajaException):
    """Raised when input validation fails."""
    pass


class CallbackError(ValidationError):
    """Raised when a callback payload from Safaricom cannot be parsed."""
    pass
