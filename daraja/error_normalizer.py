"""
Error normalization for Daraja API calls.

Every failed call is classified into one of three categories
(remote, unreachable, local) with a descriptive message. Provider
error codes are translated through a fixed table.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Optional, Tuple

import requests

from .constants import ErrorCategory
from .exceptions import (
    APIError, LocalDispatchError, RemoteError, UnreachableError
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ErrorReport:
    """Normalized description of a failed call."""

    category: ErrorCategory
    message: str
    code: Optional[str] = None
    status: Optional[int] = None
    response_data: Any = None

    @property
    def retryable(self) -> bool:
        return self.category == ErrorCategory.UNREACHABLE


# Field paths probed in priority order
CODE_EXTRACTORS: Tuple[Tuple[str, ...], ...] = (
    ('errorCode',),
    ('fault', 'code'),
    ('ResultCode',),
)

MESSAGE_EXTRACTORS: Tuple[Tuple[str, ...], ...] = (
    ('errorMessage',),
    ('fault', 'faultstring'),
    ('ResultDesc',),
)

UNREACHABLE_MESSAGE = (
    "The request failed because no response was received from the Safaricom "
    "server. This could be due to a network issue or the Daraja API being "
    "temporarily unavailable. Please check your internet connection and try again."
)

LOCAL_MESSAGE = "An unexpected error occurred while setting up the API request: {detail}"

FALLBACK_MESSAGE = "The API request failed with status {status}: {message}"

ERROR_MESSAGES = {
    # Authentication and request errors
    "400.008.01": (
        "Authentication Failed. Please check if your Consumer Key and Consumer "
        "Secret are correct. The Daraja API returned: {message}"
    ),
    "400.008.02": (
        "Invalid Grant Type. The library sent 'client_credentials' as required, "
        "but the API rejected it. This may be a temporary issue with the API. "
        "The Daraja API returned: {message}"
    ),
    "404.001.04": (
        "Invalid Authentication Header. This can happen if the access token is "
        "missing or incorrect. The Daraja API returned: {message}"
    ),
    "400.002.05": (
        "Invalid Request Payload. Please check that all required parameters for "
        "this API call are correct and have the right format. "
        "The Daraja API returned: {message}"
    ),
    "400.003.01": (
        "Invalid Access Token. Your token has likely expired. A new one will be "
        "requested on the next call. The Daraja API returned: {message}"
    ),

    # M-Pesa Express (STK push)
    "1": (
        "Insufficient Funds. The customer's M-Pesa account has insufficient funds "
        "to complete the transaction. Please advise the customer to top up or use Fuliza."
    ),
    "1001": (
        "Transaction in Progress. The customer has another M-Pesa transaction in "
        "progress. Please advise them to complete or cancel it before retrying."
    ),
    "1019": (
        "Transaction Expired. The request took too long to process and has "
        "expired. Please try initiating the transaction again."
    ),
    "1025": (
        "An internal error occurred while sending the push request. This might be "
        "a temporary issue with the M-Pesa service. Please try again shortly."
    ),
    "1032": (
        "Request Cancelled by User. The customer cancelled the M-Pesa PIN entry "
        "prompt on their phone."
    ),
    "1037": (
        "STK Push Timeout. The request timed out because the customer's phone was "
        "unreachable or they did not respond in time. Please ensure the phone is "
        "online and advise the customer to try again."
    ),
    "2001": (
        "Invalid Credentials. Either the customer entered the wrong M-Pesa PIN, or "
        "the 'initiator_name'/'security_credential' you provided is incorrect. "
        "Please verify them on the Safaricom Developer Portal and try again."
    ),

    # B2C and account balance
    "15": (
        "Duplicate Request. A request with the same unique identifier has already "
        "been processed. Please ensure each request has a unique OriginatorConversationID."
    ),
    "17": (
        "Internal Failure. An unspecified error occurred within the M-Pesa system. "
        "Please try again later."
    ),
    "18": (
        "Initiator Credential Check Failure. The Security Credential provided is "
        "incorrect. Please verify and encrypt your initiator password again."
    ),
    "20": (
        "Unresolved Initiator. The InitiatorName you provided could not be found. "
        "Please check your credentials."
    ),
    "21": (
        "Permission Failure. The initiator does not have permission to perform "
        "this action on the specified shortcode."
    ),
    "26": (
        "System Busy. The M-Pesa system is currently experiencing high traffic. "
        "Please try your request again in a few moments."
    ),

    # B2B express checkout
    "4102": (
        "Merchant KYC Fail. There is an issue with the merchant's account details "
        "(KYC). Please ensure the merchant's account is fully compliant."
    ),
    "4104": (
        "Missing Nominated Number. The merchant's Till Number is not configured "
        "with a nominated phone number on the M-Pesa portal."
    ),
    "4201": (
        "USSD Network Error. There was a problem with the USSD network when sending "
        "the prompt to the merchant. This is often temporary. Please try again."
    ),
}
ERROR_MESSAGES["4203"] = ERROR_MESSAGES["4201"]

# Codes whose meaning depends on the message. Phrases are checked in order.
DISAMBIGUATED_MESSAGES = {
    # C2B URL registration
    "500.003.1001": (
        (
            ("already registered", (
                "URLs are already registered for this ShortCode. In the production "
                "environment, you can only register URLs once. To change them, "
                "please contact Safaricom API support."
            )),
            ("Duplicate notification info", (
                "Duplicate URLs. You may have registered these URLs on another "
                "platform. Please contact Safaricom support to have the old URLs "
                "deleted before registering here."
            )),
        ),
        "An internal server error occurred at the API. Please try again later. "
        "Details: {message}",
    ),
    # Bill Manager
    "409": (
        (
            ("Biller already Registered", (
                "This shortcode is already opted into Bill Manager. You do not "
                "need to opt-in again."
            )),
            ("Invalid consumerkey/shortcode", (
                "Invalid credentials. Please ensure the consumer key and shortcode "
                "you are using are correct and linked."
            )),
            ("Another entry exist", (
                "Duplicate Invoice. An invoice with this 'externalReference' number "
                "already exists. Please use a unique reference for each invoice."
            )),
            ("Incorrect phone number format", (
                "Invalid Phone Number. Please ensure the 'billedPhoneNumber' is a "
                "valid Safaricom number in the format 07XXXXXXXX."
            )),
            ("Incorrect due date format", (
                "Invalid Date Format. Please ensure the 'dueDate' is in the format "
                "YYYY-MM-DD."
            )),
            ("cannot be cancelled", (
                "Invoice Cannot Be Cancelled. The invoice has likely been partially "
                "or fully paid. Only unpaid invoices can be cancelled."
            )),
        ),
        "A conflict error occurred. The API returned: {message}",
    ),
}


def _probe(data: Any, paths: Tuple[Tuple[str, ...], ...]) -> Any:
    """Return the first truthy value found along the given field paths."""
    if not isinstance(data, dict):
        return None

    for path in paths:
        value = data
        for key in path:
            if not isinstance(value, dict):
                value = None
                break
            value = value.get(key)
        if value:
            return value
    return None


def extract_code(data: Any) -> Optional[str]:
    """Extract the provider error code from a response body."""
    code = _probe(data, CODE_EXTRACTORS)
    return None if code is None else str(code)


def extract_message(data: Any) -> str:
    """Extract a human message from a response body, dumping it as a last resort."""
    message = _probe(data, MESSAGE_EXTRACTORS)
    if message is not None:
        return str(message)
    if isinstance(data, str):
        return data
    try:
        return json.dumps(data)
    except (TypeError, ValueError):
        return str(data)


def describe_result_code(code, message: str = "") -> Optional[str]:
    """
    Translate a provider code into a descriptive message.

    Returns None when the code is not in the table.
    """
    if code is None:
        return None
    code = str(code)
    message = message or ""

    if code in DISAMBIGUATED_MESSAGES:
        phrases, default = DISAMBIGUATED_MESSAGES[code]
        for phrase, template in phrases:
            if phrase in message:
                return template.format(message=message)
        return default.format(message=message)

    template = ERROR_MESSAGES.get(code)
    if template is None:
        return None
    return template.format(message=message)


def _response_body(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


def _normalize_response(response: requests.Response) -> ErrorReport:
    status = response.status_code
    data = _response_body(response)
    code = extract_code(data)
    message = extract_message(data)

    description = describe_result_code(code, message)
    if description is None:
        description = FALLBACK_MESSAGE.format(status=status, message=message)

    return ErrorReport(
        category=ErrorCategory.REMOTE,
        message=description,
        code=code,
        status=status,
        response_data=data,
    )


def normalize(failure) -> ErrorReport:
    """
    Classify a failed call.

    Args:
        failure: A non-2xx ``requests.Response``, or the exception raised
            while building or sending the request

    Returns:
        ErrorReport describing the failure. Never raises.
    """
    try:
        if isinstance(failure, requests.Response):
            return _normalize_response(failure)

        if isinstance(failure, requests.HTTPError) and failure.response is not None:
            return _normalize_response(failure.response)

        if isinstance(failure, (requests.ConnectionError, requests.Timeout)):
            return ErrorReport(
                category=ErrorCategory.UNREACHABLE,
                message=UNREACHABLE_MESSAGE,
            )

        return ErrorReport(
            category=ErrorCategory.LOCAL,
            message=LOCAL_MESSAGE.format(detail=str(failure) or type(failure).__name__),
        )
    except Exception as e:
        logger.exception("Failed to normalize Daraja error")
        return ErrorReport(
            category=ErrorCategory.LOCAL,
            message=LOCAL_MESSAGE.format(detail=str(e)),
        )


_EXCEPTION_CLASSES = {
    ErrorCategory.REMOTE: RemoteError,
    ErrorCategory.UNREACHABLE: UnreachableError,
    ErrorCategory.LOCAL: LocalDispatchError,
}


def to_exception(report: ErrorReport) -> APIError:
    """Build the exception matching a report's category."""
    exception_class = _EXCEPTION_CLASSES[report.category]
    return exception_class(
        report.message,
        error_code=report.code or report.status,
        response_data=report.response_data,
        report=report,
    )


def raise_for_failure(failure):
    """Normalize a failure and raise the resulting exception."""
    report = normalize(failure)
    logger.error(f"Daraja API call failed ({report.category.value}): {report.message}")
    exception = to_exception(report)
    if isinstance(failure, BaseException):
        raise exception from failure
    raise exception
