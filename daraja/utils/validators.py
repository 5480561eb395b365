"""
Validation utilities for Daraja request parameters.
"""

from typing import Any, Dict, List

from ..constants import MAX_BULK_INVOICES
from ..exceptions import ValidationError


def validate_batch(items: List[Dict[str, Any]], max_items: int = MAX_BULK_INVOICES) -> List[Dict[str, Any]]:
    """
    Validate a batch of invoice objects for bulk Bill Manager calls.

    Args:
        items: List of invoice dictionaries
        max_items: Maximum number of items accepted per call

    Returns:
        The validated list

    Raises:
        ValidationError: If the batch is empty, too large or holds non-objects
    """
    if not isinstance(items, (list, tuple)) or not items:
        raise ValidationError("At least one invoice is required")

    if len(items) > max_items:
        raise ValidationError(
            f"Too many invoices. Maximum {max_items} per request. "
            f"Got: {len(items)}"
        )

    for index, item in enumerate(items):
        if not isinstance(item, dict):
            raise ValidationError(
                f"Invoice at position {index} must be an object. Got: {type(item).__name__}"
            )

    return list(items)


def validate_callback_url(url: str, field: str = 'callback URL') -> str:
    """
    Validate a URL Safaricom will post results to.

    Args:
        url: URL to validate
        field: Parameter name used in the error message

    Returns:
        Validated URL

    Raises:
        ValidationError: If the URL is missing or not absolute http(s)
    """
    if not url:
        raise ValidationError(f"A {field} is required")

    url = str(url).strip()
    if not url.startswith(('https://', 'http://')):
        raise ValidationError(f"Invalid {field}: {url}. It must be an absolute http(s) URL.")

    return url
