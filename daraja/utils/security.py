"""
Password derivation and callback source verification utilities.
"""

import base64
from datetime import datetime
from typing import Optional

from ..constants import TIMESTAMP_FORMAT


def get_timestamp(now: Optional[datetime] = None) -> str:
    """
    Generate a timestamp in the format Daraja expects.

    Args:
        now: Moment to format (default: current local time)

    Returns:
        Timestamp string (e.g., "20230101000000")
    """
    now = now or datetime.now()
    return now.strftime(TIMESTAMP_FORMAT)


def generate_password(short_code: str, passkey: str, timestamp: str) -> str:
    """
    Derive the password for passkey-authenticated requests.

    Args:
        short_code: Business shortcode
        passkey: STK push passkey
        timestamp: Timestamp sent alongside the password

    Returns:
        base64(short_code + passkey + timestamp)
    """
    raw = f"{short_code}{passkey}{timestamp}".encode('utf-8')
    return base64.b64encode(raw).decode('ascii')


def get_client_ip(request, trust_forwarded_for: bool = False) -> Optional[str]:
    """
    Get originating IP of a Django request.

    X-Forwarded-For is set by the caller, so it is only read when the
    project runs behind a proxy that overwrites it.
    """
    x_forwarded_for = request.META.get('HTTP_X_FORWARDED_FOR')
    if trust_forwarded_for and x_forwarded_for:
        return x_forwarded_for.split(',')[0].strip()
    return request.META.get('REMOTE_ADDR')


def verify_callback_ip(request_ip: Optional[str], allowed_ips: list) -> bool:
    """
    Verify that a callback comes from an allowed IP address.

    Args:
        request_ip: IP address of the request
        allowed_ips: List of allowed IP addresses

    Returns:
        True if IP is allowed, False otherwise
    """
    if not allowed_ips:
        # No restriction configured
        return True

    return request_ip in allowed_ips
