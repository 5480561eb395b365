"""
Data formatting utilities for Daraja request and callback payloads.
"""

from typing import Any, Dict


def clean_payload(payload: Dict[str, Any]) -> Dict[str, Any]:
    """
    Drop optional fields that were not provided.

    Args:
        payload: Request body with possible None values

    Returns:
        Copy of the payload without None values
    """
    return {key: value for key, value in payload.items() if value is not None}


def flatten_items(items: Any, key_field: str = 'Name', value_field: str = 'Value') -> Dict[str, Any]:
    """
    Flatten Daraja's list-of-pairs metadata into a dictionary.

    Callbacks carry metadata as ``[{"Name": "Amount", "Value": 1}, ...]``
    (``Key``/``Value`` in result callbacks). Items without a value are kept
    with None.

    Args:
        items: List of name/value dictionaries, or a single dictionary
        key_field: Name of the key field
        value_field: Name of the value field

    Returns:
        Dictionary mapping names to values
    """
    if not items:
        return {}
    if isinstance(items, dict):
        items = [items]

    flattened = {}
    for item in items:
        if isinstance(item, dict) and key_field in item:
            flattened[item[key_field]] = item.get(value_field)
    return flattened
