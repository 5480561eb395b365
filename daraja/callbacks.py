"""
Parsing of callback payloads Safaricom posts to the configured URLs.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .error_normalizer import describe_result_code
from .exceptions import CallbackError
from .utils.formatters import flatten_items


def _as_int(value) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@dataclass
class StkCallback:
    """Final result of an STK push, posted to its CallBackURL."""

    merchant_request_id: Optional[str]
    checkout_request_id: str
    result_code: Optional[int]
    result_desc: str
    metadata: Dict[str, Any] = field(default_factory=dict)
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @property
    def is_successful(self) -> bool:
        return self.result_code == 0

    @property
    def amount(self):
        return self.metadata.get('Amount')

    @property
    def receipt_number(self) -> Optional[str]:
        return self.metadata.get('MpesaReceiptNumber')

    @property
    def phone_number(self):
        return self.metadata.get('PhoneNumber')

    @property
    def failure_reason(self) -> Optional[str]:
        """Descriptive message for a failed push, None on success."""
        if self.is_successful:
            return None
        return describe_result_code(self.result_code, self.result_desc) or self.result_desc


@dataclass
class TransactionResult:
    """Result posted to a ResultURL (B2C, B2B, balance, status, reversal)."""

    result_type: Optional[int]
    result_code: Optional[int]
    result_desc: str
    originator_conversation_id: Optional[str]
    conversation_id: Optional[str]
    transaction_id: Optional[str]
    parameters: Dict[str, Any] = field(default_factory=dict)
    reference_data: Dict[str, Any] = field(default_factory=dict)
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @property
    def is_successful(self) -> bool:
        return self.result_code == 0

    @property
    def failure_reason(self) -> Optional[str]:
        if self.is_successful:
            return None
        return describe_result_code(self.result_code, self.result_desc) or self.result_desc


def parse_stk_callback(payload: Dict[str, Any]) -> StkCallback:
    """
    Parse an STK push callback.

    Args:
        payload: Decoded JSON body, ``{"Body": {"stkCallback": {...}}}``

    Returns:
        StkCallback with CallbackMetadata items flattened

    Raises:
        CallbackError: If the payload is not an STK callback
    """
    try:
        callback = payload['Body']['stkCallback']
    except (KeyError, TypeError):
        raise CallbackError("Invalid STK callback: missing Body.stkCallback", response_data=payload)

    if not isinstance(callback, dict) or 'CheckoutRequestID' not in callback:
        raise CallbackError("Invalid STK callback: missing CheckoutRequestID", response_data=payload)

    metadata = callback.get('CallbackMetadata') or {}
    items = metadata.get('Item') if isinstance(metadata, dict) else None

    return StkCallback(
        merchant_request_id=callback.get('MerchantRequestID'),
        checkout_request_id=callback['CheckoutRequestID'],
        result_code=_as_int(callback.get('ResultCode')),
        result_desc=callback.get('ResultDesc', ''),
        metadata=flatten_items(items),
        raw=payload,
    )


def parse_result(payload: Dict[str, Any]) -> TransactionResult:
    """
    Parse a result callback for an initiator-authenticated request.

    Args:
        payload: Decoded JSON body, ``{"Result": {...}}``

    Returns:
        TransactionResult with ResultParameters flattened

    Raises:
        CallbackError: If the payload has no Result envelope
    """
    result = payload.get('Result') if isinstance(payload, dict) else None
    if not isinstance(result, dict):
        raise CallbackError("Invalid result callback: missing Result", response_data=payload)

    parameters = result.get('ResultParameters') or {}
    reference_data = result.get('ReferenceData') or {}

    return TransactionResult(
        result_type=_as_int(result.get('ResultType')),
        result_code=_as_int(result.get('ResultCode')),
        result_desc=result.get('ResultDesc', ''),
        originator_conversation_id=result.get('OriginatorConversationID'),
        conversation_id=result.get('ConversationID'),
        transaction_id=result.get('TransactionID'),
        parameters=flatten_items(
            parameters.get('ResultParameter') if isinstance(parameters, dict) else None,
            key_field='Key'
        ),
        reference_data=flatten_items(
            reference_data.get('ReferenceItem') if isinstance(reference_data, dict) else None,
            key_field='Key'
        ),
        raw=payload,
    )
