"""
Account service for Daraja account operations.
Handles balance queries, transaction status checks and reversals.
"""

import logging
from typing import Any, Dict, Optional

from ..constants import (
    APIEndpoints, CommandID, REVERSAL_RECEIVER_IDENTIFIER, SHORTCODE_IDENTIFIER
)
from .base import BaseService

logger = logging.getLogger(__name__)


class AccountService(BaseService):
    """
    Service for account-related operations. Requires initiator credentials.
    Results are posted asynchronously to the given result URL.
    """

    def get_balance(
        self,
        result_url: str,
        queue_timeout_url: str,
        identifier_type: Optional[str] = None,
        remarks: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Request the balance of the business account.

        Args:
            result_url: URL the balance details are posted to
            queue_timeout_url: URL notified if the request times out
            identifier_type: Identifier type of PartyA (default: '4', shortcode)
            remarks: Optional comment (default: "Balance Check")

        Returns:
            Acknowledgement with ConversationID, OriginatorConversationID,
            ResponseCode and ResponseDescription

        Raises:
            ConfigurationError: If initiator credentials are missing
        """
        self.credentials.require_initiator("Account Balance Query")

        logger.info(f"Requesting account balance for {self.credentials.short_code}")

        payload = {
            'Initiator': self.credentials.initiator_name,
            'SecurityCredential': self.credentials.security_credential,
            'CommandID': CommandID.ACCOUNT_BALANCE.value,
            'PartyA': self.credentials.short_code,
            'IdentifierType': identifier_type or SHORTCODE_IDENTIFIER,
            'Remarks': remarks or "Balance Check",
            'QueueTimeOutURL': queue_timeout_url,
            'ResultURL': result_url,
        }
        return self._send(APIEndpoints.ACCOUNT_BALANCE, payload)

    def transaction_status(
        self,
        transaction_id: str,
        result_url: str,
        queue_timeout_url: str,
        identifier_type: Optional[str] = None,
        remarks: Optional[str] = None,
        occasion: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Check the status of an M-Pesa transaction.

        Args:
            transaction_id: M-Pesa transaction ID to check
            result_url: URL the status details are posted to
            queue_timeout_url: URL notified if the request times out
            identifier_type: Identifier type of PartyA (default: '4', shortcode)
            remarks: Optional comment
            occasion: Optional extra information

        Raises:
            ConfigurationError: If initiator credentials are missing
        """
        self.credentials.require_initiator("Transaction Status Query")

        logger.info(f"Querying transaction status: {transaction_id}")

        payload = {
            'Initiator': self.credentials.initiator_name,
            'SecurityCredential': self.credentials.security_credential,
            'CommandID': CommandID.TRANSACTION_STATUS_QUERY.value,
            'TransactionID': transaction_id,
            'PartyA': self.credentials.short_code,
            'IdentifierType': identifier_type or SHORTCODE_IDENTIFIER,
            'ResultURL': result_url,
            'QueueTimeOutURL': queue_timeout_url,
            'Remarks': remarks,
            'Occasion': occasion,
        }
        return self._send(APIEndpoints.TRANSACTION_STATUS, payload)

    def reverse_transaction(
        self,
        transaction_id: str,
        amount,
        result_url: str,
        queue_timeout_url: str,
        receiver_identifier_type: Optional[str] = None,
        remarks: Optional[str] = None,
        occasion: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Reverse a completed C2B transaction back to the customer.

        Args:
            transaction_id: M-Pesa transaction ID to reverse
            amount: Exact amount to reverse
            result_url: URL the reversal result is posted to
            queue_timeout_url: URL notified if the request times out
            receiver_identifier_type: Receiver identifier type (default: '11')
            remarks: Optional comment (default: "Reversal")
            occasion: Optional extra information

        Raises:
            ConfigurationError: If initiator credentials are missing
        """
        self.credentials.require_initiator("Reversals")

        logger.info(f"Reversing transaction: {transaction_id}")

        payload = {
            'Initiator': self.credentials.initiator_name,
            'SecurityCredential': self.credentials.security_credential,
            'CommandID': CommandID.TRANSACTION_REVERSAL.value,
            'TransactionID': transaction_id,
            'Amount': amount,
            'ReceiverParty': self.credentials.short_code,
            'RecieverIdentifierType': receiver_identifier_type or REVERSAL_RECEIVER_IDENTIFIER,
            'ResultURL': result_url,
            'QueueTimeOutURL': queue_timeout_url,
            'Remarks': remarks or "Reversal",
            'Occasion': occasion,
        }
        return self._send(APIEndpoints.REVERSAL, payload)
