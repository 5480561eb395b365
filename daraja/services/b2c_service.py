"""
Business to customer (B2C) service.
Handles payouts to M-Pesa wallets and B2C account top-ups.
"""

import logging
from typing import Any, Dict, Optional

from ..constants import APIEndpoints, CommandID, SHORTCODE_IDENTIFIER
from .base import BaseService

logger = logging.getLogger(__name__)


class B2CService(BaseService):
    """
    Service for B2C payouts. Requires initiator credentials.
    """

    def send_payment(
        self,
        amount,
        party_b: str,
        remarks: str,
        queue_timeout_url: str,
        result_url: str,
        command_id: Optional[str] = None,
        occasion: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Send money from the organization's account to a customer.

        Args:
            amount: Amount to send
            party_b: Customer phone number (2547XXXXXXXX)
            remarks: Short description (e.g., "June Salary")
            queue_timeout_url: URL notified if the request times out
            result_url: URL the final result is posted to
            command_id: SalaryPayment, BusinessPayment (default) or PromotionPayment
            occasion: Optional extra comment

        Returns:
            Acknowledgement with ConversationID, OriginatorConversationID,
            ResponseCode and ResponseDescription. The final result arrives
            at result_url.

        Raises:
            ConfigurationError: If initiator credentials are missing
        """
        self.credentials.require_initiator("B2C transactions")

        logger.info(f"Sending B2C payment of {amount} to {party_b}")

        payload = {
            'InitiatorName': self.credentials.initiator_name,
            'SecurityCredential': self.credentials.security_credential,
            'CommandID': command_id or CommandID.BUSINESS_PAYMENT.value,
            'Amount': amount,
            'PartyA': self.credentials.short_code,
            'PartyB': party_b,
            'Remarks': remarks,
            'QueueTimeOutURL': queue_timeout_url,
            'ResultURL': result_url,
            'Occasion': occasion,
        }
        return self._send(APIEndpoints.B2C_PAYMENT, payload)

    def top_up(
        self,
        amount,
        party_b: str,
        queue_timeout_url: str,
        result_url: str,
        remarks: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Load funds from the business account into a B2C shortcode.

        Args:
            amount: Amount to transfer
            party_b: B2C shortcode being topped up
            queue_timeout_url: URL notified if the request times out
            result_url: URL the final result is posted to
            remarks: Optional comment (default: "B2C Top Up")

        Raises:
            ConfigurationError: If initiator credentials are missing
        """
        self.credentials.require_initiator("B2C Account Top Up")

        logger.info(f"Topping up B2C account {party_b} with {amount}")

        payload = {
            'Initiator': self.credentials.initiator_name,
            'SecurityCredential': self.credentials.security_credential,
            'CommandID': CommandID.BUSINESS_PAY_TO_BULK.value,
            'SenderIdentifierType': SHORTCODE_IDENTIFIER,
            'RecieverIdentifierType': SHORTCODE_IDENTIFIER,
            'Amount': amount,
            'PartyA': self.credentials.short_code,
            'PartyB': party_b,
            'AccountReference': "B2C Top Up",
            'Remarks': remarks or "B2C Top Up",
            'QueueTimeOutURL': queue_timeout_url,
            'ResultURL': result_url,
        }
        return self._send(APIEndpoints.B2B_PAYMENT, payload)
