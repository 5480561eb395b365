"""
Standing order (Ratiba) service for recurring payments.
"""

import logging
from typing import Any, Dict, Optional

from ..constants import APIEndpoints, SHORTCODE_IDENTIFIER, StandingOrderType
from .base import BaseService

logger = logging.getLogger(__name__)


class StandingOrderService(BaseService):
    """Service for creating M-Pesa standing orders."""

    def create(
        self,
        standing_order_name: str,
        start_date: str,
        end_date: str,
        amount,
        party_a: str,
        account_reference: str,
        callback_url: str,
        frequency: str,
        transaction_type: Optional[str] = None,
        transaction_desc: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Create a standing order. The customer receives a prompt to authorize it.

        Args:
            standing_order_name: Name unique per customer (e.g., "Monthly Internet")
            start_date: First payment date (YYYYMMDD)
            end_date: Last payment date (YYYYMMDD)
            amount: Amount deducted at each interval
            party_a: Customer phone number (2547XXXXXXXX)
            account_reference: Account number for the payment
            callback_url: URL the final result is posted to
            frequency: '1' one-off, '2' daily, '3' weekly, '4' monthly, ...
            transaction_type: Pay bill (default) or pay merchant standing order
            transaction_desc: Description (default: "Standing Order")

        Returns:
            Acknowledgement with ResponseHeader and ResponseBody
        """
        logger.info(f"Creating standing order '{standing_order_name}' for {party_a}")

        payload = {
            'StandingOrderName': standing_order_name,
            'StartDate': start_date,
            'EndDate': end_date,
            'BusinessShortCode': self.credentials.short_code,
            'TransactionType': transaction_type or StandingOrderType.PAY_BILL.value,
            'ReceiverPartyIdentifierType': SHORTCODE_IDENTIFIER,
            'Amount': amount,
            'PartyA': party_a,
            'CallBackURL': callback_url,
            'AccountReference': account_reference,
            'TransactionDesc': transaction_desc or "Standing Order",
            'Frequency': frequency,
        }
        return self._send(APIEndpoints.STANDING_ORDER, payload)
