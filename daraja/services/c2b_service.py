"""
Customer to business (C2B) service.
"""

import logging
from typing import Any, Dict, Optional

from ..constants import APIEndpoints, CommandID, ResponseType
from ..utils.validators import validate_callback_url
from .base import BaseService

logger = logging.getLogger(__name__)


class C2BService(BaseService):
    """
    Service for registering C2B notification URLs and simulating payments.
    """

    def register_urls(
        self,
        confirmation_url: str,
        validation_url: Optional[str] = None,
        response_type: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Register confirmation and validation URLs for the shortcode.

        In production URLs can only be registered once per shortcode.

        Args:
            confirmation_url: URL notified once a payment completes
            validation_url: URL asked to validate a payment first (needs activation)
            response_type: 'Completed' (default) or 'Cancelled', the action
                taken when the validation URL is unreachable

        Returns:
            Acknowledgement with OriginatorCoversationID, ResponseCode and
            ResponseDescription

        Raises:
            ValidationError: If the confirmation URL is invalid
        """
        confirmation_url = validate_callback_url(confirmation_url, 'confirmation URL')

        logger.info(f"Registering C2B URLs for shortcode: {self.credentials.short_code}")

        payload = {
            'ShortCode': self.credentials.short_code,
            'ResponseType': response_type or ResponseType.COMPLETED.value,
            'ConfirmationURL': confirmation_url,
            'ValidationURL': validation_url,
        }
        return self._send(APIEndpoints.C2B_REGISTER_URL, payload)

    def simulate(
        self,
        amount,
        msisdn: str,
        command_id: Optional[str] = None,
        bill_ref_number: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Simulate a customer payment (sandbox only).

        Args:
            amount: Amount paid
            msisdn: Customer phone number
            command_id: CustomerPayBillOnline (default) or CustomerBuyGoodsOnline
            bill_ref_number: Account number for Paybill payments
        """
        logger.info(f"Simulating C2B payment from {msisdn}")

        payload = {
            'ShortCode': self.credentials.short_code,
            'CommandID': command_id or CommandID.CUSTOMER_PAYBILL_ONLINE.value,
            'Amount': amount,
            'Msisdn': msisdn,
            'BillRefNumber': bill_ref_number,
        }
        return self._send(APIEndpoints.C2B_SIMULATE, payload)
