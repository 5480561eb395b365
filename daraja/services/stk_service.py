"""
M-Pesa Express (STK push) service.
Sends payment prompts to a customer's phone and queries their status.
"""

import logging
from typing import Any, Dict, Optional

from ..constants import APIEndpoints, TransactionType
from ..utils.security import generate_password, get_timestamp
from .base import BaseService

logger = logging.getLogger(__name__)


class StkService(BaseService):
    """
    Service for STK push operations.
    BusinessShortCode, Password and Timestamp are filled in automatically.
    """

    def _password_fields(self) -> Dict[str, str]:
        timestamp = get_timestamp()
        return {
            'BusinessShortCode': self.credentials.short_code,
            'Password': generate_password(
                self.credentials.short_code, self.credentials.passkey, timestamp
            ),
            'Timestamp': timestamp,
        }

    def push(
        self,
        amount,
        phone_number: str,
        callback_url: str,
        account_reference: str,
        transaction_desc: str,
        transaction_type: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Send a payment prompt to the customer's phone.

        Args:
            amount: Amount to be paid
            phone_number: Customer phone number (2547XXXXXXXX)
            callback_url: URL Safaricom posts the final result to
            account_reference: Short identifier shown to the customer
            transaction_desc: Brief description of the payment
            transaction_type: CustomerPayBillOnline (default) for Paybill,
                CustomerBuyGoodsOnline for Till numbers

        Returns:
            Acknowledgement containing:
                - MerchantRequestID
                - CheckoutRequestID: Use it to query the status later
                - ResponseCode: '0' when accepted
                - ResponseDescription
                - CustomerMessage

        Raises:
            ConfigurationError: If no passkey is configured
        """
        self.credentials.require_passkey("STK Push")

        logger.info(f"Initiating STK push for reference: {account_reference}")

        payload = self._password_fields()
        payload.update({
            'TransactionType': transaction_type or TransactionType.PAYBILL_ONLINE.value,
            'Amount': amount,
            'PartyA': phone_number,
            'PartyB': self.credentials.short_code,
            'PhoneNumber': phone_number,
            'CallBackURL': callback_url,
            'AccountReference': account_reference,
            'TransactionDesc': transaction_desc,
        })

        response = self._send(APIEndpoints.STK_PUSH, payload)

        checkout_request_id = response.get('CheckoutRequestID') if isinstance(response, dict) else None
        logger.info(
            f"STK push accepted. Reference: {account_reference}, "
            f"CheckoutRequestID: {checkout_request_id}"
        )
        return response

    def query(self, checkout_request_id: str) -> Dict[str, Any]:
        """
        Query the status of an STK push.

        Args:
            checkout_request_id: CheckoutRequestID returned by push()

        Returns:
            Status response including ResultCode and ResultDesc

        Raises:
            ConfigurationError: If no passkey is configured
        """
        self.credentials.require_passkey("STK Query")

        logger.info(f"Querying STK push status: {checkout_request_id}")

        payload = self._password_fields()
        payload['CheckoutRequestID'] = checkout_request_id

        return self._send(APIEndpoints.STK_QUERY, payload)
