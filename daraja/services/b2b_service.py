"""
Business to business (B2B) service.
Handles Paybill/Till payments, USSD express checkout and KRA tax remittance.
"""

import logging
from typing import Any, Dict, Optional

from ..constants import APIEndpoints, CommandID, KRA_SHORTCODE, SHORTCODE_IDENTIFIER
from .base import BaseService

logger = logging.getLogger(__name__)


class B2BService(BaseService):
    """
    Service for payments between businesses.
    """

    def send_payment(
        self,
        amount,
        party_b: str,
        account_reference: str,
        queue_timeout_url: str,
        result_url: str,
        command_id: Optional[str] = None,
        requester: Optional[str] = None,
        remarks: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Pay another business's Paybill or Till number.

        Args:
            amount: Amount to send
            party_b: Shortcode of the business being paid
            account_reference: Account or invoice number for the payment
            queue_timeout_url: URL notified if the request times out
            result_url: URL the final result is posted to
            command_id: BusinessPayBill (default) or BusinessBuyGoods
            requester: Customer phone number when paying on their behalf
            remarks: Optional comment (default: "Business Payment")

        Raises:
            ConfigurationError: If initiator credentials are missing
        """
        self.credentials.require_initiator("B2B transactions")

        logger.info(f"Sending B2B payment of {amount} to {party_b}")

        payload = {
            'Initiator': self.credentials.initiator_name,
            'SecurityCredential': self.credentials.security_credential,
            'CommandID': command_id or CommandID.BUSINESS_PAY_BILL.value,
            'SenderIdentifierType': SHORTCODE_IDENTIFIER,
            'RecieverIdentifierType': SHORTCODE_IDENTIFIER,
            'Amount': amount,
            'PartyA': self.credentials.short_code,
            'PartyB': party_b,
            'AccountReference': account_reference,
            'Requester': requester,
            'Remarks': remarks or "Business Payment",
            'QueueTimeOutURL': queue_timeout_url,
            'ResultURL': result_url,
        }
        return self._send(APIEndpoints.B2B_PAYMENT, payload)

    def express_checkout(
        self,
        primary_short_code: str,
        amount,
        payment_ref: str,
        callback_url: str,
        partner_name: str,
        request_ref_id: str
    ) -> Dict[str, Any]:
        """
        Send a USSD prompt to a merchant's till to pay this shortcode.

        Args:
            primary_short_code: Till number of the paying merchant
            amount: Amount to be paid
            payment_ref: Reference shown on the USSD prompt
            callback_url: URL the final result is posted to
            partner_name: Business name shown to the merchant
            request_ref_id: Unique ID for this request

        Returns:
            Acknowledgement with ``code`` ('0' when initiated) and ``status``
        """
        logger.info(f"Initiating B2B express checkout: {request_ref_id}")

        payload = {
            'primaryShortCode': primary_short_code,
            'receiverShortCode': self.credentials.short_code,
            'amount': amount,
            'paymentRef': payment_ref,
            'callbackUrl': callback_url,
            'partnerName': partner_name,
            'RequestRefID': request_ref_id,
        }
        return self._send(APIEndpoints.B2B_EXPRESS_CHECKOUT, payload)

    def remit_tax(
        self,
        amount,
        account_reference: str,
        queue_timeout_url: str,
        result_url: str,
        remarks: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Remit tax to the Kenya Revenue Authority.

        Args:
            amount: Tax amount
            account_reference: Payment Registration Number (PRN) issued by KRA
            queue_timeout_url: URL notified if the request times out
            result_url: URL the final result is posted to
            remarks: Optional comment (default: "Tax Payment")

        Raises:
            ConfigurationError: If initiator credentials are missing
        """
        self.credentials.require_initiator("Tax Remittance")

        logger.info(f"Remitting tax for PRN: {account_reference}")

        payload = {
            'Initiator': self.credentials.initiator_name,
            'SecurityCredential': self.credentials.security_credential,
            'CommandID': CommandID.PAY_TAX_TO_KRA.value,
            'SenderIdentifierType': SHORTCODE_IDENTIFIER,
            'RecieverIdentifierType': SHORTCODE_IDENTIFIER,
            'Amount': amount,
            'PartyA': self.credentials.short_code,
            'PartyB': KRA_SHORTCODE,
            'AccountReference': account_reference,
            'Remarks': remarks or "Tax Payment",
            'QueueTimeOutURL': queue_timeout_url,
            'ResultURL': result_url,
        }
        return self._send(APIEndpoints.TAX_REMITTANCE, payload)
