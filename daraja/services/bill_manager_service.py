"""
Bill Manager service.
Handles opt-in and e-invoicing through M-Pesa Bill Manager.
"""

import logging
from typing import Any, Dict, List, Optional

from ..constants import APIEndpoints
from ..utils.validators import validate_batch
from .base import BaseService

logger = logging.getLogger(__name__)


class BillManagerService(BaseService):
    """
    Service for Bill Manager operations.
    The shortcode must be opted in before invoices can be sent.
    """

    def opt_in(
        self,
        email: str,
        official_contact: str,
        callback_url: str,
        send_reminders: Optional[str] = None,
        logo: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Opt the shortcode into Bill Manager.

        Args:
            email: Official contact email
            official_contact: Official contact phone number
            callback_url: URL payment notifications are posted to
            send_reminders: '1' (default) to send reminders, '0' otherwise
            logo: Optional image logo for invoices
        """
        logger.info(f"Opting shortcode {self.credentials.short_code} into Bill Manager")

        payload = {
            'shortcode': self.credentials.short_code,
            'email': email,
            'officialContact': official_contact,
            'sendReminders': send_reminders or "1",
            'logo': logo,
            'callbackurl': callback_url,
        }
        return self._send(APIEndpoints.BILL_MANAGER_OPT_IN, payload)

    def update_opt_in(self, **details) -> Dict[str, Any]:
        """
        Update Bill Manager opt-in details.

        Keyword arguments are sent as given, using the API's field names
        (email, officialContact, callbackurl, sendReminders, logo).
        """
        logger.info(f"Updating Bill Manager details for {self.credentials.short_code}")

        payload = {'shortcode': self.credentials.short_code}
        payload.update(details)
        return self._send(APIEndpoints.BILL_MANAGER_UPDATE_OPT_IN, payload)

    def send_invoice(self, invoice: Dict[str, Any]) -> Dict[str, Any]:
        """
        Send a single e-invoice.

        Args:
            invoice: Invoice with externalReference, billedFullName,
                billedPhoneNumber, billedPeriod, invoiceName, dueDate,
                accountReference, amount and optional invoiceItems
        """
        logger.info(f"Sending invoice: {invoice.get('externalReference')}")
        return self.dispatcher.send(APIEndpoints.BILL_MANAGER_SINGLE_INVOICE, invoice)

    def send_bulk_invoices(self, invoices: List[Dict[str, Any]]) -> Dict[str, Any]:
        """
        Send up to 1000 e-invoices in one call.

        Raises:
            ValidationError: If the batch is empty or too large
        """
        invoices = validate_batch(invoices)
        logger.info(f"Sending {len(invoices)} invoices")
        return self.dispatcher.send(APIEndpoints.BILL_MANAGER_BULK_INVOICE, invoices)

    def cancel_invoice(self, external_reference: str) -> Dict[str, Any]:
        """Cancel a single unpaid invoice."""
        logger.info(f"Cancelling invoice: {external_reference}")
        return self._send(
            APIEndpoints.BILL_MANAGER_CANCEL_INVOICE,
            {'externalReference': external_reference}
        )

    def cancel_bulk_invoices(self, external_references: List[str]) -> Dict[str, Any]:
        """
        Cancel several unpaid invoices.

        Args:
            external_references: externalReference values of the invoices

        Raises:
            ValidationError: If the batch is empty or too large
        """
        invoices = validate_batch(
            [{'externalReference': reference} for reference in external_references or []]
        )
        logger.info(f"Cancelling {len(invoices)} invoices")
        return self.dispatcher.send(APIEndpoints.BILL_MANAGER_CANCEL_BULK_INVOICE, invoices)
