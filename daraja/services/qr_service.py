"""
Dynamic QR code service.
"""

import logging
from typing import Any, Dict

from ..constants import APIEndpoints
from .base import BaseService

logger = logging.getLogger(__name__)


class QRCodeService(BaseService):
    """Service for generating M-Pesa payment QR codes."""

    def generate(
        self,
        merchant_name: str,
        ref_no: str,
        amount,
        trx_code: str,
        cpi: str,
        size
    ) -> Dict[str, Any]:
        """
        Generate a QR code customers can scan in the M-Pesa app.

        Args:
            merchant_name: Registered business or trade name
            ref_no: Transaction reference (e.g., invoice number)
            amount: Amount to be paid
            trx_code: BG, WA, PB, SM or SB (see QRTransactionCode)
            cpi: Credit party identifier (Paybill, Till, agent or phone number)
            size: Image size in pixels

        Returns:
            Dictionary containing ResponseCode, RequestID,
            ResponseDescription and QRCode (base64 image)
        """
        logger.info(f"Generating QR code for reference: {ref_no}")

        payload = {
            'MerchantName': merchant_name,
            'RefNo': ref_no,
            'Amount': amount,
            'TrxCode': getattr(trx_code, 'value', trx_code),
            'CPI': cpi,
            'Size': size,
        }
        return self._send(APIEndpoints.DYNAMIC_QR, payload)
