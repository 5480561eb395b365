"""
Constants and enums for Daraja API operations.
"""

from enum import Enum


class Environment(str, Enum):
    """Daraja deployment environments."""
    SANDBOX = "sandbox"
    PRODUCTION = "production"


BASE_URLS = {
    Environment.SANDBOX.value: "https://sandbox.safaricom.co.ke",
    Environment.PRODUCTION.value: "https://api.safaricom.co.ke",
}


class ErrorCategory(str, Enum):
    """Categories a failed API call is normalized into."""
    REMOTE = "remote"
    UNREACHABLE = "unreachable"
    LOCAL = "local"


class TransactionType(str, Enum):
    """STK push transaction types."""
    PAYBILL_ONLINE = "CustomerPayBillOnline"
    BUY_GOODS_ONLINE = "CustomerBuyGoodsOnline"


class CommandID(str, Enum):
    """Command IDs accepted by the Daraja API."""
    CUSTOMER_PAYBILL_ONLINE = "CustomerPayBillOnline"
    CUSTOMER_BUY_GOODS_ONLINE = "CustomerBuyGoodsOnline"
    SALARY_PAYMENT = "SalaryPayment"
    BUSINESS_PAYMENT = "BusinessPayment"
    PROMOTION_PAYMENT = "PromotionPayment"
    TRANSACTION_STATUS_QUERY = "TransactionStatusQuery"
    ACCOUNT_BALANCE = "AccountBalance"
    TRANSACTION_REVERSAL = "TransactionReversal"
    PAY_TAX_TO_KRA = "PayTaxToKRA"
    BUSINESS_PAY_BILL = "BusinessPayBill"
    BUSINESS_BUY_GOODS = "BusinessBuyGoods"
    BUSINESS_PAY_TO_BULK = "BusinessPayToBulk"


class ResponseType(str, Enum):
    """Default action when the C2B validation URL is unreachable."""
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class QRTransactionCode(str, Enum):
    """Transaction codes for dynamic QR generation."""
    BUY_GOODS = "BG"
    WITHDRAW_AT_AGENT = "WA"
    PAYBILL = "PB"
    SEND_MONEY = "SM"
    SEND_TO_BUSINESS = "SB"


class StandingOrderType(str, Enum):
    """Standing order (Ratiba) transaction types."""
    PAY_BILL = "Standing Order Customer Pay Bill"
    PAY_MERCHANT = "Standing Order Customer Pay Marchant"


# API Endpoints
class APIEndpoints:
    """Daraja API endpoints."""
    GENERATE_TOKEN = "/oauth/v1/generate"

    # M-Pesa Express
    STK_PUSH = "/mpesa/stkpush/v1/processrequest"
    STK_QUERY = "/mpesa/stkpushquery/v1/query"

    # Customer to business
    C2B_REGISTER_URL = "/mpesa/c2b/v1/registerurl"
    C2B_SIMULATE = "/mpesa/c2b/v1/simulate"

    # Business payments
    B2C_PAYMENT = "/mpesa/b2c/v1/paymentrequest"
    B2B_PAYMENT = "/mpesa/b2b/v1/paymentrequest"
    B2B_EXPRESS_CHECKOUT = "/v1/ussdpush/get-msisdn"
    TAX_REMITTANCE = "/mpesa/b2b/v1/remittax"

    # Account endpoints
    ACCOUNT_BALANCE = "/mpesa/accountbalance/v1/query"
    TRANSACTION_STATUS = "/mpesa/transactionstatus/v1/query"
    REVERSAL = "/mpesa/reversal/v1/request"

    DYNAMIC_QR = "/mpesa/qrcode/v1/generate"

    # Bill Manager
    BILL_MANAGER_OPT_IN = "/v1/billmanager-invoice/optin"
    BILL_MANAGER_UPDATE_OPT_IN = "/v1/billmanager-invoice/change-optin-details"
    BILL_MANAGER_SINGLE_INVOICE = "/v1/billmanager-invoice/single-invoicing"
    BILL_MANAGER_BULK_INVOICE = "/v1/billmanager-invoice/bulk-invoicing"
    BILL_MANAGER_CANCEL_INVOICE = "/v1/billmanager-invoice/cancel-single-invoice"
    BILL_MANAGER_CANCEL_BULK_INVOICE = "/v1/billmanager-invoice/cancel-bulk-invoices"

    # Ratiba
    STANDING_ORDER = "/standingorder/v1/createStandingOrderExternal"


# Token settings
GRANT_TYPE = "client_credentials"
TOKEN_EXPIRY_MARGIN_SECONDS = 60  # Treat token as expired 1 minute early

# Identifier types
SHORTCODE_IDENTIFIER = "4"
REVERSAL_RECEIVER_IDENTIFIER = "11"

# KRA's fixed paybill for tax remittance
KRA_SHORTCODE = "572572"

TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"

# Acknowledgement Safaricom expects from callback URLs
CALLBACK_ACCEPTED = {"ResultCode": 0, "ResultDesc": "Accepted"}

# Bill Manager accepts at most this many invoices per bulk call
MAX_BULK_INVOICES = 1000

# Default settings
DEFAULT_ENVIRONMENT = Environment.SANDBOX
DEFAULT_TIMEOUT = None  # transport default unless the caller sets one
