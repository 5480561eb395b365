"""
Signals for Daraja callback events.
"""
from django.dispatch import Signal

# Sent when an STK push result arrives at the callback URL
# Provides arguments:
# - callback: The parsed StkCallback
stk_callback_received = Signal()

# Sent when a result arrives at a ResultURL
# - result: The parsed TransactionResult
transaction_result_received = Signal()

# Sent when Safaricom reports a queue timeout
# - payload: The raw callback body
queue_timeout_received = Signal()
