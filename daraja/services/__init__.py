"""
Service modules for Daraja API operations.
"""

from .auth_service import AuthService, CachedToken
from .dispatcher import Dispatcher
from .stk_service import StkService
from .c2b_service import C2BService
from .b2c_service import B2CService
from .b2b_service import B2BService
from .account_service import AccountService
from .qr_service import QRCodeService
from .bill_manager_service import BillManagerService
from .standing_order_service import StandingOrderService

__all__ = [
    'AuthService',
    'CachedToken',
    'Dispatcher',
    'StkService',
    'C2BService',
    'B2CService',
    'B2BService',
    'AccountService',
    'QRCodeService',
    'BillManagerService',
    'StandingOrderService',
]
