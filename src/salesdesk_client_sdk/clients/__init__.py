from .accounts_client import AccountsClient
from .auth import AuthClient
from .commission_settings_client import CommissionSettingsClient
from .merchants_client import MerchantsClient
from .sale_payments_client import SalePaymentsClient
from .sales_client import SalesClient

__all__ = [
    "AccountsClient",
    "AuthClient",
    "CommissionSettingsClient",
    "MerchantsClient",
    "SalePaymentsClient",
    "SalesClient",
]
