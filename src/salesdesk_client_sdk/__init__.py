from .auth_store import AuthStore
from .commission_validation import validate_commission_form
from .config import ClientConfig, ConfigError, load_config
from .exceptions import (
    ApiError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ServerError,
    TransportError,
    UnauthorizedError,
    ValidationError,
)
from .http_client import HttpClient
from .models import ROLE_LABELS, LoginResponse, SessionData, SessionUser, UserRole
from .models_accounts import Account, AccountCreateRequest, AccountUpdateRequest
from .models_commissions import CenterAdmin, CommissionSetting, CommissionSettingRequest
from .models_merchants import Merchant
from .models_sale_payments import (
    PAYMENT_STATUSES,
    PaymentStatus,
    SalePayment,
    SalePaymentQuery,
    SalePaymentRequest,
)
from .models_sales import SALE_STATUSES, Sale, SaleCreateRequest, SaleStatus, SaleUpdateRequest
from .sale_validation import SaleForm, luhn_check, mask_card_number, validate_sale_create, validate_sale_update
from .session import ApiSession
from .tracing import TraceContext
from .ui_errors import UserFacingError, to_user_facing_error
from .validation import ClientValidationError, ValidationIssue, validate_account_form, validate_merchant_form

__all__ = [
    "Account",
    "AccountCreateRequest",
    "AccountUpdateRequest",
    "ApiError",
    "ApiSession",
    "AuthStore",
    "CenterAdmin",
    "ClientConfig",
    "ClientValidationError",
    "CommissionSetting",
    "CommissionSettingRequest",
    "ConfigError",
    "ConflictError",
    "ForbiddenError",
    "HttpClient",
    "LoginResponse",
    "Merchant",
    "NotFoundError",
    "PAYMENT_STATUSES",
    "PaymentStatus",
    "ROLE_LABELS",
    "SALE_STATUSES",
    "Sale",
    "SaleCreateRequest",
    "SaleForm",
    "SalePayment",
    "SalePaymentQuery",
    "SalePaymentRequest",
    "SaleStatus",
    "SaleUpdateRequest",
    "ServerError",
    "SessionData",
    "SessionUser",
    "TraceContext",
    "TransportError",
    "UnauthorizedError",
    "UserFacingError",
    "UserRole",
    "ValidationError",
    "ValidationIssue",
    "load_config",
    "luhn_check",
    "mask_card_number",
    "to_user_facing_error",
    "validate_account_form",
    "validate_commission_form",
    "validate_merchant_form",
    "validate_sale_create",
    "validate_sale_update",
]
