from __future__ import annotations

from dataclasses import dataclass

from .auth_store import AuthStore
from .clients.accounts_client import AccountsClient
from .clients.auth import AuthClient
from .clients.commission_settings_client import CommissionSettingsClient
from .clients.merchants_client import MerchantsClient
from .clients.sale_payments_client import SalePaymentsClient
from .clients.sales_client import SalesClient
from .config import ClientConfig
from .http_client import HttpClient
from .models import LoginResponse, SessionData, SessionUser
from .tracing import TraceContext


@dataclass
class ApiSession:
    config: ClientConfig
    auth_store: AuthStore | None = None
    trace: TraceContext | None = None
    http: HttpClient | None = None
    token: str | None = None
    user: SessionUser | None = None

    def __post_init__(self) -> None:
        self.auth_store = self.auth_store or AuthStore()
        self.trace = self.trace or (self.http.trace if self.http else None) or TraceContext()
        self.http = self.http or HttpClient(config=self.config, trace=self.trace)
        stored = self.auth_store.load()
        if stored and not self.token and stored.env_name == self.config.env_name:
            self.token = stored.access_token
            self.user = stored.user

    def auth_client(self) -> AuthClient:
        return AuthClient(http=self.http, access_token=self.token)

    def accounts_client(self) -> AccountsClient:
        return AccountsClient(http=self.http, access_token=self.token)

    def merchants_client(self) -> MerchantsClient:
        return MerchantsClient(http=self.http, access_token=self.token)

    def sales_client(self) -> SalesClient:
        return SalesClient(http=self.http, access_token=self.token)

    def commission_settings_client(self) -> CommissionSettingsClient:
        return CommissionSettingsClient(http=self.http, access_token=self.token)

    def sale_payments_client(self) -> SalePaymentsClient:
        return SalePaymentsClient(http=self.http, access_token=self.token)

    def establish(self, login: LoginResponse) -> None:
        self.token = login.access_token
        self.user = login.user
        self.auth_store.save(SessionData(access_token=self.token, user=self.user, env_name=self.config.env_name))

    def clear(self) -> None:
        self.token = None
        self.user = None
        self.trace.reset()
        if self.auth_store:
            self.auth_store.clear()
