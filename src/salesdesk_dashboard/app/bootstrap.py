from __future__ import annotations

import logging
from dataclasses import dataclass
from time import perf_counter

from salesdesk_client_sdk import ApiSession, ClientConfig, load_config

from salesdesk_dashboard.app.navigation import GuardDecision, resolve
from salesdesk_dashboard.app.state import AppState, Route
from salesdesk_dashboard.services.accounts_service import AccountsService
from salesdesk_dashboard.services.auth_service import AuthService
from salesdesk_dashboard.services.commission_settings_service import CommissionSettingsService
from salesdesk_dashboard.services.errors import DashboardServiceError
from salesdesk_dashboard.services.merchants_service import MerchantsService
from salesdesk_dashboard.services.sale_payments_service import SalePaymentsService
from salesdesk_dashboard.services.sales_service import SalesService
from salesdesk_dashboard.telemetry import TelemetryLogger, build_event

logger = logging.getLogger(__name__)


@dataclass
class BootstrapResult:
    route: Route
    error_message: str | None = None


class DashboardBootstrap:
    def __init__(
        self,
        config: ClientConfig | None = None,
        session: ApiSession | None = None,
        telemetry: TelemetryLogger | None = None,
    ) -> None:
        self.config = config or load_config()
        self.session = session or ApiSession(self.config)
        self.telemetry = telemetry or TelemetryLogger()
        self.state = AppState()
        self.auth_service = AuthService(self.session, self.state.user)
        if self.auth_service.restore():
            self.state.route = Route.DASHBOARD

    def login(self, email: str, password: str) -> BootstrapResult:
        started = perf_counter()
        try:
            self.auth_service.login(email, password)
        except DashboardServiceError as exc:
            self.state.error_message = exc.message
            self._emit_auth_result(False, started, trace_id=exc.trace_id, error_code=exc.code)
            self._navigate(Route.SIGNIN, "Authentication failed")
            return BootstrapResult(route=self.state.route, error_message=exc.message)
        self.state.error_message = None
        self._emit_auth_result(True, started, trace_id=self.session.trace.trace_id if self.session.trace else None)
        self._navigate(Route.DASHBOARD, "Authenticated")
        return BootstrapResult(route=self.state.route)

    def logout(self) -> BootstrapResult:
        self.auth_service.logout()
        self._navigate(Route.SIGNIN, "Session cleared")
        return BootstrapResult(route=self.state.route)

    def guard(self, path: str) -> GuardDecision:
        decision = resolve(path, self.state.user)
        if not decision.allowed:
            logger.info("guard_redirect", extra={"path": decision.path, "redirect_to": decision.redirect_to})
        return decision

    def accounts(self) -> AccountsService:
        return AccountsService(self.session, self.state.user, telemetry=self.telemetry)

    def merchants(self) -> MerchantsService:
        return MerchantsService(self.session)

    def sales(self) -> SalesService:
        return SalesService(self.session, self.state.user, telemetry=self.telemetry)

    def commission_settings(self) -> CommissionSettingsService:
        return CommissionSettingsService(self.session)

    def sale_payments(self) -> SalePaymentsService:
        return SalePaymentsService(self.session, self.state.user, telemetry=self.telemetry)

    def _emit_auth_result(
        self,
        success: bool,
        started: float,
        *,
        trace_id: str | None = None,
        error_code: str | None = None,
    ) -> None:
        if not self.telemetry.enabled:
            return
        self.telemetry.emit(
            build_event(
                category="auth",
                name="auth_login_result",
                module="auth",
                action="login",
                success=success,
                duration_ms=int((perf_counter() - started) * 1000),
                trace_id=trace_id,
                error_code=error_code,
            )
        )

    def _navigate(self, route: Route, status_message: str) -> None:
        logger.info("navigation", extra={"route": route.value})
        self.state.route = route
        self.state.status_message = status_message
