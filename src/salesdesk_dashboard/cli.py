from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Callable, TextIO

from salesdesk_client_sdk import (
    PAYMENT_STATUSES,
    SALE_STATUSES,
    ClientValidationError,
    ConfigError,
    SaleForm,
    load_config,
    mask_card_number,
)
from salesdesk_client_sdk.exceptions import ApiError

from salesdesk_dashboard.app.bootstrap import DashboardBootstrap
from salesdesk_dashboard.app.state import Route
from salesdesk_dashboard.services.errors import AccessDeniedError, DashboardServiceError
from salesdesk_dashboard.ui import formatting
from salesdesk_dashboard.ui.shared.error_presenter import ErrorPresenter
from salesdesk_dashboard.ui.table_printer import print_table

ACCOUNT_COLUMNS = [
    ("id", "ID"),
    ("username", "Username"),
    ("email", "Email"),
    ("role", "Role"),
    ("status", "Status"),
    ("created_at", "Created"),
]
MERCHANT_COLUMNS = [("id", "ID"), ("name", "Name"), ("created_at", "Created")]
SALE_COLUMNS = [
    ("id", "ID"),
    ("card", "Card"),
    ("merchant", "Merchant"),
    ("amount", "Amount"),
    ("status", "Status"),
    ("created_at", "Created"),
]
COMMISSION_COLUMNS = [
    ("id", "ID"),
    ("center", "Center"),
    ("commission", "Commission"),
    ("chargeback_fee", "Chargeback fee"),
    ("clearing_days", "Clearing days"),
]
CENTER_COLUMNS = [("id", "ID"), ("label", "Center admin")]
PAYMENT_COLUMNS = [
    ("id", "ID"),
    ("sale", "Sale"),
    ("center", "Center"),
    ("agent", "Agent"),
    ("commission_percentage", "Commission %"),
    ("sale_amount", "Sale amount"),
    ("commission", "Commission"),
    ("net_payable", "Net payable"),
    ("status", "Status"),
    ("created_at", "Created"),
    ("payable_on", "Payable on"),
]

ROUTES_BY_COMMAND = {
    "whoami": Route.DASHBOARD,
    "accounts": Route.ACCOUNTS,
    "merchants": Route.MERCHANTS,
    "sales": Route.SALES,
    "commissions": Route.COMMISSIONS,
    "payments": Route.PAYMENTS,
}


class Output:
    def __init__(self, *, as_json: bool, stream: TextIO) -> None:
        self.as_json = as_json
        self.stream = stream

    def table(self, title: str, rows: list[dict[str, Any]], columns: list[tuple[str, str]], raw: Any = None) -> None:
        if self.as_json:
            self.json(raw if raw is not None else rows)
            return
        print_table(title, rows, columns, stream=self.stream)

    def json(self, payload: Any) -> None:
        self.stream.write(json.dumps(payload, indent=2, default=str) + "\n")

    def message(self, text: str, **payload: Any) -> None:
        if self.as_json:
            self.json({"message": text, **payload})
            return
        self.stream.write(f"{text}\n")


def _dump(models: list[Any]) -> list[dict[str, Any]]:
    return [model.model_dump(mode="json", by_alias=True) for model in models]


def _dump_sales(sales: list[Any]) -> list[dict[str, Any]]:
    rows = []
    for sale in sales:
        row = sale.model_dump(mode="json", by_alias=True, exclude={"cvv", "expiry_date"})
        row["cardNumber"] = mask_card_number(sale.card_number)
        rows.append(row)
    return rows


# auth


def cmd_login(app: DashboardBootstrap, args: argparse.Namespace, out: Output) -> None:
    result = app.login(args.email, args.password)
    if result.error_message:
        raise DashboardServiceError(message=result.error_message, code="LOGIN_FAILED")
    user = app.state.user
    out.message(f"Signed in as {user.email} ({formatting.format_role(user.role)})", role=user.role)


def cmd_logout(app: DashboardBootstrap, args: argparse.Namespace, out: Output) -> None:
    app.logout()
    out.message("Signed out")


def cmd_whoami(app: DashboardBootstrap, args: argparse.Namespace, out: Output) -> None:
    user = app.state.user
    if out.as_json:
        out.json({"id": user.id, "email": user.email, "role": user.role, "center": user.center})
        return
    out.message(f"{user.email} ({formatting.format_role(user.role)}) id={user.id} center={user.center or formatting.EMPTY_VALUE}")


# accounts


def _show_accounts(out: Output, accounts: list[Any]) -> None:
    out.table("Accounts", [formatting.account_row(row) for row in accounts], ACCOUNT_COLUMNS, raw=_dump(accounts))


def cmd_accounts_list(app: DashboardBootstrap, args: argparse.Namespace, out: Output) -> None:
    _show_accounts(out, app.accounts().list_accounts())


def cmd_accounts_roles(app: DashboardBootstrap, args: argparse.Namespace, out: Output) -> None:
    roles = app.accounts().assignable_roles()
    if out.as_json:
        out.json(roles)
        return
    out.message(", ".join(roles) or "(no assignable roles)")


def cmd_accounts_create(app: DashboardBootstrap, args: argparse.Namespace, out: Output) -> None:
    account = app.accounts().create(
        username=args.username,
        email=args.email,
        password=args.password,
        role=args.role,
    )
    out.message(f"Account created: {account.id}", id=account.id)


def cmd_accounts_update(app: DashboardBootstrap, args: argparse.Namespace, out: Output) -> None:
    service = app.accounts()
    _show_accounts(
        out,
        service.update(
            args.account_id,
            username=args.username,
            email=args.email,
            role=args.role,
            status=args.active,
            password=args.password,
        ),
    )


def cmd_accounts_delete(app: DashboardBootstrap, args: argparse.Namespace, out: Output) -> None:
    app.accounts().delete(args.account_id)
    out.message(f"Account deleted: {args.account_id}", id=args.account_id)


# merchants


def cmd_merchants_list(app: DashboardBootstrap, args: argparse.Namespace, out: Output) -> None:
    merchants = app.merchants().list_merchants()
    rows = [
        {"id": row.id, "name": row.name, "created_at": formatting.format_date(row.created_at)} for row in merchants
    ]
    out.table("Merchants", rows, MERCHANT_COLUMNS, raw=_dump(merchants))


def cmd_merchants_create(app: DashboardBootstrap, args: argparse.Namespace, out: Output) -> None:
    merchant = app.merchants().create(args.name)
    out.message(f"Merchant created: {merchant.id}", id=merchant.id)


def cmd_merchants_update(app: DashboardBootstrap, args: argparse.Namespace, out: Output) -> None:
    merchant = app.merchants().update(args.merchant_id, args.name)
    out.message(f"Merchant updated: {merchant.id}", id=merchant.id)


def cmd_merchants_delete(app: DashboardBootstrap, args: argparse.Namespace, out: Output) -> None:
    app.merchants().delete(args.merchant_id)
    out.message(f"Merchant deleted: {args.merchant_id}", id=args.merchant_id)


# sales


def _show_sales(out: Output, sales: list[Any]) -> None:
    out.table("Sales", [formatting.sale_row(row) for row in sales], SALE_COLUMNS, raw=_dump_sales(sales))


def cmd_sales_list(app: DashboardBootstrap, args: argparse.Namespace, out: Output) -> None:
    _show_sales(out, app.sales().list_sales())


def cmd_sales_create(app: DashboardBootstrap, args: argparse.Namespace, out: Output) -> None:
    form = SaleForm(
        card_number=args.card_number,
        expiry_date=args.expiry_date,
        cvv=args.cvv,
        billing_address=args.billing_address,
        amount=args.amount,
        merchant=args.merchant,
        status=args.status,
    )
    _show_sales(out, app.sales().create(form))


def cmd_sales_update(app: DashboardBootstrap, args: argparse.Namespace, out: Output) -> None:
    form = SaleForm(
        billing_address=args.billing_address,
        amount=args.amount,
        merchant=args.merchant,
        status=args.status,
    )
    _show_sales(out, app.sales().update(args.sale_id, form))


def cmd_sales_delete(app: DashboardBootstrap, args: argparse.Namespace, out: Output) -> None:
    _show_sales(out, app.sales().delete(args.sale_id))


# commission settings


def _show_commissions(out: Output, settings: list[Any]) -> None:
    out.table(
        "Commission Settings",
        [formatting.commission_row(row) for row in settings],
        COMMISSION_COLUMNS,
        raw=_dump(settings),
    )


def cmd_commissions_list(app: DashboardBootstrap, args: argparse.Namespace, out: Output) -> None:
    _show_commissions(out, app.commission_settings().list_settings())


def cmd_commissions_centers(app: DashboardBootstrap, args: argparse.Namespace, out: Output) -> None:
    centers = app.commission_settings().available_centers()
    rows = [{"id": center.id, "label": center.label} for center in centers]
    out.table("Available Centers", rows, CENTER_COLUMNS, raw=_dump(centers))


def cmd_commissions_create(app: DashboardBootstrap, args: argparse.Namespace, out: Output) -> None:
    snapshot = app.commission_settings().create(
        center_id=args.center,
        commission_percentage=args.percentage,
        chargeback_fee=args.chargeback_fee,
        clearing_days=args.clearing_days,
    )
    _show_commissions(out, snapshot.settings)


def cmd_commissions_update(app: DashboardBootstrap, args: argparse.Namespace, out: Output) -> None:
    snapshot = app.commission_settings().update(
        args.setting_id,
        commission_percentage=args.percentage,
        chargeback_fee=args.chargeback_fee,
        clearing_days=args.clearing_days,
    )
    _show_commissions(out, snapshot.settings)


def cmd_commissions_delete(app: DashboardBootstrap, args: argparse.Namespace, out: Output) -> None:
    snapshot = app.commission_settings().delete(args.setting_id)
    _show_commissions(out, snapshot.settings)


# sale payments


def _show_payments(out: Output, app: DashboardBootstrap, payments: list[Any]) -> None:
    columns = PAYMENT_COLUMNS
    if not app.sale_payments().shows_actions():
        columns = [column for column in PAYMENT_COLUMNS if column[0] != "id"]
    out.table("Sale Payments", [formatting.payment_row(row) for row in payments], columns, raw=_dump(payments))


def cmd_payments_list(app: DashboardBootstrap, args: argparse.Namespace, out: Output) -> None:
    payments = app.sale_payments().list_payments(status=args.status, from_date=args.from_date, to_date=args.to_date)
    _show_payments(out, app, payments)


def cmd_payments_available(app: DashboardBootstrap, args: argparse.Namespace, out: Output) -> None:
    _show_sales(out, app.sale_payments().available_sales())


def cmd_payments_request(app: DashboardBootstrap, args: argparse.Namespace, out: Output) -> None:
    _show_payments(out, app, app.sale_payments().request(args.sale))


def cmd_payments_status(app: DashboardBootstrap, args: argparse.Namespace, out: Output) -> None:
    _show_payments(out, app, app.sale_payments().update_status(args.payment_id, args.status))


def cmd_payments_delete(app: DashboardBootstrap, args: argparse.Namespace, out: Output) -> None:
    service = app.sale_payments()
    if not service.shows_actions():
        raise AccessDeniedError(message="Your role cannot delete payments")
    _show_payments(out, app, service.delete(args.payment_id))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="salesdesk", description="SalesDesk back-office dashboard")
    parser.add_argument("--env", default=None, help="config profile, overrides SALESDESK_ENV")
    parser.add_argument("--env-file", default=None)
    parser.add_argument("--json", action="store_true", help="print raw JSON instead of tables")
    parser.add_argument("--verbose", action="store_true")
    parser.add_argument("--details", action="store_true", help="include technical details in errors")
    commands = parser.add_subparsers(dest="command", required=True)

    login = commands.add_parser("login")
    login.add_argument("--email", required=True)
    login.add_argument("--password", required=True)
    login.set_defaults(func=cmd_login)
    commands.add_parser("logout").set_defaults(func=cmd_logout)
    commands.add_parser("whoami").set_defaults(func=cmd_whoami)

    accounts = commands.add_parser("accounts").add_subparsers(dest="action", required=True)
    accounts.add_parser("list").set_defaults(func=cmd_accounts_list)
    accounts.add_parser("roles").set_defaults(func=cmd_accounts_roles)
    create = accounts.add_parser("create")
    create.add_argument("--username", required=True)
    create.add_argument("--email", required=True)
    create.add_argument("--password", required=True)
    create.add_argument("--role", required=True)
    create.set_defaults(func=cmd_accounts_create)
    update = accounts.add_parser("update")
    update.add_argument("account_id")
    update.add_argument("--username", required=True)
    update.add_argument("--email", required=True)
    update.add_argument("--role", required=True)
    update.add_argument("--password", default=None)
    status = update.add_mutually_exclusive_group(required=True)
    status.add_argument("--active", dest="active", action="store_true")
    status.add_argument("--inactive", dest="active", action="store_false")
    update.set_defaults(func=cmd_accounts_update)
    delete = accounts.add_parser("delete")
    delete.add_argument("account_id")
    delete.set_defaults(func=cmd_accounts_delete)

    merchants = commands.add_parser("merchants").add_subparsers(dest="action", required=True)
    merchants.add_parser("list").set_defaults(func=cmd_merchants_list)
    create = merchants.add_parser("create")
    create.add_argument("--name", required=True)
    create.set_defaults(func=cmd_merchants_create)
    update = merchants.add_parser("update")
    update.add_argument("merchant_id")
    update.add_argument("--name", required=True)
    update.set_defaults(func=cmd_merchants_update)
    delete = merchants.add_parser("delete")
    delete.add_argument("merchant_id")
    delete.set_defaults(func=cmd_merchants_delete)

    sales = commands.add_parser("sales").add_subparsers(dest="action", required=True)
    sales.add_parser("list").set_defaults(func=cmd_sales_list)
    create = sales.add_parser("create")
    create.add_argument("--card-number", required=True)
    create.add_argument("--expiry-date", required=True, help="MM/YY")
    create.add_argument("--cvv", required=True)
    create.add_argument("--billing-address", required=True)
    create.add_argument("--amount", required=True)
    create.add_argument("--merchant", required=True, help="merchant id")
    create.add_argument("--status", default=None, choices=SALE_STATUSES)
    create.set_defaults(func=cmd_sales_create)
    update = sales.add_parser("update")
    update.add_argument("sale_id")
    update.add_argument("--billing-address", required=True)
    update.add_argument("--amount", required=True)
    update.add_argument("--merchant", required=True, help="merchant id")
    update.add_argument("--status", default=None, choices=SALE_STATUSES)
    update.set_defaults(func=cmd_sales_update)
    delete = sales.add_parser("delete")
    delete.add_argument("sale_id")
    delete.set_defaults(func=cmd_sales_delete)

    commissions = commands.add_parser("commissions").add_subparsers(dest="action", required=True)
    commissions.add_parser("list").set_defaults(func=cmd_commissions_list)
    commissions.add_parser("centers").set_defaults(func=cmd_commissions_centers)
    create = commissions.add_parser("create")
    create.add_argument("--center", required=True, help="center admin id")
    create.add_argument("--percentage", required=True)
    create.add_argument("--chargeback-fee", required=True)
    create.add_argument("--clearing-days", required=True)
    create.set_defaults(func=cmd_commissions_create)
    update = commissions.add_parser("update")
    update.add_argument("setting_id")
    update.add_argument("--percentage", required=True)
    update.add_argument("--chargeback-fee", required=True)
    update.add_argument("--clearing-days", required=True)
    update.set_defaults(func=cmd_commissions_update)
    delete = commissions.add_parser("delete")
    delete.add_argument("setting_id")
    delete.set_defaults(func=cmd_commissions_delete)

    payments = commands.add_parser("payments").add_subparsers(dest="action", required=True)
    listing = payments.add_parser("list")
    listing.add_argument("--status", default=None, choices=PAYMENT_STATUSES)
    listing.add_argument("--from", dest="from_date", default=None, help="YYYY-MM-DD")
    listing.add_argument("--to", dest="to_date", default=None, help="YYYY-MM-DD")
    listing.set_defaults(func=cmd_payments_list)
    payments.add_parser("available").set_defaults(func=cmd_payments_available)
    request = payments.add_parser("request")
    request.add_argument("--sale", required=True, help="sale id")
    request.set_defaults(func=cmd_payments_request)
    status = payments.add_parser("status")
    status.add_argument("payment_id")
    status.add_argument("status", choices=PAYMENT_STATUSES)
    status.set_defaults(func=cmd_payments_status)
    delete = payments.add_parser("delete")
    delete.add_argument("payment_id")
    delete.set_defaults(func=cmd_payments_delete)

    return parser


def main(
    argv: list[str] | None = None,
    *,
    bootstrap_factory: Callable[[argparse.Namespace], DashboardBootstrap] | None = None,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    out = Output(as_json=args.json, stream=stdout or sys.stdout)
    errors = stderr or sys.stderr
    try:
        if bootstrap_factory is not None:
            app = bootstrap_factory(args)
        else:
            app = DashboardBootstrap(load_config(args.env_file, env_name=args.env))
        route = ROUTES_BY_COMMAND.get(args.command)
        if route is not None and not app.guard(route.value).allowed:
            raise AccessDeniedError(message="Sign in first: run `salesdesk login`", code="UNAUTHENTICATED")
        args.func(app, args, out)
    except ConfigError as exc:
        errors.write(f"Configuration error: {exc}\n")
        return 1
    except (DashboardServiceError, ApiError, ClientValidationError) as exc:
        presented = ErrorPresenter().present(exc, action=f"{args.command}.{getattr(args, 'action', '')}".rstrip("."))
        errors.write(json.dumps(presented.render(expanded=args.details), indent=2, default=str) + "\n")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
