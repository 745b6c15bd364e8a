from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

from dashboard_fakes import make_account, make_payment, make_sale

from salesdesk_client_sdk.error_mapper import map_error
from salesdesk_client_sdk.exceptions import TransportError
from salesdesk_client_sdk.validation import ClientValidationError, ValidationIssue
from salesdesk_dashboard.services.errors import AccessDeniedError, DashboardServiceError, normalize_error
from salesdesk_dashboard.ui import formatting
from salesdesk_dashboard.ui.shared.error_presenter import ErrorPresenter
from salesdesk_dashboard.ui.table_printer import render_table


def test_presenter_categories() -> None:
    presenter = ErrorPresenter()
    validation = ClientValidationError([ValidationIssue("amount", "Amount is required")])
    transport = TransportError(code="TRANSPORT_ERROR", message="refused", details=None, trace_id=None, status_code=0)

    assert presenter.present(validation, action="sales.create").category == "validation"
    assert presenter.present(AccessDeniedError(message="nope"), action="sales.delete").category == "permission"
    assert presenter.present(transport, action="sales.list").category == "network"
    assert presenter.present(map_error(409, {"message": "exists"}, None), action="x").category == "conflict"
    assert presenter.present(map_error(502, {"message": "bad gateway"}, None), action="x").category == "server"


def test_presenter_uses_wrapped_api_error_status() -> None:
    try:
        try:
            raise map_error(503, {"message": "Try later"}, "trace-5")
        except Exception as exc:
            raise normalize_error(exc, "Failed") from exc
    except DashboardServiceError as wrapped:
        presented = ErrorPresenter().present(wrapped, action="payments.list")

    assert presented.category == "server"
    assert presented.safe_to_retry
    assert presented.message == "Try later"
    rendered = presented.render(expanded=True)
    assert rendered["technical_details"]["trace_id"] == "trace-5"
    assert "technical_details" not in presented.render()


def test_formatting_helpers() -> None:
    assert formatting.format_money(Decimal("1234.5")) == "$1,234.50"
    assert formatting.format_money(None) == "—"
    assert formatting.format_status_flag(True) == "Active"
    assert formatting.format_status_flag(None) == "Inactive"
    assert formatting.format_date(None) == "—"
    assert formatting.format_date(datetime(2024, 3, 5, tzinfo=timezone.utc)) == "2024-03-05"
    assert formatting.format_role("center_admin") == "Call center admin"
    assert formatting.format_role("unknown") == "unknown"
    assert formatting.format_percentage(Decimal("12.50")) == "12.5%"
    assert formatting.format_percentage(Decimal("10")) == "10%"
    assert formatting.format_percentage(None) == "—"


def test_rows_hide_card_data_and_show_party_names() -> None:
    sale = formatting.sale_row(make_sale("s1", amount=12))
    assert sale["card"] == "**** 4242"
    assert sale["amount"] == "$12.00"
    assert "cvv" not in sale

    payment = formatting.payment_row(make_payment("p1", "s1"))
    assert payment["center"] == "center-one"
    assert payment["agent"] == "agent@example.com"
    assert payment["net_payable"] == "$45.00"
    assert payment["payable_on"] == "—"
    assert payment["commission_percentage"] == "10%"
    assert payment["created_at"] == "2024-03-05"

    account = formatting.account_row(make_account("u1", "agent", status=False))
    assert account["status"] == "Inactive"
    assert account["created_at"] == "—"


def test_render_table() -> None:
    lines = render_table([{"id": "1", "name": "Acme"}, {"id": "22", "name": None}], [("id", "ID"), ("name", "Name")])
    assert lines[0] == "ID | Name"
    assert lines[1] == "---+-----"
    assert lines[3] == "22 | —   "
    assert render_table([], [("id", "ID")]) == ["(no results)"]
