from __future__ import annotations

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from salesdesk_client_sdk import ROLE_LABELS, Account, CommissionSetting, Sale, SalePayment, mask_card_number
from salesdesk_client_sdk.models_sale_payments import Party

EMPTY_VALUE = "—"
_CENTS = Decimal("0.01")


def format_money(value: Any) -> str:
    if value is None or value == "":
        return EMPTY_VALUE
    try:
        amount = Decimal(str(value)).quantize(_CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return EMPTY_VALUE
    return f"${amount:,.2f}"


def format_percentage(value: Any) -> str:
    if value is None or value == "":
        return EMPTY_VALUE
    try:
        text = f"{Decimal(str(value)):f}"
    except InvalidOperation:
        return EMPTY_VALUE
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return f"{text}%"


def format_date(value: datetime | None) -> str:
    if value is None:
        return EMPTY_VALUE
    return value.strftime("%Y-%m-%d")


def format_status_flag(status: bool | None) -> str:
    return "Active" if status else "Inactive"


def format_role(role: str | None) -> str:
    if not role:
        return EMPTY_VALUE
    return ROLE_LABELS.get(role, role)


def party_name(party: Party | None) -> str:
    if party is None:
        return EMPTY_VALUE
    return party.display_name or EMPTY_VALUE


def account_row(account: Account) -> dict[str, str]:
    return {
        "id": account.id,
        "username": account.username,
        "email": account.email,
        "role": format_role(account.role),
        "status": format_status_flag(account.status),
        "created_at": format_date(account.created_at),
    }


def sale_row(sale: Sale) -> dict[str, str]:
    return {
        "id": sale.id,
        "card": mask_card_number(sale.card_number) or EMPTY_VALUE,
        "merchant": sale.merchant.name if sale.merchant and sale.merchant.name else EMPTY_VALUE,
        "amount": format_money(sale.amount),
        "status": sale.status,
        "created_at": format_date(sale.created_at),
    }


def commission_row(setting: CommissionSetting) -> dict[str, str]:
    return {
        "id": setting.id,
        "center": setting.center_id.label if setting.center_id else EMPTY_VALUE,
        "commission": format_percentage(setting.commission_percentage),
        "chargeback_fee": format_money(setting.chargeback_fee),
        "clearing_days": str(setting.clearing_days),
    }


def payment_row(payment: SalePayment) -> dict[str, str]:
    return {
        "id": payment.id,
        "sale": payment.sale_ref_id or EMPTY_VALUE,
        "center": party_name(payment.center_id),
        "agent": party_name(payment.agent_id),
        "commission_percentage": format_percentage(payment.commission_percentage),
        "sale_amount": format_money(payment.sale_amount),
        "commission": format_money(payment.commission_amount),
        "net_payable": format_money(payment.net_payable),
        "status": payment.status,
        "created_at": format_date(payment.created_at),
        "payable_on": format_date(payment.payable_on),
    }
