from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from .models_sales import SALE_STATUSES, SaleCreateRequest, SaleUpdateRequest
from .validation import IssueCollector, normalize_text, parse_decimal

EXPIRY_RE = re.compile(r"^(0[1-9]|1[0-2])/[0-9]{2}$")
CVV_RE = re.compile(r"^[0-9]{3,4}$")
_NON_DIGIT_RE = re.compile(r"[^0-9]")
_WHITESPACE_RE = re.compile(r"\s")
MIN_SALE_AMOUNT = Decimal("1")


def luhn_check(number: str) -> bool:
    digits = [int(ch) for ch in reversed(_NON_DIGIT_RE.sub("", number or ""))]
    if not digits:
        return False
    check_digit = digits.pop(0)
    total = 0
    for index, digit in enumerate(digits):
        if index % 2 == 0:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit
    return (total + check_digit) % 10 == 0


def is_valid_expiry(value: str) -> bool:
    return bool(EXPIRY_RE.match(value or ""))


def is_valid_cvv(value: str) -> bool:
    return bool(CVV_RE.match(value or ""))


def mask_card_number(number: str | None) -> str:
    digits = _NON_DIGIT_RE.sub("", number or "")
    if len(digits) <= 4:
        return digits
    return f"**** {digits[-4:]}"


@dataclass
class SaleForm:
    billing_address: object = None
    amount: object = None
    merchant: object = None
    status: object = None
    card_number: object = None
    expiry_date: object = None
    cvv: object = None


def _validate_common(form: SaleForm, collector: IssueCollector, *, include_status: bool) -> dict[str, object]:
    billing_address = normalize_text(form.billing_address)
    if not billing_address:
        collector.add("billingAddress", "Address is required")

    amount: Decimal | None = None
    try:
        amount = parse_decimal(form.amount)
    except InvalidOperation:
        collector.add("amount", "Amount must be a number")
    else:
        if amount is None:
            collector.add("amount", "Amount is required")
        elif amount < MIN_SALE_AMOUNT:
            collector.add("amount", "Amount must be at least 1")

    merchant = normalize_text(form.merchant)
    if not merchant:
        collector.add("merchant", "Merchant selection is required")

    status: str | None = None
    if include_status:
        status = normalize_text(form.status).lower()
        if not status:
            collector.add("status", "Status is required")
        elif status not in SALE_STATUSES:
            collector.add("status", f"Status must be one of: {', '.join(SALE_STATUSES)}")

    return {
        "billing_address": billing_address,
        "amount": float(amount) if amount is not None else 0.0,
        "merchant": merchant,
        "status": status or None,
    }


def validate_sale_create(form: SaleForm, *, include_status: bool, submitted_by: str | None) -> SaleCreateRequest:
    collector = IssueCollector()

    card_number = _WHITESPACE_RE.sub("", normalize_text(form.card_number))
    if not card_number:
        collector.add("cardNumber", "Card number is required")
    elif not luhn_check(card_number):
        collector.add("cardNumber", "Invalid card number")

    expiry_date = normalize_text(form.expiry_date)
    if not expiry_date:
        collector.add("expiryDate", "Expiry date is required")
    elif not is_valid_expiry(expiry_date):
        collector.add("expiryDate", "Invalid expiry date format")

    cvv = normalize_text(form.cvv)
    if not cvv:
        collector.add("cvv", "CVV is required")
    elif not is_valid_cvv(cvv):
        collector.add("cvv", "Invalid CVV")

    common = _validate_common(form, collector, include_status=include_status)
    collector.raise_if_any()
    return SaleCreateRequest(
        card_number=card_number,
        expiry_date=expiry_date,
        cvv=cvv,
        submitted_by=submitted_by,
        **common,
    )


def validate_sale_update(form: SaleForm, *, include_status: bool) -> SaleUpdateRequest:
    collector = IssueCollector()
    common = _validate_common(form, collector, include_status=include_status)
    collector.raise_if_any()
    return SaleUpdateRequest(**common)
