from __future__ import annotations

from decimal import Decimal, InvalidOperation

from .models_commissions import CommissionSettingRequest
from .validation import IssueCollector, normalize_text, parse_decimal

MAX_COMMISSION_PERCENTAGE = Decimal("100")
MIN_CLEARING_DAYS = 1


def _number(collector: IssueCollector, field_name: str, label: str, value: object) -> Decimal | None:
    try:
        number = parse_decimal(value)
    except InvalidOperation:
        collector.add(field_name, f"{label} must be a number")
        return None
    if number is None:
        collector.add(field_name, f"{label} is required")
    return number


def validate_commission_form(
    *,
    center_id: object,
    commission_percentage: object,
    chargeback_fee: object,
    clearing_days: object,
) -> CommissionSettingRequest:
    collector = IssueCollector()

    center = normalize_text(center_id)
    if not center:
        collector.add("centerId", "Center is required")

    percentage = _number(collector, "commissionPercentage", "Commission percentage", commission_percentage)
    if percentage is not None and not (Decimal("0") <= percentage <= MAX_COMMISSION_PERCENTAGE):
        collector.add("commissionPercentage", "Commission percentage must be between 0 and 100")

    fee = _number(collector, "chargebackFee", "Chargeback fee", chargeback_fee)
    if fee is not None and fee < 0:
        collector.add("chargebackFee", "Chargeback fee cannot be negative")

    days = _number(collector, "clearingDays", "Clearing days", clearing_days)
    if days is not None:
        if days != days.to_integral_value():
            collector.add("clearingDays", "Clearing days must be a whole number")
        elif days < MIN_CLEARING_DAYS:
            collector.add("clearingDays", "Clearing days must be at least 1")

    collector.raise_if_any()
    return CommissionSettingRequest(
        center_id=center,
        commission_percentage=float(percentage),
        chargeback_fee=float(fee),
        clearing_days=int(days),
    )
