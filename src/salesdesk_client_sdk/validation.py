from __future__ import annotations

import re
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


@dataclass(frozen=True)
class ValidationIssue:
    field: str
    reason: str


class ClientValidationError(ValueError):
    def __init__(self, issues: list[ValidationIssue]) -> None:
        self.issues = issues
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if not self.issues:
            return "Validation failed"
        return "; ".join(f"{issue.field}: {issue.reason}" for issue in self.issues)

    @property
    def field_errors(self) -> dict[str, str]:
        errors: dict[str, str] = {}
        for issue in self.issues:
            errors.setdefault(issue.field, issue.reason)
        return errors


@dataclass
class IssueCollector:
    """Accumulates every field issue so a form reports all of them at once."""

    issues: list[ValidationIssue] = field(default_factory=list)

    def add(self, field_name: str, reason: str) -> None:
        self.issues.append(ValidationIssue(field=field_name, reason=reason))

    def raise_if_any(self) -> None:
        if self.issues:
            raise ClientValidationError(list(self.issues))


def normalize_text(value: object) -> str:
    if value is None:
        return ""
    return str(value).strip()


def parse_decimal(value: object) -> Decimal | None:
    """Return None for blank input; raise InvalidOperation for junk."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    if isinstance(value, bool):
        raise InvalidOperation(f"not a number: {value!r}")
    number = Decimal(str(value).strip())
    if not number.is_finite():
        raise InvalidOperation(f"not a finite number: {value!r}")
    return number


def validate_account_form(
    *,
    username: object,
    email: object,
    role: object,
    password: object = None,
    require_password: bool,
    allowed_roles: list[str] | tuple[str, ...],
) -> dict[str, str]:
    collector = IssueCollector()
    values = {
        "username": normalize_text(username),
        "email": normalize_text(email),
        "role": normalize_text(role),
        "password": normalize_text(password),
    }
    if not values["username"]:
        collector.add("username", "Username is required")
    if not values["email"]:
        collector.add("email", "Email is required")
    elif not EMAIL_RE.match(values["email"]):
        collector.add("email", "Invalid email address")
    if require_password and not values["password"]:
        collector.add("password", "Password is required")
    if not values["role"]:
        collector.add("role", "Role is required")
    elif values["role"] not in allowed_roles:
        collector.add("role", f"Role {values['role']!r} cannot be assigned by the current user")
    collector.raise_if_any()
    return values


def validate_merchant_form(name: object) -> dict[str, str]:
    collector = IssueCollector()
    normalized = normalize_text(name)
    if not normalized:
        collector.add("name", "Name is required")
    collector.raise_if_any()
    return {"name": normalized}
