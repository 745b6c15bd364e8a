"""Role rules shared by every screen.

The backend enforces its own authorization; these checks only decide what a
caller is offered, and refuse client-side the actions the screens never
expose to that role.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from salesdesk_client_sdk import Account, Sale, UserRole

SUPER_ADMIN = UserRole.SUPER_ADMIN.value
SUB_ADMIN = UserRole.SUB_ADMIN.value
CENTER_ADMIN = UserRole.CENTER_ADMIN.value
AGENT = UserRole.AGENT.value

ASSIGNABLE_ROLES: dict[str, tuple[str, ...]] = {
    SUPER_ADMIN: (CENTER_ADMIN, SUB_ADMIN),
    SUB_ADMIN: (CENTER_ADMIN,),
    CENTER_ADMIN: (AGENT,),
}

_PENDING_ONLY_ROLES = frozenset({CENTER_ADMIN, AGENT})
_PAYMENT_STATUS_ROLES = frozenset({SUPER_ADMIN, SUB_ADMIN})


class Caller(Protocol):
    id: str | None
    role: str | None


def visible_accounts(accounts: Iterable[Account], caller: Caller) -> list[Account]:
    rows = list(accounts)
    if caller.role == CENTER_ADMIN:
        return [row for row in rows if row.role == AGENT and row.center == caller.id]
    if caller.role == SUPER_ADMIN:
        return [row for row in rows if row.role in {CENTER_ADMIN, SUB_ADMIN}]
    if caller.role == SUB_ADMIN:
        return [row for row in rows if row.role == CENTER_ADMIN]
    return rows


def assignable_roles(role: str | None) -> list[str]:
    return list(ASSIGNABLE_ROLES.get(role or "", ()))


def can_create_sale(role: str | None) -> bool:
    return role == AGENT


def can_modify_sale(role: str | None, sale: Sale) -> bool:
    if role in _PENDING_ONLY_ROLES:
        return sale.status == "pending"
    return True


def shows_sale_status_field(role: str | None) -> bool:
    return role not in _PENDING_ONLY_ROLES


def can_update_payment_status(role: str | None) -> bool:
    return role in _PAYMENT_STATUS_ROLES


def shows_payment_actions(role: str | None) -> bool:
    return role != CENTER_ADMIN
