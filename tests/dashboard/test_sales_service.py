from __future__ import annotations

import pytest

from dashboard_fakes import FakeSession, make_sale, signed_in

from salesdesk_client_sdk.models_merchants import Merchant
from salesdesk_client_sdk.sale_validation import SaleForm
from salesdesk_dashboard.services.errors import AccessDeniedError, DashboardServiceError
from salesdesk_dashboard.services.sales_service import SalesService


def _form(**overrides: object) -> SaleForm:
    values: dict[str, object] = {
        "card_number": "4242 4242 4242 4242",
        "expiry_date": "12/30",
        "cvv": "123",
        "billing_address": "1 Main St",
        "amount": "40",
        "merchant": "m1",
        "status": "approved",
    }
    values.update(overrides)
    return SaleForm(**values)


def test_agent_creates_sale_with_submitter_and_without_status() -> None:
    session = FakeSession()
    session.sales.rows = [make_sale("s1")]
    service = SalesService(session, signed_in("agent", user_id="agent-7"))

    rows = service.create(_form())

    payload = session.sales.created[0]
    assert payload.submitted_by == "agent-7"
    assert payload.status is None
    assert payload.card_number == "4242424242424242"
    assert [row.id for row in rows] == ["s1"]
    assert session.sales.list_calls == 1


@pytest.mark.parametrize("role", ["super_admin", "sub_admin", "center_admin"])
def test_non_agents_cannot_create(role: str) -> None:
    session = FakeSession()
    with pytest.raises(AccessDeniedError):
        SalesService(session, signed_in(role)).create(_form())
    assert session.sales.created == []


def test_create_accepts_mapping_form_and_reports_validation() -> None:
    session = FakeSession()
    service = SalesService(session, signed_in("agent"))
    with pytest.raises(DashboardServiceError) as excinfo:
        service.create({"card_number": "4242424242424241", "expiry_date": "12/30", "cvv": "123", "amount": "5"})
    assert excinfo.value.field_errors["cardNumber"] == "Invalid card number"
    assert excinfo.value.field_errors["billingAddress"] == "Address is required"
    assert excinfo.value.field_errors["merchant"] == "Merchant selection is required"


def test_admin_update_sends_status_but_no_card_data() -> None:
    session = FakeSession()
    session.sales.rows = [make_sale("s1", "approved")]
    service = SalesService(session, signed_in("super_admin"))

    service.update("s1", _form(status="refunded"))

    sale_id, payload = session.sales.updated[0]
    assert sale_id == "s1"
    body = payload.model_dump(by_alias=True, exclude_none=True)
    assert body == {"billingAddress": "1 Main St", "amount": 40.0, "merchant": "m1", "status": "refunded"}


def test_center_admin_update_omits_status() -> None:
    session = FakeSession()
    session.sales.rows = [make_sale("s1", "pending")]
    SalesService(session, signed_in("center_admin")).update("s1", _form(status=None))

    _, payload = session.sales.updated[0]
    assert payload.status is None


@pytest.mark.parametrize("role", ["center_admin", "agent"])
def test_restricted_roles_cannot_touch_settled_sales(role: str) -> None:
    session = FakeSession()
    session.sales.rows = [make_sale("s1", "approved")]
    service = SalesService(session, signed_in(role))

    with pytest.raises(AccessDeniedError):
        service.update("s1", _form())
    with pytest.raises(AccessDeniedError):
        service.delete("s1")
    assert session.sales.updated == []
    assert session.sales.deleted == []


def test_delete_pending_sale_and_empty_id_noop() -> None:
    session = FakeSession()
    session.sales.rows = [make_sale("s1", "pending")]
    service = SalesService(session, signed_in("agent"))

    service.delete("")
    assert session.sales.deleted == []

    service.delete("s1")
    assert session.sales.deleted == ["s1"]


def test_unknown_sale_is_reported() -> None:
    session = FakeSession()
    with pytest.raises(DashboardServiceError, match="not found"):
        SalesService(session, signed_in("super_admin")).delete("missing")


def test_merchant_options_and_flags() -> None:
    session = FakeSession()
    session.merchants.rows = [Merchant(id="m1", name="Acme")]
    service = SalesService(session, signed_in("agent"))

    assert [row.name for row in service.merchant_options()] == ["Acme"]
    assert service.can_create()
    assert not service.shows_status_field()
