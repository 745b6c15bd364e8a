from __future__ import annotations

from datetime import date

import pytest

from dashboard_fakes import FakeSession, make_payment, make_sale, signed_in

from salesdesk_client_sdk.error_mapper import map_error
from salesdesk_client_sdk.models_commissions import CenterAdmin, CommissionSetting
from salesdesk_client_sdk.models_merchants import Merchant
from salesdesk_client_sdk.validation import ClientValidationError
from salesdesk_dashboard.services.commission_settings_service import CommissionSettingsService
from salesdesk_dashboard.services.errors import AccessDeniedError, DashboardServiceError
from salesdesk_dashboard.services.merchants_service import MerchantsService
from salesdesk_dashboard.services.sale_payments_service import SalePaymentsService, build_payment_query


def _setting(setting_id: str, center_id: str) -> CommissionSetting:
    return CommissionSetting.model_validate(
        {
            "_id": setting_id,
            "centerId": {"_id": center_id, "username": "center", "email": "c@example.com"},
            "commissionPercentage": 10,
            "chargebackFee": 15,
            "clearingDays": 7,
        }
    )


def test_merchants_service_keeps_cache_in_step() -> None:
    session = FakeSession()
    session.merchants.rows = [Merchant(id="m1", name="Acme")]
    service = MerchantsService(session)
    service.list_merchants()

    service.create(" Globex ")
    service.update("m1", "Acme Corp")
    service.delete("m2")

    assert [(row.id, row.name) for row in service.merchants] == [("m1", "Acme Corp")]


def test_merchants_service_requires_name() -> None:
    with pytest.raises(DashboardServiceError, match="Name is required"):
        MerchantsService(FakeSession()).create("  ")


def test_commission_create_refreshes_both_lists() -> None:
    session = FakeSession()
    session.commissions.centers = [CenterAdmin(id="c2", username="east", email="east@example.com")]
    service = CommissionSettingsService(session)

    snapshot = service.create(center_id="c2", commission_percentage="12.5", chargeback_fee="3", clearing_days="5")

    assert session.commissions.created[0].center_id == "c2"
    assert session.commissions.list_calls == 1
    assert session.commissions.center_calls == 1
    assert [center.id for center in snapshot.available_centers] == ["c2"]


def test_commission_update_keeps_existing_center() -> None:
    session = FakeSession()
    session.commissions.settings = [_setting("cs1", "c1")]
    service = CommissionSettingsService(session)

    service.update("cs1", commission_percentage="20", chargeback_fee="0", clearing_days="1")

    setting_id, payload = session.commissions.updated[0]
    assert setting_id == "cs1"
    assert payload.center_id == "c1"
    assert payload.commission_percentage == 20.0


def test_commission_backend_message_is_surfaced() -> None:
    session = FakeSession()
    session.commissions.error = map_error(
        409, {"message": "Commission setting already exists for this center", "error": "Conflict"}, None
    )
    service = CommissionSettingsService(session)

    with pytest.raises(DashboardServiceError) as excinfo:
        service.create(center_id="c1", commission_percentage="10", chargeback_fee="1", clearing_days="2")
    assert excinfo.value.message == "Commission setting already exists for this center"


def test_commission_delete_refreshes() -> None:
    session = FakeSession()
    service = CommissionSettingsService(session)
    service.delete("cs1")
    assert session.commissions.deleted == ["cs1"]
    assert session.commissions.list_calls == 1
    assert session.commissions.center_calls == 1


def test_payment_query_validation() -> None:
    query = build_payment_query(status="Paid", from_date="2024-01-01", to_date=date(2024, 1, 31))
    assert query.status == "paid"
    assert query.from_date == date(2024, 1, 1)

    assert build_payment_query(status="", from_date="", to_date=None).model_dump(exclude_none=True) == {}

    with pytest.raises(ClientValidationError) as excinfo:
        build_payment_query(from_date="2024-02-01", to_date="2024-01-01")
    assert "From date" in str(excinfo.value)


def test_list_payments_rejects_bad_filters_before_calling() -> None:
    session = FakeSession()
    service = SalePaymentsService(session, signed_in("super_admin"))
    with pytest.raises(DashboardServiceError) as excinfo:
        service.list_payments(status="refunded", from_date="01/02/2024")
    assert set(excinfo.value.field_errors) == {"status", "from"}
    assert session.payments.queries == []


def test_list_payments_passes_filters() -> None:
    session = FakeSession()
    session.payments.rows = [make_payment("p1", "s1")]
    service = SalePaymentsService(session, signed_in("super_admin"))

    rows = service.list_payments(status="draft", from_date="2024-01-01")

    assert [row.id for row in rows] == ["p1"]
    query = session.payments.queries[0]
    assert query is not None and query.status == "draft"


def test_available_sales_excludes_referenced() -> None:
    session = FakeSession()
    session.sales.rows = [make_sale("s1"), make_sale("s2"), make_sale("s3")]
    session.payments.rows = [make_payment("p1", "s2")]
    service = SalePaymentsService(session, signed_in("agent"))

    assert [sale.id for sale in service.available_sales()] == ["s1", "s3"]


def test_request_payment_uses_caller_as_agent() -> None:
    session = FakeSession()
    session.sales.rows = [make_sale("s1")]
    service = SalePaymentsService(session, signed_in("agent", user_id="agent-3"))

    service.request("s1")

    payload = session.payments.requested[0]
    assert payload.model_dump(by_alias=True) == {"saleId": "s1", "agentId": "agent-3"}


def test_request_payment_rejects_sale_already_paid() -> None:
    session = FakeSession()
    session.sales.rows = [make_sale("s1")]
    session.payments.rows = [make_payment("p1", "s1")]
    service = SalePaymentsService(session, signed_in("agent"))

    with pytest.raises(DashboardServiceError) as excinfo:
        service.request("s1")
    assert "saleId" in excinfo.value.field_errors
    assert session.payments.requested == []


@pytest.mark.parametrize("role", ["center_admin", "agent"])
def test_status_update_refused_for_restricted_roles(role: str) -> None:
    session = FakeSession()
    with pytest.raises(AccessDeniedError):
        SalePaymentsService(session, signed_in(role)).update_status("p1", "paid")
    assert session.payments.status_updates == []


def test_status_update_for_admins() -> None:
    session = FakeSession()
    service = SalePaymentsService(session, signed_in("sub_admin"))

    service.update_status("p1", "Paid")
    assert session.payments.status_updates == [("p1", "paid")]

    with pytest.raises(DashboardServiceError):
        service.update_status("p1", "refunded")


def test_delete_payment_and_empty_id_noop() -> None:
    session = FakeSession()
    service = SalePaymentsService(session, signed_in("super_admin"))
    service.delete("")
    service.delete("p1")
    assert session.payments.deleted == ["p1"]
