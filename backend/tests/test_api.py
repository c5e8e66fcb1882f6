from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy.exc import OperationalError

from conftest import auth_headers, make_property, make_tenant, make_transaction, make_user
from database import get_db
from main import app
from models import ActivityLog, RentTransaction, TransactionStatus, UserRole


def register(client, email, role="landlord", password="secret123", name="Asha"):
    return client.post(
        "/auth/register",
        json={"name": name, "email": email, "password": password, "role": role},
    )


class TestAuth:
    def test_register_login_and_me(self, client):
        response = register(client, "Asha@Example.com")
        assert response.status_code == 201
        assert response.json()["user"]["email"] == "asha@example.com"

        login = client.post("/auth/login", json={"email": "asha@example.com", "password": "secret123"})
        assert login.status_code == 200
        token = login.json()["access_token"]

        me = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert me.status_code == 200
        assert me.json()["role"] == "landlord"

    def test_duplicate_email_is_rejected(self, client):
        register(client, "asha@example.com")

        response = register(client, "asha@example.com", role="tenant")

        assert response.status_code == 409

    def test_wrong_password_is_unauthorized(self, client):
        register(client, "asha@example.com")

        response = client.post("/auth/login", json={"email": "asha@example.com", "password": "nope-nope"})

        assert response.status_code == 401

    def test_missing_token_is_unauthorized(self, client):
        assert client.get("/transactions/summary").status_code == 401

    def test_update_profile(self, client, db_session):
        user = make_user(db_session, "asha@example.com")

        response = client.put("/auth/me", json={"phone": "9876543210"}, headers=auth_headers(user))

        assert response.status_code == 200
        assert response.json()["phone"] == "9876543210"


class TestProperties:
    def test_landlord_creates_and_lists_properties(self, client, db_session):
        owner = make_user(db_session, "owner@example.com")
        headers = auth_headers(owner)

        created = client.post("/properties/", json={"name": "Flat 101", "rent_amount": "15000"}, headers=headers)
        assert created.status_code == 201

        listed = client.get("/properties/", headers=headers).json()
        assert [p["name"] for p in listed] == ["Flat 101"]
        assert listed[0]["tenant_count"] == 0

    def test_tenant_cannot_create_property(self, client, db_session):
        tenant_user = make_user(db_session, "ravi@example.com", role=UserRole.TENANT)

        response = client.post(
            "/properties/", json={"name": "Flat", "rent_amount": "100"}, headers=auth_headers(tenant_user)
        )

        assert response.status_code == 403

    def test_negative_rent_is_rejected(self, client, db_session):
        owner = make_user(db_session, "owner@example.com")

        response = client.post("/properties/", json={"name": "Flat", "rent_amount": "-1"}, headers=auth_headers(owner))

        assert response.status_code == 422

    def test_due_day_defaults_and_updates(self, client, db_session):
        owner = make_user(db_session, "owner@example.com")
        headers = auth_headers(owner)

        created = client.post("/properties/", json={"name": "Flat", "rent_amount": "100"}, headers=headers).json()
        assert created["due_day"] == 1

        updated = client.put(f"/properties/{created['id']}", json={"due_day": 10}, headers=headers)
        assert updated.status_code == 200
        assert updated.json()["due_day"] == 10

    @pytest.mark.parametrize("due_day", [0, 32])
    def test_due_day_out_of_range_is_rejected(self, client, db_session, due_day):
        owner = make_user(db_session, "owner@example.com")

        response = client.post(
            "/properties/", json={"name": "Flat", "rent_amount": "100", "due_day": due_day}, headers=auth_headers(owner)
        )

        assert response.status_code == 422

    def test_other_landlords_property_is_not_found(self, client, db_session):
        owner = make_user(db_session, "owner@example.com")
        other = make_user(db_session, "other@example.com")
        prop = make_property(db_session, owner)

        assert client.get(f"/properties/{prop.id}", headers=auth_headers(other)).status_code == 404
        assert client.delete(f"/properties/{prop.id}", headers=auth_headers(other)).status_code == 404

    def test_tenant_sees_leased_property(self, client, db_session):
        owner = make_user(db_session, "owner@example.com")
        tenant_user = make_user(db_session, "ravi@example.com", role=UserRole.TENANT)
        prop = make_property(db_session, owner)
        make_property(db_session, owner, name="Not leased")
        make_tenant(db_session, prop, user=tenant_user)

        listed = client.get("/properties/", headers=auth_headers(tenant_user)).json()

        assert [p["id"] for p in listed] == [prop.id]


class TestTenants:
    def test_adding_tenant_links_registered_user_by_email(self, client, db_session):
        owner = make_user(db_session, "owner@example.com")
        tenant_user = make_user(db_session, "ravi@example.com", role=UserRole.TENANT)
        prop = make_property(db_session, owner)

        response = client.post(
            "/tenants/",
            json={"name": "Ravi", "email": "ravi@example.com", "property_id": prop.id},
            headers=auth_headers(owner),
        )

        assert response.status_code == 201
        assert response.json()["user_id"] == tenant_user.id
        assert response.json()["property_name"] == prop.name

    def test_cannot_add_tenant_to_foreign_property(self, client, db_session):
        owner = make_user(db_session, "owner@example.com")
        other = make_user(db_session, "other@example.com")
        prop = make_property(db_session, other)

        response = client.post(
            "/tenants/", json={"name": "Ravi", "property_id": prop.id}, headers=auth_headers(owner)
        )

        assert response.status_code == 404

    def test_removing_tenant_deactivates_it(self, client, db_session):
        owner = make_user(db_session, "owner@example.com")
        tenant = make_tenant(db_session, make_property(db_session, owner))

        response = client.delete(f"/tenants/{tenant.id}", headers=auth_headers(owner))

        assert response.status_code == 200
        db_session.refresh(tenant)
        assert tenant.is_active is False


class TestTransactions:
    def test_landlord_records_payment(self, client, db_session):
        owner = make_user(db_session, "owner@example.com")
        prop = make_property(db_session, owner)
        tenant = make_tenant(db_session, prop)

        response = client.post(
            "/transactions/",
            json={
                "property_id": prop.id,
                "tenant_id": tenant.id,
                "amount": "15000",
                "due_date": "2024-03-05",
                "date_paid": "2024-03-04",
                "mode": "upi",
                "status": "paid",
            },
            headers=auth_headers(owner),
        )

        assert response.status_code == 201
        body = response.json()
        assert body["property_name"] == prop.name
        assert body["tenant_name"] == tenant.name
        assert Decimal(body["amount"]) == Decimal("15000")
        assert body["billing_period"] is None

    def test_recording_on_foreign_property_is_not_found(self, client, db_session):
        owner = make_user(db_session, "owner@example.com")
        prop = make_property(db_session, make_user(db_session, "other@example.com"))

        response = client.post(
            "/transactions/",
            json={"property_id": prop.id, "amount": "100", "due_date": "2024-03-05"},
            headers=auth_headers(owner),
        )

        assert response.status_code == 404

    def test_tenant_records_on_own_tenancy(self, client, db_session):
        owner = make_user(db_session, "owner@example.com")
        tenant_user = make_user(db_session, "ravi@example.com", role=UserRole.TENANT)
        prop = make_property(db_session, owner)
        tenant = make_tenant(db_session, prop, user=tenant_user)

        response = client.post(
            "/transactions/",
            json={"property_id": prop.id, "amount": "15000", "due_date": "2024-03-05", "status": "paid"},
            headers=auth_headers(tenant_user),
        )

        assert response.status_code == 201
        assert response.json()["tenant_id"] == tenant.id

    def test_list_is_scoped_and_filtered(self, client, db_session):
        owner = make_user(db_session, "owner@example.com")
        prop = make_property(db_session, owner)
        make_transaction(db_session, prop, due_date=date(2024, 1, 5), status=TransactionStatus.PAID)
        make_transaction(db_session, prop, due_date=date(2024, 2, 5))
        make_transaction(db_session, make_property(db_session, make_user(db_session, "x@example.com")))

        body = client.get("/transactions/?status=pending", headers=auth_headers(owner)).json()

        assert body["total"] == 1
        assert body["transactions"][0]["due_date"] == "2024-02-05"

    def test_update_records_changed_fields(self, client, db_session):
        owner = make_user(db_session, "owner@example.com")
        transaction = make_transaction(db_session, make_property(db_session, owner))

        response = client.put(
            f"/transactions/{transaction.id}",
            json={"status": "paid", "date_paid": "2024-03-06"},
            headers=auth_headers(owner),
        )

        assert response.status_code == 200
        assert response.json()["status"] == "paid"
        entry = db_session.query(ActivityLog).filter(ActivityLog.action == "update_transaction").one()
        assert "status" in entry.details

    def test_moving_generated_charge_onto_billed_month_conflicts(self, client, db_session):
        owner = make_user(db_session, "owner@example.com")
        prop = make_property(db_session, owner)
        tenant = make_tenant(db_session, prop)
        make_transaction(db_session, prop, tenant, due_date=date(2024, 2, 5), billing_period="2024-02")
        march = make_transaction(db_session, prop, tenant, due_date=date(2024, 3, 5), billing_period="2024-03")

        response = client.put(
            f"/transactions/{march.id}", json={"due_date": "2024-02-25"}, headers=auth_headers(owner)
        )

        assert response.status_code == 409

        moved = client.put(
            f"/transactions/{march.id}", json={"due_date": "2024-04-02"}, headers=auth_headers(owner)
        )
        assert moved.status_code == 200
        assert moved.json()["billing_period"] == "2024-04"

    def test_only_owner_can_delete(self, client, db_session):
        owner = make_user(db_session, "owner@example.com")
        tenant_user = make_user(db_session, "ravi@example.com", role=UserRole.TENANT)
        prop = make_property(db_session, owner)
        transaction = make_transaction(db_session, prop, make_tenant(db_session, prop, user=tenant_user))

        assert client.delete(f"/transactions/{transaction.id}", headers=auth_headers(tenant_user)).status_code == 403
        assert client.delete(f"/transactions/{transaction.id}", headers=auth_headers(owner)).status_code == 200
        assert db_session.query(RentTransaction).count() == 0

    def test_summary_uses_camel_case_groupings(self, client, db_session):
        owner = make_user(db_session, "owner@example.com")
        prop = make_property(db_session, owner)
        make_transaction(
            db_session, prop, amount="15000", due_date=date(2024, 3, 5),
            status=TransactionStatus.PAID, date_paid=date(2024, 3, 2),
        )

        response = client.get("/transactions/summary?year=2024", headers=auth_headers(owner))

        assert response.status_code == 200
        body = response.json()
        assert body["year"] == 2024
        assert set(body) >= {"monthly", "annual", "byProperty", "byMode"}
        assert Decimal(body["annual"]["total_paid"]) == Decimal("15000")
        assert body["byProperty"][0]["property_name"] == prop.name
        assert body["byMode"][0]["mode"] == "cash"

    def test_summary_rejects_out_of_range_year(self, client, db_session):
        owner = make_user(db_session, "owner@example.com")

        assert client.get("/transactions/summary?year=1800", headers=auth_headers(owner)).status_code == 422


class TestDashboards:
    def test_landlord_dashboard(self, client, db_session):
        owner = make_user(db_session, "owner@example.com")
        prop = make_property(db_session, owner)
        make_tenant(db_session, prop)
        make_transaction(db_session, prop, status=TransactionStatus.OVERDUE)

        response = client.get("/dashboard/landlord", headers=auth_headers(owner))

        assert response.status_code == 200
        stats = response.json()["stats"]
        assert (stats["property_count"], stats["tenant_count"], stats["overdue_count"]) == (1, 1, 1)
        assert len(response.json()["recent_transactions"]) == 1

    def test_tenant_dashboard(self, client, db_session):
        owner = make_user(db_session, "owner@example.com")
        tenant_user = make_user(db_session, "ravi@example.com", role=UserRole.TENANT)
        prop = make_property(db_session, owner)
        prop.address = "12 MG Road, Pune"
        prop.due_day = 7
        db_session.commit()
        tenant = make_tenant(db_session, prop, user=tenant_user)
        make_transaction(db_session, prop, tenant, amount="15000")

        response = client.get("/dashboard/tenant", headers=auth_headers(tenant_user))

        assert response.status_code == 200
        body = response.json()
        assert Decimal(body["stats"]["pending_amount"]) == Decimal("15000")
        lease = body["active_leases"][0]
        assert lease["property_name"] == prop.name
        assert Decimal(lease["rent_amount"]) == Decimal("15000")
        assert lease["address"] == "12 MG Road, Pune"
        assert lease["due_day"] == 7

    @pytest.mark.parametrize("path, role", [("/dashboard/landlord", UserRole.TENANT), ("/dashboard/tenant", UserRole.LANDLORD)])
    def test_wrong_role_is_forbidden(self, client, db_session, path, role):
        user = make_user(db_session, "someone@example.com", role=role)

        assert client.get(path, headers=auth_headers(user)).status_code == 403


class TestRentGenerationEndpoint:
    def test_manual_run_is_idempotent(self, client, db_session):
        owner = make_user(db_session, "owner@example.com")
        make_tenant(db_session, make_property(db_session, owner))

        first = client.post("/rent-generation/run", headers=auth_headers(owner))
        second = client.post("/rent-generation/run", headers=auth_headers(owner))

        assert first.status_code == 200
        assert (first.json()["created"], second.json()["created"], second.json()["skipped"]) == (1, 0, 1)
        assert db_session.query(RentTransaction).count() == 1

    def test_tenant_cannot_trigger_generation(self, client, db_session):
        tenant_user = make_user(db_session, "ravi@example.com", role=UserRole.TENANT)

        assert client.post("/rent-generation/run", headers=auth_headers(tenant_user)).status_code == 403


def test_database_outage_is_reported_as_retryable(client, db_session):
    owner = make_user(db_session, "owner@example.com")

    def unreachable_db():
        raise OperationalError("SELECT 1", {}, Exception("could not connect to server"))
        yield

    app.dependency_overrides[get_db] = unreachable_db

    response = client.get("/transactions/summary", headers=auth_headers(owner))

    assert response.status_code == 503
    assert response.json()["retryable"] is True


def test_health(client):
    assert client.get("/health").json()["status"] == "ok"
