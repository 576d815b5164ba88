"""Tests for Hosting Plan API and Repository."""

from decimal import Decimal
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.repositories.hosting_plan_repository import HostingPlanRepository
from app.schemas.hosting_plan import HostingPlanCreate, HostingPlanUpdate


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


class TestHostingPlanRepository:
    def test_get_all_orders_by_price(self, db_session):
        repo = HostingPlanRepository(db_session)
        repo.create(HostingPlanCreate(plan_name="Premium", selling_price=Decimal("150000")))
        repo.create(HostingPlanCreate(plan_name="Starter", selling_price=Decimal("25000")))

        assert [p.plan_name for p in repo.get_all()] == ["Starter", "Premium"]

    def test_active_only(self, db_session):
        repo = HostingPlanRepository(db_session)
        repo.create(HostingPlanCreate(plan_name="Legacy", selling_price=1, is_active=False))
        repo.create(HostingPlanCreate(plan_name="Current", selling_price=2))

        assert [p.plan_name for p in repo.get_all(active_only=True)] == ["Current"]

    def test_update_price(self, db_session, hosting_plan):
        repo = HostingPlanRepository(db_session)

        plan = repo.update(hosting_plan.id, HostingPlanUpdate(selling_price=Decimal("60000")))

        assert plan.selling_price == Decimal("60000")


class TestHostingPlansAPI:
    def test_create_plan(self, client):
        response = client.post(
            "/v1/hosting_plans/",
            json={
                "plan_name": "Starter",
                "storage_gb": "5",
                "cpu_cores": "1",
                "ram_gb": "1",
                "bandwidth": "100GB",
                "selling_price": "25000",
                "features": ["ssl"],
            },
        )

        assert response.status_code == 201
        data = response.json()
        assert data["plan_name"] == "Starter"
        assert Decimal(data["selling_price"]) == Decimal("25000")
        assert data["features"] == ["ssl"]
        assert data["is_active"] is True

    def test_create_plan_duplicate_name(self, client, hosting_plan):
        response = client.post(
            "/v1/hosting_plans/",
            json={"plan_name": hosting_plan.plan_name, "selling_price": "1"},
        )

        assert response.status_code == 409

    def test_create_plan_negative_price(self, client):
        response = client.post(
            "/v1/hosting_plans/", json={"plan_name": "Broken", "selling_price": "-1"}
        )

        assert response.status_code == 422

    def test_get_plan(self, client, hosting_plan):
        response = client.get(f"/v1/hosting_plans/{hosting_plan.id}")

        assert response.status_code == 200
        assert response.json()["plan_name"] == "Business"

    def test_get_plan_not_found(self, client):
        response = client.get(f"/v1/hosting_plans/{uuid4()}")

        assert response.status_code == 404

    def test_update_plan(self, client, hosting_plan):
        response = client.put(
            f"/v1/hosting_plans/{hosting_plan.id}", json={"is_active": False}
        )

        assert response.status_code == 200
        assert response.json()["is_active"] is False
        assert client.get("/v1/hosting_plans/", params={"active_only": True}).json() == []
