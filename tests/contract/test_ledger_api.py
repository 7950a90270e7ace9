"""Contract tests for the ledger HTTP API."""

from datetime import date

import pytest
from fastapi.testclient import TestClient

from fundledger.main import create_app
from fundledger.services import get_db


@pytest.fixture
def client(db_session):
    """Test client bound to the seeded in-memory session."""
    app = create_app(init_db=False)

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


class TestSummaryEndpoint:
    def test_summary_shape(self, client, fund):
        fund.revenue(10_000)
        fund.dinner(title="Gala", price_per_person_cents=1_000, guest_count=5)

        response = client.get("/api/ledger/summary")

        assert response.status_code == 200
        data = response.json()
        assert data["posted_balance"] == 10_000
        assert data["projected_surplus"] == 5_000
        assert data["projected_balance"] == 15_000
        assert data["available_remainder"] == 10_000
        assert data["theoretical_remainder"] == 15_000
        assert data["display"]["available_remainder"] == "100.00"


class TestAllocationEndpoints:
    def test_apply_edit_delete(self, client, fund):
        fund.revenue(10_000)

        created = client.post(
            "/api/ledger/allocations", json={"beneficiary_id": 1, "amount_cents": 4_000, "note": "tents"}
        )
        assert created.status_code == 201
        allocation = created.json()
        assert allocation["beneficiary_id"] == 1
        assert allocation["amount_cents"] == 4_000
        assert allocation["note"] == "tents"
        assert client.get("/api/ledger/summary").json()["available_remainder"] == 6_000

        edited = client.patch(f"/api/ledger/allocations/{allocation['id']}", json={"amount_cents": 5_000})
        assert edited.status_code == 200
        assert edited.json()["amount_cents"] == 5_000

        deleted = client.delete(f"/api/ledger/allocations/{allocation['id']}")
        assert deleted.status_code == 204
        assert client.get("/api/ledger/summary").json()["available_remainder"] == 10_000
        assert fund.beneficiary(1).balance_cents == 0

    def test_history(self, client, fund):
        fund.revenue(10_000)
        client.post("/api/ledger/allocations", json={"beneficiary_id": 2, "amount_cents": 1_000})

        response = client.get("/api/ledger/allocations")

        assert response.status_code == 200
        items = response.json()
        assert len(items) == 1
        assert items[0]["beneficiary_name"] == "Couple 2"

    def test_insufficient_remainder(self, client, fund):
        fund.revenue(10_000)

        response = client.post("/api/ledger/allocations", json={"beneficiary_id": 1, "amount_cents": 12_000})

        assert response.status_code == 409
        assert response.json() == {
            "error": {
                "code": "insufficient_remainder",
                "message": "Requested 12000 exceeds available remainder 10000 (minor units)",
                "attempted": 12_000,
                "available": 10_000,
            }
        }

    def test_edit_over_remainder(self, client, fund):
        fund.revenue(10_000)
        allocation = client.post(
            "/api/ledger/allocations", json={"beneficiary_id": 1, "amount_cents": 4_000}
        ).json()

        response = client.patch(f"/api/ledger/allocations/{allocation['id']}", json={"amount_cents": 11_000})

        assert response.status_code == 409
        error = response.json()["error"]
        assert error["attempted"] == 7_000
        assert error["available"] == 6_000

    def test_missing_beneficiary(self, client, fund):
        fund.revenue(10_000)

        response = client.post("/api/ledger/allocations", json={"amount_cents": 1_000})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "invalid_input"

    def test_non_positive_amount(self, client, fund):
        fund.revenue(10_000)

        response = client.post("/api/ledger/allocations", json={"beneficiary_id": 1, "amount_cents": 0})

        assert response.status_code == 400

    @pytest.mark.parametrize("method", ["patch", "delete"])
    def test_unknown_allocation(self, client, method):
        kwargs = {"json": {"amount_cents": 100}} if method == "patch" else {}

        response = getattr(client, method)("/api/ledger/allocations/999", **kwargs)

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "not_found"


class TestDinnerEndpoints:
    def test_posting_status_and_post(self, client, fund):
        dinner = fund.dinner(
            title="Gala", on=date(2026, 6, 1), price_per_person_cents=2_000, guest_count=10, expenses_cents=5_000
        )

        status = client.get(f"/api/ledger/dinners/{dinner.id}/posting").json()
        assert status["posted"] is False
        assert status["label"] == "Gala"
        assert status["revenue_cents"] == 20_000
        assert status["expected_revenue_cents"] == 20_000
        assert status["expenses_cents"] == 5_000
        assert status["revenue_description"] == f"Dinner — Gala — Revenue (ID:{dinner.id})"

        posted = client.post(f"/api/ledger/dinners/{dinner.id}/post")
        assert posted.status_code == 201
        movements = posted.json()
        assert [m["amount_cents"] for m in movements] == [20_000, 5_000]
        assert movements[0]["movement_date"] == "2026-06-01"

        assert client.get(f"/api/ledger/dinners/{dinner.id}/posting").json()["posted"] is True
        assert client.post(f"/api/ledger/dinners/{dinner.id}/post").status_code == 400

    def test_unknown_dinner(self, client):
        assert client.get("/api/ledger/dinners/999/posting").status_code == 404
        assert client.post("/api/ledger/dinners/999/post").status_code == 404


class TestRotationEndpoint:
    def test_rotation_preview(self, client, fund):
        fund.revenue(1_200_000)

        response = client.get("/api/ledger/rotation")

        assert response.status_code == 200
        data = response.json()
        assert data["block_cents"] == 500_000
        assert data["blocks_total"] == 2
        assert data["new_blocks"] == 2
        assert data["leftover_cents"] == 200_000
        assert [row["new_blocks"] for row in data["rows"]] == [1, 1, 0]
