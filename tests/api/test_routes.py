from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from debtplan.api.app import app
from debtplan.config import settings


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def debts_payload():
    return [
        {
            "id": "visa",
            "name": "Visa",
            "remaining_balance": "4200",
            "minimum_payment": "120",
            "interest_rate": "22.99",
            "type": "credit_card",
        },
        {
            "id": "store",
            "name": "Store Card",
            "remaining_balance": "650",
            "minimum_payment": "35",
            "interest_rate": "26.99",
            "type": "credit_card",
        },
        {
            "id": "car",
            "name": "Car Loan",
            "remaining_balance": "9800",
            "minimum_payment": "310",
            "interest_rate": "6.5",
            "type": "auto_loan",
            "loan_type": "installment",
        },
    ]


class TestHealth:
    def test_health(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}


class TestStrategyRoute:
    def test_default_plan(self, client, debts_payload):
        resp = client.post("/api/v1/debts/strategy", json={"debts": debts_payload})
        assert resp.status_code == 200
        data = resp.json()
        assert data["has_debts"] is True
        assert data["method"] == settings.default_payoff_method
        assert data["payment_frequency"] == "monthly"
        assert data["is_complete"] is True
        assert len(data["payoff_order"]) == 3
        assert data["next_recommended_payment"]["debt_id"] == "store"

    def test_money_is_rounded_to_cents(self, client):
        debts = [{"id": "a", "name": "A", "remaining_balance": "1200", "minimum_payment": "100"}]
        resp = client.post("/api/v1/debts/strategy", json={"debts": debts})
        data = resp.json()
        assert data["total_months"] == 12
        assert Decimal(data["total_paid"]) == Decimal("1200.00")
        assert data["rolldown_payments"][0]["payment_amount"] == "100.00"

    def test_snowball_with_extra(self, client, debts_payload):
        resp = client.post(
            "/api/v1/debts/strategy",
            params={"method": "snowball", "extra_payment": "250", "payment_frequency": "biweekly"},
            json={"debts": debts_payload},
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["method"] == "snowball"
        assert data["payment_frequency"] == "biweekly"
        assert data["payoff_order"][0]["debt_id"] == "store"

    def test_lump_sums(self, client, debts_payload):
        plain = client.post("/api/v1/debts/strategy", json={"debts": debts_payload}).json()
        boosted = client.post(
            "/api/v1/debts/strategy",
            json={"debts": debts_payload, "lump_sum_payments": [{"month": 2, "amount": "3000"}]},
        ).json()
        assert boosted["total_months"] < plain["total_months"]

    def test_compare(self, client, debts_payload):
        resp = client.post(
            "/api/v1/debts/strategy",
            params={"compare": "true", "extra_payment": "100"},
            json={"debts": debts_payload},
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["snowball"]["method"] == "snowball"
        assert data["avalanche"]["method"] == "avalanche"
        assert Decimal(data["interest_saved"]) >= 0
        assert data["recommended_method"] in ("snowball", "avalanche")

    def test_no_debts(self, client):
        data = client.post("/api/v1/debts/strategy", json={"debts": []}).json()
        assert data["has_debts"] is False
        assert data["total_months"] == 0

    def test_compare_no_debts(self, client):
        data = client.post("/api/v1/debts/strategy", params={"compare": "true"}, json={"debts": []}).json()
        assert data["has_debts"] is False
        assert data["snowball"] is None

    def test_invalid_method(self, client, debts_payload):
        resp = client.post(
            "/api/v1/debts/strategy", params={"method": "blizzard"}, json={"debts": debts_payload}
        )
        assert resp.status_code == 400

    def test_invalid_frequency(self, client, debts_payload):
        resp = client.post(
            "/api/v1/debts/strategy", params={"payment_frequency": "daily"}, json={"debts": debts_payload}
        )
        assert resp.status_code == 400

    def test_invalid_loan_type(self, client, debts_payload):
        debts_payload[0]["loan_type"] = "balloon"
        resp = client.post("/api/v1/debts/strategy", json={"debts": debts_payload})
        assert resp.status_code == 400

    def test_negative_extra_rejected(self, client, debts_payload):
        resp = client.post(
            "/api/v1/debts/strategy", params={"extra_payment": "-50"}, json={"debts": debts_payload}
        )
        assert resp.status_code == 422

    def test_negative_balance_rejected(self, client, debts_payload):
        debts_payload[0]["remaining_balance"] = "-10"
        resp = client.post("/api/v1/debts/strategy", json={"debts": debts_payload})
        assert resp.status_code == 422


class TestScenariosRoute:
    def test_compare_scenarios(self, client, debts_payload):
        resp = client.post(
            "/api/v1/debts/scenarios",
            json={
                "debts": debts_payload,
                "scenarios": [
                    {"name": "Current Plan"},
                    {"name": "  Extra $300  ", "extra_monthly_payment": "300"},
                    {"name": "Bonus", "lump_sum_payments": [{"month": 3, "amount": "2500"}]},
                ],
            },
        )
        assert resp.status_code == 200
        data = resp.json()
        names = [s["name"] for s in data["scenarios"]]
        assert names == ["Current Plan", "Extra $300", "Bonus"]
        assert data["scenarios"][0]["months_saved_vs_baseline"] == 0
        assert data["scenarios"][1]["months_saved_vs_baseline"] > 0
        assert Decimal(data["scenarios"][2]["total_lump_sums"]) == Decimal("2500.00")
        assert data["recommendation"]["best_for_time"] == "Extra $300"

    def test_too_many_scenarios(self, client, debts_payload):
        scenarios = [{"name": f"Plan {i}"} for i in range(settings.max_scenarios + 1)]
        resp = client.post("/api/v1/debts/scenarios", json={"debts": debts_payload, "scenarios": scenarios})
        assert resp.status_code == 400

    def test_blank_name(self, client, debts_payload):
        resp = client.post(
            "/api/v1/debts/scenarios", json={"debts": debts_payload, "scenarios": [{"name": "   "}]}
        )
        assert resp.status_code == 422

    def test_invalid_scenario_method(self, client, debts_payload):
        resp = client.post(
            "/api/v1/debts/scenarios",
            json={"debts": debts_payload, "scenarios": [{"name": "A", "method": "random"}]},
        )
        assert resp.status_code == 422

    def test_lump_sum_month_must_be_positive(self, client, debts_payload):
        resp = client.post(
            "/api/v1/debts/scenarios",
            json={
                "debts": debts_payload,
                "scenarios": [{"name": "A", "lump_sum_payments": [{"month": 0, "amount": "100"}]}],
            },
        )
        assert resp.status_code == 422

    def test_empty_scenarios(self, client, debts_payload):
        resp = client.post("/api/v1/debts/scenarios", json={"debts": debts_payload, "scenarios": []})
        assert resp.status_code == 422

    def test_no_debts(self, client):
        resp = client.post("/api/v1/debts/scenarios", json={"debts": [], "scenarios": [{"name": "A"}]})
        assert resp.status_code == 200
        assert resp.json()["has_debts"] is False
