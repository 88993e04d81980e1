"""Integration tests for API endpoints"""

import json
import pytest
from fastapi.testclient import TestClient
from creditgo_gateway.api.dependencies import get_message_reader
from creditgo_gateway.infrastructure.clients.message_store import UNAVAILABLE_MESSAGE, MessageStoreReader


@pytest.fixture
def salaried_request():
    """Verified salaried user analyzing the demo inbox"""
    return {
        "user_id": "user_ada",
        "monthly_income": 300000,
        "employment_type": "salaried",
        "is_identity_verified": True,
        "is_employment_verified": True,
        "use_demo_sms": True,
    }


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "creditgo_profile_total" in response.text


def test_request_id_is_propagated(client: TestClient):
    response = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"

    generated = client.get("/health")
    assert generated.headers["X-Request-ID"]


def test_parse_endpoint(client: TestClient):
    """Test POST /v1/transactions/parse with one salary alert and one chat message"""
    response = client.post(
        "/v1/transactions/parse",
        json={
            "messages": [
                {
                    "body": "Credit Alert! NGN300,000.00 credited. Ref: SALARY/JAN/2026",
                    "date": "2026-01-05T09:30:00+01:00",
                },
                {"body": "Happy new year!", "date": "2026-01-01T00:00:00+01:00"},
            ]
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert len(data["transactions"]) == 1
    txn = data["transactions"][0]
    assert txn["type"] == "credit"
    assert txn["amount"] == 300000
    assert txn["source"] == "Salary"
    assert txn["description"] == "SALARY/JAN/2026"
    assert data["analysis"]["total_credits"] == 300000
    assert data["analysis"]["income_consistency"] == 0.6


def test_parse_endpoint_with_bank_filter(client: TestClient):
    response = client.post(
        "/v1/transactions/parse",
        json={
            "filter_bank_alerts": True,
            "messages": [
                {"body": "₦12,500 credited. Desc: gig via PayPal", "date": "2026-01-05T09:30:00Z", "address": "Kuda"},
                {"body": "Call me at 5", "date": "2026-01-05T10:30:00Z", "address": "Mum"},
            ],
        },
    )

    assert response.status_code == 200
    transactions = response.json()["transactions"]
    assert len(transactions) == 1
    assert transactions[0]["source"] == "PayPal"


def test_parse_endpoint_empty(client: TestClient):
    response = client.post("/v1/transactions/parse", json={"messages": []})

    assert response.status_code == 200
    data = response.json()
    assert data["transactions"] == []
    assert data["analysis"]["income_consistency"] == 0.0


def test_parse_endpoint_rejects_bad_date(client: TestClient):
    response = client.post(
        "/v1/transactions/parse",
        json={"messages": [{"body": "Credit NGN5,000", "date": "not a date"}]},
    )
    assert response.status_code == 422


def test_demo_transactions(client: TestClient):
    """Test GET /v1/transactions/demo"""
    response = client.get("/v1/transactions/demo")

    assert response.status_code == 200
    data = response.json()
    assert len(data["transactions"]) == 11
    assert data["analysis"]["total_credits"] == 1145000
    assert data["analysis"]["total_debits"] == 140000
    assert data["analysis"]["detected_sources"] == ["Fiverr", "Upwork", "Salary"]


def test_import_endpoint(client: TestClient, tmp_path):
    """Test POST /v1/transactions/import reads the configured export"""
    export = tmp_path / "inbox.json"
    export.write_text(
        json.dumps(
            [
                {"_id": "9", "body": "Credit: NGN60,000.00 from UPWORK", "date": 1_767_603_000_000, "address": "Kuda"},
                {"_id": "10", "body": "Lunch?", "date": 1_767_603_060_000, "address": "Bola"},
            ]
        ),
        encoding="utf-8",
    )
    client.app.dependency_overrides[get_message_reader] = lambda: MessageStoreReader(export)

    response = client.post("/v1/transactions/import", json={"max_count": 50})

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert [t["id"] for t in data["transactions"]] == ["sms_9_1767603000"]
    assert data["analysis"]["detected_sources"] == ["Upwork"]


def test_import_endpoint_unavailable(client: TestClient, tmp_path):
    """Test an unavailable store is a 200 with success=false"""
    client.app.dependency_overrides[get_message_reader] = lambda: MessageStoreReader(tmp_path / "nope.json")

    response = client.post("/v1/transactions/import", json={})

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is False
    assert data["transactions"] == []
    assert data["error"] == UNAVAILABLE_MESSAGE


def test_import_endpoint_validates_max_count(client: TestClient):
    response = client.post("/v1/transactions/import", json={"max_count": 0})
    assert response.status_code == 422


def test_create_profile(client: TestClient, salaried_request):
    """Test POST /v1/profile with demo SMS evidence"""
    response = client.post("/v1/profile", json=salaried_request)

    assert response.status_code == 200
    data = response.json()
    assert data["user_id"] == "user_ada"
    assert data["total_income"] == 300000
    assert data["estimated_expenses"] == 180000
    assert data["disposable_income"] == 120000
    assert data["safe_monthly_repayment"] == 66000
    assert data["max_monthly_repayment"] == 66000
    assert data["repayment_ratio"] == 0.22
    assert data["credit_score"] == 100
    assert data["tier"]["tier"] == "platinum"
    assert data["risk_level"] == "low"
    assert len(data["badges"]) == 5
    assert data["safe_monthly_repayment_display"] == "₦66,000"
    assert data["max_monthly_repayment_display"] == "₦66,000"


def test_create_profile_without_evidence(client: TestClient):
    response = client.post("/v1/profile", json={"user_id": "user_new", "monthly_income": "300,000"})

    assert response.status_code == 200
    data = response.json()
    assert data["safe_monthly_repayment"] == 45000
    assert data["max_monthly_repayment"] == 60000
    assert data["credit_score"] == 35
    assert data["tier"]["tier"] == "bronze"
    assert data["risk_level"] == "high"
    assert data["badges"] == []


def test_create_profile_with_expense_breakdown(client: TestClient):
    response = client.post(
        "/v1/profile",
        json={
            "user_id": "user_budget",
            "monthly_income": 300000,
            "expense_breakdown": {"rent": 50000, "food": 30000, "transport": 20000},
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["estimated_expenses"] == 100000
    assert data["disposable_income"] == 200000
    assert data["max_monthly_repayment"] == 75000


def test_create_profile_validation(client: TestClient):
    """Test malformed profile requests are rejected"""
    assert client.post("/v1/profile", json={"monthly_income": 300000}).status_code == 422
    assert client.post("/v1/profile", json={"user_id": "u", "monthly_income": 1, "employment_type": "pilot"}).status_code == 422
    assert client.post("/v1/profile", json={"user_id": "u", "monthly_income": 1, "monthly_expenses": -1}).status_code == 422
    assert client.post("/v1/profile", json={"user_id": "u", "monthly_income": -1}).status_code == 422


def test_create_profile_rejects_oversized_amounts(client: TestClient):
    """Test amounts beyond the naira bound are a 422, not a server error"""
    too_big = "9" * 400

    assert client.post("/v1/profile", json={"user_id": "u", "monthly_income": too_big}).status_code == 422
    assert client.post("/v1/profile", json={"user_id": "u", "monthly_income": 10**12 + 1}).status_code == 422
    assert client.post("/v1/profile", json={"user_id": "u", "monthly_income": 1, "monthly_expenses": 10**12 + 1}).status_code == 422
    assert client.post(
        "/v1/profile",
        json={"user_id": "u", "monthly_income": 1, "expense_breakdown": {"rent": 10**12 + 1}},
    ).status_code == 422


def test_create_profile_with_unrecognized_messages(client: TestClient):
    """Test messages with no bank alerts are scored on stated income alone"""
    for messages in ([], [{"body": "hello there", "date": "2026-01-05T08:50:00Z"}]):
        response = client.post(
            "/v1/profile",
            json={"user_id": "user_chat", "monthly_income": 300000, "messages": messages},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["total_income"] == 300000
        assert data["safe_monthly_repayment"] == 45000
        assert data["max_monthly_repayment"] == 60000


def test_profile_lifecycle(client: TestClient, salaried_request):
    """Test create, fetch, reset and fetch again"""
    created = client.post("/v1/profile", json=salaried_request).json()

    fetched = client.get("/v1/profile/user_ada")
    assert fetched.status_code == 200
    assert fetched.json()["safe_monthly_repayment"] == created["safe_monthly_repayment"]
    assert fetched.json()["badges"] == created["badges"]

    assert client.delete("/v1/profile/user_ada").status_code == 204
    assert client.get("/v1/profile/user_ada").status_code == 404
    assert client.delete("/v1/profile/user_ada").status_code == 404


def test_profile_is_replaced_on_recompute(client: TestClient, salaried_request):
    client.post("/v1/profile", json=salaried_request)
    client.post("/v1/profile", json={**salaried_request, "use_demo_sms": False, "monthly_income": 100000})

    data = client.get("/v1/profile/user_ada").json()
    assert data["total_income"] == 100000


def test_get_unknown_profile(client: TestClient):
    response = client.get("/v1/profile/nobody")
    assert response.status_code == 404
    assert response.json()["detail"] == "Profile not found"


def test_validate_nin(client: TestClient):
    response = client.post("/v1/validate/nin", json={"nin": "12345678901"})
    assert response.json() == {"is_valid": True, "formatted": "123-4567-8901"}

    response = client.post("/v1/validate/nin", json={"nin": "1234"})
    assert response.json() == {"is_valid": False, "formatted": "123-4"}


def test_validate_email(client: TestClient):
    valid = client.post("/v1/validate/email", json={"email": "ada@gmail.com"}).json()
    assert valid == {"is_valid": True, "error": None, "is_free_provider": True}

    invalid = client.post("/v1/validate/email", json={"email": "ada.gmail.com"}).json()
    assert invalid["is_valid"] is False
    assert invalid["error"] == 'Please include an "@" in the email address'
    assert invalid["is_free_provider"] is False


def test_validate_work_email(client: TestClient):
    assert client.post("/v1/validate/work-email", json={"email": "ada@mtn.ng"}).json() == {
        "is_valid": True,
        "company": "Mtn",
    }
    assert client.post("/v1/validate/work-email", json={"email": "ada@gmail.com"}).json()["is_valid"] is False


def test_validate_freelance_link(client: TestClient):
    response = client.post("/v1/validate/freelance-link", json={"url": "upwork.com/freelancers/ada"})
    assert response.json() == {"is_valid": True, "platform": "Upwork"}


def test_credit_tier_endpoint(client: TestClient):
    response = client.get("/v1/credit-tier/90")

    assert response.status_code == 200
    assert response.json()["tier"] == "platinum"
    assert client.get("/v1/credit-tier/70").json()["name"] == "Gold"
    assert client.get("/v1/credit-tier/101").status_code == 422


def test_credit_limit_endpoint(client: TestClient):
    """Test POST /v1/credit-limit with demo SMS evidence"""
    response = client.post(
        "/v1/credit-limit",
        json={
            "monthly_income": 300000,
            "is_identity_verified": True,
            "is_employment_verified": True,
            "use_demo_sms": True,
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["safe_monthly_repayment"] == 66000
    assert data["max_monthly_repayment"] == 84000
    assert data["credit_score"] == 100
    assert data["risk_level"] == "low"
    assert data["breakdown"]["expenses"] == 180000
    assert data["breakdown"]["safe_ratio"] == 0.22


def test_credit_limit_unverified(client: TestClient):
    response = client.post("/v1/credit-limit", json={"monthly_income": "100,000"})

    assert response.status_code == 200
    data = response.json()
    assert data["safe_monthly_repayment"] == 15000
    assert data["max_monthly_repayment"] == 20000
    assert data["credit_score"] == 30
    assert data["risk_level"] == "high"


def test_credit_limit_is_not_stored(client: TestClient):
    client.post("/v1/credit-limit", json={"monthly_income": 300000})

    assert client.get("/v1/profile/user_ada").status_code == 404


def test_credit_limit_validation(client: TestClient):
    assert client.post("/v1/credit-limit", json={}).status_code == 422
    assert client.post("/v1/credit-limit", json={"monthly_income": "9" * 400}).status_code == 422
    assert client.post("/v1/credit-limit", json={"monthly_income": -1}).status_code == 422
