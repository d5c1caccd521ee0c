import pytest
from fastapi.testclient import TestClient

from amortizer.main import app
from amortizer.schemas.amortization import AmortizationRequest

client = TestClient(app)

FIELDS = {
    "period_number",
    "period_date",
    "payment",
    "principal",
    "interest",
    "cumulative_interest",
    "remaining_balance",
}


def test_amortization_request_validation():
    req = AmortizationRequest(loan_amount=300000, terms_in_months=360, annual_interest_rate=5)
    assert req.loan_amount == 300000
    assert req.terms_in_months == 360
    assert req.annual_interest_rate == 5

    with pytest.raises(Exception):
        AmortizationRequest(loan_amount=-1000, terms_in_months=12, annual_interest_rate=5)
    with pytest.raises(Exception):
        AmortizationRequest(loan_amount=1000, terms_in_months=0, annual_interest_rate=5)
    with pytest.raises(Exception):
        AmortizationRequest(loan_amount=1000, terms_in_months=12, annual_interest_rate=-1)
    with pytest.raises(Exception):
        AmortizationRequest(loan_amount=float("inf"), terms_in_months=12, annual_interest_rate=5)


def test_amortization_endpoint():
    params = {"loan_amount": 300000, "terms_in_months": 360, "annual_interest_rate": 5.0}
    response = client.get("/", params=params)
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/json")

    data = response.json()
    assert isinstance(data, list)
    assert len(data) == 361
    assert set(data[0]) == FIELDS
    assert data[0]["period_number"] == 1
    assert data[0]["payment"] == 1610.46
    assert data[0]["principal"] == 360.46
    assert data[0]["interest"] == 1250.01
    assert data[0]["cumulative_interest"] == 1250.01
    assert data[0]["remaining_balance"] == 299639.53
    assert data[-1]["principal"] == 3.81
    assert data[-1]["interest"] == 0.02
    assert data[-1]["cumulative_interest"] == 279769.75
    assert data[-1]["remaining_balance"] == 0.0


def test_amortization_endpoint_zero_rate():
    response = client.get("/", params={"loan_amount": 12000, "terms_in_months": 12, "annual_interest_rate": 0})
    assert response.status_code == 200
    data = response.json()
    assert len(data) == 12
    assert all(row["payment"] == 1000.0 for row in data)


@pytest.mark.parametrize("params", [
    {"terms_in_months": 360, "annual_interest_rate": 5},
    {"loan_amount": 300000, "annual_interest_rate": 5},
    {"loan_amount": 300000, "terms_in_months": 360},
    {"loan_amount": -1000, "terms_in_months": 12, "annual_interest_rate": 5},
    {"loan_amount": 1000, "terms_in_months": 0, "annual_interest_rate": 5},
    {"loan_amount": 1000, "terms_in_months": 40000, "annual_interest_rate": 5},
    {"loan_amount": 1000, "terms_in_months": 12, "annual_interest_rate": -1},
    {"loan_amount": "mucho", "terms_in_months": 12, "annual_interest_rate": 5},
    {"loan_amount": 1000, "terms_in_months": 12.5, "annual_interest_rate": 5},
])
def test_amortization_endpoint_invalid_query(params):
    response = client.get("/", params=params)
    assert response.status_code == 422


def test_amortization_endpoint_non_amortizable_loan():
    params = {"loan_amount": 1000, "terms_in_months": 32767, "annual_interest_rate": 100}
    response = client.get("/", params=params)
    assert response.status_code == 400
    assert "no se puede amortizar" in response.json()["detail"]
