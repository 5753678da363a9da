"""
HTTP API Tests

Runs the FastAPI app in-process with the stub provider and fixed-clock
calculator from conftest.
"""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from fxcalc import __version__
from fxcalc.api.dependencies import get_calculator, get_rate_provider
from fxcalc.errors import CalculationError
from fxcalc.main import app


class FailingCalculator:
    """Calculator stand-in whose pipeline always breaks."""

    async def calculate(self, *args, **kwargs):
        raise CalculationError(
            "decimal.InvalidOperation in division",
            code="ARITHMETIC_ERROR",
            details={"step": "effective_rate"},
        )


@pytest.fixture
def client(provider, calculator):
    app.dependency_overrides[get_rate_provider] = lambda: provider
    app.dependency_overrides[get_calculator] = lambda: calculator
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestCalculateEndpoint:

    def test_success(self, client):
        response = client.post(
            "/api/v1/rates/calculate",
            json={"from": "usd", "to": "eur", "amount": "1000", "fee_mode": "standard"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["from_currency"] == "USD"
        assert body["to_currency"] == "EUR"
        assert body["fee_mode"] == "standard"
        assert Decimal(body["gross_converted_amount"]) == Decimal("850")
        assert Decimal(body["fee_amount"]) == Decimal("10.00")
        assert Decimal(body["net_converted_amount"]) == Decimal("841.50")
        assert Decimal(body["total_cost"]) == Decimal("1010.00")
        assert body["calculation_version"] == "2.0"

    def test_numeric_amount_accepted(self, client):
        response = client.post(
            "/api/v1/rates/calculate",
            json={"from": "USD", "to": "EUR", "amount": 100},
        )

        assert response.status_code == 200
        assert Decimal(response.json()["net_converted_amount"]) == Decimal("82.46")

    def test_tiny_amount_is_not_a_server_error(self, client):
        response = client.post(
            "/api/v1/rates/calculate",
            json={"from": "USD", "to": "EUR", "amount": "0.0000000000000000000001"},
        )

        assert response.status_code == 200
        assert Decimal(response.json()["effective_rate"]) == Decimal("-2.54E22")

    def test_missing_amount(self, client):
        response = client.post("/api/v1/rates/calculate", json={"from": "USD", "to": "EUR"})

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "validation_error"
        assert body["field"] == "amount"
        assert body["code"] == "missing"
        assert body["success"] is False

    def test_amount_over_limit(self, client):
        response = client.post(
            "/api/v1/rates/calculate",
            json={"from": "USD", "to": "EUR", "amount": "2000000"},
        )

        assert response.status_code == 400
        assert response.json()["code"] == "exceeds_maximum"

    def test_unsupported_pair(self, client):
        response = client.post(
            "/api/v1/rates/calculate",
            json={"from": "USD", "to": "XXX", "amount": "100"},
        )

        assert response.status_code == 503
        body = response.json()
        assert body["error"] == "rate_unavailable"
        assert body["code"] == "UNSUPPORTED_PAIR"
        assert body["details"]["provider"] == "stub"
        assert body["details"]["to_currency"] == "XXX"

    def test_malformed_body(self, client):
        response = client.post(
            "/api/v1/rates/calculate",
            json={"from": "USD", "to": "EUR", "amount": "100", "fee_mode": 5},
        )

        assert response.status_code == 400
        assert response.json()["code"] == "malformed_request"

    def test_calculation_error_hides_details(self, client):
        app.dependency_overrides[get_calculator] = lambda: FailingCalculator()

        response = client.post(
            "/api/v1/rates/calculate",
            json={"from": "USD", "to": "EUR", "amount": "100"},
        )

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "calculation_error"
        assert body["message"] == "Calculation failed"
        assert body["details"] is None


class TestBatchEndpoint:

    def test_partial_failure(self, client):
        response = client.post(
            "/api/v1/rates/calculate/batch",
            json={"amount": "1000", "currency_pairs": {"USD": "EUR", "CHF": "JPY"}},
        )

        assert response.status_code == 200
        results = response.json()["batch_results"]
        assert Decimal(results["USD_EUR"]["net_converted_amount"]) == Decimal("841.50")
        assert results["CHF_JPY"]["success"] is False
        assert results["CHF_JPY"]["error"] == "rate_unavailable"

    def test_empty_pairs(self, client):
        response = client.post(
            "/api/v1/rates/calculate/batch",
            json={"amount": "1000", "currency_pairs": {}},
        )

        assert response.status_code == 400
        assert response.json()["field"] == "currency_pairs"


class TestReverseEndpoint:

    def test_reverse(self, client):
        response = client.post(
            "/api/v1/rates/calculate/reverse",
            json={"from": "USD", "to": "EUR", "target_amount": "8500"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["from"] == "USD"
        assert body["to"] == "EUR"
        assert Decimal(body["required_amount"]) == Decimal("10101.01")
        assert Decimal(body["net_discrepancy"]) == Decimal("43.36")
        assert body["fee_clamped"] is True
        assert Decimal(body["verification"]["net_converted_amount"]) == Decimal("8543.36")

    def test_non_positive_target(self, client):
        response = client.post(
            "/api/v1/rates/calculate/reverse",
            json={"from": "USD", "to": "EUR", "target_amount": "-5"},
        )

        assert response.status_code == 400
        assert response.json()["field"] == "target_amount"


class TestMonitoringEndpoint:

    def test_monitoring(self, client, provider):
        response = client.post(
            "/api/v1/rates/calculate/monitoring",
            json={"from": "USD", "to": "EUR", "amount": "1000"},
        )

        assert response.status_code == 200
        body = response.json()
        assert Decimal(body["rate_spread"]["spread_percentage"]) == Decimal("0.1")
        assert Decimal(body["optimistic_calculation"]["net_converted_amount"]) == Decimal("842.34")
        assert Decimal(body["pessimistic_calculation"]["net_converted_amount"]) == Decimal("840.66")
        assert provider.calls == [("USD", "EUR")]


class TestInfoEndpoints:

    def test_get_rate(self, client):
        response = client.get("/api/v1/rates/usd/eur")

        assert response.status_code == 200
        body = response.json()
        assert body["from"] == "USD"
        assert body["to"] == "EUR"
        assert Decimal(body["rate"]) == Decimal("0.85")
        assert body["source"] == "stub"

    def test_get_rate_unknown(self, client):
        response = client.get("/api/v1/rates/USD/XXX")

        assert response.status_code == 503

    def test_currencies(self, client):
        response = client.get("/api/v1/currencies")

        assert response.status_code == 200
        codes = [c["code"] for c in response.json()["currencies"]]
        assert codes == ["EUR", "GBP", "JPY", "USD"]

    def test_health(self, client):
        response = client.get("/api/v1/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "version": __version__}

    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["api"]["calculate"] == "/api/v1/rates/calculate"
