"""
Integration tests for the HTTP API.

Tests every endpoint through FastAPI's TestClient, including the 422 error
body produced for typed rebalancer errors.
"""

import pytest
from fastapi.testclient import TestClient

from rebalancer.api.main import app


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def portfolio_payload() -> dict:
    return {
        "lines": [
            {"fund": "A", "balance": 250, "target": 0.5},
            {"fund": "B", "balance": 100, "target": 0.2},
            {"fund": "C", "balance": 200, "target": 0.3},
        ]
    }


class TestServiceEndpoints:
    """Test root and health endpoints."""

    def test_root(self, client: TestClient) -> None:
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["status"] == "running"
        assert response.json()["version"] == "1.0.0"

    def test_health(self, client: TestClient) -> None:
        assert client.get("/health").json() == {"status": "healthy"}


class TestPortfolioEndpoints:
    """Test portfolio validation, metrics and CSV endpoints."""

    def test_should_validate_portfolio(self, client: TestClient, portfolio_payload: dict) -> None:
        response = client.post("/api/portfolio/validate", json=portfolio_payload)

        assert response.status_code == 200
        assert response.json() == {"valid": True, "error": None}

    def test_should_report_validation_error(self, client: TestClient) -> None:
        """Test invalid portfolios are a 200 answer with the typed error."""
        payload = {"lines": [{"fund": "A", "balance": 100, "target": 0.9}]}

        body = client.post("/api/portfolio/validate", json=payload).json()

        assert body["valid"] is False
        assert body["error"]["error"] == "TARGET_SUM_MISMATCH"
        assert body["error"]["details"]["actual_sum"] == pytest.approx(0.9)

    def test_should_report_empty_portfolio(self, client: TestClient) -> None:
        body = client.post("/api/portfolio/validate", json={"lines": []}).json()
        assert body["error"]["error"] == "EMPTY_PORTFOLIO"

    def test_should_reject_blank_fund(self, client: TestClient) -> None:
        """Test request-shape errors use FastAPI validation."""
        payload = {"lines": [{"fund": "  ", "balance": 100, "target": 1.0}]}
        assert client.post("/api/portfolio/validate", json=payload).status_code == 422

    def test_should_calculate_metrics(self, client: TestClient, portfolio_payload: dict) -> None:
        body = client.post("/api/portfolio/metrics", json=portfolio_payload).json()

        assert [line["status"] for line in body["lines"]] == [
            "underweight",
            "underweight",
            "overweight",
        ]
        assert body["lines"][2]["current_allocation_pct"] == pytest.approx(200 / 550 * 100)
        assert body["summary"]["total_balance"] == 550
        assert body["summary"]["overweight"] == ["C"]
        assert body["summary"]["largest_drift"]["fund"] == "C"
        assert body["target_total_pct"] == pytest.approx(100.0)
        assert body["target_total_valid"] is True

    def test_should_flag_target_total(self, client: TestClient) -> None:
        """Test the metrics footer reports targets that do not sum to 100%."""
        payload = {"lines": [{"fund": "A", "balance": 100, "target": 0.9}]}

        body = client.post("/api/portfolio/metrics", json=payload).json()

        assert body["target_total_pct"] == pytest.approx(90.0)
        assert body["target_total_valid"] is False

    def test_should_import_csv(self, client: TestClient) -> None:
        response = client.post(
            "/api/portfolio/import",
            json={"csv_text": "Fund,Balance,Target\nX,1000,0.6\nY,400,0.4"},
        )

        assert response.status_code == 200
        assert response.json() == {
            "lines": [
                {"fund": "X", "balance": 1000.0, "target": 0.6},
                {"fund": "Y", "balance": 400.0, "target": 0.4},
            ]
        }

    @pytest.mark.parametrize(
        "csv_text, code",
        [
            ("Fund,Balance,Target", "MALFORMED_CSV"),
            ("Fund,Balance\nX,1", "MISSING_COLUMNS"),
            ("Fund,Balance,Target\nX,abc,0.6", "INVALID_NUMERIC_VALUE"),
        ],
    )
    def test_should_reject_bad_csv(self, client: TestClient, csv_text: str, code: str) -> None:
        response = client.post("/api/portfolio/import", json={"csv_text": csv_text})

        assert response.status_code == 422
        assert response.json()["error"] == code

    @pytest.mark.parametrize("fund", ["", "F" * 250])
    def test_should_reject_unrepresentable_fund_names(self, client: TestClient, fund: str) -> None:
        """Test imported labels the payload cannot carry are a typed 422."""
        response = client.post(
            "/api/portfolio/import",
            json={"csv_text": f"Fund,Balance,Target\n{fund},100,1"},
        )

        assert response.status_code == 422
        body = response.json()
        assert body["error"] == "INVALID_ENTRY"
        assert body["details"]["field"] == "fund"

    def test_should_export_csv(self, client: TestClient, portfolio_payload: dict) -> None:
        response = client.post("/api/portfolio/export", json=portfolio_payload)

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert 'filename="portfolio.csv"' in response.headers["content-disposition"]
        assert response.text == "Fund,Balance,Target\nA,250,0.5\nB,100,0.2\nC,200,0.3"


class TestRebalanceEndpoints:
    """Test rebalance calculation and export endpoints."""

    def test_should_rebalance_with_selling(
        self, client: TestClient, portfolio_payload: dict
    ) -> None:
        response = client.post(
            "/api/rebalance",
            json={"portfolio": portfolio_payload, "contribution": 100, "allow_selling": True},
        )

        assert response.status_code == 200
        body = response.json()
        assert [line["dollars_to_add"] for line in body["lines"]] == pytest.approx([75, 30, -5])
        assert [line["action"] for line in body["lines"]] == ["Buy", "Buy", "Sell"]
        assert body["summary"]["sell_count"] == 1
        assert body["summary"]["net_contribution"] == pytest.approx(100)

    def test_should_accept_contribution_text(
        self, client: TestClient, portfolio_payload: dict
    ) -> None:
        response = client.post(
            "/api/rebalance", json={"portfolio": portfolio_payload, "contribution": "1000"}
        )

        assert response.status_code == 200
        assert response.json()["contribution"] == 1000.0

    def test_should_require_selling(self, client: TestClient, portfolio_payload: dict) -> None:
        response = client.post(
            "/api/rebalance", json={"portfolio": portfolio_payload, "contribution": 100}
        )

        assert response.status_code == 422
        body = response.json()
        assert body["error"] == "SELLING_REQUIRED"
        assert body["details"] == {"funds": ["C"]}
        assert "Allow negative contributions" in body["message"]

    @pytest.mark.parametrize("contribution", [0, -10, "abc"])
    def test_should_reject_invalid_contribution(
        self, client: TestClient, portfolio_payload: dict, contribution
    ) -> None:
        response = client.post(
            "/api/rebalance",
            json={"portfolio": portfolio_payload, "contribution": contribution},
        )

        assert response.status_code == 422
        assert response.json()["error"] == "INVALID_CONTRIBUTION"

    def test_should_report_negative_balance(self, client: TestClient) -> None:
        payload = {"lines": [{"fund": "A", "balance": -1, "target": 1.0}]}

        response = client.post("/api/rebalance", json={"portfolio": payload, "contribution": 10})

        assert response.status_code == 422
        assert response.json()["details"] == {"fund": "A", "balance": -1.0}

    def test_should_export_results_with_action(
        self, client: TestClient, portfolio_payload: dict
    ) -> None:
        response = client.post(
            "/api/rebalance/export",
            json={"portfolio": portfolio_payload, "contribution": 100, "allow_selling": True},
        )

        assert response.status_code == 200
        assert "rebalance_results_" in response.headers["content-disposition"]
        assert response.text.split("\n")[3] == "C,5.00,Sell,-5.00,30.00,-35.00"

    def test_should_export_results_without_action(
        self, client: TestClient, portfolio_payload: dict
    ) -> None:
        response = client.post(
            "/api/rebalance/export",
            params={"include_action": "false"},
            json={"portfolio": portfolio_payload, "contribution": 100, "allow_selling": True},
        )

        assert response.text.split("\n")[3] == "C,-5.00,-5.00,30.00,-35.00"
