"""
API tests for portfolio and asset endpoints.

Tests cover:
- POST /portfolios and /assets
- GET list and detail endpoints
- Error mapping for duplicates and missing resources
"""


# =============================================================================
# PORTFOLIO TESTS
# =============================================================================


class TestCreatePortfolioAPI:
    """Tests for POST /portfolios endpoint."""

    def test_create_portfolio_success(self, client):
        """
        GIVEN a valid portfolio payload
        WHEN I POST /portfolios
        THEN 201 with the stored portfolio is returned
        """
        response = client.post("/portfolios", json={"name": "ISA", "base_currency": "gbp"})

        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "ISA"
        assert data["base_currency"] == "GBP"
        assert data["portfolio_id"]

    def test_base_currency_defaults_to_gbp(self, client):
        response = client.post("/portfolios", json={"name": "SIPP"})

        assert response.json()["base_currency"] == "GBP"

    def test_duplicate_name_rejected(self, client):
        """
        GIVEN an existing portfolio named ISA
        WHEN I create another ISA
        THEN 400 with a validation error is returned
        """
        client.post("/portfolios", json={"name": "ISA"})

        response = client.post("/portfolios", json={"name": "ISA"})

        assert response.status_code == 400
        assert response.json()["error"] == "VALIDATION_ERROR"

    def test_schema_errors_return_422(self, client):
        response = client.post("/portfolios", json={"name": "", "base_currency": "POUNDS"})

        assert response.status_code == 422


class TestGetPortfolioAPI:
    """Tests for GET /portfolios endpoints."""

    def test_list_portfolios(self, client):
        client.post("/portfolios", json={"name": "B"})
        client.post("/portfolios", json={"name": "A"})

        response = client.get("/portfolios")

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 2
        assert [p["name"] for p in data["portfolios"]] == ["A", "B"]

    def test_get_by_id(self, client):
        created = client.post("/portfolios", json={"name": "ISA"}).json()

        response = client.get(f"/portfolios/{created['portfolio_id']}")

        assert response.status_code == 200
        assert response.json()["name"] == "ISA"

    def test_missing_portfolio_returns_404(self, client):
        response = client.get("/portfolios/does-not-exist")

        assert response.status_code == 404
        assert response.json()["error"] == "NOT_FOUND"


# =============================================================================
# ASSET TESTS
# =============================================================================


class TestAssetsAPI:
    """Tests for /assets endpoints."""

    def test_register_asset(self, client):
        """
        GIVEN a lower-case ticker
        WHEN I POST /assets
        THEN the asset is stored upper-cased and is not a cash placeholder
        """
        response = client.post(
            "/assets",
            json={"ticker": "aapl", "currency": "usd", "display_name": "Apple Inc"},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["ticker"] == "AAPL"
        assert data["currency"] == "USD"
        assert data["is_cash_placeholder"] is False

    def test_cash_placeholder_flagged(self, client):
        response = client.post("/assets", json={"ticker": "CASH.EUR", "currency": "EUR"})

        assert response.json()["is_cash_placeholder"] is True

    def test_duplicate_ticker_rejected(self, client):
        client.post("/assets", json={"ticker": "VOD", "currency": "GBP"})

        response = client.post("/assets", json={"ticker": "vod", "currency": "GBP"})

        assert response.status_code == 400

    def test_list_assets(self, client):
        client.post("/assets", json={"ticker": "VOD", "currency": "GBP"})
        client.post("/assets", json={"ticker": "AAPL", "currency": "USD"})

        data = client.get("/assets").json()

        assert data["count"] == 2
        assert [a["ticker"] for a in data["assets"]] == ["AAPL", "VOD"]


class TestHealthAPI:
    """Tests for service endpoints."""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    def test_root(self, client):
        data = client.get("/").json()

        assert data["docs"] == "/docs"
        assert "version" in data
