"""
Unit tests for API endpoints.
Tests the FastAPI route handlers, response formats and error mapping.
"""

from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from src.exceptions import (
    DataError,
    FetchError,
    InsufficientDataError,
    InvalidParameterError,
    NoCurrentDataError,
)
from src.models.price import HourlyPrice


class TestHealthEndpoint:
    """Tests for the health check endpoint."""

    def test_health_check_empty_cache(self, test_client, price_service):
        with patch("src.api.routes.price_service", price_service):
            response = test_client.get("/api/v1/health")

        assert response.status_code == 200
        data = response.json()

        assert data["status"] == "healthy"
        assert "timestamp" in data
        assert data["details"]["service"] == "power-price-check"
        assert data["details"]["data_status"] == "empty"

    def test_health_check_fresh_cache(self, test_client, price_service, hourly_series, fake_clock):
        price_service.cache.put(hourly_series([10.0] * 24), fake_clock(), source="stub")

        with patch("src.api.routes.price_service", price_service):
            response = test_client.get("/api/v1/health")

        details = response.json()["details"]
        assert details["data_status"] == "fresh"
        assert details["cache"]["source"] == "stub"

    @patch("src.api.routes.price_service")
    def test_health_check_failure(self, mock_price_service, test_client):
        mock_price_service.cache_status = MagicMock(side_effect=RuntimeError("boom"))

        response = test_client.get("/api/v1/health")

        assert response.status_code == 200
        assert response.json()["status"] == "unhealthy"


class TestPriceEndpoints:
    """Tests for the current/past/future price endpoints."""

    def test_current_price(self, test_client, price_service):
        with patch("src.api.routes.price_service", price_service):
            response = test_client.get("/api/v1/prices/current")

        assert response.status_code == 200
        data = response.json()
        assert Decimal(data["price"]) == Decimal("10.00")
        assert data["hour_start"].startswith("2026-01-02T00:00:00")
        assert data["unit"] == "€cents/kWh"

    @patch("src.api.routes.price_service")
    def test_current_price_missing(self, mock_price_service, test_client):
        mock_price_service.get_current_price = AsyncMock(side_effect=NoCurrentDataError("No price for current hour"))

        response = test_client.get("/api/v1/prices/current")

        assert response.status_code == 404
        assert "No price for current hour" in response.json()["detail"]

    def test_future_prices(self, test_client, price_service):
        with patch("src.api.routes.price_service", price_service):
            response = test_client.get("/api/v1/prices/future?hours=5")

        assert response.status_code == 200
        data = response.json()
        assert len(data) == 5
        assert data[0]["hour_start"].startswith("2026-01-02T01:00:00")

    @patch("src.api.routes.price_service")
    def test_past_prices_passes_hours(self, mock_price_service, test_client):
        mock_price_service.get_past_prices = AsyncMock(return_value=[
            HourlyPrice(hour_start=datetime(2026, 1, 1, 23, 0, tzinfo=timezone.utc), price=Decimal("9.10"))
        ])

        response = test_client.get("/api/v1/prices/past?hours=12")

        assert response.status_code == 200
        assert len(response.json()) == 1
        mock_price_service.get_past_prices.assert_called_once_with(12)

    def test_price_hours_out_of_range(self, test_client):
        assert test_client.get("/api/v1/prices/past?hours=0").status_code == 422
        assert test_client.get("/api/v1/prices/future?hours=49").status_code == 422

    def test_price_summary(self, test_client, price_service):
        with patch("src.api.routes.price_service", price_service):
            response = test_client.get("/api/v1/prices/summary?hours=6")

        assert response.status_code == 200
        data = response.json()
        assert data["future"]["count"] == 6
        assert data["past"]["count"] == 0

    @pytest.mark.parametrize("error, status", [
        (FetchError("Failed to connect to ENTSO-E API"), 502),
        (DataError("Invalid XML response"), 502),
    ])
    def test_upstream_failures(self, test_client, error, status):
        with patch("src.api.routes.price_service") as mock_price_service:
            mock_price_service.get_future_prices = AsyncMock(side_effect=error)
            response = test_client.get("/api/v1/prices/future")

        assert response.status_code == status
        assert response.json()["detail"] == "Upstream price data unavailable"


class TestRecommendationEndpoint:
    """Tests for the best-time recommendation endpoint."""

    def test_recommendation_success(self, test_client, price_service):
        with patch("src.api.routes.price_service", price_service):
            response = test_client.get("/api/v1/recommendation?duration=2&look_ahead_hours=12")

        assert response.status_code == 200
        data = response.json()
        assert data["window_start"].startswith("2026-01-02T02:00:00")
        assert data["window_end"].startswith("2026-01-02T04:00:00")
        assert data["duration_hours"] == 2
        assert Decimal(data["savings"]) == Decimal("3.00")
        assert len(data["prices"]) == 2
        assert "Potential savings" in data["message"]

    @patch("src.api.routes.price_service")
    def test_recommendation_defaults(self, mock_price_service, test_client):
        mock_price_service.recommend_best_time = AsyncMock(side_effect=InsufficientDataError("Not enough data"))

        response = test_client.get("/api/v1/recommendation")

        assert response.status_code == 404
        mock_price_service.recommend_best_time.assert_called_once_with(1, 24)

    @patch("src.api.routes.price_service")
    def test_recommendation_invalid_parameter(self, mock_price_service, test_client):
        mock_price_service.recommend_best_time = AsyncMock(side_effect=InvalidParameterError("Duration must be at least 1 hour"))

        response = test_client.get("/api/v1/recommendation?duration=3")

        assert response.status_code == 400
        assert "Duration must be at least 1 hour" in response.json()["detail"]

    @patch("src.api.routes.price_service")
    def test_recommendation_no_current_price(self, mock_price_service, test_client):
        mock_price_service.recommend_best_time = AsyncMock(side_effect=NoCurrentDataError("No price for current hour"))

        response = test_client.get("/api/v1/recommendation?duration=1&look_ahead_hours=6")

        assert response.status_code == 404

    @patch("src.api.routes.price_service")
    def test_recommendation_unexpected_error(self, mock_price_service, test_client):
        mock_price_service.recommend_best_time = AsyncMock(side_effect=RuntimeError("boom"))

        response = test_client.get("/api/v1/recommendation")

        assert response.status_code == 500
        assert response.json()["detail"] == "Internal server error"

    def test_recommendation_query_validation(self, test_client):
        assert test_client.get("/api/v1/recommendation?duration=0").status_code == 422
        assert test_client.get("/api/v1/recommendation?look_ahead_hours=169").status_code == 422
        assert test_client.get("/api/v1/recommendation?duration=abc").status_code == 422
