"""API tests for health, actor identity, error mapping, dashboard and reports."""

from unittest.mock import AsyncMock

import structlog
from httpx import ASGITransport, AsyncClient

from stockroom.api.dependencies import get_apply_movement_use_case
from stockroom.api.main import app
from stockroom.application.use_cases import ApplyMovementUseCase
from stockroom.config.logging import flatten_enums
from stockroom.core.entities.inventory import MovementDirection
from stockroom.core.exceptions import DatabaseError


class TestHealthAPI:
    async def test_health_needs_no_actor(self, anonymous_client: AsyncClient):
        response = await anonymous_client.get("/api/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert "X-Request-ID" in response.headers


class TestRequestLogging:
    async def test_well_formed_request_id_is_echoed(self, client: AsyncClient):
        response = await client.get("/api/health", headers={"X-Request-ID": "till-7.req_42"})
        assert response.headers["X-Request-ID"] == "till-7.req_42"
        assert response.headers["X-Response-Time"].endswith("ms")

    async def test_malformed_request_id_is_replaced(self, client: AsyncClient):
        response = await client.get("/api/health", headers={"X-Request-ID": "bad id/with spaces"})
        request_id = response.headers["X-Request-ID"]
        assert request_id != "bad id/with spaces"
        assert len(request_id) == 8

    async def test_context_is_cleared_after_request(self, client: AsyncClient):
        await client.get("/api/health", headers={"X-Request-ID": "abc123"})
        assert structlog.contextvars.get_contextvars() == {}

    def test_enum_values_are_logged_by_value(self):
        event = flatten_enums(None, "info", {"direction": MovementDirection.OUT, "qty": 4})
        assert event == {"direction": "OUT", "qty": 4}


class TestActorIdentity:
    async def test_missing_actor_is_401(self, anonymous_client: AsyncClient, product):
        response = await anonymous_client.post(
            "/api/stock-transactions",
            json={"product_id": product.id, "direction": "OUT", "quantity": 1, "reason": "sale"},
        )
        assert response.status_code == 401
        assert response.json()["error_code"] == "UNAUTHORIZED"

    async def test_reads_need_actor_too(self, anonymous_client: AsyncClient):
        assert (await anonymous_client.get("/api/products")).status_code == 401
        assert (await anonymous_client.get("/api/dashboard/stats")).status_code == 401


class TestDatabaseUnavailable:
    async def test_database_error_is_503_with_retry_after(self):
        use_case = AsyncMock(spec=ApplyMovementUseCase)
        use_case.execute.side_effect = DatabaseError("query", "database is locked")
        app.dependency_overrides[get_apply_movement_use_case] = lambda: use_case
        try:
            transport = ASGITransport(app=app)
            async with AsyncClient(transport=transport, base_url="http://test") as ac:
                response = await ac.post(
                    "/api/stock-transactions",
                    json={"product_id": 1, "direction": "IN", "quantity": 1, "reason": "count"},
                    headers={"X-Actor-Id": "clerk-1"},
                )
        finally:
            app.dependency_overrides.pop(get_apply_movement_use_case, None)

        assert response.status_code == 503
        assert response.headers["Retry-After"] == "1"
        assert response.json()["error_code"] == "DATABASE_ERROR"


class TestDashboardAPI:
    async def test_stats(self, client: AsyncClient, product, pending_order):
        await client.post(
            "/api/stock-transactions",
            json={"product_id": product.id, "direction": "OUT", "quantity": 8, "reason": "sale"},
        )
        response = await client.get("/api/dashboard/stats")
        body = response.json()

        assert response.status_code == 200
        assert body["stats"]["total_products"] == 1
        assert body["stats"]["low_stock_products"] == 1
        assert body["stats"]["pending_orders"] == 1
        assert body["stats"]["monthly_movements"] == 2
        assert body["stock_alerts"][0]["sku"] == "WS-440"
        assert body["recent_movements"][0]["quantity"] == 8


class TestReportsAPI:
    async def test_statistics(self, client: AsyncClient, product, pending_order):
        response = await client.get("/api/reports/statistics")
        body = response.json()

        assert response.status_code == 200
        assert body["category_stats"][0]["total_stock"] == 10
        assert body["movement_stats"]["total_in"] == 10
        assert body["supplier_stats"][0]["order_count"] == 1
        assert len(body["monthly_stats"]) == 6

    async def test_inverted_range_is_400(self, client: AsyncClient):
        response = await client.get(
            "/api/reports/statistics",
            params={"start_date": "2026-10-01T00:00:00Z", "end_date": "2026-09-01T00:00:00Z"},
        )
        assert response.status_code == 400

    async def test_products_export(self, client: AsyncClient, product):
        response = await client.get("/api/reports/export/products")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert response.headers["content-disposition"].endswith('-products.csv"')
        lines = response.content.decode("utf-8-sig").splitlines()
        assert lines[0].startswith("name,sku,category")
        assert lines[1].startswith("Wood screw 4x40,WS-440,Fasteners")

    async def test_transactions_export(self, client: AsyncClient, product):
        response = await client.get("/api/reports/export/transactions")
        lines = response.content.decode("utf-8-sig").splitlines()
        assert len(lines) == 2
        assert ",IN,Wood screw 4x40,WS-440,10,opening stock,clerk-1" in lines[1]

    async def test_unknown_export_is_422(self, client: AsyncClient):
        response = await client.get("/api/reports/export/invoices")
        assert response.status_code == 422
