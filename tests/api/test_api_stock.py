"""API tests for stock transactions, stock levels and alerts."""

from httpx import AsyncClient


async def _post_movement(client: AsyncClient, product_id: int, direction: str, quantity: int, **kwargs):
    return await client.post(
        "/api/stock-transactions",
        json={"product_id": product_id, "direction": direction, "quantity": quantity, "reason": "sale"},
        **kwargs,
    )


class TestStockTransactionsAPI:
    async def test_out_movement(self, client: AsyncClient, product):
        response = await _post_movement(client, product.id, "OUT", 4)

        assert response.status_code == 201
        body = response.json()
        assert body["product"]["current_stock"] == 6
        assert body["movement"]["direction"] == "OUT"
        assert body["movement"]["actor_id"] == "clerk-1"
        assert body["replayed"] is False

    async def test_insufficient_stock_is_409(self, client: AsyncClient, product):
        response = await _post_movement(client, product.id, "OUT", 11)

        assert response.status_code == 409
        body = response.json()
        assert body["error_code"] == "INSUFFICIENT_STOCK"
        assert body["details"]["available"] == 10
        assert body["hint"]

    async def test_zero_quantity_is_400(self, client: AsyncClient, product):
        response = await _post_movement(client, product.id, "IN", 0)
        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    async def test_bad_direction_is_400(self, client: AsyncClient, product):
        response = await _post_movement(client, product.id, "UP", 1)
        assert response.status_code == 400
        assert response.json()["details"]["field"] == "direction"

    async def test_unknown_product_is_404(self, client: AsyncClient, product):
        response = await _post_movement(client, 9999, "IN", 1)
        assert response.status_code == 404
        assert response.json()["error_code"] == "PRODUCT_NOT_FOUND"

    async def test_malformed_body_is_422(self, client: AsyncClient, product):
        response = await client.post("/api/stock-transactions", json={"product_id": product.id})
        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    async def test_quantity_above_maximum_is_400(self, client: AsyncClient, product):
        response = await _post_movement(client, product.id, "IN", 2**31)
        assert response.status_code == 400
        assert response.json()["details"]["field"] == "quantity"

        stock = await client.get(f"/api/products/{product.id}")
        assert stock.json()["current_stock"] == 10

    async def test_quantity_beyond_integer_range_is_422(self, client: AsyncClient, product):
        response = await _post_movement(client, product.id, "IN", 2**63)
        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    async def test_product_id_beyond_integer_range_is_422(self, client: AsyncClient, product):
        response = await _post_movement(client, 2**63, "IN", 1)
        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    async def test_idempotent_replay(self, client: AsyncClient, product):
        headers = {"Idempotency-Key": "till-7-0001"}
        first = await _post_movement(client, product.id, "OUT", 2, headers=headers)
        second = await _post_movement(client, product.id, "OUT", 2, headers=headers)

        assert first.status_code == 201
        assert second.status_code == 200
        assert second.json()["replayed"] is True
        assert second.json()["movement"]["id"] == first.json()["movement"]["id"]
        assert second.json()["product"]["current_stock"] == 8

    async def test_idempotency_key_reuse_is_409(self, client: AsyncClient, product):
        headers = {"Idempotency-Key": "till-7-0002"}
        await _post_movement(client, product.id, "OUT", 2, headers=headers)
        response = await _post_movement(client, product.id, "OUT", 3, headers=headers)
        assert response.status_code == 409
        assert response.json()["error_code"] == "IDEMPOTENCY_KEY_REUSED"

    async def test_list_is_paged_newest_first(self, client: AsyncClient, product):
        await _post_movement(client, product.id, "OUT", 1)
        await _post_movement(client, product.id, "OUT", 2)

        response = await client.get("/api/stock-transactions", params={"limit": 2})
        body = response.json()
        assert response.status_code == 200
        assert body["total"] == 3
        assert body["total_pages"] == 2
        assert [m["quantity"] for m in body["items"]] == [2, 1]

        response = await client.get(
            "/api/stock-transactions", params={"direction": "in", "product_id": product.id}
        )
        assert [m["quantity"] for m in response.json()["items"]] == [10]

    async def test_detail(self, client: AsyncClient, product):
        posted = await _post_movement(client, product.id, "OUT", 3)
        movement_id = posted.json()["movement"]["id"]

        response = await client.get(f"/api/stock-transactions/{movement_id}")

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == movement_id
        assert body["direction"] == "OUT"
        assert body["quantity"] == 3
        assert body["product_sku"] == "WS-440"

    async def test_detail_missing_is_404(self, client: AsyncClient):
        response = await client.get("/api/stock-transactions/4242")
        assert response.status_code == 404
        assert response.json()["error_code"] == "MOVEMENT_NOT_FOUND"

    async def test_detail_id_beyond_integer_range_is_422(self, client: AsyncClient):
        response = await client.get(f"/api/stock-transactions/{2**63}")
        assert response.status_code == 422


class TestStockLevelsAPI:
    async def test_stock_filter(self, client: AsyncClient, product):
        await _post_movement(client, product.id, "OUT", 8)

        low = await client.get("/api/stock", params={"stock_filter": "low"})
        out = await client.get("/api/stock", params={"stock_filter": "out"})
        assert [p["sku"] for p in low.json()["items"]] == ["WS-440"]
        assert low.json()["items"][0]["stock_status"] == "LOW"
        assert out.json()["total"] == 0

    async def test_unknown_filter_is_422(self, client: AsyncClient):
        response = await client.get("/api/stock", params={"stock_filter": "plenty"})
        assert response.status_code == 422

    async def test_alerts(self, client: AsyncClient, product):
        await _post_movement(client, product.id, "OUT", 10)
        response = await client.get("/api/stock-alerts")
        body = response.json()
        assert body["total"] == 1
        assert body["out_of_stock"][0]["id"] == product.id
        assert body["low_stock"] == []
