"""Tests for the orders example."""

import json

from magic_lamp.testing import TestClient


class TestOrdersApp:
    """Fetch each fixture the orders lamp file registers."""

    async def test_index_fixture(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/magic_lamp/fixtures/orders/index")
            assert response.status == 200
            assert "<h1>Orders</h1>" in response.text

    async def test_partial_fixture(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/magic_lamp/fixtures/orders/order")
            assert '<li class="order">#42</li>' in response.text

    async def test_collection_fixture(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/magic_lamp/fixtures/orders/order_list")
            assert "#1" in response.text
            assert "#2" in response.text

    async def test_all_fixtures(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/magic_lamp/fixtures")
            assert response.status == 200
            fixtures = json.loads(response.text)
            assert set(fixtures) == {
                "orders/index",
                "orders/order",
                "orders/order_list",
                "orders.json",
            }
            assert json.loads(fixtures["orders.json"]) == {"count": 2}

    async def test_unknown_fixture(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/magic_lamp/fixtures/orders/missing")
            assert response.status == 500
            assert "is not a registered fixture" in response.text
