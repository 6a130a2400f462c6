"""HTTP tests for the customer endpoints."""

from unittest.mock import AsyncMock

import pytest

from app.core.deps import get_customer_engine
from app.core.exceptions import StoreUnavailable
from app.main import app


@pytest.mark.asyncio
async def test_list_customers_envelope(client, seed_store, scenario_counts):
    await seed_store(scenario_counts)

    response = await client.get("/api/customers")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    data = body["data"]
    assert [c["id"] for c in data["customers"]] == [2, 1, 3]
    assert data["customers"][0] == {
        "id": 2,
        "first_name": "First2",
        "last_name": "Last2",
        "full_name": "First2 Last2",
        "email": "customer2@example.com",
        "order_count": 3,
    }
    assert data["pagination"] == {
        "current_page": 1,
        "total_pages": 1,
        "total_customers": 3,
        "per_page": 10,
        "has_next_page": False,
        "has_prev_page": False,
    }


@pytest.mark.asyncio
async def test_has_orders_query_param(client, seed_store, scenario_counts):
    await seed_store(scenario_counts)

    response = await client.get("/api/customers", params={"hasOrders": "false"})

    data = response.json()["data"]
    assert [c["id"] for c in data["customers"]] == [1, 3]
    assert data["pagination"]["total_customers"] == 2
    assert data["filters"]["applied"]["has_orders"] is False


@pytest.mark.asyncio
async def test_range_query_params(client, seed_store):
    await seed_store({1: 0, 2: 1, 3: 5, 4: 2})

    response = await client.get("/api/customers", params={"minOrders": 1, "maxOrders": 2})

    data = response.json()["data"]
    assert [(c["id"], c["order_count"]) for c in data["customers"]] == [(4, 2), (2, 1)]
    assert data["filters"]["applied"]["min_orders"] == 1
    assert data["filters"]["applied"]["max_orders"] == 2


@pytest.mark.asyncio
async def test_exact_order_count_param(client, seed_store):
    await seed_store({1: 0, 2: 1, 3: 5, 4: 1})

    response = await client.get("/api/customers", params={"orderCount": 1})

    data = response.json()["data"]
    assert [c["id"] for c in data["customers"]] == [2, 4]
    assert data["filters"]["applied"]["exact_order_count"] == 1


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "page,limit,expected_page,expected_limit",
    [
        ("abc", "2", 1, 2),
        ("-3", "2", 1, 2),
        ("0", "0", 1, 10),
        ("2", "nope", 2, 10),
        ("1", "5000", 1, 100),
    ],
)
async def test_malformed_pagination_is_sanitized(
    client, seed_store, scenario_counts, page, limit, expected_page, expected_limit
):
    await seed_store(scenario_counts)

    response = await client.get("/api/customers", params={"page": page, "limit": limit})

    assert response.status_code == 200
    pagination = response.json()["data"]["pagination"]
    assert pagination["current_page"] == expected_page
    assert pagination["per_page"] == expected_limit


@pytest.mark.asyncio
async def test_conflicting_filters_are_rejected(client, seed_store, scenario_counts):
    await seed_store(scenario_counts)

    response = await client.get("/api/customers", params={"minOrders": 1, "hasOrders": "true"})

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert "Conflicting" in body["message"]


@pytest.mark.asyncio
async def test_negative_filter_value_is_rejected(client):
    response = await client.get("/api/customers", params={"minOrders": -1})

    assert response.status_code == 422
    assert response.json()["success"] is False


@pytest.mark.asyncio
async def test_search_is_accepted_and_ignored(client, seed_store, scenario_counts):
    await seed_store(scenario_counts)

    response = await client.get("/api/customers", params={"search": "First1"})

    assert response.status_code == 200
    assert response.json()["data"]["pagination"]["total_customers"] == 3


@pytest.mark.asyncio
async def test_id_sort(client, seed_store, scenario_counts):
    await seed_store(scenario_counts)

    response = await client.get("/api/customers", params={"sort": "id", "limit": 2})

    data = response.json()["data"]
    assert [c["id"] for c in data["customers"]] == [1, 2]
    assert data["pagination"]["has_next_page"] is True


@pytest.mark.asyncio
async def test_get_customer(client, seed_store, scenario_counts):
    await seed_store(scenario_counts)

    response = await client.get("/api/customers/2")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["customer"]["order_count"] == 3
    assert len(data["orders"]) == 3
    assert all(o["user_id"] == 2 for o in data["orders"])


@pytest.mark.asyncio
async def test_get_customer_not_found(client, seed_store, scenario_counts):
    await seed_store(scenario_counts)

    response = await client.get("/api/customers/12345")

    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Customer not found"}


@pytest.mark.asyncio
async def test_store_unavailable_maps_to_500(client):
    engine = AsyncMock()
    engine.list_customers.side_effect = StoreUnavailable()
    app.dependency_overrides[get_customer_engine] = lambda: engine

    response = await client.get("/api/customers")

    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "Record store unavailable"}


@pytest.mark.asyncio
async def test_listing_describes_available_filters(client, seed_store, scenario_counts):
    await seed_store(scenario_counts)

    response = await client.get("/api/customers")

    available = response.json()["data"]["filters"]["available"]
    assert set(available) == {"orderCount", "minOrders", "maxOrders", "hasOrders"}
    assert "?hasOrders=false" in available["hasOrders"]


@pytest.mark.asyncio
async def test_huge_page_returns_empty_page(client, seed_store, scenario_counts):
    await seed_store(scenario_counts)

    response = await client.get("/api/customers", params={"page": "99999999999999999999"})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["customers"] == []
    assert data["pagination"]["total_customers"] == 3
    assert data["pagination"]["has_next_page"] is False


@pytest.mark.asyncio
@pytest.mark.parametrize("param", ["orderCount", "minOrders", "maxOrders"])
async def test_out_of_range_filter_value_is_rejected(client, param):
    response = await client.get("/api/customers", params={param: "99999999999999999999"})

    assert response.status_code == 422
    assert response.json()["success"] is False


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ["/api/customers/99999999999999999999", "/api/orders/customer/-99999999999999999999"])
async def test_out_of_range_customer_id_is_rejected(client, path):
    response = await client.get(path)

    assert response.status_code == 422
    assert response.json()["success"] is False


@pytest.mark.asyncio
async def test_largest_customer_id_is_not_found(client, seed_store, scenario_counts):
    await seed_store(scenario_counts)

    response = await client.get(f"/api/customers/{2**31 - 1}")

    assert response.status_code == 404
