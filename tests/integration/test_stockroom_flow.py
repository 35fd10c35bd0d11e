"""End-to-end flow through the HTTP API against a migrated SQLite database."""

import pytest
from httpx import ASGITransport, AsyncClient

from stockroom.api.main import app

ADMIN = {"X-User": "alice", "X-User-Role": "admin"}
STAFF = {"X-User": "bob"}


@pytest.fixture
async def client(sqlite_db):
    app.dependency_overrides.clear()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def _create(client, **body) -> dict:
    response = await client.post("/api/items", json=body, headers=STAFF)
    assert response.status_code == 201, response.text
    return response.json()


async def _quantity(client, item_id) -> int:
    response = await client.get(f"/api/items/{item_id}")
    return response.json()["quantity"]


class TestStockroomFlow:
    """Items → work orders → purchase orders → reports."""

    async def test_production_and_replenishment(self, client: AsyncClient):
        shirt = await _create(client, kind="product", name="Linen Shirt", unit_cost=49.99)
        linen = await _create(
            client,
            kind="raw_material",
            name="Linen",
            category="Fabric",
            quantity=10,
            reorder_level=5,
            unit_cost=12.5,
            supplier="Textile Co",
        )
        buttons = await _create(
            client,
            kind="raw_material",
            name="Buttons",
            quantity=2,
            reorder_level=5,
            unit_cost=0.2,
            supplier="Notions Ltd",
        )
        assert shirt["sku"] == "PRD-0001"
        assert shirt["status"] == "out-of-stock"
        assert linen["sku"] == "RAW-0001"
        assert linen["unit"] == "rolls"
        assert buttons["sku"] == "RAW-0002"
        assert buttons["status"] == "low-stock"

        # A shortage on the second material leaves the first untouched
        response = await client.post(
            "/api/work-orders",
            json={
                "product_id": shirt["id"],
                "quantity": 3,
                "materials": [
                    {"material_id": linen["id"], "quantity": 4},
                    {"material_id": buttons["id"], "quantity": 5},
                ],
            },
        )
        assert response.status_code == 409
        assert response.json()["error_code"] == "INSUFFICIENT_STOCK"
        assert await _quantity(client, linen["id"]) == 10
        assert (await client.get("/api/work-orders")).json()["total"] == 0

        response = await client.post(
            "/api/work-orders",
            json={
                "product_id": shirt["id"],
                "quantity": 3,
                "materials": [
                    {"material_id": linen["id"], "quantity": 4},
                    {"material_id": buttons["id"], "quantity": 2},
                ],
            },
        )
        assert response.status_code == 201
        order = response.json()
        assert await _quantity(client, linen["id"]) == 6
        assert (await client.get(f"/api/items/{buttons['id']}")).json()["status"] == "out-of-stock"

        response = await client.patch(
            f"/api/work-orders/{order['id']}/status", json={"status": "in-progress"}
        )
        assert response.status_code == 200
        assert response.json()["status"] == "in-progress"

        response = await client.post(f"/api/work-orders/{order['id']}/complete")
        assert response.status_code == 200
        assert response.json()["completed_at"] is not None
        assert await _quantity(client, shirt["id"]) == 3

        assert (await client.get("/api/work-orders")).json()["total"] == 0
        history = (await client.get("/api/work-orders/history")).json()
        assert [o["id"] for o in history["orders"]] == [order["id"]]
        assert (await client.get(f"/api/work-orders/{order['id']}")).json()["status"] == (
            "completed"
        )

        response = await client.post(f"/api/work-orders/{order['id']}/complete")
        assert response.status_code == 404
        assert await _quantity(client, shirt["id"]) == 3

        report = (await client.get("/api/reports/low-stock")).json()
        assert [e["name"] for e in report["products"]] == ["Linen Shirt"]
        assert [e["name"] for e in report["raw_materials"]] == ["Buttons"]
        assert report["raw_materials"][0]["reorder_needed"] == 10

        # Replenishment
        response = await client.post("/api/purchase-orders/generate-low-stock", headers=STAFF)
        assert response.status_code == 200
        generated = response.json()
        assert [o["supplier"] for o in generated["created"]] == ["Notions Ltd"]
        po = generated["created"][0]
        assert po["po_number"] == "PO-0001"
        assert po["items"][0]["quantity"] == 10
        assert po["created_by"] == "bob"

        again = (await client.post("/api/purchase-orders/generate-low-stock")).json()
        assert again["created"] == []
        assert again["skipped_suppliers"] == ["Notions Ltd"]

        for status in ("approved", "sent", "received"):
            response = await client.patch(
                f"/api/purchase-orders/{po['id']}", json={"status": status}
            )
            assert response.status_code == 200, response.text
        assert await _quantity(client, buttons["id"]) == 0

        response = await client.patch(
            f"/api/purchase-orders/{po['id']}", json={"status": "cancelled"}
        )
        assert response.status_code == 409

        # Receiving goods is a separate adjustment
        response = await client.post(
            f"/api/items/{buttons['id']}/adjust", json={"delta": 10, "reason": po["po_number"]}
        )
        assert response.json()["status"] == "in-stock"

        summary = (await client.get("/api/reports/inventory-summary")).json()
        assert summary["raw_materials"]["item_count"] == 2
        assert summary["products"]["total_quantity"] == 3

        activities = (await client.get("/api/activities")).json()["activities"]
        assert activities[0]["action"] == "adjust"
        assert any(a["action"] == "complete" for a in activities)

    async def test_admin_only_deletes(self, client: AsyncClient):
        item = await _create(client, kind="product", name="Scarf")

        response = await client.delete(f"/api/items/{item['id']}", headers=STAFF)
        assert response.status_code == 403
        assert (await client.get(f"/api/items/{item['id']}")).status_code == 200

        response = await client.delete(f"/api/items/{item['id']}", headers=ADMIN)
        assert response.status_code == 204
        assert (await client.get(f"/api/items/{item['id']}")).status_code == 404

    async def test_deleting_work_order_keeps_materials_deducted(self, client: AsyncClient):
        product = await _create(client, kind="product", name="Tote")
        canvas = await _create(client, kind="raw_material", name="Canvas", quantity=20)
        response = await client.post(
            "/api/work-orders",
            json={
                "product_id": product["id"],
                "quantity": 1,
                "materials": [{"material_id": canvas["id"], "quantity": 5}],
            },
        )
        order_id = response.json()["id"]

        response = await client.delete(f"/api/work-orders/{order_id}", headers=ADMIN)

        assert response.status_code == 204
        assert await _quantity(client, canvas["id"]) == 15
        assert (await client.get(f"/api/work-orders/{order_id}")).status_code == 404

    async def test_cancel_moves_to_history_without_credit(self, client: AsyncClient):
        product = await _create(client, kind="product", name="Tote")
        response = await client.post(
            "/api/work-orders", json={"product_id": product["id"], "quantity": 4}
        )
        order_id = response.json()["id"]

        response = await client.post(f"/api/work-orders/{order_id}/cancel")

        assert response.status_code == 200
        assert response.json()["status"] == "cancelled"
        assert await _quantity(client, product["id"]) == 0
        history = (await client.get("/api/work-orders/history")).json()["orders"]
        assert history[0]["status"] == "cancelled"


class TestCatalogAndSavedReports:
    async def test_fixed_price_defaults_manual_order_price(self, client: AsyncClient):
        linen = await _create(
            client,
            kind="raw_material",
            name="Linen",
            category="Fabric",
            quantity=2,
            unit_cost=12.5,
            supplier="Textile Co",
        )
        response = await client.post(
            "/api/fixed-prices",
            json={"kind": "raw_material", "category": "Fabric", "item_name": "Linen", "price": 10},
            headers=STAFF,
        )
        assert response.status_code == 201, response.text
        price_id = response.json()["id"]

        duplicate = await client.post(
            "/api/fixed-prices",
            json={"kind": "raw_material", "category": "Fabric", "item_name": "Linen", "price": 9},
        )
        assert duplicate.status_code == 409

        line = {"material_id": linen["id"], "quantity": 3}
        order = (
            await client.post(
                "/api/purchase-orders",
                json={"supplier": "Textile Co", "items": [line]},
            )
        ).json()
        assert order["items"][0]["unit_price"] == 10.0

        await client.patch(f"/api/fixed-prices/{price_id}", json={"is_active": False})
        order = (
            await client.post(
                "/api/purchase-orders",
                json={"supplier": "Textile Co", "items": [line]},
            )
        ).json()
        assert order["items"][0]["unit_price"] == 12.5

        assert (await client.delete(f"/api/fixed-prices/{price_id}")).status_code == 403
        assert (
            await client.delete(f"/api/fixed-prices/{price_id}", headers=ADMIN)
        ).status_code == 204

        feed = (await client.get("/api/activities")).json()["activities"]
        descriptions = [a["description"] for a in feed]
        assert f"Deleted fixed price with ID: {price_id}" in descriptions
        assert "Added fixed price for Linen: $10.00" in descriptions

    async def test_saved_report_snapshot(self, client: AsyncClient):
        await _create(client, kind="raw_material", name="Thread", quantity=1, reorder_level=5)

        response = await client.post(
            "/api/reports/saved",
            json={"title": "Morning check", "report_type": "low-stock"},
            headers=STAFF,
        )
        assert response.status_code == 201, response.text
        saved = response.json()
        assert saved["generated_by"] == "bob"
        assert saved["content"]["raw_materials"][0]["name"] == "Thread"

        listed = (await client.get("/api/reports/saved")).json()
        assert [r["id"] for r in listed["reports"]] == [saved["id"]]

        assert (await client.delete(f"/api/reports/saved/{saved['id']}")).status_code == 403
        assert (
            await client.delete(f"/api/reports/saved/{saved['id']}", headers=ADMIN)
        ).status_code == 204
        missing = await client.get(f"/api/reports/saved/{saved['id']}")
        assert missing.status_code == 404
