"""
Tests for the legacy single-line sales endpoints and the flat line list.
"""

import uuid
from datetime import datetime

from conftest import transaction_payload
from fastsales.models.sale_items import SaleItem


def line_payload(product_id, date_of_sale="2026-10-14T10:00:00", total=500, **extra):
    payload = {
        "product_id": str(product_id),
        "date_of_sale": date_of_sale,
        "quantity": 1,
        "discount": 0,
        "total_cents": total,
        "total_resolved": total,
        "note": None,
    }
    payload.update(extra)
    return payload


class TestSingleLine:
    def test_create_standalone_line(self, client, auth_headers, catalog):
        response = client.post(
            "/api/sales",
            json=line_payload(catalog["coffee"].id, note="walk-in"),
            headers=auth_headers,
        )

        assert response.status_code == 201
        body = response.json()
        assert body["sale_id"] is None
        assert body["product_name"] == "Coffee Beans"
        assert body["price_per_item"] == 500
        assert body["note"] == "walk-in"

    def test_get_line(self, client, auth_headers, catalog):
        created = client.post(
            "/api/sales", json=line_payload(catalog["coffee"].id), headers=auth_headers
        ).json()

        response = client.get(f"/api/sales/{created['id']}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == created

    def test_get_missing_line(self, client, auth_headers):
        response = client.get(f"/api/sales/{uuid.uuid4()}", headers=auth_headers)

        assert response.status_code == 404
        assert response.json() == {"detail": "Sale line not found"}

    def test_update_resnapshots_live_catalog(self, client, auth_headers, catalog, db_session):
        coffee = catalog["coffee"]
        created = client.post(
            "/api/sales", json=line_payload(coffee.id), headers=auth_headers
        ).json()

        coffee.name = "Decaf Beans"
        coffee.price_cents = 450
        db_session.commit()

        response = client.put(
            f"/api/sales/{created['id']}",
            json=line_payload(coffee.id, total=900, quantity=2),
            headers=auth_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["product_name"] == "Decaf Beans"
        assert body["price_per_item"] == 450
        assert body["quantity"] == 2
        assert body["total_cents"] == 900

    def test_update_can_switch_product(self, client, auth_headers, catalog):
        created = client.post(
            "/api/sales", json=line_payload(catalog["coffee"].id), headers=auth_headers
        ).json()

        body = client.put(
            f"/api/sales/{created['id']}",
            json=line_payload(catalog["machine"].id, total=1200),
            headers=auth_headers,
        ).json()

        assert body["product_id"] == catalog["machine"].id
        assert body["product_name"] == "Espresso Machine"

    def test_update_keeps_parent_transaction(self, client, auth_headers, catalog):
        sale = client.post(
            "/api/sales_transactions",
            json=transaction_payload([(catalog["coffee"].id, 1, 500)]),
            headers=auth_headers,
        ).json()
        line_id = sale["sale_items"][0]["id"]

        body = client.put(
            f"/api/sales/{line_id}",
            json=line_payload(catalog["coffee"].id, total=450),
            headers=auth_headers,
        ).json()

        assert body["sale_id"] == sale["id"]

    def test_update_missing_line(self, client, auth_headers, catalog):
        response = client.put(
            f"/api/sales/{uuid.uuid4()}",
            json=line_payload(catalog["coffee"].id),
            headers=auth_headers,
        )

        assert response.status_code == 404

    def test_delete_line(self, client, auth_headers, catalog):
        created = client.post(
            "/api/sales", json=line_payload(catalog["coffee"].id), headers=auth_headers
        ).json()

        assert client.delete(f"/api/sales/{created['id']}", headers=auth_headers).status_code == 204
        assert client.get(f"/api/sales/{created['id']}", headers=auth_headers).status_code == 404

    def test_delete_missing_line(self, client, auth_headers):
        response = client.delete(f"/api/sales/{uuid.uuid4()}", headers=auth_headers)

        assert response.status_code == 404

    def test_non_positive_quantity_is_rejected(self, client, auth_headers, catalog):
        response = client.post(
            "/api/sales",
            json=line_payload(catalog["coffee"].id, quantity=0),
            headers=auth_headers,
        )

        assert response.status_code == 422


class TestSnapshotFallback:
    def test_line_without_snapshot_uses_live_catalog(
        self, client, auth_headers, catalog, db_session
    ):
        # Rows written before the snapshot columns existed
        line = SaleItem(
            id=str(uuid.uuid4()),
            sale_id=None,
            product_id=catalog["machine"].id,
            date_of_sale=datetime(2026, 10, 5, 14, 0),
            quantity=1,
            discount=0,
            total_cents=1200,
            total_resolved=1200,
            product_name=None,
            price_per_item=None,
        )
        db_session.add(line)
        db_session.commit()

        body = client.get(f"/api/sales/{line.id}", headers=auth_headers).json()

        assert body["product_name"] == "Espresso Machine"
        assert body["price_per_item"] == 1200

    def test_orphaned_line_without_snapshot_has_no_name(self, client, auth_headers, catalog):
        created = client.post(
            "/api/sales", json=line_payload(uuid.uuid4()), headers=auth_headers
        )

        assert created.status_code == 201
        assert created.json()["product_name"] is None
        assert created.json()["price_per_item"] is None


class TestLineList:
    def _create_lines(self, client, auth_headers, product_id, totals, day="2026-10-14"):
        for hour, total in enumerate(totals, start=8):
            response = client.post(
                "/api/sales",
                json=line_payload(product_id, f"{day}T{hour:02d}:00:00", total=total),
                headers=auth_headers,
            )
            assert response.status_code == 201

    def test_period_total_is_independent_of_page(self, client, auth_headers, catalog):
        self._create_lines(client, auth_headers, catalog["coffee"].id, [100, 200, 300, 400, 500])

        page_1 = client.get(
            "/api/sales", params={"page": 1, "limit": 2}, headers=auth_headers
        ).json()
        page_2 = client.get(
            "/api/sales", params={"page": 2, "limit": 2}, headers=auth_headers
        ).json()

        assert len(page_1["sales"]) == 2
        assert len(page_2["sales"]) == 2
        assert page_1["total_sales_period_cents"] == 1500
        assert page_2["total_sales_period_cents"] == page_1["total_sales_period_cents"]

    def test_lines_are_newest_first(self, client, auth_headers, catalog):
        self._create_lines(client, auth_headers, catalog["coffee"].id, [100, 200, 300])

        body = client.get("/api/sales", headers=auth_headers).json()

        assert [line["total_cents"] for line in body["sales"]] == [300, 200, 100]

    def test_default_window_is_month_to_date(self, client, auth_headers, catalog):
        coffee_id = catalog["coffee"].id
        self._create_lines(client, auth_headers, coffee_id, [700], day="2026-09-30")
        self._create_lines(client, auth_headers, coffee_id, [100], day="2026-10-01")
        self._create_lines(client, auth_headers, coffee_id, [200], day="2026-10-14")
        self._create_lines(client, auth_headers, coffee_id, [900], day="2026-10-15")

        body = client.get("/api/sales", headers=auth_headers).json()

        assert sorted(line["total_cents"] for line in body["sales"]) == [100, 200]
        assert body["total_sales_period_cents"] == 300

    def test_explicit_window(self, client, auth_headers, catalog):
        coffee_id = catalog["coffee"].id
        self._create_lines(client, auth_headers, coffee_id, [700], day="2026-09-30")
        self._create_lines(client, auth_headers, coffee_id, [100], day="2026-10-01")

        body = client.get(
            "/api/sales",
            params={"start_date": "2026-09-01", "end_date": "2026-09-30"},
            headers=auth_headers,
        ).json()

        assert [line["total_cents"] for line in body["sales"]] == [700]
        assert body["total_sales_period_cents"] == 700

    def test_empty_window_has_zero_total(self, client, auth_headers):
        body = client.get("/api/sales", headers=auth_headers).json()

        assert body == {"sales": [], "total_sales_period_cents": 0}

    def test_malformed_date_matches_nothing(self, client, auth_headers, catalog):
        self._create_lines(client, auth_headers, catalog["coffee"].id, [100])

        response = client.get(
            "/api/sales", params={"start_date": "last tuesday"}, headers=auth_headers
        )

        assert response.status_code == 200
        assert response.json() == {"sales": [], "total_sales_period_cents": 0}
