import unittest
from unittest.mock import patch

from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from warehouse.database import Base, create_schema, engine
from warehouse.main import app


class ApiTestCase(unittest.TestCase):
    def setUp(self):
        Base.metadata.drop_all(bind=engine)
        create_schema()
        self.client = TestClient(app)
        response = self.client.post("/api/v1/auth/login", json={"username": "tester", "password": "pw"})
        self.assertEqual(response.status_code, 200)
        self.headers = {"Authorization": "Bearer {}".format(response.json()["token"])}

    def tearDown(self):
        self.client.close()

    def _post(self, path, payload):
        return self.client.post("/api/v1" + path, json=payload, headers=self.headers)

    def _get(self, path, **params):
        return self.client.get("/api/v1" + path, params=params, headers=self.headers)


class AuthApiTest(ApiTestCase):
    def test_health_is_public(self):
        response = self.client.get("/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "ok")
        self.assertEqual(response.json()["database"], "ok")

    def test_health_reports_unreachable_database(self):
        failure = OperationalError("SELECT 1", {}, Exception("database is down"))
        with patch.object(Session, "execute", side_effect=failure):
            with self.assertLogs("warehouse.routers.health", level="ERROR"):
                response = self.client.get("/health")
        self.assertEqual(response.status_code, 503)
        self.assertEqual((response.json()["status"], response.json()["database"]), ("degraded", "unavailable"))

    def test_protected_routes_require_token(self):
        self.assertEqual(self.client.get("/api/v1/products").status_code, 401)
        response = self.client.get("/api/v1/products", headers={"Authorization": "Bearer nope"})
        self.assertEqual(response.status_code, 401)

    def test_login_requires_both_fields(self):
        response = self.client.post("/api/v1/auth/login", json={"username": "tester", "password": ""})
        self.assertEqual(response.status_code, 422)


class ProductApiTest(ApiTestCase):
    def test_crud(self):
        created = self._post("/products", {"sku_name": "SKU-1", "quantity": 10})
        self.assertEqual(created.status_code, 201)
        product_id = created.json()["id"]

        self.assertEqual(self._get("/products/{}".format(product_id)).json()["sku_name"], "SKU-1")

        updated = self.client.put(
            "/api/v1/products/{}".format(product_id),
            json={"quantity": 25},
            headers=self.headers,
        )
        self.assertEqual(updated.status_code, 200)
        self.assertEqual(updated.json()["quantity"], 25)

        deleted = self.client.delete("/api/v1/products/{}".format(product_id), headers=self.headers)
        self.assertEqual(deleted.status_code, 200)
        missing = self._get("/products/{}".format(product_id))
        self.assertEqual(missing.status_code, 404)
        self.assertEqual(missing.json()["error"], "ProductNotFound")

    def test_duplicate_sku_is_conflict(self):
        self._post("/products", {"sku_name": "SKU-1", "quantity": 1})
        response = self._post("/products", {"sku_name": "SKU-1", "quantity": 1})
        self.assertEqual(response.status_code, 409)
        self.assertFalse(response.json()["success"])

    def test_negative_quantity_is_rejected(self):
        response = self._post("/products", {"sku_name": "SKU-1", "quantity": -1})
        self.assertEqual(response.status_code, 422)

    def test_blank_sku_is_rejected(self):
        response = self._post("/products", {"sku_name": "   ", "quantity": 1})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "InvalidInput")

    def test_list_pagination(self):
        for index in range(3):
            self._post("/products", {"sku_name": "SKU-{}".format(index), "quantity": index})
        body = self._get("/products", limit=2, offset=0).json()
        self.assertEqual(body["total"], 3)
        self.assertEqual(body["limit"], 2)
        self.assertEqual(len(body["data"]), 2)

        body = self._get("/products", limit=0, offset=-5).json()
        self.assertEqual((body["limit"], body["offset"]), (10, 0))


class LocationApiTest(ApiTestCase):
    def test_create_update_and_occupancy(self):
        created = self._post("/locations", {"code": "LOC-A1", "name": "Shelf", "capacity": 100})
        self.assertEqual(created.status_code, 201)
        location_id = created.json()["id"]

        updated = self.client.put(
            "/api/v1/locations/{}".format(location_id),
            json={"code": "LOC-A1", "name": "Shelf 1", "capacity": 40},
            headers=self.headers,
        )
        self.assertEqual(updated.json()["capacity"], 40)

        stock = self._get("/locations/{}/occupancy".format(location_id)).json()
        self.assertEqual(stock, {"location_id": location_id, "capacity": 40, "occupancy": 0, "available": 40})

    def test_capacity_must_be_positive(self):
        response = self._post("/locations", {"code": "LOC-A1", "name": "Shelf", "capacity": 0})
        self.assertEqual(response.status_code, 422)


class StockMovementApiTest(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.product_id = self._post("/products", {"sku_name": "SKU-1", "quantity": 100}).json()["id"]
        self.location_id = self._post(
            "/locations", {"code": "LOC-A1", "name": "Shelf", "capacity": 500}
        ).json()["id"]

    def _move(self, movement_type, quantity, product_id=None, location_id=None):
        return self._post(
            "/stock-movements",
            {
                "product_id": product_id or self.product_id,
                "location_id": location_id or self.location_id,
                "type": movement_type,
                "quantity": quantity,
            },
        )

    def test_record_and_query(self):
        inbound = self._move("IN", 50)
        self.assertEqual(inbound.status_code, 201)
        self.assertEqual(inbound.json()["type"], "IN")
        self.assertEqual(self._move("OUT", 20).status_code, 201)

        self.assertEqual(self._get("/products/{}".format(self.product_id)).json()["quantity"], 130)
        listing = self._get("/stock-movements").json()
        self.assertEqual(listing["total"], 2)
        self.assertEqual(len(self._get("/stock-movements/product/{}".format(self.product_id)).json()), 2)
        self.assertEqual(len(self._get("/stock-movements/location/{}".format(self.location_id)).json()), 2)
        movement_id = inbound.json()["id"]
        self.assertEqual(self._get("/stock-movements/{}".format(movement_id)).json()["quantity"], 50)

    def test_business_rule_errors(self):
        response = self._move("OUT", 150)
        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.json()["error"], "InsufficientStock")

        response = self._move("IN", 501)
        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.json()["error"], "CapacityExceeded")

        response = self._move("IN", 1, product_id=999)
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["error"], "ProductNotFound")

        self.assertEqual(self._get("/stock-movements").json()["total"], 0)

    def test_schema_rejects_bad_type(self):
        self.assertEqual(self._move("SIDEWAYS", 1).status_code, 422)
        self.assertEqual(self._move("IN", 0).status_code, 422)

    def test_referenced_location_cannot_be_deleted(self):
        self._move("IN", 5)
        response = self.client.delete("/api/v1/locations/{}".format(self.location_id), headers=self.headers)
        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.json()["error"], "ResourceInUse")


if __name__ == "__main__":
    unittest.main()
