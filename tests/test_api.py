import threading
import unittest

from fastapi.testclient import TestClient

from cloofy.config import Settings
from cloofy.core.constants import MAX_SALE_QUANTITY
from cloofy.main import create_app
from cloofy.services.seed_service import DEFAULT_INGREDIENTS, DEFAULT_PRODUCTS
from cloofy.storage import MemoryStorage


def _settings(**overrides):
    values = {"DATABASE_URL": "sqlite:///:memory:", "SEED_ON_STARTUP": False}
    values.update(overrides)
    return Settings(**values)


class ApiTestCase(unittest.TestCase):
    settings_overrides: dict = {}

    def setUp(self):
        self.app = create_app(_settings(**self.settings_overrides))
        self.client = TestClient(self.app)
        self.client.__enter__()
        self.addCleanup(self.client.__exit__, None, None, None)

    def create_ingredient(self, name="Cotton Candy Base", stock=25, reorder=5):
        resp = self.client.post(
            "/api/ingredients",
            json={
                "name": name,
                "unit": "g",
                "current_stock": stock,
                "reorder_level": reorder,
                "unit_cost": 3,
            },
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        return resp.json()["id"]

    def create_product(self, recipe, name="Plain Cloud", price=300):
        resp = self.client.post(
            "/api/products",
            json={"name": name, "price": price, "recipe": recipe},
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        return resp.json()["id"]

    def stock_of(self, ingredient_id):
        rows = self.client.get("/api/ingredients").json()
        return next(row["current_stock"] for row in rows if row["id"] == ingredient_id)


class IngredientApiTest(ApiTestCase):
    def test_create_and_list(self):
        ingredient_id = self.create_ingredient()
        rows = self.client.get("/api/ingredients").json()
        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0]["id"], ingredient_id)
        self.assertEqual(rows[0]["name"], "Cotton Candy Base")
        self.assertEqual(rows[0]["current_stock"], 25)

    def test_adjust_returns_new_stock_and_logs(self):
        ingredient_id = self.create_ingredient(stock=25)

        resp = self.client.post(
            f"/api/ingredients/{ingredient_id}/adjust",
            json={"change": 10, "reason": "restock"},
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"success": True, "newStock": 35.0})

        resp = self.client.post(
            f"/api/ingredients/{ingredient_id}/adjust",
            json={"change": -10, "reason": "correction"},
        )
        self.assertEqual(resp.json()["newStock"], 25.0)

        logs = self.client.get(f"/api/ingredients/{ingredient_id}/logs").json()
        self.assertEqual([(log["change"], log["reason"]) for log in logs], [(10.0, "restock"), (-10.0, "correction")])

    def test_adjust_unknown_ingredient_is_404(self):
        resp = self.client.post("/api/ingredients/99/adjust", json={"change": 1})
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json(), {"error": "Ingredient not found"})

    def test_adjust_requires_numeric_change(self):
        ingredient_id = self.create_ingredient()
        resp = self.client.post(
            f"/api/ingredients/{ingredient_id}/adjust", json={"change": "lots"}
        )
        self.assertEqual(resp.status_code, 422)

    def test_create_requires_name_and_unit(self):
        resp = self.client.post("/api/ingredients", json={"name": " ", "unit": "g"})
        self.assertEqual(resp.status_code, 400)


class ProductApiTest(ApiTestCase):
    def test_products_expose_ordered_recipe(self):
        first = self.create_ingredient("Cotton Candy Base")
        second = self.create_ingredient("Caramel Syrup")
        self.create_product([{"ingredientId": second, "qty": 10}, {"ingredientId": first, "qty": 20}])

        rows = self.client.get("/api/products").json()

        self.assertEqual(len(rows), 1)
        self.assertEqual(
            rows[0]["recipe"],
            [{"ingredientId": second, "qty": 10.0}, {"ingredientId": first, "qty": 20.0}],
        )

    def test_recipe_must_reference_known_ingredients(self):
        resp = self.client.post(
            "/api/products",
            json={"name": "Ghost", "price": 100, "recipe": [{"ingredientId": 7, "qty": 1}]},
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json(), {"error": "Ingredient 7 missing"})

    def test_recipe_quantities_must_be_positive(self):
        ingredient_id = self.create_ingredient()
        resp = self.client.post(
            "/api/products",
            json={"name": "Bad", "price": 100, "recipe": [{"ingredientId": ingredient_id, "qty": 0}]},
        )
        self.assertEqual(resp.status_code, 400)


class SaleApiTest(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.cotton = self.create_ingredient("Cotton Candy Base", stock=25)
        self.product = self.create_product([{"ingredientId": self.cotton, "qty": 20}])

    def test_successful_sale(self):
        resp = self.client.post("/api/sales", json={"product_id": self.product, "qty": 1})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"success": True, "totalPrice": 300.0})
        self.assertEqual(self.stock_of(self.cotton), 5)

        sales = self.client.get("/api/sales").json()
        self.assertEqual(len(sales), 1)
        self.assertEqual(sales[0]["qty"], 1)

    def test_insufficient_stock_names_ingredient(self):
        resp = self.client.post("/api/sales", json={"product_id": self.product, "qty": 2})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(
            resp.json(),
            {"error": "Not enough stock for ingredient Cotton Candy Base", "ingredient": "Cotton Candy Base"},
        )
        self.assertEqual(self.stock_of(self.cotton), 25)
        self.assertEqual(self.client.get("/api/sales").json(), [])

    def test_unknown_product_is_404(self):
        resp = self.client.post("/api/sales", json={"product_id": 999, "qty": 1})
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json(), {"error": "Product not found"})

    def test_bad_quantity_is_400(self):
        for qty in (0, -3, 1.5, "two"):
            with self.subTest(qty=qty):
                resp = self.client.post("/api/sales", json={"product_id": self.product, "qty": qty})
                self.assertEqual(resp.status_code, 400)
        self.assertEqual(self.stock_of(self.cotton), 25)

    def test_oversized_quantity_is_400(self):
        empty = self.create_product([], name="Empty Cup", price=0)
        for product_id, qty in ((self.product, 10**400), (empty, 2**63), (self.product, MAX_SALE_QUANTITY + 1)):
            with self.subTest(product_id=product_id, qty=qty):
                resp = self.client.post("/api/sales", json={"product_id": product_id, "qty": qty})
                self.assertEqual(resp.status_code, 400)
                self.assertEqual(resp.json(), {"error": f"Quantity cannot exceed {MAX_SALE_QUANTITY}"})
        self.assertEqual(self.stock_of(self.cotton), 25)
        self.assertEqual(self.client.get("/api/sales").json(), [])

    def test_omitted_quantity_sells_one(self):
        resp = self.client.post("/api/sales", json={"product_id": self.product})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["totalPrice"], 300.0)

    def test_string_quantity_is_coerced(self):
        resp = self.client.post("/api/sales", json={"product_id": self.product, "qty": "1"})
        self.assertEqual(resp.status_code, 200)


class DashboardApiTest(ApiTestCase):
    def test_summary_and_sales_by_day(self):
        syrup = self.create_ingredient("Caramel Syrup", stock=100, reorder=20)
        biscoff = self.create_ingredient("Biscoff Crumbs", stock=10, reorder=10)
        product = self.create_product([{"ingredientId": syrup, "qty": 10}], price=300)
        self.client.post("/api/sales", json={"product_id": product, "qty": 3})

        summary = self.client.get("/api/dashboard/summary").json()
        self.assertEqual(summary["revenue"], 900)
        self.assertEqual(summary["sales_count"], 1)
        self.assertEqual(summary["total_tubs"], 3)
        self.assertEqual([row["id"] for row in summary["low_stock"]], [biscoff])

        days = self.client.get("/api/dashboard/sales-by-day").json()
        self.assertEqual(len(days), 1)
        self.assertEqual(days[0]["revenue"], 900)
        self.assertEqual(days[0]["tubs"], 3)

    def test_dashboard_page_renders(self):
        self.create_ingredient("Biscoff Crumbs", stock=1, reorder=10)
        resp = self.client.get("/")
        self.assertEqual(resp.status_code, 200)
        self.assertIn("Biscoff Crumbs", resp.text)
        self.assertIn("Low Stock Alerts", resp.text)

    def test_health(self):
        resp = self.client.get("/health")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["status"], "ok")


class ReportApiTest(ApiTestCase):
    def test_monthly_pdf(self):
        resp = self.client.get("/api/reports/monthly-pdf", params={"month": "2025-01"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.headers["content-type"], "application/pdf")
        self.assertIn("cloofy-monthly-report.pdf", resp.headers["content-disposition"])
        self.assertTrue(resp.content.startswith(b"%PDF"))

    def test_all_time_pdf(self):
        resp = self.client.get("/api/reports/monthly-pdf")
        self.assertEqual(resp.status_code, 200)
        self.assertTrue(resp.content.startswith(b"%PDF"))

    def test_malformed_month_is_400(self):
        resp = self.client.get("/api/reports/monthly-pdf", params={"month": "January"})
        self.assertEqual(resp.status_code, 400)


class SeededStartupTest(ApiTestCase):
    settings_overrides = {"SEED_ON_STARTUP": True}

    def test_seed_loads_starter_menu_once(self):
        self.assertEqual(len(self.client.get("/api/ingredients").json()), len(DEFAULT_INGREDIENTS))
        products = self.client.get("/api/products").json()
        self.assertEqual([p["name"] for p in products], [p["name"] for p in DEFAULT_PRODUCTS])

        resp = self.client.post("/api/sales", json={"product_id": products[0]["id"], "qty": 2})
        self.assertEqual(resp.json(), {"success": True, "totalPrice": 600.0})


class StorageFailureApiTest(unittest.TestCase):
    def setUp(self):
        self.storage = MemoryStorage(lock_timeout=0.05)
        self.client = TestClient(create_app(_settings(), storage=self.storage))
        self.client.__enter__()
        self.addCleanup(self.client.__exit__, None, None, None)

        resp = self.client.post(
            "/api/ingredients",
            json={"name": "Cotton Candy Base", "unit": "g", "current_stock": 25},
        )
        self.cotton = resp.json()["id"]
        resp = self.client.post(
            "/api/products",
            json={"name": "Plain Cloud", "price": 300, "recipe": [{"ingredientId": self.cotton, "qty": 20}]},
        )
        self.product = resp.json()["id"]

    def hold_storage(self):
        held = threading.Event()
        release = threading.Event()

        def worker():
            with self.storage.transaction():
                held.set()
                release.wait(5)

        thread = threading.Thread(target=worker)
        thread.start()
        self.assertTrue(held.wait(5))
        return release, thread

    def test_busy_storage_is_503_without_mutation(self):
        release, thread = self.hold_storage()
        try:
            with self.assertLogs("cloofy.main", level="ERROR"):
                resp = self.client.post("/api/sales", json={"product_id": self.product, "qty": 1})
        finally:
            release.set()
            thread.join()

        self.assertEqual(resp.status_code, 503)
        self.assertEqual(resp.json(), {"error": "Storage is unavailable, please retry"})

        ingredients = self.client.get("/api/ingredients").json()
        self.assertEqual(ingredients[0]["current_stock"], 25)
        self.assertEqual(self.client.get("/api/sales").json(), [])
        self.assertEqual(self.client.get(f"/api/ingredients/{self.cotton}/logs").json(), [])

    def test_storage_recovers_once_released(self):
        release, thread = self.hold_storage()
        release.set()
        thread.join()

        resp = self.client.post("/api/sales", json={"product_id": self.product, "qty": 1})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"success": True, "totalPrice": 300.0})


class InjectedStorageTest(unittest.TestCase):
    def test_app_runs_against_memory_storage(self):
        storage = MemoryStorage()
        app = create_app(_settings(), storage=storage)
        with TestClient(app) as client:
            resp = client.post(
                "/api/ingredients",
                json={"name": "Strawberry Pebbles", "unit": "g", "current_stock": 2000},
            )
            self.assertEqual(resp.status_code, 200)
        self.assertEqual(len(storage.state.ingredients), 1)


if __name__ == "__main__":
    unittest.main()
