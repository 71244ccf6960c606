from unittest import mock

from django.contrib.auth import get_user_model
from django.db import DatabaseError
from django.db.models.query import QuerySet
from django.test import TestCase
from rest_framework.test import APIClient

from products.models import Product
from suppliers.models import ProductSupplier, Supplier
from suppliers.relationships import RelationshipStore, relationships

User = get_user_model()


class ProductModelTests(TestCase):
    def test_variation_belongs_to_parent(self):
        shirt = Product.objects.create(name="Kurta", price=20)
        large = Product.objects.create(name="Kurta - L", price=20, parent=shirt)

        self.assertFalse(shirt.is_variation)
        self.assertTrue(large.is_variation)
        self.assertEqual(large.owning_product_id, shirt.pk)
        self.assertEqual(shirt.owning_product_id, shirt.pk)

    def test_deleting_product_removes_assignments(self):
        p = Product.objects.create(name="Basmati Rice", price=12)
        s = Supplier.objects.create(name="Spice Co", email="orders@spice.example")
        relationships.add(p, s)

        p.delete()

        self.assertFalse(ProductSupplier.objects.exists())
        self.assertEqual(relationships.count_for_supplier(s), 0)


class ProductSupplierApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.manager = User.objects.create_user(
            username="manager", email="manager@shop.example", password="pass1234", is_staff=True
        )
        self.client.force_authenticate(self.manager)
        self.rice = Product.objects.create(name="Basmati Rice", sku="RICE-5KG", price=12, stock=10)
        self.dal = Product.objects.create(name="Toor Dal", sku="DAL-1KG", price=4, stock=10)
        self.spice_co = Supplier.objects.create(name="Spice Co", email="orders@spice.example")
        self.grain_house = Supplier.objects.create(name="Grain House", email="sales@grain.example")

    def test_get_suppliers(self):
        relationships.add(self.rice, self.spice_co)
        relationships.add(self.rice, self.grain_house, is_primary=True)

        r = self.client.get(f"/api/products/{self.rice.pk}/suppliers/")

        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.data, {
            "product": self.rice.pk,
            "suppliers": [self.grain_house.pk, self.spice_co.pk],
            "primary": self.grain_house.pk,
        })

    def test_put_replaces_suppliers(self):
        relationships.add(self.rice, self.spice_co, is_primary=True)

        r = self.client.put(f"/api/products/{self.rice.pk}/suppliers/", {
            "suppliers": [self.grain_house.pk],
            "primary": self.grain_house.pk,
        }, format="json")

        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.data["suppliers"], [self.grain_house.pk])
        self.assertEqual(r.data["primary"], self.grain_house.pk)
        self.assertFalse(relationships.exists(self.rice, self.spice_co))

    def test_put_empty_list_clears_suppliers(self):
        relationships.add(self.rice, self.spice_co)

        r = self.client.put(f"/api/products/{self.rice.pk}/suppliers/", {"suppliers": []}, format="json")

        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.data["suppliers"], [])
        self.assertIsNone(r.data["primary"])

    def test_put_unknown_supplier_is_rejected(self):
        r = self.client.put(f"/api/products/{self.rice.pk}/suppliers/", {"suppliers": [9999]}, format="json")
        self.assertEqual(r.status_code, 400)
        self.assertIn("suppliers", r.data["detail"])

    def test_put_on_variation_is_rejected(self):
        large = Product.objects.create(name="Basmati Rice 10kg", price=22, parent=self.rice)
        r = self.client.put(f"/api/products/{large.pk}/suppliers/", {"suppliers": [self.spice_co.pk]}, format="json")
        self.assertEqual(r.status_code, 400)
        self.assertEqual(relationships.suppliers_of(large), [])

    def test_failed_update_reports_error(self):
        relationships.add(self.rice, self.spice_co)
        with mock.patch.object(RelationshipStore, "replace_all", return_value=False):
            r = self.client.put(
                f"/api/products/{self.rice.pk}/suppliers/", {"suppliers": [self.grain_house.pk]}, format="json"
            )
        self.assertEqual(r.status_code, 500)
        self.assertEqual(r.data["detail"], "Supplier update failed; previous assignments kept.")
        self.assertTrue(relationships.exists(self.rice, self.spice_co))

    def test_database_error_during_update_keeps_assignments(self):
        relationships.add(self.rice, self.spice_co)
        with mock.patch.object(QuerySet, "delete", side_effect=DatabaseError("database is locked")):
            with self.assertLogs("suppliers.relationships", level="ERROR"):
                r = self.client.put(
                    f"/api/products/{self.rice.pk}/suppliers/", {"suppliers": [self.grain_house.pk]}, format="json"
                )
        self.assertEqual(r.status_code, 500)
        self.assertEqual(r.data["detail"], "Supplier update failed; previous assignments kept.")
        self.assertEqual(relationships.suppliers_of(self.rice), [self.spice_co.pk])

    def test_set_primary(self):
        relationships.add(self.rice, self.spice_co, is_primary=True)
        relationships.add(self.rice, self.grain_house)

        r = self.client.post(
            f"/api/products/{self.rice.pk}/suppliers/primary/", {"supplier": self.grain_house.pk}, format="json"
        )

        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.data["primary"], self.grain_house.pk)

    def test_set_primary_requires_assignment(self):
        r = self.client.post(
            f"/api/products/{self.rice.pk}/suppliers/primary/", {"supplier": self.spice_co.pk}, format="json"
        )
        self.assertEqual(r.status_code, 400)
        self.assertFalse(relationships.exists(self.rice, self.spice_co))

    def test_clear_primary(self):
        relationships.add(self.rice, self.spice_co, is_primary=True)

        r = self.client.delete(f"/api/products/{self.rice.pk}/suppliers/primary/")

        self.assertEqual(r.status_code, 200)
        self.assertIsNone(r.data["primary"])
        self.assertEqual(r.data["suppliers"], [self.spice_co.pk])

    def test_bulk_add(self):
        relationships.add(self.rice, self.spice_co)

        r = self.client.post("/api/products/bulk-suppliers/", {
            "products": [self.rice.pk, self.dal.pk],
            "suppliers": [self.spice_co.pk, self.grain_house.pk],
            "primary": self.spice_co.pk,
        }, format="json")

        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.data, {"mode": "add", "updated": 2, "failed": 0})
        self.assertEqual(relationships.suppliers_of(self.rice), [self.spice_co.pk, self.grain_house.pk])
        self.assertEqual(relationships.primary_of(self.dal), self.spice_co.pk)

    def test_bulk_replace(self):
        relationships.add(self.rice, self.spice_co)

        r = self.client.post("/api/products/bulk-suppliers/", {
            "products": [self.rice.pk, self.dal.pk],
            "suppliers": [self.grain_house.pk],
            "mode": "replace",
        }, format="json")

        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.data["updated"], 2)
        self.assertEqual(relationships.suppliers_of(self.rice), [self.grain_house.pk])

    def test_bulk_add_needs_suppliers(self):
        r = self.client.post("/api/products/bulk-suppliers/", {
            "products": [self.rice.pk],
            "suppliers": [],
        }, format="json")
        self.assertEqual(r.status_code, 400)

    def test_list_filtered_by_supplier(self):
        relationships.add(self.dal, self.grain_house)

        r = self.client.get(f"/api/products/?supplier={self.grain_house.pk}")

        self.assertEqual(r.status_code, 200)
        self.assertEqual([p["id"] for p in r.data["results"]], [self.dal.pk])
        self.assertEqual(r.data["results"][0]["suppliers"], [self.grain_house.pk])

    def test_variation_cannot_be_parent(self):
        large = Product.objects.create(name="Basmati Rice 10kg", price=22, parent=self.rice)
        r = self.client.post("/api/products/", {"name": "Nested", "price": "1.00", "parent": large.pk}, format="json")
        self.assertEqual(r.status_code, 400)
