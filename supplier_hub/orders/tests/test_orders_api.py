# orders/tests/test_orders_api.py
from django.contrib.admin.sites import site
from django.contrib.auth import get_user_model
from django.contrib.messages.storage.fallback import FallbackStorage
from django.core import mail
from django.test import RequestFactory, TestCase
from rest_framework.test import APIClient

from notifications.models import EmailLog, NotificationSetting
from orders.admin import notify_suppliers
from orders.models import Order, OrderItem
from orders.services import OrderProvider
from products.models import Product
from suppliers.models import Supplier
from suppliers.relationships import relationships

User = get_user_model()


class OrderApiTests(TestCase):
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
        relationships.add(self.rice, self.spice_co)
        relationships.add(self.dal, self.grain_house)

    def test_create_order(self):
        r = self.client.post("/api/orders/", {
            "customer_name": "Priya",
            "items": [{"product": self.rice.pk, "quantity": 2}],
        }, format="json")
        self.assertEqual(r.status_code, 201)
        o = Order.objects.get(id=r.data["id"])
        self.assertEqual(o.status, Order.Status.CREATED)
        self.assertEqual(str(o.total_price), "24.00")
        self.assertEqual(o.items.get().product_name, "Basmati Rice")
        self.assertEqual(len(mail.outbox), 0)

    def test_create_order_in_trigger_status_notifies_suppliers(self):
        r = self.client.post("/api/orders/", {
            "customer_name": "Priya",
            "status": "processing",
            "items": [
                {"product": self.rice.pk, "quantity": 2},
                {"product": self.dal.pk, "quantity": 1},
            ],
        }, format="json")
        self.assertEqual(r.status_code, 201)
        self.assertEqual(sorted(m.to[0] for m in mail.outbox), ["orders@spice.example", "sales@grain.example"])
        self.assertEqual(EmailLog.objects.filter(order_id=r.data["id"]).count(), 2)

    def test_status_update_notifies_suppliers(self):
        o = Order.objects.create(customer_name="Priya")
        OrderItem.objects.create(order=o, product=self.rice, quantity=1, unit_price=12)

        r = self.client.patch(f"/api/orders/{o.pk}/", {"status": "processing"}, format="json")

        self.assertEqual(r.status_code, 200)
        self.assertEqual(len(mail.outbox), 1)

    def test_notify_suppliers_action(self):
        o = Order.objects.create(customer_name="Priya", status=Order.Status.COMPLETED)
        OrderItem.objects.create(order=o, product=self.rice, quantity=1, unit_price=12)
        OrderItem.objects.create(order=o, product=self.dal, quantity=3, unit_price=4)

        r = self.client.post(f"/api/orders/{o.pk}/notify-suppliers/")

        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.data["order_id"], o.pk)
        self.assertEqual((r.data["sent"], r.data["failed"]), (2, 0))
        self.assertEqual(
            [outcome["supplier_id"] for outcome in r.data["outcomes"]],
            [self.spice_co.pk, self.grain_house.pk],
        )
        self.assertEqual(len(mail.outbox), 2)

    def test_notify_suppliers_when_disabled(self):
        NotificationSetting.objects.create(key="notifications_enabled", value="0")
        o = Order.objects.create(customer_name="Priya")
        OrderItem.objects.create(order=o, product=self.rice, quantity=1, unit_price=12)

        r = self.client.post(f"/api/orders/{o.pk}/notify-suppliers/")

        self.assertEqual(r.status_code, 409)
        self.assertEqual(len(mail.outbox), 0)

    def test_notify_unknown_order(self):
        r = self.client.post("/api/orders/9999/notify-suppliers/")
        self.assertEqual(r.status_code, 404)

    def test_filter_by_status(self):
        Order.objects.create(customer_name="A")
        done = Order.objects.create(customer_name="B", status=Order.Status.COMPLETED)

        r = self.client.get("/api/orders/?status=completed")

        self.assertEqual([o["id"] for o in r.data["results"]], [done.pk])


class OrderProviderTests(TestCase):
    def test_line_items_resolve_variations_to_parent(self):
        rice = Product.objects.create(name="Basmati Rice", sku="RICE", price=12)
        rice_10kg = Product.objects.create(name="Basmati Rice 10kg", sku="RICE-10", price=22, parent=rice)
        o = Order.objects.create(customer_name="Priya")
        OrderItem.objects.create(order=o, product=rice_10kg, quantity=2, unit_price=22)

        (item,) = OrderProvider().line_items(o)

        self.assertEqual(item.product_id, rice.pk)
        self.assertEqual(item.display_name, "Basmati Rice 10kg")
        self.assertEqual(item.sku, "RICE-10")
        self.assertEqual(item.quantity, 2)

    def test_get_order(self):
        o = Order.objects.create(customer_name="Priya")
        self.assertEqual(OrderProvider().get_order(o.pk), o)
        self.assertIsNone(OrderProvider().get_order(o.pk + 1))


class NotifySuppliersAdminActionTests(TestCase):
    def setUp(self):
        self.manager = User.objects.create_superuser(
            username="admin", email="admin@shop.example", password="pass1234"
        )
        rice = Product.objects.create(name="Basmati Rice", price=12)
        spice_co = Supplier.objects.create(name="Spice Co", email="orders@spice.example")
        relationships.add(rice, spice_co)
        self.order = Order.objects.create(customer_name="Priya")
        OrderItem.objects.create(order=self.order, product=rice, quantity=1, unit_price=12)

    def run_action(self):
        request = RequestFactory().post("/admin/orders/order/")
        request.user = self.manager
        request.session = {}
        storage = FallbackStorage(request)
        request._messages = storage
        notify_suppliers(site._registry[Order], request, Order.objects.all())
        return [str(m) for m in storage]

    def test_reports_totals(self):
        self.assertEqual(self.run_action(), ["Supplier emails: 1 sent, 0 failed."])
        self.assertEqual(len(mail.outbox), 1)

    def test_reports_disabled(self):
        NotificationSetting.objects.create(key="notifications_enabled", value="0")
        self.assertEqual(self.run_action(), ["Supplier notifications are disabled."])
