from django.core.management.base import BaseCommand

from notifications.events import NOTIFY_SUPPLIERS_REQUESTED, events
from orders.models import Order


class Command(BaseCommand):
    help = 'Send supplier notification emails for one or more orders'

    def add_arguments(self, parser):
        parser.add_argument('order_ids', nargs='+', type=int)

    def handle(self, *args, **options):
        for order_id in options['order_ids']:
            order = Order.objects.filter(pk=order_id).first()
            if order is None:
                self.stderr.write(self.style.ERROR(f'Order #{order_id} not found'))
                continue

            results = [r for r in events.emit(NOTIFY_SUPPLIERS_REQUESTED, order=order) if r is not None]
            if not results:
                self.stdout.write(f'Order #{order_id}: notifications are disabled')
                continue

            result = results[0]
            self.stdout.write(
                self.style.SUCCESS(
                    f'Order #{order_id}: {result.sent} sent, {result.failed} failed'
                )
            )
