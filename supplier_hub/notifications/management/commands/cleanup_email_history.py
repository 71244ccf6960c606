from django.core.management.base import BaseCommand, CommandError

from notifications.events import HISTORY_CLEANUP, events


class Command(BaseCommand):
    help = 'Delete supplier email history older than the retention period (run daily)'

    def add_arguments(self, parser):
        parser.add_argument(
            '--days',
            type=int,
            default=None,
            help='Retention in days (defaults to the history_retention_days setting)',
        )

    def handle(self, *args, **options):
        days = options['days']
        if days is not None and days < 0:
            raise CommandError('--days must be zero or more')

        deleted = sum(events.emit(HISTORY_CLEANUP, days=days))
        self.stdout.write(
            self.style.SUCCESS(f'Removed {deleted} email history row(s)')
        )
