"""
Management command to rebuild customers' embedded sales history.

Recorded sales are authoritative. Without --customer, every customer whose
embedded history or last purchase disagrees with its sales is rebuilt.

Usage:
    python manage.py rebuild_sales_history
    python manage.py rebuild_sales_history --dry-run
    python manage.py rebuild_sales_history --customer <uuid>
"""

import uuid

from django.core.management.base import BaseCommand, CommandError

from apps.customers.models import Customer
from apps.sales.services import rebuild_sales_history, find_history_drift


class Command(BaseCommand):
    help = 'Rebuild embedded customer sales history from recorded sales'

    def add_arguments(self, parser):
        parser.add_argument(
            '--customer',
            help='Rebuild only this customer id',
        )
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show what would be rebuilt without making changes',
        )

    def handle(self, *args, **options):
        dry_run = options['dry_run']

        if options['customer']:
            try:
                customer_id = uuid.UUID(options['customer'])
            except ValueError:
                raise CommandError(f"Invalid customer id {options['customer']}")
            if not Customer.objects.filter(id=customer_id).exists():
                raise CommandError(f"Customer {customer_id} not found")
            customer_ids = [customer_id]
        else:
            customer_ids = find_history_drift()

        if not customer_ids:
            self.stdout.write(
                self.style.SUCCESS('All customer histories match recorded sales.')
            )
            return

        self.stdout.write(f'\nFound {len(customer_ids)} customer(s) to rebuild:\n')
        names = dict(Customer.objects.filter(id__in=customer_ids).values_list('id', 'name'))
        for customer_id in customer_ids:
            self.stdout.write(f'  - {names.get(customer_id, customer_id)} ({customer_id})')

        if dry_run:
            self.stdout.write(
                self.style.WARNING('\n--dry-run mode: No changes made.')
            )
            return

        total = 0
        for customer_id in customer_ids:
            _, entries = rebuild_sales_history(customer_id=customer_id)
            total += entries

        self.stdout.write(
            self.style.SUCCESS(
                f'\nRebuilt {len(customer_ids)} customer(s), {total} history entries.'
            )
        )
