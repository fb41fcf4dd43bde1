"""
Management command to create the bootstrap admin account.

Reads DEFAULT_ADMIN_MOBILE and DEFAULT_ADMIN_PASSWORD from settings
(environment / .env) unless given on the command line. Safe to run on
every deploy: an existing admin is left untouched.

Usage:
    python manage.py ensure_default_admin
    python manage.py ensure_default_admin --mobile 9000000000 --password secret
"""

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from apps.accounts.services import ensure_default_admin


class Command(BaseCommand):
    help = 'Create the default admin account if it does not exist'

    def add_arguments(self, parser):
        parser.add_argument('--mobile', help='Admin mobile number')
        parser.add_argument('--password', help='Admin password')

    def handle(self, *args, **options):
        mobile = options['mobile'] or settings.DEFAULT_ADMIN_MOBILE
        password = options['password'] or settings.DEFAULT_ADMIN_PASSWORD

        if not mobile or not password:
            raise CommandError(
                'DEFAULT_ADMIN_MOBILE and DEFAULT_ADMIN_PASSWORD must be set'
            )

        admin, created = ensure_default_admin(mobile=mobile, password=password)

        if created:
            self.stdout.write(self.style.SUCCESS(f'Default admin {admin.mobile} created'))
        else:
            self.stdout.write(f'Admin {admin.mobile} already exists')
