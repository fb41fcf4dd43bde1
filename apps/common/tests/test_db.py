"""Tests for database timeout options."""

from django.conf import settings

from apps.common.db import timeout_options


class TestTimeoutOptions:
    """Tests for db.timeout_options."""

    def test_sqlite_bounds_lock_wait(self):
        assert timeout_options('django.db.backends.sqlite3', 10) == {'timeout': 10}

    def test_postgresql_bounds_locks_and_statements(self):
        options = timeout_options('django.db.backends.postgresql', 7)

        assert options['connect_timeout'] == 7
        assert '-c lock_timeout=7000' in options['options']
        assert '-c statement_timeout=7000' in options['options']

    def test_legacy_engine_name_counts_as_postgresql(self):
        options = timeout_options('django.db.backends.postgresql_psycopg2', 2)

        assert 'lock_timeout=2000' in options['options']

    def test_other_engines_get_nothing(self):
        assert timeout_options('django.db.backends.mysql', 10) == {}

    def test_setting_is_an_integer(self):
        assert isinstance(settings.DATABASE_TIMEOUT, int)
