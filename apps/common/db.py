"""Database connection options derived from settings."""


def timeout_options(engine, seconds):
    """
    Connection OPTIONS that bound how long a database call may wait.

    SQLite waits at most ``seconds`` for a write lock. PostgreSQL gives up
    on connecting, on waiting for a row or table lock, and on any single
    statement after ``seconds``. Expiry raises ``OperationalError``, which
    the ledger reports as a sale that was not committed.

    Returns:
        dict: Options to merge into ``DATABASES[alias]['OPTIONS']``; empty
        for other engines.
    """
    if engine == 'django.db.backends.sqlite3':
        return {'timeout': seconds}
    if engine.startswith('django.db.backends.postgresql'):
        millis = seconds * 1000
        return {
            'connect_timeout': seconds,
            'options': f'-c statement_timeout={millis} -c lock_timeout={millis}',
        }
    return {}
