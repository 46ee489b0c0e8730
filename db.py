"""
Database connection utilities
"""
import threading
from contextlib import contextmanager

from flask import current_app

from utils.logger import get_logger

logger = get_logger(__name__)

EXTENSION_KEY = "hrm_db"


class DbConnection:
    """
    The application's single database connection behind a lock

    Command handlers must go through lock() or transaction(); only one of
    them can use the connection at a time.
    """

    def __init__(self, conn):
        self._conn = conn
        self._lock = threading.Lock()

    @contextmanager
    def lock(self):
        """Wait for exclusive access and yield the connection"""
        with self._lock:
            yield self._conn

    @contextmanager
    def transaction(self):
        """Like lock(), but commit on success and roll back on error"""
        with self._lock:
            try:
                yield self._conn
                self._conn.commit()
            except Exception:
                self._conn.rollback()
                raise

    def close(self):
        with self._lock:
            self._conn.close()
        logger.debug("Database connection closed")


def init_app(app, conn):
    """Publish an initialized connection to the app's command handlers"""
    db = DbConnection(conn)
    app.extensions[EXTENSION_KEY] = db
    return db


def get_db():
    """Return the guarded connection of the current application"""
    return current_app.extensions[EXTENSION_KEY]
