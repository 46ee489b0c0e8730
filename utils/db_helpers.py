"""
Database helper utilities for query execution through the guarded connection
"""
from utils.logger import get_logger

logger = get_logger(__name__)


def row_to_dict(row):
    """Convert a sqlite3.Row to a plain dict (None passes through)"""
    return dict(row) if row is not None else None


def rows_to_dicts(rows):
    return [dict(r) for r in rows]


def execute_query_safe(db, query, params=None, fetch_one=False, fetch_all=False, commit=False):
    """
    Execute a single statement while holding the connection lock

    Args:
        db: DbConnection
        query: SQL query string
        params: Query parameters (tuple or dict)
        fetch_one: If True, return single row as a dict
        fetch_all: If True, return all rows as dicts
        commit: If True, run inside a transaction and return the row count

    Returns:
        Query result based on the fetch_one/fetch_all/commit flags
    """
    guard = db.transaction if commit else db.lock
    try:
        with guard() as conn:
            cur = conn.execute(query, params or ())
            if fetch_one:
                return row_to_dict(cur.fetchone())
            if fetch_all:
                return rows_to_dicts(cur.fetchall())
            return cur.rowcount
    except Exception as e:
        logger.error(f"Query execution error: {str(e)}", exc_info=True)
        raise

