"""
Database bootstrap: locate the data directory, open the database file and
make sure the employees table exists
"""
import os
import sqlite3
import sys

from config import DB_FILENAME
from utils.logger import get_logger

logger = get_logger(__name__)

EMPLOYEES_SCHEMA = """CREATE TABLE IF NOT EXISTS employees (
    epf_number TEXT PRIMARY KEY,
    name_with_initials TEXT NOT NULL,
    full_name TEXT NOT NULL,
    dob TEXT,
    police_area TEXT,
    transport_route TEXT,
    mobile_1 TEXT,
    mobile_2 TEXT,
    address TEXT,
    date_of_join TEXT,
    date_of_resign TEXT,
    working_status TEXT DEFAULT 'active',
    marital_status TEXT,
    job_role TEXT,
    department TEXT,
    created_at TEXT DEFAULT CURRENT_TIMESTAMP
)"""


class StorageError(Exception):
    """Raised when the database cannot be opened or its schema created"""
    pass


class AppDataDirError(Exception):
    """Raised when the platform application data directory cannot be determined"""
    pass


def app_data_dir(app):
    """
    Return the per-user application data directory for the given app

    An explicit DATA_DIR in the app config wins; otherwise the platform
    convention is used with APP_IDENTIFIER as the folder name.

    Raises:
        AppDataDirError: If no directory can be determined
    """
    configured = app.config.get("DATA_DIR")
    if configured:
        return os.path.abspath(configured)

    identifier = app.config.get("APP_IDENTIFIER")
    if not identifier:
        raise AppDataDirError("No application identifier configured")

    if sys.platform == "win32":
        base = os.environ.get("APPDATA")
        if not base:
            raise AppDataDirError("APPDATA is not set")
        return os.path.join(base, identifier)

    home = os.path.expanduser("~")
    if not home or home == "~":
        raise AppDataDirError("Unable to determine the home directory")

    if sys.platform == "darwin":
        return os.path.join(home, "Library", "Application Support", identifier)

    base = os.environ.get("XDG_DATA_HOME") or os.path.join(home, ".local", "share")
    return os.path.join(base, identifier)


def resolve_data_dir(app):
    """
    Resolve the directory that holds the database file

    Falls back to the current working directory, then to ".", when the
    application data directory is unavailable. Never raises.
    """
    try:
        data_dir = app_data_dir(app)
    except AppDataDirError as e:
        logger.error(f"Failed to get app data directory: {e}")
        try:
            data_dir = os.getcwd()
        except OSError:
            data_dir = "."

    try:
        os.makedirs(data_dir, exist_ok=True)
    except OSError as e:
        # The open below reports the real failure if the directory is missing
        logger.error(f"Failed to create app data directory: {e}")

    return data_dir


def init_db(app):
    """
    Open the database and create the employees table if needed

    Args:
        app: Flask application whose config locates the data directory

    Returns:
        Open sqlite3 connection with the schema in place

    Raises:
        StorageError: If the database cannot be opened or the schema created
    """
    db_path = os.path.join(resolve_data_dir(app), DB_FILENAME)
    logger.info(f"Database path: {db_path}")

    try:
        # Shared across the server's worker threads behind DbConnection's lock
        conn = sqlite3.connect(db_path, check_same_thread=False)
    except sqlite3.Error as e:
        raise StorageError(f"Unable to open database at {db_path}: {e}") from e

    try:
        conn.execute(EMPLOYEES_SCHEMA)
        conn.commit()
    except sqlite3.Error as e:
        conn.close()
        raise StorageError(f"Unable to create employees table in {db_path}: {e}") from e

    conn.row_factory = sqlite3.Row
    return conn
