"""
Unit tests for database bootstrap (data directory and schema)
"""
import os
import shutil
import sqlite3
import sys
import tempfile
import unittest
from unittest import mock

from flask import Flask

import database
from database import AppDataDirError, StorageError, app_data_dir, init_db, resolve_data_dir


def make_app(**config):
    app = Flask(__name__)
    app.config.update(config)
    return app


class TestResolveDataDir(unittest.TestCase):
    """Test cases for the data directory fallback chain"""

    def setUp(self):
        self.tmp = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.tmp, ignore_errors=True)

    def test_configured_dir_is_created(self):
        """Test that a configured DATA_DIR is used and created"""
        target = os.path.join(self.tmp, "nested", "data")
        result = resolve_data_dir(make_app(DATA_DIR=target))
        self.assertEqual(result, os.path.abspath(target))
        self.assertTrue(os.path.isdir(target))

    def test_falls_back_to_cwd(self):
        """Test fallback to the working directory when the app data dir fails"""
        with mock.patch("database.app_data_dir", side_effect=AppDataDirError("boom")):
            with self.assertLogs("database", level="ERROR") as logs:
                result = resolve_data_dir(make_app())
        self.assertEqual(result, os.getcwd())
        self.assertIn("Failed to get app data directory", logs.output[0])

    def test_falls_back_to_dot(self):
        """Test fallback to '.' when the working directory is unavailable too"""
        with mock.patch("database.app_data_dir", side_effect=AppDataDirError("boom")), \
                mock.patch("database.os.getcwd", side_effect=OSError("gone")):
            result = resolve_data_dir(make_app())
        self.assertEqual(result, ".")

    def test_directory_creation_failure_is_logged(self):
        """Test that a makedirs failure is logged but not raised"""
        target = os.path.join(self.tmp, "data")
        with mock.patch("database.os.makedirs", side_effect=PermissionError("denied")):
            with self.assertLogs("database", level="ERROR") as logs:
                result = resolve_data_dir(make_app(DATA_DIR=target))
        self.assertEqual(result, os.path.abspath(target))
        self.assertIn("Failed to create app data directory", logs.output[0])

    def test_missing_identifier_raises(self):
        """Test app_data_dir without DATA_DIR or identifier"""
        with self.assertRaises(AppDataDirError):
            app_data_dir(make_app(DATA_DIR="", APP_IDENTIFIER=""))

    @unittest.skipUnless(sys.platform.startswith("linux"), "XDG layout applies to Linux")
    def test_xdg_data_home(self):
        """Test the Linux application data directory"""
        with mock.patch.dict(os.environ, {"XDG_DATA_HOME": self.tmp}):
            result = app_data_dir(make_app(APP_IDENTIFIER="com.example.hrm"))
        self.assertEqual(result, os.path.join(self.tmp, "com.example.hrm"))


class TestInitDb(unittest.TestCase):
    """Test cases for opening the database and creating the schema"""

    def setUp(self):
        self.tmp = tempfile.mkdtemp()
        self.app = make_app(DATA_DIR=self.tmp)

    def tearDown(self):
        shutil.rmtree(self.tmp, ignore_errors=True)

    def test_fresh_directory(self):
        """Test that a fresh directory gets hrm_system.db with an empty table"""
        with self.assertLogs("database", level="INFO") as logs:
            conn = init_db(self.app)
        try:
            self.assertTrue(os.path.isfile(os.path.join(self.tmp, "hrm_system.db")))
            self.assertEqual(conn.execute("SELECT COUNT(*) FROM employees").fetchone()[0], 0)
        finally:
            conn.close()
        self.assertTrue(any("Database path:" in line for line in logs.output))

    def test_schema_columns(self):
        """Test column names, nullability and defaults"""
        conn = init_db(self.app)
        try:
            info = {row["name"]: row for row in conn.execute("PRAGMA table_info(employees)")}
        finally:
            conn.close()

        self.assertEqual(list(info), [
            "epf_number", "name_with_initials", "full_name", "dob", "police_area",
            "transport_route", "mobile_1", "mobile_2", "address", "date_of_join",
            "date_of_resign", "working_status", "marital_status", "job_role",
            "department", "created_at",
        ])
        self.assertEqual(info["epf_number"]["pk"], 1)
        self.assertEqual(info["name_with_initials"]["notnull"], 1)
        self.assertEqual(info["full_name"]["notnull"], 1)
        for name in ("dob", "address", "date_of_resign", "department"):
            self.assertEqual(info[name]["notnull"], 0)
        self.assertEqual(info["working_status"]["dflt_value"], "'active'")
        self.assertEqual(info["created_at"]["dflt_value"], "CURRENT_TIMESTAMP")
        for row in info.values():
            self.assertEqual(row["type"], "TEXT")

    def test_defaults_applied_on_insert(self):
        """Test working_status and created_at defaults"""
        conn = init_db(self.app)
        try:
            conn.execute(
                "INSERT INTO employees (epf_number, name_with_initials, full_name) VALUES (?, ?, ?)",
                ("E1", "A. Perera", "Amal Perera"),
            )
            row = conn.execute("SELECT working_status, created_at FROM employees").fetchone()
        finally:
            conn.close()
        self.assertEqual(row["working_status"], "active")
        self.assertIsNotNone(row["created_at"])

    def test_not_null_enforced(self):
        """Test that full_name is required at the storage layer"""
        conn = init_db(self.app)
        try:
            with self.assertRaises(sqlite3.IntegrityError):
                conn.execute(
                    "INSERT INTO employees (epf_number, name_with_initials) VALUES (?, ?)",
                    ("E1", "A. Perera"),
                )
        finally:
            conn.close()

    def test_idempotent(self):
        """Test that initializing twice keeps one table and its rows"""
        conn = init_db(self.app)
        conn.execute(
            "INSERT INTO employees (epf_number, name_with_initials, full_name) VALUES (?, ?, ?)",
            ("E1", "A. Perera", "Amal Perera"),
        )
        conn.commit()
        conn.close()

        conn = init_db(self.app)
        try:
            tables = conn.execute(
                "SELECT COUNT(*) FROM sqlite_master WHERE type='table' AND name='employees'"
            ).fetchone()[0]
            rows = conn.execute("SELECT COUNT(*) FROM employees").fetchone()[0]
        finally:
            conn.close()
        self.assertEqual(tables, 1)
        self.assertEqual(rows, 1)

    def test_unopenable_path_raises_storage_error(self):
        """Test that a directory in place of the database file fails cleanly"""
        os.makedirs(os.path.join(self.tmp, "hrm_system.db"))
        with self.assertRaises(StorageError):
            init_db(self.app)

    def test_connect_failure_raises_storage_error(self):
        """Test that an open failure is surfaced as StorageError"""
        with mock.patch("database.sqlite3.connect", side_effect=sqlite3.OperationalError("unable to open")):
            with self.assertRaises(StorageError) as ctx:
                init_db(self.app)
        self.assertIsInstance(ctx.exception.__cause__, sqlite3.OperationalError)

    def test_schema_failure_raises_storage_error(self):
        """Test that a failing schema statement is surfaced as StorageError"""
        with mock.patch.object(database, "EMPLOYEES_SCHEMA", "CREATE TABLE broken ("):
            with self.assertRaises(StorageError):
                init_db(self.app)


if __name__ == '__main__':
    unittest.main()
