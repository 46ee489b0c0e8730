"""
Quick script to check which database the app uses and what it contains
"""
import sys

from app import create_app
from database import StorageError
from db import get_db
from utils.db_helpers import execute_query_safe


def main():
    try:
        app = create_app()
    except StorageError as e:
        print(f"❌ Database error: {e}")
        return 1

    with app.app_context():
        db = get_db()
        path = execute_query_safe(db, "PRAGMA database_list", fetch_one=True)["file"]
        print(f"Database: {path}")

        count = execute_query_safe(db, "SELECT COUNT(*) AS n FROM employees", fetch_one=True)["n"]
        print(f"✅ Found {count} employee(s) in the database")

        if count > 0:
            employees = execute_query_safe(
                db,
                "SELECT epf_number, name_with_initials, department, working_status "
                "FROM employees ORDER BY epf_number",
                fetch_all=True,
            )
            print("\nEmployee List:")
            print("-" * 60)
            for emp in employees:
                print(f"EPF: {emp['epf_number']}, Name: {emp['name_with_initials']}, "
                      f"Dept: {emp['department'] or 'N/A'}, Status: {emp['working_status'] or 'N/A'}")
        else:
            print("\n⚠️  No employees found in database.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
