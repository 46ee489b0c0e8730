"""
Employee blueprint: create, read, update and delete employee records
"""
import sqlite3
from datetime import date

from flask import Blueprint, request, jsonify

from db import get_db
from utils.db_helpers import row_to_dict, rows_to_dicts
from utils.logger import get_logger
from utils.validators import (
    validate_employee_data, validate_epf_number, validate_service_dates, ValidationError
)

logger = get_logger(__name__)
employee_bp = Blueprint('employee', __name__, url_prefix='/api/employees')

EMPLOYEE_COLUMNS = (
    'epf_number', 'name_with_initials', 'full_name', 'dob', 'police_area',
    'transport_route', 'mobile_1', 'mobile_2', 'address', 'date_of_join',
    'date_of_resign', 'working_status', 'marital_status', 'job_role',
    'department', 'created_at',
)


def _error(message, status):
    return jsonify({"success": False, "error": message}), status


def _fetch_employee(conn, epf_number):
    cur = conn.execute("SELECT * FROM employees WHERE epf_number = ?", (epf_number,))
    return row_to_dict(cur.fetchone())


@employee_bp.route("", methods=["GET"])
def list_employees():
    """List employees, optionally filtered by status, department or a search term"""
    try:
        clauses = []
        params = []

        status = request.args.get("status", "").strip().lower()
        if status:
            clauses.append("working_status = ?")
            params.append(status)

        department = request.args.get("department", "").strip()
        if department:
            clauses.append("department = ?")
            params.append(department)

        term = request.args.get("q", "").strip()
        if term:
            clauses.append("(epf_number LIKE ? OR name_with_initials LIKE ? OR full_name LIKE ?)")
            params.extend([f"%{term}%"] * 3)

        query = "SELECT * FROM employees"
        if clauses:
            query += " WHERE " + " AND ".join(clauses)
        query += " ORDER BY epf_number"

        with get_db().lock() as conn:
            employees = rows_to_dicts(conn.execute(query, params).fetchall())

        return jsonify({"success": True, "employees": employees, "count": len(employees)})
    except Exception as e:
        logger.error(f"Error listing employees: {str(e)}", exc_info=True)
        return _error("Error loading employees", 500)


@employee_bp.route("/<path:epf_number>", methods=["GET"])
def get_employee(epf_number):
    """Return a single employee by EPF number"""
    try:
        with get_db().lock() as conn:
            employee = _fetch_employee(conn, epf_number.upper())
        if employee is None:
            return _error(f"Employee {epf_number} not found", 404)
        return jsonify({"success": True, "employee": employee})
    except Exception as e:
        logger.error(f"Error loading employee {epf_number}: {str(e)}", exc_info=True)
        return _error("Error loading employee", 500)


@employee_bp.route("", methods=["POST"])
def create_employee():
    """Add a new employee"""
    data = request.get_json(silent=True) or {}
    validated, errors = validate_employee_data(data)
    if errors:
        logger.warning(f"Employee validation failed: {errors}")
        return jsonify({"success": False, "error": "; ".join(errors), "errors": errors}), 400

    columns = [c for c in EMPLOYEE_COLUMNS if c in validated]
    placeholders = ", ".join("?" for _ in columns)
    try:
        with get_db().transaction() as conn:
            conn.execute(
                f"INSERT INTO employees ({', '.join(columns)}) VALUES ({placeholders})",
                [validated[c] for c in columns],
            )
            employee = _fetch_employee(conn, validated['epf_number'])
    except sqlite3.IntegrityError:
        logger.warning(f"Duplicate EPF number: {validated['epf_number']}")
        return _error(f"Employee with EPF number {validated['epf_number']} already exists", 409)
    except Exception as e:
        logger.error(f"Error adding employee: {str(e)}", exc_info=True)
        return _error("Error adding employee", 500)

    logger.info(f"Employee added: {validated['epf_number']}")
    return jsonify({"success": True, "employee": employee}), 201


@employee_bp.route("/<path:epf_number>", methods=["PUT", "PATCH"])
def update_employee(epf_number):
    """Update the supplied fields of an existing employee"""
    try:
        epf_number = validate_epf_number(epf_number)
    except ValidationError as e:
        return _error(str(e), 400)

    data = request.get_json(silent=True) or {}
    validated, errors = validate_employee_data(data, partial=True)
    if errors:
        logger.warning(f"Employee validation failed for {epf_number}: {errors}")
        return jsonify({"success": False, "error": "; ".join(errors), "errors": errors}), 400

    if validated.get('working_status') == 'resign' and not validated.get('date_of_resign'):
        validated['date_of_resign'] = date.today().isoformat()

    columns = [c for c in EMPLOYEE_COLUMNS if c in validated]
    try:
        with get_db().transaction() as conn:
            existing = _fetch_employee(conn, epf_number)
            if existing is None:
                return _error(f"Employee {epf_number} not found", 404)
            merged = {**existing, **validated}
            try:
                validate_service_dates(merged['date_of_join'], merged['date_of_resign'])
            except ValidationError as e:
                logger.warning(f"Employee validation failed for {epf_number}: {e}")
                return _error(str(e), 400)
            if columns:
                assignments = ", ".join(f"{c} = ?" for c in columns)
                conn.execute(
                    f"UPDATE employees SET {assignments} WHERE epf_number = ?",
                    [validated[c] for c in columns] + [epf_number],
                )
            employee = _fetch_employee(conn, epf_number)
    except Exception as e:
        logger.error(f"Error updating employee {epf_number}: {str(e)}", exc_info=True)
        return _error("Error updating employee", 500)

    logger.info(f"Employee updated: {epf_number} ({', '.join(columns) or 'no changes'})")
    return jsonify({"success": True, "employee": employee})


@employee_bp.route("/<path:epf_number>", methods=["DELETE"])
def delete_employee(epf_number):
    """Delete an employee"""
    epf_number = epf_number.upper()
    try:
        with get_db().transaction() as conn:
            deleted = conn.execute(
                "DELETE FROM employees WHERE epf_number = ?", (epf_number,)
            ).rowcount
    except Exception as e:
        logger.error(f"Error deleting employee {epf_number}: {str(e)}", exc_info=True)
        return _error("Error deleting employee", 500)

    if not deleted:
        return _error(f"Employee {epf_number} not found", 404)

    logger.info(f"Employee deleted: {epf_number}")
    return jsonify({"success": True})
