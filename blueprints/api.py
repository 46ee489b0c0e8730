"""
API blueprint for dashboard statistics and form lookups
"""
from datetime import date, timedelta

from flask import Blueprint, jsonify

from config import RECENT_DAYS
from db import get_db
from utils.db_helpers import execute_query_safe
from utils.logger import get_logger

logger = get_logger(__name__)
api_bp = Blueprint('api', __name__, url_prefix='/api')

LOOKUP_COLUMNS = {
    'departments': 'department',
    'transport_routes': 'transport_route',
    'police_areas': 'police_area',
}


@api_bp.route("/dashboard-stats")
def dashboard_stats():
    """API endpoint to get dashboard statistics"""
    try:
        today = date.today().isoformat()
        cutoff = (date.today() - timedelta(days=RECENT_DAYS)).isoformat()

        with get_db().lock() as conn:
            stats = conn.execute("""
                SELECT
                    COUNT(*) AS total_employees,
                    COALESCE(SUM(CASE WHEN working_status = 'active' THEN 1 ELSE 0 END), 0) AS active_employees,
                    COALESCE(SUM(CASE WHEN working_status = 'resign' THEN 1 ELSE 0 END), 0) AS resigned_employees,
                    COALESCE(SUM(CASE WHEN date_of_join >= ? AND date_of_join <= ? THEN 1 ELSE 0 END), 0) AS recent_joinings,
                    COALESCE(SUM(CASE WHEN date_of_resign >= ? AND date_of_resign <= ? THEN 1 ELSE 0 END), 0) AS recent_resignations
                FROM employees
            """, (cutoff, today, cutoff, today)).fetchone()

            departments = conn.execute("""
                SELECT department AS name, COUNT(*) AS count
                FROM employees
                WHERE working_status = 'active'
                  AND department IS NOT NULL AND department != ''
                GROUP BY department
                ORDER BY count DESC, department COLLATE NOCASE
            """).fetchall()

        return jsonify({
            "success": True,
            "total_employees": stats["total_employees"],
            "active_employees": stats["active_employees"],
            "resigned_employees": stats["resigned_employees"],
            "recent_joinings": stats["recent_joinings"],
            "recent_resignations": stats["recent_resignations"],
            "departments": [dict(d) for d in departments],
        })
    except Exception as e:
        logger.error(f"Error in dashboard_stats API: {str(e)}", exc_info=True)
        return jsonify({"success": False, "error": "Error loading dashboard statistics"}), 500


@api_bp.route("/lookups")
def lookups():
    """Distinct departments, transport routes and police areas for the employee form"""
    try:
        db = get_db()
        result = {"success": True}
        for key, column in LOOKUP_COLUMNS.items():
            rows = execute_query_safe(
                db,
                f"""
                SELECT DISTINCT {column} AS value
                FROM employees
                WHERE {column} IS NOT NULL AND {column} != ''
                ORDER BY {column} COLLATE NOCASE
                """,
                fetch_all=True,
            )
            result[key] = [r["value"] for r in rows]
        return jsonify(result)
    except Exception as e:
        logger.error(f"Error in lookups API: {str(e)}", exc_info=True)
        return jsonify({"success": False, "error": "Error loading lookups"}), 500


@api_bp.route("/health")
def health():
    """Report the database file in use"""
    row = execute_query_safe(get_db(), "PRAGMA database_list", fetch_one=True)
    return jsonify({"success": True, "database_path": row["file"]})
