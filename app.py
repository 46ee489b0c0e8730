"""
Application factory for the HRM System
"""
from flask import Flask, jsonify

import config
import db
from blueprints import employee_bp, api_bp
from database import init_db
from utils.logger import get_logger

logger = get_logger(__name__)


def create_app(overrides=None):
    """
    Build the Flask app with an initialized database

    Args:
        overrides: Optional dict of config values (e.g. DATA_DIR for tests)

    Raises:
        StorageError: If the database cannot be opened or initialized
    """
    app = Flask(__name__)
    app.config.from_object(config)
    if overrides:
        app.config.update(overrides)

    # Database must be ready before any handler can run
    conn = init_db(app)
    db.init_app(app, conn)

    app.register_blueprint(employee_bp)
    app.register_blueprint(api_bp)

    @app.after_request
    def hide_server_header(response):
        response.headers['Server'] = 'SecureServer'
        return response

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({"success": False, "error": "Not found"}), 404

    logger.info(f"{app.config['APP_NAME']} initialized")
    return app


if __name__ == "__main__":
    app = create_app()
    try:
        app.run(host=config.HOST, port=config.PORT, debug=config.DEBUG, threaded=True)
    finally:
        app.extensions[db.EXTENSION_KEY].close()
