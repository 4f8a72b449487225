"""Flask application factory for the Warrantel API."""

import logging

from dotenv import load_dotenv
load_dotenv()  # Load .env file if present (already gitignored)

from flask import Flask, jsonify

from config import settings


def create_app(store=None):
    """Create and configure the Flask application.

    ``store`` overrides the record store chosen by ``WARRANTEL_STORE``;
    tests pass a MemoryRecordStore here.
    """
    logging.basicConfig(level=settings.LOG_LEVEL, format=settings.LOG_FORMAT)

    app = Flask(__name__)
    app.config["SECRET_KEY"] = settings.FLASK_SECRET_KEY
    app.json.sort_keys = False
    app.config["RECORD_STORE"] = store

    from web.routes.api import bp as api_bp
    app.register_blueprint(api_bp, url_prefix="/api/v1")

    @app.errorhandler(404)
    def not_found(e):
        return jsonify({"error": "Not found"}), 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        return jsonify({"error": "Method not allowed"}), 405

    @app.errorhandler(500)
    def server_error(e):
        return jsonify({"error": "Internal server error"}), 500

    @app.route("/health")
    def health_check():
        return jsonify({"status": "healthy", "version": settings.APP_VERSION}), 200

    return app
