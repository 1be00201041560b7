#!/usr/bin/env python3
"""
Fieldnote Web Interface

Flask app serving the research notebook API: projects, interviews,
tags, the interview template and insights.
"""

import json
import logging

from flask import Flask, jsonify
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException

import config
from routes import (
    insights_bp,
    interviews_bp,
    projects_bp,
    tags_bp,
    template_bp,
)

logger = logging.getLogger(__name__)


def create_app() -> Flask:
    app = Flask(__name__)
    app.json.sort_keys = False

    app.register_blueprint(projects_bp)
    app.register_blueprint(interviews_bp)
    app.register_blueprint(tags_bp)
    app.register_blueprint(template_bp)
    app.register_blueprint(insights_bp)

    @app.errorhandler(ValidationError)
    def handle_validation_error(e):
        return jsonify({
            "error": "Validation failed",
            "details": json.loads(e.json(include_url=False)),
        }), 400

    @app.errorhandler(ValueError)
    def handle_value_error(e):
        return jsonify({"error": str(e)}), 400

    @app.errorhandler(KeyError)
    def handle_key_error(e):
        message = e.args[0] if e.args else "Not found"
        return jsonify({"error": str(message)}), 404

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        if isinstance(e, HTTPException):
            return e
        logger.exception("Unhandled error")
        return jsonify({"error": "Internal server error"}), 500

    @app.route("/api/health")
    def health():
        return jsonify({"status": "ok"})

    return app


app = create_app()


if __name__ == "__main__":
    config.setup_logging()
    print(f"\n  Fieldnote running at: http://localhost:{config.WEB_PORT}\n")
    app.run(debug=True, port=config.WEB_PORT, threaded=True)
