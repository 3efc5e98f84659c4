"""
Request pipeline wiring: CORS, request logging and error handlers.

Body parsing and the upload size cap are Flask's own (request.get_json,
request.files, MAX_CONTENT_LENGTH); only the limit is configured here.
"""

import time

from flask import Flask, Response, g, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from portfolio.errors import StorageUnavailable
from portfolio.utils import setup_logger

logger = setup_logger(__name__)

FALLBACK_BODY = "Something broke!"


def fallback_response() -> Response:
    """Fixed plain-text 500 answered for any unexpected failure."""
    return Response(FALLBACK_BODY, status=500, mimetype="text/plain")


def register_cors(app: Flask):
    origins = app.config.get("CORS_ORIGINS") or "*"
    CORS(app, resources={r"/*": {"origins": origins}})


def register_request_logging(app: Flask):
    @app.before_request
    def _start_timer():
        g.request_started = time.perf_counter()

    @app.after_request
    def _log_request(response):
        started = g.get("request_started")
        elapsed = (time.perf_counter() - started) * 1000 if started else 0.0
        length = response.calculate_content_length()
        logger.info(
            f"{request.method} {request.full_path.rstrip('?')} {response.status_code} "
            f"{elapsed:.3f} ms - {length if length is not None else '-'}"
        )
        return response


def register_error_handlers(app: Flask):
    @app.errorhandler(HTTPException)
    def _http_error(e):
        return jsonify({"error": e.name, "status": e.code}), e.code

    @app.errorhandler(StorageUnavailable)
    def _storage_unavailable(e):
        return jsonify({"error": e.message}), e.status_code

    @app.errorhandler(Exception)
    def _unhandled(e):
        logger.exception(f"Unhandled error on {request.method} {request.path}: {e}")
        return fallback_response()


def register_middleware(app: Flask):
    """Install the pipeline in order: CORS, logging, error handling."""
    register_cors(app)
    register_request_logging(app)
    register_error_handlers(app)
