"""
Application factory.

Everything a request needs (settings, storage handle, middleware, routes) is
built here and hangs off the returned Flask app; nothing is a package-level
singleton.
"""

from typing import Any, Dict, Optional

from flask import Flask, jsonify

from portfolio import config
from portfolio.database import connect_store
from portfolio.middleware import register_middleware
from portfolio.routes import api, list_endpoints

WELCOME_MESSAGE = "Welcome to the IJ portfolio backend API!"

_CONNECT = object()


def create_app(
    overrides: Optional[Dict[str, Any]] = None,
    store=_CONNECT,
) -> Flask:
    """
    Build the portfolio backend.

    Args:
        overrides: settings replacing the environment-derived defaults
        store: storage handle to use; when omitted, connect with MONGODB_URI.
            Pass None to run without storage.
    """
    app = Flask(__name__)
    app.config.update(config.default_settings())
    if overrides:
        app.config.update(overrides)

    if store is _CONNECT:
        store = connect_store(
            app.config["MONGODB_URI"],
            required=app.config["DB_REQUIRED"],
            timeout_ms=app.config["DB_TIMEOUT_MS"],
        )
    app.extensions["portfolio_store"] = store

    register_middleware(app)

    @app.route("/")
    def root():
        return jsonify({"message": WELCOME_MESSAGE, "endpoints": list_endpoints()})

    app.register_blueprint(api)
    return app
