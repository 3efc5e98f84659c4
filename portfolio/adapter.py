"""
Serverless request adapter.

The host hands every invocation to a WSGI callable as (environ,
start_response). RequestAdapter passes that pair straight into the Flask app
and only steps in when the app itself raises.
"""

from portfolio.middleware import FALLBACK_BODY
from portfolio.utils import setup_logger

logger = setup_logger(__name__)


class RequestAdapter:
    """WSGI callable forwarding the host's request/response pair to an app."""

    def __init__(self, wsgi_app):
        self.wsgi_app = wsgi_app

    def __call__(self, environ, start_response):
        try:
            return self.wsgi_app(environ, start_response)
        except Exception as e:
            logger.exception(
                f"[ADAPTER] {environ.get('REQUEST_METHOD')} {environ.get('PATH_INFO')} escaped the app: {e}"
            )
            body = FALLBACK_BODY.encode("utf-8")
            start_response(
                "500 INTERNAL SERVER ERROR",
                [
                    ("Content-Type", "text/plain; charset=utf-8"),
                    ("Content-Length", str(len(body))),
                ],
            )
            return [body]
