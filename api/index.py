"""
Vercel Serverless Function Entry Point
Exports the Flask app, wrapped in the request adapter, as the WSGI handler

Vercel imports this module once per cold start and calls `app` with the
(environ, start_response) pair of every incoming request.
"""
import sys
from pathlib import Path

# Add parent directory to path so we can import server.py and portfolio/
BASE_DIR = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(BASE_DIR))

from server import app as flask_app
from portfolio.adapter import RequestAdapter

app = RequestAdapter(flask_app)

__all__ = ['app']
