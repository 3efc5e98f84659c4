"""
IJ Portfolio — Flask API Server
Serves the portfolio content stored in MongoDB.

Endpoints:
  GET  /                        — welcome message + endpoint index
  GET  /api/v1/<resource>       — about, projects, skills, experiences, education,
                                  certifications, services, testimonials, blogs, socials
  GET  /api/v1/projects/<slug>  — single project
  GET  /api/v1/blogs/<slug>     — single blog post
  POST /api/v1/contact          — contact form
  GET  /api/v1/health           — liveness + database status
"""

import sys
from pathlib import Path

# ── Path setup ────────────────────────────────────────────
BASE_DIR = Path(__file__).resolve().parent
sys.path.insert(0, str(BASE_DIR))

from portfolio.app import create_app
from portfolio.config import PORT

# Single process-wide instance; the database connection is opened here once.
app = create_app()


# ── Run ───────────────────────────────────────────────────
# Vercel imports `app` through api/index.py and never calls app.run()

if __name__ == "__main__":
    print("\n" + "="*50)
    print("  IJ PORTFOLIO — API SERVER")
    print(f"  http://localhost:{PORT}")
    print("="*50 + "\n")
    app.run(host="0.0.0.0", port=PORT, debug=False, threaded=True)
