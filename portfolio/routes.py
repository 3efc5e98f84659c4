"""
Versioned portfolio API (mounted at /api/v1).

Endpoints:
  GET  /api/v1/about             — profile document
  GET  /api/v1/projects          — project list
  GET  /api/v1/skills            — skill list
  GET  /api/v1/experiences       — work experience list
  GET  /api/v1/education         — education list
  GET  /api/v1/certifications    — certification list
  GET  /api/v1/services          — offered services
  GET  /api/v1/testimonials      — testimonials
  GET  /api/v1/blogs             — blog posts
  GET  /api/v1/socials           — social links
  GET  /api/v1/projects/<slug>   — single project
  GET  /api/v1/blogs/<slug>      — single blog post
  POST /api/v1/contact           — contact form (JSON or multipart with attachment)
  GET  /api/v1/health            — liveness + database status
"""

import re
from datetime import datetime, timezone

from bson.binary import Binary
from flask import Blueprint, current_app, jsonify, request
from werkzeug.utils import secure_filename

from portfolio.config import API_PREFIX
from portfolio.errors import StorageUnavailable
from portfolio.utils import setup_logger

logger = setup_logger(__name__)

api = Blueprint("api_v1", __name__, url_prefix=API_PREFIX)

# The profile is a single document; the rest are listed collections
PROFILE = "about"
COLLECTIONS = [
    "projects",
    "skills",
    "experiences",
    "education",
    "certifications",
    "services",
    "testimonials",
    "blogs",
    "socials",
]
# In the order the welcome payload lists them
RESOURCES = [PROFILE, *COLLECTIONS]

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def list_endpoints():
    """The fixed GET endpoints advertised by the root route."""
    return [
        {"name": name, "method": "GET", "path": f"{API_PREFIX}/{name}"}
        for name in RESOURCES
    ]


def _store():
    store = current_app.extensions.get("portfolio_store")
    if store is None:
        raise StorageUnavailable("Storage not configured")
    return store


def _list_view(collection):
    def view():
        docs = _store().list_documents(collection)
        return jsonify({"data": docs, "count": len(docs)})
    return view


# ── Listings ──────────────────────────────────────────────

for _name in COLLECTIONS:
    api.add_url_rule(f"/{_name}", endpoint=_name, view_func=_list_view(_name), methods=["GET"])


@api.route(f"/{PROFILE}")
def about():
    docs = _store().list_documents(PROFILE)
    if not docs:
        return jsonify({"error": "Profile not found"}), 404
    return jsonify({"data": docs[0]})


# ── Details ───────────────────────────────────────────────

@api.route("/projects/<slug>")
def project_detail(slug):
    doc = _store().find_one("projects", {"slug": slug})
    if doc is None:
        return jsonify({"error": "Project not found", "slug": slug}), 404
    return jsonify({"data": doc})


@api.route("/blogs/<slug>")
def blog_detail(slug):
    doc = _store().find_one("blogs", {"slug": slug})
    if doc is None:
        return jsonify({"error": "Blog post not found", "slug": slug}), 404
    return jsonify({"data": doc})


# ── Contact ───────────────────────────────────────────────

def _read_attachment(upload):
    """Validate an uploaded file and shape it for storage. Returns (doc, error)."""
    filename = secure_filename(upload.filename)
    if not filename:
        return None, "Attachment has no filename"
    ext = filename.rsplit(".", 1)[-1].lower() if "." in filename else ""
    allowed = current_app.config["ALLOWED_ATTACHMENT_EXTENSIONS"]
    if ext not in allowed:
        return None, f"Attachment type '.{ext}' not allowed"
    data = upload.read()
    return {
        "filename": filename,
        "content_type": upload.mimetype,
        "size": len(data),
        "data": Binary(data),
    }, None


@api.route("/contact", methods=["POST"])
def contact():
    if request.is_json:
        body = request.get_json(silent=True)
        if body is None:
            body = {}
        if not isinstance(body, dict):
            return jsonify({"error": "Request body must be a JSON object"}), 400
    else:
        body = request.form

    name = str(body.get("name") or "").strip()
    email = str(body.get("email") or "").strip()
    message = str(body.get("message") or "").strip()

    missing = [field for field, value in (("name", name), ("email", email), ("message", message)) if not value]
    if missing:
        return jsonify({"error": "Missing required fields", "fields": missing}), 400
    if not EMAIL_RE.match(email):
        return jsonify({"error": "Invalid email address"}), 400

    doc = {
        "name": name,
        "email": email,
        "message": message,
        "created_at": datetime.now(timezone.utc),
    }

    # browsers send an empty file part when the input is left blank
    upload = request.files.get("attachment")
    if upload is not None and upload.filename:
        attachment, error = _read_attachment(upload)
        if error:
            return jsonify({"error": error}), 400
        doc["attachment"] = attachment

    message_id = _store().insert_message(doc)
    logger.info(f"[CONTACT] Message {message_id} from {email}")
    return jsonify({"id": message_id, "message": "Message received"}), 201


# ── Health ────────────────────────────────────────────────

@api.route("/health")
def health():
    store = current_app.extensions.get("portfolio_store")
    if store is None:
        database = "not_configured"
    elif store.ping():
        database = "connected"
    else:
        database = "unavailable"
    return jsonify({
        "status": "ok" if database == "connected" else "degraded",
        "database": database,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    })
