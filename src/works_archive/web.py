"""Flask app: content tree API, rendered documents, raw files and public assets."""

import logging

from flask import Flask, jsonify, render_template, send_from_directory
from werkzeug.exceptions import NotFound

from ._utils import safe_error_message
from .config import ArchiveConfig
from .render import render_document
from .tree import build_tree

logger = logging.getLogger(__name__)

CONTENT_SECURITY_POLICY = (
    "default-src 'self'; "
    "img-src 'self' https: data:; "
    "style-src 'self' 'unsafe-inline' https://fonts.googleapis.com; "
    "font-src 'self' https://fonts.gstatic.com"
)


def _not_found_response(config: ArchiveConfig):
    """Public 404.html when the assets directory has one, else the bundled page."""
    custom = config.public_dir / "404.html"
    if custom.is_file():
        response = send_from_directory(config.public_dir, "404.html")
        response.status_code = 404
        return response
    return render_template("not_found.html"), 404


def create_app(config: ArchiveConfig) -> Flask:
    app = Flask(__name__)
    app.config["ARCHIVE"] = config

    @app.after_request
    def _security_headers(response):
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Content-Security-Policy"] = CONTENT_SECURITY_POLICY
        return response

    @app.errorhandler(404)
    def _handle_not_found(_e):
        return _not_found_response(config)

    @app.route("/api/tree")
    def api_tree():
        """Full content tree as JSON, rebuilt on every request."""
        try:
            tree = build_tree(
                config.content_root,
                virtual_root=config.virtual_root,
                thumbnail_prefix=config.thumbnail_prefix,
                max_depth=config.tree_max_depth,
            )
        except Exception as e:
            logger.error("Error building content tree: %s", type(e).__name__)
            return jsonify({"error": safe_error_message(e)}), 500
        return jsonify(tree)

    @app.route(f"{config.virtual_root}/<year>/<title>")
    def document(year: str, title: str):
        result = render_document(config.content_root, year, title)
        return result.html, result.status, {"Content-Type": "text/html; charset=utf-8"}

    @app.route("/raw/<path:file_path>")
    def raw_file(file_path: str):
        return send_from_directory(config.content_root, file_path)

    @app.route("/ready")
    def ready():
        """Health/readiness endpoint for Docker/Kubernetes."""
        return jsonify({"status": "ok"}), 200

    @app.route("/", defaults={"asset_path": "index.html"})
    @app.route("/<path:asset_path>")
    def public_asset(asset_path: str):
        try:
            return send_from_directory(config.public_dir, asset_path)
        except NotFound:
            return _not_found_response(config)

    return app
