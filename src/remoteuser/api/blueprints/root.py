"""Root API blueprint.

Implements the root endpoint for version discovery.
"""

from __future__ import annotations

from flask import Blueprint, Response, jsonify

bp = Blueprint("root", __name__)

VERSION = "1.0"


@bp.route("/", methods=["GET"])
def home() -> tuple[Response, int]:
    """Return version discovery information."""
    version_data = {
        "id": f"v{VERSION}",
        "status": "CURRENT",
        "links": [
            {
                "rel": "self",
                "href": "",
            }
        ],
    }

    resp = jsonify({"versions": [version_data]})
    resp.content_type = "application/json"
    return resp, 200
