"""Identity API blueprint.

Reports the user the request was authenticated as.
"""

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request

from remoteuser import context
from remoteuser.api import errors

bp = Blueprint("identity", __name__)


@bp.route("/whoami", methods=["GET"])
def whoami() -> tuple[Response, int]:
    """Return the authenticated user's name, roles and auth method."""
    ctx = request.environ.get(context.ENV_CONTEXT)
    if ctx is None or ctx.principal is None:
        raise errors.Unauthorized("No authenticated user for this request.")

    return jsonify({
        "user": {
            "name": ctx.principal.name,
            "roles": ctx.principal.roles,
            "auth_method": ctx.auth_method,
        }
    }), 200
