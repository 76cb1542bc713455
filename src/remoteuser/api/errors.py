# SPDX-License-Identifier: Apache-2.0

"""JSON error handling for remoteuser API.

Error responses use the OpenStack API error format::

    {
        "errors": [
            {
                "status": <http_status_code>,
                "title": "<error_title>",
                "detail": "<error_detail>"
            }
        ]
    }
"""

from __future__ import annotations

import flask


class APIError(Exception):
    """Base exception for API errors with JSON formatting."""

    status_code = 500
    title = "Internal Server Error"

    def __init__(self, detail=None):
        """Initialize the API error.

        :param detail: Detailed error message
        """
        super(APIError, self).__init__(detail)
        self.detail = detail or self.title

    def to_response(self):
        """Convert exception to a JSON error response.

        :returns: Tuple of (JSON response, status code)
        """
        error = {
            "status": self.status_code,
            "title": self.title,
            "detail": self.detail,
        }
        body = {"errors": [error]}
        return flask.jsonify(body), self.status_code


class Unauthorized(APIError):
    """Request carries no authenticated user (401)."""

    status_code = 401
    title = "Unauthorized"


def error_response(status, title, detail):
    """Create a JSON error response.

    :param status: HTTP status code
    :param title: Short error title
    :param detail: Detailed error message
    :returns: Tuple of (JSON response, status code)
    """
    body = {
        "errors": [
            {
                "status": status,
                "title": title,
                "detail": detail,
            }
        ]
    }
    return flask.jsonify(body), status


def register_handlers(app):
    """Register error handlers for common HTTP errors and APIError exceptions.

    :param app: Flask application instance
    """

    @app.errorhandler(APIError)
    def handle_api_error(error):
        """Handle APIError subclasses."""
        return error.to_response()

    @app.errorhandler(404)
    def not_found(error):
        return error_response(404, "Not Found", "The resource could not be found.")

    @app.errorhandler(405)
    def method_not_allowed(error):
        method = flask.request.method
        resp, status = error_response(
            405, "Method Not Allowed",
            "The method %s is not allowed for this resource." % method
        )
        if hasattr(error, "valid_methods") and error.valid_methods:
            resp.headers["Allow"] = ", ".join(sorted(error.valid_methods))
        return resp, status

    @app.errorhandler(500)
    def internal_error(error):
        return error_response(
            500, "Internal Server Error", "An unexpected error occurred."
        )
