# SPDX-License-Identifier: Apache-2.0

"""Unit tests for the remoteuser errors module."""

from oslotest import base

from remoteuser.api import app, errors


class TestAPIError(base.BaseTestCase):
    """Tests for APIError subclasses."""

    def test_unauthorized(self):
        exc = errors.Unauthorized("who are you")
        self.assertEqual(401, exc.status_code)
        self.assertEqual("Unauthorized", exc.title)
        self.assertEqual("who are you", exc.detail)

    def test_default_detail(self):
        exc = errors.Unauthorized()
        self.assertEqual("Unauthorized", exc.detail)


class TestExceptionToResponse(base.BaseTestCase):
    """Tests for exception to_response method."""

    def test_to_response_format(self):
        """Test that to_response returns the JSON error format."""
        flask_app = app.create_app({"TESTING": True})

        with flask_app.app_context():
            response, status = errors.Unauthorized("No user").to_response()

            self.assertEqual(401, status)
            data = response.get_json()
            self.assertEqual(1, len(data["errors"]))
            self.assertEqual(401, data["errors"][0]["status"])
            self.assertEqual("Unauthorized", data["errors"][0]["title"])
            self.assertEqual("No user", data["errors"][0]["detail"])

    def test_error_response_format(self):
        """Test error_response helper creates correct format."""
        flask_app = app.create_app({"TESTING": True})

        with flask_app.app_context():
            response, status = errors.error_response(
                422, "Unprocessable", "Cannot process request"
            )

            self.assertEqual(422, status)
            data = response.get_json()
            self.assertEqual(422, data["errors"][0]["status"])
            self.assertEqual("Unprocessable", data["errors"][0]["title"])
