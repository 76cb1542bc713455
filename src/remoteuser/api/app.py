# SPDX-License-Identifier: Apache-2.0

"""Flask application factory for remoteuser API."""

from __future__ import annotations

import flask
from oslo_middleware import request_id

from remoteuser import auth
from remoteuser import session
from remoteuser.api import errors
from remoteuser.api.blueprints import identity
from remoteuser.api.blueprints import root


def create_app(config=None):
    """Create and configure the Flask application.

    :param config: Optional configuration dictionary to override defaults
    :returns: Configured Flask application instance
    """
    app = flask.Flask(__name__)

    # Defaults
    app.config.setdefault("REMOTE_USER_DELAY_AUTH_DECISION", False)
    app.config.setdefault("REMOTE_USER_USE_SESSION", True)
    app.config.setdefault("REMOTE_USER_CACHE", True)
    app.config.setdefault("REMOTE_USER_COOKIE_NAME", "REMOTEUSERSESSIONID")
    app.config.setdefault("REMOTE_USER_SESSION_TIMEOUT", 1800)

    if config:
        app.config.update(config)

    errors.register_handlers(app)

    app.register_blueprint(root.bp)
    app.register_blueprint(identity.bp)

    _init_auth(app)

    return app


def _init_auth(app):
    """Wrap the WSGI application in the authentication pipeline.

    The request id filter runs first so the request context picks it up.

    :param app: Flask application instance
    """
    store = session.SessionStore(
        timeout=app.config["REMOTE_USER_SESSION_TIMEOUT"]
    )
    app.extensions["remoteuser_sessions"] = store

    auth_app = auth.RemoteUserAuthProtocol(
        app.wsgi_app,
        {
            "delay_auth_decision": app.config["REMOTE_USER_DELAY_AUTH_DECISION"],
            "use_session": app.config["REMOTE_USER_USE_SESSION"],
            "cache": app.config["REMOTE_USER_CACHE"],
            "session_cookie_name": app.config["REMOTE_USER_COOKIE_NAME"],
            "session_store": store,
        },
    )
    app.wsgi_app = request_id.RequestId(auth_app)


def build_flask_config(conf):
    """Map oslo.config options onto Flask configuration keys.

    :param conf: Parsed oslo.config ConfigOpts
    :returns: Flask config dictionary
    """
    return {
        "REMOTE_USER_DELAY_AUTH_DECISION": conf.remote_user.delay_auth_decision,
        "REMOTE_USER_USE_SESSION": conf.remote_user.use_session,
        "REMOTE_USER_CACHE": conf.remote_user.cache,
        "REMOTE_USER_COOKIE_NAME": conf.remote_user.session_cookie_name,
        "REMOTE_USER_SESSION_TIMEOUT": conf.remote_user.session_timeout,
    }
