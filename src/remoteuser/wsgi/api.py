# SPDX-License-Identifier: Apache-2.0

"""WSGI entrypoint for the remoteuser API."""

from __future__ import annotations

from oslo_config import cfg
from oslo_log import log as logging

from remoteuser import conf  # noqa: F401 - registers config options
from remoteuser.api import app

CONF = cfg.CONF


def init_application(conf=CONF, argv=None):
    """Parse configuration, set up logging and build the application.

    :param conf: oslo.config ConfigOpts to parse
    :param argv: Command line arguments; WSGI servers pass none
    :returns: WSGI application
    """
    logging.register_options(conf)
    conf(argv or [], project="remoteuser")
    logging.setup(conf, "remoteuser")

    return app.create_app(config=app.build_flask_config(conf))


# WSGI servers (gunicorn/uwsgi) should load this module path:
#   remoteuser.wsgi.api:application
application = init_application()
