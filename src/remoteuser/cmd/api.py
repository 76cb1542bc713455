# SPDX-License-Identifier: Apache-2.0

"""CLI entrypoint for remoteuser API development server.

This is primarily for development/testing. In production, use a WSGI server
like uWSGI or gunicorn with the remoteuser.wsgi.api:application entry point.

Usage:
    remoteuser-api  # Start development server on default port
"""

from __future__ import annotations

import sys

from oslo_config import cfg
from oslo_log import log as logging

from remoteuser import conf  # noqa: F401 - registers config options
from remoteuser.api import app

CONF = cfg.CONF
LOG = logging.getLogger(__name__)


def main() -> int:
    """Run the remoteuser API development server.

    :returns: exit code (0 for success, non-zero for failure)
    """
    # Register logging options and parse config
    logging.register_options(CONF)
    try:
        CONF(sys.argv[1:], project="remoteuser")
    except cfg.ConfigFilesNotFoundError:
        # Config file is optional for development
        CONF(sys.argv[1:], project="remoteuser", default_config_files=[])

    logging.setup(CONF, "remoteuser")

    LOG.info("Starting remoteuser API development server")

    flask_app = app.create_app(config=app.build_flask_config(CONF))

    # Run Flask development server
    # Note: This is NOT suitable for production use
    flask_app.run(
        host=CONF.api.host,
        port=CONF.api.port,
        debug=CONF.debug,
    )

    return 0


if __name__ == "__main__":
    sys.exit(main())
