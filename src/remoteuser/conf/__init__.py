"""remoteuser configuration options.

This module defines configuration options for the remoteuser service using
oslo.config. Options are organized into groups following OpenStack patterns.
"""

from __future__ import annotations

from typing import Any

from oslo_config import cfg
from oslo_log import log

LOG = log.getLogger(__name__)

CONF = cfg.CONF

remote_user_opts: list[cfg.Opt] = [
    cfg.BoolOpt(
        "delay_auth_decision",
        default=False,
        help="Pass requests without a trusted username header on to the "
        "application instead of rejecting them with 401 Unauthorized.",
    ),
    cfg.BoolOpt(
        "use_session",
        default=True,
        help="Create a session and send a session cookie when a remote user "
        "is registered.",
    ),
    cfg.BoolOpt(
        "cache",
        default=True,
        help="Restore the principal cached in the session on subsequent "
        "requests carrying the session cookie.",
    ),
    cfg.StrOpt(
        "session_cookie_name",
        default="REMOTEUSERSESSIONID",
        help="Name of the session cookie.",
    ),
    cfg.IntOpt(
        "session_timeout",
        default=1800,
        min=0,
        help="Seconds a session may stay idle before it expires. "
        "0 disables expiry.",
    ),
]

api_opts: list[cfg.Opt] = [
    cfg.HostAddressOpt(
        "host",
        default="0.0.0.0",
        help="Address the development server listens on.",
    ),
    cfg.PortOpt(
        "port",
        default=8780,
        help="Port the development server listens on.",
    ),
]


def register_opts(conf: cfg.ConfigOpts) -> None:
    """Register configuration options with a ConfigOpts instance.

    :param conf: oslo.config ConfigOpts instance
    """
    LOG.debug("Registering configuration options")
    conf.register_opts(remote_user_opts, group="remote_user")
    conf.register_opts(api_opts, group="api")


def list_opts() -> list[tuple[str, list[Any]]]:
    """Return a list of oslo.config options.

    This is used for documentation generation (oslo-config-generator).

    :returns: List of (group_name, options) tuples
    """
    return [
        ("remote_user", remote_user_opts),
        ("api", api_opts),
    ]


# Register options on module import for convenience
register_opts(CONF)
