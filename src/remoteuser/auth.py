# SPDX-License-Identifier: Apache-2.0

"""Authentication middleware for remoteuser.

Trusts a reverse proxy in front of the application to have authenticated
the user already:

- RemoteUserAuthenticator: Finds the user name and roles in the request
  headers set by the proxy and registers a principal for them
- RemoteUserAuthProtocol: WSGI middleware running the authenticator for
  each request, with session caching and the 401 decision

Headers are not verified in any way. The proxy must strip or overwrite
``remote-user``, ``x-remote-user`` and ``x-remote-user-roles`` on every
request it forwards.
"""

from __future__ import annotations

from typing import Any
from typing import Callable
from typing import Protocol

from oslo_log import log as logging
from oslo_utils import strutils
import webob
import webob.dec

from remoteuser import context
from remoteuser import session as session_mod
from remoteuser.principal import get_user_principal
from remoteuser.principal import Principal

LOG = logging.getLogger(__name__)

AUTH_METHOD = "REMOTE_USER"

# Checked in order, the first non-empty value wins
USERNAME_HEADERS = ("remote-user", "x-remote-user")
ROLES_HEADER = "x-remote-user-roles"

# Type aliases for WSGI
WSGIEnviron = dict[str, Any]
StartResponse = Callable[[str, list[tuple[str, str]]], Callable[[bytes], None]]
WSGIApp = Callable[[WSGIEnviron, StartResponse], list[bytes]]


class Registry(Protocol):
    """Where authenticated principals are handed over to the host."""

    def register(
        self,
        req: webob.Request,
        principal: Principal,
        auth_method: str,
        username: str,
    ) -> Any:
        ...


class Outcome:
    """Result of :meth:`RemoteUserAuthenticator.authenticate`.

    Truthy when the request ends up with an authenticated principal.
    """

    authenticated = False

    def __init__(self, principal: Principal | None = None) -> None:
        self.principal = principal

    def __bool__(self) -> bool:
        return self.authenticated

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Outcome):
            return NotImplemented
        return type(self) is type(other) and self.principal == other.principal

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.principal!r})"


class AlreadyAuthenticated(Outcome):
    """An earlier stage had authenticated the request."""

    authenticated = True


class Authenticated(Outcome):
    """A principal was created from the trusted headers and registered."""

    authenticated = True


class Unauthenticated(Outcome):
    """No usable username header was found."""


class RemoteUserAuthenticator:
    """Authenticate requests from the user name in trusted headers.

    If the request is not authenticated yet, look for a user name in the
    ``remote-user`` or ``x-remote-user`` request header. If one is found,
    the user is logged in with the roles listed in the
    ``x-remote-user-roles`` header.

    :param registry: Receives every principal this authenticator creates
    """

    def __init__(self, registry: Registry) -> None:
        self.registry = registry

    def authenticate(self, req: webob.Request) -> Outcome:
        """Authenticate the user making this request.

        :param req: The request to authenticate; it is only read from
        :raises OSError: If registering the principal fails
        :returns: AlreadyAuthenticated, Authenticated or Unauthenticated
        """
        principal = get_user_principal(req.environ)
        if principal is not None:
            LOG.debug("Already authenticated '%s'", principal.name)
            return AlreadyAuthenticated(principal)

        username = None
        for header in USERNAME_HEADERS:
            username = self.get_username(req, header)
            if self.is_valid_username(username):
                break

        if not self.is_valid_username(username):
            return Unauthenticated()

        roles = self.get_roles(req)
        LOG.debug("Found remote user '%s' with roles: %s", username, roles)

        principal = Principal(username, None, roles)
        self.registry.register(req, principal, self.get_auth_method(), username)
        return Authenticated(principal)

    def get_username(self, req: webob.Request, header: str) -> str | None:
        """Return the first value of a username header.

        WSGI servers join repeated headers with commas; only the first
        occurrence counts. The value is otherwise returned untouched.
        """
        value = req.headers.get(header)
        if value is None:
            return None
        return value.split(",", 1)[0]

    def is_valid_username(self, username: str | None) -> bool:
        """Return True if a user name from a header is usable.

        Any non-empty value is accepted as-is.
        """
        return username is not None and len(username) > 0

    def get_roles(self, req: webob.Request) -> list[str]:
        """Return every role in the roles header, in order.

        WSGI servers join repeated headers with commas, so each
        comma-separated element is one occurrence of the header.
        """
        value = req.headers.get(ROLES_HEADER)
        if value is None:
            return []
        return [role.strip() for role in value.split(",") if role.strip()]

    def get_auth_method(self) -> str:
        return AUTH_METHOD


class RemoteUserAuthProtocol:
    """WSGI middleware authenticating requests with trusted proxy headers.

    Requests without a usable username header are rejected with
    401 Unauthorized, unless ``delay_auth_decision`` is set, in which case
    they reach the application without a principal.
    """

    def __init__(self, app: WSGIApp, conf: dict[str, Any] | None = None) -> None:
        """Initialize RemoteUserAuthProtocol.

        :param app: The WSGI application to wrap
        :param conf: Configuration dictionary, values may be strings as
            given by Paste Deploy
        """
        conf = conf or {}
        self.application = app
        self.delay_auth_decision = _bool(conf, "delay_auth_decision", False)

        store = conf.get("session_store")
        if store is None:
            store = session_mod.SessionStore(
                timeout=int(conf.get("session_timeout", 1800))
            )
        self.registry = session_mod.SessionRegistry(
            store,
            cookie_name=conf.get("session_cookie_name", "REMOTEUSERSESSIONID"),
            use_session=_bool(conf, "use_session", True),
            cache=_bool(conf, "cache", True),
        )
        self.authenticator = RemoteUserAuthenticator(self.registry)

    @webob.dec.wsgify
    def __call__(self, req: webob.Request) -> webob.Response:
        """Process the request.

        :param req: The request object
        :returns: Response from the wrapped application or a 401
        """
        self.registry.restore(req)

        outcome = self.authenticator.authenticate(req)
        if not outcome and not self.delay_auth_decision:
            LOG.debug("No trusted username header found in request")
            return _unauthorized()

        req.environ[context.ENV_CONTEXT] = context.RequestContext.from_environ(
            req.environ
        )

        resp = req.get_response(self.application)
        self.registry.apply(req, resp)
        return resp


def _unauthorized() -> webob.Response:
    """Return a 401 in the same JSON error format as the API."""
    resp = webob.Response(status=401, content_type="application/json")
    resp.json = {
        "errors": [
            {
                "status": 401,
                "title": "Unauthorized",
                "detail": "No trusted username header found in request.",
            }
        ]
    }
    return resp


def _bool(conf: dict[str, Any], key: str, default: bool) -> bool:
    value = conf.get(key, default)
    if isinstance(value, bool):
        return value
    return strutils.bool_from_string(value, default=default)


def filter_factory(
    global_conf: dict[str, Any], **local_conf: Any
) -> Callable[[WSGIApp], RemoteUserAuthProtocol]:
    """Paste Deploy filter factory for RemoteUserAuthProtocol.

    :param global_conf: Global configuration dictionary
    :param local_conf: Local configuration dictionary
    :returns: Factory function that wraps an app with RemoteUserAuthProtocol
    """
    conf = global_conf.copy()
    conf.update(local_conf)

    def auth_filter(app: WSGIApp) -> RemoteUserAuthProtocol:
        return RemoteUserAuthProtocol(app, conf)

    return auth_filter
