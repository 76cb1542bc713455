# SPDX-License-Identifier: Apache-2.0

"""Session tracking for principals registered by the authenticator.

The authenticator only hands a principal to :class:`SessionRegistry`; this
module owns everything that happens afterwards: attaching the principal to
the WSGI environ, creating a session, caching the principal in it and
sending the session cookie back to the client.
"""

from __future__ import annotations

import secrets
import threading
from typing import Any

from oslo_log import log as logging
from oslo_utils import timeutils
import webob

from remoteuser.principal import ENV_PRINCIPAL
from remoteuser.principal import Principal

LOG = logging.getLogger(__name__)

# WSGI environ key holding the Session bound to the current request
ENV_SESSION = "remoteuser.session"


class Session:
    """A server side session holding a cached principal."""

    def __init__(
        self,
        session_id: str,
        principal: Principal,
        auth_method: str,
        username: str,
    ) -> None:
        self.id = session_id
        self.principal = principal
        self.auth_method = auth_method
        self.username = username
        self.created_at = timeutils.utcnow()
        self.last_accessed = self.created_at

    def __repr__(self) -> str:
        return (
            f"Session(id={self.id!r}, username={self.username!r}, "
            f"auth_method={self.auth_method!r})"
        )


class SessionStore:
    """In-memory session store shared by all requests of a process.

    :param timeout: Seconds a session may stay idle before it expires;
        0 disables expiry.
    """

    def __init__(self, timeout: int = 0) -> None:
        self.timeout = timeout
        self._sessions: dict[str, Session] = {}
        self._lock = threading.Lock()

    def create(
        self, principal: Principal, auth_method: str, username: str
    ) -> Session:
        """Create and store a new session.

        :raises OSError: If the session could not be stored
        """
        session = Session(
            secrets.token_urlsafe(32), principal, auth_method, username
        )
        self.save(session)
        return session

    def save(self, session: Session) -> None:
        """Store ``session``, replacing any session with the same id.

        Sessions idle past the timeout are purged at the same time.

        :raises OSError: If the session could not be stored
        """
        with self._lock:
            self._purge_expired()
            self._sessions[session.id] = session

    def _purge_expired(self) -> None:
        if not self.timeout:
            return
        expired = [
            session_id
            for session_id, session in self._sessions.items()
            if timeutils.is_older_than(session.last_accessed, self.timeout)
        ]
        for session_id in expired:
            del self._sessions[session_id]
        if expired:
            LOG.debug("Purged %d expired sessions", len(expired))

    def get(self, session_id: str | None) -> Session | None:
        """Return the live session for ``session_id``, touching it.

        Expired sessions are removed and reported as missing.
        """
        if not session_id:
            return None
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                return None
            if self.timeout and timeutils.is_older_than(
                session.last_accessed, self.timeout
            ):
                LOG.debug("Session for '%s' expired", session.username)
                del self._sessions[session_id]
                return None
            session.last_accessed = timeutils.utcnow()
            return session

    def delete(self, session_id: str) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


class SessionRegistry:
    """Registers authenticated principals with the request and session.

    :param store: Where sessions live
    :param cookie_name: Name of the session cookie
    :param use_session: Create a session when a principal is registered
    :param cache: Restore the principal cached in the session on later
        requests
    """

    def __init__(
        self,
        store: SessionStore | None = None,
        cookie_name: str = "REMOTEUSERSESSIONID",
        use_session: bool = True,
        cache: bool = True,
    ) -> None:
        self.store = store if store is not None else SessionStore()
        self.cookie_name = cookie_name
        self.use_session = use_session
        self.cache = cache

    def get_session(self, req: webob.Request) -> Session | None:
        """Return the session named by the request's session cookie."""
        return self.store.get(req.cookies.get(self.cookie_name))

    def register(
        self,
        req: webob.Request,
        principal: Principal,
        auth_method: str,
        username: str,
    ) -> Session | None:
        """Attach ``principal`` to the request and record it in a session.

        :param req: The request being authenticated
        :param principal: The authenticated principal
        :param auth_method: Authentication method tag, e.g. ``REMOTE_USER``
        :param username: The user name the principal was created from
        :raises OSError: If the session could not be stored
        :returns: The session bound to the request, if sessions are used
        """
        self._attach(req.environ, principal, auth_method, username)

        if not self.use_session:
            return None

        session = self.get_session(req)
        if session is None:
            session = self.store.create(principal, auth_method, username)
            LOG.debug("Created session for '%s'", username)
        else:
            session.principal = principal
            session.auth_method = auth_method
            session.username = username
            self.store.save(session)
        req.environ[ENV_SESSION] = session
        return session

    def restore(self, req: webob.Request) -> Principal | None:
        """Re-attach the principal cached in the request's session.

        Nothing happens when caching is disabled, when a principal is already
        attached, or when the cookie names no live session.

        :param req: The incoming request
        :returns: The restored principal or None
        """
        if not self.cache or req.environ.get(ENV_PRINCIPAL) is not None:
            return None

        session = self.get_session(req)
        if session is None:
            return None

        LOG.debug("Restored '%s' from session", session.username)
        self._attach(
            req.environ, session.principal, session.auth_method,
            session.username,
        )
        req.environ[ENV_SESSION] = session
        return session.principal

    def apply(self, req: webob.Request, resp: webob.Response) -> None:
        """Send the session cookie if the client does not hold it yet."""
        session = req.environ.get(ENV_SESSION)
        if session is None:
            return
        if req.cookies.get(self.cookie_name) == session.id:
            return
        resp.set_cookie(
            self.cookie_name,
            session.id,
            path="/",
            httponly=True,
            secure=req.scheme == "https",
        )

    @staticmethod
    def _attach(
        environ: dict[str, Any],
        principal: Principal,
        auth_method: str,
        username: str,
    ) -> None:
        environ[ENV_PRINCIPAL] = principal
        environ["REMOTE_USER"] = username
        environ["AUTH_TYPE"] = auth_method
