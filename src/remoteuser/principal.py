# SPDX-License-Identifier: Apache-2.0

"""Principal representing a user authenticated by a trusted proxy."""

from __future__ import annotations

from typing import Any
from typing import Iterable

# WSGI environ key holding the Principal attached to the current request
ENV_PRINCIPAL = "remoteuser.principal"


class Principal:
    """An authenticated identity: a user name and an ordered role list.

    :param name: The user name, never empty
    :param password: Credentials; always None for header-derived principals
    :param roles: Role names in the order they were supplied. Duplicates are
        kept as given.
    """

    def __init__(
        self,
        name: str,
        password: str | None = None,
        roles: Iterable[str] | None = None,
    ) -> None:
        self.name = name
        self.password = password
        self.roles = list(roles or [])

    def has_role(self, role: str) -> bool:
        """Return True if the principal was granted ``role``."""
        return role in self.roles

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Principal):
            return NotImplemented
        return self.name == other.name and self.roles == other.roles

    def __hash__(self) -> int:
        return hash((self.name, tuple(self.roles)))

    def __repr__(self) -> str:
        return f"Principal(name={self.name!r}, roles={self.roles!r})"


def get_user_principal(environ: dict[str, Any]) -> Principal | None:
    """Return the principal already attached to a request, if any.

    A principal set by an earlier stage of the pipeline takes precedence.
    Failing that, a ``REMOTE_USER`` provided by the WSGI server itself (for
    example mod_wsgi behind Apache authentication) counts as an
    authenticated user without roles. Client supplied headers never end up
    in ``REMOTE_USER``; they appear as ``HTTP_REMOTE_USER``.

    :param environ: WSGI environ dictionary
    :returns: Principal or None
    """
    principal = environ.get(ENV_PRINCIPAL)
    if principal is not None:
        return principal

    remote_user = environ.get("REMOTE_USER")
    if remote_user:
        return Principal(remote_user)
    return None
