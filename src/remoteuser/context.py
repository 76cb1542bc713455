# SPDX-License-Identifier: Apache-2.0

"""Request context for remoteuser.

Provides RequestContext class that carries the principal registered by the
remote user authenticator to the application in oslo.context form.
"""

from __future__ import annotations

from typing import Any

from oslo_context import context
from oslo_log import log as logging
from oslo_middleware import request_id

from remoteuser.principal import get_user_principal

LOG = logging.getLogger(__name__)

# WSGI environ key holding the RequestContext of the current request
ENV_CONTEXT = "remoteuser.context"


class RequestContext(context.RequestContext):
    """Security context for requests authenticated by a trusted proxy.

    Extends oslo.context.RequestContext with the principal and the
    authentication method that produced it.
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        """Initialize the request context.

        :param args: Positional arguments passed to parent
        :param kwargs: Keyword arguments passed to parent
        """
        self.principal = kwargs.pop("principal", None)
        self.auth_method = kwargs.pop("auth_method", None)
        super().__init__(*args, **kwargs)

    def has_role(self, role: str) -> bool:
        return role in self.roles

    def to_dict(self) -> dict[str, Any]:
        values = super().to_dict()
        values["auth_method"] = self.auth_method
        return values

    @classmethod
    def from_environ(
        cls,
        environ: dict[str, Any],
        **kwargs: Any,
    ) -> "RequestContext":
        """Create a context from a WSGI environ dict.

        Unlike the parent implementation this never reads identity headers
        such as ``X-User-Name`` or ``X-Roles``; the user and roles come only
        from the principal attached by the authenticator.

        :param environ: WSGI environ dictionary
        :param kwargs: Additional keyword arguments for the context
        :returns: RequestContext instance
        """
        principal = get_user_principal(environ)

        kwargs.setdefault("request_id", environ.get(request_id.ENV_REQUEST_ID))
        kwargs.setdefault("auth_method", environ.get("AUTH_TYPE"))
        if principal is not None:
            kwargs.setdefault("user_id", principal.name)
            kwargs.setdefault("user_name", principal.name)
            kwargs.setdefault("roles", list(principal.roles))

        return cls(principal=principal, **kwargs)
